"""Meter-face field extraction from recognised text."""

from .barcode import MANUFACTURER_BARCODE_SPECS, BarcodeSpec, parse_barcode_arg, validate_barcode
from .entities import match_manufacturer, match_nominal_size, match_vocabulary
from .hybrid import PreprocessingTextSource
from .interfaces import DisplayClassifier, FieldExtractor, ReadingExtractor, TextSource
from .mocks import FailingTextSource, MockDisplayClassifier, MockTextSource
from .models import (
    BarcodeResult,
    CandidateReading,
    DisplayKind,
    ExtractedFields,
    Manufacturer,
    NominalSize,
    ReadingStage,
)
from .normalize import contains_likely_reading, fix_digital_spacing, normalize_text
from .pipeline import ExtractionPipeline
from .readings import (
    DEFAULT_STAGES,
    CandidateReadingExtractor,
    DecimalStage,
    DigitRunStage,
    GallonsAdjacentStage,
    SplitDecimalStage,
    extract_candidate_reading,
)
from .serial import extract_serial_number
from .session import CaptureToken, ExtractionScheduler
from .simple import AspectRatioDisplayClassifier
from .tesseract import TesseractTextSource
from .vocabulary import MANUFACTURER_VOCABULARY, NOMINAL_SIZE_VOCABULARY

__all__ = [
    "AspectRatioDisplayClassifier",
    "BarcodeResult",
    "BarcodeSpec",
    "CandidateReading",
    "CandidateReadingExtractor",
    "CaptureToken",
    "DEFAULT_STAGES",
    "DecimalStage",
    "DigitRunStage",
    "DisplayClassifier",
    "DisplayKind",
    "ExtractedFields",
    "ExtractionPipeline",
    "ExtractionScheduler",
    "FailingTextSource",
    "FieldExtractor",
    "GallonsAdjacentStage",
    "MANUFACTURER_BARCODE_SPECS",
    "MANUFACTURER_VOCABULARY",
    "Manufacturer",
    "MockDisplayClassifier",
    "MockTextSource",
    "NOMINAL_SIZE_VOCABULARY",
    "NominalSize",
    "PreprocessingTextSource",
    "ReadingExtractor",
    "ReadingStage",
    "SplitDecimalStage",
    "TesseractTextSource",
    "TextSource",
    "contains_likely_reading",
    "extract_candidate_reading",
    "extract_serial_number",
    "fix_digital_spacing",
    "match_manufacturer",
    "match_nominal_size",
    "match_vocabulary",
    "normalize_text",
    "parse_barcode_arg",
    "validate_barcode",
]
