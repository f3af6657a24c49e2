"""metercal public package surface.

Two independent cores: tolerance judging for calibration tests
(:mod:`metercal.calibration`) and field extraction from meter-face text
(:mod:`metercal.ocr_pipeline`).
"""

from __future__ import annotations

from .calibration import (
    FlowPhase,
    MeterConstructionClass,
    TestJudgement,
    ToleranceBand,
    ToleranceTable,
    evaluate,
    judge,
)
from .ocr_pipeline import ExtractedFields, ExtractionPipeline, ExtractionScheduler, ReadingStage

__version__ = "0.1.0"

__all__ = [
    "ExtractedFields",
    "ExtractionPipeline",
    "ExtractionScheduler",
    "FlowPhase",
    "MeterConstructionClass",
    "ReadingStage",
    "TestJudgement",
    "ToleranceBand",
    "ToleranceTable",
    "__version__",
    "evaluate",
    "judge",
]
