# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Composable extraction pipeline over one OCR text blob."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .entities import match_manufacturer, match_nominal_size
from .interfaces import FieldExtractor, ReadingExtractor
from .models import BarcodeResult, ExtractedFields, Manufacturer, NominalSize
from .normalize import normalize_text
from .readings import CandidateReadingExtractor
from .serial import extract_serial_number
from .vocabulary import MANUFACTURER_VOCABULARY, NOMINAL_SIZE_VOCABULARY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionPipeline(FieldExtractor):
    reading_extractor: ReadingExtractor = field(default_factory=CandidateReadingExtractor)
    manufacturers: Tuple[Tuple[str, Manufacturer], ...] = MANUFACTURER_VOCABULARY
    sizes: Tuple[Tuple[str, NominalSize], ...] = NOMINAL_SIZE_VOCABULARY

    def run(
        self,
        raw_text: Optional[str],
        barcodes: Sequence[BarcodeResult] = (),
    ) -> ExtractedFields:
        text = raw_text if isinstance(raw_text, str) else ""
        normalized = normalize_text(text)

        manufacturer = match_manufacturer(normalized, self.manufacturers)
        nominal_size = match_nominal_size(normalized, self.sizes)
        candidate = self.reading_extractor.extract(text)
        serial_number = extract_serial_number(text)

        # Barcodes only fill gaps the text left open.
        for barcode in barcodes:
            if not barcode.is_valid_format:
                continue
            if manufacturer is None and barcode.manufacturer is not None:
                manufacturer = barcode.manufacturer
            if serial_number is None and barcode.serial_number:
                serial_number = barcode.serial_number

        fields = ExtractedFields(
            candidate_reading=candidate.value,
            reading_stage=candidate.stage,
            manufacturer=manufacturer,
            nominal_size=nominal_size,
            serial_number=serial_number,
            raw_text=text,
        )
        logger.debug(
            "extracted fields stage=%s manufacturer=%s size=%s",
            fields.reading_stage.value,
            fields.manufacturer.value if fields.manufacturer else None,
            fields.nominal_size.value if fields.nominal_size else None,
        )
        return fields
