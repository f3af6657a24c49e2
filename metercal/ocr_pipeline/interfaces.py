# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Interfaces for meter-face extraction components."""
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .models import BarcodeResult, CandidateReading, DisplayKind, ExtractedFields


class TextSource(Protocol):
    def recognize(self, image: object) -> Optional[str]:
        ...


class DisplayClassifier(Protocol):
    def classify(self, image: object) -> DisplayKind:
        ...


class ReadingExtractor(Protocol):
    def extract(self, raw_text: Optional[str]) -> CandidateReading:
        ...


class FieldExtractor(Protocol):
    def run(
        self,
        raw_text: Optional[str],
        barcodes: Sequence[BarcodeResult] = (),
    ) -> ExtractedFields:
        ...
