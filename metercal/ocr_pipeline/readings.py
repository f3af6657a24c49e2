# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Candidate register-reading cascade.

Four strategies run in a fixed order over the raw OCR text. The first
strategy that accepts a match ends the cascade; inside a strategy the first
acceptable match in scan order wins. No scoring across matches.

1. ``DecimalStage``: ``123.45`` style numbers.
2. ``GallonsAdjacentStage``: a number followed by ``gal``/``gallon(s)``.
3. ``DigitRunStage``: a bare run of 5 to 8 digits.
4. ``SplitDecimalStage``: ``0456 78`` rebuilt as ``0456.78`` when OCR read
   the decimal point as a space.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from .models import CandidateReading, ReadingStage

logger = logging.getLogger(__name__)

EXCLUDED_NEIGHBOURS = frozenset("#@$%^&*+=<>{}[]|\\:;")


def _parse_positive(value: str) -> bool:
    try:
        return float(value) > 0
    except ValueError:
        return False


def _has_excluded_neighbour(text: str, start: int, end: int) -> bool:
    if start > 0 and text[start - 1] in EXCLUDED_NEIGHBOURS:
        return True
    if end < len(text) and text[end] in EXCLUDED_NEIGHBOURS:
        return True
    return False


class ReadingStrategy(Protocol):
    stage: ReadingStage

    def find(self, text: str) -> Optional[str]:
        ...


class _GuardedPatternStage:
    """Accept the first match with clean neighbours and a positive value."""

    stage: ReadingStage
    pattern: "re.Pattern[str]"

    def find(self, text: str) -> Optional[str]:
        for match in self.pattern.finditer(text):
            value = match.group(0)
            if _has_excluded_neighbour(text, match.start(), match.end()):
                continue
            if not _parse_positive(value):
                continue
            return value
        return None


class DecimalStage(_GuardedPatternStage):
    stage = ReadingStage.DECIMAL
    pattern = re.compile(r"\b\d+\.\d+\b", re.ASCII)


class GallonsAdjacentStage:
    stage = ReadingStage.GALLONS_ADJACENT
    pattern = re.compile(r"(\d+(?:,\d{3})*(?:\.\d+)?)(?=\s*gal(?:lon)?s?)", re.ASCII | re.IGNORECASE)

    def find(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        if match is None:
            return None
        return match.group(1).replace(",", "")


class DigitRunStage(_GuardedPatternStage):
    stage = ReadingStage.DIGIT_RUN
    pattern = re.compile(r"\b\d{5,8}\b", re.ASCII)


class SplitDecimalStage:
    stage = ReadingStage.SPLIT_DECIMAL_RECONSTRUCTION
    pattern = re.compile(r"\b(\d+)\s+(\d{1,3})\b", re.ASCII)

    def find(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        if match is None:
            return None
        return f"{match.group(1)}.{match.group(2)}"


DEFAULT_STAGES: Sequence[ReadingStrategy] = (
    DecimalStage(),
    GallonsAdjacentStage(),
    DigitRunStage(),
    SplitDecimalStage(),
)


@dataclass(frozen=True)
class CandidateReadingExtractor:
    stages: Sequence[ReadingStrategy] = field(default=DEFAULT_STAGES)

    def extract(self, raw_text: Optional[str]) -> CandidateReading:
        if not raw_text:
            return CandidateReading()
        for strategy in self.stages:
            value = strategy.find(raw_text)
            if value is not None:
                logger.debug("reading candidate %r from stage %s", value, strategy.stage.value)
                return CandidateReading(value=value, stage=strategy.stage)
        return CandidateReading()


def extract_candidate_reading(raw_text: Optional[str]) -> CandidateReading:
    return CandidateReadingExtractor().extract(raw_text)
