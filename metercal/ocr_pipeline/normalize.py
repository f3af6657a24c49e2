# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Text normalisation helpers used before matching."""
from __future__ import annotations

import re
from typing import List, Optional, Sequence

_WHITESPACE_RE = re.compile(r"\s+")
_SINGLE_DIGIT_RE = re.compile(r"^[0-9]$")
_NUMERIC_RE = re.compile(r"^[0-9]+(?:\.[0-9]+)?$")
_GROUPED_NUMBER_RE = re.compile(r"\b[0-9]{1,3}(?:,[0-9]{3})+\b|\b[0-9]+\.[0-9]+\b")


def normalize_text(text: Optional[str]) -> str:
    """Lowercase ``text`` and drop every whitespace character.

    The result is a matching key only; callers keep the raw text for
    display and case-preserving extraction.
    """

    if not text:
        return ""
    return _WHITESPACE_RE.sub("", text.lower())


def fix_digital_spacing(tokens: Sequence[str]) -> List[str]:
    """Merge a lone digit with the numeric token right after it.

    Seven-segment displays often make OCR split the leading digit off,
    e.g. ``["4", "13.60"]`` becomes ``["413.60"]``.
    """

    output: List[str] = []
    i = 0
    while i < len(tokens):
        current = tokens[i]
        if i + 1 < len(tokens) and _SINGLE_DIGIT_RE.match(current) and _NUMERIC_RE.match(tokens[i + 1]):
            output.append(current + tokens[i + 1])
            i += 2
            continue
        output.append(current)
        i += 1
    return output


def contains_likely_reading(text: Optional[str]) -> bool:
    """True when ``text`` holds a comma-grouped or decimal number."""

    if not text:
        return False
    return _GROUPED_NUMBER_RE.search(text) is not None
