# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Heuristic serial-number extraction from raw OCR text."""
from __future__ import annotations

import re
from typing import Optional

SERIAL_PATTERN = re.compile(r"\b[A-Za-z0-9]{5,15}\b")
MIN_SERIAL_LENGTH = 5


def looks_like_serial(token: str) -> bool:
    has_letter = any(ch.isalpha() for ch in token)
    has_digit = any(ch.isdigit() for ch in token)
    return (has_letter and has_digit) or len(token) >= MIN_SERIAL_LENGTH


def extract_serial_number(raw_text: Optional[str]) -> Optional[str]:
    """Return the first 5-15 character alphanumeric token, case preserved.

    No checksum or manufacturer format is validated here; barcode payloads
    carry the stricter per-manufacturer formats.
    """

    if not raw_text:
        return None
    for match in SERIAL_PATTERN.finditer(raw_text):
        token = match.group(0)
        if looks_like_serial(token):
            return token
    return None
