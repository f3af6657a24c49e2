# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""First-match-wins vocabulary matching over normalised text."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple, TypeVar

from .models import Manufacturer, NominalSize
from .normalize import normalize_text
from .vocabulary import MANUFACTURER_VOCABULARY, NOMINAL_SIZE_VOCABULARY

T = TypeVar("T")


def match_vocabulary(normalized_text: str, vocabulary: Sequence[Tuple[str, T]]) -> Optional[T]:
    """Return the value of the first declared term contained in the text.

    Terms are normalised the same way as the text. One pass only: a later
    term never overrides an earlier hit.
    """

    if not normalized_text:
        return None
    for term, value in vocabulary:
        key = normalize_text(term)
        if key and key in normalized_text:
            return value
    return None


def match_manufacturer(
    normalized_text: str,
    vocabulary: Sequence[Tuple[str, Manufacturer]] = MANUFACTURER_VOCABULARY,
) -> Optional[Manufacturer]:
    return match_vocabulary(normalized_text, vocabulary)


def match_nominal_size(
    normalized_text: str,
    vocabulary: Sequence[Tuple[str, NominalSize]] = NOMINAL_SIZE_VOCABULARY,
) -> Optional[NominalSize]:
    return match_vocabulary(normalized_text, vocabulary)
