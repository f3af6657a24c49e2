# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Ordered vocabularies for manufacturer and nominal-size matching.

Order is significant: the first declared term found in the text wins, so
``'5/8"'`` is listed before ``'8"'`` and ``'2.5"'`` before ``'5"'``. Keep
these tuples as the single declared ordering; do not derive them from enum
iteration order.
"""
from __future__ import annotations

from typing import Tuple

from .models import Manufacturer, NominalSize

ManufacturerVocabulary = Tuple[Tuple[str, Manufacturer], ...]
SizeVocabulary = Tuple[Tuple[str, NominalSize], ...]

# Manufacturer.OTHER is an operator default, not a matchable term.
MANUFACTURER_VOCABULARY: ManufacturerVocabulary = (
    ("Neptune", Manufacturer.NEPTUNE),
    ("Sensus", Manufacturer.SENSUS),
    ("Kamstrup", Manufacturer.KAMSTRUP),
    ("Master Meter", Manufacturer.MASTER_METER),
    ("Badger", Manufacturer.BADGER),
    ("Zenner", Manufacturer.ZENNER),
    ("Diehl", Manufacturer.DIEHL),
)

NOMINAL_SIZE_VOCABULARY: SizeVocabulary = (
    ('5/8"', NominalSize.FIVE_EIGHTHS),
    ('3/4"', NominalSize.THREE_QUARTERS),
    ('1"', NominalSize.ONE),
    ('1.5"', NominalSize.ONE_AND_HALF),
    ('2"', NominalSize.TWO),
    ('2.5"', NominalSize.TWO_AND_HALF),
    ('3"', NominalSize.THREE),
    ('4"', NominalSize.FOUR),
    ('5"', NominalSize.FIVE),
    ('6"', NominalSize.SIX),
    ('8"', NominalSize.EIGHT),
)
