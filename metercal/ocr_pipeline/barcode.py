# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Manufacturer barcode formats and payload validation.

Decoding the symbol is the scanner's job; this module only checks a decoded
payload against the label conventions each manufacturer uses.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Tuple

from .models import BarcodeResult, Manufacturer

CODE128 = "code128"
CODE39 = "code39"
DATAMATRIX = "datamatrix"
QR = "qr"


@dataclass(frozen=True)
class BarcodeSpec:
    manufacturer: Manufacturer
    symbologies: FrozenSet[str]
    prefix_pattern: "re.Pattern[str]"
    serial_pattern: "re.Pattern[str]"


def _spec(manufacturer: Manufacturer, symbologies: Tuple[str, ...], prefix: str, serial: str) -> BarcodeSpec:
    return BarcodeSpec(
        manufacturer=manufacturer,
        symbologies=frozenset(symbologies),
        prefix_pattern=re.compile(prefix),
        serial_pattern=re.compile(serial),
    )


MANUFACTURER_BARCODE_SPECS: Tuple[BarcodeSpec, ...] = (
    _spec(Manufacturer.NEPTUNE, (CODE128, DATAMATRIX), r"^(NT|NE)", r"^[A-Z0-9]{8,12}$"),
    _spec(Manufacturer.SENSUS, (CODE128, QR), r"^(SN|SS)", r"^[A-Z0-9]{10,15}$"),
    _spec(Manufacturer.MASTER_METER, (CODE128, CODE39, QR), r"^(MM|MT)", r"^[A-Z0-9]{7,14}$"),
    _spec(Manufacturer.DIEHL, (CODE128, DATAMATRIX), r"^(DH|DL)", r"^[A-Z0-9]{9,13}$"),
    _spec(Manufacturer.KAMSTRUP, (DATAMATRIX, QR), r"^(KM|KA)", r"^[A-Z0-9]{10,16}$"),
    _spec(Manufacturer.ZENNER, (CODE128, DATAMATRIX), r"^(ZN|ZR)", r"^[A-Z0-9]{8,14}$"),
)


def normalize_symbology(symbology: str) -> str:
    return re.sub(r"[^a-z0-9]", "", symbology.lower())


def validate_barcode(
    symbology: str,
    payload: Optional[str],
    specs: Sequence[BarcodeSpec] = MANUFACTURER_BARCODE_SPECS,
) -> BarcodeResult:
    """Match a decoded payload to the first BarcodeSpec whose symbology and prefix fit.

    The serial number is only reported when the whole payload matches that
    manufacturer's serial format.
    """

    symbology_key = normalize_symbology(symbology)
    payload = (payload or "").strip()
    if not payload:
        return BarcodeResult(symbology=symbology_key, payload="")

    for spec in specs:
        if symbology_key not in spec.symbologies:
            continue
        if not spec.prefix_pattern.match(payload):
            continue
        serial_match = spec.serial_pattern.match(payload)
        return BarcodeResult(
            symbology=symbology_key,
            payload=payload,
            manufacturer=spec.manufacturer,
            is_valid_format=True,
            serial_number=serial_match.group(0) if serial_match else None,
        )

    return BarcodeResult(symbology=symbology_key, payload=payload)


def parse_barcode_arg(value: str) -> BarcodeResult:
    """Parse ``SYMBOLOGY:PAYLOAD`` as given on the command line."""

    symbology, sep, payload = value.partition(":")
    if not sep or not symbology.strip():
        raise ValueError(f"Expected SYMBOLOGY:PAYLOAD, got {value!r}")
    return validate_barcode(symbology, payload)
