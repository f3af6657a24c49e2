# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Environment-driven settings shared by the CLIs and OCR adapters."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

T = TypeVar("T")

PD_LOW_FLOW_MAX_VARIANTS = (101.0, 101.5)
DEFAULT_PD_LOW_FLOW_MAX = 101.5


def _env_raw(name: str) -> Optional[str]:
    """Stripped value of ``name``; unset and blank both read as ``None``."""

    value = (os.environ.get(name) or "").strip()
    return value or None


def _env_str(name: str, default: str) -> str:
    return _env_raw(name) or default


def _env_parsed(name: str, parse: Callable[[str], T], default: T) -> T:
    raw = _env_raw(name)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    return _env_parsed(name, int, default)


def _env_float(name: str, default: float) -> float:
    return _env_parsed(name, float, default)


def _env_truthy(name: str, default: bool = False) -> bool:
    if name not in os.environ:
        return default
    return (_env_raw(name) or "").lower() not in {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_format: str = "json"
    allow_pytesseract: bool = True
    tesseract_lang: str = "eng"
    tesseract_psm: int = 6
    pd_low_flow_max: float = DEFAULT_PD_LOW_FLOW_MAX
    extraction_workers: int = 1


def load_settings() -> Settings:
    """Read :class:`Settings` from ``METERCAL_*`` environment variables.

    Malformed values fall back to the defaults instead of raising, so a bad
    deployment variable never blocks a calibration run. The PD/Single-Jet
    low-flow maximum only accepts one of the two published variants.
    """

    pd_max = _env_float("METERCAL_PD_LOW_FLOW_MAX", DEFAULT_PD_LOW_FLOW_MAX)
    if pd_max not in PD_LOW_FLOW_MAX_VARIANTS:
        pd_max = DEFAULT_PD_LOW_FLOW_MAX

    log_format = _env_str("METERCAL_LOG_FORMAT", "json").lower()
    if log_format not in {"json", "text"}:
        log_format = "json"

    return Settings(
        log_level=_env_str("METERCAL_LOG_LEVEL", "INFO").upper(),
        log_format=log_format,
        allow_pytesseract=_env_truthy("METERCAL_ALLOW_PYTESSERACT", True),
        tesseract_lang=_env_str("METERCAL_TESSERACT_LANG", "eng"),
        tesseract_psm=max(0, _env_int("METERCAL_TESSERACT_PSM", 6)),
        pd_low_flow_max=pd_max,
        extraction_workers=max(1, _env_int("METERCAL_EXTRACTION_WORKERS", 1)),
    )
