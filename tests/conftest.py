# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Pytest configuration shared across the suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolate_metercal_env(monkeypatch):
    for name in (
        "METERCAL_LOG_LEVEL",
        "METERCAL_LOG_FORMAT",
        "METERCAL_ALLOW_PYTESSERACT",
        "METERCAL_TESSERACT_LANG",
        "METERCAL_TESSERACT_PSM",
        "METERCAL_PD_LOW_FLOW_MAX",
        "METERCAL_EXTRACTION_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
