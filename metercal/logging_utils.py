# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Logger setup and structured event records."""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import Settings, load_settings

LOGGER_NAME = "metercal"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def get_logger(name: Optional[str] = None, settings: Optional[Settings] = None) -> logging.Logger:
    """Return the package logger (or a child of it), configuring it once."""

    root = logging.getLogger(LOGGER_NAME)
    if not root.handlers:
        settings = settings or load_settings()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(getattr(logging, settings.log_level, logging.INFO))
        root.propagate = False
    if not name or name == LOGGER_NAME:
        return root
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)


def log_event(
    logger: logging.Logger,
    event: str,
    payload: Dict[str, Any],
    *,
    level: str = "info",
    log_format: Optional[str] = None,
) -> None:
    record = {"ts": _utc_now_iso(), "event": event, **payload}
    fmt = log_format or load_settings().log_format
    if fmt == "json":
        msg = json.dumps(record, ensure_ascii=False, default=str)
    else:
        msg = f"{record.get('ts')} {event} {payload}"
    fn = getattr(logger, level, logger.info)
    fn(msg)
