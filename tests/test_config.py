import json
import logging

from metercal.config import (
    DEFAULT_PD_LOW_FLOW_MAX,
    Settings,
    _env_float,
    _env_int,
    _env_str,
    _env_truthy,
    load_settings,
)
from metercal.logging_utils import LOGGER_NAME, get_logger, log_event


def test_load_settings_defaults():
    assert load_settings() == Settings()
    assert load_settings().pd_low_flow_max == DEFAULT_PD_LOW_FLOW_MAX


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("METERCAL_LOG_LEVEL", "debug")
    monkeypatch.setenv("METERCAL_LOG_FORMAT", "TEXT")
    monkeypatch.setenv("METERCAL_ALLOW_PYTESSERACT", "off")
    monkeypatch.setenv("METERCAL_TESSERACT_LANG", "eng+fra")
    monkeypatch.setenv("METERCAL_TESSERACT_PSM", "7")
    monkeypatch.setenv("METERCAL_PD_LOW_FLOW_MAX", "101.0")
    monkeypatch.setenv("METERCAL_EXTRACTION_WORKERS", "3")

    settings = load_settings()

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "text"
    assert settings.allow_pytesseract is False
    assert settings.tesseract_lang == "eng+fra"
    assert settings.tesseract_psm == 7
    assert settings.pd_low_flow_max == 101.0
    assert settings.extraction_workers == 3


def test_load_settings_falls_back_on_malformed_values(monkeypatch):
    monkeypatch.setenv("METERCAL_LOG_FORMAT", "xml")
    monkeypatch.setenv("METERCAL_TESSERACT_PSM", "six")
    monkeypatch.setenv("METERCAL_PD_LOW_FLOW_MAX", "102")
    monkeypatch.setenv("METERCAL_EXTRACTION_WORKERS", "0")

    settings = load_settings()

    assert settings.log_format == "json"
    assert settings.tesseract_psm == 6
    assert settings.pd_low_flow_max == DEFAULT_PD_LOW_FLOW_MAX
    assert settings.extraction_workers == 1


def test_get_logger_returns_children_of_package_logger():
    assert get_logger().name == LOGGER_NAME
    assert get_logger("calibration").name == "metercal.calibration"
    assert get_logger("metercal.ocr_pipeline").name == "metercal.ocr_pipeline"


def test_log_event_emits_json_record():
    records = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record.getMessage())

    logger = logging.getLogger("metercal.tests.events")
    handler = _Collect()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        log_event(logger, "judgement", {"passes": True}, log_format="json")
        log_event(logger, "judgement", {"passes": False}, log_format="text")
    finally:
        logger.removeHandler(handler)

    first = json.loads(records[0])
    assert first["event"] == "judgement"
    assert first["passes"] is True
    assert "ts" in first
    assert "judgement" in records[1]
    assert "{'passes': False}" in records[1]


def test_env_helpers_treat_blank_values_consistently(monkeypatch):
    monkeypatch.setenv("METERCAL_TESSERACT_LANG", "   ")
    monkeypatch.setenv("METERCAL_TESSERACT_PSM", " 11 ")
    monkeypatch.setenv("METERCAL_PD_LOW_FLOW_MAX", "")
    monkeypatch.setenv("METERCAL_ALLOW_PYTESSERACT", "")

    assert _env_str("METERCAL_TESSERACT_LANG", "eng") == "eng"
    assert _env_int("METERCAL_TESSERACT_PSM", 6) == 11
    assert _env_float("METERCAL_PD_LOW_FLOW_MAX", 101.5) == 101.5
    assert _env_truthy("METERCAL_ALLOW_PYTESSERACT", True) is False
    assert _env_truthy("METERCAL_UNSET_FLAG", True) is True
