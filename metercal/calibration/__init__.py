"""Tolerance bands and pass/fail judgement for meter calibration tests."""

from .history import HistoryFilter, TestRecord, filter_records
from .models import (
    FlowPhase,
    MeterConstructionClass,
    MeterReading,
    ReadingType,
    TestJudgement,
    ToleranceBand,
)
from .tolerance import DEFAULT_TABLE, ToleranceTable, evaluate, judge, lookup_band

__all__ = [
    "DEFAULT_TABLE",
    "FlowPhase",
    "HistoryFilter",
    "MeterConstructionClass",
    "MeterReading",
    "ReadingType",
    "TestJudgement",
    "TestRecord",
    "ToleranceBand",
    "ToleranceTable",
    "evaluate",
    "filter_records",
    "judge",
    "lookup_band",
]
