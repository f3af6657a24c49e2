# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Recorded calibration tests and the history filters offered to operators."""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from .models import FlowPhase, MeterConstructionClass, MeterReading, TestJudgement
from .tolerance import ToleranceTable, judge


class TestRecord(BaseModel):
    """One finalized test. The judgement is recomputed on every request."""

    __test__ = False

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    phase: FlowPhase
    construction_class: MeterConstructionClass = MeterConstructionClass.OTHER
    reading: MeterReading
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    meter_size: Optional[str] = None
    manufacturer: Optional[str] = None
    job_number: str = ""
    notes: str = ""

    def judgement(self, table: Optional[ToleranceTable] = None) -> TestJudgement:
        return judge(self.reading.accuracy_percent(), self.construction_class, self.phase, table)


class HistoryFilter(str, Enum):
    ALL = "All Tests"
    LOW_FLOW = "Low Flow Tests"
    MID_FLOW = "Mid Flow Tests"
    HIGH_FLOW = "High Flow Tests"
    PASSED = "Passed Tests"
    FAILING = "Failed Tests"


_PHASE_FILTERS = {
    HistoryFilter.LOW_FLOW: FlowPhase.LOW,
    HistoryFilter.MID_FLOW: FlowPhase.MID,
    HistoryFilter.HIGH_FLOW: FlowPhase.HIGH,
}


def filter_records(
    records: Iterable[TestRecord],
    option: HistoryFilter = HistoryFilter.ALL,
    table: Optional[ToleranceTable] = None,
) -> List[TestRecord]:
    """Return records matching ``option``, newest first."""

    selected: List[TestRecord] = []
    for record in records:
        if option in _PHASE_FILTERS:
            keep = record.phase == _PHASE_FILTERS[option]
        elif option == HistoryFilter.PASSED:
            keep = record.judgement(table).passes
        elif option == HistoryFilter.FAILING:
            keep = not record.judgement(table).passes
        else:
            keep = True
        if keep:
            selected.append(record)
    return sorted(selected, key=lambda r: r.recorded_at, reverse=True)
