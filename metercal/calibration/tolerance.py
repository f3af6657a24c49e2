# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Tolerance table and accuracy judge for calibration tests."""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple, Union

from ..config import DEFAULT_PD_LOW_FLOW_MAX, PD_LOW_FLOW_MAX_VARIANTS, load_settings
from .models import FlowPhase, MeterConstructionClass, TestJudgement, ToleranceBand

ClassLike = Union[MeterConstructionClass, str, None]
PhaseLike = Union[FlowPhase, str]

_STANDARD = ToleranceBand(min_percent=98.5, max_percent=101.5)

_BASE_ROWS: Dict[MeterConstructionClass, Dict[FlowPhase, ToleranceBand]] = {
    MeterConstructionClass.MULTI_JET: {
        FlowPhase.LOW: ToleranceBand(min_percent=97.0, max_percent=103.0),
        FlowPhase.MID: _STANDARD,
        FlowPhase.HIGH: _STANDARD,
    },
    MeterConstructionClass.TURBINE: {
        FlowPhase.LOW: _STANDARD,
        FlowPhase.MID: _STANDARD,
        FlowPhase.HIGH: _STANDARD,
    },
    MeterConstructionClass.ELECTROMAGNETIC_OR_ULTRASONIC: {
        FlowPhase.LOW: ToleranceBand(min_percent=95.0, max_percent=105.0),
        FlowPhase.MID: _STANDARD,
        FlowPhase.HIGH: _STANDARD,
    },
    MeterConstructionClass.FIRE_SERVICE: {
        FlowPhase.LOW: ToleranceBand(min_percent=95.0, max_percent=101.5),
        FlowPhase.MID: _STANDARD,
        FlowPhase.HIGH: _STANDARD,
    },
    MeterConstructionClass.COMPOUND: {
        FlowPhase.LOW: ToleranceBand(min_percent=95.0, max_percent=101.0),
        FlowPhase.MID: _STANDARD,
        FlowPhase.HIGH: ToleranceBand(min_percent=97.0, max_percent=103.0),
    },
    MeterConstructionClass.OTHER: {
        FlowPhase.LOW: ToleranceBand(min_percent=95.0, max_percent=101.0),
        FlowPhase.MID: ToleranceBand(min_percent=97.0, max_percent=101.5),
        FlowPhase.HIGH: _STANDARD,
    },
}


@dataclass(frozen=True)
class ToleranceTable:
    """Total mapping of (construction class, flow phase) to an acceptance band.

    Two published variants disagree on the Positive Displacement / Single-Jet
    low-flow maximum (101.5 vs 101.0), so it is an explicit parameter rather
    than a hidden constant. Anything that is not a known class resolves
    through the ``OTHER`` row.
    """

    pd_low_flow_max: float = DEFAULT_PD_LOW_FLOW_MAX
    _rows: Dict[MeterConstructionClass, Dict[FlowPhase, ToleranceBand]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.pd_low_flow_max not in PD_LOW_FLOW_MAX_VARIANTS:
            raise ValueError(
                f"pd_low_flow_max must be one of {PD_LOW_FLOW_MAX_VARIANTS}, got {self.pd_low_flow_max}"
            )
        rows = {
            MeterConstructionClass.POSITIVE_DISPLACEMENT_OR_SINGLE_JET: {
                FlowPhase.LOW: ToleranceBand(min_percent=95.0, max_percent=self.pd_low_flow_max),
                FlowPhase.MID: _STANDARD,
                FlowPhase.HIGH: _STANDARD,
            }
        }
        rows.update(_BASE_ROWS)
        object.__setattr__(self, "_rows", rows)

    @classmethod
    def from_settings(cls) -> "ToleranceTable":
        return cls(pd_low_flow_max=load_settings().pd_low_flow_max)

    def lookup(self, construction: ClassLike, phase: PhaseLike) -> ToleranceBand:
        resolved = MeterConstructionClass.from_label(construction)
        row = self._rows.get(resolved, self._rows[MeterConstructionClass.OTHER])
        return row[FlowPhase.from_label(phase)]

    def rows(self) -> Iterator[Tuple[MeterConstructionClass, FlowPhase, ToleranceBand]]:
        for construction in MeterConstructionClass:
            for phase in FlowPhase:
                yield construction, phase, self.lookup(construction, phase)


DEFAULT_TABLE = ToleranceTable()


def lookup_band(construction: ClassLike, phase: PhaseLike, table: Optional[ToleranceTable] = None) -> ToleranceBand:
    return (table or DEFAULT_TABLE).lookup(construction, phase)


def _as_accuracy(accuracy_percent: object) -> float:
    # Anything that is not a real number (bools included) becomes NaN.
    if isinstance(accuracy_percent, bool) or not isinstance(accuracy_percent, numbers.Real):
        return math.nan
    return float(accuracy_percent)


def evaluate(accuracy_percent: object, band: ToleranceBand) -> bool:
    """Return True when ``accuracy_percent`` lies inside ``band`` (inclusive).

    No rounding is applied. Non-numeric, NaN and infinite inputs always fail.
    """

    value = _as_accuracy(accuracy_percent)
    if not math.isfinite(value):
        return False
    return band.min_percent <= value <= band.max_percent


def judge(
    accuracy_percent: object,
    construction: ClassLike,
    phase: PhaseLike,
    table: Optional[ToleranceTable] = None,
) -> TestJudgement:
    """Judge ``accuracy_percent`` against its band.

    Inputs :func:`evaluate` cannot read as a number are recorded as NaN, so
    the stored accuracy never looks in-band on a failing judgement.
    """

    band = lookup_band(construction, phase, table)
    value = _as_accuracy(accuracy_percent)
    return TestJudgement(
        accuracy_percent=value,
        band=band,
        passes=evaluate(value, band),
    )
