"""Data models for calibration tests.

Construction classes and flow phases are closed enumerations whose values are
the labels the application persists. Bands and judgements are frozen
pydantic models: they are derived on demand and never mutated.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MeterConstructionClass(str, Enum):
    POSITIVE_DISPLACEMENT_OR_SINGLE_JET = "Positive Displacement & Single-Jet"
    MULTI_JET = "Multi-Jet"
    TURBINE = "Turbine"
    ELECTROMAGNETIC_OR_ULTRASONIC = "Electromagnetic/Ultrasonic"
    FIRE_SERVICE = "Fire Service"
    COMPOUND = "Compound"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: Union[str, "MeterConstructionClass", None]) -> "MeterConstructionClass":
        """Resolve a persisted meter-model label; unknown labels become ``OTHER``."""

        if isinstance(label, cls):
            return label
        if not label:
            return cls.OTHER
        key = str(label).strip().lower()
        return _LABEL_TO_CLASS.get(key, cls.OTHER)


_LABEL_TO_CLASS: Dict[str, MeterConstructionClass] = {
    "positive displacement": MeterConstructionClass.POSITIVE_DISPLACEMENT_OR_SINGLE_JET,
    "single-jet": MeterConstructionClass.POSITIVE_DISPLACEMENT_OR_SINGLE_JET,
    "multi-jet": MeterConstructionClass.MULTI_JET,
    "turbine": MeterConstructionClass.TURBINE,
    "turbine (class ii)": MeterConstructionClass.TURBINE,
    "type i": MeterConstructionClass.ELECTROMAGNETIC_OR_ULTRASONIC,
    "type ii": MeterConstructionClass.ELECTROMAGNETIC_OR_ULTRASONIC,
    "electromagnetic (mag)": MeterConstructionClass.ELECTROMAGNETIC_OR_ULTRASONIC,
    "ultrasonic": MeterConstructionClass.ELECTROMAGNETIC_OR_ULTRASONIC,
    "fire service": MeterConstructionClass.FIRE_SERVICE,
    "compound": MeterConstructionClass.COMPOUND,
}
_LABEL_TO_CLASS.update({member.value.lower(): member for member in MeterConstructionClass})


class FlowPhase(str, Enum):
    LOW = "Low Flow"
    MID = "Mid Flow"
    HIGH = "High Flow"

    @classmethod
    def from_label(cls, label: Union[str, "FlowPhase"]) -> "FlowPhase":
        if isinstance(label, cls):
            return label
        key = str(label).strip().lower()
        for member in cls:
            if key in {member.value.lower(), member.name.lower(), member.value.lower().replace(" ", "-")}:
                return member
        raise ValueError(f"Unknown flow phase: {label!r}")


class ToleranceBand(BaseModel):
    """Inclusive accuracy-percentage range for one (class, phase) pair."""

    model_config = ConfigDict(frozen=True)

    min_percent: float
    max_percent: float

    @model_validator(mode="after")
    def _check_order(self) -> "ToleranceBand":
        if self.min_percent > self.max_percent:
            raise ValueError("min_percent must not exceed max_percent")
        return self


class TestJudgement(BaseModel):
    """Outcome of one accuracy check; unusable accuracies are stored as NaN."""

    __test__ = False

    model_config = ConfigDict(frozen=True, strict=True)

    accuracy_percent: float
    band: ToleranceBand
    passes: bool


class ReadingType(str, Enum):
    SMALL = "small"
    LARGE = "large"
    COMPOUND = "compound"


class MeterReading(BaseModel):
    """Register readings taken around one test draw.

    ``total_volume`` is the reference volume delivered by the test rig in
    the same unit as the registers.
    """

    model_config = ConfigDict(frozen=True)

    small_start: float = 0.0
    small_end: float = 0.0
    large_start: float = 0.0
    large_end: float = 0.0
    total_volume: float = Field(..., ge=0.0)
    reading_type: ReadingType = ReadingType.SMALL
    flow_rate: Optional[float] = Field(None, ge=0.0)

    def meter_volume(self) -> float:
        small = self.small_end - self.small_start
        large = self.large_end - self.large_start
        if self.reading_type == ReadingType.SMALL:
            return small
        if self.reading_type == ReadingType.LARGE:
            return large
        return small + large

    def accuracy_percent(self) -> float:
        if not math.isfinite(self.total_volume) or self.total_volume <= 0:
            return 0.0
        return self.meter_volume() / self.total_volume * 100.0
