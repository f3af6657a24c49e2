"""Data models for meter-face field extraction.

Inputs and outputs stay explicit across each extraction component so the
text source, matchers and cascade can be swapped independently. Records are
frozen: a later capture supersedes an earlier record, it never mutates it.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ReadingStage(str, Enum):
    DECIMAL = "decimal"
    GALLONS_ADJACENT = "gallons_adjacent"
    DIGIT_RUN = "digit_run"
    SPLIT_DECIMAL_RECONSTRUCTION = "split_decimal_reconstruction"
    NONE = "none"


class Manufacturer(str, Enum):
    NEPTUNE = "Neptune"
    SENSUS = "Sensus"
    KAMSTRUP = "Kamstrup"
    MASTER_METER = "Master Meter"
    BADGER = "Badger"
    ZENNER = "Zenner"
    DIEHL = "Diehl"
    OTHER = "Other"


class NominalSize(str, Enum):
    FIVE_EIGHTHS = '5/8"'
    THREE_QUARTERS = '3/4"'
    ONE = '1"'
    ONE_AND_HALF = '1.5"'
    TWO = '2"'
    TWO_AND_HALF = '2.5"'
    THREE = '3"'
    FOUR = '4"'
    FIVE = '5"'
    SIX = '6"'
    EIGHT = '8"'


class DisplayKind(str, Enum):
    DIGITAL = "digital"
    ANALOG = "analog"
    UNKNOWN = "unknown"


class CandidateReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: Optional[str] = None
    stage: ReadingStage = ReadingStage.NONE


class BarcodeResult(BaseModel):
    """Barcode payload checked against the manufacturer label formats."""

    model_config = ConfigDict(frozen=True)

    symbology: str
    payload: str
    manufacturer: Optional[Manufacturer] = None
    is_valid_format: bool = False
    serial_number: Optional[str] = None


class ExtractedFields(BaseModel):
    """Snapshot of everything mined from one OCR attempt."""

    model_config = ConfigDict(frozen=True)

    candidate_reading: Optional[str] = None
    reading_stage: ReadingStage = ReadingStage.NONE
    manufacturer: Optional[Manufacturer] = None
    nominal_size: Optional[NominalSize] = None
    serial_number: Optional[str] = None
    raw_text: str = ""

    @property
    def needs_manual_entry(self) -> bool:
        return self.reading_stage == ReadingStage.NONE
