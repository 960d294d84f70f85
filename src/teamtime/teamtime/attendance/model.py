from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from ..core.enums import LocationStatus, Mood


@dataclass(frozen=True)
class LocationSample:
    """Device position captured at a punch, classified against the geofence of that moment."""

    lat: float
    lng: float
    in_office: bool
    distance_m: Optional[int] = None

    @property
    def status(self) -> LocationStatus:
        return LocationStatus.IN_RANGE if self.in_office else LocationStatus.OUT_OF_RANGE


class PunchState(str, Enum):
    NO_RECORD = "no_record"
    PUNCHED_IN = "punched_in"
    PUNCHED_OUT = "punched_out"


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance session per employee per day."""

    record_id: int
    employee_id: int
    work_date: date
    punch_in: datetime
    punch_out: Optional[datetime]
    working_minutes: int = 0
    punch_in_location: Optional[LocationSample] = None
    punch_out_location: Optional[LocationSample] = None
    work_log: str = ""
    mood: Mood = Mood.NEUTRAL

    @property
    def state(self) -> PunchState:
        return PunchState.PUNCHED_IN if self.punch_out is None else PunchState.PUNCHED_OUT

    @property
    def is_open(self) -> bool:
        return self.punch_out is None
