from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Mood
from .model import AttendanceRecord, LocationSample


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        """The session still missing a punch-out, whatever its work date."""

        raise NotImplementedError

    def list_open(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        """All records, newest work date first."""

        raise NotImplementedError

    def create_punch_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_in: datetime,
        location: Optional[LocationSample],
        mood: Mood,
    ) -> int:
        raise NotImplementedError

    def update_punch_out(
        self,
        *,
        record_id: int,
        punch_out: datetime,
        working_minutes: int,
        location: Optional[LocationSample],
        work_log: Optional[str] = None,
    ) -> bool:
        """Close the session. A work_log of None leaves the stored text untouched."""

        raise NotImplementedError

    def update_work_log(self, *, record_id: int, work_log: str) -> bool:
        raise NotImplementedError
