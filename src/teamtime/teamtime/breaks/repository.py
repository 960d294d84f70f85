from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import BreakType
from .model import BreakRecord


class BreakRepository(Protocol):
    def get_by_id(self, break_id: int) -> Optional[BreakRecord]:
        raise NotImplementedError

    def list_for_employee_and_date(self, employee_id: int, work_date: date) -> Sequence[BreakRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[BreakRecord]:
        raise NotImplementedError

    def create_start(self, *, employee_id: int, work_date: date, break_type: BreakType, break_start: datetime) -> int:
        raise NotImplementedError

    def update_end(self, *, break_id: int, break_end: datetime, duration_minutes: int) -> bool:
        raise NotImplementedError
