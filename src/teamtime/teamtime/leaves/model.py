from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import HalfDayType, LeaveStatus


@dataclass(frozen=True)
class LeaveRecord:
    leave_id: int
    employee_id: int
    date_from: date
    date_to: date
    reason: str
    approver_name: str
    status: LeaveStatus
    applied_on: datetime
    approver_id: Optional[int] = None
    is_half_day: bool = False
    half_day_type: Optional[HalfDayType] = None
    approver_response: Optional[str] = None
    # Status the leave returns to if a cancellation request is turned down.
    cancel_from_status: Optional[LeaveStatus] = None

    @property
    def duration_days(self) -> float:
        return leave_duration(self.date_from, self.date_to, is_half_day=self.is_half_day)


def leave_duration(date_from: date, date_to: date, *, is_half_day: bool = False) -> float:
    """Quota days: 0.5 for a half day, otherwise inclusive day count (0 for an inverted range)."""
    if is_half_day:
        return 0.5
    if date_to < date_from:
        return 0
    return (date_to - date_from).days + 1
