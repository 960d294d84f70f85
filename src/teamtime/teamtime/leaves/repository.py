from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import HalfDayType, LeaveStatus
from .model import LeaveRecord


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        date_from: date,
        date_to: date,
        reason: str,
        approver_name: str,
        approver_id: Optional[int],
        applied_on: datetime,
        is_half_day: bool,
        half_day_type: Optional[HalfDayType],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def update_status(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        expected_status: LeaveStatus,
        approver_response: Optional[str] = None,
        cancel_from_status: Optional[LeaveStatus] = None,
    ) -> bool:
        """Move a leave from expected_status to status; False if it was not in expected_status.

        approver_response None keeps the stored response.
        """

        raise NotImplementedError
