from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import clock_time, elapsed_minutes, now_local
from ..common.validators import parse_enum
from ..core.constants import BREAK_LIMIT_MINUTES
from ..core.enums import BreakType
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import BreakRecord
from .repository import BreakRepository

logger = logging.getLogger(__name__)


class BreakService:
    """Typed rest intervals. At most one open break per employee, each type once a day."""

    def __init__(self, breaks: BreakRepository):
        self._breaks = breaks

    def today(self, employee_id: int, today: date) -> Sequence[BreakRecord]:
        return self._breaks.list_for_employee_and_date(int(employee_id), today)

    def list_all(self) -> Sequence[BreakRecord]:
        return self._breaks.list_all()

    def start(self, employee_id: int, break_type: str, *, now: Optional[datetime] = None) -> BreakRecord:
        now = now or now_local()
        kind = parse_enum(BreakType, break_type, "Break type")

        taken = self._breaks.list_for_employee_and_date(int(employee_id), now.date())
        active = next((b for b in taken if b.is_open), None)
        if active:
            raise ConflictError(f"You are already on a {active.break_type.value} break")
        if any(b.break_type == kind for b in taken):
            raise ConflictError("This break has already been taken today")

        break_id = self._breaks.create_start(
            employee_id=int(employee_id),
            work_date=now.date(),
            break_type=kind,
            break_start=now,
        )
        logger.info("Employee %s started %s break", employee_id, kind.value)
        return self._breaks.get_by_id(break_id)

    def end(self, employee_id: int, break_id: int, *, now: Optional[datetime] = None) -> BreakRecord:
        now = now or now_local()

        record = self._breaks.get_by_id(int(break_id))
        if not record:
            raise NotFoundError("Break not found")
        if record.employee_id != int(employee_id):
            raise AuthorizationError("You can only end your own break")
        if not record.is_open:
            raise ConflictError("This break has already ended")

        minutes = elapsed_minutes(record.break_start, now)
        if minutes < 0:
            raise ValidationError("Break end cannot be earlier than its start")

        self._breaks.update_end(break_id=record.break_id, break_end=now, duration_minutes=minutes)
        logger.info("Employee %s ended %s break after %d minutes", employee_id, record.break_type.value, minutes)
        return self._breaks.get_by_id(record.break_id)

    @staticmethod
    def to_ui(b: BreakRecord) -> dict:
        limit = BREAK_LIMIT_MINUTES.get(b.break_type.value)
        return {
            "break_id": b.break_id,
            "employee_id": b.employee_id,
            "date": b.work_date.strftime("%Y-%m-%d"),
            "break_type": b.break_type.value,
            "break_start": clock_time(b.break_start),
            "break_end": clock_time(b.break_end, missing=None),
            "duration_minutes": b.duration_minutes,
            "limit_minutes": limit,
            "over_limit": bool(limit is not None and not b.is_open and b.duration_minutes > limit),
            "status": "active" if b.is_open else "completed",
        }
