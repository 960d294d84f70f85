from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import BreakType


@dataclass(frozen=True)
class BreakRecord:
    break_id: int
    employee_id: int
    work_date: date
    break_type: BreakType
    break_start: datetime
    break_end: Optional[datetime] = None
    duration_minutes: int = 0

    @property
    def is_open(self) -> bool:
        return self.break_end is None
