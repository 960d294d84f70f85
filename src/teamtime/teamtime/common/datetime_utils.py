from __future__ import annotations

from datetime import date, datetime
from typing import Optional

DATE_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%H:%M:%S"


def parse_iso_date(value: str) -> date:
    """'2026-03-02' -> date(2026, 3, 2); ValueError on anything else."""
    return datetime.strptime(value, DATE_FORMAT).date()


def now_local() -> datetime:
    """Server local time; services take an explicit ``now`` so tests never patch this."""
    return datetime.now()


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two instants, truncated."""
    return int((end - start).total_seconds() // 60)


def format_duration(minutes: int) -> str:
    """510 -> '8h 30m'."""
    minutes = max(int(minutes or 0), 0)
    return f"{minutes // 60}h {minutes % 60}m"


def clock_time(value: Optional[datetime], missing: Optional[str] = "-") -> Optional[str]:
    return value.strftime(CLOCK_FORMAT) if value else missing
