from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import BreakType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import BreakRecord
from .repository import BreakRepository

_COLUMNS = "break_id, employee_id, work_date, break_type, break_start, break_end, duration_minutes"


def _row_to_break(r: dict) -> BreakRecord:
    return BreakRecord(
        break_id=int(r["break_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        break_type=BreakType(r["break_type"]),
        break_start=r["break_start"],
        break_end=r.get("break_end"),
        duration_minutes=int(r.get("duration_minutes") or 0),
    )


class MySQLBreakRepository(BreakRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, break_id: int) -> Optional[BreakRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM breaks WHERE break_id=%s", (int(break_id),))
            r = fetchone(cur)
            return _row_to_break(r) if r else None

    def list_for_employee_and_date(self, employee_id: int, work_date: date) -> Sequence[BreakRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM breaks WHERE employee_id=%s AND work_date=%s ORDER BY break_start",
                (int(employee_id), work_date),
            )
            return [_row_to_break(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[BreakRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM breaks ORDER BY work_date DESC, break_start DESC")
            return [_row_to_break(r) for r in fetchall(cur)]

    def create_start(self, *, employee_id: int, work_date: date, break_type: BreakType, break_start: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO breaks(employee_id, work_date, break_type, break_start, duration_minutes)
                VALUES(%s,%s,%s,%s,0)
                """,
                (int(employee_id), work_date, break_type.value, break_start),
            )
            return int(cur.lastrowid)

    def update_end(self, *, break_id: int, break_end: datetime, duration_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE breaks SET break_end=%s, duration_minutes=%s WHERE break_id=%s AND break_end IS NULL",
                (break_end, int(duration_minutes), int(break_id)),
            )
            return cur.rowcount > 0
