from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import Mood
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, optional_float
from .model import AttendanceRecord, LocationSample
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, employee_id, work_date, punch_in, punch_out, working_minutes,
    in_lat, in_lng, in_office, in_distance_m,
    out_lat, out_lng, out_office, out_distance_m,
    work_log, mood
"""


def _location(r: dict, prefix: str) -> Optional[LocationSample]:
    lat = optional_float(r.get(f"{prefix}_lat"))
    lng = optional_float(r.get(f"{prefix}_lng"))
    if lat is None or lng is None:
        return None
    distance = r.get(f"{prefix}_distance_m")
    return LocationSample(
        lat=lat,
        lng=lng,
        in_office=bool(r.get(f"{prefix}_office")),
        distance_m=int(distance) if distance is not None else None,
    )


def _location_params(location: Optional[LocationSample]) -> tuple:
    if location is None:
        return (None, None, None, None)
    return (location.lat, location.lng, int(location.in_office), location.distance_m)


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        punch_in=r["punch_in"],
        punch_out=r.get("punch_out"),
        working_minutes=int(r.get("working_minutes") or 0),
        punch_in_location=_location(r, "in"),
        punch_out_location=_location(r, "out"),
        work_log=r.get("work_log") or "",
        mood=Mood(r.get("mood") or Mood.NEUTRAL.value),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, *, order: str = "", limit: Optional[int] = None) -> list[AttendanceRecord]:
        sql = f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} {order}"
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        rows = self._select("record_id=%s", (int(record_id),))
        return rows[0] if rows else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        rows = self._select("employee_id=%s AND work_date=%s", (int(employee_id), work_date))
        return rows[0] if rows else None

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        rows = self._select(
            "employee_id=%s AND punch_out IS NULL", (int(employee_id),), order="ORDER BY punch_in DESC", limit=1
        )
        return rows[0] if rows else None

    def list_open(self) -> Sequence[AttendanceRecord]:
        return self._select("punch_out IS NULL", (), order="ORDER BY punch_in")

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        return self._select("employee_id=%s", (int(employee_id),), order="ORDER BY work_date DESC", limit=limit)

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._select("work_date=%s", (work_date,), order="ORDER BY punch_in")

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._select("1=1", (), order="ORDER BY work_date DESC, punch_in DESC")

    def create_punch_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        punch_in: datetime,
        location: Optional[LocationSample],
        mood: Mood,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    employee_id, work_date, punch_in, working_minutes,
                    in_lat, in_lng, in_office, in_distance_m, work_log, mood
                )
                VALUES(%s,%s,%s,0,%s,%s,%s,%s,'',%s)
                """,
                (int(employee_id), work_date, punch_in) + _location_params(location) + (mood.value,),
            )
            return int(cur.lastrowid)

    def update_punch_out(
        self,
        *,
        record_id: int,
        punch_out: datetime,
        working_minutes: int,
        location: Optional[LocationSample],
        work_log: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_out=%s, working_minutes=%s,
                    out_lat=%s, out_lng=%s, out_office=%s, out_distance_m=%s,
                    work_log=COALESCE(%s, work_log)
                WHERE record_id=%s AND punch_out IS NULL
                """,
                (punch_out, int(working_minutes)) + _location_params(location) + (work_log, int(record_id)),
            )
            return cur.rowcount > 0

    def update_work_log(self, *, record_id: int, work_log: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE attendance_records SET work_log=%s WHERE record_id=%s", (work_log, int(record_id)))
            return cur.rowcount > 0
