from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import HalfDayType, LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRecord
from .repository import LeaveRepository

_COLUMNS = """
    leave_id, employee_id, date_from, date_to, reason, approver_name, approver_id,
    status, applied_on, is_half_day, half_day_type, approver_response, cancel_from_status
"""


def _row_to_leave(r: dict) -> LeaveRecord:
    return LeaveRecord(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        date_from=r["date_from"],
        date_to=r["date_to"],
        reason=r["reason"],
        approver_name=r["approver_name"],
        approver_id=int(r["approver_id"]) if r.get("approver_id") is not None else None,
        status=LeaveStatus(r["status"]),
        applied_on=r["applied_on"],
        is_half_day=bool(r.get("is_half_day")),
        half_day_type=HalfDayType(r["half_day_type"]) if r.get("half_day_type") else None,
        approver_response=r.get("approver_response"),
        cancel_from_status=LeaveStatus(r["cancel_from_status"]) if r.get("cancel_from_status") else None,
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(
                    employee_id, date_from, date_to, reason, approver_name, approver_id,
                    status, applied_on, is_half_day, half_day_type
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    date_from,
                    date_to,
                    reason,
                    approver_name,
                    approver_id,
                    LeaveStatus.PENDING.value,
                    applied_on,
                    int(bool(is_half_day)),
                    half_day_type.value if half_day_type else None,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def list_all(self) -> Sequence[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves ORDER BY applied_on DESC")
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leaves WHERE employee_id=%s ORDER BY applied_on DESC",
                (int(employee_id),),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def update_status(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        expected_status: LeaveStatus,
        approver_response: Optional[str] = None,
        cancel_from_status: Optional[LeaveStatus] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s,
                    approver_response=COALESCE(%s, approver_response),
                    cancel_from_status=%s
                WHERE leave_id=%s AND status=%s
                """,
                (
                    status.value,
                    approver_response,
                    cancel_from_status.value if cancel_from_status else None,
                    int(leave_id),
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0
