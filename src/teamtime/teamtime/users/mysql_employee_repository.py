from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import EmployeeStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PROFILE_FIELDS, Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, name, email, password_hash, role, status, phone, designation,
    joining_date, bio, avatar_url, current_status, current_status_emoji
"""

_UPDATABLE = set(PROFILE_FIELDS) | {"role"}


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        email=r["email"],
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        status=EmployeeStatus(r["status"]),
        phone=r.get("phone"),
        designation=r.get("designation"),
        joining_date=r.get("joining_date"),
        bio=r.get("bio"),
        avatar_url=r.get("avatar_url"),
        current_status=r.get("current_status"),
        current_status_emoji=r.get("current_status_emoji"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._get_one("employee_id", int(employee_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_one("email", email.strip().lower())

    def get_by_phone(self, phone: str) -> Optional[Employee]:
        return self._get_one("phone", phone.strip())

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees")
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        phone: Optional[str],
        designation: Optional[str],
        joining_date: Optional[date],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, email, password_hash, role, status, phone, designation, joining_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, email, password_hash, role.value, EmployeeStatus.ACTIVE.value, phone, designation, joining_date),
            )
            return int(cur.lastrowid)

    def update_status(self, employee_id: int, *, status: EmployeeStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET status=%s WHERE employee_id=%s", (status.value, int(employee_id)))
            return cur.rowcount > 0

    def update_password(self, employee_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET password_hash=%s WHERE employee_id=%s", (password_hash, int(employee_id)))
            return cur.rowcount > 0

    def update_profile(self, employee_id: int, *, fields: dict) -> bool:
        fields = {k: v for k, v in fields.items() if k in _UPDATABLE}
        if not fields:
            return False
        if isinstance(fields.get("role"), Role):
            fields["role"] = fields["role"].value

        assignments = ", ".join(f"{k}=%s" for k in fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET {assignments} WHERE employee_id=%s",
                tuple(fields.values()) + (int(employee_id),),
            )
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
