from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus, Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_phone(self, phone: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_status(self, employee_id: int, *, status: EmployeeStatus) -> bool:
        raise NotImplementedError

    def update_password(self, employee_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def update_profile(self, employee_id: int, *, fields: dict) -> bool:
        """Update a subset of PROFILE_FIELDS (plus role for admin edits)."""

        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError
