from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an account in the team.

    Note: plain data, no DB access. The credential is a salted hash, never the password itself.
    """

    employee_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    phone: Optional[str] = None
    designation: Optional[str] = None
    joining_date: Optional[date] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    current_status: Optional[str] = None
    current_status_emoji: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE


# Fields an employee may change on their own profile.
PROFILE_FIELDS = (
    "name",
    "phone",
    "designation",
    "bio",
    "avatar_url",
    "current_status",
    "current_status_emoji",
)
