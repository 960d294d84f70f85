from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import PROFILE_FIELDS, Employee
from .policy import assignable_employees, eligible_approvers
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the session after login."""

    employee_id: int
    name: str
    email: str
    role: Role

    @classmethod
    def from_employee(cls, employee: Employee) -> "SessionUser":
        return cls(employee_id=employee.employee_id, name=employee.name, email=employee.email, role=employee.role)

    def to_dict(self) -> dict:
        return {"employee_id": self.employee_id, "name": self.name, "email": self.email, "role": self.role.value}

    @classmethod
    def from_dict(cls, data: dict) -> "SessionUser":
        return cls(
            employee_id=int(data["employee_id"]),
            name=str(data["name"]),
            email=str(data["email"]),
            role=Role(data["role"]),
        )


def _password_matches(password_hash: str, password: Optional[str]) -> bool:
    try:
        return check_password_hash(password_hash or "", password or "")
    except ValueError:
        # placeholder or corrupted hash
        return False


def public_profile(employee: Employee) -> dict:
    """Employee as exposed over the API (no credential)."""
    return {
        "employee_id": employee.employee_id,
        "name": employee.name,
        "email": employee.email,
        "role": employee.role.value,
        "status": employee.status.value,
        "phone": employee.phone,
        "designation": employee.designation,
        "joining_date": employee.joining_date.isoformat() if employee.joining_date else None,
        "bio": employee.bio,
        "avatar_url": employee.avatar_url,
        "current_status": employee.current_status,
        "current_status_emoji": employee.current_status_emoji,
    }


class AuthService:
    """Use case: signup, login and password reset."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._employees.get_by_email((email or "").strip().lower())

        if not user or not _password_matches(user.password_hash, password):
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthenticationError("Account inactive. Contact support.")

        logger.info("Employee %s logged in", user.employee_id)
        return SessionUser.from_employee(user)

    def refresh(self, cached: SessionUser) -> Optional[SessionUser]:
        """Re-read the account behind a session; None once it is deleted or deactivated."""
        employee = self._employees.get_by_id(cached.employee_id)
        if not employee or not employee.is_active:
            return None
        return SessionUser.from_employee(employee)

    def signup(
        self,
        *,
        name: str,
        email: str,
        password: str,
        phone: str = "",
        role: Role = Role.EMPLOYEE,
        today: Optional[date] = None,
    ) -> int:
        """Self registration. The very first account becomes the Admin."""
        is_first_user = self._employees.count() == 0
        if is_first_user:
            role = Role.ADMIN
        elif role == Role.ADMIN:
            raise AuthorizationError("Admin accounts cannot be self-registered")

        return _create_employee(
            self._employees,
            name=name,
            email=email,
            password=password,
            phone=phone,
            role=role,
            designation="System Admin" if role == Role.ADMIN else "Member",
            today=today,
        )

    def find_for_reset(self, phone: str) -> Employee:
        phone = require_non_empty(phone, "Phone")
        user = self._employees.get_by_phone(phone)
        if not user:
            raise NotFoundError("No account is registered with this phone number")
        return user

    def reset_password(self, *, phone: str, new_password: str, confirm_password: str) -> None:
        user = self.find_for_reset(phone)
        if new_password != confirm_password:
            raise ValidationError("Passwords do not match")
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
        self._employees.update_password(user.employee_id, password_hash=generate_password_hash(new_password))
        logger.info("Password reset for employee %s", user.employee_id)


class EmployeeService:
    """Use case: manage employees (admin) and own profile."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_all(self) -> Sequence[Employee]:
        return list(self._employees.list_all())

    def provision(
        self,
        *,
        current_role: Role,
        name: str,
        email: str,
        password: str,
        role: Role,
        phone: str = "",
        designation: str = "",
        today: Optional[date] = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only Admins can add employees")

        return _create_employee(
            self._employees,
            name=name,
            email=email,
            password=password,
            phone=phone,
            role=role,
            designation=(designation or "").strip() or "Member",
            today=today,
        )

    def set_status(self, *, current_role: Role, employee_id: int, status: EmployeeStatus) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only Admins can change account status")
        self.get(employee_id)
        self._employees.update_status(int(employee_id), status=status)
        logger.info("Employee %s set %s", employee_id, status.value)

    def delete(self, *, current_role: Role, current_user_id: int, employee_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only Admins can delete employees")
        if int(employee_id) == int(current_user_id):
            raise ValidationError("You cannot delete your own account")
        if not self._employees.delete_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")
        logger.info("Employee %s deleted", employee_id)

    def update_profile(self, *, current_user_id: int, current_role: Role, employee_id: int, changes: dict) -> Employee:
        """Self edit of PROFILE_FIELDS; Admins may edit anyone and also change the role."""
        is_self = int(current_user_id) == int(employee_id)
        if not is_self and current_role != Role.ADMIN:
            raise AuthorizationError("You can only edit your own profile")

        self.get(employee_id)

        fields = {k: (v.strip() if isinstance(v, str) else v) for k, v in changes.items() if k in PROFILE_FIELDS}
        if "name" in fields:
            fields["name"] = require_non_empty(fields["name"], "Name")
        if "role" in changes:
            if current_role != Role.ADMIN:
                raise AuthorizationError("Only Admins can change roles")
            try:
                fields["role"] = Role(changes["role"])
            except ValueError:
                raise ValidationError("Role is invalid")

        if fields:
            self._employees.update_profile(int(employee_id), fields=fields)
        return self.get(employee_id)

    def change_password(self, *, employee_id: int, current_password: str, new_password: str) -> None:
        employee = self.get(employee_id)
        if not _password_matches(employee.password_hash, current_password):
            raise AuthenticationError("Current password is incorrect")
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
        self._employees.update_password(employee.employee_id, password_hash=generate_password_hash(new_password))

    def eligible_approvers(self, requester_id: int) -> Sequence[Employee]:
        requester = self.get(requester_id)
        return eligible_approvers(requester, self._employees.list_all())

    def assignable_employees(self, assigner_id: int) -> Sequence[Employee]:
        assigner = self.get(assigner_id)
        return assignable_employees(assigner, self._employees.list_all())


def _create_employee(
    employees: EmployeeRepository,
    *,
    name: str,
    email: str,
    password: str,
    phone: str,
    role: Role,
    designation: str,
    today: Optional[date],
) -> int:
    name = require_non_empty(name, "Name")
    email = require_email(email)
    require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

    if employees.get_by_email(email):
        raise ConflictError("Email already registered")

    employee_id = employees.create(
        name=name,
        email=email,
        password_hash=generate_password_hash(password),
        role=role,
        phone=(phone or "").strip() or None,
        designation=designation,
        joining_date=today or date.today(),
    )
    logger.info("Created %s account %s", role.value, employee_id)
    return employee_id
