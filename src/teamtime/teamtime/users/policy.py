"""Role hierarchy rules shared by leave approval and task assignment."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..core.enums import Role
from .model import Employee

_APPROVER_ROLES = {
    Role.MANAGER: frozenset({Role.ADMIN}),
}
_DEFAULT_APPROVER_ROLES = frozenset({Role.MANAGER, Role.ADMIN})

_ASSIGNABLE_ROLES = {
    Role.ADMIN: frozenset({Role.MANAGER, Role.EMPLOYEE}),
    Role.MANAGER: frozenset({Role.EMPLOYEE}),
}


def approver_roles_for(role: Role) -> frozenset:
    return _APPROVER_ROLES.get(role, _DEFAULT_APPROVER_ROLES)


def eligible_approvers(requester: Employee, employees: Iterable[Employee]) -> Sequence[Employee]:
    """Managers route to Admins only; everyone else to any Manager or Admin. Never to themselves."""
    roles = approver_roles_for(requester.role)
    return [
        e
        for e in employees
        if e.role in roles and e.employee_id != requester.employee_id
    ]


def can_assign(assigner: Employee, assignee: Employee) -> bool:
    if assigner.employee_id == assignee.employee_id:
        return True
    return assignee.role in _ASSIGNABLE_ROLES.get(assigner.role, frozenset())


def assignable_employees(assigner: Employee, employees: Iterable[Employee]) -> Sequence[Employee]:
    allowed = _ASSIGNABLE_ROLES.get(assigner.role, frozenset())
    return [e for e in employees if e.role in allowed]
