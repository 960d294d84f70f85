from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.teamtime.teamtime.core.enums import HalfDayType, LeaveStatus, NotificationType, Role
from src.teamtime.teamtime.core.exceptions import AuthorizationError, ConflictError, ValidationError
from src.teamtime.teamtime.leaves.model import leave_duration


@pytest.fixture
def team(employees):
    return {
        "admin": employees.add("Ada", Role.ADMIN),
        "manager": employees.add("Max", Role.MANAGER),
        "other_manager": employees.add("Mia", Role.MANAGER),
        "employee": employees.add("Eve"),
        "colleague": employees.add("Carl"),
    }


def _apply(container, requester, approver, fixed_now, **kwargs):
    params = dict(
        requester_id=requester.employee_id,
        date_from=date(2026, 3, 10),
        date_to=date(2026, 3, 12),
        reason="Family trip",
        approver_id=approver.employee_id,
        now=fixed_now,
    )
    params.update(kwargs)
    return container.leave_service.apply(**params)


def test_employee_can_route_to_managers_and_admins(container, team):
    names = {e.name for e in container.leave_service.eligible_approvers(team["employee"].employee_id)}
    assert names == {"Ada", "Max", "Mia"}


def test_manager_can_route_only_to_admins(container, team):
    approvers = container.leave_service.eligible_approvers(team["manager"].employee_id)
    assert [e.name for e in approvers] == ["Ada"]


def test_admin_never_routes_to_self(container, team):
    approvers = container.leave_service.eligible_approvers(team["admin"].employee_id)
    assert team["admin"].employee_id not in {e.employee_id for e in approvers}


@pytest.mark.parametrize(
    "date_from,date_to,half,expected",
    [
        (date(2026, 3, 10), date(2026, 3, 10), False, 1),
        (date(2026, 3, 10), date(2026, 3, 12), False, 3),
        (date(2026, 3, 10), date(2026, 3, 20), True, 0.5),
        (date(2026, 3, 12), date(2026, 3, 10), False, 0),
    ],
)
def test_leave_duration(date_from, date_to, half, expected):
    assert leave_duration(date_from, date_to, is_half_day=half) == expected


def test_apply_notifies_approver(container, team, fixed_now):
    leave = _apply(container, team["employee"], team["manager"], fixed_now)

    assert leave.status == LeaveStatus.PENDING
    assert leave.approver_name == "Max"
    assert leave.duration_days == 3

    inbox = container.notification_service.list_for(team["manager"].employee_id)
    assert inbox[0].message == "Eve requested leave for 2026-03-10 to 2026-03-12"
    assert inbox[0].link == "/team"


def test_half_day_collapses_to_single_date(container, team, fixed_now):
    leave = _apply(
        container,
        team["employee"],
        team["manager"],
        fixed_now,
        is_half_day=True,
        half_day_type="second",
    )
    assert leave.date_to == leave.date_from
    assert leave.half_day_type == HalfDayType.SECOND
    assert leave.duration_days == 0.5


def test_manager_cannot_route_to_other_manager(container, team, fixed_now):
    with pytest.raises(AuthorizationError):
        _apply(container, team["manager"], team["other_manager"], fixed_now)


def test_apply_requires_reason_and_valid_range(container, team, fixed_now):
    with pytest.raises(ValidationError):
        _apply(container, team["employee"], team["manager"], fixed_now, reason="  ")
    with pytest.raises(ValidationError):
        _apply(container, team["employee"], team["manager"], fixed_now, date_to=date(2026, 3, 1))


def test_approval_by_designated_approver(container, team, fixed_now):
    leave = _apply(container, team["employee"], team["manager"], fixed_now)

    decided = container.leave_service.decide(
        actor_id=team["manager"].employee_id,
        leave_id=leave.leave_id,
        approve=True,
        response="Enjoy",
    )
    assert decided.status == LeaveStatus.APPROVED
    assert decided.approver_response == "Enjoy"

    inbox = container.notification_service.list_for(team["employee"].employee_id)
    assert inbox[0].type == NotificationType.SUCCESS
    assert "APPROVED" in inbox[0].message

    with pytest.raises(ConflictError):
        container.leave_service.decide(actor_id=team["manager"].employee_id, leave_id=leave.leave_id, approve=False)


def test_other_manager_cannot_decide(container, team, fixed_now):
    leave = _apply(container, team["employee"], team["manager"], fixed_now)
    with pytest.raises(AuthorizationError):
        container.leave_service.decide(actor_id=team["other_manager"].employee_id, leave_id=leave.leave_id, approve=True)


def test_admin_can_decide_any_leave(container, team, fixed_now):
    leave = _apply(container, team["employee"], team["manager"], fixed_now)
    decided = container.leave_service.decide(actor_id=team["admin"].employee_id, leave_id=leave.leave_id, approve=False)
    assert decided.status == LeaveStatus.REJECTED


def test_cancellation_needs_approver_confirmation(container, team, fixed_now):
    svc = container.leave_service
    leave = _apply(container, team["employee"], team["manager"], fixed_now)

    requested = svc.request_cancellation(requester_id=team["employee"].employee_id, leave_id=leave.leave_id)
    assert requested.status == LeaveStatus.CANCEL_REQUESTED

    warning = container.notification_service.list_for(team["manager"].employee_id)[0]
    assert warning.type == NotificationType.WARNING
    assert "CANCEL" in warning.message

    with pytest.raises(AuthorizationError):
        svc.confirm_cancellation(actor_id=team["other_manager"].employee_id, leave_id=leave.leave_id)
    with pytest.raises(AuthorizationError):
        svc.confirm_cancellation(actor_id=team["employee"].employee_id, leave_id=leave.leave_id)

    cancelled = svc.confirm_cancellation(actor_id=team["manager"].employee_id, leave_id=leave.leave_id)
    assert cancelled.status == LeaveStatus.CANCELLED


def test_admin_can_confirm_cancellation(container, team, fixed_now):
    svc = container.leave_service
    leave = _apply(container, team["employee"], team["manager"], fixed_now)
    svc.request_cancellation(requester_id=team["employee"].employee_id, leave_id=leave.leave_id)

    cancelled = svc.confirm_cancellation(actor_id=team["admin"].employee_id, leave_id=leave.leave_id)
    assert cancelled.status == LeaveStatus.CANCELLED


def test_denied_cancellation_restores_previous_status(container, team, fixed_now):
    svc = container.leave_service
    leave = _apply(container, team["employee"], team["manager"], fixed_now)
    svc.decide(actor_id=team["manager"].employee_id, leave_id=leave.leave_id, approve=True)
    svc.request_cancellation(requester_id=team["employee"].employee_id, leave_id=leave.leave_id)

    restored = svc.deny_cancellation(actor_id=team["manager"].employee_id, leave_id=leave.leave_id)
    assert restored.status == LeaveStatus.APPROVED
    assert restored.cancel_from_status is None


def test_only_owner_can_request_cancellation(container, team, fixed_now):
    leave = _apply(container, team["employee"], team["manager"], fixed_now)
    with pytest.raises(AuthorizationError):
        container.leave_service.request_cancellation(requester_id=team["colleague"].employee_id, leave_id=leave.leave_id)


def test_rejected_leave_cannot_be_cancelled(container, team, fixed_now):
    svc = container.leave_service
    leave = _apply(container, team["employee"], team["manager"], fixed_now)
    svc.decide(actor_id=team["manager"].employee_id, leave_id=leave.leave_id, approve=False)

    with pytest.raises(ConflictError):
        svc.request_cancellation(requester_id=team["employee"].employee_id, leave_id=leave.leave_id)


def test_quota_counts_approved_days_of_the_year(container, team, fixed_now):
    svc = container.leave_service
    employee = team["employee"]

    full = _apply(container, employee, team["manager"], fixed_now)
    half = _apply(container, employee, team["manager"], fixed_now + timedelta(minutes=1), is_half_day=True)
    _apply(container, employee, team["manager"], fixed_now + timedelta(minutes=2))
    svc.decide(actor_id=team["manager"].employee_id, leave_id=full.leave_id, approve=True)
    svc.decide(actor_id=team["manager"].employee_id, leave_id=half.leave_id, approve=True)

    quota = svc.quota(employee.employee_id, year=2026)
    assert quota.allowance == 24
    assert quota.used == 3.5
    assert quota.remaining == 20.5
