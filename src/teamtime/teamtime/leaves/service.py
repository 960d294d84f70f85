from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_non_empty
from ..core.constants import DEFAULT_ANNUAL_LEAVE_ALLOWANCE
from ..core.enums import HalfDayType, LeaveStatus, NotificationType, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..users.model import Employee
from ..users.policy import eligible_approvers
from ..users.repository import EmployeeRepository
from .model import LeaveRecord, leave_duration
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_CANCELLABLE = {LeaveStatus.PENDING, LeaveStatus.APPROVED}

_STATUS_LABELS = {
    LeaveStatus.APPROVED: "APPROVED",
    LeaveStatus.REJECTED: "REJECTED",
    LeaveStatus.CANCEL_REQUESTED: "CANCELLATION PENDING",
    LeaveStatus.CANCELLED: "CANCELLED",
}

_STATUS_NOTIFICATION_TYPES = {
    LeaveStatus.APPROVED: NotificationType.SUCCESS,
    LeaveStatus.REJECTED: NotificationType.ERROR,
}


@dataclass(frozen=True)
class LeaveQuota:
    allowance: float
    used: float

    @property
    def remaining(self) -> float:
        return max(self.allowance - self.used, 0)


class LeaveService:
    """Leave lifecycle: pending -> approved|rejected, pending|approved -> cancel_requested -> cancelled."""

    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        notifications: NotificationService,
        *,
        annual_allowance: float = DEFAULT_ANNUAL_LEAVE_ALLOWANCE,
    ):
        self._leaves = leaves
        self._employees = employees
        self._notifications = notifications
        self._annual_allowance = float(annual_allowance)

    def _employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _leave(self, leave_id: int) -> LeaveRecord:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave

    def _resolve_approver_id(self, leave: LeaveRecord) -> Optional[int]:
        if leave.approver_id is not None:
            return leave.approver_id
        match = next((e for e in self._employees.list_all() if e.name == leave.approver_name), None)
        return match.employee_id if match else None

    @staticmethod
    def _is_designated_approver(actor: Employee, leave: LeaveRecord) -> bool:
        if leave.approver_id is not None:
            return actor.employee_id == leave.approver_id
        return actor.name == leave.approver_name

    def _require_decider(self, actor_id: int, leave: LeaveRecord) -> Employee:
        actor = self._employee(actor_id)
        if actor.role != Role.ADMIN and not self._is_designated_approver(actor, leave):
            raise AuthorizationError(f"You are not authorized. This request is assigned to: {leave.approver_name}")
        return actor

    def eligible_approvers(self, requester_id: int) -> Sequence[Employee]:
        requester = self._employee(requester_id)
        return eligible_approvers(requester, self._employees.list_all())

    def apply(
        self,
        *,
        requester_id: int,
        date_from: date,
        date_to: Optional[date],
        reason: str,
        approver_id: Optional[int] = None,
        approver_name: Optional[str] = None,
        is_half_day: bool = False,
        half_day_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LeaveRecord:
        requester = self._employee(requester_id)
        reason = require_non_empty(reason, "Reason")

        candidates = eligible_approvers(requester, self._employees.list_all())
        if approver_id is not None:
            approver = next((e for e in candidates if e.employee_id == int(approver_id)), None)
        elif approver_name:
            approver = next((e for e in candidates if e.name == approver_name.strip()), None)
        else:
            raise ValidationError("Please choose who should approve this leave")
        if not approver:
            raise AuthorizationError("The selected person cannot approve your leave")

        half_day = None
        if is_half_day:
            half_day = parse_enum(HalfDayType, half_day_type or HalfDayType.FIRST.value, "Half-day session")
            date_to = date_from
        elif date_to is None:
            raise ValidationError("End date is required")
        elif date_to < date_from:
            raise ValidationError("End date must be on or after the start date")

        leave_id = self._leaves.create(
            employee_id=requester.employee_id,
            date_from=date_from,
            date_to=date_to,
            reason=reason,
            approver_name=approver.name,
            approver_id=approver.employee_id,
            applied_on=now or now_local(),
            is_half_day=bool(is_half_day),
            half_day_type=half_day,
        )
        logger.info("Leave %s applied by %s, routed to %s", leave_id, requester.employee_id, approver.employee_id)

        span = date_from.isoformat() if is_half_day else f"{date_from.isoformat()} to {date_to.isoformat()}"
        self._notifications.notify_safely(
            approver.employee_id,
            f"{requester.name} requested leave for {span}",
            type=NotificationType.INFO,
            link="/team",
        )
        return self._leaves.get_by_id(leave_id)

    def _transition(
        self,
        leave: LeaveRecord,
        status: LeaveStatus,
        *,
        approver_response: Optional[str] = None,
        cancel_from_status: Optional[LeaveStatus] = None,
    ) -> LeaveRecord:
        ok = self._leaves.update_status(
            leave_id=leave.leave_id,
            status=status,
            expected_status=leave.status,
            approver_response=approver_response,
            cancel_from_status=cancel_from_status,
        )
        if not ok:
            raise ConflictError("This leave request was changed by someone else")
        logger.info("Leave %s: %s -> %s", leave.leave_id, leave.status.value, status.value)
        return self._leaves.get_by_id(leave.leave_id)

    def _notify_requester(self, leave: LeaveRecord) -> None:
        label = _STATUS_LABELS.get(leave.status, leave.status.value.upper())
        self._notifications.notify_safely(
            leave.employee_id,
            f"Your leave request for {leave.date_from.isoformat()} has been {label}.",
            type=_STATUS_NOTIFICATION_TYPES.get(leave.status, NotificationType.INFO),
            link="/leaves",
        )

    def decide(self, *, actor_id: int, leave_id: int, approve: bool, response: str = "") -> LeaveRecord:
        leave = self._leave(leave_id)
        self._require_decider(actor_id, leave)
        if leave.status != LeaveStatus.PENDING:
            raise ConflictError("This leave request has already been processed")

        updated = self._transition(
            leave,
            LeaveStatus.APPROVED if approve else LeaveStatus.REJECTED,
            approver_response=(response or "").strip(),
        )
        self._notify_requester(updated)
        return updated

    def request_cancellation(self, *, requester_id: int, leave_id: int) -> LeaveRecord:
        leave = self._leave(leave_id)
        requester = self._employee(requester_id)
        if leave.employee_id != requester.employee_id:
            raise AuthorizationError("You can only cancel your own leave")
        if leave.status not in _CANCELLABLE:
            raise ConflictError("Only pending or approved leaves can be cancelled")

        updated = self._transition(leave, LeaveStatus.CANCEL_REQUESTED, cancel_from_status=leave.status)
        self._notifications.notify_safely(
            self._resolve_approver_id(leave),
            f"{requester.name} has requested to CANCEL their leave for {leave.date_from.isoformat()}",
            type=NotificationType.WARNING,
            link="/team",
        )
        return updated

    def confirm_cancellation(self, *, actor_id: int, leave_id: int, response: str = "") -> LeaveRecord:
        leave = self._leave(leave_id)
        self._require_decider(actor_id, leave)
        if leave.status != LeaveStatus.CANCEL_REQUESTED:
            raise ConflictError("No cancellation has been requested for this leave")

        updated = self._transition(leave, LeaveStatus.CANCELLED, approver_response=(response or "").strip() or None)
        self._notify_requester(updated)
        return updated

    def deny_cancellation(self, *, actor_id: int, leave_id: int, response: str = "") -> LeaveRecord:
        leave = self._leave(leave_id)
        self._require_decider(actor_id, leave)
        if leave.status != LeaveStatus.CANCEL_REQUESTED:
            raise ConflictError("No cancellation has been requested for this leave")

        restored = leave.cancel_from_status or LeaveStatus.APPROVED
        updated = self._transition(leave, restored, approver_response=(response or "").strip() or None)
        self._notifications.notify_safely(
            leave.employee_id,
            f"Your cancellation request for {leave.date_from.isoformat()} was declined. The leave stays {restored.value}.",
            type=NotificationType.WARNING,
            link="/leaves",
        )
        return updated

    def list_leaves(self, employee_id: Optional[int] = None) -> Sequence[LeaveRecord]:
        if employee_id is None:
            return self._leaves.list_all()
        return self._leaves.list_for_employee(int(employee_id))

    def quota(self, employee_id: int, *, year: Optional[int] = None) -> LeaveQuota:
        year = year or now_local().year
        used = sum(
            leave_duration(lv.date_from, lv.date_to, is_half_day=lv.is_half_day)
            for lv in self._leaves.list_for_employee(int(employee_id))
            if lv.status == LeaveStatus.APPROVED and lv.date_from.year == year
        )
        return LeaveQuota(allowance=self._annual_allowance, used=used)

    @staticmethod
    def to_ui(lv: LeaveRecord) -> dict:
        return {
            "leave_id": lv.leave_id,
            "employee_id": lv.employee_id,
            "date_from": lv.date_from.isoformat(),
            "date_to": lv.date_to.isoformat(),
            "duration_days": lv.duration_days,
            "is_half_day": lv.is_half_day,
            "half_day_type": lv.half_day_type.value if lv.half_day_type else None,
            "reason": lv.reason,
            "approver_name": lv.approver_name,
            "approver_id": lv.approver_id,
            "status": lv.status.value,
            "approver_response": lv.approver_response or "",
            "applied_on": lv.applied_on.isoformat(),
        }
