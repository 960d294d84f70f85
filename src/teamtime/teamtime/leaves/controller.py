from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import (
    current_user,
    json_body,
    login_required,
    ok,
    optional_date,
    optional_int,
    required_date,
    roles_required,
)
from ..container import Container
from ..core.enums import Role
from .service import LeaveService


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        leaves = container.leave_service.list_leaves(current_user().employee_id)
        return jsonify([LeaveService.to_ui(lv) for lv in leaves])

    @app.route("/api/leaves/quota", methods=["GET"], endpoint="leave_quota")
    @login_required
    def leave_quota():
        year = request.args.get("year", type=int) or now_local().year
        quota = container.leave_service.quota(current_user().employee_id, year=year)
        return jsonify({"year": year, "allowance": quota.allowance, "used": quota.used, "remaining": quota.remaining})

    @app.route("/api/leaves", methods=["POST"], endpoint="apply_leave")
    @login_required
    def apply_leave():
        data = json_body()
        leave = container.leave_service.apply(
            requester_id=current_user().employee_id,
            date_from=required_date(data.get("date_from"), "Start date"),
            date_to=optional_date(data.get("date_to")),
            reason=data.get("reason", ""),
            approver_id=optional_int(data.get("approver_id"), "Approver"),
            approver_name=data.get("approver_name"),
            is_half_day=bool(data.get("is_half_day")),
            half_day_type=data.get("half_day_type"),
        )
        return ok({"leave": LeaveService.to_ui(leave)}, 201)

    @app.route("/api/leaves/<int:leave_id>/decision", methods=["POST"], endpoint="decide_leave")
    @login_required
    def decide_leave(leave_id: int):
        data = json_body()
        leave = container.leave_service.decide(
            actor_id=current_user().employee_id,
            leave_id=leave_id,
            approve=bool(data.get("approve")),
            response=data.get("response", ""),
        )
        return ok({"leave": LeaveService.to_ui(leave)})

    @app.route("/api/leaves/<int:leave_id>/cancel", methods=["POST"], endpoint="request_leave_cancellation")
    @login_required
    def request_leave_cancellation(leave_id: int):
        leave = container.leave_service.request_cancellation(
            requester_id=current_user().employee_id,
            leave_id=leave_id,
        )
        return ok({"leave": LeaveService.to_ui(leave)})

    @app.route("/api/leaves/<int:leave_id>/cancellation", methods=["POST"], endpoint="resolve_leave_cancellation")
    @login_required
    def resolve_leave_cancellation(leave_id: int):
        data = json_body()
        resolve = container.leave_service.confirm_cancellation if data.get("confirm") else container.leave_service.deny_cancellation
        leave = resolve(actor_id=current_user().employee_id, leave_id=leave_id, response=data.get("response", ""))
        return ok({"leave": LeaveService.to_ui(leave)})

    @app.route("/api/team/leaves", methods=["GET"], endpoint="team_leaves")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def team_leaves():
        return jsonify([LeaveService.to_ui(lv) for lv in container.leave_service.list_leaves()])
