from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..common.web import current_user, json_body, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role
from .service import BreakService


def register(app: Flask, container: Container) -> None:
    @app.route("/api/breaks/today", methods=["GET"], endpoint="breaks_today")
    @login_required
    def breaks_today():
        breaks = container.break_service.today(current_user().employee_id, now_local().date())
        return jsonify([BreakService.to_ui(b) for b in breaks])

    @app.route("/api/breaks", methods=["POST"], endpoint="start_break")
    @login_required
    def start_break():
        record = container.break_service.start(current_user().employee_id, json_body().get("break_type", ""))
        return ok({"break": BreakService.to_ui(record)}, 201)

    @app.route("/api/breaks/<int:break_id>/end", methods=["POST"], endpoint="end_break")
    @login_required
    def end_break(break_id: int):
        record = container.break_service.end(current_user().employee_id, break_id)
        return ok({"break": BreakService.to_ui(record)})

    @app.route("/api/team/breaks", methods=["GET"], endpoint="team_breaks")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def team_breaks():
        return jsonify([BreakService.to_ui(b) for b in container.break_service.list_all()])
