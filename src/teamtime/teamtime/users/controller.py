from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum
from ..common.web import current_user, json_body, login_required, ok, roles_required, session_context
from ..container import Container
from ..core.enums import EmployeeStatus, Role
from .service import SessionUser, public_profile

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.permanent = bool(data.get("remember_me"))
        session_context().login(user)
        return ok({"user": user.to_dict()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session_context().logout()
        return ok({"message": "Logged out"})

    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = json_body()
        employee_id = container.auth_service.signup(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            phone=data.get("phone", ""),
            today=now_local().date(),
        )
        employee = container.employee_service.get(employee_id)
        session_context().login(SessionUser.from_employee(employee))
        return ok({"user": public_profile(employee)}, 201)

    @app.route("/api/auth/reset-password/lookup", methods=["POST"], endpoint="reset_password_lookup")
    def reset_password_lookup():
        employee = container.auth_service.find_for_reset(json_body().get("phone", ""))
        return ok({"name": employee.name})

    @app.route("/api/auth/reset-password", methods=["POST"], endpoint="reset_password")
    def reset_password():
        data = json_body()
        container.auth_service.reset_password(
            phone=data.get("phone", ""),
            new_password=data.get("new_password", ""),
            confirm_password=data.get("confirm_password", ""),
        )
        return ok({"message": "Password updated. You can log in now."})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        employee = container.employee_service.get(current_user().employee_id)
        return ok({"user": public_profile(employee), "theme": session_context().theme})

    @app.route("/api/me", methods=["PATCH"], endpoint="update_me")
    @login_required
    def update_me():
        user = current_user()
        changes = {k: v for k, v in json_body().items() if k != "role"}
        employee = container.employee_service.update_profile(
            current_user_id=user.employee_id,
            current_role=user.role,
            employee_id=user.employee_id,
            changes=changes,
        )
        # keep the cached name in sync
        session_context().login(SessionUser.from_employee(employee))
        return ok({"user": public_profile(employee)})

    @app.route("/api/me/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = json_body()
        container.employee_service.change_password(
            employee_id=current_user().employee_id,
            current_password=data.get("current_password", ""),
            new_password=data.get("new_password", ""),
        )
        return ok({"message": "Password changed"})

    @app.route("/api/me/theme", methods=["POST"], endpoint="set_theme")
    @login_required
    def set_theme():
        session_context().set_theme(json_body().get("theme", ""))
        return ok({"theme": session_context().theme})

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        employees = container.employee_service.list_all()
        return jsonify([public_profile(e) for e in employees])

    @app.route("/api/employees/approvers", methods=["GET"], endpoint="eligible_approvers")
    @login_required
    def eligible_approvers():
        approvers = container.employee_service.eligible_approvers(current_user().employee_id)
        return jsonify([public_profile(e) for e in approvers])

    @app.route("/api/employees/assignable", methods=["GET"], endpoint="assignable_employees")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def assignable():
        employees = container.employee_service.assignable_employees(current_user().employee_id)
        return jsonify([public_profile(e) for e in employees])

    @app.route("/api/admin/employees", methods=["POST"], endpoint="add_employee")
    @roles_required(Role.ADMIN)
    def add_employee():
        data = json_body()
        employee_id = container.employee_service.provision(
            current_role=current_user().role,
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=parse_enum(Role, data.get("role", Role.EMPLOYEE.value), "Role"),
            phone=data.get("phone", ""),
            designation=data.get("designation", ""),
            today=now_local().date(),
        )
        return ok({"user": public_profile(container.employee_service.get(employee_id))}, 201)

    @app.route("/api/admin/employees/<int:employee_id>", methods=["PATCH"], endpoint="edit_employee")
    @roles_required(Role.ADMIN)
    def edit_employee(employee_id: int):
        user = current_user()
        employee = container.employee_service.update_profile(
            current_user_id=user.employee_id,
            current_role=user.role,
            employee_id=employee_id,
            changes=json_body(),
        )
        return ok({"user": public_profile(employee)})

    @app.route("/api/admin/employees/<int:employee_id>/status", methods=["POST"], endpoint="set_employee_status")
    @roles_required(Role.ADMIN)
    def set_employee_status(employee_id: int):
        status = parse_enum(EmployeeStatus, json_body().get("status"), "Status")
        container.employee_service.set_status(current_role=current_user().role, employee_id=employee_id, status=status)
        return ok({"employee_id": employee_id, "status": status.value})

    @app.route("/api/admin/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @roles_required(Role.ADMIN)
    def delete_employee(employee_id: int):
        user = current_user()
        container.employee_service.delete(
            current_role=user.role,
            current_user_id=user.employee_id,
            employee_id=employee_id,
        )
        logger.info("Admin %s removed employee %s", user.employee_id, employee_id)
        return ok({"employee_id": employee_id})
