from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user, json_body, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/announcements", methods=["GET"], endpoint="list_announcements")
    @login_required
    def list_announcements():
        return jsonify([a.to_dict() for a in container.announcement_service.list_all()])

    @app.route("/api/announcements", methods=["POST"], endpoint="create_announcement")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def create_announcement():
        data = json_body()
        user = current_user()
        announcement = container.announcement_service.create(
            current_role=user.role,
            author_name=user.name,
            message=data.get("message", ""),
            type=data.get("type", "info"),
        )
        return ok({"announcement": announcement.to_dict()}, 201)

    @app.route("/api/announcements/<int:announcement_id>", methods=["DELETE"], endpoint="delete_announcement")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def delete_announcement(announcement_id: int):
        container.announcement_service.delete(current_role=current_user().role, announcement_id=announcement_id)
        return ok({"announcement_id": announcement_id})
