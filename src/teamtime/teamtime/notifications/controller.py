from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="list_notifications")
    @login_required
    def list_notifications():
        recipient_id = current_user().employee_id
        notifications = container.notification_service.list_for(recipient_id)
        return jsonify(
            {
                "unread": sum(1 for n in notifications if not n.read),
                "notifications": [n.to_dict() for n in notifications],
            }
        )

    @app.route("/api/notifications/unread-count", methods=["GET"], endpoint="unread_notifications")
    @login_required
    def unread_notifications():
        return jsonify({"unread": container.notification_service.unread_count(current_user().employee_id)})

    @app.route("/api/notifications/<int:notification_id>/read", methods=["POST"], endpoint="mark_notification_read")
    @login_required
    def mark_notification_read(notification_id: int):
        notification = container.notification_service.mark_read(current_user().employee_id, notification_id)
        return ok({"notification": notification.to_dict()})

    @app.route("/api/notifications", methods=["DELETE"], endpoint="clear_notifications")
    @login_required
    def clear_notifications():
        removed = container.notification_service.clear_all(current_user().employee_id)
        return ok({"removed": removed})
