from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user, json_body, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role
from .model import CompanySettings


def _to_dict(s: CompanySettings) -> dict:
    return {
        "latitude": s.latitude,
        "longitude": s.longitude,
        "radius_m": s.radius_m,
        "location_name": s.location_name,
        "team_name": s.team_name,
        "updated_at": s.updated_at.isoformat() if s.updated_at else None,
        "is_default": s.is_default,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="get_settings")
    @login_required
    def get_settings():
        payload = _to_dict(container.settings_service.get())
        payload["geolocation_timeout_seconds"] = app.config["GEOLOCATION_TIMEOUT_SECONDS"]
        return jsonify(payload)

    @app.route("/api/settings", methods=["PUT"], endpoint="update_settings")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def update_settings():
        data = json_body()
        settings = container.settings_service.update(
            current_role=current_user().role,
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            radius_m=data.get("radius_m"),
            location_name=data.get("location_name", ""),
            team_name=data.get("team_name"),
        )
        return ok({"settings": _to_dict(settings)})
