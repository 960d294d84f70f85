"""Helpers shared by the Flask controllers: auth decorators, payload parsing, error mapping."""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, current_app, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NothingToExportError,
    NotFoundError,
    ValidationError,
)
from ..session.context import FlaskSessionStore, SessionContext
from ..users.service import SessionUser
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

CONTAINER_EXTENSION = "teamtime.container"

_STATUS_CODES = [
    (NothingToExportError, 404),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
]


def session_context() -> SessionContext:
    ctx = getattr(g, "session_context", None)
    if ctx is None:
        ctx = SessionContext(FlaskSessionStore())
        g.session_context = ctx
    return ctx


def current_user() -> SessionUser:
    """Only valid inside views wrapped by ``login_required``."""
    return g.current_user


def _container():
    return current_app.extensions[CONTAINER_EXTENSION]


def _denied(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def _load_user() -> Optional[SessionUser]:
    """The logged-in account as currently stored, not as cached in the cookie.

    A session whose account was deleted or deactivated is ended here.
    """
    ctx = session_context()
    cached = ctx.current_user
    if cached is None:
        return None

    user = _container().auth_service.refresh(cached)
    if user is None:
        logger.info("Ending session of employee %s (account removed or inactive)", cached.employee_id)
        ctx.logout()
    elif user != cached:
        ctx.login(user)
    return user


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = _load_user()
        if user is None:
            return _denied("Please log in to continue", 401)
        g.current_user = user
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = set(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = _load_user()
            if user is None:
                return _denied("Please log in to continue", 401)
            if user.role not in allowed:
                return _denied("You do not have access to this page", 403)
            g.current_user = user
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def optional_date(value) -> Optional[date]:
    if value in (None, ""):
        return None
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError("Dates must be in YYYY-MM-DD format")


def required_date(value, field_name: str) -> date:
    parsed = optional_date(value)
    if parsed is None:
        raise ValidationError(f"{field_name} is required")
    return parsed


def optional_int(value, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be a whole number")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")


def required_int(value, field_name: str) -> int:
    parsed = optional_int(value, field_name)
    if parsed is None:
        raise ValidationError(f"{field_name} is required")
    return parsed


def ok(payload: Optional[dict] = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = next((code for cls, code in _STATUS_CODES if isinstance(e, cls)), 400)
        return jsonify({"success": False, "message": str(e)}), status

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "message": e.description}), e.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = f"Internal error: {e}" if app.config.get("DEBUG") else "Something went wrong. Please try again."
        return jsonify({"success": False, "message": message}), 500
