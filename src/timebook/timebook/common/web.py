"""Shared helpers for the Flask controller layer (session guards and JSON error mapping)."""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def error_response(exc: DomainError):
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return json_error(str(exc), status)
    return json_error(str(exc), 400)


def unexpected_error(action: str):
    current_app.logger.exception("Unexpected error while %s", action)
    if current_app.config.get("DEBUG"):
        return json_error(f"Internal error while {action}", 500)
    return json_error("Internal error", 500)


def current_role() -> Optional[Role]:
    role = session.get("role")
    try:
        return Role(role) if role else None
    except ValueError:
        return None


def current_user_id() -> str:
    return str(session["user_id"])


def form_value(name: str, default: str = "") -> str:
    """Read a field from a JSON body or a form post."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        value = payload.get(name, default)
    else:
        value = request.form.get(name, default)
    return "" if value is None else str(value)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role, denied_status: int = 403):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Please sign in to continue", 401)
            if current_role() not in allowed:
                return json_error("Unauthorized", denied_status)
            return view(*args, **kwargs)

        return wrapper

    return decorator
