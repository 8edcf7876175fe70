"""Shared helpers for the JSON controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Optional

from flask import current_app, jsonify, request, session

from ..core.actor import Actor
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, NotFoundError, ValidationError
from .serialization import to_json

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def ok(data: Any = None, status: int = 200, **extra: Any):
    body = {"success": True, "data": to_json(data)}
    body.update(extra)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error(e: DomainError):
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(e, exc_type):
            return fail(str(e), status)
    return fail(str(e), 400)


def server_error(action: str):
    logger.exception("Unexpected error while %s", action)
    return fail(f"Internal error while {action}", 500)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _signed_in_user():
    """Reload the session's account; a deleted or deactivated account signs out."""
    if "user_id" not in session:
        return None
    users = current_app.extensions["payroll_ledger"].users_repo
    user = users.get_by_id(int(session["user_id"]))
    if not user or not user.is_active:
        logger.info("Signing out user %s: account missing or inactive", session.get("user_id"))
        session.clear()
        return None

    session["name"] = user.display_name
    session["role"] = user.role.value
    session["staff_id"] = user.staff_id
    return user


def login_required(view: Callable):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not _signed_in_user():
            return fail("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def owner_required(view: Callable):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = _signed_in_user()
        if not user:
            return fail("Please sign in to continue", 401)
        if user.role != Role.OWNER:
            return fail("You do not have permission", 403)
        return view(*args, **kwargs)

    return wrapper


def current_actor() -> Actor:
    return Actor(
        user_id=session.get("user_id"),
        name=session.get("name") or "",
        role=Role(session.get("role")),
        staff_id=session.get("staff_id"),
    )


def optional_int_arg(name: str) -> Optional[int]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")
