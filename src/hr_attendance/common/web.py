from __future__ import annotations

import json
import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import DomainError
from ..users.service import SessionUser

logger = logging.getLogger(__name__)


def json_response(msg: str, *, data: Any = None, status: bool = True, code: int = 200):
    body: dict[str, Any] = {"msg": msg, "status": status}
    if data is not None:
        body["data"] = data
    return jsonify(body), code


def error_response(msg: str, code: int):
    return json_response(msg, status=False, code=code)


def current_user() -> Optional[SessionUser]:
    if "user_id" not in session:
        return None
    return SessionUser(
        user_id=int(session["user_id"]),
        full_name=session.get("name", ""),
        role=Role(session.get("role", Role.USER.value)),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return error_response("Not authorized, no session", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return error_response("Not authorized, no session", 401)
        if not user.is_admin:
            return error_response("Not authorized, you are not an admin", 401)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("%s: %s", type(e).__name__, e)
        return error_response(str(e), e.status_code)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return error_response(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error")
        if bool(app.config.get("DEBUG", False)):
            return error_response(f"Internal server error: {e}", 500)
        return error_response("Internal server error", 500)


def json_field(value: Any) -> Any:
    """Decode an object sent as a JSON string inside a multipart body.

    Malformed JSON is returned unchanged so field validation reports it.
    """
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value
