from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from ..security.policy import Action, authorize
from .pagination import PageRequest
from .serialization import to_json

logger = logging.getLogger(__name__)


def ok(data: Any = None, message: str = "OK", status: int = 200):
    return jsonify({"message": message, "data": to_json(data)}), status


def created(data: Any = None, message: str = "Created"):
    return ok(data, message, 201)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def paging_args() -> PageRequest:
    return PageRequest.from_args(request.args)


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Access token is missing or malformed")
    return token.strip()


def token_required(auth_service):
    """Decorator factory: resolves the bearer token into ``g.caller``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.caller = auth_service.authenticate_token(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_caller():
    return g.caller


def self_employee_id() -> str:
    caller = current_caller()
    authorize(caller, Action.SELF_SERVICE)
    if not caller.employee_id:
        raise ValidationError("This account is not linked to an employee record")
    return caller.employee_id


def _error_payload(label: str, message: str, details=None):
    body = {"error": label, "message": message}
    if details:
        body["details"] = details
    return jsonify(body)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        if exc.status_code >= 500:
            app.logger.exception("Unhandled domain error")
        else:
            logger.info("%s %s -> %s: %s", request.method, request.path, exc.status_code, exc.message)
        return _error_payload(exc.label, exc.message, exc.details), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        label = "Not Found" if exc.code == 404 else (exc.name or "Error")
        message = "Route not found" if exc.code == 404 else (exc.description or label)
        return _error_payload(label, message), exc.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = str(exc) if app.config.get("DEBUG") else "Something went wrong"
        return _error_payload("Internal Server Error", message), 500
