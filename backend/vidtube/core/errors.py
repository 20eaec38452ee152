"""Centralized JSON error handling for the API.

Every failure leaves the process as ``{"statusCode": ..., "message": ...}``
with the matching HTTP status, whether it was raised as an :class:`APIError`,
a service-layer exception, a schema validation error or something unexpected.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, current_app, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException


log = logging.getLogger(__name__)


def error_body(status: int, message: str, *, errors: Any = None) -> dict[str, Any]:
    """
    Build the error envelope.

    :param status: HTTP status code.
    :param message: Human-readable error summary (safe for clients).
    :param errors: Optional structured field errors.
    :returns: Envelope dictionary.
    :rtype: dict
    """
    body: dict[str, Any] = {"statusCode": int(status), "message": message}
    if errors:
        body["errors"] = errors
    return body


def _error_response(status: int, message: str, *, errors: Any = None) -> tuple[Response, int]:
    return jsonify(error_body(status, message, errors=errors)), int(status)


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    errors : Any, optional
        Optional structured payload (e.g., validation messages) included in the
        response body.
    """

    def __init__(self, message: str, status_code: int = 400, errors: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.errors = errors


class BadRequest(APIError):
    """400 for missing, blank or malformed input."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST)


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized request!") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


class Forbidden(APIError):
    """403 when the caller is authenticated but not permitted."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN)


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND)


class Conflict(APIError):
    """409 for uniqueness/constraint collisions."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT)


class InternalError(APIError):
    """500 for persistence or upstream failures."""

    def __init__(self, message: str = "Internal Server Error") -> None:
        super().__init__(message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


def translate_service_error(exc: Exception) -> Exception:
    """
    Map service-level errors to API-level (HTTP) errors.

    :param exc: Exception raised within the service layer.
    :returns: Translated :class:`APIError`, or ``exc`` untouched when unknown.
    """
    from vidtube.services._shared import errors as svc

    if isinstance(exc, svc.InvalidInputError):
        return BadRequest(str(exc))
    if isinstance(exc, svc.UnauthenticatedError):
        # Covers InvalidTokenError and TokenReuseError
        return Unauthorized(str(exc))
    if isinstance(exc, svc.AuthorizationError):
        return Forbidden(str(exc))
    if isinstance(exc, svc.NotFoundError):
        return NotFound(str(exc))
    if isinstance(exc, svc.ConflictError):
        return Conflict(str(exc))
    if isinstance(exc, svc.ServerError):
        return InternalError(str(exc))
    if isinstance(exc, svc.ServiceError):
        return BadRequest(str(exc))
    return exc


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - 5xx are logged with ``exc_info``; 4xx as warnings.
    - The request id travels in the ``X-Request-ID`` response header.
    """
    from vidtube.services._shared.errors import ServiceError

    def _log(status: int, kind: str, message: str, *, exc_info: bool = False) -> None:
        level = log.error if status >= 500 else log.warning
        level(
            "%s: status=%s msg=%s",
            kind,
            status,
            message,
            extra={"path": request.path if request else None},
            exc_info=exc_info,
        )

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _log(err.status_code, "APIError", err.message)
        return _error_response(err.status_code, err.message, errors=err.errors)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        translated = translate_service_error(err)
        if not isinstance(translated, APIError):  # pragma: no cover - exhaustive mapping
            translated = InternalError(str(err))
        _log(translated.status_code, type(err).__name__, translated.message, exc_info=translated.status_code >= 500)
        return _error_response(translated.status_code, translated.message)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        _log(status, "HTTPException", message)
        return _error_response(status, message)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        messages = err.normalized_messages()
        message = _first_validation_message(messages) or "Validation failed"
        _log(HTTPStatus.BAD_REQUEST, "ValidationError", message)
        return _error_response(HTTPStatus.BAD_REQUEST, message, errors=messages)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Raw DB errors never reach clients
        _log(HTTPStatus.CONFLICT, "IntegrityError", str(err.orig), exc_info=True)
        return _error_response(HTTPStatus.CONFLICT, "Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        _log(HTTPStatus.SERVICE_UNAVAILABLE, "OperationalError", str(err.orig), exc_info=True)
        return _error_response(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        raw = str(err).strip()
        expose = current_app.config.get("EXPOSE_ERROR_MESSAGES", True)
        message = raw if (expose and raw) else "Something went wrong"
        _log(HTTPStatus.INTERNAL_SERVER_ERROR, "Unhandled exception", raw or type(err).__name__, exc_info=True)
        return _error_response(HTTPStatus.INTERNAL_SERVER_ERROR, message)


def _first_validation_message(messages: Any) -> str | None:
    """Return ``"<field>: <first message>"`` from marshmallow's nested errors."""
    if isinstance(messages, dict):
        for field, value in messages.items():
            inner = _first_validation_message(value)
            if inner:
                return inner if field == "_schema" else f"{field}: {inner}"
    elif isinstance(messages, list):
        for value in messages:
            inner = _first_validation_message(value)
            if inner:
                return inner
    elif isinstance(messages, str):
        return messages
    return None
