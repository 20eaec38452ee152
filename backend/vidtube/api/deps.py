"""Shared API helpers: envelopes, auth, pagination, cookies and timing."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from vidtube.core.logger import ensure_request_id
from vidtube.core.settings import get_settings
from vidtube.infra import get_media_uploader, get_token_provider
from vidtube.repositories.base import Pagination
from vidtube.schemas.common import PaginationQuerySchema
from vidtube.services._shared.base import ServiceContext
from vidtube.services._shared.validation import parse_id
from vidtube.services.auth.dto import TokenPair
from vidtube.services.auth.gate import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    AuthGate,
    extract_access_token,
)
from vidtube.services.identity.dto import UserPublicOut

F = TypeVar("F", bound=Callable[..., Any])

__all__ = [
    "api_response",
    "clear_auth_cookies",
    "current_user",
    "media",
    "parse_pagination",
    "path_id",
    "require_auth",
    "service_ctx",
    "set_auth_cookies",
    "timing",
    "tokens",
]


def api_response(data: Any = None, message: str = "Success", *, status: int = 200) -> Response:
    """Return the success envelope ``{statusCode, data, message, success}``."""
    response = jsonify(
        {"statusCode": status, "data": data, "message": message, "success": status < 400}
    )
    response.status_code = status
    return response


def parse_pagination() -> Pagination:
    """Parse ``page``/``limit``/``sortBy``/``sortType`` from ``request.args``."""
    data = PaginationQuerySchema().load(request.args)
    return Pagination(page=data["page"], limit=data["limit"], sort=data["sort"])


def path_id(value: Any, name: str) -> int:
    """Validate an id taken from the URL; malformed ids are a 400."""
    return parse_id(value, name)


# ------------------------------- Adapters ------------------------------------


def tokens():
    return get_token_provider()


def media():
    return get_media_uploader()


# --------------------------------- Auth --------------------------------------


def require_auth(func: F) -> F:
    """Resolve the caller via :class:`AuthGate` and store it on ``g.current_user``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = extract_access_token(request.cookies, request.headers.get("Authorization"))
        g.current_user = AuthGate(tokens=tokens()).authenticate(token)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user() -> UserPublicOut:
    return g.current_user


def service_ctx() -> ServiceContext:
    user = getattr(g, "current_user", None)
    return ServiceContext(
        actor_id=user.id if user is not None else None,
        request_id=ensure_request_id(),
    )


# -------------------------------- Cookies ------------------------------------


def set_auth_cookies(response: Response, pair: TokenPair) -> Response:
    secure = get_settings().cookie_secure
    for name, value in ((ACCESS_COOKIE, pair.access_token), (REFRESH_COOKIE, pair.refresh_token)):
        response.set_cookie(name, value, httponly=True, secure=secure, samesite="Lax")
    return response


def clear_auth_cookies(response: Response) -> Response:
    secure = get_settings().cookie_secure
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(name, httponly=True, secure=secure, samesite="Lax")
    return response


# -------------------------------- Timing -------------------------------------


def timing(func: F) -> F:
    """Log handler execution time in milliseconds at DEBUG."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
