"""Immutable runtime settings built once from the Flask config.

Adapters that talk to external services (token signing, object storage)
receive these dataclasses explicitly instead of reading ``current_app.config``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from flask import Flask, current_app

from vidtube.core.config import parse_duration

EXTENSION_KEY = "vidtube.settings"


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """
    Signing material and lifetimes for both token classes.

    :param access_secret: HMAC secret for access tokens.
    :param access_expires: Access token lifetime.
    :param refresh_secret: HMAC secret for refresh tokens.
    :param refresh_expires: Refresh token lifetime.
    :param algorithm: JWS algorithm shared by both token classes.
    """

    access_secret: str
    access_expires: timedelta
    refresh_secret: str
    refresh_expires: timedelta
    algorithm: str = "HS256"


@dataclass(frozen=True, slots=True)
class MediaSettings:
    """
    Object storage coordinates for uploaded media.

    :param backend: ``"s3"`` or ``"memory"``.
    :param bucket: Target bucket name.
    :param temp_dir: Local staging directory.
    :param public_base_url: Base URL used to build public media links.
    """

    backend: str
    bucket: str
    temp_dir: str
    endpoint_url: str | None = None
    region: str | None = None
    access_key: str | None = None
    secret_key: str | None = None
    public_base_url: str | None = None


@dataclass(frozen=True, slots=True)
class Settings:
    token: TokenSettings
    media: MediaSettings
    cookie_secure: bool = True


def load_settings(config: Mapping[str, Any]) -> Settings:
    """Build :class:`Settings` from a Flask config mapping.

    :param config: Flask ``app.config`` or any mapping with the same keys.
    :returns: Frozen settings tree.
    :raises ValueError: On malformed durations or missing secrets.
    """
    access_secret = str(config.get("ACCESS_TOKEN_SECRET") or "")
    refresh_secret = str(config.get("REFRESH_TOKEN_SECRET") or "")
    if not access_secret or not refresh_secret:
        raise ValueError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must be set.")
    if access_secret == refresh_secret:
        raise ValueError("Access and refresh token secrets must differ.")

    token = TokenSettings(
        access_secret=access_secret,
        access_expires=parse_duration(config.get("ACCESS_TOKEN_EXPIRY", "1d")),
        refresh_secret=refresh_secret,
        refresh_expires=parse_duration(config.get("REFRESH_TOKEN_EXPIRY", "10d")),
        algorithm=str(config.get("JWT_ALGORITHM", "HS256")),
    )
    media = MediaSettings(
        backend=str(config.get("MEDIA_BACKEND", "s3")).strip().lower(),
        bucket=str(config.get("MEDIA_BUCKET", "")),
        temp_dir=str(config.get("UPLOAD_TEMP_DIR", "./public/temp")),
        endpoint_url=config.get("MEDIA_ENDPOINT_URL"),
        region=config.get("MEDIA_REGION"),
        access_key=config.get("MEDIA_ACCESS_KEY"),
        secret_key=config.get("MEDIA_SECRET_KEY"),
        public_base_url=config.get("MEDIA_PUBLIC_BASE_URL"),
    )
    return Settings(token=token, media=media, cookie_secure=bool(config.get("COOKIE_SECURE", True)))


def init_app(app: Flask) -> None:
    """Freeze settings for the lifetime of ``app``."""
    app.extensions[EXTENSION_KEY] = load_settings(app.config)


def get_settings() -> Settings:
    """Return the settings bound to the current application."""
    return current_app.extensions[EXTENSION_KEY]
