"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

_DURATION_RE: Final = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[Mapping[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}

# Load .env during development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_duration(value: str | int | timedelta) -> timedelta:
    """Parse token lifetimes such as ``"15m"``, ``"1d"`` or ``"3600"``.

    Parameters
    ----------
    value: str | int | timedelta
        Raw duration. Integers and bare numeric strings are seconds; a single
        unit suffix (``s``, ``m``, ``h``, ``d``, ``w``) is accepted.

    Returns
    -------
    datetime.timedelta
        Parsed, strictly positive duration.

    Raises
    ------
    ValueError
        If the value cannot be parsed or is not positive.
    """
    if isinstance(value, timedelta):
        parsed = value
    elif isinstance(value, int):
        parsed = timedelta(seconds=value)
    else:
        match = _DURATION_RE.match(str(value))
        if match is None:
            raise ValueError(f"Invalid duration: {value!r}")
        amount, unit = match.groups()
        parsed = timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})
    if parsed <= timedelta(0):
        raise ValueError(f"Duration must be positive: {value!r}")
    return parsed


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    ACCESS_TOKEN_SECRET / REFRESH_TOKEN_SECRET: str
        Independent HMAC secrets for the two token classes.
    ACCESS_TOKEN_EXPIRY / REFRESH_TOKEN_EXPIRY: str
        Token lifetimes parsed by :func:`parse_duration`.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    CORS_ORIGINS: str
        Comma-separated list of allowed origins (``CORS_ORIGIN`` env var).
    USE_PROXYFIX / PROXY_FIX_HOPS: bool / int
        Trust ``X-Forwarded-*`` headers from this many reverse proxy hops.
    COOKIE_SECURE: bool
        Sets the ``Secure`` flag on auth cookies.
    MEDIA_BACKEND: str
        ``"s3"`` (boto3) or ``"memory"`` (tests, local demos).
    UPLOAD_TEMP_DIR: str
        Local staging directory for multipart uploads.
    EXPOSE_ERROR_MESSAGES: bool
        When ``True`` unexpected 500s carry the raw exception message.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    ACCESS_TOKEN_EXPIRY = os.getenv("ACCESS_TOKEN_EXPIRY", "1d")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    REFRESH_TOKEN_EXPIRY = os.getenv("REFRESH_TOKEN_EXPIRY", "10d")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    COOKIE_SECURE = env_bool("COOKIE_SECURE", True)

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(512 * 1024 * 1024)))
    EXPOSE_ERROR_MESSAGES = env_bool("EXPOSE_ERROR_MESSAGES", True)

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGIN", "http://localhost:5173")

    # Reverse proxy
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXY_FIX_HOPS = int(os.getenv("PROXY_FIX_HOPS", "1"))

    # Media storage
    MEDIA_BACKEND = os.getenv("MEDIA_BACKEND", "s3")
    MEDIA_BUCKET = os.getenv("MEDIA_BUCKET", "vidtube-media")
    MEDIA_ENDPOINT_URL = os.getenv("MEDIA_ENDPOINT_URL")
    MEDIA_REGION = os.getenv("MEDIA_REGION", "us-east-1")
    MEDIA_ACCESS_KEY = os.getenv("MEDIA_ACCESS_KEY")
    MEDIA_SECRET_KEY = os.getenv("MEDIA_SECRET_KEY")
    MEDIA_PUBLIC_BASE_URL = os.getenv("MEDIA_PUBLIC_BASE_URL")
    UPLOAD_TEMP_DIR = os.getenv("UPLOAD_TEMP_DIR", "./public/temp")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and allows auth cookies over plain HTTP.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    COOKIE_SECURE = env_bool("COOKIE_SECURE", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Swaps object storage for the in-memory uploader.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    ACCESS_TOKEN_SECRET = "test-access-secret"
    REFRESH_TOKEN_SECRET = "test-refresh-secret"
    ACCESS_TOKEN_EXPIRY = "15m"
    REFRESH_TOKEN_EXPIRY = "7d"
    COOKIE_SECURE = False
    MEDIA_BACKEND = "memory"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled and hides raw exception messages.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    EXPOSE_ERROR_MESSAGES = env_bool("EXPOSE_ERROR_MESSAGES", False)


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
