"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, models and
application services.

The translation to the JSON error envelope is handled by
``vidtube/core/errors.py`` via :func:`vidtube.core.errors.translate_service_error`.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g. ``uq_users_email``).

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.

    Notes
    -----
    PostgreSQL reports the constraint name. SQLite only reports the columns
    (``UNIQUE constraint failed: users.email``), so callers may pass either
    form.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    """


class InvalidInputError(ServiceError):
    """Missing, blank or malformed input (the API's ``ValidationError``)."""


class UnauthenticatedError(ServiceError):
    """No credential was presented, or the credential was rejected."""


class InvalidTokenError(UnauthenticatedError):
    """Token signature, expiry, type or subject verification failed."""


class TokenReuseError(InvalidTokenError):
    """A refresh token was presented that is no longer the active one."""


class AuthorizationError(ServiceError):
    """Authenticated caller is not allowed to act on the resource."""


class ServerError(ServiceError):
    """Persistence or external-service failure."""


class MediaUploadError(ServerError):
    """The media collaborator failed to stage or store a file."""


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Video").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    :param message: Optional client-facing message overriding the default.
    :type message: str | None
    """

    entity: str
    key: str | int
    message: str | None = None

    def __str__(self) -> str:
        return self.message or f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail
