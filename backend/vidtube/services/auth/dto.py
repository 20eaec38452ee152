"""DTOs for token issuance and the auth gate."""

from __future__ import annotations

from dataclasses import dataclass

from vidtube.services.identity.dto import UserPublicOut


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Credentials for login; either ``username`` or ``email`` must be given.

    :param password: Raw password.
    :type password: str
    """

    password: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class AuthSession:
    """Result of a successful login: public user plus a fresh token pair."""

    user: UserPublicOut
    tokens: TokenPair
