"""
TokenService
============

Issues, rotates and revokes the access/refresh token pair.

* Access tokens are stateless and carry the public identity claims.
* Exactly one refresh token per user is stored; login and rotation overwrite
  it, logout clears it. A presented refresh token that differs from the
  stored one is treated as reuse.
"""

from __future__ import annotations

import hmac
import logging

from vidtube.models.user import User
from vidtube.services._shared.base import BaseService, ServiceContext
from vidtube.services._shared.errors import (
    InvalidInputError,
    InvalidTokenError,
    NotFoundError,
    TokenReuseError,
    UnauthenticatedError,
)
from vidtube.services._shared.ports import TokenProvider
from vidtube.services.auth.dto import AuthSession, LoginIn, TokenPair
from vidtube.services.identity.dto import UserPublicOut
from vidtube.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)


class TokenService(BaseService):
    """
    :param tokens: Signing port (built from immutable ``TokenSettings``).
    :param ctx: Request context.
    """

    def __init__(self, *, tokens: TokenProvider, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.tokens = tokens

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access_token(self, user: User | UserPublicOut) -> str:
        """Sign an access token with the user's public identity claims."""
        return self.tokens.create_access_token(
            identity=user.id,
            additional_claims={
                "email": user.email,
                "username": user.username,
                "fullName": user.full_name,
            },
        )

    def issue_refresh_token(self, user_id: int) -> str:
        """Sign a refresh token and store it as the user's only active one.

        :raises NotFoundError: If the user does not exist.
        """
        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id, "User does not exist")
            return self._store_refresh(uow, user)

    def _store_refresh(self, uow: SQLAlchemyUnitOfWork, user: User) -> str:
        token = self.tokens.create_refresh_token(identity=user.id)
        uow.users.set_refresh_token(user, token)
        return token

    def _issue_pair(self, uow: SQLAlchemyUnitOfWork, user: User) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access_token(user),
            refresh_token=self._store_refresh(uow, user),
        )

    # ------------------------------------------------------------------ #
    # Login / rotation / revocation
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AuthSession:
        """
        Verify credentials and issue a new pair.

        :raises InvalidInputError: Neither username nor email, or blank password.
        :raises NotFoundError: No matching user.
        :raises UnauthenticatedError: Wrong password.
        """
        if not (dto.username and dto.username.strip()) and not (dto.email and dto.email.strip()):
            raise InvalidInputError("username or email is required")
        if not dto.password:
            raise InvalidInputError("password is required")

        with self.rw_uow() as uow:
            user = uow.users.find_by_identifier(username=dto.username, email=dto.email)
            if user is None:
                raise NotFoundError("User", dto.username or dto.email or "", "User does not exist")
            if not user.is_password_correct(dto.password):
                raise UnauthenticatedError("Invalid user credentials")
            pair = self._issue_pair(uow, user)
            session = AuthSession(user=UserPublicOut.from_model(user), tokens=pair)

        logger.info("User logged in", extra={"user_id": session.user.id})
        return session

    def rotate(self, refresh_token: str | None) -> TokenPair:
        """
        Exchange a valid, current refresh token for a new pair.

        :raises UnauthenticatedError: No token presented.
        :raises InvalidTokenError: Bad signature, expired, wrong type or
            unknown subject.
        :raises TokenReuseError: Token is not the stored one.
        """
        if not refresh_token:
            raise UnauthenticatedError("Unauthorized request")

        claims = self.tokens.decode(refresh_token, expected_type="refresh")
        user_id = _subject_id(claims)

        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is None:
                raise InvalidTokenError("Invalid refresh token")
            stored = user.refresh_token or ""
            if not hmac.compare_digest(stored.encode(), refresh_token.encode()):
                logger.warning("Refresh token reuse rejected", extra={"user_id": user_id})
                raise TokenReuseError("Refresh token is expired or used")
            pair = self._issue_pair(uow, user)

        logger.info("Refresh token rotated", extra={"user_id": user_id})
        return pair

    def revoke(self, user_id: int) -> None:
        """Clear the stored refresh token; idempotent, unknown users included."""
        with self.rw_uow() as uow:
            user = uow.users.get_for_update(user_id)
            if user is not None and user.refresh_token is not None:
                uow.users.set_refresh_token(user, None)
        logger.info("Refresh token revoked", extra={"user_id": user_id})


def _subject_id(claims: dict) -> int:
    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidTokenError("Invalid token subject") from exc
