# vidtube/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import jwt

from vidtube.core.settings import TokenSettings
from vidtube.services._shared.errors import InvalidTokenError
from vidtube.services._shared.ports import TokenProvider, TokenType


@dataclass(frozen=True, slots=True)
class PyJWTTokenProvider(TokenProvider):
    """
    HMAC JWT adapter over PyJWT.

    Access and refresh tokens are signed with distinct secrets, so a refresh
    token can never pass access verification and vice versa. Every token
    carries a random ``jti`` so two tokens issued in the same second differ.

    :param settings: Immutable secrets and lifetimes.
    """

    settings: TokenSettings

    def _secret(self, token_type: TokenType) -> str:
        if token_type == "access":
            return self.settings.access_secret
        return self.settings.refresh_secret

    def _encode(self, identity: int | str, token_type: TokenType, claims: dict[str, Any]) -> str:
        now = datetime.now(tz=UTC)
        lifetime = (
            self.settings.access_expires if token_type == "access" else self.settings.refresh_expires
        )
        payload: dict[str, Any] = dict(claims)
        payload.update(
            {
                "sub": str(identity),
                "type": token_type,
                "jti": uuid4().hex,
                "iat": now,
                "exp": now + lifetime,
            }
        )
        return jwt.encode(payload, self._secret(token_type), algorithm=self.settings.algorithm)

    def create_access_token(
        self, *, identity: int | str, additional_claims: dict[str, Any] | None = None
    ) -> str:
        return self._encode(identity, "access", additional_claims or {})

    def create_refresh_token(self, *, identity: int | str) -> str:
        return self._encode(identity, "refresh", {})

    def decode(self, token: str, *, expected_type: TokenType) -> dict[str, Any]:
        """Verify signature, expiry and ``type``; return the claims.

        :raises InvalidTokenError: On any failure, including a missing ``sub``.
        """
        if not token or not isinstance(token, str):
            raise InvalidTokenError(f"Invalid {expected_type} token")
        try:
            claims = jwt.decode(
                token,
                self._secret(expected_type),
                algorithms=[self.settings.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError(f"{expected_type.capitalize()} token expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(f"Invalid {expected_type} token") from exc
        if claims.get("type") != expected_type:
            raise InvalidTokenError(f"Invalid {expected_type} token")
        return claims
