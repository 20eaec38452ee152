from __future__ import annotations

from typing import Any, Literal, Protocol

TokenType = Literal["access", "refresh"]


class TokenProvider(Protocol):
    """Port for signing and verifying access/refresh JWTs.

    Implementations sign each token class with its own secret and raise
    :class:`~vidtube.services._shared.errors.InvalidTokenError` from
    :meth:`decode` on any verification failure (signature, expiry, type).
    """

    def create_access_token(
        self, *, identity: int | str, additional_claims: dict[str, Any] | None = None
    ) -> str: ...

    def create_refresh_token(self, *, identity: int | str) -> str: ...

    def decode(self, token: str, *, expected_type: TokenType) -> dict[str, Any]: ...
