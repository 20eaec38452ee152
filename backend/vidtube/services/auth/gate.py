"""
AuthGate: resolve the caller of a protected endpoint from its access token.
"""

from __future__ import annotations

from collections.abc import Mapping

from vidtube.services._shared.base import BaseService, ServiceContext
from vidtube.services._shared.errors import InvalidTokenError, UnauthenticatedError
from vidtube.services._shared.ports import TokenProvider
from vidtube.services.identity.dto import UserPublicOut

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


def extract_access_token(cookies: Mapping[str, str], authorization: str | None) -> str | None:
    """
    Pick the access token: the ``accessToken`` cookie wins, then
    ``Authorization: Bearer <token>``.

    :returns: The raw token, or ``None`` when neither carries one.
    """
    cookie = (cookies.get(ACCESS_COOKIE) or "").strip()
    if cookie:
        return cookie
    if authorization:
        scheme, _, value = authorization.strip().partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return None


class AuthGate(BaseService):
    """
    Verify an access token and load the public identity it names.

    A single failure is final: no retry, no fallback to another credential.
    """

    def __init__(self, *, tokens: TokenProvider, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.tokens = tokens

    def authenticate(self, token: str | None) -> UserPublicOut:
        """
        :raises UnauthenticatedError: No token.
        :raises InvalidTokenError: Verification failed or the user is gone.
        """
        if not token:
            raise UnauthenticatedError("Unauthorized request!")
        claims = self.tokens.decode(token, expected_type="access")
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Invalid Access Token!") from exc

        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise InvalidTokenError("Invalid Access Token!")
            return UserPublicOut.from_model(user)
