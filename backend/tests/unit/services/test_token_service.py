"""TokenService: login, rotation with reuse detection, and revocation."""

from __future__ import annotations

import pytest

from tests.factories.user import UserFactory
from vidtube.models import User
from vidtube.services._shared.errors import (
    InvalidInputError,
    InvalidTokenError,
    NotFoundError,
    TokenReuseError,
    UnauthenticatedError,
)
from vidtube.services.auth.dto import LoginIn
from vidtube.services.auth.service import TokenService


@pytest.fixture()
def service(tokens) -> TokenService:
    return TokenService(tokens=tokens)


def _stored_refresh(session, user_id: int) -> str | None:
    session.expire_all()
    return session.get(User, user_id).refresh_token


class TestLogin:
    def test_login_by_username_issues_pair_and_stores_refresh(self, service, session):
        user = UserFactory(username="ada", password="p")
        result = service.login(LoginIn(username="ada", password="p"))

        assert result.user.id == user.id
        assert _stored_refresh(session, user.id) == result.tokens.refresh_token
        claims = service.tokens.decode(result.tokens.access_token, expected_type="access")
        assert claims["sub"] == str(user.id)
        assert claims["username"] == "ada"

    def test_login_by_email(self, service, session):
        user = UserFactory(email="grace@example.com", password="p")
        assert service.login(LoginIn(email="GRACE@example.com", password="p")).user.id == user.id

    def test_wrong_password(self, service, session):
        UserFactory(username="ada", password="p")
        with pytest.raises(UnauthenticatedError, match="Invalid user credentials"):
            service.login(LoginIn(username="ada", password="nope"))

    def test_unknown_user(self, service, session):
        with pytest.raises(NotFoundError, match="User does not exist"):
            service.login(LoginIn(username="ghost", password="p"))

    def test_missing_identifier(self, service, session):
        with pytest.raises(InvalidInputError):
            service.login(LoginIn(password="p"))


class TestRotate:
    def test_rotation_replaces_stored_token(self, service, session):
        user = UserFactory(password="p")
        first = service.login(LoginIn(username=user.username, password="p")).tokens

        second = service.rotate(first.refresh_token)

        assert second.refresh_token != first.refresh_token
        assert _stored_refresh(session, user.id) == second.refresh_token

    def test_reusing_a_rotated_token_is_rejected(self, service, session):
        user = UserFactory(password="p")
        first = service.login(LoginIn(username=user.username, password="p")).tokens
        service.rotate(first.refresh_token)

        with pytest.raises(TokenReuseError, match="Refresh token is expired or used"):
            service.rotate(first.refresh_token)

    def test_access_token_cannot_be_used_to_rotate(self, service, session):
        user = UserFactory(password="p")
        pair = service.login(LoginIn(username=user.username, password="p")).tokens
        with pytest.raises(InvalidTokenError):
            service.rotate(pair.access_token)

    def test_missing_token(self, service):
        with pytest.raises(UnauthenticatedError):
            service.rotate(None)

    def test_token_for_deleted_user(self, service, tokens, session):
        token = tokens.create_refresh_token(identity=999_999)
        with pytest.raises(InvalidTokenError):
            service.rotate(token)


class TestRevoke:
    def test_revoke_blocks_further_rotation(self, service, session):
        user = UserFactory(password="p")
        pair = service.login(LoginIn(username=user.username, password="p")).tokens

        service.revoke(user.id)

        assert _stored_refresh(session, user.id) is None
        with pytest.raises(TokenReuseError):
            service.rotate(pair.refresh_token)

    def test_revoke_is_idempotent(self, service, session):
        user = UserFactory()
        service.revoke(user.id)
        service.revoke(user.id)
        service.revoke(123_456)
        assert _stored_refresh(session, user.id) is None

    def test_issue_refresh_token_for_unknown_user(self, service, session):
        with pytest.raises(NotFoundError):
            service.issue_refresh_token(424242)
