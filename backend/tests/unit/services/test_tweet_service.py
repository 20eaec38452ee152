"""TweetService behaviour."""

from __future__ import annotations

import pytest

from tests.factories.content import TweetFactory
from tests.factories.relation import LikeFactory
from tests.factories.user import UserFactory
from vidtube.models import Like, LikeTarget, Tweet
from vidtube.services._shared.errors import (
    AuthorizationError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)
from vidtube.services.tweets.service import TweetService


def test_create_and_list(session, ctx_for):
    user = UserFactory()
    service = TweetService(ctx=ctx_for(user))
    first = service.create("hello world")
    second = service.create("second")
    TweetFactory()

    listed = service.list_for_user(user.id)
    assert {t.id for t in listed} == {first.id, second.id}
    assert all(t.owner.id == user.id for t in listed)


def test_create_requires_content(session, ctx_for):
    with pytest.raises(InvalidInputError):
        TweetService(ctx=ctx_for(UserFactory())).create("")


def test_create_requires_actor(session):
    with pytest.raises(UnauthenticatedError):
        TweetService().create("hi")


def test_list_unknown_user(session):
    with pytest.raises(NotFoundError):
        TweetService().list_for_user(999_999)


def test_update_and_delete_owner_only(session, ctx_for):
    tweet = TweetFactory(content="v1")
    LikeFactory(target_kind=LikeTarget.TWEET, target_id=tweet.id)
    stranger = TweetService(ctx=ctx_for(UserFactory()))
    owner = TweetService(ctx=ctx_for(tweet.owner))

    with pytest.raises(AuthorizationError):
        stranger.update(tweet.id, "v2")
    with pytest.raises(AuthorizationError):
        stranger.delete(tweet.id)

    assert owner.update(tweet.id, "v2").content == "v2"
    owner.delete(tweet.id)

    session.expire_all()
    assert session.get(Tweet, tweet.id) is None
    assert session.query(Like).filter_by(target_kind=LikeTarget.TWEET).count() == 0


def test_update_missing(session, ctx_for):
    with pytest.raises(NotFoundError, match="No tweet found with given Id!"):
        TweetService(ctx=ctx_for(UserFactory())).update(999_999, "x")
