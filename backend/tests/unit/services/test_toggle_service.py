"""ToggleService: likes and subscriptions flip between present and absent."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from tests.factories.content import CommentFactory, TweetFactory, VideoFactory
from tests.factories.user import UserFactory
from vidtube.models import Like, LikeTarget, Subscription
from vidtube.services._shared.errors import InvalidInputError, NotFoundError, UnauthenticatedError
from vidtube.services.relations.dto import RelationshipKind
from vidtube.services.relations.service import ToggleService


def _like_count(session, kind: LikeTarget, target_id: int) -> int:
    stmt = select(func.count()).select_from(Like).where(
        Like.target_kind == kind, Like.target_id == target_id
    )
    return session.execute(stmt).scalar_one()


def _sub_count(session, subscriber_id: int, channel_id: int) -> int:
    stmt = select(func.count()).select_from(Subscription).where(
        Subscription.subscriber_id == subscriber_id, Subscription.channel_id == channel_id
    )
    return session.execute(stmt).scalar_one()


@pytest.mark.parametrize(
    "kind,target_factory,like_kind",
    [
        (RelationshipKind.VIDEO_LIKE, VideoFactory, LikeTarget.VIDEO),
        (RelationshipKind.COMMENT_LIKE, CommentFactory, LikeTarget.COMMENT),
        (RelationshipKind.TWEET_LIKE, TweetFactory, LikeTarget.TWEET),
    ],
)
def test_like_toggle_cycle(session, ctx_for, kind, target_factory, like_kind):
    actor = UserFactory()
    target = target_factory()
    service = ToggleService(ctx=ctx_for(actor))

    first = service.toggle(target.id, kind)
    assert first.active is True
    assert _like_count(session, like_kind, target.id) == 1

    second = service.toggle(target.id, kind)
    assert second.active is False
    assert _like_count(session, like_kind, target.id) == 0

    third = service.toggle(target.id, kind)
    assert third.active is True
    assert _like_count(session, like_kind, target.id) == 1


def test_likes_from_different_users_are_independent(session, ctx_for):
    video = VideoFactory()
    a, b = UserFactory(), UserFactory()
    ToggleService(ctx=ctx_for(a)).toggle(video.id, RelationshipKind.VIDEO_LIKE)
    ToggleService(ctx=ctx_for(b)).toggle(video.id, RelationshipKind.VIDEO_LIKE)
    ToggleService(ctx=ctx_for(a)).toggle(video.id, RelationshipKind.VIDEO_LIKE)
    assert _like_count(session, LikeTarget.VIDEO, video.id) == 1


def test_subscription_cycle(session, ctx_for):
    fan, channel = UserFactory(), UserFactory()
    service = ToggleService(ctx=ctx_for(fan))

    assert service.toggle(channel.id, RelationshipKind.SUBSCRIPTION).active is True
    assert _sub_count(session, fan.id, channel.id) == 1
    assert service.toggle(channel.id, RelationshipKind.SUBSCRIPTION).active is False
    assert _sub_count(session, fan.id, channel.id) == 0


def test_self_subscription_rejected(session, ctx_for):
    user = UserFactory()
    with pytest.raises(InvalidInputError, match="own channel"):
        ToggleService(ctx=ctx_for(user)).toggle(user.id, RelationshipKind.SUBSCRIPTION)


@pytest.mark.parametrize("kind", list(RelationshipKind))
def test_missing_target_is_not_found(session, ctx_for, kind):
    actor = UserFactory()
    with pytest.raises(NotFoundError):
        ToggleService(ctx=ctx_for(actor)).toggle(999_999, kind)


def test_toggle_requires_actor(session):
    with pytest.raises(UnauthenticatedError):
        ToggleService().toggle(1, RelationshipKind.VIDEO_LIKE)


def test_concurrent_insert_is_reported_active(session, ctx_for, monkeypatch):
    """A delete that finds nothing followed by a duplicate insert keeps the edge."""
    actor, video = UserFactory(), VideoFactory()
    service = ToggleService(ctx=ctx_for(actor))
    service.toggle(video.id, RelationshipKind.VIDEO_LIKE)

    # simulate the other request winning the race: our delete sees no row
    monkeypatch.setattr(service, "_remove", lambda *a, **k: False)
    result = service.toggle(video.id, RelationshipKind.VIDEO_LIKE)

    assert result.active is True
    assert _like_count(session, LikeTarget.VIDEO, video.id) == 1


def test_listings(session, ctx_for):
    fan, channel = UserFactory(), UserFactory()
    video = VideoFactory(owner=channel)
    service = ToggleService(ctx=ctx_for(fan))
    service.toggle(video.id, RelationshipKind.VIDEO_LIKE)
    service.toggle(channel.id, RelationshipKind.SUBSCRIPTION)

    assert [v.id for v in service.list_liked_videos()] == [video.id]
    assert [u.id for u in service.list_channel_subscribers(channel.id)] == [fan.id]
    assert [u.id for u in service.list_subscribed_channels(fan.id)] == [channel.id]

    with pytest.raises(NotFoundError):
        service.list_channel_subscribers(999_999)
