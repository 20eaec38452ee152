"""Factories for like and subscription edges."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from tests.factories.content import VideoFactory
from tests.factories.user import UserFactory
from vidtube.models import Like, LikeTarget, Subscription


class LikeFactory(BaseFactory):
    """A like on a video by default; override ``target_kind``/``target_id`` for others."""

    class Meta:
        model = Like

    id = None
    liked_by_id = factory.LazyFunction(lambda: UserFactory().id)
    target_kind = LikeTarget.VIDEO
    target_id = factory.LazyFunction(lambda: VideoFactory().id)


class SubscriptionFactory(BaseFactory):
    class Meta:
        model = Subscription

    id = None
    subscriber = factory.SubFactory(UserFactory)
    channel = factory.SubFactory(UserFactory)
