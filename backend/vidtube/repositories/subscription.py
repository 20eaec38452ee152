"""Subscription edge repository."""

from __future__ import annotations

from sqlalchemy import delete, select

from vidtube.models.subscription import Subscription
from vidtube.models.user import User

from .base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    model = Subscription

    def _filterable_fields(self):
        return {
            "subscriber_id": Subscription.subscriber_id,
            "channel_id": Subscription.channel_id,
        }

    def remove_edge(self, subscriber_id: int, channel_id: int) -> int:
        result = self.session.execute(
            delete(Subscription)
            .where(
                Subscription.subscriber_id == subscriber_id,
                Subscription.channel_id == channel_id,
            )
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def add_edge(self, subscriber_id: int, channel_id: int) -> Subscription:
        return self.add(Subscription(subscriber_id=subscriber_id, channel_id=channel_id))

    def is_subscribed(self, subscriber_id: int, channel_id: int) -> bool:
        return self.exists(subscriber_id=subscriber_id, channel_id=channel_id)

    def subscribers_of(self, channel_id: int) -> list[User]:
        stmt = (
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(Subscription.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def channels_of(self, subscriber_id: int) -> list[User]:
        stmt = (
            select(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())
