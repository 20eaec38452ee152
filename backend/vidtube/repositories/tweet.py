"""Tweet repository."""

from __future__ import annotations

from sqlalchemy import delete

from vidtube.models.like import Like, LikeTarget
from vidtube.models.tweet import Tweet

from .base import BaseRepository


class TweetRepository(BaseRepository[Tweet]):
    model = Tweet

    def _sortable_fields(self):
        return {"createdAt": Tweet.created_at, "updatedAt": Tweet.updated_at}

    def _filterable_fields(self):
        return {"owner_id": Tweet.owner_id}

    def _updatable_fields(self):
        return {"content"}

    def list_for_owner(self, owner_id: int) -> list[Tweet]:
        return self.list(filters={"owner_id": owner_id})

    def delete_with_likes(self, tweet: Tweet) -> None:
        self.session.execute(
            delete(Like)
            .where(Like.target_kind == LikeTarget.TWEET, Like.target_id == tweet.id)
            .execution_options(synchronize_session=False)
        )
        self.delete(tweet)
