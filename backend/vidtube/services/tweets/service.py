"""TweetService: short text posts on a channel."""

from __future__ import annotations

import logging

from vidtube.services._shared.base import BaseService
from vidtube.services._shared.errors import NotFoundError
from vidtube.services.tweets.dto import TweetOut

logger = logging.getLogger(__name__)

TWEET_NOT_FOUND = "No tweet found with given Id!"


class TweetService(BaseService):
    def create(self, content: str) -> TweetOut:
        actor_id = self.require_actor()
        content = self.require_text(content, "Valid Tweet Content is required!")
        with self.rw_uow() as uow:
            tweet = uow.tweets.add(uow.tweets.model(owner_id=actor_id, content=content))
            uow.session.refresh(tweet)
            out = TweetOut.from_model(tweet)
        logger.info("Tweet created", extra={"tweet_id": out.id})
        return out

    def list_for_user(self, user_id: int) -> list[TweetOut]:
        """Newest first.

        :raises NotFoundError: Unknown user.
        """
        with self.ro_uow() as uow:
            if not uow.users.exists_id(user_id):
                raise NotFoundError("User", user_id, "User not found")
            return [TweetOut.from_model(t) for t in uow.tweets.list_for_owner(user_id)]

    def update(self, tweet_id: int, content: str) -> TweetOut:
        self.require_actor()
        content = self.require_text(content, "Valid tweet content is required!")
        with self.rw_uow() as uow:
            tweet = uow.tweets.get_for_update(tweet_id)
            if tweet is None:
                raise NotFoundError("Tweet", tweet_id, TWEET_NOT_FOUND)
            self.ensure_owner(tweet.owner_id, msg="Unauthorized to update tweet!")
            uow.tweets.assign_updates(tweet, {"content": content})
            out = TweetOut.from_model(tweet)
        logger.info("Tweet updated", extra={"tweet_id": tweet_id})
        return out

    def delete(self, tweet_id: int) -> TweetOut:
        self.require_actor()
        with self.rw_uow() as uow:
            tweet = uow.tweets.get_for_update(tweet_id)
            if tweet is None:
                raise NotFoundError("Tweet", tweet_id, TWEET_NOT_FOUND)
            self.ensure_owner(tweet.owner_id, msg="Unauthorized to delete tweet!")
            out = TweetOut.from_model(tweet)
            uow.tweets.delete_with_likes(tweet)
        logger.info("Tweet deleted", extra={"tweet_id": tweet_id})
        return out
