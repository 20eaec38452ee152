"""
ToggleService
=============

Create-if-absent / delete-if-present for likes and subscriptions.

Both steps run in one read-write unit of work. The insert runs inside a
SAVEPOINT; a unique-constraint violation there means a concurrent call
created the same edge first, so the edge exists and the call reports
``active=True``. At most one edge per ``(actor, target, kind)`` ever exists.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from vidtube.services._shared.base import BaseService
from vidtube.services._shared.dto import OwnerOut
from vidtube.services._shared.errors import InvalidInputError, NotFoundError, ServerError
from vidtube.services.relations.dto import RelationshipKind, ToggleResult
from vidtube.services.videos.dto import VideoOut
from vidtube.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)


class ToggleService(BaseService):
    """Likes (video, comment, tweet) and channel subscriptions."""

    def toggle(self, target_id: int, kind: RelationshipKind) -> ToggleResult:
        """
        Flip the edge ``(ctx.actor_id, target_id, kind)``.

        Calling twice with the same arguments restores the original state.

        :raises NotFoundError: The target does not exist.
        :raises InvalidInputError: Subscribing to one's own channel.
        :raises ServerError: The delete step failed in the database.
        """
        actor_id = self.require_actor()
        kind = RelationshipKind(kind)
        if kind is RelationshipKind.SUBSCRIPTION and target_id == actor_id:
            raise InvalidInputError("You cannot subscribe to your own channel")

        with self.rw_uow() as uow:
            self._ensure_target(uow, kind, target_id)
            try:
                removed = self._remove(uow, actor_id, kind, target_id)
            except SQLAlchemyError as exc:
                logger.error(
                    "Relationship toggle failed",
                    extra={"actor_id": actor_id, "target_id": target_id, "kind": kind.value},
                    exc_info=True,
                )
                raise ServerError(
                    f"Something went wrong while toggling {kind.target_label.lower()} "
                    f"{'subscription' if kind is RelationshipKind.SUBSCRIPTION else 'like'}!"
                ) from exc

            active = not removed
            if active:
                savepoint = uow.session.begin_nested()
                try:
                    self._add(uow, actor_id, kind, target_id)
                    savepoint.commit()
                except IntegrityError:
                    # lost the race: a concurrent toggle created the same edge
                    savepoint.rollback()
                    logger.info(
                        "Relationship already created concurrently",
                        extra={"actor_id": actor_id, "target_id": target_id, "kind": kind.value},
                    )

        logger.info(
            "Relationship toggled",
            extra={
                "actor_id": actor_id,
                "target_id": target_id,
                "kind": kind.value,
                "active": active,
            },
        )
        return ToggleResult(actor_id=actor_id, target_id=target_id, kind=kind, active=active)

    # ------------------------------------------------------------------ #
    # Listings
    # ------------------------------------------------------------------ #

    def list_liked_videos(self) -> list[VideoOut]:
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            return [VideoOut.from_model(v) for v in uow.likes.liked_videos(actor_id)]

    def list_channel_subscribers(self, channel_id: int) -> list[OwnerOut]:
        with self.ro_uow() as uow:
            if not uow.users.exists_id(channel_id):
                raise NotFoundError("Channel", channel_id, "Channel not found")
            return [OwnerOut.from_model(u) for u in uow.subscriptions.subscribers_of(channel_id)]

    def list_subscribed_channels(self, subscriber_id: int) -> list[OwnerOut]:
        with self.ro_uow() as uow:
            if not uow.users.exists_id(subscriber_id):
                raise NotFoundError("User", subscriber_id, "User not found")
            return [OwnerOut.from_model(u) for u in uow.subscriptions.channels_of(subscriber_id)]

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _ensure_target(self, uow: SQLAlchemyUnitOfWork, kind: RelationshipKind, target_id: int) -> None:
        repo = {
            RelationshipKind.VIDEO_LIKE: uow.videos,
            RelationshipKind.COMMENT_LIKE: uow.comments,
            RelationshipKind.TWEET_LIKE: uow.tweets,
            RelationshipKind.SUBSCRIPTION: uow.users,
        }[kind]
        if not repo.exists_id(target_id):
            raise NotFoundError(kind.target_label, target_id, f"{kind.target_label} not found")

    def _remove(self, uow: SQLAlchemyUnitOfWork, actor_id: int, kind: RelationshipKind, target_id: int) -> bool:
        if kind is RelationshipKind.SUBSCRIPTION:
            return uow.subscriptions.remove_edge(actor_id, target_id) > 0
        return uow.likes.remove_edge(actor_id, kind.like_target, target_id) > 0

    def _add(self, uow: SQLAlchemyUnitOfWork, actor_id: int, kind: RelationshipKind, target_id: int) -> None:
        if kind is RelationshipKind.SUBSCRIPTION:
            uow.subscriptions.add_edge(actor_id, target_id)
        else:
            uow.likes.add_edge(actor_id, kind.like_target, target_id)
