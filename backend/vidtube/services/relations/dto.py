"""Relationship kinds and toggle outputs."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from vidtube.models.like import LikeTarget


class RelationshipKind(str, enum.Enum):
    """Edge kinds handled by the toggle service."""

    VIDEO_LIKE = "video"
    COMMENT_LIKE = "comment"
    TWEET_LIKE = "tweet"
    SUBSCRIPTION = "channel"

    @property
    def like_target(self) -> LikeTarget | None:
        if self is RelationshipKind.SUBSCRIPTION:
            return None
        return LikeTarget(self.value)

    @property
    def target_label(self) -> str:
        return {
            RelationshipKind.VIDEO_LIKE: "Video",
            RelationshipKind.COMMENT_LIKE: "Comment",
            RelationshipKind.TWEET_LIKE: "Tweet",
            RelationshipKind.SUBSCRIPTION: "Channel",
        }[self]


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """
    :param active: ``True`` when the edge exists after the call.
    """

    actor_id: int
    target_id: int
    kind: RelationshipKind
    active: bool
