"""Like edges between a user and a video, comment or tweet."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.core.extensions import db

from .base import PKMixin, ReprMixin


class LikeTarget(str, enum.Enum):
    """Kinds of entity a like can point at."""

    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


class Like(PKMixin, ReprMixin, db.Model):
    """
    One ``(liked_by, target_kind, target_id)`` edge.

    ``target_id`` is polymorphic over ``target_kind`` so it carries no foreign
    key; the services delete dependent likes when a target is removed.
    """

    __tablename__ = "likes"

    liked_by_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    target_kind: Mapped[LikeTarget] = mapped_column(
        Enum(LikeTarget, name="like_target", native_enum=False, length=16),
        nullable=False,
    )
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("liked_by_id", "target_kind", "target_id", name="uq_likes_actor_target"),
        Index("ix_likes_target", "target_kind", "target_id"),
    )
