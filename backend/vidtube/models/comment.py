"""Comment model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidtube.core.extensions import db

from .base import OwnedMixin, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .video import Video


class Comment(PKMixin, OwnedMixin, ReprMixin, TimestampMixin, db.Model):
    """A user's comment on a video."""

    __tablename__ = "comments"

    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    video: Mapped[Video] = relationship(back_populates="comments")
    owner: Mapped[User] = relationship(lazy="joined")

    @validates("content")
    def _validate_content(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("content must not be blank.")
        return value.strip()
