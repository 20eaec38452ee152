"""Video model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidtube.core.extensions import db

from .base import OwnedMixin, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .user import User


class Video(PKMixin, OwnedMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Uploaded video owned by a channel (user).

    Fields
    ------
    title : str
        Display title (non-blank).
    description : str
        Free-form description (non-blank).
    video_file : str
        Public URL of the stored media.
    thumbnail : str
        Public URL of the thumbnail image.
    duration : float
        Length in seconds (``>= 0``).
    views : int
        Monotonic view counter.
    is_published : bool
        Unpublished videos are visible to their owner only.
    """

    __tablename__ = "videos"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    video_file: Mapped[str] = mapped_column(String(1024), nullable=False)
    thumbnail: Mapped[str] = mapped_column(String(1024), nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    owner: Mapped[User] = relationship(lazy="joined")
    comments: Mapped[list[Comment]] = relationship(
        back_populates="video",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("views >= 0", name="views_non_negative"),
        CheckConstraint("duration >= 0", name="duration_non_negative"),
        Index("ix_videos_owner_published", "owner_id", "is_published"),
    )

    @validates("title", "description")
    def _strip_text(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key} must not be blank.")
        return value.strip()

    @validates("duration")
    def _validate_duration(self, key: str, value: float | int | None) -> float:
        if value is None:
            return 0.0
        value = float(value)
        if value < 0:
            raise ValueError("duration must be >= 0.")
        return value
