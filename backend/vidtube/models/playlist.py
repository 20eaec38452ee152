"""Playlist model and its video association table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidtube.core.extensions import db

from .base import OwnedMixin, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .video import Video


# Composite PK: a video appears at most once per playlist
playlist_videos = Table(
    "playlist_videos",
    db.metadata,
    Column("playlist_id", ForeignKey("playlists.id", ondelete="CASCADE"), primary_key=True),
    Column("video_id", ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True),
    Column("added_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)


class Playlist(PKMixin, OwnedMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Named, owner-curated set of videos.

    Fields
    ------
    name : str
        Playlist name (non-blank).
    description : str
        Description (non-blank).
    videos : list[Video]
        Member videos in insertion order.
    """

    __tablename__ = "playlists"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    owner: Mapped[User] = relationship(lazy="joined")
    videos: Mapped[list[Video]] = relationship(
        secondary=playlist_videos,
        order_by=playlist_videos.c.added_at,
        lazy="selectin",
    )

    @validates("name", "description")
    def _strip_text(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key} must not be blank.")
        return value.strip()

    def has_video(self, video_id: int) -> bool:
        return any(v.id == video_id for v in self.videos)
