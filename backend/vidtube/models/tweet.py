"""Tweet model: short text posts on a channel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidtube.core.extensions import db

from .base import OwnedMixin, PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Tweet(PKMixin, OwnedMixin, ReprMixin, TimestampMixin, db.Model):
    __tablename__ = "tweets"

    content: Mapped[str] = mapped_column(String(500), nullable=False)

    owner: Mapped[User] = relationship(lazy="joined")

    @validates("content")
    def _validate_content(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("content must not be blank.")
        return value.strip()
