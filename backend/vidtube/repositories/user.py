"""User repository: credential lookups and channel aggregates."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import cast

from sqlalchemy import delete, func, or_, select

from vidtube.models.subscription import Subscription
from vidtube.models.user import User, WatchHistoryEntry
from vidtube.models.video import Video

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Identity lookups are case-insensitive because usernames and emails are
    stored lowercase by the model validators.
    """

    model = User

    def _sortable_fields(self):
        return {
            "createdAt": User.created_at,
            "username": User.username,
            "fullName": User.full_name,
        }

    def _filterable_fields(self):
        return {"email": User.email, "username": User.username}

    def _updatable_fields(self):
        # password and refresh_token have dedicated methods
        return {"full_name", "email", "avatar", "cover_image"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip().lower())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip().lower())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_identifier(self, *, username: str | None = None, email: str | None = None) -> User | None:
        """Match a user by username OR email (whichever are given).

        :returns: First matching user or ``None``; ``None`` when both are blank.
        """
        clauses = []
        if username and username.strip():
            clauses.append(User.username == username.strip().lower())
        if email and email.strip():
            clauses.append(User.email == email.strip().lower())
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id.asc())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_username_or_email(self, username: str, email: str) -> bool:
        return self.find_by_identifier(username=username, email=email) is not None

    # ---------------------------- Credential ops ----------------------------

    def set_password(self, user: User, raw: str) -> None:
        user.password = raw  # setter hashes
        self.flush()

    def set_refresh_token(self, user: User, token: str | None) -> None:
        user.refresh_token = token
        self.flush()

    # ---------------------------- Channel profile ----------------------------

    def count_subscribers(self, channel_id: int) -> int:
        stmt = select(func.count()).select_from(Subscription).where(
            Subscription.channel_id == channel_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def count_subscriptions(self, subscriber_id: int) -> int:
        stmt = select(func.count()).select_from(Subscription).where(
            Subscription.subscriber_id == subscriber_id
        )
        return int(self.session.execute(stmt).scalar_one())

    # ---------------------------- Watch history ----------------------------

    def watch_history(self, user_id: int) -> list[Video]:
        """Videos watched by ``user_id``, most recent first."""
        stmt = (
            select(Video)
            .join(WatchHistoryEntry, WatchHistoryEntry.video_id == Video.id)
            .where(WatchHistoryEntry.user_id == user_id)
            .order_by(WatchHistoryEntry.watched_at.desc(), Video.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def push_watch_history(self, user_id: int, video_id: int) -> None:
        """Move ``video_id`` to the head of the user's history.

        Implemented as delete-then-insert so the entry gets a fresh
        ``watched_at`` and never duplicates.
        """
        self.session.execute(
            delete(WatchHistoryEntry).where(
                WatchHistoryEntry.user_id == user_id,
                WatchHistoryEntry.video_id == video_id,
            )
        )
        self.session.add(
            WatchHistoryEntry(
                user_id=user_id, video_id=video_id, watched_at=datetime.now(UTC)
            )
        )
        self.flush()
