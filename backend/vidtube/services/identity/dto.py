"""
DTOs for the identity use cases.

Outputs never carry the password hash or the refresh token.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vidtube.models.user import User
    from vidtube.services._shared.ports import IncomingFile

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for registration.

    :param full_name: Display name.
    :type full_name: str
    :param email: Login email.
    :type email: str
    :param username: Public handle.
    :type username: str
    :param password: Raw password (hashed by the model).
    :type password: str
    :param avatar: Required avatar upload.
    :param cover_image: Optional cover upload.
    """

    full_name: str
    email: str
    username: str
    password: str
    avatar: IncomingFile | None = None
    cover_image: IncomingFile | None = None


@dataclass(frozen=True, slots=True)
class AccountUpdateIn:
    full_name: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class PasswordChangeIn:
    old_password: str
    new_password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """Public-safe user representation."""

    id: int
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar=user.avatar,
            cover_image=user.cover_image,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Channel page header.

    :param subscribers_count: Users subscribed to this channel.
    :param channels_subscribed_to_count: Channels this user follows.
    :param is_subscribed: Whether the caller follows this channel.
    """

    id: int
    username: str
    full_name: str
    email: str
    avatar: str
    cover_image: str | None
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
