"""Convenience exports for request/response schemas."""

from __future__ import annotations

from .comment import CommentSchema, ContentSchema, TweetSchema
from .common import OwnerSchema, PaginationQuerySchema, dump_page
from .playlist import PlaylistSchema, PlaylistWriteSchema
from .relation import ChannelStatsSchema, ToggleResultSchema
from .user import (
    AccountUpdateSchema,
    AuthSessionSchema,
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    UserSchema,
)
from .video import VideoListQuerySchema, VideoPublishSchema, VideoSchema, VideoUpdateSchema

__all__ = [
    "AccountUpdateSchema",
    "AuthSessionSchema",
    "ChangePasswordSchema",
    "ChannelProfileSchema",
    "ChannelStatsSchema",
    "CommentSchema",
    "ContentSchema",
    "LoginSchema",
    "OwnerSchema",
    "PaginationQuerySchema",
    "PlaylistSchema",
    "PlaylistWriteSchema",
    "RefreshSchema",
    "RegisterSchema",
    "ToggleResultSchema",
    "TweetSchema",
    "UserSchema",
    "VideoListQuerySchema",
    "VideoPublishSchema",
    "VideoSchema",
    "VideoUpdateSchema",
    "dump_page",
]
