"""Repository exports."""

from .base import BaseRepository, Page, Pagination
from .comment import CommentRepository
from .like import LikeRepository
from .playlist import PlaylistRepository
from .subscription import SubscriptionRepository
from .tweet import TweetRepository
from .user import UserRepository
from .video import VideoRepository

__all__ = [
    "BaseRepository",
    "CommentRepository",
    "LikeRepository",
    "Page",
    "Pagination",
    "PlaylistRepository",
    "SubscriptionRepository",
    "TweetRepository",
    "UserRepository",
    "VideoRepository",
]
