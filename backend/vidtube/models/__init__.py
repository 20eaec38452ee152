"""ORM models; importing this package registers every table on ``db.metadata``."""

from .comment import Comment
from .like import Like, LikeTarget
from .playlist import Playlist, playlist_videos
from .subscription import Subscription
from .tweet import Tweet
from .user import User, WatchHistoryEntry
from .video import Video

__all__ = [
    "Comment",
    "Like",
    "LikeTarget",
    "Playlist",
    "Subscription",
    "Tweet",
    "User",
    "Video",
    "WatchHistoryEntry",
    "playlist_videos",
]
