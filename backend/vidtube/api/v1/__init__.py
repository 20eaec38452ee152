"""Version 1 blueprints and their mount points."""

from __future__ import annotations

from .comments import bp as comments_bp
from .dashboard import bp as dashboard_bp
from .health import bp as health_bp
from .likes import bp as likes_bp
from .playlists import bp as playlists_bp
from .subscriptions import bp as subscriptions_bp
from .tweets import bp as tweets_bp
from .users import bp as users_bp
from .videos import bp as videos_bp

API_VERSION = "v1"

# (blueprint, prefix relative to /api/v1)
REGISTRY = [
    (health_bp, "/healthcheck"),
    (users_bp, "/users"),
    (videos_bp, "/videos"),
    (comments_bp, "/comments"),
    (tweets_bp, "/tweets"),
    (playlists_bp, "/playlists"),
    (likes_bp, "/likes"),
    (subscriptions_bp, "/subscriptions"),
    (dashboard_bp, "/dashboard"),
]

__all__ = ["API_VERSION", "REGISTRY"]
