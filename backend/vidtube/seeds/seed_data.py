"""Idempotent demo data: channels, videos, comments, tweets, playlists and relations."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from vidtube.models import Comment, Like, LikeTarget, Playlist, Subscription, Tweet, User, Video

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

MEDIA_BASE = "https://media.example.com"

USER_FIXTURES: list[dict[str, str]] = [
    {"username": "ada", "email": "ada@example.com", "full_name": "Ada Lovelace", "password": "engine1843"},
    {"username": "grace", "email": "grace@example.com", "full_name": "Grace Hopper", "password": "cobol1959"},
    {"username": "alan", "email": "alan@example.com", "full_name": "Alan Turing", "password": "enigma1939"},
]

VIDEO_FIXTURES: list[dict[str, Any]] = [
    {"owner": "ada", "title": "Notes on the Analytical Engine", "duration": 642.0, "is_published": True},
    {"owner": "ada", "title": "Bernoulli numbers, step by step", "duration": 1210.5, "is_published": True},
    {"owner": "ada", "title": "Draft: punched cards", "duration": 95.0, "is_published": False},
    {"owner": "grace", "title": "Finding the first bug", "duration": 300.0, "is_published": True},
    {"owner": "alan", "title": "Can machines think?", "duration": 1800.0, "is_published": True},
]

COMMENT_FIXTURES: list[dict[str, str]] = [
    {"author": "grace", "video": "Notes on the Analytical Engine", "content": "Beautiful explanation."},
    {"author": "alan", "video": "Notes on the Analytical Engine", "content": "The loop diagram helped."},
    {"author": "ada", "video": "Finding the first bug", "content": "A moth, really?"},
]

TWEET_FIXTURES: list[dict[str, str]] = [
    {"author": "ada", "content": "New video on Bernoulli numbers is up."},
    {"author": "grace", "content": "It's easier to ask forgiveness than permission."},
]

PLAYLIST_FIXTURES: list[dict[str, Any]] = [
    {
        "owner": "grace",
        "name": "History of computing",
        "description": "Talks worth rewatching",
        "videos": ["Notes on the Analytical Engine", "Can machines think?"],
    },
]

SUBSCRIPTION_FIXTURES: list[tuple[str, str]] = [
    ("grace", "ada"),
    ("alan", "ada"),
    ("ada", "grace"),
]

VIDEO_LIKE_FIXTURES: list[tuple[str, str]] = [
    ("grace", "Notes on the Analytical Engine"),
    ("alan", "Notes on the Analytical Engine"),
    ("ada", "Can machines think?"),
]


def _session(database: SQLAlchemy) -> Session:
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    entry["created" if created else "existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    session.flush()
    return instance, True


def _slug(text: str) -> str:
    return "-".join(part for part in "".join(c if c.isalnum() else " " for c in text.lower()).split())


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create demo channels; existing accounts keep their password."""
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    with session.begin():
        for fixture in USER_FIXTURES:
            user = session.execute(
                select(User).filter_by(username=fixture["username"])
            ).scalar_one_or_none()
            created = user is None
            if user is None:
                user = User(
                    username=fixture["username"],
                    email=fixture["email"],
                    full_name=fixture["full_name"],
                    avatar=f"{MEDIA_BASE}/avatars/{fixture['username']}.png",
                )
                user.password = fixture["password"]
                session.add(user)
                session.flush()
            if verbose:
                LOGGER.debug("user %s created=%s", fixture["username"], created)
            _touch(summary, "users", created)
    return summary


def seed_content(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create videos, comments, tweets and playlists owned by the demo channels."""
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    with session.begin():
        users = {u.username: u for u in session.scalars(select(User))}
        videos: dict[str, Video] = {}

        for fixture in VIDEO_FIXTURES:
            owner = users[fixture["owner"]]
            slug = _slug(fixture["title"])
            video, created = _get_or_create(
                session,
                Video,
                owner_id=owner.id,
                title=fixture["title"],
                defaults={
                    "description": f"{fixture['title']} by {owner.full_name}",
                    "video_file": f"{MEDIA_BASE}/videos/{slug}.mp4",
                    "thumbnail": f"{MEDIA_BASE}/thumbnails/{slug}.jpg",
                    "duration": fixture["duration"],
                    "is_published": fixture["is_published"],
                },
            )
            videos[video.title] = video
            _touch(summary, "videos", created)

        for fixture in COMMENT_FIXTURES:
            _, created = _get_or_create(
                session,
                Comment,
                owner_id=users[fixture["author"]].id,
                video_id=videos[fixture["video"]].id,
                content=fixture["content"],
            )
            _touch(summary, "comments", created)

        for fixture in TWEET_FIXTURES:
            _, created = _get_or_create(
                session, Tweet, owner_id=users[fixture["author"]].id, content=fixture["content"]
            )
            _touch(summary, "tweets", created)

        for fixture in PLAYLIST_FIXTURES:
            playlist, created = _get_or_create(
                session,
                Playlist,
                owner_id=users[fixture["owner"]].id,
                name=fixture["name"],
                defaults={"description": fixture["description"]},
            )
            for title in fixture["videos"]:
                if videos[title] not in playlist.videos:
                    playlist.videos.append(videos[title])
            session.flush()
            _touch(summary, "playlists", created)

    if verbose:
        LOGGER.debug("content summary %s", summary)
    return summary


def seed_relations(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create subscriptions and video likes between the demo channels."""
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    with session.begin():
        users = {u.username: u for u in session.scalars(select(User))}
        videos = {v.title: v for v in session.scalars(select(Video))}

        for subscriber, channel in SUBSCRIPTION_FIXTURES:
            _, created = _get_or_create(
                session,
                Subscription,
                subscriber_id=users[subscriber].id,
                channel_id=users[channel].id,
            )
            _touch(summary, "subscriptions", created)

        for actor, title in VIDEO_LIKE_FIXTURES:
            _, created = _get_or_create(
                session,
                Like,
                liked_by_id=users[actor].id,
                target_kind=LikeTarget.VIDEO,
                target_id=videos[title].id,
            )
            _touch(summary, "likes", created)

    if verbose:
        LOGGER.debug("relations summary %s", summary)
    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run every seeder in foreign-key order and merge their counters."""
    if verbose:
        LOGGER.info("Running full seed pipeline")
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_users, seed_content, seed_relations):
        for table, counters in func(database, verbose=verbose).items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["run_all", "seed_content", "seed_relations", "seed_users"]
