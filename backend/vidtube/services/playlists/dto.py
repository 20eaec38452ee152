"""DTOs for playlists."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidtube.services._shared.dto import OwnerOut
from vidtube.services.videos.dto import VideoOut


@dataclass(frozen=True, slots=True)
class PlaylistIn:
    """
    :param name: Non-blank playlist name.
    :param description: Non-blank description.
    """

    name: str
    description: str


@dataclass(frozen=True, slots=True)
class PlaylistOut:
    id: int
    name: str
    description: str
    owner: OwnerOut
    videos: list[VideoOut]
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, playlist, *, viewer_id: int | None = None) -> PlaylistOut:
        """Build the DTO; unpublished member videos are shown to their owner only."""
        videos = [
            VideoOut.from_model(v)
            for v in playlist.videos
            if v.is_published or v.owner_id == viewer_id
        ]
        return cls(
            id=playlist.id,
            name=playlist.name,
            description=playlist.description,
            owner=OwnerOut.from_model(playlist.owner),
            videos=videos,
            created_at=playlist.created_at,
            updated_at=playlist.updated_at,
        )
