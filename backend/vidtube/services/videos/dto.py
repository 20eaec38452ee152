"""DTOs for the video use cases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from vidtube.services._shared.dto import OwnerOut

if TYPE_CHECKING:
    from vidtube.models.video import Video
    from vidtube.services._shared.ports import IncomingFile


@dataclass(frozen=True, slots=True)
class VideoPublishIn:
    """
    :param title: Non-blank title.
    :param description: Non-blank description.
    :param video_file: Media upload (required).
    :param thumbnail: Image upload (required).
    :param duration: Seconds; the client reports it with the upload.
    """

    title: str
    description: str
    video_file: IncomingFile | None
    thumbnail: IncomingFile | None
    duration: float | None = None


@dataclass(frozen=True, slots=True)
class VideoUpdateIn:
    title: str
    description: str
    thumbnail: IncomingFile | None = None


@dataclass(frozen=True, slots=True)
class VideoOut:
    id: int
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float
    views: int
    is_published: bool
    owner: OwnerOut
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, video: Video) -> VideoOut:
        return cls(
            id=video.id,
            title=video.title,
            description=video.description,
            video_file=video.video_file,
            thumbnail=video.thumbnail,
            duration=video.duration,
            views=video.views,
            is_published=video.is_published,
            owner=OwnerOut.from_model(video.owner),
            created_at=video.created_at,
            updated_at=video.updated_at,
        )
