"""DTOs for comments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidtube.services._shared.dto import OwnerOut


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    video_id: int
    content: str
    owner: OwnerOut
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, comment) -> CommentOut:
        return cls(
            id=comment.id,
            video_id=comment.video_id,
            content=comment.content,
            owner=OwnerOut.from_model(comment.owner),
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
