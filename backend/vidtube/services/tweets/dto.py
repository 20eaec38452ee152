"""DTOs for tweets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidtube.services._shared.dto import OwnerOut


@dataclass(frozen=True, slots=True)
class TweetOut:
    id: int
    content: str
    owner: OwnerOut
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, tweet) -> TweetOut:
        return cls(
            id=tweet.id,
            content=tweet.content,
            owner=OwnerOut.from_model(tweet.owner),
            created_at=tweet.created_at,
            updated_at=tweet.updated_at,
        )
