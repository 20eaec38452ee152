"""Like edge repository."""

from __future__ import annotations

from sqlalchemy import delete, func, select

from vidtube.models.like import Like, LikeTarget
from vidtube.models.video import Video

from .base import BaseRepository


class LikeRepository(BaseRepository[Like]):
    model = Like

    def _filterable_fields(self):
        return {
            "liked_by_id": Like.liked_by_id,
            "target_kind": Like.target_kind,
            "target_id": Like.target_id,
        }

    def remove_edge(self, actor_id: int, kind: LikeTarget, target_id: int) -> int:
        """Delete the edge if present; returns the number of rows removed."""
        result = self.session.execute(
            delete(Like)
            .where(
                Like.liked_by_id == actor_id,
                Like.target_kind == kind,
                Like.target_id == target_id,
            )
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def add_edge(self, actor_id: int, kind: LikeTarget, target_id: int) -> Like:
        return self.add(Like(liked_by_id=actor_id, target_kind=kind, target_id=target_id))

    def liked_videos(self, actor_id: int) -> list[Video]:
        """Videos liked by ``actor_id``, newest like first."""
        stmt = (
            select(Video)
            .join(Like, (Like.target_id == Video.id) & (Like.target_kind == LikeTarget.VIDEO))
            .where(Like.liked_by_id == actor_id)
            .order_by(Like.created_at.desc(), Like.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def total_video_likes_for_channel(self, owner_id: int) -> int:
        stmt = (
            select(func.count(Like.id))
            .join(Video, (Like.target_id == Video.id) & (Like.target_kind == LikeTarget.VIDEO))
            .where(Video.owner_id == owner_id)
        )
        return int(self.session.execute(stmt).scalar_one())
