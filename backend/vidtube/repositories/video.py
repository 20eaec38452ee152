"""Video repository."""

from __future__ import annotations

from sqlalchemy import and_, delete, func, or_, select, update

from vidtube.models.comment import Comment
from vidtube.models.like import Like, LikeTarget
from vidtube.models.playlist import playlist_videos
from vidtube.models.user import WatchHistoryEntry
from vidtube.models.video import Video

from .base import BaseRepository, Page, Pagination


class VideoRepository(BaseRepository[Video]):
    model = Video

    def _sortable_fields(self):
        return {
            "createdAt": Video.created_at,
            "updatedAt": Video.updated_at,
            "title": Video.title,
            "views": Video.views,
            "duration": Video.duration,
        }

    def _filterable_fields(self):
        return {"owner_id": Video.owner_id, "is_published": Video.is_published}

    def _updatable_fields(self):
        return {"title", "description", "thumbnail", "is_published"}

    def paginate_for_owner(
        self,
        owner_id: int,
        pagination: Pagination,
        *,
        include_unpublished: bool,
        search: str | None = None,
        filters: dict[str, object] | None = None,
    ) -> Page[Video]:
        """
        Page through one channel's videos.

        :param search: Case-insensitive substring of title or description.
        :param filters: Whitelisted equality filters (``is_published``).
        """
        stmt = select(Video).where(Video.owner_id == owner_id)
        if not include_unpublished:
            stmt = stmt.where(Video.is_published.is_(True))
        if search:
            stmt = stmt.where(
                or_(
                    Video.title.icontains(search, autoescape=True),
                    Video.description.icontains(search, autoescape=True),
                )
            )
        return self.paginate(pagination, filters=filters, stmt=stmt)

    def increment_views(self, video_id: int) -> None:
        """Atomic ``views = views + 1`` (no read-modify-write)."""
        self.session.execute(
            update(Video)
            .where(Video.id == video_id)
            .values(views=Video.views + 1)
            .execution_options(synchronize_session="fetch")
        )

    def delete_cascade(self, video: Video) -> None:
        """Delete ``video`` with its comments, likes, history and playlist links."""
        comment_ids = select(Comment.id).where(Comment.video_id == video.id)
        self.session.execute(
            delete(Like)
            .where(
                or_(
                    and_(Like.target_kind == LikeTarget.VIDEO, Like.target_id == video.id),
                    and_(
                        Like.target_kind == LikeTarget.COMMENT,
                        Like.target_id.in_(comment_ids),
                    ),
                )
            )
            .execution_options(synchronize_session=False)
        )
        self.session.execute(
            delete(playlist_videos).where(playlist_videos.c.video_id == video.id)
        )
        self.session.execute(
            delete(WatchHistoryEntry)
            .where(WatchHistoryEntry.video_id == video.id)
            .execution_options(synchronize_session=False)
        )
        # comments go through the ORM cascade on Video.comments
        self.delete(video)

    # ---------------------------- Channel stats ----------------------------

    def channel_totals(self, owner_id: int) -> tuple[int, int]:
        """Return ``(video_count, total_views)`` for a channel."""
        stmt = select(func.count(Video.id), func.coalesce(func.sum(Video.views), 0)).where(
            Video.owner_id == owner_id
        )
        count, views = self.session.execute(stmt).one()
        return int(count), int(views)
