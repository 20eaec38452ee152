"""Comment repository."""

from __future__ import annotations

from sqlalchemy import delete, select

from vidtube.models.comment import Comment
from vidtube.models.like import Like, LikeTarget

from .base import BaseRepository, Page, Pagination


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def _sortable_fields(self):
        return {"createdAt": Comment.created_at, "updatedAt": Comment.updated_at}

    def _filterable_fields(self):
        return {"video_id": Comment.video_id, "owner_id": Comment.owner_id}

    def _updatable_fields(self):
        return {"content"}

    def paginate_for_video(self, video_id: int, pagination: Pagination) -> Page[Comment]:
        return self.paginate(pagination, stmt=select(Comment).where(Comment.video_id == video_id))

    def delete_with_likes(self, comment: Comment) -> None:
        self.session.execute(
            delete(Like)
            .where(Like.target_kind == LikeTarget.COMMENT, Like.target_id == comment.id)
            .execution_options(synchronize_session=False)
        )
        self.delete(comment)
