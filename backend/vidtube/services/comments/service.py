"""
CommentService: comments on videos. Edits and deletes are owner-gated.
"""

from __future__ import annotations

import logging

from vidtube.repositories.base import Pagination
from vidtube.services._shared.base import BaseService
from vidtube.services._shared.dto import PageOut
from vidtube.services._shared.errors import NotFoundError
from vidtube.services.comments.dto import CommentOut

logger = logging.getLogger(__name__)


class CommentService(BaseService):
    def list_for_video(self, video_id: int, pagination: Pagination) -> PageOut[CommentOut]:
        """
        :raises NotFoundError: The video does not exist or is hidden from the caller.
        """
        pagination = self.ensure_pagination(
            page=pagination.page, limit=pagination.limit, sort=pagination.sort
        )
        with self.ro_uow() as uow:
            video = uow.videos.get(video_id)
            if video is None or not (video.is_published or video.owner_id == self.ctx.actor_id):
                raise NotFoundError("Video", video_id, "Video not found with given Id!")
            page = uow.comments.paginate_for_video(video_id, pagination)
            return PageOut.from_page(page, [CommentOut.from_model(c) for c in page.items])

    def add(self, video_id: int, content: str) -> CommentOut:
        actor_id = self.require_actor()
        content = self.require_text(content, "Valid content is required!")
        with self.rw_uow() as uow:
            video = uow.videos.get(video_id)
            if video is None or not (video.is_published or video.owner_id == actor_id):
                raise NotFoundError("Video", video_id, "Video not found with given Id!")
            comment = uow.comments.add(
                uow.comments.model(owner_id=actor_id, video_id=video_id, content=content)
            )
            uow.session.refresh(comment)
            out = CommentOut.from_model(comment)
        logger.info("Comment added", extra={"comment_id": out.id, "video_id": video_id})
        return out

    def update(self, comment_id: int, content: str) -> CommentOut:
        """
        :raises InvalidInputError: Blank content.
        :raises NotFoundError: Unknown comment.
        :raises AuthorizationError: Caller is not the author.
        """
        self.require_actor()
        content = self.require_text(content, "Valid content is required!")
        with self.rw_uow() as uow:
            comment = uow.comments.get_for_update(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id, "Comment not found!")
            self.ensure_owner(comment.owner_id, msg="Unauthorized to update comment!")
            uow.comments.assign_updates(comment, {"content": content})
            out = CommentOut.from_model(comment)
        logger.info("Comment updated", extra={"comment_id": comment_id})
        return out

    def delete(self, comment_id: int) -> CommentOut:
        self.require_actor()
        with self.rw_uow() as uow:
            comment = uow.comments.get_for_update(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id, "Comment not found!")
            self.ensure_owner(comment.owner_id, msg="Unauthorized to delete comment!")
            out = CommentOut.from_model(comment)
            uow.comments.delete_with_likes(comment)
        logger.info("Comment deleted", extra={"comment_id": comment_id})
        return out
