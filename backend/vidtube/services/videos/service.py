"""
VideoService
============

Publishing, listing, updating and deleting videos; publish toggling and
view recording. Mutations are owner-gated; unpublished videos are visible
to their owner only.
"""

from __future__ import annotations

import logging

from vidtube.repositories.base import Pagination
from vidtube.services._shared.base import BaseService, ServiceContext
from vidtube.services._shared.dto import PageOut
from vidtube.services._shared.errors import InvalidInputError, NotFoundError, ServerError
from vidtube.services._shared.ports import MediaUploader, key_from_url
from vidtube.services.videos.dto import VideoOut, VideoPublishIn, VideoUpdateIn
from vidtube.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)

VIDEO_NOT_FOUND = "Video not found with given Id!"


class VideoService(BaseService):
    """
    :param media: Storage port for video files and thumbnails.
    :param ctx: Request context; ``actor_id`` drives visibility and ownership.
    """

    def __init__(self, *, media: MediaUploader, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.media = media

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def list(
        self,
        user_id: int,
        pagination: Pagination,
        *,
        query: str | None = None,
        is_published: bool | None = None,
    ) -> PageOut[VideoOut]:
        """
        Page through a channel's videos.

        :param query: Optional title or description search term.
        :param is_published: Optional publish-state filter. Strangers never see
            unpublished videos whatever its value.
        :raises NotFoundError: The channel user does not exist.
        """
        search = (query or "").strip() or None
        filters = {} if is_published is None else {"is_published": is_published}
        pagination = self.ensure_pagination(
            page=pagination.page, limit=pagination.limit, sort=pagination.sort
        )
        with self.ro_uow() as uow:
            if not uow.users.exists_id(user_id):
                raise NotFoundError("User", user_id, "No user found with given userId!")
            page = uow.videos.paginate_for_owner(
                user_id,
                pagination,
                include_unpublished=self.ctx.actor_id == user_id,
                search=search,
                filters=filters,
            )
            return PageOut.from_page(page, [VideoOut.from_model(v) for v in page.items])

    def get(self, video_id: int) -> VideoOut:
        """
        :raises NotFoundError: Missing, or unpublished and not owned by the caller.
        """
        with self.ro_uow() as uow:
            video = uow.videos.get(video_id)
            if video is None or not self._visible(video):
                raise NotFoundError("Video", video_id, VIDEO_NOT_FOUND)
            return VideoOut.from_model(video)

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def publish(self, dto: VideoPublishIn) -> VideoOut:
        """
        Upload both files, then persist the video.

        Uploaded media is deleted again when the database write fails.

        :raises InvalidInputError: Blank text fields or missing files.
        :raises MediaUploadError: Storage failure.
        """
        actor_id = self.require_actor()
        title = self.require_text(dto.title, "All fields are required!")
        description = self.require_text(dto.description, "All fields are required!")
        if dto.video_file is None or not dto.video_file.filename:
            raise InvalidInputError("Video file is required!")
        if dto.thumbnail is None or not dto.thumbnail.filename:
            raise InvalidInputError("Thumbnail file is required!")
        duration = self._parse_duration(dto.duration)

        video_media = self.media.upload(dto.video_file, folder="videos")
        try:
            thumb_media = self.media.upload(dto.thumbnail, folder="thumbnails")
        except Exception:
            self.media.delete(video_media.key)
            raise

        try:
            with self.rw_uow() as uow:
                video = uow.videos.model(
                    owner_id=actor_id,
                    title=title,
                    description=description,
                    video_file=video_media.url,
                    thumbnail=thumb_media.url,
                    duration=duration,
                    views=0,
                    is_published=True,
                )
                uow.videos.add(video)
                uow.session.refresh(video)
                out = VideoOut.from_model(video)
        except Exception:
            self.media.delete(video_media.key)
            self.media.delete(thumb_media.key)
            raise

        logger.info("Video published", extra={"video_id": out.id, "owner_id": actor_id})
        return out

    def update(self, video_id: int, dto: VideoUpdateIn) -> VideoOut:
        """
        Replace title and description, and the thumbnail when one is sent.

        A new thumbnail is uploaded before the row is locked. It is deleted
        again when the write fails; on success the old one is deleted.

        :raises AuthorizationError: Caller is not the owner.
        """
        self.require_actor()
        title = self.require_text(dto.title, "All fields are required!")
        description = self.require_text(dto.description, "All fields are required!")

        uploaded = None
        if dto.thumbnail is not None and dto.thumbnail.filename:
            uploaded = self.media.upload(dto.thumbnail, folder="thumbnails")

        previous = None
        try:
            with self.rw_uow() as uow:
                video = self._owned_for_update(
                    uow, video_id, "Unauthorized to update video details!"
                )
                fields: dict[str, object] = {"title": title, "description": description}
                if uploaded is not None:
                    previous = video.thumbnail
                    fields["thumbnail"] = uploaded.url
                uow.videos.assign_updates(video, fields)
                uow.session.refresh(video)
                out = VideoOut.from_model(video)
        except Exception:
            if uploaded is not None:
                self.media.delete(uploaded.key)
            raise

        if previous:
            key = key_from_url(previous)
            if key:
                self.media.delete(key)
        logger.info("Video updated", extra={"video_id": video_id})
        return out

    def delete(self, video_id: int) -> VideoOut:
        """Delete the video with its comments, likes and playlist links."""
        self.require_actor()
        with self.rw_uow() as uow:
            video = self._owned_for_update(uow, video_id, "Unauthorized to delete video!")
            out = VideoOut.from_model(video)
            uow.videos.delete_cascade(video)
            if uow.videos.exists_id(video_id):
                raise ServerError("Something went wrong while deleting video!")

        logger.info("Video deleted", extra={"video_id": video_id})
        return out

    def toggle_publish(self, video_id: int) -> VideoOut:
        self.require_actor()
        with self.rw_uow() as uow:
            video = self._owned_for_update(
                uow, video_id, "Unauthorized to toggle video publish status!"
            )
            uow.videos.assign_updates(video, {"is_published": not video.is_published})
            out = VideoOut.from_model(video)

        logger.info(
            "Video publish status changed",
            extra={"video_id": video_id, "is_published": out.is_published},
        )
        return out

    def record_view(self, video_id: int) -> VideoOut:
        """
        Count a view and move the video to the head of the caller's history.
        """
        actor_id = self.require_actor()
        with self.rw_uow() as uow:
            video = uow.videos.get(video_id)
            if video is None or not self._visible(video):
                raise NotFoundError("Video", video_id, VIDEO_NOT_FOUND)
            uow.videos.increment_views(video_id)
            uow.users.push_watch_history(actor_id, video_id)
            uow.session.refresh(video)
            out = VideoOut.from_model(video)
        return out

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _visible(self, video) -> bool:
        return bool(video.is_published) or video.owner_id == self.ctx.actor_id

    def _owned_for_update(self, uow: SQLAlchemyUnitOfWork, video_id: int, message: str):
        video = uow.videos.get_for_update(video_id)
        if video is None:
            raise NotFoundError("Video", video_id, VIDEO_NOT_FOUND)
        self.ensure_owner(video.owner_id, msg=message)
        return video

    @staticmethod
    def _parse_duration(value) -> float:
        if value is None or value == "":
            return 0.0
        try:
            duration = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError("duration must be a number") from exc
        if duration < 0:
            raise InvalidInputError("duration must be >= 0")
        return duration
