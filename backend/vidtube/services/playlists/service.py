"""
PlaylistService
===============

Owner-curated video lists. Adding a video already present and removing one
that is absent are both no-ops.
"""

from __future__ import annotations

import logging

from vidtube.services._shared.base import BaseService
from vidtube.services._shared.errors import NotFoundError
from vidtube.services.playlists.dto import PlaylistIn, PlaylistOut
from vidtube.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)

PLAYLIST_NOT_FOUND = "No Playlist found!"


class PlaylistService(BaseService):
    def create(self, dto: PlaylistIn) -> PlaylistOut:
        actor_id = self.require_actor()
        name = self.require_text(dto.name, "All fields are required!")
        description = self.require_text(dto.description, "All fields are required!")
        with self.rw_uow() as uow:
            playlist = uow.playlists.add(
                uow.playlists.model(owner_id=actor_id, name=name, description=description)
            )
            uow.session.refresh(playlist)
            out = PlaylistOut.from_model(playlist, viewer_id=actor_id)
        logger.info("Playlist created", extra={"playlist_id": out.id})
        return out

    def get(self, playlist_id: int) -> PlaylistOut:
        with self.ro_uow() as uow:
            playlist = uow.playlists.get(playlist_id)
            if playlist is None:
                raise NotFoundError("Playlist", playlist_id, PLAYLIST_NOT_FOUND)
            return PlaylistOut.from_model(playlist, viewer_id=self.ctx.actor_id)

    def list_for_user(self, user_id: int) -> list[PlaylistOut]:
        with self.ro_uow() as uow:
            if not uow.users.exists_id(user_id):
                raise NotFoundError("User", user_id, "User not found")
            return [
                PlaylistOut.from_model(p, viewer_id=self.ctx.actor_id)
                for p in uow.playlists.list_for_owner(user_id)
            ]

    def update(self, playlist_id: int, dto: PlaylistIn) -> PlaylistOut:
        self.require_actor()
        name = self.require_text(dto.name, "All fields are required!")
        description = self.require_text(dto.description, "All fields are required!")
        with self.rw_uow() as uow:
            playlist = self._owned(uow, playlist_id, "Unauthorized to update playlist!")
            uow.playlists.assign_updates(playlist, {"name": name, "description": description})
            out = PlaylistOut.from_model(playlist, viewer_id=self.ctx.actor_id)
        logger.info("Playlist updated", extra={"playlist_id": playlist_id})
        return out

    def delete(self, playlist_id: int) -> PlaylistOut:
        self.require_actor()
        with self.rw_uow() as uow:
            playlist = self._owned(uow, playlist_id, "Unauthorized to delete playlist!")
            out = PlaylistOut.from_model(playlist, viewer_id=self.ctx.actor_id)
            uow.playlists.delete_with_links(playlist)
        logger.info("Playlist deleted", extra={"playlist_id": playlist_id})
        return out

    def add_video(self, playlist_id: int, video_id: int) -> PlaylistOut:
        """
        :raises NotFoundError: Unknown playlist or video.
        :raises AuthorizationError: Caller does not own the playlist.
        """
        self.require_actor()
        with self.rw_uow() as uow:
            playlist = self._owned(uow, playlist_id, "Unauthorized to modify playlist!")
            video = uow.videos.get(video_id)
            if video is None or not (video.is_published or video.owner_id == self.ctx.actor_id):
                raise NotFoundError("Video", video_id, "Video not found with given Id!")
            added = uow.playlists.add_video(playlist, video_id)
            out = PlaylistOut.from_model(playlist, viewer_id=self.ctx.actor_id)
        logger.info(
            "Playlist video added",
            extra={"playlist_id": playlist_id, "video_id": video_id, "changed": added},
        )
        return out

    def remove_video(self, playlist_id: int, video_id: int) -> PlaylistOut:
        self.require_actor()
        with self.rw_uow() as uow:
            playlist = self._owned(uow, playlist_id, "Unauthorized to modify playlist!")
            removed = uow.playlists.remove_video(playlist, video_id)
            out = PlaylistOut.from_model(playlist, viewer_id=self.ctx.actor_id)
        logger.info(
            "Playlist video removed",
            extra={"playlist_id": playlist_id, "video_id": video_id, "changed": removed},
        )
        return out

    def _owned(self, uow: SQLAlchemyUnitOfWork, playlist_id: int, message: str):
        playlist = uow.playlists.get_for_update(playlist_id)
        if playlist is None:
            raise NotFoundError("Playlist", playlist_id, PLAYLIST_NOT_FOUND)
        self.ensure_owner(playlist.owner_id, msg=message)
        return playlist
