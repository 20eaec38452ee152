"""Playlist repository, including membership writes."""

from __future__ import annotations

from sqlalchemy import delete, select

from vidtube.models.playlist import Playlist, playlist_videos

from .base import BaseRepository


class PlaylistRepository(BaseRepository[Playlist]):
    model = Playlist

    def _sortable_fields(self):
        return {"createdAt": Playlist.created_at, "name": Playlist.name}

    def _filterable_fields(self):
        return {"owner_id": Playlist.owner_id}

    def _updatable_fields(self):
        return {"name", "description"}

    def list_for_owner(self, owner_id: int) -> list[Playlist]:
        return self.list(filters={"owner_id": owner_id})

    def contains(self, playlist_id: int, video_id: int) -> bool:
        stmt = select(playlist_videos.c.video_id).where(
            playlist_videos.c.playlist_id == playlist_id,
            playlist_videos.c.video_id == video_id,
        )
        return self.session.execute(stmt).first() is not None

    def add_video(self, playlist: Playlist, video_id: int) -> bool:
        """Link ``video_id``; returns ``False`` when it was already present."""
        if self.contains(playlist.id, video_id):
            return False
        self.session.execute(
            playlist_videos.insert().values(playlist_id=playlist.id, video_id=video_id)
        )
        self.session.expire(playlist, ["videos"])
        return True

    def remove_video(self, playlist: Playlist, video_id: int) -> bool:
        """Unlink ``video_id``; returns ``False`` when it was absent."""
        result = self.session.execute(
            delete(playlist_videos).where(
                playlist_videos.c.playlist_id == playlist.id,
                playlist_videos.c.video_id == video_id,
            )
        )
        self.session.expire(playlist, ["videos"])
        return bool(result.rowcount)

    def delete_with_links(self, playlist: Playlist) -> None:
        # the ORM removes secondary rows for the loaded collection
        self.session.refresh(playlist, ["videos"])
        self.delete(playlist)
