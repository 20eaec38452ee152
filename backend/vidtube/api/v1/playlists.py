"""Playlist endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidtube.api.deps import api_response, path_id, require_auth, service_ctx, timing
from vidtube.schemas import PlaylistSchema, PlaylistWriteSchema
from vidtube.services.playlists.dto import PlaylistIn
from vidtube.services.playlists.service import PlaylistService

bp = Blueprint("playlists", __name__)

playlist_schema = PlaylistSchema()
write_schema = PlaylistWriteSchema()


def _service() -> PlaylistService:
    return PlaylistService(ctx=service_ctx())


def _payload() -> PlaylistIn:
    data = write_schema.load(request.get_json(silent=True) or request.form.to_dict())
    return PlaylistIn(name=data["name"], description=data["description"])


@bp.post("")
@require_auth
@timing
def create_playlist():
    playlist = _service().create(_payload())
    return api_response(playlist_schema.dump(playlist), "Playlist created successfully", status=201)


@bp.get("/<playlist_id>")
@require_auth
@timing
def get_playlist(playlist_id: str):
    playlist = _service().get(path_id(playlist_id, "playlistId"))
    return api_response(playlist_schema.dump(playlist), "Playlist fetched successfully")


@bp.patch("/<playlist_id>")
@require_auth
@timing
def update_playlist(playlist_id: str):
    pid = path_id(playlist_id, "playlistId")
    playlist = _service().update(pid, _payload())
    return api_response(playlist_schema.dump(playlist), "Playlist updated successfully")


@bp.delete("/<playlist_id>")
@require_auth
@timing
def delete_playlist(playlist_id: str):
    playlist = _service().delete(path_id(playlist_id, "playlistId"))
    return api_response(playlist_schema.dump(playlist), "Playlist deleted successfully")


@bp.patch("/add/<playlist_id>/<video_id>")
@require_auth
@timing
def add_video(playlist_id: str, video_id: str):
    pid = path_id(playlist_id, "playlistId")
    vid = path_id(video_id, "videoId")
    playlist = _service().add_video(pid, vid)
    return api_response(playlist_schema.dump(playlist), "Video added to playlist successfully")


@bp.patch("/remove/<playlist_id>/<video_id>")
@require_auth
@timing
def remove_video(playlist_id: str, video_id: str):
    pid = path_id(playlist_id, "playlistId")
    vid = path_id(video_id, "videoId")
    playlist = _service().remove_video(pid, vid)
    return api_response(playlist_schema.dump(playlist), "Video removed from playlist successfully")


@bp.get("/user/<user_id>")
@require_auth
@timing
def user_playlists(user_id: str):
    playlists = _service().list_for_user(path_id(user_id, "userId"))
    return api_response(playlist_schema.dump(playlists, many=True), "Playlists fetched successfully")
