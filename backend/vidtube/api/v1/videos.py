"""Video endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidtube.api.deps import (
    api_response,
    media,
    parse_pagination,
    path_id,
    require_auth,
    service_ctx,
    timing,
)
from vidtube.schemas import (
    VideoListQuerySchema,
    VideoPublishSchema,
    VideoSchema,
    VideoUpdateSchema,
    dump_page,
)
from vidtube.services.videos.dto import VideoPublishIn, VideoUpdateIn
from vidtube.services.videos.service import VideoService

bp = Blueprint("videos", __name__)

video_schema = VideoSchema()
list_query_schema = VideoListQuerySchema()
publish_schema = VideoPublishSchema()
update_schema = VideoUpdateSchema()


def _service() -> VideoService:
    return VideoService(media=media(), ctx=service_ctx())


@bp.get("")
@require_auth
@timing
def list_videos():
    """Paged videos of ``userId``; unpublished ones only for their owner."""
    args = list_query_schema.load(request.args)
    user_id = path_id(args["user_id"], "userId")
    page = _service().list(
        user_id,
        parse_pagination(),
        query=args["query"],
        is_published=args["is_published"],
    )
    return api_response(dump_page(page, video_schema), "Videos fetched successfully")


@bp.post("/publish")
@require_auth
@timing
def publish_video():
    data = publish_schema.load(request.form.to_dict())
    video = _service().publish(
        VideoPublishIn(
            title=data["title"],
            description=data["description"],
            video_file=request.files.get("videoFile"),
            thumbnail=request.files.get("thumbnail"),
            duration=data["duration"],
        )
    )
    return api_response(video_schema.dump(video), "Video published successfully", status=201)


@bp.get("/<video_id>")
@require_auth
@timing
def get_video(video_id: str):
    video = _service().get(path_id(video_id, "videoId"))
    return api_response(video_schema.dump(video), "Video fetched successfully")


@bp.patch("/<video_id>")
@require_auth
@timing
def update_video(video_id: str):
    vid = path_id(video_id, "videoId")
    data = update_schema.load(request.form.to_dict() or request.get_json(silent=True) or {})
    video = _service().update(
        vid,
        VideoUpdateIn(
            title=data["title"],
            description=data["description"],
            thumbnail=request.files.get("thumbnail"),
        ),
    )
    return api_response(video_schema.dump(video), "Video details updated successfully")


@bp.delete("/<video_id>")
@require_auth
@timing
def delete_video(video_id: str):
    video = _service().delete(path_id(video_id, "videoId"))
    return api_response({"deletedVideo": video_schema.dump(video)}, "Video deleted successfully")


@bp.patch("/toggle/publish/<video_id>")
@require_auth
@timing
def toggle_publish(video_id: str):
    video = _service().toggle_publish(path_id(video_id, "videoId"))
    state = "published" if video.is_published else "unpublished"
    return api_response(
        video_schema.dump(video), f"Successfully set video publish status to {state}"
    )


@bp.get("/view/<video_id>")
@require_auth
@timing
def record_view(video_id: str):
    video = _service().record_view(path_id(video_id, "videoId"))
    return api_response(video_schema.dump(video), "Video view recorded")
