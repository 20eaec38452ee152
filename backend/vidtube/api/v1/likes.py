"""Like toggles and liked-video listing."""

from __future__ import annotations

from flask import Blueprint

from vidtube.api.deps import api_response, path_id, require_auth, service_ctx, timing
from vidtube.schemas import ToggleResultSchema, VideoSchema
from vidtube.services.relations.dto import RelationshipKind
from vidtube.services.relations.service import ToggleService

bp = Blueprint("likes", __name__)

toggle_schema = ToggleResultSchema()
video_list_schema = VideoSchema(many=True)

# URL segment -> (edge kind, name of the id in error messages)
_TARGETS = {
    "v": (RelationshipKind.VIDEO_LIKE, "videoId"),
    "c": (RelationshipKind.COMMENT_LIKE, "commentId"),
    "t": (RelationshipKind.TWEET_LIKE, "tweetId"),
}


def _toggle(kind: RelationshipKind, raw_id: str, id_name: str):
    result = ToggleService(ctx=service_ctx()).toggle(path_id(raw_id, id_name), kind)
    label = kind.target_label
    message = f"{label} liked successfully" if result.active else f"{label} unliked successfully"
    return api_response(toggle_schema.dump(result), message)


@bp.post("/toggle/v/<video_id>")
@require_auth
@timing
def toggle_video_like(video_id: str):
    kind, name = _TARGETS["v"]
    return _toggle(kind, video_id, name)


@bp.post("/toggle/c/<comment_id>")
@require_auth
@timing
def toggle_comment_like(comment_id: str):
    kind, name = _TARGETS["c"]
    return _toggle(kind, comment_id, name)


@bp.post("/toggle/t/<tweet_id>")
@require_auth
@timing
def toggle_tweet_like(tweet_id: str):
    kind, name = _TARGETS["t"]
    return _toggle(kind, tweet_id, name)


@bp.get("/videos")
@require_auth
@timing
def liked_videos():
    videos = ToggleService(ctx=service_ctx()).list_liked_videos()
    return api_response(video_list_schema.dump(videos), "Liked videos fetched successfully")
