"""Comment endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidtube.api.deps import api_response, parse_pagination, path_id, require_auth, service_ctx, timing
from vidtube.schemas import CommentSchema, ContentSchema, dump_page
from vidtube.services.comments.service import CommentService

bp = Blueprint("comments", __name__)

comment_schema = CommentSchema()
content_schema = ContentSchema()


def _service() -> CommentService:
    return CommentService(ctx=service_ctx())


def _content() -> str | None:
    return content_schema.load(request.get_json(silent=True) or request.form.to_dict())["content"]


@bp.get("/<video_id>")
@require_auth
@timing
def list_comments(video_id: str):
    page = _service().list_for_video(path_id(video_id, "videoId"), parse_pagination())
    return api_response(dump_page(page, comment_schema), "Comments fetched successfully")


@bp.post("/<video_id>")
@require_auth
@timing
def add_comment(video_id: str):
    vid = path_id(video_id, "videoId")
    comment = _service().add(vid, _content())
    return api_response(comment_schema.dump(comment), "Comment added successfully", status=201)


@bp.patch("/c/<comment_id>")
@require_auth
@timing
def update_comment(comment_id: str):
    cid = path_id(comment_id, "commentId")
    comment = _service().update(cid, _content())
    return api_response(comment_schema.dump(comment), "Comment updated successfully")


@bp.delete("/c/<comment_id>")
@require_auth
@timing
def delete_comment(comment_id: str):
    comment = _service().delete(path_id(comment_id, "commentId"))
    return api_response(comment_schema.dump(comment), "Comment deleted successfully")
