"""Channel dashboard endpoints for the authenticated owner."""

from __future__ import annotations

from flask import Blueprint

from vidtube.api.deps import api_response, parse_pagination, require_auth, service_ctx, timing
from vidtube.schemas import ChannelStatsSchema, VideoSchema, dump_page
from vidtube.services.dashboard.service import DashboardService

bp = Blueprint("dashboard", __name__)

stats_schema = ChannelStatsSchema()
video_schema = VideoSchema()


@bp.get("/stats")
@require_auth
@timing
def channel_stats():
    stats = DashboardService(ctx=service_ctx()).channel_stats()
    return api_response(stats_schema.dump(stats), "Channel stats fetched successfully")


@bp.get("/videos")
@require_auth
@timing
def channel_videos():
    page = DashboardService(ctx=service_ctx()).channel_videos(parse_pagination())
    return api_response(dump_page(page, video_schema), "Channel videos fetched successfully")
