"""Like/subscription and dashboard schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class ToggleResultSchema(Schema):
    actor_id = fields.Integer(data_key="actorId")
    target_id = fields.Integer(data_key="targetId")
    kind = fields.Function(lambda r: r.kind.value)
    active = fields.Boolean()


class ChannelStatsSchema(Schema):
    total_subscribers = fields.Integer(data_key="totalSubscribers")
    total_videos = fields.Integer(data_key="totalVideos")
    total_views = fields.Integer(data_key="totalViews")
    total_likes = fields.Integer(data_key="totalLikes")
