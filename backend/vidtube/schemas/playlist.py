"""Playlist schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .common import OwnerSchema
from .video import VideoSchema


class PlaylistWriteSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(load_default=None)
    description = fields.String(load_default=None)


class PlaylistSchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String()
    description = fields.String()
    owner = fields.Nested(OwnerSchema)
    videos = fields.List(fields.Nested(VideoSchema))
    total_videos = fields.Function(lambda p: len(p.videos), data_key="totalVideos")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
