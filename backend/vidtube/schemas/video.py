"""Video schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .common import OwnerSchema


class VideoListQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.String(data_key="userId", load_default=None)
    query = fields.String(load_default=None)
    is_published = fields.Boolean(data_key="isPublished", load_default=None)


class VideoPublishSchema(Schema):
    """Text fields of the multipart publish form."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None)
    description = fields.String(load_default=None)
    duration = fields.String(load_default=None)


class VideoUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None)
    description = fields.String(load_default=None)


class VideoSchema(Schema):
    id = fields.Integer(required=True)
    title = fields.String()
    description = fields.String()
    video_file = fields.String(data_key="videoFile")
    thumbnail = fields.String()
    duration = fields.Float()
    views = fields.Integer()
    is_published = fields.Boolean(data_key="isPublished")
    owner = fields.Nested(OwnerSchema)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
