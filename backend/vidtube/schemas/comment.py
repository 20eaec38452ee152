"""Comment and tweet schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .common import OwnerSchema


class ContentSchema(Schema):
    """``{"content": ...}`` bodies used by comments and tweets."""

    class Meta:
        unknown = EXCLUDE

    content = fields.String(load_default=None)


class CommentSchema(Schema):
    id = fields.Integer(required=True)
    video_id = fields.Integer(data_key="videoId")
    content = fields.String()
    owner = fields.Nested(OwnerSchema)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)


class TweetSchema(Schema):
    id = fields.Integer(required=True)
    content = fields.String()
    owner = fields.Nested(OwnerSchema)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
