"""User and auth schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class _Lenient(Schema):
    # blank/missing checks happen in the services so messages stay uniform
    class Meta:
        unknown = EXCLUDE


class RegisterSchema(_Lenient):
    """Text fields of the multipart registration form."""

    full_name = fields.String(data_key="fullName", load_default=None)
    email = fields.String(load_default=None)
    username = fields.String(load_default=None)
    password = fields.String(load_default=None)


class LoginSchema(_Lenient):
    username = fields.String(load_default=None)
    email = fields.String(load_default=None)
    password = fields.String(load_default=None)


class RefreshSchema(_Lenient):
    refresh_token = fields.String(data_key="refreshToken", load_default=None)


class ChangePasswordSchema(_Lenient):
    old_password = fields.String(data_key="oldPassword", load_default=None)
    new_password = fields.String(data_key="newPassword", load_default=None)


class AccountUpdateSchema(_Lenient):
    full_name = fields.String(data_key="fullName", load_default=None)
    email = fields.String(load_default=None)


class UserSchema(Schema):
    """Public representation of a user."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    full_name = fields.String(data_key="fullName")
    avatar = fields.String()
    cover_image = fields.String(data_key="coverImage", allow_none=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)


class ChannelProfileSchema(Schema):
    id = fields.Integer()
    username = fields.String()
    full_name = fields.String(data_key="fullName")
    email = fields.String()
    avatar = fields.String()
    cover_image = fields.String(data_key="coverImage", allow_none=True)
    subscribers_count = fields.Integer(data_key="subscribersCount")
    channels_subscribed_to_count = fields.Integer(data_key="channelsSubscribedToCount")
    is_subscribed = fields.Boolean(data_key="isSubscribed")


class AuthSessionSchema(Schema):
    """Login/refresh payload: user (login only) plus both tokens."""

    user = fields.Nested(UserSchema, allow_none=True)
    access_token = fields.String(data_key="accessToken")
    refresh_token = fields.String(data_key="refreshToken")
