"""User and auth endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidtube.api.deps import (
    api_response,
    clear_auth_cookies,
    current_user,
    media,
    path_id,
    require_auth,
    service_ctx,
    set_auth_cookies,
    timing,
    tokens,
)
from vidtube.schemas import (
    AccountUpdateSchema,
    AuthSessionSchema,
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    UserSchema,
    VideoSchema,
)
from vidtube.services.auth.dto import LoginIn
from vidtube.services.auth.gate import REFRESH_COOKIE
from vidtube.services.auth.service import TokenService
from vidtube.services.identity.dto import AccountUpdateIn, PasswordChangeIn, UserRegisterIn
from vidtube.services.identity.service import IdentityService

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
password_schema = ChangePasswordSchema()
account_schema = AccountUpdateSchema()
user_schema = UserSchema()
session_schema = AuthSessionSchema()
channel_schema = ChannelProfileSchema()
video_list_schema = VideoSchema(many=True)


def _identity() -> IdentityService:
    return IdentityService(media=media(), ctx=service_ctx())


def _token_service() -> TokenService:
    return TokenService(tokens=tokens(), ctx=service_ctx())


def _body() -> dict:
    return request.get_json(silent=True) or request.form.to_dict() or {}


@bp.post("/register")
@timing
def register():
    """Create an account from a multipart form with ``avatar`` and optional ``coverImage``."""
    data = register_schema.load(request.form.to_dict() or request.get_json(silent=True) or {})
    dto = UserRegisterIn(
        full_name=data["full_name"],
        email=data["email"],
        username=data["username"],
        password=data["password"],
        avatar=request.files.get("avatar"),
        cover_image=request.files.get("coverImage"),
    )
    user = _identity().register(dto)
    return api_response(user_schema.dump(user), "User Registered Successfully", status=201)


@bp.post("/login")
@timing
def login():
    data = login_schema.load(_body())
    session = _token_service().login(
        LoginIn(password=data["password"], username=data["username"], email=data["email"])
    )
    body = session_schema.dump(
        {
            "user": session.user,
            "access_token": session.tokens.access_token,
            "refresh_token": session.tokens.refresh_token,
        }
    )
    return set_auth_cookies(api_response(body, "User logged in successfully"), session.tokens)


@bp.post("/logout")
@require_auth
@timing
def logout():
    _token_service().revoke(current_user().id)
    return clear_auth_cookies(api_response({}, "User logged out successfully"))


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the pair; the cookie wins over the JSON ``refreshToken`` field."""
    incoming = request.cookies.get(REFRESH_COOKIE) or refresh_schema.load(_body())["refresh_token"]
    pair = _token_service().rotate(incoming)
    body = session_schema.dump(
        {"access_token": pair.access_token, "refresh_token": pair.refresh_token}
    )
    return set_auth_cookies(api_response(body, "Access token refreshed"), pair)


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    data = password_schema.load(_body())
    _identity().change_password(
        PasswordChangeIn(old_password=data["old_password"], new_password=data["new_password"])
    )
    return api_response({}, "Password changed successfully")


@bp.get("/current-user")
@require_auth
@timing
def get_current_user():
    return api_response(user_schema.dump(current_user()), "User fetched successfully")


@bp.patch("/update-account")
@require_auth
@timing
def update_account():
    data = account_schema.load(_body())
    user = _identity().update_account(
        AccountUpdateIn(full_name=data["full_name"], email=data["email"])
    )
    return api_response(user_schema.dump(user), "Account details updated successfully")


@bp.patch("/avatar")
@require_auth
@timing
def update_avatar():
    user = _identity().update_avatar(request.files.get("avatar"))
    return api_response(user_schema.dump(user), "Avatar image updated successfully")


@bp.patch("/cover-image")
@require_auth
@timing
def update_cover_image():
    user = _identity().update_cover_image(request.files.get("coverImage"))
    return api_response(user_schema.dump(user), "Cover image updated successfully")


@bp.get("/u/<user_id>")
@require_auth
@timing
def get_user(user_id: str):
    user = _identity().get_user(path_id(user_id, "userId"))
    return api_response(user_schema.dump(user), "User fetched successfully")


@bp.get("/c/<username>")
@require_auth
@timing
def channel_profile(username: str):
    profile = _identity().get_channel_profile(username)
    return api_response(channel_schema.dump(profile), "User channel fetched successfully")


@bp.get("/history")
@require_auth
@timing
def watch_history():
    videos = _identity().get_watch_history()
    return api_response(video_list_schema.dump(videos), "Watch history fetched successfully")
