"""
IdentityService
===============

Use cases over the ``User`` aggregate: registration, profile reads and
updates, password changes, avatar/cover replacement, channel profile and
watch history.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidtube.services._shared.base import BaseService, ServiceContext
from vidtube.services._shared.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    ServerError,
    violates,
)
from vidtube.services._shared.ports import (
    IncomingFile,
    MediaUploader,
    UploadedMedia,
    key_from_url,
)
from vidtube.services._shared.validation import require_fields
from vidtube.services.identity.dto import (
    AccountUpdateIn,
    ChannelProfileOut,
    PasswordChangeIn,
    UserPublicOut,
    UserRegisterIn,
)
from vidtube.services.videos.dto import VideoOut

logger = logging.getLogger(__name__)

USER_EXISTS = "User with email or username already exists"


class IdentityService(BaseService):
    """
    Application service for the ``User`` aggregate.

    :param media: Storage port used for avatar and cover uploads.
    :param ctx: Request context; ``actor_id`` is the authenticated user.
    """

    def __init__(self, *, media: MediaUploader, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.media = media

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Register a new account.

        Uploads happen only after the uniqueness pre-check so that a
        duplicate registration never leaves orphaned media behind.

        :raises InvalidInputError: Blank fields or missing avatar.
        :raises ConflictError: Username or email already taken.
        :raises MediaUploadError: Avatar or cover upload failed.
        """
        require_fields(
            {
                "fullName": dto.full_name,
                "email": dto.email,
                "username": dto.username,
                "password": dto.password,
            },
            "fullName",
            "email",
            "username",
            "password",
        )
        if dto.avatar is None or not dto.avatar.filename:
            raise InvalidInputError("Avatar file is required!")

        with self.ro_uow() as uow:
            if uow.users.exists_by_username_or_email(dto.username, dto.email):
                raise ConflictError("User", USER_EXISTS)

        avatar = self.media.upload(dto.avatar, folder="avatars")
        cover: UploadedMedia | None = None
        if dto.cover_image is not None and dto.cover_image.filename:
            cover = self.media.upload(dto.cover_image, folder="covers")

        try:
            with self.rw_uow() as uow:
                try:
                    user = uow.users.model(
                        full_name=dto.full_name,
                        email=dto.email,
                        username=dto.username,
                        password=dto.password,
                        avatar=avatar.url,
                        cover_image=cover.url if cover else None,
                    )
                except ValueError as exc:
                    raise InvalidInputError(str(exc)) from exc
                try:
                    uow.users.add(user)
                except IntegrityError as exc:
                    if violates(exc, "uq_users_email") or violates(exc, "users.email"):
                        raise ConflictError("User", USER_EXISTS) from exc
                    if violates(exc, "uq_users_username") or violates(exc, "users.username"):
                        raise ConflictError("User", USER_EXISTS) from exc
                    raise ServerError("Something went wrong while registering the user!") from exc
                out = UserPublicOut.from_model(user)
        except Exception:
            self.media.delete(avatar.key)
            if cover:
                self.media.delete(cover.key)
            raise

        logger.info("User registered", extra={"user_id": out.id, "username": out.username})
        return out

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: int) -> UserPublicOut:
        """
        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id, "User does not exist")
            return UserPublicOut.from_model(user)

    def get_channel_profile(self, username: str) -> ChannelProfileOut:
        """Channel header with subscriber counters and the caller's subscription flag."""
        username = self.require_text(username, "username is missing")
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(username)
            if user is None:
                raise NotFoundError("Channel", username, "channel does not exists")
            is_subscribed = False
            if self.ctx.actor_id is not None:
                is_subscribed = uow.subscriptions.is_subscribed(self.ctx.actor_id, user.id)
            return ChannelProfileOut(
                id=user.id,
                username=user.username,
                full_name=user.full_name,
                email=user.email,
                avatar=user.avatar,
                cover_image=user.cover_image,
                subscribers_count=uow.users.count_subscribers(user.id),
                channels_subscribed_to_count=uow.users.count_subscriptions(user.id),
                is_subscribed=is_subscribed,
            )

    def get_watch_history(self) -> list[VideoOut]:
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            return [VideoOut.from_model(v) for v in uow.users.watch_history(actor_id)]

    # --------------------------------------------------------------------- #
    # Updates
    # --------------------------------------------------------------------- #

    def update_account(self, dto: AccountUpdateIn) -> UserPublicOut:
        """
        Update full name and/or email. At least one must be provided.

        :raises InvalidInputError: Nothing to update or blank values.
        :raises ConflictError: Email already used by another account.
        """
        actor_id = self.require_actor()
        fields: dict[str, str] = {}
        if dto.full_name is not None:
            fields["full_name"] = self.require_text(dto.full_name, "fullName must not be blank")
        if dto.email is not None:
            fields["email"] = self.require_text(dto.email, "email must not be blank")
        if not fields:
            raise InvalidInputError("At least one field is required!")

        with self.rw_uow() as uow:
            user = uow.users.get_for_update(actor_id)
            if user is None:
                raise NotFoundError("User", actor_id, "User does not exist")
            if "email" in fields:
                other = uow.users.get_by_email(fields["email"])
                if other is not None and other.id != user.id:
                    raise ConflictError("User", "Email is already in use")
            try:
                uow.users.assign_updates(user, fields)
            except ValueError as exc:
                raise InvalidInputError(str(exc)) from exc
            except IntegrityError as exc:
                raise ConflictError("User", "Email is already in use") from exc
            out = UserPublicOut.from_model(user)

        logger.info("Account updated", extra={"user_id": actor_id, "fields": sorted(fields)})
        return out

    def change_password(self, dto: PasswordChangeIn) -> None:
        """
        :raises InvalidInputError: Blank input or wrong current password.
        """
        actor_id = self.require_actor()
        require_fields(
            {"oldPassword": dto.old_password, "newPassword": dto.new_password},
            "oldPassword",
            "newPassword",
        )
        with self.rw_uow() as uow:
            user = uow.users.get_for_update(actor_id)
            if user is None:
                raise NotFoundError("User", actor_id, "User does not exist")
            if not user.is_password_correct(dto.old_password):
                raise InvalidInputError("Invalid old password")
            uow.users.set_password(user, dto.new_password)
        logger.info("Password changed", extra={"user_id": actor_id})

    def update_avatar(self, file: IncomingFile | None) -> UserPublicOut:
        return self._replace_image(file, field="avatar", folder="avatars", label="Avatar")

    def update_cover_image(self, file: IncomingFile | None) -> UserPublicOut:
        return self._replace_image(file, field="cover_image", folder="covers", label="Cover image")

    def _replace_image(
        self, file: IncomingFile | None, *, field: str, folder: str, label: str
    ) -> UserPublicOut:
        actor_id = self.require_actor()
        if file is None or not file.filename:
            raise InvalidInputError(f"{label} file is missing")

        uploaded = self.media.upload(file, folder=folder)
        try:
            with self.rw_uow() as uow:
                user = uow.users.get_for_update(actor_id)
                if user is None:
                    raise NotFoundError("User", actor_id, "User does not exist")
                previous = getattr(user, field)
                uow.users.assign_updates(user, {field: uploaded.url})
                out = UserPublicOut.from_model(user)
        except Exception:
            self.media.delete(uploaded.key)
            raise

        if previous:
            self._delete_previous(previous)
        logger.info(f"{label} updated", extra={"user_id": actor_id, "key": uploaded.key})
        return out

    def _delete_previous(self, url: str) -> None:
        key = key_from_url(url)
        if key:
            self.media.delete(key)
