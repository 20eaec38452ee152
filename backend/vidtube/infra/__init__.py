"""Infrastructure adapters implementing the service-layer ports."""

from __future__ import annotations

from flask import Flask, current_app

from vidtube.core.settings import get_settings
from vidtube.services._shared.ports import InMemoryMediaUploader, MediaUploader, TokenProvider

TOKEN_PROVIDER_KEY = "vidtube.token_provider"
MEDIA_UPLOADER_KEY = "vidtube.media_uploader"


def init_app(app: Flask) -> None:
    """Build the token provider and media uploader once per app.

    ``MEDIA_BACKEND`` selects ``s3`` (default) or ``memory``.
    """
    from vidtube.infra.jwt import PyJWTTokenProvider
    from vidtube.infra.storage import S3MediaUploader

    with app.app_context():
        settings = get_settings()

    app.extensions[TOKEN_PROVIDER_KEY] = PyJWTTokenProvider(settings.token)
    if settings.media.backend == "memory":
        app.extensions[MEDIA_UPLOADER_KEY] = InMemoryMediaUploader()
    elif settings.media.backend == "s3":
        app.extensions[MEDIA_UPLOADER_KEY] = S3MediaUploader(settings.media)
    else:
        raise ValueError(f"Unknown MEDIA_BACKEND '{settings.media.backend}'.")


def get_token_provider() -> TokenProvider:
    return current_app.extensions[TOKEN_PROVIDER_KEY]


def get_media_uploader() -> MediaUploader:
    return current_app.extensions[MEDIA_UPLOADER_KEY]
