"""S3-compatible media storage (AWS S3, MinIO) via boto3."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import Any
from uuid import uuid4

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from vidtube.core.settings import MediaSettings
from vidtube.services._shared.errors import MediaUploadError
from vidtube.services._shared.ports import IncomingFile, MediaUploader, UploadedMedia, build_key
from vidtube.services._shared.ports.media_uploader import guess_content_type

logger = logging.getLogger(__name__)


def _default_client(settings: MediaSettings) -> Any:
    return boto3.client(
        "s3",
        aws_access_key_id=settings.access_key,
        aws_secret_access_key=settings.secret_key,
        region_name=settings.region,
        endpoint_url=settings.endpoint_url,
        config=Config(
            retries={"max_attempts": 1, "mode": "standard"},
            s3={"addressing_style": "path" if settings.endpoint_url else "virtual"},
        ),
    )


class S3MediaUploader(MediaUploader):
    """
    Stage an incoming file on local disk, push it to the bucket, then delete
    the staged copy whether or not the push succeeded.

    Parameters
    ----------
    settings : MediaSettings
        Bucket, credentials, staging directory and public URL base.
    client_factory : callable, optional
        Builds the S3 client from ``settings``; defaults to ``boto3.client``.
        The client is created lazily on first use.
    """

    def __init__(
        self,
        settings: MediaSettings,
        *,
        client_factory: Callable[[MediaSettings], Any] = _default_client,
    ) -> None:
        self.settings = settings
        self._client_factory = client_factory
        self._client: Any = None

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self._client_factory(self.settings)
        return self._client

    def public_url(self, key: str) -> str:
        s = self.settings
        if s.public_base_url:
            return f"{s.public_base_url.rstrip('/')}/{key}"
        if s.endpoint_url:
            return f"{s.endpoint_url.rstrip('/')}/{s.bucket}/{key}"
        return f"https://{s.bucket}.s3.{s.region or 'us-east-1'}.amazonaws.com/{key}"

    def _stage(self, file: IncomingFile) -> str:
        os.makedirs(self.settings.temp_dir, exist_ok=True)
        ext = os.path.splitext(file.filename or "")[1].lower()
        path = os.path.join(self.settings.temp_dir, f"{uuid4().hex}{ext}")
        file.save(path)
        return path

    def upload(self, file: IncomingFile, *, folder: str) -> UploadedMedia:
        key = build_key(folder, file.filename)
        content_type = guess_content_type(file)
        path: str | None = None
        try:
            path = self._stage(file)
            size = os.path.getsize(path)
            self.client.upload_file(
                path, self.settings.bucket, key, ExtraArgs={"ContentType": content_type}
            )
        except (BotoCoreError, ClientError, OSError) as exc:
            logger.error(
                "Media upload failed",
                extra={"bucket": self.settings.bucket, "key": key, "error": str(exc)},
            )
            raise MediaUploadError(f"Upload of '{file.filename}' failed.") from exc
        finally:
            if path and os.path.exists(path):
                os.remove(path)

        logger.info("Media uploaded", extra={"bucket": self.settings.bucket, "key": key, "size": size})
        return UploadedMedia(url=self.public_url(key), key=key, content_type=content_type, size=size)

    def delete(self, key: str) -> None:
        """Best-effort removal; failures are logged, never raised."""
        try:
            self.client.delete_object(Bucket=self.settings.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            logger.warning("Media delete failed", extra={"key": key, "error": str(exc)})
