from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass, field
from typing import Protocol
from uuid import uuid4

from vidtube.services._shared.errors import MediaUploadError


class IncomingFile(Protocol):
    """Shape of an uploaded file (satisfied by :class:`werkzeug.datastructures.FileStorage`)."""

    filename: str | None
    mimetype: str

    def save(self, dst, buffer_size: int = ...) -> None: ...


@dataclass(frozen=True, slots=True)
class UploadedMedia:
    """
    Result of a successful upload.

    :param url: Public URL persisted on the owning record.
    :param key: Storage key, used for later deletion.
    :param content_type: MIME type recorded at upload.
    :param size: Size in bytes.
    """

    url: str
    key: str
    content_type: str
    size: int


class MediaUploader(Protocol):
    """Port for pushing user media to durable storage."""

    def upload(self, file: IncomingFile, *, folder: str) -> UploadedMedia:
        """Store ``file`` under ``folder``.

        :raises MediaUploadError: On any storage failure.
        """

    def delete(self, key: str) -> None:
        """Remove stored media; unknown keys are ignored."""


def build_key(folder: str, filename: str | None) -> str:
    """``<folder>/<uuid><ext>``; the extension comes from the client filename."""
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{folder.strip('/')}/{uuid4().hex}{ext}"


def key_from_url(url: str) -> str | None:
    """Storage key of a stored URL: its last two path segments, ``<folder>/<name>``."""
    parts = url.rstrip("/").split("/")
    if len(parts) < 2:
        return None
    return "/".join(parts[-2:])


def guess_content_type(file: IncomingFile) -> str:
    if file.mimetype:
        return file.mimetype
    guessed, _ = mimetypes.guess_type(file.filename or "")
    return guessed or "application/octet-stream"


@dataclass
class InMemoryMediaUploader(MediaUploader):
    """Keeps uploaded bytes in a dict; set ``fail=True`` to simulate outages."""

    base_url: str = "memory://media"
    fail: bool = False
    objects: dict[str, bytes] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)

    def upload(self, file: IncomingFile, *, folder: str) -> UploadedMedia:
        if self.fail:
            raise MediaUploadError(f"Upload to '{folder}' failed.")
        key = build_key(folder, file.filename)
        stream = getattr(file, "stream", None)
        data = stream.read() if stream is not None else b""
        self.objects[key] = data
        return UploadedMedia(
            url=f"{self.base_url}/{key}",
            key=key,
            content_type=guess_content_type(file),
            size=len(data),
        )

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)
        self.deleted.append(key)
