"""
Ports (hexagonal interfaces) the service layer depends on.

- :mod:`token_provider`: :class:`TokenProvider`, JWT signing and verification.
- :mod:`media_uploader`: :class:`MediaUploader`, durable storage for user
  media, plus :class:`InMemoryMediaUploader` for tests and local runs.

Concrete adapters live under :mod:`vidtube.infra`.
"""

from __future__ import annotations

from .media_uploader import (
    IncomingFile,
    InMemoryMediaUploader,
    MediaUploader,
    UploadedMedia,
    build_key,
    key_from_url,
)
from .token_provider import TokenProvider, TokenType

__all__ = [
    "IncomingFile",
    "InMemoryMediaUploader",
    "MediaUploader",
    "TokenProvider",
    "TokenType",
    "UploadedMedia",
    "build_key",
    "key_from_url",
]
