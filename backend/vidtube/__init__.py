"""Expose the application factory at package level.

Provide convenient access to :func:`vidtube.factory.create_app` so callers can
``from vidtube import create_app`` (e.g. ``gunicorn "vidtube:create_app()"``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
