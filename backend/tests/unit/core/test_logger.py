"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging
from types import SimpleNamespace

from flask import g

from vidtube.core.logger import JSONFormatter, RequestContextFilter, configure_logging


def test_configure_logging_sets_level() -> None:
    configure_logging("DEBUG")
    try:
        assert logging.getLogger().level == logging.DEBUG
    finally:
        configure_logging("WARNING")


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("vidtube.test", logging.INFO, __file__, 1, "Video %s", ("published",), None)
    record.video_id = 7
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "Video published"
    assert payload["level"] == "INFO"
    assert payload["video_id"] == 7
    assert payload["request_id"] is None


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("vidtube.test", logging.INFO, __file__, 1, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_context_filter_outside_request() -> None:
    record = _record()
    assert RequestContextFilter().filter(record) is True
    assert record.request_id is None
    assert record.actor_id is None
    assert record.path is None


def test_context_filter_stamps_request_and_caller(app) -> None:
    with app.test_request_context("/api/v1/videos", headers={"X-Request-ID": "req-1"}):
        g.pop("request_id", None)
        g.current_user = SimpleNamespace(id=5)
        try:
            record = _record()
            RequestContextFilter().filter(record)
            payload = json.loads(JSONFormatter().format(record))
        finally:
            g.pop("current_user", None)
            g.pop("request_id", None)

    assert payload["request_id"] == "req-1"
    assert payload["actor_id"] == 5
    assert payload["method"] == "GET"
    assert payload["path"] == "/api/v1/videos"


def test_context_filter_anonymous_request_keeps_explicit_actor(app) -> None:
    with app.test_request_context("/api/v1/healthcheck"):
        g.pop("current_user", None)
        try:
            anonymous = _record()
            RequestContextFilter().filter(anonymous)
            explicit = _record(actor_id=9)
            RequestContextFilter().filter(explicit)
        finally:
            g.pop("request_id", None)

    assert anonymous.actor_id is None
    assert anonymous.request_id
    assert explicit.actor_id == 9
