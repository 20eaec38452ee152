"""Configuration and settings loading."""

from __future__ import annotations

from datetime import timedelta

import pytest

from vidtube.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    get_config,
    parse_duration,
)
from vidtube.core.settings import load_settings


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("15m", timedelta(minutes=15)),
        ("1d", timedelta(days=1)),
        ("10D", timedelta(days=10)),
        ("3600", timedelta(seconds=3600)),
        (90, timedelta(seconds=90)),
        (timedelta(hours=2), timedelta(hours=2)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "ten minutes", "5y", "0", -1])
def test_parse_duration_rejects_invalid(raw):
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_env_bool(monkeypatch):
    monkeypatch.setenv("FLAG_ON", "Yes")
    monkeypatch.setenv("FLAG_OFF", "nope")
    monkeypatch.delenv("FLAG_MISSING", raising=False)
    assert env_bool("FLAG_ON") is True
    assert env_bool("FLAG_OFF", True) is False
    assert env_bool("FLAG_MISSING", True) is True


@pytest.mark.parametrize(
    "value,expected",
    [
        ("production", ProductionConfig),
        ("Testing", TestingConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_follows_app_env(monkeypatch, value, expected):
    monkeypatch.setenv("APP_ENV", value)
    assert get_config() is expected


def _config(**overrides):
    base = {
        "ACCESS_TOKEN_SECRET": "a",
        "REFRESH_TOKEN_SECRET": "r",
        "ACCESS_TOKEN_EXPIRY": "15m",
        "REFRESH_TOKEN_EXPIRY": "7d",
        "MEDIA_BACKEND": " S3 ",
        "MEDIA_BUCKET": "bucket",
        "COOKIE_SECURE": False,
    }
    base.update(overrides)
    return base


def test_load_settings_builds_frozen_tree():
    settings = load_settings(_config())
    assert settings.token.access_expires == timedelta(minutes=15)
    assert settings.token.refresh_expires == timedelta(days=7)
    assert settings.media.backend == "s3"
    assert settings.cookie_secure is False
    with pytest.raises(AttributeError):
        settings.cookie_secure = True  # type: ignore[misc]


@pytest.mark.parametrize(
    "overrides",
    [
        {"ACCESS_TOKEN_SECRET": ""},
        {"REFRESH_TOKEN_SECRET": None},
        {"REFRESH_TOKEN_SECRET": "a"},
    ],
)
def test_load_settings_requires_two_distinct_secrets(overrides):
    with pytest.raises(ValueError):
        load_settings(_config(**overrides))
