"""Settings — defaults, environment overrides and derived durations."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from burnerlink.config import Settings


def test_defaults_match_reference_behaviour():
    settings = Settings(_env_file=None)
    assert settings.port == 4000
    assert settings.offline_timeout == timedelta(seconds=20)
    assert settings.free_session_lifetime == timedelta(minutes=10)
    assert settings.free_daily_image_quota == 5
    assert settings.quota_window == timedelta(hours=24)
    assert settings.max_request_bytes == 20 * 1024 * 1024


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("OFFLINE_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("PRO_DEVICE_IDS", '["a", "b"]')
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.offline_timeout == timedelta(seconds=5)
    assert settings.pro_device_ids == ["a", "b"]


def test_rejects_unknown_log_format():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_format="xml")
