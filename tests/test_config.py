"""Tests for settings."""

import pytest
from pydantic import ValidationError

from drinkr.config import Settings
from drinkr.domain.analytics import TimeRange


def test_settings_defaults(settings: Settings) -> None:
    assert settings.default_timezone == "UTC"
    assert settings.default_time_range is TimeRange.ONE_MONTH
    assert settings.analytics_cache_ttl_seconds == 60


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "header.payload.signature")
    monkeypatch.setenv("DEFAULT_TIME_RANGE", "3M")

    settings = Settings()

    assert settings.supabase_url == "https://env.supabase.co"
    assert settings.default_time_range is TimeRange.THREE_MONTHS


def test_negative_cache_ttl_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(
            supabase_url="https://example.supabase.co",
            supabase_service_key="header.payload.signature",
            analytics_cache_ttl_seconds=-1,
        )
