"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from serpstat_mcp.config import DEVELOPMENT_TOKEN, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SERPSTAT_API_TOKEN", "APP_ENV", "LOG_LEVEL", "MAX_RETRIES", "DISABLED_TOOL_CATEGORIES"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.serpstat_api_url == "https://api.serpstat.com/v4"
    assert settings.max_retries == 1
    assert settings.request_timeout == 30.0
    assert settings.retry_delay_seconds == 1.0
    assert settings.log_level == "INFO"
    assert settings.disabled_categories == frozenset()


def test_development_token_fallback():
    assert Settings(_env_file=None).serpstat_api_token == DEVELOPMENT_TOKEN


def test_token_required_in_production():
    with pytest.raises(ValidationError, match="SERPSTAT_API_TOKEN"):
        Settings(_env_file=None, app_env="production")


def test_token_from_environment(monkeypatch):
    monkeypatch.setenv("SERPSTAT_API_TOKEN", "abc123")
    monkeypatch.setenv("APP_ENV", "production")
    assert Settings(_env_file=None).serpstat_api_token == "abc123"


@pytest.mark.parametrize("raw, expected", [("debug", "DEBUG"), ("warn", "WARNING"), (" Error ", "ERROR")])
def test_log_level_normalised(raw, expected):
    assert Settings(_env_file=None, log_level=raw).log_level == expected


def test_invalid_log_level():
    with pytest.raises(ValidationError, match="log_level"):
        Settings(_env_file=None, log_level="verbose")


def test_negative_retries_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_retries=-1)


def test_disabled_categories_parsed(monkeypatch):
    monkeypatch.setenv("DISABLED_TOOL_CATEGORIES", " Site_Audit,,page_audit ")
    assert Settings(_env_file=None).disabled_categories == frozenset({"site_audit", "page_audit"})


def test_settings_are_frozen():
    settings = Settings(_env_file=None)
    with pytest.raises(ValidationError):
        settings.max_retries = 5
