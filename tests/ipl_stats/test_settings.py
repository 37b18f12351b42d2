"""Unit tests covering the typed application settings implementation."""

from __future__ import annotations

import logging

import pytest

from ipl_stats.main import validate_environment
from ipl_stats.settings import DEFAULT_PLAYERS_DATA_PATHS, AppSettings

_KEY_VARS = ("WEATHER_API_KEY", "CRIC_API_KEY")


def test_defaults_match_documented_values(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (*_KEY_VARS, "APP_ENV", "PLAYERS_DATA_PATHS", "CORS_ALLOW_ORIGINS", "API_PREFIX"):
        monkeypatch.delenv(name, raising=False)

    configured = AppSettings(_env_file=None)

    assert configured.weather_timeout_seconds == 5
    assert configured.cricket_timeout_seconds == 10
    assert configured.players_cache_ttl_seconds == 3600
    assert configured.matches_cache_ttl_seconds == 30
    assert configured.weather_cache_ttl_seconds == 600
    assert configured.fallback_roster_size == 250
    assert configured.is_development is False
    assert configured.players_data_path_list == list(DEFAULT_PLAYERS_DATA_PATHS)
    assert configured.cors_allow_origins == ["*"]
    assert configured.normalized_api_prefix == "/api"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHER_API_KEY", "w-key")
    monkeypatch.setenv("MATCHES_CACHE_TTL_SECONDS", "5")
    monkeypatch.setenv("PLAYERS_DATA_PATHS", "a.json, b.json ,")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://example.com/, http://localhost:3000")
    monkeypatch.setenv("APP_ENV", "Development")
    monkeypatch.setenv("API_PREFIX", "v1/")

    configured = AppSettings(_env_file=None)

    assert configured.weather_configured is True
    assert configured.matches_cache_ttl_seconds == 5
    assert configured.players_data_path_list == ["a.json", "b.json"]
    assert configured.cors_allow_origins == ["https://example.com", "http://localhost:3000"]
    assert configured.is_development is True
    assert configured.normalized_api_prefix == "/v1"


def test_root_prefix_normalizes_to_empty() -> None:
    assert AppSettings(_env_file=None, api_prefix="/").normalized_api_prefix == ""


def test_log_level_numeric_falls_back_to_info() -> None:
    assert AppSettings(_env_file=None, log_level="debug").log_level_numeric == logging.DEBUG
    assert AppSettings(_env_file=None, log_level="chatty").log_level_numeric == logging.INFO


def test_optional_config_warnings_name_missing_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _KEY_VARS:
        monkeypatch.delenv(name, raising=False)

    warnings = AppSettings(_env_file=None).optional_config_warnings()

    assert any("WEATHER_API_KEY" in warning for warning in warnings)
    assert any("CRIC_API_KEY" in warning for warning in warnings)


def test_optional_config_warnings_clear_when_keys_provided() -> None:
    configured = AppSettings(_env_file=None, weather_api_key="w", cric_api_key="c")

    assert configured.optional_config_warnings() == []


def test_validate_environment_logs_warnings(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    for name in _KEY_VARS:
        monkeypatch.delenv(name, raising=False)
    caplog.set_level(logging.WARNING, logger="ipl_stats.main")

    validate_environment(AppSettings(_env_file=None))

    assert "Environment Configuration Warnings:" in caplog.text
    assert "CRIC_API_KEY" in caplog.text
