"""Centralized configuration management for the IPL Stats gateway."""

from __future__ import annotations

import logging
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load a local .env before the settings class reads the environment so that
# every consumer of :mod:`ipl_stats.settings` sees the same values.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

APP_VERSION = "1.0.0"
DEFAULT_WEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_CRICKET_BASE_URL = "https://api.cricapi.com/v1"
DEFAULT_PLAYERS_DATA_PATHS = (
    "data/ipl_players_assessment_ready_200plus_with_venues_fullteams.json",
    "data/players.json",
    "data/ipl_players.json",
)
DEFAULT_LOG_LEVEL = "INFO"
DEVELOPMENT_ENVIRONMENTS = frozenset({"development", "dev", "local"})


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Upstream credentials have no built-in defaults: when a key is missing the
    corresponding provider goes straight to synthesized data and the health
    endpoint reports the source as ``missing``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    weather_api_key: str | None = Field(
        default=None,
        alias="WEATHER_API_KEY",
        description="OpenWeatherMap API key used for venue weather lookups.",
    )
    cric_api_key: str | None = Field(
        default=None,
        alias="CRIC_API_KEY",
        description="CricAPI key used for the live score feed.",
    )
    weather_base_url: str = Field(
        default=DEFAULT_WEATHER_BASE_URL, alias="WEATHER_BASE_URL"
    )
    cricket_base_url: str = Field(
        default=DEFAULT_CRICKET_BASE_URL, alias="CRICKET_BASE_URL"
    )
    weather_timeout_seconds: float = Field(
        default=5.0,
        alias="WEATHER_TIMEOUT_SECONDS",
        gt=0,
        description="Timeout applied to each weather request.",
    )
    cricket_timeout_seconds: float = Field(
        default=10.0,
        alias="CRICKET_TIMEOUT_SECONDS",
        gt=0,
        description="Timeout applied to each live score request.",
    )
    players_cache_ttl_seconds: float = Field(
        default=3600.0, alias="PLAYERS_CACHE_TTL_SECONDS", gt=0
    )
    matches_cache_ttl_seconds: float = Field(
        default=30.0, alias="MATCHES_CACHE_TTL_SECONDS", gt=0
    )
    weather_cache_ttl_seconds: float = Field(
        default=600.0, alias="WEATHER_CACHE_TTL_SECONDS", gt=0
    )
    players_data_paths: str | None = Field(
        default=None,
        alias="PLAYERS_DATA_PATHS",
        description=(
            "Comma-separated roster files tried in order. Relative paths resolve"
            " against the working directory."
        ),
    )
    fallback_roster_size: int = Field(
        default=250,
        alias="FALLBACK_ROSTER_SIZE",
        ge=1,
        description="Number of players synthesized when no roster file loads.",
    )
    app_env: str = Field(
        default="production",
        alias="APP_ENV",
        description="Deployment environment; 'development' exposes error details.",
    )
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    cors_allow_origins_raw: str = Field(
        default="*",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated CORS origins; '*' allows every origin.",
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, alias="LOG_LEVEL")

    @property
    def is_development(self) -> bool:
        return self.app_env.strip().lower() in DEVELOPMENT_ENVIRONMENTS

    @property
    def weather_configured(self) -> bool:
        return bool(self.weather_api_key and self.weather_api_key.strip())

    @property
    def cricket_configured(self) -> bool:
        return bool(self.cric_api_key and self.cric_api_key.strip())

    @property
    def players_data_path_list(self) -> list[str]:
        configured = _split_csv(self.players_data_paths)
        return configured or list(DEFAULT_PLAYERS_DATA_PATHS)

    @property
    def normalized_api_prefix(self) -> str:
        prefix = "/" + self.api_prefix.strip().strip("/")
        return "" if prefix == "/" else prefix

    @property
    def cors_allow_origins(self) -> list[str]:
        origins = [origin.rstrip("/") for origin in _split_csv(self.cors_allow_origins_raw)]
        return origins or ["*"]

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []
        if not self.weather_configured:
            warnings.append(
                "WEATHER_API_KEY is not set - weather will be synthesized for every venue"
            )
        if not self.cricket_configured:
            warnings.append(
                "CRIC_API_KEY is not set - live matches will be simulated"
            )
        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "APP_VERSION",
    "AppSettings",
    "DEFAULT_CRICKET_BASE_URL",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_PLAYERS_DATA_PATHS",
    "DEFAULT_WEATHER_BASE_URL",
    "get_settings",
]
