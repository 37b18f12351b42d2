"""Success envelopes returned by the gateway routes.

Every payload carries ``success: true``; list endpoints add counts and the
cache/source metadata the dashboard uses for its connection indicator.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from ipl_stats.schemas.analytics import AnalyticsSummary
from ipl_stats.schemas.base import CamelModel
from ipl_stats.schemas.match import Match, MatchDetail
from ipl_stats.schemas.player import Player
from ipl_stats.schemas.weather import WeatherSnapshot

DataSource = Literal["upstream", "synthetic"]
ApiCredentialState = Literal["configured", "missing"]


class ApiStatus(CamelModel):
    weather: ApiCredentialState
    cricket: ApiCredentialState


class HealthResponse(CamelModel):
    success: bool = True
    message: str
    timestamp: datetime
    version: str
    apis: ApiStatus


class PlayersResponse(CamelModel):
    success: bool = True
    data: list[Player]
    count: int
    cached: bool
    source: DataSource


class PlayerResponse(CamelModel):
    success: bool = True
    data: Player


class LiveMatchesResponse(CamelModel):
    success: bool = True
    data: list[Match]
    count: int
    last_updated: datetime
    cached: bool
    source: DataSource


class MatchDetailResponse(CamelModel):
    success: bool = True
    data: MatchDetail


class WeatherResponse(CamelModel):
    success: bool = True
    data: WeatherSnapshot


class SearchFilters(CamelModel):
    q: str | None = None
    team: str | None = None
    role: str | None = None
    limit: int


class SearchResponse(CamelModel):
    success: bool = True
    data: list[Player]
    count: int
    total: int
    filters: SearchFilters


class AnalyticsResponse(CamelModel):
    success: bool = True
    data: AnalyticsSummary


class ResourceCacheStatus(CamelModel):
    cached: bool
    last_fetch: datetime | None = None
    expires_in: int = Field(0, description="Milliseconds until the entry goes stale")


class WeatherCacheStatus(CamelModel):
    cached: int = Field(0, description="Number of cities with a fresh entry")
    cities: list[str] = Field(default_factory=list)


class CacheStatus(CamelModel):
    players: ResourceCacheStatus
    matches: ResourceCacheStatus
    weather: WeatherCacheStatus


class CacheStatusResponse(CamelModel):
    success: bool = True
    data: CacheStatus


class MessageResponse(CamelModel):
    success: bool = True
    message: str


__all__ = [
    "AnalyticsResponse",
    "ApiStatus",
    "CacheStatus",
    "CacheStatusResponse",
    "DataSource",
    "HealthResponse",
    "LiveMatchesResponse",
    "MatchDetailResponse",
    "MessageResponse",
    "PlayerResponse",
    "PlayersResponse",
    "ResourceCacheStatus",
    "SearchFilters",
    "SearchResponse",
    "WeatherCacheStatus",
    "WeatherResponse",
]
