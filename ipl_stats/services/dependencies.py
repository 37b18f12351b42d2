"""FastAPI dependency wiring for gateway services.

Routers never construct providers themselves; they receive them from the
:class:`~ipl_stats.services.container.GatewayServices` stored on the
application. Tests swap the whole container through
``app.dependency_overrides[get_services]``.
"""

from __future__ import annotations

from fastapi import Depends, Request

from ipl_stats.cache import TTLCacheStore
from ipl_stats.services.container import GatewayServices
from ipl_stats.services.live_match_provider import LiveMatchProvider
from ipl_stats.services.player_provider import PlayerDataProvider
from ipl_stats.services.weather_provider import WeatherProvider
from ipl_stats.settings import AppSettings


def get_services(request: Request) -> GatewayServices:
    return request.app.state.services


def get_app_settings(services: GatewayServices = Depends(get_services)) -> AppSettings:
    return services.settings


def get_cache_store(services: GatewayServices = Depends(get_services)) -> TTLCacheStore:
    return services.cache


def get_player_provider(
    services: GatewayServices = Depends(get_services),
) -> PlayerDataProvider:
    return services.players


def get_weather_provider(
    services: GatewayServices = Depends(get_services),
) -> WeatherProvider:
    return services.weather


def get_live_match_provider(
    services: GatewayServices = Depends(get_services),
) -> LiveMatchProvider:
    return services.matches


__all__ = [
    "get_app_settings",
    "get_cache_store",
    "get_live_match_provider",
    "get_player_provider",
    "get_services",
    "get_weather_provider",
]
