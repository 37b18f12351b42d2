"""Construction and teardown of the gateway's stateful collaborators.

One :class:`GatewayServices` exists per application instance. It owns the
cache store and the shared HTTP client; providers receive both explicitly.
Tests build their own container around an ``httpx.MockTransport``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

import httpx

from ipl_stats.cache import Clock, TTLCacheStore
from ipl_stats.services.live_match_provider import LiveMatchProvider
from ipl_stats.services.player_provider import PlayerDataProvider
from ipl_stats.services.weather_provider import WeatherProvider
from ipl_stats.settings import AppSettings
from ipl_stats.upstream.cricapi import CricApiClient
from ipl_stats.upstream.openweather import OpenWeatherClient

logger = logging.getLogger(__name__)

USER_AGENT = "IPL-Stats-Gateway/1.0"


@dataclass(slots=True)
class GatewayServices:
    settings: AppSettings
    cache: TTLCacheStore
    http_client: httpx.AsyncClient
    weather_client: OpenWeatherClient
    cricket_client: CricApiClient
    players: PlayerDataProvider
    weather: WeatherProvider
    matches: LiveMatchProvider
    _closed: bool = field(default=False, init=False)

    async def aclose(self) -> None:
        """Tear down the cache store and close the HTTP client."""

        if self._closed:
            return
        self._closed = True
        await self.cache.aclose()
        await self.http_client.aclose()
        logger.info("Gateway services closed")


def build_services(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Clock | None = None,
    rng: random.Random | None = None,
) -> GatewayServices:
    """Wire a fresh set of providers around a new cache store.

    ``transport`` replaces the network for tests; ``clock`` and ``rng`` make
    cache expiry and synthesized data deterministic.
    """

    cache = TTLCacheStore(clock=clock) if clock is not None else TTLCacheStore()
    http_client = httpx.AsyncClient(
        transport=transport,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        follow_redirects=True,
    )
    weather_client = OpenWeatherClient(
        http_client,
        base_url=settings.weather_base_url,
        api_key=settings.weather_api_key,
        timeout=settings.weather_timeout_seconds,
    )
    cricket_client = CricApiClient(
        http_client,
        base_url=settings.cricket_base_url,
        api_key=settings.cric_api_key,
        timeout=settings.cricket_timeout_seconds,
    )
    shared_rng = rng or random.Random()

    players = PlayerDataProvider(
        cache,
        data_paths=settings.players_data_path_list,
        ttl=settings.players_cache_ttl_seconds,
        fallback_size=settings.fallback_roster_size,
        rng=shared_rng,
    )
    weather = WeatherProvider(
        cache,
        weather_client,
        ttl=settings.weather_cache_ttl_seconds,
        rng=shared_rng,
    )
    matches = LiveMatchProvider(
        cache,
        cricket_client,
        weather,
        ttl=settings.matches_cache_ttl_seconds,
        rng=shared_rng,
    )
    return GatewayServices(
        settings=settings,
        cache=cache,
        http_client=http_client,
        weather_client=weather_client,
        cricket_client=cricket_client,
        players=players,
        weather=weather,
        matches=matches,
    )


__all__ = ["GatewayServices", "build_services"]
