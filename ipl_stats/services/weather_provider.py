"""Per-city weather provider.

Venues look like ``"Ground, City"``; weather is cached per city for ten
minutes. Lookups never raise: any upstream failure yields a synthesized
snapshot, which is cached exactly like a real one.
"""

from __future__ import annotations

import logging
import random

from ipl_stats.cache import CacheLookup, TTLCacheStore, weather_key
from ipl_stats.schemas.weather import WeatherSnapshot
from ipl_stats.services.fallbacks import DEFAULT_CITY, synthesize_weather
from ipl_stats.services.fetch_result import Fetched, FetchResult, Synthesized
from ipl_stats.services.mapping import map_weather
from ipl_stats.upstream.errors import UpstreamError
from ipl_stats.upstream.openweather import OpenWeatherClient

logger = logging.getLogger(__name__)

WEATHER_TTL_SECONDS = 600.0


def city_for_venue(venue: str | None) -> str:
    """Return the city of ``venue``.

    The second comma-separated segment wins, then the first, then
    :data:`DEFAULT_CITY`.
    """

    segments = (venue or "").split(",")
    if len(segments) > 1 and segments[1].strip():
        return segments[1].strip()
    if segments[0].strip():
        return segments[0].strip()
    return DEFAULT_CITY


class WeatherProvider:
    def __init__(
        self,
        cache: TTLCacheStore,
        client: OpenWeatherClient,
        *,
        ttl: float = WEATHER_TTL_SECONDS,
        rng: random.Random | None = None,
    ) -> None:
        self._cache = cache
        self._client = client
        self._ttl = ttl
        self._rng = rng or random.Random()

    async def resolve_weather(self, venue: str | None) -> CacheLookup[FetchResult[WeatherSnapshot]]:
        city = city_for_venue(venue)
        return await self._cache.get_or_fetch(
            weather_key(city), lambda: self._fetch(city), ttl=self._ttl
        )

    async def get_weather(self, venue: str | None) -> WeatherSnapshot:
        lookup = await self.resolve_weather(venue)
        return lookup.value.value

    async def _fetch(self, city: str) -> FetchResult[WeatherSnapshot]:
        logger.info("Fetching weather for %s", city)
        try:
            payload = await self._client.current_weather(city)
            snapshot = map_weather(payload, city)
        except UpstreamError as exc:
            logger.warning("Weather lookup failed for %s, using fallback data: %s", city, exc)
            return Synthesized(synthesize_weather(self._rng, city), reason=str(exc))
        except Exception as exc:  # noqa: BLE001 - weather lookups must never fail a request
            logger.exception("Unexpected error mapping weather for %s", city)
            return Synthesized(
                synthesize_weather(self._rng, city),
                reason=f"unexpected {type(exc).__name__}",
            )

        logger.debug("Weather data cached for %s", city)
        return Fetched(snapshot)


__all__ = ["WEATHER_TTL_SECONDS", "WeatherProvider", "city_for_venue"]
