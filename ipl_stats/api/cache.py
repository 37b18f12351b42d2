from fastapi import APIRouter, Depends

from ipl_stats.cache import (
    MATCHES_KEY,
    PLAYERS_KEY,
    CacheEntryStatus,
    TTLCacheStore,
    city_from_weather_key,
    is_weather_key,
)
from ipl_stats.schemas.responses import (
    CacheStatus,
    CacheStatusResponse,
    MessageResponse,
    ResourceCacheStatus,
    WeatherCacheStatus,
)
from ipl_stats.services.dependencies import get_cache_store

router = APIRouter()


def _resource_status(status: CacheEntryStatus) -> ResourceCacheStatus:
    return ResourceCacheStatus(
        cached=status.fresh,
        last_fetch=status.fetched_at,
        expires_in=int(status.expires_in * 1000),
    )


@router.post("/cache/clear", response_model=MessageResponse)
async def clear_cache(
    cache: TTLCacheStore = Depends(get_cache_store),
) -> MessageResponse:
    """Drop every cached snapshot; the next request refetches."""
    cache.clear()
    return MessageResponse(message="Cache cleared successfully")


@router.get("/cache/status", response_model=CacheStatusResponse)
async def cache_status(
    cache: TTLCacheStore = Depends(get_cache_store),
) -> CacheStatusResponse:
    """Report freshness of the roster, match and per-city weather entries."""
    weather_cities = sorted(
        city_from_weather_key(key)
        for key, status in cache.status().items()
        if is_weather_key(key) and status.fresh
    )
    return CacheStatusResponse(
        data=CacheStatus(
            players=_resource_status(cache.entry_status(PLAYERS_KEY)),
            matches=_resource_status(cache.entry_status(MATCHES_KEY)),
            weather=WeatherCacheStatus(
                cached=len(weather_cities), cities=weather_cities
            ),
        )
    )
