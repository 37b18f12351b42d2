"""In-process TTL cache with per-key request coalescing.

Every provider in the gateway keeps its snapshot in a :class:`TTLCacheStore`.
The store is a plain object created by the application container and handed to
the providers, so tests can build isolated instances with a fake clock.

Concurrent misses for the same key share one in-flight fetch: the first caller
starts an :class:`asyncio.Task`, later callers await that same task and all of
them observe the same result (or the same exception).
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_TTL_SECONDS = 300.0

PLAYERS_KEY = "players"
MATCHES_KEY = "matches"
_WEATHER_PREFIX = "weather"

Clock = Callable[[], float]
Fetcher = Callable[[], Awaitable[T]]


def weather_key(city: str) -> str:
    return f"{_WEATHER_PREFIX}:{city.strip().lower()}"


def is_weather_key(key: str) -> bool:
    return key.startswith(f"{_WEATHER_PREFIX}:")


def city_from_weather_key(key: str) -> str:
    return key.split(":", 1)[1]


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """A cached value together with the moment it was fetched."""

    value: T
    fetched_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.fetched_at < self.ttl

    def remaining(self, now: float) -> float:
        return max(0.0, self.ttl - (now - self.fetched_at))


@dataclass(frozen=True, slots=True)
class CacheLookup(Generic[T]):
    """Result of :meth:`TTLCacheStore.get_or_fetch`.

    ``hit`` is ``True`` only when the value came from a fresh entry without
    waiting on a fetch.
    """

    value: T
    hit: bool
    fetched_at: float

    @property
    def fetched_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.fetched_at, tz=UTC)


@dataclass(frozen=True, slots=True)
class CacheEntryStatus:
    """Introspection record returned by :meth:`TTLCacheStore.status`."""

    key: str
    present: bool
    fresh: bool
    fetched_at: datetime | None
    expires_in: float


class TTLCacheStore:
    """Keyed store of ``(value, fetched_at, ttl)`` entries.

    Stale entries are kept until overwritten or cleared so that callers can
    still inspect the last known good value.
    """

    def __init__(
        self,
        *,
        default_ttl: float = _DEFAULT_TTL_SECONDS,
        clock: Clock = time.time,
    ) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._in_flight: dict[str, asyncio.Task[CacheEntry[Any]]] = {}
        self._lock = asyncio.Lock()
        self._generation = 0

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> Any | None:
        """Return the cached value when it is still fresh, else ``None``."""

        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._clock()):
            return None
        return entry.value

    def last_known_good(self, key: str) -> CacheEntry[Any] | None:
        """Return the stored entry regardless of freshness."""

        return self._entries.get(key)

    def set(self, key: str, value: T, ttl: float | None = None) -> CacheEntry[T]:
        """Store ``value`` under ``key`` stamped with the current time."""

        entry = self._stamp(value, ttl)
        self._entries[key] = entry
        return entry

    def _stamp(self, value: T, ttl: float | None) -> CacheEntry[T]:
        ttl_seconds = ttl if ttl is not None and ttl > 0 else self._default_ttl
        return CacheEntry(value=value, fetched_at=self._clock(), ttl=ttl_seconds)

    def keys(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        """Drop every entry and detach fetches that are in flight.

        A detached fetch still resolves for the callers already waiting on it,
        but its result is not stored; the next caller starts a fresh fetch.
        """

        self._generation += 1
        self._entries.clear()
        self._in_flight.clear()
        logger.info("Cache cleared")

    def is_in_flight(self, key: str) -> bool:
        return key in self._in_flight

    def status(self) -> dict[str, CacheEntryStatus]:
        now = self._clock()
        report: dict[str, CacheEntryStatus] = {}
        for key, entry in self._entries.items():
            report[key] = CacheEntryStatus(
                key=key,
                present=True,
                fresh=entry.is_fresh(now),
                fetched_at=datetime.fromtimestamp(entry.fetched_at, tz=UTC),
                expires_in=entry.remaining(now),
            )
        return report

    def entry_status(self, key: str) -> CacheEntryStatus:
        """Return the status of ``key`` including an explicit absent record."""

        entry = self._entries.get(key)
        if entry is None:
            return CacheEntryStatus(
                key=key, present=False, fresh=False, fetched_at=None, expires_in=0.0
            )
        now = self._clock()
        return CacheEntryStatus(
            key=key,
            present=True,
            fresh=entry.is_fresh(now),
            fetched_at=datetime.fromtimestamp(entry.fetched_at, tz=UTC),
            expires_in=entry.remaining(now),
        )

    async def get_or_fetch(
        self,
        key: str,
        fetcher: Fetcher[T],
        *,
        ttl: float | None = None,
    ) -> CacheLookup[T]:
        """Return the fresh value for ``key`` or run ``fetcher`` exactly once.

        Callers arriving while a fetch for ``key`` is running wait for that
        fetch instead of starting their own. The entry is written when the
        fetch completes; a failing fetch writes nothing and its exception is
        raised to every waiter.
        """

        entry = self._entries.get(key)
        if entry is not None and entry.is_fresh(self._clock()):
            return CacheLookup(value=entry.value, hit=True, fetched_at=entry.fetched_at)

        async with self._lock:
            # Re-check under the lock: another fetch may have completed while we waited.
            entry = self._entries.get(key)
            if entry is not None and entry.is_fresh(self._clock()):
                return CacheLookup(
                    value=entry.value, hit=True, fetched_at=entry.fetched_at
                )

            task = self._in_flight.get(key)
            if task is None:
                logger.debug("Cache miss for %s; starting fetch", key)
                task = asyncio.create_task(
                    self._populate(key, fetcher, ttl, self._generation)
                )
                self._in_flight[key] = task
            else:
                logger.debug("Cache miss for %s; joining in-flight fetch", key)

        fetched = await asyncio.shield(task)
        return CacheLookup(value=fetched.value, hit=False, fetched_at=fetched.fetched_at)

    async def _populate(
        self, key: str, fetcher: Fetcher[T], ttl: float | None, generation: int
    ) -> CacheEntry[T]:
        try:
            value = await fetcher()
            if generation != self._generation:
                logger.debug("Discarding %s fetched before the cache was cleared", key)
                return self._stamp(value, ttl)
            return self.set(key, value, ttl=ttl)
        finally:
            if self._in_flight.get(key) is asyncio.current_task():
                del self._in_flight[key]

    async def aclose(self) -> None:
        """Cancel outstanding fetches and drop all entries."""

        pending = list(self._in_flight.values())
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._in_flight.clear()
        self._entries.clear()


__all__ = [
    "CacheEntry",
    "CacheEntryStatus",
    "CacheLookup",
    "MATCHES_KEY",
    "PLAYERS_KEY",
    "TTLCacheStore",
    "city_from_weather_key",
    "is_weather_key",
    "weather_key",
]
