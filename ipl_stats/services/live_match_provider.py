"""Live match provider.

Match state changes quickly, so the snapshot lives for 30 seconds. Each
refresh queries the live score feed once, keeps the qualifying matches (or
simulates one or two when there are none), then attaches venue weather to
every match before the snapshot is cached.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime

from ipl_stats.cache import MATCHES_KEY, CacheLookup, TTLCacheStore
from ipl_stats.schemas.match import Match
from ipl_stats.services.fallbacks import generate_simulated_matches
from ipl_stats.services.fetch_result import Fetched, FetchResult, Synthesized
from ipl_stats.services.mapping import map_live_matches
from ipl_stats.services.weather_provider import WeatherProvider
from ipl_stats.upstream.cricapi import CricApiClient
from ipl_stats.upstream.errors import UpstreamError

logger = logging.getLogger(__name__)

MATCHES_TTL_SECONDS = 30.0

MatchSnapshot = tuple[Match, ...]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LiveMatchProvider:
    def __init__(
        self,
        cache: TTLCacheStore,
        client: CricApiClient,
        weather: WeatherProvider,
        *,
        ttl: float = MATCHES_TTL_SECONDS,
        rng: random.Random | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cache = cache
        self._client = client
        self._weather = weather
        self._ttl = ttl
        self._rng = rng or random.Random()
        self._now = now

    async def resolve_live_matches(self) -> CacheLookup[FetchResult[MatchSnapshot]]:
        return await self._cache.get_or_fetch(MATCHES_KEY, self._fetch, ttl=self._ttl)

    async def get_live_matches(self) -> MatchSnapshot:
        lookup = await self.resolve_live_matches()
        return lookup.value.value

    async def find_match(self, match_id: int | str) -> Match | None:
        """Look a match up by id; ids that are not in the snapshot yield ``None``."""

        wanted = str(match_id)
        for match in await self.get_live_matches():
            if str(match.id) == wanted:
                return match
        return None

    async def _fetch(self) -> FetchResult[MatchSnapshot]:
        now = self._now()
        matches: MatchSnapshot = ()
        reason: str | None = None

        logger.info("Fetching live matches from the cricket feed")
        try:
            matches = map_live_matches(await self._client.current_matches(), self._rng, now)
        except UpstreamError as exc:
            reason = str(exc)
            logger.warning("Cricket feed failed, using simulated data: %s", exc)
        except Exception as exc:  # noqa: BLE001 - a bad feed must not fail the request
            reason = f"unexpected {type(exc).__name__}"
            logger.exception("Unexpected error mapping live matches")
        else:
            if matches:
                logger.info("Fetched %d live matches from the cricket feed", len(matches))
            else:
                reason = "no live T20 matches in feed"

        if not matches:
            matches = generate_simulated_matches(self._rng, now)
            logger.info("Generated %d simulated matches (%s)", len(matches), reason)

        enriched = await self._attach_weather(matches)
        if reason is None:
            return Fetched(enriched)
        return Synthesized(enriched, reason=reason)

    async def _attach_weather(self, matches: MatchSnapshot) -> MatchSnapshot:
        """Return copies of ``matches`` carrying their venue weather.

        Runs only after the match list is final; every lookup completes before
        the snapshot is returned.
        """

        reports = await asyncio.gather(
            *(self._weather.get_weather(match.venue) for match in matches)
        )
        return tuple(
            match.model_copy(update={"weather": report})
            for match, report in zip(matches, reports, strict=True)
        )


__all__ = ["MATCHES_TTL_SECONDS", "LiveMatchProvider", "MatchSnapshot"]
