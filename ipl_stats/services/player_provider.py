"""Player roster provider.

The roster is read from the first usable JSON file among the configured
paths and cached for an hour. When no file is usable the provider synthesizes
a roster, so callers always receive at least one player.
"""

from __future__ import annotations

import asyncio
import json
import logging
import random
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from ipl_stats.cache import PLAYERS_KEY, CacheLookup, TTLCacheStore
from ipl_stats.schemas.player import Player
from ipl_stats.services.fallbacks import FALLBACK_ROSTER_SIZE, generate_fallback_players
from ipl_stats.services.fetch_result import Fetched, FetchResult, Synthesized

logger = logging.getLogger(__name__)

PLAYERS_TTL_SECONDS = 3600.0

Roster = tuple[Player, ...]


class RosterFileError(ValueError):
    """A roster file is missing, unreadable or does not hold a valid roster."""


def load_roster_file(path: Path) -> Roster:
    """Read and validate a roster file.

    The file must contain a non-empty JSON array of player objects with
    distinct names (compared case-insensitively); one invalid row rejects the
    whole file.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RosterFileError(f"cannot read {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise RosterFileError(f"{path} is not valid UTF-8: {exc.reason}") from exc

    try:
        rows = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RosterFileError(f"{path} is not valid JSON: {exc.msg}") from exc

    if not isinstance(rows, list):
        raise RosterFileError(f"{path} does not contain a JSON array")
    if not rows:
        raise RosterFileError(f"{path} contains an empty roster")

    try:
        roster = tuple(Player.model_validate(row) for row in rows)
    except ValidationError as exc:
        raise RosterFileError(
            f"{path} contains invalid player rows ({exc.error_count()} error(s))"
        ) from exc

    seen: set[str] = set()
    for player in roster:
        key = player.name.strip().lower()
        if key in seen:
            raise RosterFileError(f"{path} lists player {player.name!r} more than once")
        seen.add(key)
    return roster


class PlayerDataProvider:
    """Serve the player roster snapshot from the cache store."""

    def __init__(
        self,
        cache: TTLCacheStore,
        *,
        data_paths: Sequence[str | Path] = (),
        ttl: float = PLAYERS_TTL_SECONDS,
        fallback_size: int = FALLBACK_ROSTER_SIZE,
        rng: random.Random | None = None,
    ) -> None:
        self._cache = cache
        self._data_paths = tuple(Path(path) for path in data_paths)
        self._ttl = ttl
        self._fallback_size = fallback_size
        self._rng = rng or random.Random()

    async def resolve_players(self) -> CacheLookup[FetchResult[Roster]]:
        return await self._cache.get_or_fetch(PLAYERS_KEY, self._load, ttl=self._ttl)

    async def get_players(self) -> Roster:
        lookup = await self.resolve_players()
        return lookup.value.value

    async def find_player(self, name: str) -> Player | None:
        """Case-insensitive lookup by player name."""

        wanted = name.strip().lower()
        for player in await self.get_players():
            if player.name.lower() == wanted:
                return player
        return None

    async def players_for_teams(self, *teams: str) -> list[Player]:
        wanted = set(teams)
        return [player for player in await self.get_players() if player.team in wanted]

    async def _load(self) -> FetchResult[Roster]:
        for path in self._data_paths:
            logger.debug("Trying to load players data from %s", path)
            try:
                roster = await asyncio.to_thread(load_roster_file, path)
            except RosterFileError as exc:
                logger.info("Skipping roster source: %s", exc)
                continue
            logger.info("Loaded %d players from %s", len(roster), path)
            return Fetched(roster)

        roster = generate_fallback_players(self._rng, self._fallback_size)
        logger.warning(
            "No usable players data file found; generated %d fallback players",
            len(roster),
        )
        return Synthesized(roster, reason="no usable roster file")


__all__ = [
    "PLAYERS_TTL_SECONDS",
    "PlayerDataProvider",
    "Roster",
    "RosterFileError",
    "load_roster_file",
]
