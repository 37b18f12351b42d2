"""Roster search: filter, sort by runs, truncate."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ipl_stats.schemas.player import Player

DEFAULT_SEARCH_LIMIT = 100
MAX_SEARCH_LIMIT = 200

# Filter values meaning "no filter" (compared case-insensitively).
ALL_SENTINELS = frozenset({"all", "all teams", "all roles"})


@dataclass(frozen=True, slots=True)
class SearchResult:
    players: list[Player]
    total: int
    limit: int

    @property
    def count(self) -> int:
        return len(self.players)


def resolve_limit(limit: int | str | None) -> int:
    """Clamp ``limit`` to ``1..MAX_SEARCH_LIMIT``.

    Missing, unparsable and non-positive values fall back to
    :data:`DEFAULT_SEARCH_LIMIT`.
    """

    if limit is None or isinstance(limit, bool):
        return DEFAULT_SEARCH_LIMIT
    if isinstance(limit, str):
        try:
            limit = int(limit.strip())
        except ValueError:
            return DEFAULT_SEARCH_LIMIT
    if limit <= 0:
        return DEFAULT_SEARCH_LIMIT
    return min(limit, MAX_SEARCH_LIMIT)


def _is_active_filter(value: str | None) -> bool:
    if value is None:
        return False
    stripped = value.strip()
    return bool(stripped) and stripped.lower() not in ALL_SENTINELS


def _matches_query(player: Player, needle: str) -> bool:
    return (
        needle in player.name.lower()
        or needle in player.team.lower()
        or needle in player.role.value.lower()
    )


def search(
    players: Sequence[Player],
    query: str | None = None,
    team: str | None = None,
    role: str | None = None,
    limit: int | str | None = None,
) -> SearchResult:
    """Filter ``players`` and return the highest scorers first.

    The query matches name, team or role as a case-insensitive substring;
    team and role must match exactly unless they are blank or an "all"
    sentinel. ``total`` is the number of matches before truncation.
    """

    filtered = list(players)

    needle = (query or "").strip().lower()
    if needle:
        filtered = [player for player in filtered if _matches_query(player, needle)]

    if _is_active_filter(team):
        wanted_team = team.strip()
        filtered = [player for player in filtered if player.team == wanted_team]

    if _is_active_filter(role):
        wanted_role = role.strip()
        filtered = [player for player in filtered if player.role.value == wanted_role]

    filtered.sort(key=lambda player: player.runs, reverse=True)
    resolved_limit = resolve_limit(limit)
    return SearchResult(
        players=filtered[:resolved_limit],
        total=len(filtered),
        limit=resolved_limit,
    )


__all__ = [
    "ALL_SENTINELS",
    "DEFAULT_SEARCH_LIMIT",
    "MAX_SEARCH_LIMIT",
    "SearchResult",
    "resolve_limit",
    "search",
]
