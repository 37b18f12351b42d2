"""Roster analytics.

Pure functions over a player snapshot; nothing here touches the cache or the
network, so the results always reflect whatever roster the caller passes in.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from ipl_stats.schemas.analytics import AnalyticsSummary, RosterTotals, TeamStat, VenueStat
from ipl_stats.schemas.player import Player
from ipl_stats.utils.numbers import safe_average

TOP_SCORERS_LIMIT = 15


def top_scorers(players: Sequence[Player], limit: int = TOP_SCORERS_LIMIT) -> list[Player]:
    """Players with at least one run, most runs first."""

    scorers = [player for player in players if player.runs > 0]
    scorers.sort(key=lambda player: player.runs, reverse=True)
    return scorers[: max(limit, 0)]


def team_rollup(players: Sequence[Player]) -> list[TeamStat]:
    """Per-team run and wicket totals, highest scoring team first."""

    runs: Counter[str] = Counter()
    wickets: Counter[str] = Counter()
    counts: Counter[str] = Counter()
    for player in players:
        runs[player.team] += player.runs
        wickets[player.team] += player.wickets
        counts[player.team] += 1

    stats = [
        TeamStat(
            team=team,
            total_runs=runs[team],
            total_wickets=wickets[team],
            player_count=counts[team],
            avg_runs=safe_average(runs[team], counts[team]),
        )
        for team in counts
    ]
    stats.sort(key=lambda stat: (-stat.total_runs, stat.team))
    return stats


def venue_rollup(players: Sequence[Player]) -> list[VenueStat]:
    """Per-ground totals keyed by the ground part of each player's venue."""

    runs: Counter[str] = Counter()
    wickets: Counter[str] = Counter()
    matches: Counter[str] = Counter()
    counts: Counter[str] = Counter()
    for player in players:
        ground = player.ground
        runs[ground] += player.runs
        wickets[ground] += player.wickets
        matches[ground] += player.matches
        counts[ground] += 1

    stats = [
        VenueStat(
            venue=ground,
            total_runs=runs[ground],
            total_wickets=wickets[ground],
            matches=matches[ground],
            player_count=counts[ground],
        )
        for ground in counts
    ]
    stats.sort(key=lambda stat: (-stat.total_runs, stat.venue))
    return stats


def role_distribution(players: Sequence[Player]) -> dict[str, int]:
    return dict(Counter(player.role.value for player in players))


def totals(players: Sequence[Player]) -> RosterTotals:
    total_runs = sum(player.runs for player in players)
    total_wickets = sum(player.wickets for player in players)
    count = len(players)
    return RosterTotals(
        total_players=count,
        total_runs=total_runs,
        total_wickets=total_wickets,
        avg_runs_per_player=safe_average(total_runs, count),
        avg_wickets_per_player=safe_average(total_wickets, count),
    )


def build_analytics(
    players: Sequence[Player], *, top_limit: int = TOP_SCORERS_LIMIT
) -> AnalyticsSummary:
    """Assemble every rollup the analytics page shows."""

    roster_totals = totals(players)
    return AnalyticsSummary(
        top_scorers=top_scorers(players, top_limit),
        team_stats=team_rollup(players),
        venue_stats=venue_rollup(players),
        role_stats=role_distribution(players),
        **roster_totals.model_dump(),
    )


__all__ = [
    "TOP_SCORERS_LIMIT",
    "build_analytics",
    "role_distribution",
    "team_rollup",
    "top_scorers",
    "totals",
    "venue_rollup",
]
