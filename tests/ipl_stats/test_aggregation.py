"""Tests for roster analytics rollups."""

from __future__ import annotations

import random
from typing import Any

from ipl_stats.schemas.player import Player
from ipl_stats.services.aggregation import (
    build_analytics,
    role_distribution,
    team_rollup,
    top_scorers,
    totals,
    venue_rollup,
)
from ipl_stats.services.fallbacks import generate_fallback_players


def _players(rows: list[dict[str, Any]]) -> list[Player]:
    return [Player.model_validate(row) for row in rows]


def test_team_rollup_for_two_player_team() -> None:
    players = _players(
        [
            {"name": "A", "team": "X", "role": "Batsman", "matches": 10, "runs": 500, "wickets": 0},
            {"name": "B", "team": "X", "role": "Bowler", "matches": 10, "runs": 50, "wickets": 20},
        ]
    )

    (team,) = team_rollup(players)

    assert team.team == "X"
    assert team.total_runs == 550
    assert team.total_wickets == 20
    assert team.player_count == 2
    assert team.avg_runs == 275


def test_team_totals_sum_to_global_totals() -> None:
    roster = generate_fallback_players(random.Random(42), 250)

    summary = build_analytics(roster)

    assert sum(team.total_runs for team in summary.team_stats) == summary.total_runs
    assert sum(team.total_wickets for team in summary.team_stats) == summary.total_wickets
    assert sum(team.player_count for team in summary.team_stats) == summary.total_players
    assert sum(summary.role_stats.values()) == summary.total_players


def test_empty_roster_yields_zero_averages() -> None:
    summary = build_analytics([])

    assert summary.total_players == 0
    assert summary.total_runs == 0
    assert summary.avg_runs_per_player == 0
    assert summary.avg_wickets_per_player == 0
    assert summary.top_scorers == []
    assert summary.team_stats == []
    assert summary.venue_stats == []
    assert summary.role_stats == {}


def test_top_scorers_skip_zero_run_players_and_cap_at_fifteen() -> None:
    rows = [
        {"name": f"P{index}", "team": "T", "role": "Batsman", "matches": 1, "runs": index, "wickets": 0}
        for index in range(20)
    ]

    scorers = top_scorers(_players(rows))

    assert len(scorers) == 15
    assert scorers[0].runs == 19
    assert all(player.runs > 0 for player in scorers)
    assert [player.runs for player in scorers] == sorted(
        (player.runs for player in scorers), reverse=True
    )


def test_venue_rollup_groups_by_ground(roster_rows: list[dict[str, Any]]) -> None:
    stats = {stat.venue: stat for stat in venue_rollup(_players(roster_rows))}

    chinnaswamy = stats["M. Chinnaswamy Stadium"]
    assert chinnaswamy.total_runs == 741 + 438
    assert chinnaswamy.player_count == 2
    assert chinnaswamy.matches == 28
    assert stats["Wankhede Stadium"].total_wickets == 31
    # Highest scoring ground first.
    assert next(iter(stats)) == "M. Chinnaswamy Stadium"


def test_role_distribution_and_totals(roster_rows: list[dict[str, Any]]) -> None:
    players = _players(roster_rows)

    assert role_distribution(players) == {
        "Batsman": 2,
        "Bowler": 1,
        "All-rounder": 2,
        "Wicketkeeper": 1,
    }
    roster_totals = totals(players)
    assert roster_totals.total_runs == 1835
    assert roster_totals.total_wickets == 39
    assert roster_totals.avg_runs_per_player == 306  # 305.83 rounded
    assert roster_totals.avg_wickets_per_player == 7  # 6.5 rounds half up


def test_team_rollup_orders_by_total_runs(roster_rows: list[dict[str, Any]]) -> None:
    teams = [stat.team for stat in team_rollup(_players(roster_rows))]

    assert teams == [
        "Royal Challengers Bangalore",
        "Chennai Super Kings",
        "Mumbai Indians",
    ]
