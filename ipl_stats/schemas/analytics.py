"""Pydantic DTOs backing the analytics dashboard response."""

from __future__ import annotations

from pydantic import Field

from ipl_stats.schemas.base import CamelModel
from ipl_stats.schemas.player import Player


class TeamStat(CamelModel):
    team: str
    total_runs: int = 0
    total_wickets: int = 0
    player_count: int = 0
    avg_runs: int = 0


class VenueStat(CamelModel):
    venue: str
    total_runs: int = 0
    total_wickets: int = 0
    matches: int = 0
    player_count: int = 0


class RosterTotals(CamelModel):
    total_players: int = 0
    total_runs: int = 0
    total_wickets: int = 0
    avg_runs_per_player: int = 0
    avg_wickets_per_player: int = 0


class AnalyticsSummary(CamelModel):
    top_scorers: list[Player] = Field(default_factory=list)
    team_stats: list[TeamStat] = Field(default_factory=list)
    venue_stats: list[VenueStat] = Field(default_factory=list)
    role_stats: dict[str, int] = Field(default_factory=dict)
    total_players: int = 0
    total_runs: int = 0
    total_wickets: int = 0
    avg_runs_per_player: int = 0
    avg_wickets_per_player: int = 0


__all__ = ["AnalyticsSummary", "RosterTotals", "TeamStat", "VenueStat"]
