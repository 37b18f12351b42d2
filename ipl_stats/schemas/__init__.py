"""Pydantic schemas for API responses."""

from ipl_stats.schemas.analytics import (  # noqa: F401
    AnalyticsSummary,
    RosterTotals,
    TeamStat,
    VenueStat,
)
from ipl_stats.schemas.match import Match, MatchDetail, MatchSide  # noqa: F401
from ipl_stats.schemas.player import Player, PlayerRole  # noqa: F401
from ipl_stats.schemas.weather import WeatherSnapshot  # noqa: F401
