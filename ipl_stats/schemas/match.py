from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ipl_stats.schemas.base import CamelModel
from ipl_stats.schemas.player import Player
from ipl_stats.schemas.weather import WeatherSnapshot

LIVE_STATUS = "Live"


class MatchSide(CamelModel):
    name: str
    short_name: str = Field(..., max_length=4)
    score: str
    overs: str
    run_rate: str


class Match(CamelModel):
    id: int
    team1: MatchSide
    team2: MatchSide
    venue: str
    status: str = LIVE_STATUS
    date: datetime
    weather: WeatherSnapshot | None = None
    source_id: str | None = Field(
        None, description="Identifier assigned by the live score feed, if any"
    )


class MatchDetail(Match):
    players: list[Player] = Field(default_factory=list)


__all__ = ["LIVE_STATUS", "Match", "MatchDetail", "MatchSide"]
