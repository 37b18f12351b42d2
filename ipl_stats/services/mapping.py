"""Mapping from upstream transfer models to gateway entities.

One function per upstream. Missing match fields are filled from
:data:`ipl_stats.services.fallbacks.SIDE_DEFAULTS` so that every mapped match
has a complete shape even when the feed is partial.
"""

from __future__ import annotations

import random
from datetime import UTC, datetime

from ipl_stats.schemas.match import LIVE_STATUS, Match, MatchSide
from ipl_stats.schemas.weather import WeatherSnapshot
from ipl_stats.services.fallbacks import (
    SIDE_DEFAULTS,
    format_overs,
    parse_overs,
    run_rate_for,
    synthesize_balls,
    synthesize_run_rate,
    synthesize_runs,
    synthesize_wickets,
)
from ipl_stats.upstream.cricapi import CricApiMatch, CricApiScore
from ipl_stats.upstream.openweather import OpenWeatherPayload
from ipl_stats.utils.numbers import round_half_up

QUALIFYING_MATCH_TYPE = "t20"
QUALIFYING_STATUSES = frozenset({"match in progress", "live"})
MAX_LIVE_MATCHES = 4
DEFAULT_VENUE = "Stadium, City"
METRES_PER_SECOND_TO_KMH = 3.6


# ---------------------------------------------------------------------------
# Weather
# ---------------------------------------------------------------------------
def map_weather(payload: OpenWeatherPayload, requested_city: str) -> WeatherSnapshot:
    condition = payload.weather[0]
    return WeatherSnapshot(
        temp=round_half_up(payload.main.temp),
        condition=condition.description,
        humidity=round_half_up(payload.main.humidity),
        wind_speed=round_half_up(payload.wind.speed * METRES_PER_SECOND_TO_KMH),
        icon=condition.icon,
        city=(payload.name or "").strip() or requested_city,
    )


# ---------------------------------------------------------------------------
# Live matches
# ---------------------------------------------------------------------------
def is_qualifying(match: CricApiMatch) -> bool:
    """Only live T20 matches are shown on the dashboard."""

    match_type = (match.match_type or "").strip().lower()
    status = (match.status or "").strip().lower()
    return match_type == QUALIFYING_MATCH_TYPE and status in QUALIFYING_STATUSES


def select_live_matches(
    matches: list[CricApiMatch], limit: int = MAX_LIVE_MATCHES
) -> list[CricApiMatch]:
    return [match for match in matches if is_qualifying(match)][:limit]


def _innings_for(
    scores: list[CricApiScore], team_name: str, position: int
) -> CricApiScore | None:
    lowered = team_name.lower()
    for innings in scores:
        if innings.inning and innings.inning.lower().startswith(lowered):
            return innings
    if position < len(scores):
        return scores[position]
    return None


def _short_name(info_short: str | None, team_label: str | None, fallback: str) -> str:
    if info_short and info_short.strip():
        return info_short.strip()[:4]
    if team_label and team_label.strip():
        return team_label.strip()[:3]
    return fallback[:4]


def map_side(match: CricApiMatch, position: int, rng: random.Random) -> MatchSide:
    """Map one side of ``match`` (``position`` 0 or 1), filling gaps."""

    defaults = SIDE_DEFAULTS[position]
    info = match.team_info[position] if position < len(match.team_info) else None
    team_label = match.teams[position] if position < len(match.teams) else None

    name = (info.name if info and info.name else None) or team_label or defaults.name
    short_name = _short_name(info.shortname if info else None, team_label, defaults.short_name)

    innings = _innings_for(match.score, name, position)
    runs = innings.runs if innings else None
    wickets = innings.wickets if innings else None
    balls = parse_overs(innings.overs) if innings else None

    if runs is None:
        runs = synthesize_runs(rng, defaults)
        wickets = synthesize_wickets(rng, defaults)
    elif wickets is None:
        wickets = 0
    if balls is None:
        balls = synthesize_balls(rng, defaults)

    if balls == 0:
        run_rate = "0.00"
    else:
        run_rate = run_rate_for(runs, balls) or synthesize_run_rate(rng, defaults)

    return MatchSide(
        name=name,
        short_name=short_name,
        score=f"{runs}/{wickets}",
        overs=format_overs(balls),
        run_rate=run_rate,
    )


def parse_match_date(value: str | None, default: datetime) -> datetime:
    """Parse the feed's GMT timestamp; naive values are taken as UTC."""

    if not value:
        return default
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return default
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def map_match(
    match: CricApiMatch, match_id: int, rng: random.Random, now: datetime
) -> Match:
    return Match(
        id=match_id,
        team1=map_side(match, 0, rng),
        team2=map_side(match, 1, rng),
        venue=(match.venue or "").strip() or DEFAULT_VENUE,
        status=(match.status or "").strip() or LIVE_STATUS,
        date=parse_match_date(match.date_time_gmt, now),
        source_id=match.id,
    )


def map_live_matches(
    matches: list[CricApiMatch], rng: random.Random, now: datetime
) -> tuple[Match, ...]:
    """Filter to qualifying matches and map up to :data:`MAX_LIVE_MATCHES`."""

    selected = select_live_matches(matches)
    return tuple(
        map_match(match, index + 1, rng, now) for index, match in enumerate(selected)
    )


__all__ = [
    "DEFAULT_VENUE",
    "MAX_LIVE_MATCHES",
    "QUALIFYING_STATUSES",
    "is_qualifying",
    "map_live_matches",
    "map_match",
    "map_side",
    "map_weather",
    "parse_match_date",
    "select_live_matches",
]
