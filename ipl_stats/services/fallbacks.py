"""Synthetic data used when an upstream source cannot be reached.

Every generator takes a :class:`random.Random` so tests can seed it. The
generated values are schema-valid and internally consistent: a side's run
rate is derived from its score and overs rather than drawn independently.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime

from ipl_stats.schemas.match import LIVE_STATUS, Match, MatchSide
from ipl_stats.schemas.player import Player, PlayerRole
from ipl_stats.schemas.weather import WeatherSnapshot

# ---------------------------------------------------------------------------
# Fixed pools
# ---------------------------------------------------------------------------
IPL_TEAMS: tuple[tuple[str, str], ...] = (
    ("Mumbai Indians", "MI"),
    ("Chennai Super Kings", "CSK"),
    ("Royal Challengers Bangalore", "RCB"),
    ("Delhi Capitals", "DC"),
    ("Kolkata Knight Riders", "KKR"),
    ("Punjab Kings", "PBKS"),
    ("Rajasthan Royals", "RR"),
    ("Sunrisers Hyderabad", "SRH"),
    ("Gujarat Titans", "GT"),
    ("Lucknow Super Giants", "LSG"),
)
TEAM_NAMES: tuple[str, ...] = tuple(name for name, _ in IPL_TEAMS)

HOME_VENUES: tuple[str, ...] = (
    "Wankhede Stadium, Mumbai",
    "M. A. Chidambaram Stadium, Chennai",
    "M. Chinnaswamy Stadium, Bengaluru",
    "Arun Jaitley Stadium, Delhi",
    "Eden Gardens, Kolkata",
    "PCA Stadium, Mohali",
    "Sawai Mansingh Stadium, Jaipur",
    "Rajiv Gandhi Stadium, Hyderabad",
    "Narendra Modi Stadium, Ahmedabad",
    "Ekana Stadium, Lucknow",
)
MATCH_VENUES: tuple[str, ...] = (
    "Wankhede Stadium, Mumbai",
    "M. A. Chidambaram Stadium, Chennai",
    "M. Chinnaswamy Stadium, Bengaluru",
    "Arun Jaitley Stadium, Delhi",
    "Eden Gardens, Kolkata",
    "Narendra Modi Stadium, Ahmedabad",
)

FIRST_NAMES: tuple[str, ...] = (
    "Virat", "Rohit", "MS", "Jasprit", "Hardik",
    "KL", "Rishabh", "Shikhar", "Yuzvendra", "Mohammed",
)
LAST_NAMES: tuple[str, ...] = (
    "Kohli", "Sharma", "Dhoni", "Bumrah", "Pandya",
    "Rahul", "Pant", "Dhawan", "Chahal", "Siraj",
)

FALLBACK_CITIES: tuple[str, ...] = ("Mumbai", "Chennai", "Bengaluru", "Delhi", "Kolkata")
DEFAULT_CITY = FALLBACK_CITIES[0]
FALLBACK_CONDITIONS: tuple[str, ...] = ("Clear Sky", "Partly Cloudy", "Overcast", "Light Rain")
FALLBACK_ICON = "01d"

FALLBACK_ROSTER_SIZE = 250
BALLS_PER_OVER = 6


# ---------------------------------------------------------------------------
# Match side defaults
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class SideDefaults:
    """Placeholder values for one side of a match.

    ``runs``, ``wickets`` and ``overs`` are inclusive ranges. ``overs`` counts
    completed overs; a random number of extra balls (0-5) is added.
    """

    name: str
    short_name: str
    runs: tuple[int, int]
    wickets: tuple[int, int]
    overs: tuple[int, int]
    run_rate: tuple[float, float]


# Index 0 describes the side batting first, index 1 the chasing side.
SIDE_DEFAULTS: tuple[SideDefaults, SideDefaults] = (
    SideDefaults(
        name="Team A",
        short_name="TMA",
        runs=(150, 199),
        wickets=(2, 9),
        overs=(15, 19),
        run_rate=(6.0, 10.0),
    ),
    SideDefaults(
        name="Team B",
        short_name="TMB",
        runs=(120, 169),
        wickets=(3, 10),
        overs=(12, 16),
        run_rate=(7.0, 10.0),
    ),
)

# Second simulated match: first innings complete, chase under way.
_COMPLETED_INNINGS = SideDefaults(
    name="Team A",
    short_name="TMA",
    runs=(180, 229),
    wickets=(4, 9),
    overs=(20, 20),
    run_rate=(8.0, 10.0),
)
_CHASING_INNINGS = SideDefaults(
    name="Team B",
    short_name="TMB",
    runs=(120, 169),
    wickets=(2, 9),
    overs=(12, 16),
    run_rate=(7.0, 10.0),
)


# ---------------------------------------------------------------------------
# Scoring helpers
# ---------------------------------------------------------------------------
def format_overs(balls: int) -> str:
    """Render a ball count in cricket notation (``17.3`` = 17 overs, 3 balls)."""

    completed, remainder = divmod(max(balls, 0), BALLS_PER_OVER)
    return f"{completed}.{remainder}"


def parse_overs(overs: str | float | None) -> int | None:
    """Convert cricket overs notation into a ball count.

    Returns ``None`` for values that cannot be parsed or that claim more than
    five extra balls.
    """

    if overs is None:
        return None
    text = str(overs).strip()
    if not text:
        return None
    whole, _, part = text.partition(".")
    try:
        completed = int(whole)
        extra = int(part[:1]) if part else 0
    except ValueError:
        return None
    if completed < 0 or extra >= BALLS_PER_OVER:
        return None
    return completed * BALLS_PER_OVER + extra


def format_run_rate(value: float) -> str:
    return f"{value:.2f}"


def run_rate_for(runs: int, balls: int) -> str | None:
    """Runs per over, or ``None`` when no ball has been bowled."""

    if balls <= 0:
        return None
    return format_run_rate(runs * BALLS_PER_OVER / balls)


def synthesize_runs(rng: random.Random, defaults: SideDefaults) -> int:
    return rng.randint(*defaults.runs)


def synthesize_wickets(rng: random.Random, defaults: SideDefaults) -> int:
    return rng.randint(*defaults.wickets)


def synthesize_balls(rng: random.Random, defaults: SideDefaults) -> int:
    low, high = defaults.overs
    completed = rng.randint(low, high)
    if completed >= 20:
        return 20 * BALLS_PER_OVER
    return completed * BALLS_PER_OVER + rng.randint(0, BALLS_PER_OVER - 1)


def synthesize_run_rate(rng: random.Random, defaults: SideDefaults) -> str:
    return format_run_rate(rng.uniform(*defaults.run_rate))


def synthesize_side(
    rng: random.Random,
    defaults: SideDefaults,
    *,
    name: str | None = None,
    short_name: str | None = None,
) -> MatchSide:
    """Build a fully synthetic side whose run rate matches score and overs."""

    runs = synthesize_runs(rng, defaults)
    wickets = synthesize_wickets(rng, defaults)
    balls = synthesize_balls(rng, defaults)
    return MatchSide(
        name=name or defaults.name,
        short_name=(short_name or defaults.short_name)[:4],
        score=f"{runs}/{wickets}",
        overs=format_overs(balls),
        run_rate=run_rate_for(runs, balls) or synthesize_run_rate(rng, defaults),
    )


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------
def generate_fallback_players(
    rng: random.Random, size: int = FALLBACK_ROSTER_SIZE
) -> tuple[Player, ...]:
    """Synthesize a roster of ``size`` players (at least one).

    Bowlers get low run totals and high wicket potential, batsmen the inverse.
    Names carry a running number so they are unique within the roster.
    """

    roles = tuple(PlayerRole)
    players: list[Player] = []
    for index in range(max(size, 1)):
        role = rng.choice(roles)
        if role is PlayerRole.BOWLER:
            runs = rng.randint(0, 199)
        else:
            runs = rng.randint(100, 899)
        if role is PlayerRole.BATSMAN:
            wickets = rng.randint(0, 4)
        else:
            wickets = rng.randint(1, 25)
        players.append(
            Player(
                name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)} {index + 1}",
                team=rng.choice(TEAM_NAMES),
                role=role,
                matches=rng.randint(1, 16),
                runs=runs,
                wickets=wickets,
                venue=rng.choice(HOME_VENUES),
            )
        )
    return tuple(players)


def synthesize_weather(rng: random.Random, city: str | None = None) -> WeatherSnapshot:
    """Plausible match-day weather for ``city`` (``DEFAULT_CITY`` when blank)."""

    label = (city or "").strip() or DEFAULT_CITY
    return WeatherSnapshot(
        temp=rng.randint(20, 34),
        condition=rng.choice(FALLBACK_CONDITIONS),
        humidity=rng.randint(40, 79),
        wind_speed=rng.randint(5, 19),
        icon=FALLBACK_ICON,
        city=label,
    )


def generate_simulated_matches(rng: random.Random, now: datetime) -> tuple[Match, ...]:
    """Return one or two live matches between distinct IPL teams."""

    match_count = rng.randint(1, 2)
    teams = rng.sample(IPL_TEAMS, k=match_count * 2)
    innings = (
        (SIDE_DEFAULTS[0], SIDE_DEFAULTS[1]),
        (_COMPLETED_INNINGS, _CHASING_INNINGS),
    )

    matches: list[Match] = []
    for index in range(match_count):
        (home_name, home_short), (away_name, away_short) = teams[2 * index : 2 * index + 2]
        first, second = innings[index]
        matches.append(
            Match(
                id=index + 1,
                team1=synthesize_side(rng, first, name=home_name, short_name=home_short),
                team2=synthesize_side(rng, second, name=away_name, short_name=away_short),
                venue=rng.choice(MATCH_VENUES),
                status=LIVE_STATUS,
                date=now,
            )
        )
    return tuple(matches)


__all__ = [
    "DEFAULT_CITY",
    "FALLBACK_CITIES",
    "FALLBACK_CONDITIONS",
    "FALLBACK_ICON",
    "FALLBACK_ROSTER_SIZE",
    "HOME_VENUES",
    "IPL_TEAMS",
    "MATCH_VENUES",
    "SIDE_DEFAULTS",
    "SideDefaults",
    "TEAM_NAMES",
    "format_overs",
    "format_run_rate",
    "generate_fallback_players",
    "generate_simulated_matches",
    "parse_overs",
    "run_rate_for",
    "synthesize_balls",
    "synthesize_run_rate",
    "synthesize_runs",
    "synthesize_side",
    "synthesize_weather",
    "synthesize_wickets",
]
