"""Tests for upstream-to-entity mapping and the match defaults table."""

from __future__ import annotations

import random
from datetime import UTC, datetime

import pytest

from ipl_stats.services.fallbacks import (
    SIDE_DEFAULTS,
    format_overs,
    generate_simulated_matches,
    parse_overs,
    run_rate_for,
    synthesize_weather,
)
from ipl_stats.services.mapping import (
    DEFAULT_VENUE,
    is_qualifying,
    map_match,
    map_side,
    map_weather,
    parse_match_date,
)
from ipl_stats.upstream.cricapi import CricApiMatch
from ipl_stats.upstream.openweather import OpenWeatherPayload
from tests.ipl_stats.fakes import cricapi_match, openweather_payload

NOW = datetime(2024, 5, 1, 18, 30, tzinfo=UTC)


def test_side_defaults_table() -> None:
    batting, chasing = SIDE_DEFAULTS

    assert (batting.name, batting.short_name) == ("Team A", "TMA")
    assert batting.runs == (150, 199)
    assert batting.wickets == (2, 9)
    assert batting.overs == (15, 19)
    assert (chasing.name, chasing.short_name) == ("Team B", "TMB")
    assert chasing.runs == (120, 169)
    assert chasing.wickets == (3, 10)
    assert chasing.overs == (12, 16)


@pytest.mark.parametrize(
    "raw, balls",
    [("17.3", 105), (20, 120), (9.0, 54), ("0", 0), ("12.6", None), ("abc", None), (None, None)],
)
def test_parse_overs(raw, balls) -> None:
    assert parse_overs(raw) == balls


def test_format_overs_and_run_rate() -> None:
    assert format_overs(105) == "17.3"
    assert format_overs(120) == "20.0"
    assert run_rate_for(150, 120) == "7.50"
    assert run_rate_for(10, 0) is None


@pytest.mark.parametrize(
    "match_type, status, expected",
    [
        ("t20", "Live", True),
        ("T20", "Match in progress", True),
        ("odi", "Live", False),
        ("t20", "Match not started", False),
        (None, "Live", False),
    ],
)
def test_is_qualifying(match_type, status, expected) -> None:
    match = CricApiMatch.model_validate({"matchType": match_type, "status": status})

    assert is_qualifying(match) is expected


def test_map_side_fills_every_missing_field_from_defaults() -> None:
    bare = CricApiMatch.model_validate({"matchType": "t20", "status": "Live"})
    rng = random.Random(3)

    for position, defaults in enumerate(SIDE_DEFAULTS):
        side = map_side(bare, position, rng)
        runs, wickets = (int(part) for part in side.score.split("/"))
        balls = parse_overs(side.overs)

        assert side.name == defaults.name
        assert side.short_name == defaults.short_name
        assert defaults.runs[0] <= runs <= defaults.runs[1]
        assert defaults.wickets[0] <= wickets <= defaults.wickets[1]
        assert balls is not None
        assert defaults.overs[0] * 6 <= balls <= defaults.overs[1] * 6 + 5
        assert side.run_rate == run_rate_for(runs, balls)


def test_map_side_uses_team_labels_when_team_info_is_missing() -> None:
    match = CricApiMatch.model_validate(
        {
            "teams": ["Gujarat Titans", "Lucknow Super Giants"],
            "score": [{"r": 95, "w": 1, "o": 10.4, "inning": "Gujarat Titans Inning 1"}],
        }
    )

    first = map_side(match, 0, random.Random(1))
    second = map_side(match, 1, random.Random(1))

    assert first.name == "Gujarat Titans"
    assert first.short_name == "Guj"
    assert first.score == "95/1"
    assert first.overs == "10.4"
    assert second.name == "Lucknow Super Giants"
    assert second.short_name == "Luc"


def test_map_side_short_name_is_truncated() -> None:
    match = CricApiMatch.model_validate(
        cricapi_match(shortnames=("MUMBAI", "CHENNAI"))
    )

    assert map_side(match, 0, random.Random(1)).short_name == "MUMB"


def test_map_match_defaults_venue_and_date() -> None:
    match = CricApiMatch.model_validate(
        {"id": "x1", "matchType": "t20", "status": "Live", "dateTimeGMT": "garbage"}
    )

    mapped = map_match(match, 3, random.Random(5), NOW)

    assert mapped.id == 3
    assert mapped.source_id == "x1"
    assert mapped.venue == DEFAULT_VENUE
    assert mapped.date == NOW
    assert mapped.weather is None


def test_parse_match_date_handles_offsets() -> None:
    assert parse_match_date("2024-04-14T14:00:00Z", NOW) == datetime(
        2024, 4, 14, 14, 0, tzinfo=UTC
    )
    assert parse_match_date(None, NOW) == NOW


def test_map_weather_rounds_and_converts_units() -> None:
    payload = OpenWeatherPayload.model_validate(
        openweather_payload(name="", temp=24.49, humidity=80.5, wind_speed=2.5)
    )

    snapshot = map_weather(payload, "Pune")

    assert snapshot.temp == 24
    assert snapshot.humidity == 81
    assert snapshot.wind_speed == 9  # 2.5 m/s is exactly 9 km/h
    assert snapshot.city == "Pune"


def test_synthesized_weather_uses_requested_city() -> None:
    snapshot = synthesize_weather(random.Random(2), "Jaipur")

    assert snapshot.city == "Jaipur"
    assert snapshot.icon == "01d"


def test_second_simulated_match_has_completed_first_innings() -> None:
    for seed in range(20):
        matches = generate_simulated_matches(random.Random(seed), NOW)
        if len(matches) == 2:
            break
    else:  # pragma: no cover - twenty seeds always include a two-match draw
        pytest.fail("no seed produced two simulated matches")

    completed = matches[1].team1
    runs = int(completed.score.split("/")[0])
    assert completed.overs == "20.0"
    assert 180 <= runs <= 229
    assert all(match.date == NOW for match in matches)
