"""Shared fixtures: fake clock and upstreams, a roster file and service containers."""

from __future__ import annotations

import json
import random
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from ipl_stats.services.container import GatewayServices, build_services
from ipl_stats.settings import AppSettings
from tests.ipl_stats.fakes import FakeClock, FakeUpstream


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def roster_rows() -> list[dict[str, Any]]:
    """Six players across three teams, with the role spellings seen in real files."""

    return [
        {
            "name": "Virat Kohli",
            "team": "Royal Challengers Bangalore",
            "role": "Batsman",
            "matches": 14,
            "runs": 741,
            "wickets": 0,
            "venue": "M. Chinnaswamy Stadium, Bengaluru",
        },
        {
            "name": "Faf du Plessis",
            "team": "Royal Challengers Bangalore",
            "role": "Batsman",
            "matches": 14,
            "runs": 438,
            "wickets": 0,
            "venue": "M. Chinnaswamy Stadium, Bengaluru",
        },
        {
            "name": "Jasprit Bumrah",
            "team": "Mumbai Indians",
            "role": "Bowler",
            "matches": 13,
            "runs": 12,
            "wickets": 20,
            "venue": "Wankhede Stadium, Mumbai",
        },
        {
            "name": "Hardik Pandya",
            "team": "Mumbai Indians",
            "role": "All-rounder",
            "matches": 14,
            "runs": 216,
            "wickets": 11,
            "venue": "Wankhede Stadium, Mumbai",
        },
        {
            "name": "MS Dhoni",
            "team": "Chennai Super Kings",
            "role": "WK-Batsman",
            "matches": 14,
            "runs": 161,
            "wickets": 0,
            "venue": "M. A. Chidambaram Stadium, Chennai",
        },
        {
            "name": "Ravindra Jadeja",
            "team": "Chennai Super Kings",
            "role": "Allrounder",
            "matches": 14,
            "runs": 267,
            "wickets": 8,
            "venue": "M. A. Chidambaram Stadium, Chennai",
        },
    ]


@pytest.fixture
def roster_file(tmp_path: Path, roster_rows: list[dict[str, Any]]) -> Path:
    path = tmp_path / "players.json"
    path.write_text(json.dumps(roster_rows), encoding="utf-8")
    return path


@pytest.fixture
def make_settings(roster_file: Path) -> Callable[..., AppSettings]:
    """Build settings isolated from the process environment and any ``.env``."""

    def _make(**overrides: Any) -> AppSettings:
        values: dict[str, Any] = {
            "weather_api_key": "test-weather-key",
            "cric_api_key": "test-cric-key",
            "players_data_paths": str(roster_file),
            "app_env": "development",
            "cors_allow_origins_raw": "*",
            "api_prefix": "/api",
        }
        values.update(overrides)
        return AppSettings(_env_file=None, **values)

    return _make


@pytest_asyncio.fixture
async def make_services(
    make_settings: Callable[..., AppSettings],
    upstream: FakeUpstream,
    clock: FakeClock,
) -> AsyncIterator[Callable[..., GatewayServices]]:
    """Factory for service containers wired to the fake upstream and clock."""

    created: list[GatewayServices] = []

    def _make(settings: AppSettings | None = None, *, seed: int = 7) -> GatewayServices:
        services = build_services(
            settings or make_settings(),
            transport=upstream.transport,
            clock=clock,
            rng=random.Random(seed),
        )
        created.append(services)
        return services

    yield _make

    for services in created:
        await services.aclose()


@pytest_asyncio.fixture
async def services(make_services: Callable[..., GatewayServices]) -> GatewayServices:
    return make_services()
