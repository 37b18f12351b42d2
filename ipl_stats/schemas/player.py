from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from ipl_stats.schemas.base import CamelModel


class PlayerRole(str, Enum):
    """Playing role; every player has exactly one."""

    BATSMAN = "Batsman"
    BOWLER = "Bowler"
    WICKETKEEPER = "Wicketkeeper"
    ALL_ROUNDER = "All-rounder"


# Spellings seen in roster files, keyed by lower-case letters only.
_ROLE_ALIASES: dict[str, PlayerRole] = {
    "batsman": PlayerRole.BATSMAN,
    "batter": PlayerRole.BATSMAN,
    "bat": PlayerRole.BATSMAN,
    "bowler": PlayerRole.BOWLER,
    "bowl": PlayerRole.BOWLER,
    "wicketkeeper": PlayerRole.WICKETKEEPER,
    "keeper": PlayerRole.WICKETKEEPER,
    "wk": PlayerRole.WICKETKEEPER,
    "wicketkeeperbatsman": PlayerRole.WICKETKEEPER,
    "wicketkeeperbatter": PlayerRole.WICKETKEEPER,
    "wkbatsman": PlayerRole.WICKETKEEPER,
    "wkbatter": PlayerRole.WICKETKEEPER,
    "allrounder": PlayerRole.ALL_ROUNDER,
}


def parse_role(value: Any) -> PlayerRole:
    """Map a free-form role string onto :class:`PlayerRole`.

    Raises ``ValueError`` for unknown roles so that roster validation rejects
    the row.
    """

    if isinstance(value, PlayerRole):
        return value
    if not isinstance(value, str):
        raise ValueError(f"role must be a string, got {type(value).__name__}")
    normalized = re.sub(r"[^a-z]", "", value.lower())
    role = _ROLE_ALIASES.get(normalized)
    if role is None:
        raise ValueError(f"unknown player role: {value!r}")
    return role


class Player(CamelModel):
    name: str = Field(..., min_length=1)
    team: str = Field(..., min_length=1)
    role: PlayerRole
    matches: int = Field(..., ge=0)
    runs: int = Field(..., ge=0)
    wickets: int = Field(..., ge=0)
    venue: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: Any) -> PlayerRole:
        return parse_role(value)

    @field_validator("name", "team", "venue", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def ground(self) -> str:
        """Ground name: the first comma-separated segment of ``venue``."""

        return self.venue.split(",")[0].strip()


__all__ = ["Player", "PlayerRole", "parse_role"]
