"""CricAPI ``currentMatches`` client and transfer models.

Every field of a match is optional: the feed regularly omits scores, team
info or venues for matches that have not started. Filling the gaps is the job
of :mod:`ipl_stats.services.mapping`, not of these models.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .base import JsonApiClient
from .errors import UpstreamError

logger = logging.getLogger(__name__)


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CricApiTeamInfo(_Payload):
    name: str | None = None
    shortname: str | None = None


class CricApiScore(_Payload):
    runs: int | None = Field(None, alias="r", ge=0)
    wickets: int | None = Field(None, alias="w", ge=0)
    overs: float | None = Field(None, alias="o", ge=0)
    inning: str | None = None


class CricApiMatch(_Payload):
    id: str | None = None
    name: str | None = None
    match_type: str | None = Field(None, alias="matchType")
    status: str | None = None
    venue: str | None = None
    date_time_gmt: str | None = Field(None, alias="dateTimeGMT")
    teams: list[str] = Field(default_factory=list)
    team_info: list[CricApiTeamInfo] = Field(default_factory=list, alias="teamInfo")
    score: list[CricApiScore] = Field(default_factory=list)


class CricApiClient(JsonApiClient):
    source = "cricapi"

    async def current_matches(self, offset: int = 0) -> list[CricApiMatch]:
        """Return the matches currently listed by the feed.

        Individual entries that fail validation are skipped; a response with
        no ``data`` list or an explicit failure status raises
        :class:`UpstreamError`.
        """

        api_key = self._require_key()
        payload = await self._get_json(
            "currentMatches", {"apikey": api_key, "offset": offset}
        )
        if not isinstance(payload, dict):
            raise UpstreamError(self.source, "response is not a JSON object")

        status = str(payload.get("status") or "").lower()
        if status == "failure":
            reason = payload.get("reason") or "unknown reason"
            raise UpstreamError(self.source, f"feed reported failure: {reason}")

        entries = payload.get("data")
        if not isinstance(entries, list):
            raise UpstreamError(self.source, "response has no match list")

        matches: list[CricApiMatch] = []
        for position, entry in enumerate(entries):
            try:
                matches.append(CricApiMatch.model_validate(entry))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed match #%s from %s: %s error(s)",
                    position,
                    self.source,
                    exc.error_count(),
                )
        return matches


__all__ = ["CricApiClient", "CricApiMatch", "CricApiScore", "CricApiTeamInfo"]
