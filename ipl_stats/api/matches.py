from fastapi import APIRouter, Depends, HTTPException

from ipl_stats.schemas.match import MatchDetail
from ipl_stats.schemas.responses import LiveMatchesResponse, MatchDetailResponse
from ipl_stats.services.dependencies import (
    get_live_match_provider,
    get_player_provider,
)
from ipl_stats.services.live_match_provider import LiveMatchProvider
from ipl_stats.services.player_provider import PlayerDataProvider

router = APIRouter()


@router.get("/live-matches", response_model=LiveMatchesResponse)
async def list_live_matches(
    provider: LiveMatchProvider = Depends(get_live_match_provider),
) -> LiveMatchesResponse:
    """Return the current live T20 matches, each with venue weather attached."""
    lookup = await provider.resolve_live_matches()
    matches = lookup.value.value
    return LiveMatchesResponse(
        data=list(matches),
        count=len(matches),
        last_updated=lookup.fetched_at_datetime,
        cached=lookup.hit,
        source=lookup.value.source,
    )


@router.get("/match/{match_id}", response_model=MatchDetailResponse)
async def get_match(
    match_id: str,
    matches: LiveMatchProvider = Depends(get_live_match_provider),
    players: PlayerDataProvider = Depends(get_player_provider),
) -> MatchDetailResponse:
    """Return one live match together with the players of both sides."""
    match = await matches.find_match(match_id)
    if match is None:
        raise HTTPException(status_code=404, detail="Match not found")

    squad = await players.players_for_teams(match.team1.name, match.team2.name)
    detail = MatchDetail(**dict(match), players=squad)
    return MatchDetailResponse(data=detail)
