from fastapi import APIRouter, Depends, HTTPException, Query

from ipl_stats.schemas.responses import (
    PlayerResponse,
    PlayersResponse,
    SearchFilters,
    SearchResponse,
)
from ipl_stats.services.dependencies import get_player_provider
from ipl_stats.services.player_provider import PlayerDataProvider
from ipl_stats.services.query import search

router = APIRouter()


@router.get("/players", response_model=PlayersResponse)
async def list_players(
    provider: PlayerDataProvider = Depends(get_player_provider),
) -> PlayersResponse:
    """Return the full roster snapshot."""
    lookup = await provider.resolve_players()
    roster = lookup.value.value
    return PlayersResponse(
        data=list(roster),
        count=len(roster),
        cached=lookup.hit,
        source=lookup.value.source,
    )


@router.get("/player/{name}", response_model=PlayerResponse)
async def get_player(
    name: str,
    provider: PlayerDataProvider = Depends(get_player_provider),
) -> PlayerResponse:
    """Look up a single player by name, ignoring case."""
    player = await provider.find_player(name)
    if player is None:
        raise HTTPException(status_code=404, detail="Player not found")
    return PlayerResponse(data=player)


@router.get("/search/players", response_model=SearchResponse)
async def search_players(
    q: str | None = Query(
        None, description="Substring matched against name, team and role."
    ),
    team: str | None = Query(
        None, description="Exact team name; 'All Teams' disables the filter."
    ),
    role: str | None = Query(
        None, description="Exact role; 'All Roles' disables the filter."
    ),
    # Kept as a string so malformed values fall back to the default limit
    # instead of failing validation.
    limit: str | None = Query(
        None, description="Maximum results (default 100, capped at 200)."
    ),
    provider: PlayerDataProvider = Depends(get_player_provider),
) -> SearchResponse:
    """Filter the roster and return the highest run scorers first."""
    roster = await provider.get_players()
    result = search(roster, q, team, role, limit)
    return SearchResponse(
        data=result.players,
        count=result.count,
        total=result.total,
        filters=SearchFilters(q=q, team=team, role=role, limit=result.limit),
    )
