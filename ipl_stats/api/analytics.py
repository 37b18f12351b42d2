from fastapi import APIRouter, Depends

from ipl_stats.schemas.responses import AnalyticsResponse
from ipl_stats.services.aggregation import build_analytics
from ipl_stats.services.dependencies import get_player_provider
from ipl_stats.services.player_provider import PlayerDataProvider

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsResponse)
async def roster_analytics(
    provider: PlayerDataProvider = Depends(get_player_provider),
) -> AnalyticsResponse:
    roster = await provider.get_players()
    return AnalyticsResponse(data=build_analytics(roster))
