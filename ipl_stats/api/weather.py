from fastapi import APIRouter, Depends

from ipl_stats.schemas.responses import WeatherResponse
from ipl_stats.services.dependencies import get_weather_provider
from ipl_stats.services.weather_provider import WeatherProvider

router = APIRouter()


@router.get("/weather/{city}", response_model=WeatherResponse)
async def get_city_weather(
    city: str,
    provider: WeatherProvider = Depends(get_weather_provider),
) -> WeatherResponse:
    """Current weather for ``city``; synthesized when the upstream is unavailable."""
    snapshot = await provider.get_weather(f"Stadium, {city}")
    return WeatherResponse(data=snapshot)
