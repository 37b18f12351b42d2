from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from ipl_stats.schemas.responses import ApiStatus, HealthResponse
from ipl_stats.services.dependencies import get_app_settings
from ipl_stats.settings import APP_VERSION, AppSettings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def healthcheck(
    settings: AppSettings = Depends(get_app_settings),
) -> HealthResponse:
    """Report liveness and which upstream credentials are configured."""
    return HealthResponse(
        message="IPL Stats API is running",
        timestamp=datetime.now(UTC),
        version=APP_VERSION,
        apis=ApiStatus(
            weather="configured" if settings.weather_configured else "missing",
            cricket="configured" if settings.cricket_configured else "missing",
        ),
    )
