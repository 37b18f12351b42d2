from __future__ import annotations

from pydantic import Field

from ipl_stats.schemas.base import CamelModel


class WeatherSnapshot(CamelModel):
    """Current conditions for a city. Every field is always populated."""

    temp: int = Field(..., description="Temperature in degrees Celsius")
    condition: str = Field(..., min_length=1)
    humidity: int = Field(..., ge=0, le=100)
    wind_speed: int = Field(..., ge=0, description="Wind speed in km/h")
    icon: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)


__all__ = ["WeatherSnapshot"]
