"""OpenWeatherMap current-weather client.

Only the handful of fields the dashboard shows are modelled; everything else
in the payload is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .base import JsonApiClient
from .errors import UpstreamError


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class OpenWeatherMain(_Payload):
    temp: float
    humidity: float = Field(..., ge=0, le=100)


class OpenWeatherCondition(_Payload):
    description: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1)


class OpenWeatherWind(_Payload):
    speed: float = Field(0.0, ge=0, description="Metres per second with units=metric")


class OpenWeatherPayload(_Payload):
    main: OpenWeatherMain
    weather: list[OpenWeatherCondition] = Field(..., min_length=1)
    wind: OpenWeatherWind = Field(default_factory=OpenWeatherWind)
    name: str | None = None


class OpenWeatherClient(JsonApiClient):
    source = "openweather"

    async def current_weather(self, city: str) -> OpenWeatherPayload:
        """Return the current conditions for ``city`` in metric units."""

        api_key = self._require_key()
        payload = await self._get_json(
            "weather",
            {"q": city, "appid": api_key, "units": "metric"},
        )
        try:
            return OpenWeatherPayload.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamError(
                self.source, f"unexpected payload shape: {exc.error_count()} error(s)"
            ) from exc


__all__ = [
    "OpenWeatherClient",
    "OpenWeatherCondition",
    "OpenWeatherMain",
    "OpenWeatherPayload",
    "OpenWeatherWind",
]
