"""HTTP clients and transfer models for the third-party data sources."""

from .cricapi import CricApiClient, CricApiMatch, CricApiScore, CricApiTeamInfo
from .errors import UpstreamError, UpstreamNotConfiguredError
from .openweather import OpenWeatherClient, OpenWeatherPayload

__all__ = [
    "CricApiClient",
    "CricApiMatch",
    "CricApiScore",
    "CricApiTeamInfo",
    "OpenWeatherClient",
    "OpenWeatherPayload",
    "UpstreamError",
    "UpstreamNotConfiguredError",
]
