"""Providers, engines and wiring behind the gateway routes."""

from .container import GatewayServices, build_services
from .fetch_result import Fetched, FetchResult, Synthesized
from .live_match_provider import LiveMatchProvider
from .player_provider import PlayerDataProvider
from .weather_provider import WeatherProvider

__all__ = [
    "FetchResult",
    "Fetched",
    "GatewayServices",
    "LiveMatchProvider",
    "PlayerDataProvider",
    "Synthesized",
    "WeatherProvider",
    "build_services",
]
