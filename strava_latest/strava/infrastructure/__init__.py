"""Infrastructure adapters for the Strava integration."""

from .client import (
    StravaClientAdapter,
    StravaTokenProvider,
    create_strava_client_adapter,
    create_strava_token_provider,
)

__all__ = [
    "StravaClientAdapter",
    "StravaTokenProvider",
    "create_strava_client_adapter",
    "create_strava_token_provider",
]
