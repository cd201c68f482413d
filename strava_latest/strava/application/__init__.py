"""Application layer for the Strava integration."""

from .discovery import ActivityDiscoverer, Discovery
from .photos import PhotoResolver
from .ports import (
    FeedFetchError,
    PhotoTierError,
    StravaAuthError,
    StravaClientPort,
    StravaLatestError,
    TokenProviderPort,
)
from .service import ClientFactory, LatestActivity, LatestActivityService

__all__ = [
    "ActivityDiscoverer",
    "ClientFactory",
    "Discovery",
    "FeedFetchError",
    "LatestActivity",
    "LatestActivityService",
    "PhotoResolver",
    "PhotoTierError",
    "StravaAuthError",
    "StravaClientPort",
    "StravaLatestError",
    "TokenProviderPort",
]
