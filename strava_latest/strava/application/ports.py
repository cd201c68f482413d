"""Ports and error types for the Strava application layer."""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from ...models import ActivityRecord, Credential, TokenExchange


class StravaLatestError(RuntimeError):
    """Base class for failures while building the latest-activity payload."""


class StravaAuthError(StravaLatestError):
    """Raised when Strava rejects the refresh-token exchange."""


class FeedFetchError(StravaLatestError):
    """Raised when a page of the activity feed cannot be fetched."""


class PhotoTierError(StravaLatestError):
    """Raised by photo endpoints; photo resolution treats it as no photo."""


@runtime_checkable
class TokenProviderPort(Protocol):
    """Port that swaps a refresh credential for a short-lived access token."""

    async def exchange(self, credential: Credential) -> TokenExchange:
        """Return the access token and any rotated refresh token."""


@runtime_checkable
class StravaClientPort(Protocol):
    """Port that exposes the Strava endpoints used by the application."""

    async def list_activities(self, page: int, per_page: int) -> Sequence[ActivityRecord]:
        """Return one page of the athlete's activities, newest first."""

    async def get_activity_photos(self, activity_id: int) -> list[dict[str, Any]]:
        """Return the raw photo gallery for an activity."""

    async def get_activity(self, activity_id: int) -> dict[str, Any]:
        """Return the raw payload for a Strava activity."""


__all__ = [
    "FeedFetchError",
    "PhotoTierError",
    "StravaAuthError",
    "StravaClientPort",
    "StravaLatestError",
    "TokenProviderPort",
]
