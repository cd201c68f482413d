from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx
from pydantic import ValidationError

from ...models import ActivityRecord, Credential, TokenExchange
from ...platform.config import Settings
from ..application.ports import (
    FeedFetchError,
    PhotoTierError,
    StravaAuthError,
    StravaClientPort,
    TokenProviderPort,
)

logger = logging.getLogger(__name__)


class StravaTokenProvider(TokenProviderPort):
    """Exchange a refresh token at the Strava OAuth endpoint."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http_client = http_client
        self._token_url = settings.strava_token_url

    async def exchange(self, credential: Credential) -> TokenExchange:
        payload = {
            "client_id": credential.client_id,
            "client_secret": credential.client_secret,
            "grant_type": "refresh_token",
            "refresh_token": credential.refresh_token,
        }

        try:
            response = await self._http_client.post(self._token_url, data=payload)
        except httpx.HTTPError as exc:
            raise StravaAuthError(f"Token refresh request failed: {exc}") from exc

        if response.status_code != 200:
            raise StravaAuthError(
                f"Token refresh failed ({response.status_code}): {response.text}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise StravaAuthError(
                f"Token refresh returned invalid JSON: {response.text}"
            ) from exc
        access_token: Optional[str] = data.get("access_token")
        new_refresh_token: Optional[str] = data.get("refresh_token")
        expires_at: Optional[int] = data.get("expires_at")

        if not access_token:
            raise StravaAuthError(
                f"Token refresh response missing access token: {response.text}"
            )

        rotated = None
        if new_refresh_token and new_refresh_token != credential.refresh_token:
            rotated = new_refresh_token
            logger.info(
                "Strava returned a rotated refresh token (length %s)",
                len(new_refresh_token),
            )

        return TokenExchange(
            access_token=access_token,
            rotated_refresh_token=rotated,
            expires_at=expires_at,
        )


class StravaClientAdapter(StravaClientPort):
    """HTTP client for the Strava endpoints behind the latest-activity widget."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        access_token: str,
        settings: Settings,
    ) -> None:
        self._http_client = http_client
        self._headers = {"Authorization": f"Bearer {access_token}"}
        self._api_url = settings.strava_api_url.rstrip("/")
        self._photo_size = settings.photo_size

    async def list_activities(self, page: int, per_page: int) -> Sequence[ActivityRecord]:
        logger.debug("Fetching activity page %s (per_page=%s)", page, per_page)
        try:
            response = await self._http_client.get(
                f"{self._api_url}/athlete/activities",
                headers=self._headers,
                params={"page": page, "per_page": per_page},
            )
        except httpx.HTTPError as exc:
            raise FeedFetchError(f"Activities fetch failed: {exc}") from exc

        _log_rate_limit(response)
        if response.status_code == 429:
            raise FeedFetchError(f"Activities fetch rate limited: {response.text}")
        if response.status_code != 200:
            raise FeedFetchError(
                f"Activities fetch failed: {response.status_code} - {response.text}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise FeedFetchError(f"Activities fetch returned invalid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise FeedFetchError(f"Unexpected activities payload: {response.text}")
        try:
            return [ActivityRecord.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise FeedFetchError(f"Malformed activity in feed: {exc}") from exc

    async def get_activity_photos(self, activity_id: int) -> list[dict[str, Any]]:
        payload = await self._get_photo_resource(
            f"/activities/{activity_id}/photos",
            params={"size": self._photo_size, "photo_sources": "true"},
        )
        if not isinstance(payload, list):
            raise PhotoTierError(f"Unexpected photos payload for activity {activity_id}")
        return [photo for photo in payload if isinstance(photo, dict)]

    async def get_activity(self, activity_id: int) -> dict[str, Any]:
        payload = await self._get_photo_resource(f"/activities/{activity_id}")
        if not isinstance(payload, dict):
            raise PhotoTierError(f"Unexpected detail payload for activity {activity_id}")
        return payload

    async def _get_photo_resource(
        self, path: str, params: dict[str, Any] | None = None
    ) -> Any:
        try:
            response = await self._http_client.get(
                f"{self._api_url}{path}", headers=self._headers, params=params
            )
        except httpx.HTTPError as exc:
            raise PhotoTierError(f"GET {path} failed: {exc}") from exc

        _log_rate_limit(response)
        if response.status_code != 200:
            raise PhotoTierError(
                f"GET {path} failed: {response.status_code} - {response.text}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise PhotoTierError(f"GET {path} returned invalid JSON") from exc


def _log_rate_limit(response: httpx.Response) -> None:
    usage = response.headers.get("X-RateLimit-Usage")
    if usage:
        logger.debug(
            "Strava rate limit usage %s of %s",
            usage,
            response.headers.get("X-RateLimit-Limit", "?"),
        )


def create_strava_token_provider(
    *, http_client: httpx.AsyncClient, settings: Settings
) -> TokenProviderPort:
    return StravaTokenProvider(http_client, settings)


def create_strava_client_adapter(
    *, http_client: httpx.AsyncClient, access_token: str, settings: Settings
) -> StravaClientPort:
    """Create a Strava client adapter without FastAPI dependencies."""
    return StravaClientAdapter(http_client, access_token, settings)


__all__ = [
    "StravaClientAdapter",
    "StravaTokenProvider",
    "create_strava_client_adapter",
    "create_strava_token_provider",
]
