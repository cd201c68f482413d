from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ...models import ActivityRecord, Credential, DisplayStats, TokenExchange
from ..domain.stats import build_display_stats
from .discovery import DEFAULT_MAX_PAGES, DEFAULT_PAGE_SIZE, ActivityDiscoverer
from .photos import PhotoResolver
from .ports import StravaClientPort, TokenProviderPort

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], StravaClientPort]


@dataclass(frozen=True)
class LatestActivity:
    activity: ActivityRecord
    activity_url: str
    photo_url: Optional[str]
    stats: DisplayStats


class LatestActivityService:
    """Coordinates token exchange, photo discovery and stats for the widget."""

    def __init__(
        self,
        token_provider: TokenProviderPort,
        client_factory: ClientFactory,
        credential: Credential,
        *,
        web_url: str = "https://www.strava.com",
        page_size: int = DEFAULT_PAGE_SIZE,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        self._token_provider = token_provider
        self._client_factory = client_factory
        self._credential = credential
        self._web_url = web_url.rstrip("/")
        self._page_size = page_size
        self._max_pages = max_pages

    def activity_url(self, activity_id: int) -> str:
        return f"{self._web_url}/activities/{activity_id}"

    async def exchange_token(self) -> TokenExchange:
        return await self._token_provider.exchange(self._credential)

    async def find_latest(self, access_token: str) -> Optional[LatestActivity]:
        """Return the newest activity with a photo, else the newest activity.

        ``None`` means the athlete has no activities at all.
        """

        client = self._client_factory(access_token)
        discoverer = ActivityDiscoverer(
            client,
            PhotoResolver(client),
            page_size=self._page_size,
            max_pages=self._max_pages,
        )
        discovery = await discoverer.find()

        if discovery is not None:
            activity = discovery.activity
            photo_url = discovery.photo.best_url
        else:
            newest = await client.list_activities(1, 1)
            if not newest:
                return None
            activity = newest[0]
            photo_url = None

        return LatestActivity(
            activity=activity,
            activity_url=self.activity_url(activity.id),
            photo_url=photo_url,
            stats=build_display_stats(activity),
        )

    async def latest(self) -> Optional[LatestActivity]:
        """Exchange the credential and look up the latest activity.

        Used where no side channel exists for a rotated refresh token, so a
        rotation is only reported in the log.
        """

        exchange = await self.exchange_token()
        if exchange.rotated:
            logger.warning(
                "Strava rotated the refresh token; update STRAVA_REFRESH_TOKEN "
                "to keep this endpoint working"
            )
        return await self.find_latest(exchange.access_token)


__all__ = ["ClientFactory", "LatestActivity", "LatestActivityService"]
