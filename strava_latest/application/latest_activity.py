from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from ..models import ActivityPayload, ErrorPayload, ResultPayload
from ..publishing import PayloadWriter, RotationStore
from ..strava.application import LatestActivityService

logger = logging.getLogger(__name__)

NO_ACTIVITIES_ERROR = "No activities found"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BuildLatestActivityPayloadUseCase:
    """Produce the widget payload; failures become an error payload."""

    service: LatestActivityService
    rotation_store: RotationStore
    athlete_url: Optional[str] = None
    clock: Clock = utc_now

    async def __call__(self) -> ResultPayload:
        try:
            return await self._build()
        except Exception as exc:
            logger.exception("Fetching the latest Strava activity failed")
            return ErrorPayload(
                error=str(exc) or exc.__class__.__name__, fetched_at=self.clock()
            )

    async def _build(self) -> ResultPayload:
        exchange = await self.service.exchange_token()
        if exchange.rotated_refresh_token is not None:
            self.rotation_store.save(exchange.rotated_refresh_token)

        latest = await self.service.find_latest(exchange.access_token)
        if latest is None:
            logger.info(NO_ACTIVITIES_ERROR)
            return ErrorPayload(error=NO_ACTIVITIES_ERROR, fetched_at=self.clock())

        return ActivityPayload(
            athlete_url=self.athlete_url,
            activity_url=latest.activity_url,
            photo_url=latest.photo_url,
            stats=latest.stats,
            fetched_at=self.clock(),
        )


@dataclass
class PublishLatestActivityUseCase:
    """Build the payload and always write it, whichever variant it is."""

    build_payload: BuildLatestActivityPayloadUseCase
    writer: PayloadWriter

    async def __call__(self) -> ResultPayload:
        payload = await self.build_payload()
        self.writer.write(payload)
        return payload


__all__ = [
    "BuildLatestActivityPayloadUseCase",
    "Clock",
    "NO_ACTIVITIES_ERROR",
    "PublishLatestActivityUseCase",
    "utc_now",
]
