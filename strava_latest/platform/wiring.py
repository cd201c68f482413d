"""Dependency wiring shared by the FastAPI app and the command line jobs."""

from __future__ import annotations

from typing import AsyncIterator, Optional

import httpx
from fastapi import Depends

from ..application import BuildLatestActivityPayloadUseCase, PublishLatestActivityUseCase
from ..application.latest_activity import Clock, utc_now
from ..models import Credential
from ..publishing import PayloadWriter, RotationStore
from ..strava.application import LatestActivityService
from ..strava.infrastructure import (
    create_strava_client_adapter,
    create_strava_token_provider,
)
from .config import Settings, get_settings

USER_AGENT = "strava-latest/1.0"


def credential_from_settings(settings: Settings) -> Credential:
    return Credential(
        client_id=settings.strava_client_id,
        client_secret=settings.strava_client_secret,
        refresh_token=settings.strava_refresh_token,
    )


def athlete_url_from_settings(settings: Settings) -> Optional[str]:
    if not settings.strava_athlete_id:
        return None
    return f"{settings.strava_web_url.rstrip('/')}/athletes/{settings.strava_athlete_id}"


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.http_timeout, headers={"User-Agent": USER_AGENT}
    )


def build_latest_activity_service(
    *, http_client: httpx.AsyncClient, settings: Settings
) -> LatestActivityService:
    def client_factory(access_token: str):
        return create_strava_client_adapter(
            http_client=http_client, access_token=access_token, settings=settings
        )

    return LatestActivityService(
        create_strava_token_provider(http_client=http_client, settings=settings),
        client_factory,
        credential_from_settings(settings),
        web_url=settings.strava_web_url,
        page_size=settings.page_size,
        max_pages=settings.max_pages,
    )


def build_publish_use_case(
    *,
    http_client: httpx.AsyncClient,
    settings: Settings,
    clock: Clock = utc_now,
) -> PublishLatestActivityUseCase:
    build_payload = BuildLatestActivityPayloadUseCase(
        service=build_latest_activity_service(http_client=http_client, settings=settings),
        rotation_store=RotationStore(settings.rotation_path),
        athlete_url=athlete_url_from_settings(settings),
        clock=clock,
    )
    return PublishLatestActivityUseCase(
        build_payload=build_payload, writer=PayloadWriter(settings.output_path)
    )


async def provide_latest_activity_service(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[LatestActivityService]:
    async with create_http_client(settings) as http_client:
        yield build_latest_activity_service(http_client=http_client, settings=settings)


__all__ = [
    "USER_AGENT",
    "athlete_url_from_settings",
    "build_latest_activity_service",
    "build_publish_use_case",
    "create_http_client",
    "credential_from_settings",
    "provide_latest_activity_service",
]
