"""Shared test fixtures and doubles."""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from strava_latest import main
from strava_latest.models import ActivityRecord, Credential, TokenExchange
from strava_latest.platform.config import Settings, get_settings
from strava_latest.platform.wiring import provide_latest_activity_service
from strava_latest.strava.application import (
    LatestActivity,
    StravaClientPort,
    TokenProviderPort,
)


@dataclass
class _Expectation:
    expected: Dict[str, Any]
    returns: Any = None
    raises: Exception | None = None


class StravaClientFake(StravaClientPort):
    """In-memory Strava client serving a scripted feed and photo endpoints."""

    def __init__(self) -> None:
        self._pages: List[List[Dict[str, Any]]] = []
        self._feed_error: Exception | None = None
        self._photos: Dict[int, Any] = {}
        self._details: Dict[int, Any] = {}
        self.list_calls: List[tuple[int, int]] = []
        self.photo_calls: List[int] = []
        self.detail_calls: List[int] = []

    def with_pages(self, *pages: List[Dict[str, Any]]) -> "StravaClientFake":
        """Seed feed pages; page N of the feed is the N-th argument."""

        self._pages = [list(page) for page in pages]
        return self

    def with_feed_error(self, error: Exception) -> "StravaClientFake":
        self._feed_error = error
        return self

    def with_photos(self, activity_id: int, photos: Any) -> "StravaClientFake":
        """Gallery response for an activity; an exception instance is raised."""

        self._photos[activity_id] = photos
        return self

    def with_detail(self, activity_id: int, detail: Any) -> "StravaClientFake":
        """Detail response for an activity; an exception instance is raised."""

        self._details[activity_id] = detail
        return self

    def assert_photos_not_requested(self, activity_id: int) -> None:
        assert activity_id not in self.photo_calls, (
            f"Gallery requested for activity {activity_id}"
        )
        assert activity_id not in self.detail_calls, (
            f"Detail requested for activity {activity_id}"
        )

    async def list_activities(self, page: int, per_page: int) -> Sequence[ActivityRecord]:
        self.list_calls.append((page, per_page))
        if self._feed_error is not None:
            raise self._feed_error
        items: List[Dict[str, Any]]
        if per_page == 1:
            items = self._pages[0][:1] if self._pages else []
        elif 0 < page <= len(self._pages):
            items = self._pages[page - 1]
        else:
            items = []
        return [ActivityRecord.model_validate(item) for item in items]

    async def get_activity_photos(self, activity_id: int) -> list[dict[str, Any]]:
        self.photo_calls.append(activity_id)
        return self._respond(self._photos.get(activity_id, []))

    async def get_activity(self, activity_id: int) -> dict[str, Any]:
        self.detail_calls.append(activity_id)
        return self._respond(self._details.get(activity_id, {"id": activity_id}))

    @staticmethod
    def _respond(value: Any) -> Any:
        if isinstance(value, Exception):
            raise value
        return value


class TokenProviderFake(TokenProviderPort):
    """Token provider double with expectation helpers."""

    def __init__(self) -> None:
        self._expected: list[_Expectation] = []
        self.credentials: list[Credential] = []

    def expect_exchange(
        self,
        *,
        returns: TokenExchange | None = None,
        raises: Exception | None = None,
    ) -> "TokenProviderFake":
        self._expected.append(_Expectation({}, returns, raises))
        return self

    def assert_exchanged_with(self, refresh_token: str) -> None:
        assert self.credentials, "exchange() was not called"
        assert (
            self.credentials[-1].refresh_token == refresh_token
        ), f"Expected exchange with {refresh_token!r}"

    async def exchange(self, credential: Credential) -> TokenExchange:
        self.credentials.append(credential)
        if self._expected:
            expectation = self._expected.pop(0)
            if expectation.raises:
                raise expectation.raises
            if expectation.returns is not None:
                return expectation.returns
        return TokenExchange(access_token="access-token")


class LatestActivityServiceSpy:
    """Spy double for ``LatestActivityService`` used by route tests."""

    def __init__(self) -> None:
        self._expected: list[_Expectation] = []
        self.calls = 0

    def expect_latest(
        self,
        *,
        returns: Optional[LatestActivity] = None,
        raises: Exception | None = None,
    ) -> "LatestActivityServiceSpy":
        self._expected.append(_Expectation({}, returns, raises))
        return self

    async def latest(self) -> Optional[LatestActivity]:
        self.calls += 1
        if self._expected:
            expectation = self._expected.pop(0)
            if expectation.raises:
                raise expectation.raises
            return expectation.returns
        return None


class FrozenClock:
    """Mutable clock injected wherever a ``fetchedAt`` timestamp is taken."""

    def __init__(self, current: datetime) -> None:
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        self._current = current

    def __call__(self) -> datetime:
        return self._current

    def advance(self, **delta: Any) -> None:
        self._current += timedelta(**delta)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Canonical settings instance reused across tests."""

    return Settings(
        strava_client_id="strava-client",
        strava_client_secret="strava-secret",
        strava_refresh_token="refresh-token",
        strava_athlete_id="12345",
        strava_api_url="https://strava.example.com/api/v3",
        strava_token_url="https://strava.example.com/api/v3/oauth/token",
        strava_web_url="https://strava.example.com",
        output_path=str(tmp_path / "public" / "data" / "strava-latest.json"),
        rotation_path=str(tmp_path / ".data" / "rotated_refresh_token.txt"),
    )


@pytest.fixture
def credential() -> Credential:
    return Credential(
        client_id="strava-client",
        client_secret="strava-secret",
        refresh_token="refresh-token",
    )


@pytest.fixture
def strava_client_fake() -> StravaClientFake:
    return StravaClientFake()


@pytest.fixture
def token_provider_fake() -> TokenProviderFake:
    return TokenProviderFake()


@pytest.fixture
def latest_activity_spy() -> LatestActivityServiceSpy:
    return LatestActivityServiceSpy()


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def app(
    settings: Settings, latest_activity_spy: LatestActivityServiceSpy
) -> Iterator[FastAPI]:
    """Configured FastAPI application instance for integration tests."""

    app = main.app
    overrides = {
        get_settings: lambda: settings,
        provide_latest_activity_service: lambda: latest_activity_spy,
    }
    app.dependency_overrides.update(overrides)
    try:
        yield app
    finally:
        for dependency in overrides:
            app.dependency_overrides.pop(dependency, None)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """Async HTTP client bound to the FastAPI app."""

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as api_client:
        yield api_client

