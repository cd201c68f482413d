"""Tiered photo resolution for a single activity."""

from __future__ import annotations

import pytest

from strava_latest.models import PhotoCandidate
from strava_latest.strava.application import PhotoResolver, PhotoTierError
from strava_latest.strava.domain.photos import select_best_photo_url

from tests.builders import make_activity_detail, make_strava_photo
from tests.conftest import StravaClientFake

pytestmark = pytest.mark.asyncio


async def test_gallery_photo_wins_without_touching_detail(
    strava_client_fake: StravaClientFake,
) -> None:
    strava_client_fake.with_photos(7, [make_strava_photo(sizes=("1200", "2048"))])

    photo = await PhotoResolver(strava_client_fake).resolve(7)

    assert photo is not None
    assert photo.tier == "gallery"
    assert photo.best_url == "https://photos.example.com/photo-1-2048.jpg"
    assert strava_client_fake.detail_calls == []


async def test_gallery_transport_error_falls_back_to_cover_photo(
    strava_client_fake: StravaClientFake,
) -> None:
    strava_client_fake.with_photos(7, PhotoTierError("connection reset"))
    strava_client_fake.with_detail(
        7,
        make_activity_detail(
            7, primary=make_strava_photo(sizes=("100", "600"), unique_id="cover")
        ),
    )

    photo = await PhotoResolver(strava_client_fake).resolve(7)

    assert photo is not None
    assert photo.tier == "cover"
    assert photo.best_url == "https://photos.example.com/cover-600.jpg"


async def test_empty_gallery_falls_back_to_cover_photo(
    strava_client_fake: StravaClientFake,
) -> None:
    strava_client_fake.with_photos(7, [])
    strava_client_fake.with_detail(
        7, make_activity_detail(7, primary=make_strava_photo(unique_id="cover"))
    )

    photo = await PhotoResolver(strava_client_fake).resolve(7)

    assert photo is not None
    assert photo.tier == "cover"


async def test_gallery_accepts_only_preferred_sizes(
    strava_client_fake: StravaClientFake,
) -> None:
    strava_client_fake.with_photos(7, [make_strava_photo(sizes=("100", "600"))])
    strava_client_fake.with_detail(7, make_activity_detail(7, primary=None))

    assert await PhotoResolver(strava_client_fake).resolve(7) is None


async def test_malformed_photos_block_is_a_soft_cover_failure(
    strava_client_fake: StravaClientFake, caplog: pytest.LogCaptureFixture
) -> None:
    strava_client_fake.with_photos(7, [])
    strava_client_fake.with_detail(7, {"id": 7, "photos": [{"x": 1}]})

    assert await PhotoResolver(strava_client_fake).resolve(7) is None
    assert "Photo tier cover failed" in caplog.text


async def test_gallery_entry_without_urls_is_not_a_photo(
    strava_client_fake: StravaClientFake,
) -> None:
    strava_client_fake.with_photos(7, [{"unique_id": "x", "urls": None}])
    strava_client_fake.with_detail(7, make_activity_detail(7, primary=None))

    assert await PhotoResolver(strava_client_fake).resolve(7) is None


async def test_both_tiers_failing_returns_none(
    strava_client_fake: StravaClientFake,
) -> None:
    strava_client_fake.with_photos(7, PhotoTierError("500"))
    strava_client_fake.with_detail(7, PhotoTierError("404"))

    assert await PhotoResolver(strava_client_fake).resolve(7) is None
    assert strava_client_fake.photo_calls == [7]
    assert strava_client_fake.detail_calls == [7]


async def test_custom_tiers_run_in_order_until_first_hit(
    strava_client_fake: StravaClientFake,
) -> None:
    seen: list[str] = []

    async def empty(activity_id: int):
        seen.append("empty")
        return None

    async def hit(activity_id: int):
        seen.append("hit")
        return PhotoCandidate(url="https://photos.example.com/generic.jpg")

    async def never(activity_id: int):  # pragma: no cover - must not run
        seen.append("never")
        return None

    resolver = PhotoResolver(
        strava_client_fake, tiers=[("empty", empty), ("hit", hit), ("never", never)]
    )

    photo = await resolver.resolve(1)

    assert photo is not None
    assert photo.best_url == "https://photos.example.com/generic.jpg"
    assert seen == ["empty", "hit"]


@pytest.mark.parametrize(
    "urls, fallback, expected",
    [
        ({"2048": "a", "1200": "b", "1000": "c"}, "d", "a"),
        ({"1200": "b", "1000": "c"}, "d", "b"),
        ({"1000": "c", "600": "e"}, "d", "c"),
        ({"600": "e"}, "d", "d"),
        ({"2048": None, "1200": ""}, None, None),
        ({}, None, None),
    ],
)
async def test_select_best_photo_url_follows_size_preference(
    urls, fallback, expected
) -> None:
    assert select_best_photo_url(urls, fallback) == expected


@pytest.mark.parametrize(
    "urls, fallback, expected",
    [
        ({"100": "s", "600": "m"}, None, "m"),
        ({"600": "m", "1000": "c"}, None, "c"),
        ({"600": "m"}, "d", "d"),
        ({"600": None, "100": "s"}, None, "s"),
        ({"original": "o"}, None, None),
    ],
)
async def test_cover_selection_accepts_largest_available_size(
    urls, fallback, expected
) -> None:
    assert select_best_photo_url(urls, fallback, any_size=True) == expected
