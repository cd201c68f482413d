from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional, Sequence

from pydantic import ValidationError

from ...models import PhotoCandidate
from .ports import PhotoTierError, StravaClientPort

logger = logging.getLogger(__name__)

PhotoTier = Callable[[int], Awaitable[Optional[PhotoCandidate]]]


class PhotoResolver:
    """Find the best photo for an activity by trying each tier in order.

    The gallery tier asks the photos endpoint for the largest size. The cover
    tier falls back to the primary photo embedded in the activity detail.
    Tier failures are logged and treated as "no photo from this tier".
    """

    def __init__(
        self,
        client: StravaClientPort,
        tiers: Sequence[tuple[str, PhotoTier]] | None = None,
    ) -> None:
        self._client = client
        self._tiers = list(tiers) if tiers is not None else [
            ("gallery", self.from_gallery),
            ("cover", self.from_cover_photo),
        ]

    async def resolve(self, activity_id: int) -> Optional[PhotoCandidate]:
        for name, tier in self._tiers:
            try:
                candidate = await tier(activity_id)
            except PhotoTierError as exc:
                logger.warning(
                    "Photo tier %s failed for activity %s: %s", name, activity_id, exc
                )
                continue
            if candidate is not None and candidate.best_url:
                return candidate
        return None

    async def from_gallery(self, activity_id: int) -> Optional[PhotoCandidate]:
        photos = await self._client.get_activity_photos(activity_id)
        if not photos:
            return None
        return _candidate(photos[0], "gallery")

    async def from_cover_photo(self, activity_id: int) -> Optional[PhotoCandidate]:
        detail = await self._client.get_activity(activity_id)
        photos = detail.get("photos") if isinstance(detail, dict) else None
        if not photos:
            return None
        if not isinstance(photos, dict):
            raise PhotoTierError(f"Malformed cover photos block: {type(photos).__name__}")
        primary = photos.get("primary")
        if not primary:
            return None
        return _candidate(primary, "cover")


def _candidate(payload: Any, tier: str) -> PhotoCandidate:
    try:
        return PhotoCandidate.model_validate({**payload, "tier": tier})
    except (TypeError, ValidationError) as exc:
        raise PhotoTierError(f"Malformed {tier} photo: {exc}") from exc


__all__ = ["PhotoResolver", "PhotoTier"]
