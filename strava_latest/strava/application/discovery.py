from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ...models import ActivityRecord, PhotoCandidate
from .photos import PhotoResolver
from .ports import StravaClientPort

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
DEFAULT_MAX_PAGES = 40


@dataclass(frozen=True)
class Discovery:
    activity: ActivityRecord
    photo: PhotoCandidate


class ActivityDiscoverer:
    """Scan the activity feed newest first for an activity with a real photo.

    Activities claiming no photos are skipped without touching the photo
    endpoints. The scan stops at the first resolved photo, at an empty page,
    or after ``max_pages`` pages. Feed errors propagate to the caller.
    """

    def __init__(
        self,
        client: StravaClientPort,
        resolver: PhotoResolver,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        self._client = client
        self._resolver = resolver
        self._page_size = page_size
        self._max_pages = max_pages

    async def find(self) -> Optional[Discovery]:
        for page in range(1, self._max_pages + 1):
            activities = await self._client.list_activities(page, self._page_size)
            if not activities:
                logger.debug("Activity feed exhausted at page %s", page)
                return None

            for activity in activities:
                if not activity.has_photos:
                    continue
                photo = await self._resolver.resolve(activity.id)
                if photo is not None:
                    logger.info(
                        "Found activity %s with a %s photo on page %s",
                        activity.id,
                        photo.tier,
                        page,
                    )
                    return Discovery(activity=activity, photo=photo)

        logger.info("No activity with a photo in the first %s pages", self._max_pages)
        return None


__all__ = ["ActivityDiscoverer", "DEFAULT_MAX_PAGES", "DEFAULT_PAGE_SIZE", "Discovery"]
