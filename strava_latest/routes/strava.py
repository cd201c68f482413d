from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from ..models import LatestActivityResponse
from ..platform.config import Settings, get_settings
from ..platform.wiring import provide_latest_activity_service
from ..strava.application import LatestActivityService

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter()


@router.get(
    "/strava-latest",
    response_model=LatestActivityResponse,
    responses={204: {"description": "The athlete has no activities."}},
)
async def get_latest_activity(
    service: LatestActivityService = Depends(provide_latest_activity_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Return the newest activity with a photo, with display statistics."""
    try:
        latest = await service.latest()
    except Exception as exc:
        logger.exception("Error serving the latest Strava activity")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    if latest is None:
        return Response(status_code=204)

    body = LatestActivityResponse(
        photo_url=latest.photo_url,
        stats=latest.stats,
        activity_url=latest.activity_url,
    )
    return JSONResponse(
        content=body.model_dump(mode="json", by_alias=True),
        headers={"Cache-Control": f"public, max-age={settings.cache_max_age}"},
    )
