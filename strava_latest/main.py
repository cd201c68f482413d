from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .platform.config import get_settings
from .routes.strava import router as strava_router


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    # Missing credentials stop the server before it accepts requests.
    get_settings()
    yield


app: FastAPI = FastAPI(
    title="Strava Latest",
    version="1.0.0",
    description="Serves the newest Strava activity with a photo for the site widget",
    lifespan=lifespan,
)


@app.api_route("/", methods=["GET", "HEAD"], include_in_schema=False)
@app.api_route("/healthz", methods=["GET", "HEAD"], include_in_schema=False)
async def healthz() -> dict[str, str]:
    """Lightweight endpoint used for health checks."""
    return {"status": "ok"}


app.include_router(strava_router, prefix="/api")
