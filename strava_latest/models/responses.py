from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .stats import DisplayStats


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class ActivityPayload(_CamelModel):
    """Widget payload describing the latest activity."""

    athlete_url: Optional[str] = None
    activity_url: str
    photo_url: Optional[str] = None
    stats: DisplayStats
    fetched_at: datetime


class ErrorPayload(_CamelModel):
    """Placeholder payload written when the activity could not be fetched."""

    error: str
    fetched_at: datetime


ResultPayload = Union[ActivityPayload, ErrorPayload]


class LatestActivityResponse(_CamelModel):
    """Body returned by the live-serving endpoint."""

    photo_url: Optional[str] = None
    stats: DisplayStats
    activity_url: str


__all__ = [
    "ActivityPayload",
    "ErrorPayload",
    "LatestActivityResponse",
    "ResultPayload",
]
