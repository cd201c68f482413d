from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..strava.domain.photos import select_best_photo_url


class Credential(BaseModel):
    """Long-lived OAuth client credentials used to mint access tokens."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str = Field(repr=False)
    refresh_token: str = Field(repr=False)


class TokenExchange(BaseModel):
    """Outcome of a refresh-token exchange.

    ``rotated_refresh_token`` is only set when Strava issued a refresh token
    that differs from the one presented. The new value is for future runs and
    must not replace the credential used by the current one.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(repr=False)
    rotated_refresh_token: Optional[str] = Field(default=None, repr=False)
    expires_at: Optional[int] = None

    @property
    def rotated(self) -> bool:
        return self.rotated_refresh_token is not None


class ActivityRecord(BaseModel):
    """Subset of fields returned by the Strava activity list endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str = ""
    type: Optional[str] = None
    sport_type: Optional[str] = None
    start_date: Optional[str] = None
    distance: float = 0.0
    moving_time: Optional[int] = None
    elapsed_time: Optional[int] = None
    total_photo_count: int = 0

    @field_validator("distance", "total_photo_count", mode="before")
    @classmethod
    def null_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @property
    def kind(self) -> str:
        return self.sport_type or self.type or ""

    @property
    def duration_seconds(self) -> int:
        if self.moving_time is not None:
            return self.moving_time
        return self.elapsed_time or 0

    @property
    def has_photos(self) -> bool:
        return self.total_photo_count > 0


class PhotoCandidate(BaseModel):
    """One photo offered at several resolutions."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    urls: Dict[str, Optional[str]] = Field(default_factory=dict)
    url: Optional[str] = None
    tier: Optional[str] = None

    @field_validator("urls", mode="before")
    @classmethod
    def null_urls_as_empty(cls, value: Any) -> Any:
        return value or {}

    @property
    def best_url(self) -> Optional[str]:
        return select_best_photo_url(
            self.urls, self.url, any_size=self.tier == "cover"
        )


__all__ = ["ActivityRecord", "Credential", "PhotoCandidate", "TokenExchange"]
