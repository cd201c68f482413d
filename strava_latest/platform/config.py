from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Optional

from pydantic import AfterValidator, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ROTATION_PATH = ".data/rotated_refresh_token.txt"


class FatalConfigError(RuntimeError):
    """Raised when required configuration is missing at startup."""


def _require_value(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be blank")
    return value.strip()


RequiredStr = Annotated[str, AfterValidator(_require_value)]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    strava_client_id: RequiredStr
    strava_client_secret: RequiredStr
    strava_refresh_token: RequiredStr
    strava_athlete_id: Optional[str] = None

    strava_api_url: str = "https://www.strava.com/api/v3"
    strava_token_url: str = "https://www.strava.com/api/v3/oauth/token"
    strava_web_url: str = "https://www.strava.com"

    page_size: int = 50
    max_pages: int = 40
    photo_size: int = 2048
    http_timeout: float = 15.0

    output_path: str = "public/data/strava-latest.json"
    rotation_path: str = DEFAULT_ROTATION_PATH
    cache_max_age: int = 120

    @field_validator("strava_athlete_id")
    @classmethod
    def blank_athlete_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


class GitHubSettings(BaseSettings):
    """Settings for pushing a rotated refresh token to repository secrets."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    github_repository: RequiredStr
    github_token: RequiredStr
    github_api_url: str = "https://api.github.com"
    rotation_path: str = DEFAULT_ROTATION_PATH


def _missing_names(exc: ValidationError) -> list[str]:
    names = {str(error["loc"][0]).upper() for error in exc.errors() if error["loc"]}
    return sorted(names)


def load_settings(**overrides: object) -> Settings:
    """Build ``Settings`` or raise ``FatalConfigError`` naming the missing values."""

    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        missing = ", ".join(_missing_names(exc))
        raise FatalConfigError(f"Missing or invalid Strava configuration: {missing}") from exc


def load_github_settings(**overrides: object) -> GitHubSettings:
    try:
        return GitHubSettings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        missing = ", ".join(_missing_names(exc))
        raise FatalConfigError(f"Missing or invalid GitHub configuration: {missing}") from exc


@lru_cache()
def get_settings() -> Settings:
    return load_settings()


__all__ = [
    "DEFAULT_ROTATION_PATH",
    "FatalConfigError",
    "GitHubSettings",
    "Settings",
    "get_settings",
    "load_github_settings",
    "load_settings",
]
