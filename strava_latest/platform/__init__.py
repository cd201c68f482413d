"""Configuration and dependency wiring."""

from .config import (
    FatalConfigError,
    GitHubSettings,
    Settings,
    get_settings,
    load_github_settings,
    load_settings,
)

__all__ = [
    "FatalConfigError",
    "GitHubSettings",
    "Settings",
    "get_settings",
    "load_github_settings",
    "load_settings",
]
