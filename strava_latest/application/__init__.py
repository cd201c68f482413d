from .latest_activity import (
    NO_ACTIVITIES_ERROR,
    BuildLatestActivityPayloadUseCase,
    PublishLatestActivityUseCase,
)

__all__ = [
    "BuildLatestActivityPayloadUseCase",
    "NO_ACTIVITIES_ERROR",
    "PublishLatestActivityUseCase",
]
