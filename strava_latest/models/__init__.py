from .responses import (
    ActivityPayload,
    ErrorPayload,
    LatestActivityResponse,
    ResultPayload,
)
from .stats import DisplayStats, OtherStats, RideStats, RunStats
from .strava import ActivityRecord, Credential, PhotoCandidate, TokenExchange

__all__ = [
    'ActivityPayload',
    'ActivityRecord',
    'Credential',
    'DisplayStats',
    'ErrorPayload',
    'LatestActivityResponse',
    'OtherStats',
    'PhotoCandidate',
    'ResultPayload',
    'RideStats',
    'RunStats',
    'TokenExchange',
]
