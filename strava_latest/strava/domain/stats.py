from __future__ import annotations

import math

from ...models.stats import OtherStats, RideStats, RunStats
from ...models.strava import ActivityRecord

RUN_KINDS = frozenset({"Run", "TrailRun", "VirtualRun"})
RIDE_KINDS = frozenset(
    {
        "Ride",
        "VirtualRide",
        "EBikeRide",
        "GravelRide",
        "MountainBikeRide",
        "EMountainBikeRide",
    }
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_duration(total_seconds: float) -> str:
    """Format seconds as ``H:MM:SS`` from one hour upwards, else ``M:SS``."""

    seconds_total = _round_half_up(max(total_seconds, 0))
    hours, remainder = divmod(seconds_total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_pace(seconds_per_km: float) -> str:
    total = _round_half_up(seconds_per_km)
    minutes, seconds = divmod(total, 60)
    return f"{minutes}:{seconds:02d}/km"


def format_distance(distance_km: float) -> str:
    return f"{distance_km:.2f} km"


def format_speed(km_per_hour: float) -> str:
    return f"{km_per_hour:.1f} km/h"


def build_display_stats(activity: ActivityRecord) -> RunStats | RideStats | OtherStats:
    """Derive the widget statistics for an activity.

    Runs get a pace and rides a speed, both only when there is a distance and
    a moving time to divide by. Everything else shows the duration alone.
    """

    distance_km = activity.distance / 1000
    duration = activity.duration_seconds
    duration_label = format_duration(duration)

    if activity.kind in RUN_KINDS and distance_km > 0 and duration > 0:
        return RunStats(
            distance=format_distance(distance_km),
            pace=format_pace(duration / distance_km),
            duration=duration_label,
        )
    if activity.kind in RIDE_KINDS and distance_km > 0 and duration > 0:
        return RideStats(
            distance=format_distance(distance_km),
            speed=format_speed(distance_km / (duration / 3600)),
            duration=duration_label,
        )
    return OtherStats(duration=duration_label)


__all__ = [
    "RIDE_KINDS",
    "RUN_KINDS",
    "build_display_stats",
    "format_distance",
    "format_duration",
    "format_pace",
    "format_speed",
]
