from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field


class _Stats(BaseModel):
    model_config = ConfigDict(frozen=True)

    duration: str = Field(..., description="Moving time as H:MM:SS or M:SS.")

    # Site templates written against the first widget version branch on it.
    @computed_field(alias="isRun")  # type: ignore[misc]
    @property
    def is_run(self) -> bool:
        return getattr(self, "kind", None) == "run"


class RunStats(_Stats):
    kind: Literal["run"] = "run"
    distance: str = Field(..., description="Distance such as '5.00 km'.")
    pace: str = Field(..., description="Pace such as '5:00/km'.")


class RideStats(_Stats):
    kind: Literal["ride"] = "ride"
    distance: str = Field(..., description="Distance such as '20.00 km'.")
    speed: str = Field(..., description="Average speed such as '20.0 km/h'.")


class OtherStats(_Stats):
    kind: Literal["other"] = "other"


DisplayStats = Annotated[
    Union[RunStats, RideStats, OtherStats], Field(discriminator="kind")
]


__all__ = ["DisplayStats", "OtherStats", "RideStats", "RunStats"]
