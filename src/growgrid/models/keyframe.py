"""Keyframe model: a named, timestamped grid snapshot."""

import uuid

from pydantic import BaseModel, Field, field_validator

from .cell import Cell, finite_number, round_half_up

# One simulated day, in minutes
CYCLE_DURATION = 1440


def new_keyframe_id() -> str:
    """Mint a fresh keyframe id."""
    return uuid.uuid4().hex


def clamp_time(time: float) -> int:
    """Clamp a timestamp into [0, CYCLE_DURATION - 1] whole minutes."""
    return max(0, min(CYCLE_DURATION - 1, round_half_up(time)))


def format_time(minutes: float) -> str:
    """Format minutes since midnight as HH:MM.

    Example:
        >>> format_time(390)
        '06:30'
    """
    hours = int(minutes // 60)
    mins = int(minutes % 60)
    return f"{hours:02d}:{mins:02d}"


class Keyframe(BaseModel):
    """A full grid snapshot at a time of day.

    Identity is by ``id``. Several keyframes may share a ``time``.
    """

    id: str = Field(default_factory=new_keyframe_id, description="Unique keyframe id")
    name: str = Field(default="", description="Display name")
    time: int = Field(default=0, description=f"Minute of the day (0-{CYCLE_DURATION - 1})")
    grid: list[Cell] = Field(default_factory=list, description="Row-major cell states")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> str:
        """Accept numeric ids written by older recipe files."""
        if v is None or v == "":
            return new_keyframe_id()
        return str(v)

    @field_validator("time", mode="before")
    @classmethod
    def validate_time(cls, v: object) -> int:
        """Clamp time into the cycle."""
        return clamp_time(finite_number(v))

    @property
    def time_formatted(self) -> str:
        """Time of day as HH:MM."""
        return format_time(self.time)

    def duplicate(self) -> "Keyframe":
        """Deep copy with a fresh id."""
        return Keyframe(name=self.name, time=self.time, grid=list(self.grid))
