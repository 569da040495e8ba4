"""Day and Schedule models (data structure only - editing is in KeyframeStore)."""

import logging
from datetime import datetime

from pydantic import BaseModel, Field, field_serializer, field_validator

from .grid import DEFAULT_GRID_SIZE, blank_grid, clamp_grid_size
from .keyframe import CYCLE_DURATION, Keyframe

logger = logging.getLogger(__name__)

MIN_TOTAL_DAYS = 1
MAX_TOTAL_DAYS = 14
DEFAULT_TOTAL_DAYS = 7


def clamp_total_days(days: int) -> int:
    """Clamp a day count into [MIN_TOTAL_DAYS, MAX_TOTAL_DAYS]."""
    return max(MIN_TOTAL_DAYS, min(MAX_TOTAL_DAYS, int(days)))


class Day(BaseModel):
    """One cycle's keyframes.

    Stored in insertion order; the store keeps the list sorted by time
    but readers should go through ``sorted_keyframes``.
    """

    keyframes: list[Keyframe] = Field(default_factory=list, description="Keyframes of this day")

    def sorted_keyframes(self) -> list[Keyframe]:
        """Keyframes sorted by time (stable for equal times)."""
        return sorted(self.keyframes, key=lambda kf: kf.time)

    def sort(self) -> None:
        """Sort keyframes by time in place (stable)."""
        self.keyframes.sort(key=lambda kf: kf.time)

    def find(self, keyframe_id: str) -> Keyframe | None:
        """Get a keyframe by id."""
        for kf in self.keyframes:
            if kf.id == keyframe_id:
                return kf
        return None

    def duplicate(self) -> "Day":
        """Deep copy with fresh keyframe ids."""
        return Day(keyframes=[kf.duplicate() for kf in self.keyframes])

    def __len__(self) -> int:
        return len(self.keyframes)


def _default_day(grid_size: int = DEFAULT_GRID_SIZE) -> Day:
    return Day(keyframes=[Keyframe(name="Scene 1", time=0, grid=blank_grid(grid_size))])


class Schedule(BaseModel):
    """A multi-day lighting recipe: ``total_days`` cycles of keyframes."""

    name: str = Field(default="Custom Recipe", description="Schedule name")
    grid_size: int = Field(default=DEFAULT_GRID_SIZE, description="Grid width/height")
    days: list[Day] = Field(default_factory=lambda: [_default_day()], description="Days in order")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation timestamp")

    @field_validator("grid_size", mode="before")
    @classmethod
    def validate_grid_size(cls, v: int) -> int:
        """Clamp grid size into the supported range."""
        return clamp_grid_size(v)

    @field_validator("days")
    @classmethod
    def validate_days(cls, v: list[Day]) -> list[Day]:
        """Ensure the day count is within range."""
        if not MIN_TOTAL_DAYS <= len(v) <= MAX_TOTAL_DAYS:
            raise ValueError(
                f"Schedule must have {MIN_TOTAL_DAYS}-{MAX_TOTAL_DAYS} days, got {len(v)}"
            )
        return v

    @field_serializer("created_at")
    def serialize_datetime(self, dt: datetime) -> str:
        """Serialize datetime to ISO format."""
        return dt.isoformat()

    @property
    def total_days(self) -> int:
        """Number of days in the schedule."""
        return len(self.days)

    @property
    def total_duration(self) -> int:
        """Length of the whole schedule in minutes."""
        return CYCLE_DURATION * self.total_days

    def get_day(self, day: int) -> Day | None:
        """Get a day by index, or None if out of range."""
        if 0 <= day < len(self.days):
            return self.days[day]
        return None

    @classmethod
    def create_default(
        cls, name: str = "Custom Recipe", grid_size: int = DEFAULT_GRID_SIZE, total_days: int = 1
    ) -> "Schedule":
        """Create a schedule with one blank keyframe at midnight on every day."""
        size = clamp_grid_size(grid_size)
        days = [_default_day(size) for _ in range(clamp_total_days(total_days))]
        return cls(name=name, grid_size=size, days=days)
