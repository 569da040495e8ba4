"""Recipe file documents.

Two generations of the recipe format exist:

- ``1.0`` (legacy): a single day under ``keyframes``, cells spelled
  ``{red, green, blue, active}``.
- ``2.0``: one keyframe list per day under ``keyframesByDay``, cells
  spelled ``{r, g, b, active}``.

These models mirror the files field-for-field. Conversion to and from the
in-memory ``Schedule`` lives in ``RecipeService``.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .cell import Cell
from .keyframe import CYCLE_DURATION, Keyframe, format_time

RECIPE_VERSION = "2.0"


class RecipeMetadata(BaseModel):
    """Header shared by both recipe generations."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="Custom Recipe")
    created: str = Field(default_factory=lambda: datetime.now().isoformat())
    version: str = Field(default=RECIPE_VERSION)
    grid_size: int | None = Field(default=None, alias="gridSize")
    total_days: int | None = Field(default=None, alias="totalDays")
    cycle_duration: int = Field(default=CYCLE_DURATION, alias="cycleDuration")
    cycle_unit: str = Field(default="minutes", alias="cycleUnit")
    description: str = Field(default="Custom 24-hour lighting pattern")


class RecipeKeyframe(BaseModel):
    """A keyframe as written in a ``2.0`` recipe."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | int | float | None = None
    name: str = ""
    time: float
    time_formatted: str | None = Field(default=None, alias="timeFormatted")
    grid: list[Cell]

    @classmethod
    def from_keyframe(cls, keyframe: Keyframe) -> "RecipeKeyframe":
        """Build the file record for an in-memory keyframe."""
        return cls(
            id=keyframe.id,
            name=keyframe.name,
            time=keyframe.time,
            time_formatted=format_time(keyframe.time),
            grid=list(keyframe.grid),
        )

    def to_keyframe(self) -> Keyframe:
        """Convert to an in-memory keyframe."""
        return Keyframe(id=self.id, name=self.name, time=self.time, grid=self.grid)


class RecipeInstructions(BaseModel):
    """Free-text notes for firmware authors, written into every saved recipe."""

    microcontroller: str = "Compatible with Arduino/Raspberry Pi"
    notes: str = (
        "Multi-day cycle. keyframesByDay[d] holds day d. Time values in minutes (0-1439). "
        "RGB values 0-255. Grid indexed row-major order."
    )
    example: str = "Use keyframe interpolation for smooth transitions between lighting phases."


class RecipeDocument(BaseModel):
    """A ``2.0`` multi-day recipe file."""

    model_config = ConfigDict(populate_by_name=True)

    metadata: RecipeMetadata = Field(default_factory=RecipeMetadata)
    keyframes_by_day: list[list[RecipeKeyframe]] = Field(alias="keyframesByDay")
    instructions: RecipeInstructions | None = None


class LegacyCell(BaseModel):
    """A cell as written in a ``1.0`` recipe."""

    red: float = 0
    green: float = 0
    blue: float = 0
    active: bool = False

    def to_cell(self) -> Cell:
        """Convert to the canonical cell."""
        return Cell(r=self.red, g=self.green, b=self.blue, active=self.active)


class LegacyKeyframe(BaseModel):
    """A keyframe as written in a ``1.0`` recipe."""

    id: str | int | float | None = None
    name: str = ""
    time: float
    grid: list[LegacyCell]

    def to_keyframe(self) -> Keyframe:
        """Convert to an in-memory keyframe (keeps the file's id if any)."""
        return Keyframe(
            id=self.id,
            name=self.name,
            time=self.time,
            grid=[cell.to_cell() for cell in self.grid],
        )


class LegacyRecipeDocument(BaseModel):
    """A ``1.0`` single-day recipe file."""

    metadata: RecipeMetadata = Field(default_factory=RecipeMetadata)
    keyframes: list[LegacyKeyframe]
