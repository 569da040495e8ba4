"""Cell model for a single LED in the grid."""

import math
from numbers import Real

from pydantic import BaseModel, ConfigDict, Field, field_validator


def finite_number(value: object) -> float:
    """Accept a finite real number; raise ValueError for anything else.

    Bools, strings, None, NaN and infinities are refused so pydantic reports
    them as validation errors.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value}")
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def clamp_channel(value: float) -> int:
    """Round and clamp a colour component into the 0-255 byte range."""
    return max(0, min(255, round_half_up(value)))


class Cell(BaseModel):
    """Target state of one LED: 8-bit RGB plus an on/off flag.

    Out-of-range components are clamped rather than rejected, so values
    coming from interpolation, brightness scaling or generated recipes
    always land in 0-255.

    The model is frozen so grids can share cells freely; edits replace
    the cell instead of mutating it.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(default=0, description="Red (0-255)")
    g: int = Field(default=0, description="Green (0-255)")
    b: int = Field(default=0, description="Blue (0-255)")
    active: bool = Field(default=False, description="LED is on")

    @field_validator("r", "g", "b", mode="before")
    @classmethod
    def clamp_rgb(cls, v: object) -> int:
        """Clamp RGB values into 0-255."""
        return clamp_channel(finite_number(v))

    @classmethod
    def off(cls) -> "Cell":
        """Create an inactive black cell."""
        return cls()

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to CSS hex colour string (e.g. '#FF0000')."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
