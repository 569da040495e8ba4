"""Built-in lighting patterns.

Each pattern builds its keyframes for a given grid size, so the same
pattern works on a 4x4 test board and a 32x32 panel.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from growgrid.models import Cell, Grid, Keyframe, blank_grid, filled_grid
from growgrid.models.grid import index_to_rc

logger = logging.getLogger(__name__)


def _uniform(size: int, r: int, g: int, b: int) -> Grid:
    return filled_grid(size, Cell(r=r, g=g, b=b, active=True))


def _masked(size: int, lit: Callable[[int, int], bool], r: int, g: int, b: int) -> Grid:
    on = Cell(r=r, g=g, b=b, active=True)
    off = Cell.off()
    return [on if lit(*index_to_rc(i, size)) else off for i in range(size * size)]


@dataclass(frozen=True)
class Pattern:
    """A named recipe template."""

    name: str
    description: str
    build: Callable[[int], list[Keyframe]]

    def keyframes(self, grid_size: int) -> list[Keyframe]:
        """Build this pattern's keyframes for a grid size."""
        return self.build(grid_size)


@dataclass(frozen=True)
class PatternCategory:
    """A group of related patterns."""

    name: str
    icon: str
    patterns: tuple[Pattern, ...]


# =================================================================
# Growth stages
# =================================================================


def _vegetative(size: int) -> list[Keyframe]:
    # 18/6 photoperiod, blue-weighted for compact leafy growth
    return [
        Keyframe(name="Lights Off", time=0, grid=blank_grid(size)),
        Keyframe(name="Dawn", time=300, grid=_uniform(size, 120, 60, 160)),
        Keyframe(name="Peak Vegetative", time=720, grid=_uniform(size, 140, 80, 255)),
        Keyframe(name="Dusk", time=1290, grid=_uniform(size, 120, 40, 140)),
        Keyframe(name="Night", time=1380, grid=blank_grid(size)),
    ]


def _flowering(size: int) -> list[Keyframe]:
    # 12/12 photoperiod, red-weighted to drive flowering
    return [
        Keyframe(name="Night", time=0, grid=blank_grid(size)),
        Keyframe(name="Sunrise", time=480, grid=_uniform(size, 255, 60, 40)),
        Keyframe(name="Peak Bloom", time=780, grid=_uniform(size, 255, 90, 130)),
        Keyframe(name="Sunset", time=1140, grid=_uniform(size, 255, 40, 20)),
        Keyframe(name="Lights Off", time=1200, grid=blank_grid(size)),
    ]


def _seedling(size: int) -> list[Keyframe]:
    return [
        Keyframe(name="Night", time=0, grid=blank_grid(size)),
        Keyframe(name="Soft Morning", time=360, grid=_uniform(size, 90, 90, 120)),
        Keyframe(name="Gentle Noon", time=720, grid=_uniform(size, 140, 140, 170)),
        Keyframe(name="Evening", time=1200, grid=_uniform(size, 80, 60, 90)),
        Keyframe(name="Lights Off", time=1260, grid=blank_grid(size)),
    ]


# =================================================================
# Natural light
# =================================================================


def _sunrise_sunset(size: int) -> list[Keyframe]:
    return [
        Keyframe(name="Moonlight", time=0, grid=_uniform(size, 10, 10, 40)),
        Keyframe(name="Sunrise", time=360, grid=_uniform(size, 255, 120, 40)),
        Keyframe(name="Solar Noon", time=720, grid=_uniform(size, 255, 255, 230)),
        Keyframe(name="Sunset", time=1080, grid=_uniform(size, 255, 90, 30)),
        Keyframe(name="Twilight", time=1200, grid=_uniform(size, 20, 10, 60)),
    ]


def _overcast(size: int) -> list[Keyframe]:
    return [
        Keyframe(name="Night", time=0, grid=blank_grid(size)),
        Keyframe(name="Grey Dawn", time=390, grid=_uniform(size, 110, 120, 140)),
        Keyframe(name="Cloud Break", time=690, grid=_uniform(size, 230, 230, 220)),
        Keyframe(name="Overcast Afternoon", time=840, grid=_uniform(size, 150, 160, 175)),
        Keyframe(name="Dusk", time=1140, grid=_uniform(size, 70, 60, 90)),
        Keyframe(name="Lights Off", time=1230, grid=blank_grid(size)),
    ]


# =================================================================
# Spatial
# =================================================================


def _checkerboard(size: int) -> list[Keyframe]:
    even = _masked(size, lambda row, col: (row + col) % 2 == 0, 200, 200, 255)
    odd = _masked(size, lambda row, col: (row + col) % 2 == 1, 200, 200, 255)
    return [
        Keyframe(name="Night", time=0, grid=blank_grid(size)),
        Keyframe(name="Even Cells", time=360, grid=even),
        Keyframe(name="Odd Cells", time=720, grid=odd),
        Keyframe(name="Even Cells Again", time=1080, grid=even),
        Keyframe(name="Lights Off", time=1260, grid=blank_grid(size)),
    ]


def _centre_spot(size: int) -> list[Keyframe]:
    centre = (size - 1) / 2

    def within(radius: float) -> Callable[[int, int], bool]:
        return lambda row, col: math.hypot(row - centre, col - centre) <= radius

    return [
        Keyframe(name="Night", time=0, grid=blank_grid(size)),
        Keyframe(name="Spot", time=360, grid=_masked(size, within(size / 6), 255, 180, 120)),
        Keyframe(name="Wide Spot", time=720, grid=_masked(size, within(size / 3), 255, 230, 200)),
        Keyframe(name="Full Field", time=900, grid=_uniform(size, 255, 240, 220)),
        Keyframe(name="Spot Again", time=1140, grid=_masked(size, within(size / 6), 255, 120, 60)),
        Keyframe(name="Lights Off", time=1260, grid=blank_grid(size)),
    ]


def _row_sweep(size: int) -> list[Keyframe]:
    steps = 4
    keyframes = [Keyframe(name="Night", time=0, grid=blank_grid(size))]
    for step in range(1, steps + 1):
        rows = math.ceil(size * step / steps)
        keyframes.append(
            Keyframe(
                name=f"Sweep {step}",
                time=300 + step * 120,
                grid=_masked(size, lambda row, col, rows=rows: row < rows, 180, 255, 180),
            )
        )
    keyframes.append(Keyframe(name="Lights Off", time=1260, grid=blank_grid(size)))
    return keyframes


PATTERN_CATEGORIES: tuple[PatternCategory, ...] = (
    PatternCategory(
        name="Growth Stages",
        icon="Leaf",
        patterns=(
            Pattern("Vegetative Growth", "18/6 blue-weighted cycle for leafy growth", _vegetative),
            Pattern("Flowering Boost", "12/12 red-weighted cycle to trigger blooms", _flowering),
            Pattern("Seedling Gentle", "Low-intensity cycle for young seedlings", _seedling),
        ),
    ),
    PatternCategory(
        name="Natural Light",
        icon="Sprout",
        patterns=(
            Pattern("Sunrise / Sunset", "Warm sunrise, white noon, warm sunset", _sunrise_sunset),
            Pattern("Overcast Day", "Muted daylight with a short bright break", _overcast),
        ),
    ),
    PatternCategory(
        name="Spatial",
        icon="Sparkles",
        patterns=(
            Pattern("Seedling Checkerboard", "Alternating cells through the day", _checkerboard),
            Pattern("Centre Spot", "A spot that widens to full field and back", _centre_spot),
            Pattern("Row Sweep", "Rows light up in steps through the morning", _row_sweep),
        ),
    ),
)


def all_patterns() -> list[Pattern]:
    """Every built-in pattern, in category order."""
    return [pattern for category in PATTERN_CATEGORIES for pattern in category.patterns]


def find_pattern(name: str) -> Pattern | None:
    """Look up a pattern by name (case-insensitive)."""
    wanted = name.strip().lower()
    for pattern in all_patterns():
        if pattern.name.lower() == wanted:
            return pattern
    return None


def load_pattern(store, day: int, pattern: Pattern) -> int | None:
    """
    Replace a day's keyframes with a pattern built for the store's grid size.

    Args:
        store: KeyframeStore to edit
        day: Day index
        pattern: Pattern to load

    Returns:
        The first keyframe's time (for snapping the cursor), or None if the
        day doesn't exist
    """
    loaded = store.replace_day(day, pattern.keyframes(store.grid_size))
    if not loaded:
        return None
    logger.info(f"Loaded pattern '{pattern.name}' into day {day}")
    return loaded[0].time
