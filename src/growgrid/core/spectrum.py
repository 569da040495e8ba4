"""Spectral summary of a resolved grid (diagnostic only)."""

from dataclasses import dataclass

import numpy as np

from growgrid.models import Grid, SpectrumClass

DOMINANCE_RATIO = 1.3
FULL_SPECTRUM_SPREAD = 25
FULL_SPECTRUM_FLOOR = 200


@dataclass(frozen=True)
class SpectrumSummary:
    """Average colour of the lit cells and its classification."""

    classification: SpectrumClass
    avg_r: float = 0.0
    avg_g: float = 0.0
    avg_b: float = 0.0
    active_cells: int = 0

    @property
    def is_off(self) -> bool:
        return self.classification is SpectrumClass.OFF


def classify(avg_r: float, avg_g: float, avg_b: float, ratio: float = DOMINANCE_RATIO) -> SpectrumClass:
    """
    Classify average channel levels.

    A channel dominates when it exceeds both others by ``ratio``. Full
    spectrum means all three channels sit within 25 of each other and
    above 200.
    """
    if avg_r > avg_g * ratio and avg_r > avg_b * ratio:
        return SpectrumClass.RED_DOMINANT
    if avg_g > avg_r * ratio and avg_g > avg_b * ratio:
        return SpectrumClass.GREEN_DOMINANT
    if avg_b > avg_r * ratio and avg_b > avg_g * ratio:
        return SpectrumClass.BLUE_DOMINANT

    levels = (avg_r, avg_g, avg_b)
    if max(levels) - min(levels) < FULL_SPECTRUM_SPREAD and min(levels) > FULL_SPECTRUM_FLOOR:
        return SpectrumClass.FULL_SPECTRUM
    return SpectrumClass.BALANCED


def summarize(grid: Grid, ratio: float = DOMINANCE_RATIO) -> SpectrumSummary:
    """Average R, G, B over active cells and classify the result."""
    lit = [cell.to_rgb_tuple() for cell in grid if cell.active]
    if not lit:
        return SpectrumSummary(classification=SpectrumClass.OFF)

    avg_r, avg_g, avg_b = np.asarray(lit, dtype=np.float64).mean(axis=0)
    return SpectrumSummary(
        classification=classify(avg_r, avg_g, avg_b, ratio),
        avg_r=float(avg_r),
        avg_g=float(avg_g),
        avg_b=float(avg_b),
        active_cells=len(lit),
    )
