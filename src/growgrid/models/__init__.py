"""Data models for the lighting designer."""

from .cell import Cell, clamp_channel, round_half_up
from .config import AppConfig, GeneratorConfig
from .enums import (
    Channel,
    ClockState,
    ConnectionStatus,
    Intensity,
    Pulsing,
    SpectrumClass,
    TimeBand,
)
from .grid import (
    DEFAULT_GRID_SIZE,
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    Grid,
    blank_grid,
    cell_at,
    cell_or_off,
    filled_grid,
    resize_grid,
)
from .keyframe import CYCLE_DURATION, Keyframe, format_time
from .program import BandSelection, SpectrumProgram
from .schedule import DEFAULT_TOTAL_DAYS, MAX_TOTAL_DAYS, MIN_TOTAL_DAYS, Day, Schedule

__all__ = [
    "CYCLE_DURATION",
    "DEFAULT_GRID_SIZE",
    "DEFAULT_TOTAL_DAYS",
    "MAX_GRID_SIZE",
    "MAX_TOTAL_DAYS",
    "MIN_GRID_SIZE",
    "MIN_TOTAL_DAYS",
    # Models
    "AppConfig",
    "BandSelection",
    "Cell",
    "Day",
    "GeneratorConfig",
    "Grid",
    "Keyframe",
    "Schedule",
    "SpectrumProgram",
    # Enums
    "Channel",
    "ClockState",
    "ConnectionStatus",
    "Intensity",
    "Pulsing",
    "SpectrumClass",
    "TimeBand",
    # Helpers
    "blank_grid",
    "cell_at",
    "cell_or_off",
    "clamp_channel",
    "filled_grid",
    "format_time",
    "resize_grid",
    "round_half_up",
]
