"""Pytest fixtures for tests."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from growgrid.models import AppConfig, Cell, Keyframe, Schedule, blank_grid, filled_grid
from growgrid.services import KeyframeStore

WHITE = Cell(r=255, g=255, b=255, active=True)
BLACK = Cell.off()


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_dir):
    """Config that keeps recipes inside the temp dir."""
    return AppConfig(recipes_dir=temp_dir / "recipes")


@pytest.fixture
def day_night_keyframes():
    """Black/inactive at midnight, white/active at noon, 2x2 grid."""
    return [
        Keyframe(name="Night", time=0, grid=filled_grid(2, BLACK)),
        Keyframe(name="Noon", time=720, grid=filled_grid(2, WHITE)),
    ]


@pytest.fixture
def store():
    """A 3-day, 8x8 store with one blank keyframe per day."""
    return KeyframeStore(Schedule.create_default(name="Test", grid_size=8, total_days=3))


@pytest.fixture
def small_schedule():
    """A 2-day 2x2 schedule with distinct colours per day."""
    schedule = Schedule.create_default(name="Small", grid_size=2, total_days=2)
    schedule.days[0].keyframes = [
        Keyframe(name="Off", time=0, grid=blank_grid(2)),
        Keyframe(name="Red", time=600, grid=filled_grid(2, Cell(r=255, g=0, b=0, active=True))),
    ]
    schedule.days[1].keyframes = [
        Keyframe(name="Blue", time=0, grid=filled_grid(2, Cell(r=0, g=0, b=255, active=True))),
    ]
    return schedule


@pytest.fixture
def legacy_recipe_file(temp_dir):
    """A single-day recipe in the 1.0 format."""
    data = {
        "metadata": {"name": "Legacy Veg", "version": "1.0", "gridSize": 2},
        "keyframes": [
            {
                "id": 1700000000000.123,
                "name": "Dawn",
                "time": 360,
                "timeFormatted": "06:00",
                "grid": [{"red": 200, "green": 100, "blue": 50, "active": True}] * 4,
            },
            {
                "id": 1700000000001.5,
                "name": "Night",
                "time": 0,
                "grid": [{"red": 0, "green": 0, "blue": 0, "active": False}] * 4,
            },
        ],
        "instructions": {"notes": "24-hour cycle."},
    }
    path = temp_dir / "legacy.json"
    path.write_text(json.dumps(data))
    return path
