"""Tests for RecipeService."""

import json

import pytest

from growgrid.exceptions import RecipeLoadError
from growgrid.models import DEFAULT_TOTAL_DAYS, Cell
from growgrid.services import RecipeService
from growgrid.services.recipe_service import recipe_filename


@pytest.fixture
def service(config):
    return RecipeService(config)


@pytest.mark.unit
class TestLegacyRecipes:
    """Single-day 1.0 files."""

    def test_applies_to_every_default_day(self, service, legacy_recipe_file):
        schedule = service.load(legacy_recipe_file)

        assert schedule.name == "Legacy Veg"
        assert schedule.total_days == DEFAULT_TOTAL_DAYS
        assert schedule.grid_size == 2
        for day in schedule.days:
            assert [kf.name for kf in day.keyframes] == ["Night", "Dawn"]

    def test_converts_colour_names(self, service, legacy_recipe_file):
        dawn = service.load(legacy_recipe_file).days[0].keyframes[1]
        assert dawn.grid[0] == Cell(r=200, g=100, b=50, active=True)

    def test_numeric_ids_become_strings(self, service, legacy_recipe_file):
        day = service.load(legacy_recipe_file).days[0]
        assert all(isinstance(kf.id, str) for kf in day.keyframes)

    def test_each_day_gets_fresh_ids(self, service, legacy_recipe_file):
        schedule = service.load(legacy_recipe_file)
        ids = [kf.id for day in schedule.days for kf in day.keyframes]
        assert len(ids) == len(set(ids))

    def test_missing_grid_size_uses_current(self, service, temp_dir):
        path = temp_dir / "nosize.json"
        path.write_text(
            json.dumps(
                {"keyframes": [{"name": "x", "time": 0, "grid": [{"red": 1, "green": 2, "blue": 3}]}]}
            )
        )
        schedule = service.load(path, grid_size=3)
        assert schedule.grid_size == 3
        assert len(schedule.days[0].keyframes[0].grid) == 9


@pytest.mark.unit
class TestMultiDayRecipes:
    """2.0 files written by this package."""

    def test_save_then_load(self, service, small_schedule, temp_dir):
        path = service.save(small_schedule, temp_dir / "small.json")
        loaded = service.load(path)

        assert loaded.name == "Small"
        assert loaded.grid_size == 2
        assert loaded.total_days == 2
        assert [kf.name for kf in loaded.days[0].keyframes] == ["Off", "Red"]
        assert loaded.days[1].keyframes[0].grid[0].to_rgb_tuple() == (0, 0, 255)
        assert loaded.days[0].keyframes[1].id == small_schedule.days[0].keyframes[1].id

    def test_file_layout(self, service, small_schedule, temp_dir):
        path = service.save(small_schedule, temp_dir / "small.json")
        data = json.loads(path.read_text())

        assert data["metadata"]["version"] == "2.0"
        assert data["metadata"]["gridSize"] == 2
        assert data["metadata"]["totalDays"] == 2
        assert data["metadata"]["cycleDuration"] == 1440
        red = data["keyframesByDay"][0][1]
        assert red["timeFormatted"] == "10:00"
        assert red["grid"][0] == {"r": 255, "g": 0, "b": 0, "active": True}

    def test_save_keeps_backup(self, service, small_schedule, temp_dir):
        path = temp_dir / "small.json"
        service.save(small_schedule, path)
        small_schedule.name = "Renamed"
        service.save(small_schedule, path)

        backup = json.loads(path.with_suffix(".json.bak").read_text())
        assert backup["metadata"]["name"] == "Small"

    def test_default_path_uses_recipes_dir(self, service, small_schedule, config):
        path = service.save(small_schedule)
        assert path == config.recipes_dir / "small.json"
        assert service.list_recipes() == [path]

    def test_grids_normalised_to_metadata_size(self, service, temp_dir):
        path = temp_dir / "mixed.json"
        path.write_text(
            json.dumps(
                {
                    "metadata": {"gridSize": 2},
                    "keyframesByDay": [
                        [{"id": 7, "name": "a", "time": 30, "grid": [{"r": 9, "g": 9, "b": 9}]}]
                    ],
                }
            )
        )
        schedule = service.load(path)
        keyframe = schedule.days[0].keyframes[0]
        assert keyframe.id == "7"
        assert len(keyframe.grid) == 4
        assert keyframe.grid[1] == Cell.off()


@pytest.mark.unit
class TestLoadErrors:
    """Malformed files raise RecipeLoadError."""

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[]",
            json.dumps({"metadata": {"name": "x"}}),
            json.dumps({"keyframesByDay": []}),
            json.dumps({"keyframesByDay": [[]]}),
            json.dumps({"keyframesByDay": [[{"name": "no time", "grid": []}]]}),
            json.dumps({"keyframes": []}),
            json.dumps({"keyframes": [{"time": "noon", "grid": []}]}),
            json.dumps({"keyframesByDay": [[{"time": 0, "grid": []}]] * 15}),
            '{"keyframesByDay": [[{"time": 0, "grid": [{"r": null, "g": 0, "b": 0}]}]]}',
            '{"keyframesByDay": [[{"time": 0, "grid": [{"r": 1e400, "g": 0, "b": 0}]}]]}',
            '{"keyframesByDay": [[{"time": 0, "grid": [{"r": [1], "g": 0, "b": 0}]}]]}',
            '{"keyframesByDay": [[{"time": 1e400, "grid": []}]]}',
            '{"keyframes": [{"time": 0, "grid": [{"red": Infinity, "active": true}]}]}',
        ],
    )
    def test_bad_content(self, service, temp_dir, content):
        path = temp_dir / "bad.json"
        path.write_text(content)
        with pytest.raises(RecipeLoadError) as exc_info:
            service.load(path)
        assert exc_info.value.user_message == "Error loading recipe file"

    def test_missing_file(self, service, temp_dir):
        with pytest.raises(RecipeLoadError):
            service.load(temp_dir / "nope.json")


@pytest.mark.unit
def test_recipe_filename():
    assert recipe_filename("Basil  Veg Cycle") == "basil-veg-cycle.json"
    assert recipe_filename("   ") == "recipe.json"
