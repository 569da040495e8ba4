"""Service for loading and saving recipe files."""

import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from growgrid.exceptions import RecipeLoadError
from growgrid.models import (
    CYCLE_DURATION,
    DEFAULT_GRID_SIZE,
    DEFAULT_TOTAL_DAYS,
    MAX_TOTAL_DAYS,
    Day,
    Keyframe,
    Schedule,
    resize_grid,
)
from growgrid.models.config import AppConfig
from growgrid.models.grid import clamp_grid_size
from growgrid.models.recipe import (
    RECIPE_VERSION,
    LegacyRecipeDocument,
    RecipeDocument,
    RecipeInstructions,
    RecipeKeyframe,
    RecipeMetadata,
)
from growgrid.utils import PydanticPersistence

logger = logging.getLogger(__name__)

RECIPE_SUFFIX = ".json"


def recipe_filename(name: str) -> str:
    """File name for a recipe: lower-cased, whitespace runs become dashes."""
    slug = re.sub(r"\s+", "-", name.strip().lower()) or "recipe"
    return f"{slug}{RECIPE_SUFFIX}"


def _normalized(keyframes: list[Keyframe], grid_size: int) -> Day:
    for keyframe in keyframes:
        keyframe.grid = resize_grid(keyframe.grid, grid_size)
    day = Day(keyframes=keyframes)
    day.sort()
    return day


def _decode_v2(data: dict[str, Any], grid_size: int) -> Schedule:
    document = RecipeDocument.model_validate(data)
    size = clamp_grid_size(document.metadata.grid_size or grid_size)

    if not document.keyframes_by_day:
        raise ValueError("recipe has no days")
    if len(document.keyframes_by_day) > MAX_TOTAL_DAYS:
        raise ValueError(
            f"recipe has {len(document.keyframes_by_day)} days (maximum {MAX_TOTAL_DAYS})"
        )

    days = []
    for index, records in enumerate(document.keyframes_by_day):
        if not records:
            raise ValueError(f"day {index} has no keyframes")
        days.append(_normalized([record.to_keyframe() for record in records], size))

    return Schedule(name=document.metadata.name, grid_size=size, days=days)


def _decode_legacy(data: dict[str, Any], grid_size: int) -> Schedule:
    document = LegacyRecipeDocument.model_validate(data)
    size = clamp_grid_size(document.metadata.grid_size or grid_size)

    if not document.keyframes:
        raise ValueError("recipe has no keyframes")

    # One day in the file, copied to every day with fresh ids per copy
    template = _normalized([record.to_keyframe() for record in document.keyframes], size)
    days = [template] + [template.duplicate() for _ in range(DEFAULT_TOTAL_DAYS - 1)]
    return Schedule(name=document.metadata.name, grid_size=size, days=days)


# Checked in order; the first matching shape wins
_DECODERS: list[tuple[str, Callable[[dict[str, Any], int], Schedule]]] = [
    ("keyframesByDay", _decode_v2),
    ("keyframes", _decode_legacy),
]


class RecipeService:
    """
    Reads and writes recipe files.

    Every supported file generation is decoded into one canonical
    ``Schedule``; nothing downstream branches on the file format. Files are
    always written in the current (``2.0``) format.

    The service is stateless apart from the config it reads the recipes
    directory from.
    """

    def __init__(self, config: AppConfig | None = None):
        """
        Initialize the RecipeService.

        Args:
            config: Application configuration (for the recipes directory)
        """
        self.config = config or AppConfig()

    # =================================================================
    # Loading
    # =================================================================

    def decode(
        self, data: Any, source: str = "<memory>", grid_size: int = DEFAULT_GRID_SIZE
    ) -> Schedule:
        """
        Decode parsed recipe JSON into a Schedule.

        Args:
            data: Parsed JSON content
            source: Where the data came from (for error messages)
            grid_size: Grid size to use when the file doesn't specify one

        Raises:
            RecipeLoadError: If the shape is unknown or validation fails
        """
        if not isinstance(data, dict):
            raise RecipeLoadError(source, "top level is not a JSON object")

        for key, decoder in _DECODERS:
            if key not in data:
                continue
            try:
                schedule = decoder(data, grid_size)
            except ValidationError as e:
                logger.error(f"Invalid recipe {source}: {e}")
                raise RecipeLoadError(source, f"invalid '{key}' content: {e}") from e
            except ValueError as e:
                logger.error(f"Invalid recipe {source}: {e}")
                raise RecipeLoadError(source, str(e)) from e

            logger.debug(f"Decoded {source} using the '{key}' format")
            return schedule

        raise RecipeLoadError(source, "expected 'keyframesByDay' or 'keyframes'")

    def load(self, path: Path, grid_size: int = DEFAULT_GRID_SIZE) -> Schedule:
        """
        Load a recipe file.

        Args:
            path: Recipe file
            grid_size: Grid size to use when the file doesn't specify one

        Returns:
            The decoded schedule

        Raises:
            RecipeLoadError: If the file is missing, unparsable or malformed
        """
        try:
            data = PydanticPersistence.load_raw_json(path)
        except FileNotFoundError as e:
            raise RecipeLoadError(str(path), "file not found") from e
        except ValueError as e:
            logger.error(f"Error reading recipe {path}: {e}")
            raise RecipeLoadError(str(path), str(e)) from e
        except OSError as e:
            logger.error(f"Error reading recipe {path}: {e}")
            raise RecipeLoadError(str(path), f"could not read file: {e}") from e

        schedule = self.decode(data, str(path), grid_size)
        logger.info(
            f"Loaded recipe '{schedule.name}' from {path} "
            f"({schedule.total_days} day(s), {schedule.grid_size}x{schedule.grid_size})"
        )
        return schedule

    # =================================================================
    # Saving
    # =================================================================

    @staticmethod
    def to_document(schedule: Schedule) -> RecipeDocument:
        """Build the current-format file document for a schedule."""
        metadata = RecipeMetadata(
            name=schedule.name,
            created=schedule.created_at.isoformat(),
            version=RECIPE_VERSION,
            grid_size=schedule.grid_size,
            total_days=schedule.total_days,
            cycle_duration=CYCLE_DURATION,
        )
        return RecipeDocument(
            metadata=metadata,
            keyframes_by_day=[
                [RecipeKeyframe.from_keyframe(kf) for kf in day.sorted_keyframes()]
                for day in schedule.days
            ],
            instructions=RecipeInstructions(),
        )

    def save(self, schedule: Schedule, path: Path | None = None) -> Path:
        """
        Save a schedule as a recipe file.

        Writes atomically and keeps a .bak of any file it replaces.

        Args:
            schedule: Schedule to save
            path: Target file (defaults to the recipes directory + name slug)

        Returns:
            The path written

        Raises:
            OSError: If the file cannot be written
        """
        target = path or self.config.recipes_dir / recipe_filename(schedule.name)
        PydanticPersistence.save_json(self.to_document(schedule), target)
        logger.info(f"Saved recipe '{schedule.name}' to {target}")
        return target

    def list_recipes(self) -> list[Path]:
        """Recipe files in the configured recipes directory, sorted by name."""
        recipes_dir = self.config.recipes_dir
        if not recipes_dir.exists():
            return []
        return sorted(recipes_dir.glob(f"*{RECIPE_SUFFIX}"))
