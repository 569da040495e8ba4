"""JSON persistence for pydantic models.

Config and recipe files are written through a temp file and renamed into
place; the previous version is kept as ``<name>.bak``. A file that exists
but cannot be parsed always raises, so nothing here ever overwrites a
grower's broken file with defaults.
"""

import json
import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from growgrid.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def write_text_atomic(path: Path, content: str, backup: bool = True) -> None:
    """
    Replace ``path`` with ``content`` in one rename.

    Raises:
        OSError: If the directory or file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    if backup and path.exists():
        shutil.copy2(path, path.with_suffix(path.suffix + ".bak"))

    staging = path.with_suffix(path.suffix + ".tmp")
    try:
        staging.write_text(content, encoding="utf-8")
        staging.replace(path)
    finally:
        staging.unlink(missing_ok=True)


def _read_existing(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


class PydanticPersistence:
    """Load and save pydantic models as JSON files."""

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Read ``path`` and validate it as ``model_type``.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the file is empty, unreadable or not JSON
            ConfigValidationError: If the JSON doesn't match the model
        """
        try:
            text = _read_existing(path)
        except UnicodeDecodeError as e:
            raise ConfigFileInvalidError(str(path), f"Not a text file: {e}") from e
        if not text.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            model = model_type.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"{path} is not a valid {model_type.__name__}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model

    @staticmethod
    def load_raw_json(path: Path) -> Any:
        """
        Read ``path`` as plain JSON, for callers that dispatch on its shape.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the content is not JSON
        """
        text = _read_existing(path)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e

    @staticmethod
    def save_json(data: BaseModel, path: Path, indent: int = 2, backup: bool = True) -> None:
        """
        Serialize ``data`` (by alias) and write it atomically.

        Raises:
            OSError: If the file cannot be written
            ConfigurationError: If the model cannot be serialized
        """
        name = type(data).__name__
        try:
            text = data.model_dump_json(indent=indent, by_alias=True)
        except ValueError as e:
            raise ConfigurationError(
                user_message=f"Failed to save {path}",
                technical_message=f"Could not serialize {name}: {e}",
                recovery_hint="The previous file (and its .bak) were left untouched.",
            ) from e

        write_text_atomic(path, text, backup=backup)
        logger.debug(f"Saved {name} to {path}")

    @staticmethod
    def load_json_or_default(
        path: Path, model_type: type[T], default_factory: Callable[[], T] | None = None
    ) -> T:
        """Like ``load_json``, but a missing file yields a default instance."""
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"{path} not found, using default {model_type.__name__}")
            return default_factory() if default_factory else model_type()
