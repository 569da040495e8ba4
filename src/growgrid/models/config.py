"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from growgrid.utils.persistence import PydanticPersistence

from .grid import DEFAULT_GRID_SIZE, MAX_GRID_SIZE, MIN_GRID_SIZE
from .schedule import MAX_TOTAL_DAYS, MIN_TOTAL_DAYS

CONFIG_DIR = Path.home() / ".growgrid"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.json"


class GeneratorConfig(BaseModel):
    """Keyframe generation service settings."""

    url: str | None = Field(
        default=None,
        description="HTTP endpoint that turns a prompt into a keyframe array",
    )
    api_key: str | None = Field(default=None, description="Bearer token for the endpoint")
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")

    @property
    def is_configured(self) -> bool:
        """Check if an endpoint is set."""
        return self.url is not None


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Paths
    recipes_dir: Path = Field(
        default_factory=lambda: CONFIG_DIR / "recipes",
        description="Directory for saved recipes",
    )

    # Hardware link
    serial_port: str | None = Field(
        default=None, description="Serial port of the LED controller (e.g. /dev/ttyACM0, COM3)"
    )
    baud_rate: int = Field(default=115200, gt=0, description="Serial baud rate")
    frame_interval: float = Field(
        default=0.05, ge=0.0, description="Minimum seconds between frames sent to hardware"
    )

    # Output and playback defaults
    master_brightness: int = Field(
        default=100, ge=0, le=100, description="Master brightness percentage (0-100)"
    )
    animation_speed: int = Field(
        default=100, ge=1, le=10000, description="Playback speed (10 = realtime, 100 = 10x)"
    )
    default_grid_size: int = Field(
        default=DEFAULT_GRID_SIZE,
        ge=MIN_GRID_SIZE,
        le=MAX_GRID_SIZE,
        description="Grid size for new recipes",
    )
    default_total_days: int = Field(
        default=1, ge=MIN_TOTAL_DAYS, le=MAX_TOTAL_DAYS, description="Day count for new recipes"
    )

    # Session settings
    last_recipe: str | None = Field(default=None, description="Last opened recipe file")

    generator: GeneratorConfig = Field(
        default_factory=GeneratorConfig,
        description="Keyframe generation service configuration",
    )

    @field_serializer("recipes_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    def ensure_directories(self) -> None:
        """Create config directories if they don't exist."""
        self.recipes_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.growgrid/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        config = PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)
        config.ensure_directories()
        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
