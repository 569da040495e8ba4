"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path

import click

from growgrid import __version__
from growgrid.models.config import CONFIG_DIR

from .commands import config_group, patterns_group, play, recipe_group, serial_group

logger = logging.getLogger(__name__)


def default_log_path(debug: bool, log_file: Path | None) -> Path:
    """Where log records go for a given set of flags."""
    if log_file:
        return log_file
    if debug:
        # Debug mode: log to current directory
        return Path.cwd() / "growgrid-debug.log"
    return CONFIG_DIR / "logs" / "growgrid.log"


def setup_logging(verbose: int, debug: bool, log_file: Path | None, log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        The log file path
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Explicit log level wins when logging to a custom file
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = default_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=10 * 1024 * 1024, backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="growgrid")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.growgrid/config.json)",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v: INFO, -vv: DEBUG)")
@click.option(
    "--debug", is_flag=True, help="Enable debug mode (DEBUG level, logs to ./growgrid-debug.log)"
)
@click.option(
    "--log-file", type=click.Path(path_type=Path), default=None, help="Custom log file path"
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Log level for file logging (default: INFO)",
)
def cli(
    ctx,
    config_path: Path | None,
    verbose: int,
    debug: bool,
    log_file: Path | None,
    log_level: str,
):
    """
    growgrid - horticultural LED lighting designer.

    Recipes are multi-day schedules of keyframes. Each keyframe is a colour
    snapshot of the LED grid at a time of day; the grid in between is
    interpolated.

    \b
    Examples:
      # Create a recipe from a built-in pattern
      growgrid recipe new "Basil Veg" --days 7 --pattern "Vegetative Growth"

      # See what the grid looks like at 06:30 on day 2
      growgrid recipe render ~/.growgrid/recipes/basil-veg.json --day 2 --at 06:30

      # Stream it to the controller at 100x speed
      growgrid play ~/.growgrid/recipes/basil-veg.json --port /dev/ttyACM0 --speed 1000

      # List serial ports
      growgrid serial list
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


cli.add_command(config_group)
cli.add_command(patterns_group)
cli.add_command(play)
cli.add_command(recipe_group)
cli.add_command(serial_group)

if __name__ == "__main__":
    cli()
