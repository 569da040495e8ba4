"""Helpers shared by CLI commands."""

import logging
import re
import sys
from pathlib import Path

import click

from growgrid.exceptions import format_error_for_display
from growgrid.models import CYCLE_DURATION

logger = logging.getLogger(__name__)

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str) -> float:
    """
    Parse a time of day given as HH:MM or as minutes.

    Raises:
        click.BadParameter: If the value is neither
    """
    match = _HHMM.match(value.strip())
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            raise click.BadParameter(f"{value} is not a valid time of day")
        return float(hours * 60 + minutes)
    try:
        minutes = float(value)
    except ValueError as e:
        raise click.BadParameter(f"expected HH:MM or minutes, got {value!r}") from e
    if not 0 <= minutes < CYCLE_DURATION:
        raise click.BadParameter(f"minutes must be 0-{CYCLE_DURATION - 1}")
    return minutes


def fail(error: Exception, log_path: Path | None = None) -> None:
    """Print a clean error message and exit with status 1."""
    logger.error(f"Command failed: {error}")
    user_message, recovery_hint = format_error_for_display(error)

    click.echo(f"ERROR: {user_message}", err=True)
    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)
    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
    sys.exit(1)
