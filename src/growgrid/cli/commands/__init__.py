"""CLI commands for growgrid."""

from .config import config_group
from .patterns import patterns_group
from .play import play
from .ports import serial_group
from .recipe import recipe_group

__all__ = ["config_group", "patterns_group", "play", "recipe_group", "serial_group"]
