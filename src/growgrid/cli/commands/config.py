"""
Config command implementations.

Commands:
    - config show [FIELD]          # Display configuration
    - config set FIELD VALUE       # Update one field and save
    - config path                  # Print the config file location

Nested fields use dots, e.g. ``generator.url``.
"""

import json
import logging
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from growgrid.cli.common import fail
from growgrid.exceptions import GrowGridError, wrap_pydantic_error
from growgrid.models import AppConfig
from growgrid.models.config import DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)

_NULL_WORDS = {"none", "null", ""}


def _config_path(ctx: click.Context) -> Path:
    return (ctx.obj or {}).get("config_path") or DEFAULT_CONFIG_PATH


def _lookup(data: dict[str, Any], field: str) -> tuple[dict[str, Any], str]:
    """Walk a dotted field name down to (containing dict, last key)."""
    *parents, leaf = field.split(".")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            raise click.BadParameter(f"unknown field {field!r}", param_hint="FIELD")
        node = child
    if leaf not in node:
        raise click.BadParameter(f"unknown field {field!r}", param_hint="FIELD")
    return node, leaf


def _echo_fields(data: dict[str, Any], prefix: str = "") -> None:
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            _echo_fields(value, prefix=f"{name}.")
        elif name.endswith("api_key") and value:
            click.echo(f"  {name}: ********")
        else:
            click.echo(f"  {name}: {value}")


@click.group(name="config")
def config_group():
    """Configure growgrid settings."""
    pass


@config_group.command(name="show")
@click.argument("field", required=False)
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@click.pass_context
def config_show(ctx, field: str | None, as_json: bool):
    """Display configuration values."""
    path = _config_path(ctx)
    try:
        config = AppConfig.load_or_default(path)
    except GrowGridError as e:
        fail(e)
        return

    data = config.model_dump(mode="json")
    if field:
        node, leaf = _lookup(data, field)
        click.echo(json.dumps(node[leaf]) if as_json else f"{field}: {node[leaf]}")
        return

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"Configuration ({path}):\n")
    _echo_fields(data)


@config_group.command(name="set")
@click.argument("field")
@click.argument("value")
@click.pass_context
def config_set(ctx, field: str, value: str):
    """
    Set a configuration value and save.

    \b
    Examples:
      growgrid config set serial_port /dev/ttyACM0
      growgrid config set master_brightness 60
      growgrid config set generator.url https://example.com/generate
      growgrid config set generator.api_key none
    """
    path = _config_path(ctx)
    try:
        config = AppConfig.load_or_default(path)
    except GrowGridError as e:
        fail(e)
        return

    data = config.model_dump(mode="json")
    node, leaf = _lookup(data, field)
    node[leaf] = None if value.strip().lower() in _NULL_WORDS else value

    try:
        updated = AppConfig.model_validate(data)
    except ValidationError as e:
        fail(wrap_pydantic_error(e, str(path)))
        return

    try:
        updated.save(path)
    except (GrowGridError, OSError) as e:
        fail(e)
        return

    logger.info(f"Config field {field} set to {node[leaf]!r}")
    click.echo(f"[OK] {field} = {node[leaf]}")


@config_group.command(name="path")
@click.pass_context
def config_path(ctx):
    """Print the config file location."""
    click.echo(str(_config_path(ctx)))
