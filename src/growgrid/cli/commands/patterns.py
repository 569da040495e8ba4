"""Pattern command implementations."""

import click

from growgrid.core import summarize
from growgrid.models import DEFAULT_GRID_SIZE
from growgrid.services import PATTERN_CATEGORIES


@click.group(name="patterns")
def patterns_group():
    """Built-in lighting patterns."""
    pass


@patterns_group.command(name="list")
@click.option("--verbose", "-v", is_flag=True, help="Show each pattern's keyframes")
def list_patterns(verbose: bool):
    """List built-in patterns by category."""
    for category in PATTERN_CATEGORIES:
        click.echo(f"{category.name}:")
        for pattern in category.patterns:
            click.echo(f"  {pattern.name:<24} {pattern.description}")
            if not verbose:
                continue
            for keyframe in pattern.keyframes(DEFAULT_GRID_SIZE):
                label = summarize(keyframe.grid).classification.value
                click.echo(f"      {keyframe.time_formatted}  {keyframe.name:<20} {label}")
        click.echo()
