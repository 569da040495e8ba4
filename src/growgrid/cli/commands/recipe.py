"""Recipe command implementations."""

import logging
from pathlib import Path

import click

from growgrid.cli.common import fail, parse_time
from growgrid.core import encode_frame, sample_schedule, summarize
from growgrid.core.session import DesignerSession
from growgrid.exceptions import ErrorContext, GrowGridError
from growgrid.models import (
    CYCLE_DURATION,
    DEFAULT_GRID_SIZE,
    MAX_GRID_SIZE,
    MAX_TOTAL_DAYS,
    MIN_GRID_SIZE,
    MIN_TOTAL_DAYS,
    AppConfig,
    Intensity,
    Pulsing,
    Schedule,
    format_time,
)
from growgrid.services import (
    GenerationRequest,
    KeyframeStore,
    RecipeService,
    find_pattern,
    load_pattern,
)

logger = logging.getLogger(__name__)

_RECIPE_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.group(name="recipe")
def recipe_group():
    """Inspect, render and create recipe files."""
    pass


@recipe_group.command(name="info")
@click.argument("path", type=_RECIPE_PATH)
def recipe_info(path: Path):
    """Show a recipe's days and keyframes."""
    try:
        schedule = RecipeService().load(path)
    except GrowGridError as e:
        fail(e)
        return

    click.echo(f"Recipe: {schedule.name}")
    click.echo(f"Grid:   {schedule.grid_size}x{schedule.grid_size}")
    click.echo(f"Days:   {schedule.total_days}\n")

    for index, day in enumerate(schedule.days):
        click.echo(f"Day {index + 1}:")
        for keyframe in day.sorted_keyframes():
            summary = summarize(keyframe.grid)
            click.echo(
                f"  {keyframe.time_formatted}  {keyframe.name or '(unnamed)':<24} "
                f"{summary.classification.value}"
            )


@recipe_group.command(name="render")
@click.argument("path", type=_RECIPE_PATH)
@click.option("--at", "at_time", default="00:00", help="Time of day (HH:MM or minutes)")
@click.option("--day", type=int, default=1, show_default=True, help="Day number (1-based)")
@click.option(
    "--brightness",
    type=click.IntRange(0, 100),
    default=100,
    show_default=True,
    help="Master brightness percentage",
)
@click.option("--frame", is_flag=True, help="Also print the encoded device frame as hex")
def recipe_render(path: Path, at_time: str, day: int, brightness: int, frame: bool):
    """
    Resolve the grid at a point in the schedule.

    \b
    Examples:
      growgrid recipe render veg.json --at 06:30
      growgrid recipe render veg.json --day 3 --at 720 --frame
    """
    minutes = parse_time(at_time)
    try:
        schedule = RecipeService().load(path)
    except GrowGridError as e:
        fail(e)
        return

    if not 1 <= day <= schedule.total_days:
        raise click.BadParameter(f"day must be 1-{schedule.total_days}", param_hint="--day")

    grid = sample_schedule(schedule, (day - 1) * CYCLE_DURATION + minutes)
    summary = summarize(grid)
    size = schedule.grid_size

    click.echo(f"Day {day} at {format_time(minutes)}: {summary.classification.value}")
    if not summary.is_off:
        click.echo(
            f"Average of {summary.active_cells} lit cell(s): "
            f"R {summary.avg_r:.0f}  G {summary.avg_g:.0f}  B {summary.avg_b:.0f}"
        )
    click.echo()

    for row in range(size):
        cells = grid[row * size : (row + 1) * size]
        click.echo(" ".join(cell.to_hex() if cell.active else "   ----" for cell in cells))

    if frame:
        click.echo(f"\n{encode_frame(grid, brightness, size).hex(' ')}")


@recipe_group.command(name="new")
@click.argument("name")
@click.option(
    "--grid-size",
    "-g",
    type=click.IntRange(MIN_GRID_SIZE, MAX_GRID_SIZE),
    default=None,
    help=f"Grid width/height (default: config, else {DEFAULT_GRID_SIZE})",
)
@click.option(
    "--days",
    "-d",
    type=click.IntRange(MIN_TOTAL_DAYS, MAX_TOTAL_DAYS),
    default=None,
    help="Number of days (default: config)",
)
@click.option("--pattern", "-p", default=None, help="Built-in pattern to load into every day")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: recipes directory)",
)
@click.pass_context
def recipe_new(
    ctx,
    name: str,
    grid_size: int | None,
    days: int | None,
    pattern: str | None,
    output: Path | None,
):
    """Create a new recipe file."""
    try:
        config = AppConfig.load_or_default(ctx.obj.get("config_path") if ctx.obj else None)
    except GrowGridError as e:
        fail(e)
        return

    chosen = None
    if pattern:
        chosen = find_pattern(pattern)
        if chosen is None:
            raise click.BadParameter(
                f"unknown pattern {pattern!r} (see 'growgrid patterns list')",
                param_hint="--pattern",
            )

    store = KeyframeStore(
        Schedule.create_default(
            name=name,
            grid_size=grid_size or config.default_grid_size,
            total_days=days or config.default_total_days,
        )
    )
    if chosen is not None:
        for day in range(store.total_days):
            load_pattern(store, day, chosen)

    with ErrorContext("save new recipe", logger_instance=logger, re_raise=False) as save_ctx:
        saved = RecipeService(config).save(store.schedule, output)
    if save_ctx.error:
        fail(save_ctx.error)
        return

    click.echo(f"Created {saved}")


@recipe_group.command(name="validate")
@click.argument("paths", nargs=-1, required=True, type=_RECIPE_PATH)
def recipe_validate(paths: tuple[Path, ...]):
    """Check that recipe files load."""
    service = RecipeService()
    failures = 0
    for path in paths:
        try:
            schedule = service.load(path)
        except GrowGridError as e:
            failures += 1
            click.echo(f"[FAIL] {path}: {e.technical_message}")
            continue
        click.echo(
            f"[OK]   {path}: '{schedule.name}', {schedule.total_days} day(s), "
            f"{schedule.grid_size}x{schedule.grid_size}"
        )

    if failures:
        raise SystemExit(1)


@recipe_group.command(name="list")
@click.pass_context
def recipe_list(ctx):
    """List recipes in the configured recipes directory."""
    try:
        config = AppConfig.load_or_default(ctx.obj.get("config_path") if ctx.obj else None)
    except GrowGridError as e:
        fail(e)
        return

    service = RecipeService(config)
    paths = service.list_recipes()
    if not paths:
        click.echo(f"No recipes in {config.recipes_dir}")
        return

    for path in paths:
        try:
            schedule = service.load(path)
        except GrowGridError:
            click.echo(f"  {path.name:<32} (unreadable)")
            continue
        click.echo(
            f"  {path.name:<32} {schedule.name} "
            f"({schedule.total_days} day(s), {schedule.grid_size}x{schedule.grid_size})"
        )


@recipe_group.command(name="generate")
@click.argument("path", type=_RECIPE_PATH)
@click.option("--day", type=int, default=1, show_default=True, help="Day to replace (1-based)")
@click.option("--goal", default=None, help="Growth goal in plain words")
@click.option("--plant", default=None, help="Crop being grown (e.g. Basil)")
@click.option(
    "--intensity",
    type=click.Choice([i.value for i in Intensity], case_sensitive=False),
    default=Intensity.MEDIUM.value,
    show_default=True,
)
@click.option(
    "--pulsing",
    type=click.Choice([p.value for p in Pulsing], case_sensitive=False),
    default=Pulsing.NONE.value,
    show_default=True,
)
@click.pass_context
def recipe_generate(
    ctx,
    path: Path,
    day: int,
    goal: str | None,
    plant: str | None,
    intensity: str,
    pulsing: str,
):
    """
    Replace one day of a recipe with AI-generated keyframes.

    Needs a generator endpoint: growgrid config set generator.url <URL>

    \b
    Example:
      growgrid recipe generate veg.json --day 2 --plant Lettuce --intensity High
    """
    try:
        config = AppConfig.load_or_default(ctx.obj.get("config_path") if ctx.obj else None)
    except GrowGridError as e:
        fail(e)
        return

    session = DesignerSession(config=config)
    try:
        session.load_recipe(path)
        if not 1 <= day <= session.store.total_days:
            raise click.BadParameter(
                f"day must be 1-{session.store.total_days}", param_hint="--day"
            )

        fields = {
            "intensity": _choice(Intensity, intensity),
            "pulsing": _choice(Pulsing, pulsing),
        }
        if goal:
            fields["goal"] = goal
        if plant:
            fields["plant_type"] = plant

        click.echo(f"Generating day {day} of '{session.store.schedule.name}'...")
        session.generate(GenerationRequest(**fields), day - 1)
        session.save_recipe(path)
    except GrowGridError as e:
        fail(e)
        return
    finally:
        session.close()

    keyframes = session.store.keyframes(day - 1)
    click.echo(f"Wrote {len(keyframes)} keyframe(s) into day {day} of {path}")
    for keyframe in keyframes:
        click.echo(f"  {keyframe.time_formatted}  {keyframe.name or '(unnamed)'}")


def _choice(enum_type, value: str):
    """Map a case-insensitive click choice back to its enum member."""
    return next(member for member in enum_type if member.value.lower() == value.lower())
