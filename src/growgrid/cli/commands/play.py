"""Play command: run a recipe on the clock and stream it to hardware."""

import asyncio
import logging
from pathlib import Path

import click

from growgrid.cli.common import fail, parse_time
from growgrid.core import AsyncioTickScheduler
from growgrid.core.session import DesignerSession
from growgrid.exceptions import GrowGridError
from growgrid.models import CYCLE_DURATION, AppConfig, format_time
from growgrid.protocols import TransportEvent

logger = logging.getLogger(__name__)


class _StatusPrinter:
    """Echoes hardware link changes."""

    def on_transport_event(self, event: TransportEvent, message: str | None = None) -> None:
        text = f"Hardware: {event.value}"
        if message:
            text += f" ({message})"
        click.echo(text, err=event is not TransportEvent.CONNECTED)


async def run_session(
    session: DesignerSession, duration: float | None, report_interval: float = 1.0
) -> None:
    """Play until ``duration`` seconds have passed (forever if None)."""
    loop = asyncio.get_running_loop()
    started = loop.time()
    session.clock.play()
    try:
        while duration is None or loop.time() - started < duration:
            await asyncio.sleep(report_interval)
            summary = session.summary()
            click.echo(
                f"Day {session.clock.current_day + 1} "
                f"{format_time(session.clock.current_time)}  "
                f"{summary.classification.value:<22} "
                f"frames sent: {session.streamer.frames_sent}"
            )
    finally:
        session.clock.pause()


@click.command(name="play")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--port", "-p", default=None, help="Serial port (default: config)")
@click.option(
    "--speed",
    "-s",
    type=click.IntRange(1, 10000),
    default=None,
    help="Playback speed, 10 = realtime (default: config)",
)
@click.option(
    "--brightness",
    "-b",
    type=click.IntRange(0, 100),
    default=None,
    help="Master brightness percentage (default: config)",
)
@click.option("--start", default="00:00", help="Start time (HH:MM or minutes)")
@click.option("--day", type=int, default=1, show_default=True, help="Start day (1-based)")
@click.option(
    "--duration",
    type=float,
    default=None,
    help="Stop after this many seconds (default: run until Ctrl+C)",
)
@click.option("--no-device", is_flag=True, help="Simulate without opening a serial port")
@click.pass_context
def play(
    ctx,
    path: Path,
    port: str | None,
    speed: int | None,
    brightness: int | None,
    start: str,
    day: int,
    duration: float | None,
    no_device: bool,
):
    """
    Play a recipe and stream frames to the LED controller.

    \b
    Examples:
      growgrid play veg.json --port /dev/ttyACM0
      growgrid play veg.json --speed 1000 --no-device --duration 30
    """
    start_minutes = parse_time(start)
    try:
        config = AppConfig.load_or_default(ctx.obj.get("config_path") if ctx.obj else None)
    except GrowGridError as e:
        fail(e)
        return

    if port:
        config.serial_port = port
    if speed is not None:
        config.animation_speed = speed
    if brightness is not None:
        config.master_brightness = brightness

    session = DesignerSession(config=config, scheduler=AsyncioTickScheduler())
    try:
        session.load_recipe(path)
    except GrowGridError as e:
        fail(e)
        return

    if not 1 <= day <= session.store.total_days:
        raise click.BadParameter(
            f"day must be 1-{session.store.total_days}", param_hint="--day"
        )
    session.select_day(day - 1)
    session.clock.seek((day - 1) * CYCLE_DURATION + start_minutes)

    if not no_device:
        session.streamer.register_observer(_StatusPrinter())
        if not config.serial_port:
            fail(
                click.UsageError(
                    "No serial port given. Use --port, 'growgrid config set serial_port', "
                    "or --no-device."
                )
            )
            return
        if not session.connect():
            session.close()
            raise SystemExit(1)

    click.echo(
        f"Playing '{session.store.schedule.name}' at speed {session.clock.animation_speed} "
        f"(Ctrl+C to stop)"
    )
    try:
        asyncio.run(run_session(session, duration))
    except KeyboardInterrupt:
        logger.info("Playback interrupted by user")
        click.echo("\nStopping...", err=True)
    finally:
        session.close()
