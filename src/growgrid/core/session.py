"""Designer session: wires the store, clock, sampler and hardware link."""

import logging
from pathlib import Path

from growgrid.core.clock import ScheduleClock, TickScheduler
from growgrid.core.sampler import sample_schedule
from growgrid.core.spectrum import SpectrumSummary, summarize
from growgrid.devices import FrameStreamer, FrameTransport, SerialTransport
from growgrid.exceptions import GenerationError, handle_errors
from growgrid.models import CYCLE_DURATION, AppConfig, Grid, Keyframe, Schedule, SpectrumProgram
from growgrid.protocols import EditEvent
from growgrid.services import (
    GenerationRequest,
    GeneratorService,
    HttpKeyframeGenerator,
    KeyframeStore,
    Pattern,
    RecipeService,
    load_pattern,
)

logger = logging.getLogger(__name__)


class DesignerSession:
    """
    One editing session over a schedule.

    The resolved grid is never cached: every call to ``resolved_grid`` samples
    the store at the clock's cursor, so edits, seeks and program changes are
    always reflected without invalidation.

    Event flow:
        KeyframeStore --EditEvent--> DesignerSession --push--> FrameStreamer
        ScheduleClock --ClockEvent--> FrameStreamer (resamples via grid_source)
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        schedule: Schedule | None = None,
        scheduler: TickScheduler | None = None,
        streamer: FrameStreamer | None = None,
        generator: GeneratorService | None = None,
    ):
        """
        Initialize the session.

        Args:
            config: Application configuration
            schedule: Schedule to edit (defaults to a blank one from config defaults)
            scheduler: Tick source for playback
            streamer: Hardware streamer (one is created from config if omitted)
            generator: Service for AI generation (built from config.generator
                when an endpoint is configured; generate() fails without one)
        """
        self.config = config or AppConfig()
        self.store = KeyframeStore(
            schedule
            or Schedule.create_default(
                grid_size=self.config.default_grid_size,
                total_days=self.config.default_total_days,
            )
        )
        self.clock = ScheduleClock(
            scheduler=scheduler,
            total_days=self.store.total_days,
            animation_speed=self.config.animation_speed,
        )
        self.program = SpectrumProgram()
        self.recipes = RecipeService(self.config)
        if generator is None and self.config.generator.is_configured:
            generator = GeneratorService(HttpKeyframeGenerator(self.config.generator))
        self.generator = generator
        self.selected_day = 0

        self.streamer = streamer or FrameStreamer(
            master_brightness=self.config.master_brightness,
            frame_interval=self.config.frame_interval,
        )
        self.streamer.grid_source = self._grid_for_streamer
        self.clock.register_observer(self.streamer)
        self.store.register_observer(self)

        logger.info("DesignerSession initialized")

    # =================================================================
    # Sampling
    # =================================================================

    @property
    def grid_size(self) -> int:
        return self.store.grid_size

    def resolved_grid(self) -> Grid:
        """Grid at the current cursor, with the spectrum program applied."""
        return sample_schedule(self.store.schedule, self.clock.absolute_time, self.program)

    def summary(self) -> SpectrumSummary:
        """Spectral summary of the current resolved grid."""
        return summarize(self.resolved_grid())

    def _grid_for_streamer(self) -> tuple[Grid, int]:
        return self.resolved_grid(), self.store.grid_size

    def on_edit_event(self, event: EditEvent, day: int | None, keyframe_ids: list[str]) -> None:
        """Keep the clock's loop length in step with the store and refresh the hardware."""
        if event in (EditEvent.DAYS_CHANGED, EditEvent.SCHEDULE_REPLACED):
            self.clock.set_total_days(self.store.total_days)
        self.streamer.push(self.resolved_grid(), self.store.grid_size)

    # =================================================================
    # Editing
    # =================================================================

    def capture_keyframe(self, name: str | None = None) -> Keyframe | None:
        """Add a keyframe at the cursor holding the currently resolved grid."""
        return self.store.add_keyframe(
            self.clock.current_day, self.clock.current_time, self.resolved_grid(), name
        )

    def select_day(self, day: int) -> None:
        """Select a day for editing and snap the cursor to its start."""
        if not 0 <= day < self.store.total_days:
            logger.debug(f"Ignoring selection of day {day}")
            return
        self.selected_day = day
        self.clock.select_day(day)

    def set_total_days(self, total_days: int) -> int:
        """Change the day count, clamping the selected day and cursor."""
        applied = self.store.set_total_days(total_days)
        self.clock.set_total_days(applied)
        self.selected_day = min(self.selected_day, applied - 1)
        return applied

    def resize_grid(self, size: int) -> int:
        """Change the grid dimension of every keyframe."""
        return self.store.resize_grid(size)

    def _snap_to(self, day: int, time: float) -> None:
        self.selected_day = day
        self.clock.seek(day * CYCLE_DURATION + time)

    def load_pattern(self, pattern: Pattern, day: int | None = None) -> bool:
        """Replace a day (default: selected) with a built-in pattern."""
        target = self.selected_day if day is None else day
        first_time = load_pattern(self.store, target, pattern)
        if first_time is None:
            return False
        self._snap_to(target, first_time)
        return True

    def generate(self, request: GenerationRequest, day: int | None = None) -> None:
        """
        Replace a day (default: selected) with generated keyframes.

        Raises:
            GenerationError: If no generator is set up or generation fails
        """
        if self.generator is None:
            raise GenerationError(
                "No generator endpoint configured.",
                recovery_hint="Run 'growgrid config set generator.url <URL>'.",
            )
        target = self.selected_day if day is None else day
        first_time = self.generator.generate_into(self.store, target, request)
        self._snap_to(target, first_time)

    # =================================================================
    # Recipes
    # =================================================================

    @handle_errors(operation_name="load recipe")
    def load_recipe(self, path: Path) -> Schedule:
        """
        Load a recipe, replacing the whole schedule.

        Raises:
            RecipeLoadError: If the file can't be used (the session is unchanged)
        """
        schedule = self.recipes.load(path, self.store.grid_size)
        self.store.replace_schedule(schedule)
        self.selected_day = 0
        self.clock.seek(0)
        self.config.last_recipe = str(path)
        return schedule

    @handle_errors(operation_name="save recipe")
    def save_recipe(self, path: Path | None = None) -> Path:
        """Save the schedule as a recipe file."""
        saved = self.recipes.save(self.store.schedule, path)
        self.config.last_recipe = str(saved)
        return saved

    # =================================================================
    # Hardware
    # =================================================================

    def connect(self, transport: FrameTransport | None = None) -> bool:
        """
        Connect the hardware link.

        Args:
            transport: Link to use (defaults to the configured serial port)

        Returns:
            True if connected
        """
        if transport is None and self.streamer.transport is None:
            if not self.config.serial_port:
                logger.warning("No serial port configured")
                return False
            transport = SerialTransport(self.config.serial_port, self.config.baud_rate)

        if not self.streamer.connect(transport):
            return False
        self.streamer.push(self.resolved_grid(), self.store.grid_size)
        return True

    def set_master_brightness(self, brightness: float) -> None:
        """Set output brightness (0-100) and refresh the hardware."""
        self.streamer.master_brightness = max(0.0, min(100.0, brightness))
        self.streamer.push(self.resolved_grid(), self.store.grid_size)

    def close(self) -> None:
        """Stop playback and release the hardware link."""
        self.clock.pause()
        self.streamer.disconnect()
        self.store.unregister_observer(self)
        self.clock.unregister_observer(self.streamer)
        logger.info("DesignerSession closed")
