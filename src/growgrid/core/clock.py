"""Schedule clock: the playback cursor and its play/pause state machine."""

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Protocol

from growgrid.models import CYCLE_DURATION, MAX_TOTAL_DAYS, MIN_TOTAL_DAYS, ClockState
from growgrid.protocols import ClockEvent, ClockObserver
from growgrid.utils import ObserverManager

logger = logging.getLogger(__name__)

MIN_SPEED = 1
MAX_SPEED = 10000
DEFAULT_SPEED = 100


class TickHandle(Protocol):
    """A scheduled tick that can be cancelled."""

    def cancel(self) -> None: ...


class TickScheduler(Protocol):
    """Something that can call back later (an event loop, a UI frame timer)."""

    def schedule(self, callback: Callable[[], None], delay: float) -> TickHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        ...


class AsyncioTickScheduler:
    """TickScheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def schedule(self, callback: Callable[[], None], delay: float) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


def monotonic_ms() -> float:
    """Default time source: monotonic clock in milliseconds."""
    return time.monotonic() * 1000


class ScheduleClock:
    """
    Advances a cursor across a multi-day cycle.

    Only ``absolute_time`` (minutes since the start of day 0) is stored.
    ``current_day`` and ``current_time`` are always derived from it.

    States:
        PAUSED: resting state; the cursor is kept as is.
        PLAYING: every tick adds ``elapsed_ms * (speed / 10) / 1000`` minutes,
            so speed 10 is realtime-per-minute and 100 is ten times that.

    Ticks are requested through an injected TickScheduler and measured with
    an injected time source, so tests can drive the clock with synthetic
    deltas through ``advance``.
    """

    def __init__(
        self,
        scheduler: TickScheduler | None = None,
        time_source: Callable[[], float] = monotonic_ms,
        total_days: int = 1,
        animation_speed: int = DEFAULT_SPEED,
        tick_interval: float = 1 / 30,
    ):
        """
        Initialize the clock (paused at 00:00 of day 0).

        Args:
            scheduler: Tick source used while playing (required for play())
            time_source: Returns a monotonic time in milliseconds
            total_days: Number of days the cursor wraps over
            animation_speed: Playback speed (1-10000, 10 = 1x)
            tick_interval: Seconds between requested ticks
        """
        self._scheduler = scheduler
        self._time_source = time_source
        self._total_days = self._clamp_days(total_days)
        self._speed = self._clamp_speed(animation_speed)
        self._tick_interval = tick_interval
        self._absolute_time = 0.0
        self._state = ClockState.PAUSED
        self._handle: TickHandle | None = None
        self._last_tick: float | None = None
        self._observers = ObserverManager[ClockObserver](observer_type_name="clock")

    # =================================================================
    # Observers
    # =================================================================

    def register_observer(self, observer: ClockObserver) -> None:
        """Register an observer to receive clock events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: ClockObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    def _notify(self, event: ClockEvent) -> None:
        self._observers.notify("on_clock_event", event, self._absolute_time)

    # =================================================================
    # Cursor
    # =================================================================

    @staticmethod
    def _clamp_days(days: int) -> int:
        return max(MIN_TOTAL_DAYS, min(MAX_TOTAL_DAYS, int(days)))

    @staticmethod
    def _clamp_speed(speed: int) -> int:
        return max(MIN_SPEED, min(MAX_SPEED, int(speed)))

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is ClockState.PLAYING

    @property
    def total_days(self) -> int:
        return self._total_days

    @property
    def total_duration(self) -> int:
        """Length of one full schedule loop in minutes."""
        return CYCLE_DURATION * self._total_days

    @property
    def absolute_time(self) -> float:
        return self._absolute_time

    @property
    def current_day(self) -> int:
        return int(self._absolute_time // CYCLE_DURATION) % self._total_days

    @property
    def current_time(self) -> float:
        return self._absolute_time % CYCLE_DURATION

    @property
    def animation_speed(self) -> int:
        return self._speed

    @animation_speed.setter
    def animation_speed(self, speed: int) -> None:
        self._speed = self._clamp_speed(speed)

    @property
    def speed_multiplier(self) -> float:
        """Simulated minutes per real second."""
        return self._speed / 10

    def _wrap(self, value: float) -> float:
        return value % self.total_duration

    def set_total_days(self, days: int) -> None:
        """
        Change the loop length.

        A cursor past the new end moves to the last day, keeping its time of
        day, so it lands on the same day a clamped day selection does.
        """
        self._total_days = self._clamp_days(days)
        if self._absolute_time < self.total_duration:
            return
        time_in_day = self._absolute_time % CYCLE_DURATION
        self._absolute_time = (self._total_days - 1) * CYCLE_DURATION + time_in_day
        self._notify(ClockEvent.SEEK)

    def seek(self, absolute_time: float) -> None:
        """Move the cursor directly. Works while playing or paused."""
        self._absolute_time = self._wrap(max(0.0, absolute_time))
        # Rebase so the next tick measures from now, not from before the jump
        if self.is_playing:
            self._last_tick = self._time_source()
        self._notify(ClockEvent.SEEK)

    def scrub(self, time_in_day: float) -> None:
        """Move the cursor within the current day."""
        clamped = max(0.0, min(float(CYCLE_DURATION) - 1e-9, time_in_day))
        self.seek(self.current_day * CYCLE_DURATION + clamped)

    def select_day(self, day: int) -> None:
        """Snap the cursor to the start of ``day`` (ignored if out of range)."""
        if not 0 <= day < self._total_days:
            logger.debug(f"Ignoring select_day({day}) outside 0-{self._total_days - 1}")
            return
        self.seek(day * CYCLE_DURATION)

    def advance(self, elapsed_ms: float) -> float:
        """
        Apply ``elapsed_ms`` of real time at the current speed.

        Returns:
            The new absolute time
        """
        self._absolute_time = self._wrap(
            self._absolute_time + elapsed_ms * (self.speed_multiplier / 1000)
        )
        self._notify(ClockEvent.TICK)
        return self._absolute_time

    # =================================================================
    # Play / pause
    # =================================================================

    def play(self) -> None:
        """Start ticking. No-op if already playing."""
        if self.is_playing:
            return
        if self._scheduler is None:
            raise RuntimeError("ScheduleClock needs a TickScheduler to play")

        self._state = ClockState.PLAYING
        self._last_tick = self._time_source()
        self._schedule_next()
        logger.info(f"Playback started at {self.current_time:.1f} min, day {self.current_day}")
        self._notify(ClockEvent.STATE_CHANGED)

    def pause(self) -> None:
        """Stop ticking; the cursor stays where it is."""
        if not self.is_playing:
            return
        self._state = ClockState.PAUSED
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._last_tick = None
        logger.info("Playback paused")
        self._notify(ClockEvent.STATE_CHANGED)

    def toggle(self) -> None:
        """Switch between playing and paused."""
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def _schedule_next(self) -> None:
        self._handle = self._scheduler.schedule(self._on_tick, self._tick_interval)

    def _on_tick(self) -> None:
        self._handle = None
        # A tick that was already due when pause() ran must not move the cursor
        if not self.is_playing:
            return

        now = self._time_source()
        elapsed = now - (self._last_tick if self._last_tick is not None else now)
        self._last_tick = now
        self.advance(max(0.0, elapsed))

        if self.is_playing:
            self._schedule_next()
