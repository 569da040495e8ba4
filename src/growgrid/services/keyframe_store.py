"""Keyframe store: the single owner of the schedule being edited."""

import logging
from collections.abc import Iterable

from growgrid.models import (
    Cell,
    Day,
    Grid,
    Keyframe,
    Schedule,
    blank_grid,
    filled_grid,
    resize_grid,
)
from growgrid.models.grid import clamp_grid_size
from growgrid.models.keyframe import clamp_time
from growgrid.models.schedule import clamp_total_days
from growgrid.protocols import EditEvent, EditObserver
from growgrid.utils import ObserverManager

logger = logging.getLogger(__name__)


class KeyframeStore:
    """
    Owns a Schedule and exposes the only way to mutate it.

    Invariants kept here:
        - every grid has exactly ``grid_size²`` cells
        - ``len(schedule.days) == total_days`` (1-14)
        - each day's keyframe list stays sorted by time
        - a day never drops below one keyframe

    Unknown day indices and keyframe ids are ignored (logged at debug level)
    rather than raised, so stale UI selections can't crash an edit.

    Event-Driven Architecture:
        Every mutation emits an EditEvent to registered observers. Nothing
        derived from keyframes is cached here; observers resample.

    Keyframe ids are re-minted whenever keyframes are copied (day
    duplication, bulk loads), so an id identifies one keyframe in the
    whole schedule.
    """

    def __init__(self, schedule: Schedule | None = None):
        """
        Initialize the store.

        Args:
            schedule: Schedule to edit (defaults to a one-day blank schedule)
        """
        self._schedule = schedule or Schedule.create_default()
        self._normalize_grids()
        self._observers = ObserverManager[EditObserver](observer_type_name="edit")
        logger.info("KeyframeStore initialized")

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: EditObserver) -> None:
        """Register an observer to receive edit events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: EditObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    def _notify(self, event: EditEvent, day: int | None, keyframe_ids: list[str]) -> None:
        self._observers.notify("on_edit_event", event, day, keyframe_ids)

    # =================================================================
    # Accessors
    # =================================================================

    @property
    def schedule(self) -> Schedule:
        """The schedule being edited (treat as read-only)."""
        return self._schedule

    @property
    def grid_size(self) -> int:
        return self._schedule.grid_size

    @property
    def total_days(self) -> int:
        return self._schedule.total_days

    def get_day(self, day: int) -> Day | None:
        """Get a day by index, or None if out of range."""
        return self._schedule.get_day(day)

    def keyframes(self, day: int) -> list[Keyframe]:
        """Keyframes of a day sorted by time (empty for an unknown day)."""
        target = self.get_day(day)
        return target.sorted_keyframes() if target else []

    def get_keyframe(self, day: int, keyframe_id: str) -> Keyframe | None:
        """Look up a keyframe by day and id."""
        target = self.get_day(day)
        return target.find(keyframe_id) if target else None

    def _lookup(self, day: int, keyframe_id: str) -> tuple[Day, Keyframe] | None:
        target = self.get_day(day)
        if target is None:
            logger.debug(f"Ignoring edit on unknown day {day}")
            return None
        keyframe = target.find(keyframe_id)
        if keyframe is None:
            logger.debug(f"Ignoring edit on unknown keyframe {keyframe_id} (day {day})")
            return None
        return target, keyframe

    def _normalize_grids(self) -> None:
        size = self._schedule.grid_size
        for day in self._schedule.days:
            for keyframe in day.keyframes:
                if len(keyframe.grid) != size * size:
                    keyframe.grid = resize_grid(keyframe.grid, size)
            day.sort()

    # =================================================================
    # Keyframe CRUD
    # =================================================================

    def add_keyframe(
        self, day: int, time: float, grid: Grid, name: str | None = None
    ) -> Keyframe | None:
        """
        Add a keyframe to a day.

        Args:
            day: Day index
            time: Minute of the day (clamped into the cycle)
            grid: Cell states (resized to the current grid size)
            name: Display name (defaults to "Scene N")

        Returns:
            The created keyframe, or None if the day doesn't exist
        """
        target = self.get_day(day)
        if target is None:
            logger.debug(f"Ignoring add_keyframe on unknown day {day}")
            return None

        keyframe = Keyframe(
            name=name if name is not None else f"Scene {len(target) + 1}",
            time=clamp_time(time),
            grid=resize_grid(grid, self.grid_size),
        )
        target.keyframes.append(keyframe)
        target.sort()

        self._notify(EditEvent.KEYFRAME_ADDED, day, [keyframe.id])
        logger.info(f"Added keyframe '{keyframe.name}' at {keyframe.time_formatted} (day {day})")
        return keyframe

    def delete_keyframe(self, day: int, keyframe_id: str) -> bool:
        """
        Delete a keyframe.

        Returns:
            True if deleted; False if unknown or it is the day's last keyframe
        """
        found = self._lookup(day, keyframe_id)
        if found is None:
            return False
        target, keyframe = found

        if len(target) <= 1:
            logger.info(f"Refusing to delete the last keyframe of day {day}")
            return False

        target.keyframes.remove(keyframe)
        self._notify(EditEvent.KEYFRAME_DELETED, day, [keyframe_id])
        logger.info(f"Deleted keyframe '{keyframe.name}' (day {day})")
        return True

    def update_time(self, day: int, keyframe_id: str, new_time: float) -> Keyframe | None:
        """Move a keyframe in time (clamped to 0-1439) and re-sort the day."""
        found = self._lookup(day, keyframe_id)
        if found is None:
            return None
        target, keyframe = found

        keyframe.time = clamp_time(new_time)
        target.sort()

        self._notify(EditEvent.KEYFRAME_RETIMED, day, [keyframe_id])
        logger.debug(f"Keyframe {keyframe_id} moved to {keyframe.time_formatted}")
        return keyframe

    def update_name(self, day: int, keyframe_id: str, new_name: str) -> Keyframe | None:
        """Rename a keyframe. Names need not be unique."""
        found = self._lookup(day, keyframe_id)
        if found is None:
            return None
        _, keyframe = found

        keyframe.name = new_name
        self._notify(EditEvent.KEYFRAME_RENAMED, day, [keyframe_id])
        return keyframe

    # =================================================================
    # Painting
    # =================================================================

    def paint_cell(
        self,
        day: int,
        keyframe_id: str,
        index: int,
        r: int,
        g: int,
        b: int,
        brightness: float = 100,
    ) -> Cell | None:
        """
        Paint one cell of a keyframe.

        The cell takes the brightness-scaled colour and its active flag is
        toggled, so painting a lit cell switches it off.

        Returns:
            The new cell, or None if the keyframe or index is unknown
        """
        found = self._lookup(day, keyframe_id)
        if found is None:
            return None
        _, keyframe = found
        if not 0 <= index < len(keyframe.grid):
            logger.debug(f"Ignoring paint of cell {index} outside the grid")
            return None

        factor = brightness / 100
        cell = Cell(
            r=r * factor,
            g=g * factor,
            b=b * factor,
            active=not keyframe.grid[index].active,
        )
        keyframe.grid[index] = cell
        self._notify(EditEvent.KEYFRAME_PAINTED, day, [keyframe_id])
        return cell

    def fill_all(
        self, day: int, keyframe_id: str, r: int, g: int, b: int, brightness: float = 100
    ) -> Keyframe | None:
        """Light every cell of a keyframe in one brightness-scaled colour."""
        found = self._lookup(day, keyframe_id)
        if found is None:
            return None
        _, keyframe = found

        factor = brightness / 100
        cell = Cell(r=r * factor, g=g * factor, b=b * factor, active=True)
        keyframe.grid = filled_grid(self.grid_size, cell)
        self._notify(EditEvent.KEYFRAME_PAINTED, day, [keyframe_id])
        return keyframe

    def clear_all(self, day: int, keyframe_id: str) -> Keyframe | None:
        """Turn every cell of a keyframe off (inactive black)."""
        found = self._lookup(day, keyframe_id)
        if found is None:
            return None
        _, keyframe = found

        keyframe.grid = blank_grid(self.grid_size)
        self._notify(EditEvent.KEYFRAME_PAINTED, day, [keyframe_id])
        return keyframe

    # =================================================================
    # Bulk operations
    # =================================================================

    def resize_grid(self, new_size: int) -> int:
        """
        Change the grid dimension of every keyframe in every day.

        Existing cells are kept by index; new indices are inactive black.

        Returns:
            The applied (clamped) size
        """
        size = clamp_grid_size(new_size)
        if size == self.grid_size:
            return size

        self._schedule.grid_size = size
        for day in self._schedule.days:
            for keyframe in day.keyframes:
                keyframe.grid = resize_grid(keyframe.grid, size)

        self._notify(EditEvent.GRID_RESIZED, None, [])
        logger.info(f"Resized grid to {size}x{size}")
        return size

    def set_total_days(self, total_days: int) -> int:
        """
        Grow or shrink the schedule.

        Growing appends deep copies of the last day (fresh ids); shrinking
        drops days from the end. Callers clamp their selected day and
        playback cursor afterwards.

        Returns:
            The applied (clamped) day count
        """
        count = clamp_total_days(total_days)
        days = self._schedule.days
        if count == len(days):
            return count

        if count > len(days):
            template = days[-1]
            days.extend(template.duplicate() for _ in range(count - len(days)))
        else:
            del days[count:]

        self._notify(EditEvent.DAYS_CHANGED, None, [])
        logger.info(f"Schedule now has {count} day(s)")
        return count

    def replace_day(self, day: int, keyframes: Iterable[Keyframe]) -> list[Keyframe] | None:
        """
        Replace a day's keyframes wholesale (pattern or generated load).

        Keyframes get fresh ids, grids are resized, and the list is sorted.
        An empty replacement is refused.

        Returns:
            The new keyframe list, or None if refused
        """
        target = self.get_day(day)
        if target is None:
            logger.debug(f"Ignoring replace_day on unknown day {day}")
            return None

        fresh = [
            Keyframe(name=kf.name, time=kf.time, grid=resize_grid(kf.grid, self.grid_size))
            for kf in keyframes
        ]
        if not fresh:
            logger.warning(f"Refusing to replace day {day} with no keyframes")
            return None

        target.keyframes = fresh
        target.sort()
        self._notify(EditEvent.DAY_REPLACED, day, [kf.id for kf in target.keyframes])
        logger.info(f"Replaced day {day} with {len(fresh)} keyframe(s)")
        return target.keyframes

    def replace_schedule(self, schedule: Schedule) -> None:
        """Swap in a whole new schedule (recipe load)."""
        self._schedule = schedule
        self._normalize_grids()
        self._notify(EditEvent.SCHEDULE_REPLACED, None, [])
        logger.info(
            f"Loaded schedule '{schedule.name}' "
            f"({schedule.total_days} day(s), {schedule.grid_size}x{schedule.grid_size})"
        )
