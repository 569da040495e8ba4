"""Timeline sampler: resolve a day's keyframes at an instant.

Everything here is a pure function of its arguments. Nothing is cached
between calls, so edits to the keyframe store show up on the next sample.
"""

from collections.abc import Sequence

from growgrid.models import (
    CYCLE_DURATION,
    BandSelection,
    Cell,
    Channel,
    Grid,
    Keyframe,
    Schedule,
    SpectrumProgram,
    TimeBand,
    blank_grid,
    cell_or_off,
    round_half_up,
)


def find_bracket(sorted_keyframes: Sequence[Keyframe], t: float) -> tuple[Keyframe, Keyframe]:
    """
    Find the keyframes surrounding ``t`` on the cyclic timeline.

    Returns ``(prev, next)`` such that ``t`` lies in ``[prev.time, next.time)``
    going forward around the cycle. When ``t`` precedes every keyframe the
    answer is ``(last, first)``: the interval that wraps over midnight.
    Among keyframes sharing a time, the last one in order opens the interval.

    Args:
        sorted_keyframes: Non-empty keyframes sorted by time
        t: Minute of the day
    """
    count = len(sorted_keyframes)
    prev, nxt = sorted_keyframes[-1], sorted_keyframes[0]

    for i, current in enumerate(sorted_keyframes):
        following = sorted_keyframes[(i + 1) % count]
        # Only the last keyframe wraps; tied neighbours elsewhere bracket nothing
        if t >= current.time and (t < following.time or i == count - 1):
            return current, following

    return prev, nxt


def interpolation_factor(prev: Keyframe, nxt: Keyframe, t: float) -> float:
    """
    Fraction of the way from ``prev`` to ``nxt`` at ``t``, measured cyclically.

    Two keyframes at the same instant give 0.
    """
    time_diff = nxt.time - prev.time
    if time_diff < 0:
        time_diff += CYCLE_DURATION
    time_progress = t - prev.time
    if time_progress < 0:
        time_progress += CYCLE_DURATION
    return 0.0 if time_diff == 0 else time_progress / time_diff


def interpolate_cell(start: Cell, end: Cell, factor: float) -> Cell:
    """
    Blend two cells.

    Colour is linear per component. ``active`` has no in-between value, so
    it switches from ``start`` to ``end`` at the midpoint.
    """
    return Cell(
        r=round_half_up(start.r + (end.r - start.r) * factor),
        g=round_half_up(start.g + (end.g - start.g) * factor),
        b=round_half_up(start.b + (end.b - start.b) * factor),
        active=start.active if factor < 0.5 else end.active,
    )


def channel_boost(selection: BandSelection, hour: float) -> int:
    """Boost for one channel at ``hour`` given which bands are enabled."""
    for band in TimeBand:
        if selection.is_enabled(band) and band.contains(hour):
            return band.boost
    return 0


def apply_spectrum_program(grid: Grid, t: float, program: SpectrumProgram) -> Grid:
    """
    Add scheduled per-channel boosts to an interpolated grid.

    Each channel is boosted independently by the amount of the time band
    ``t`` falls in, if that band is enabled for the channel. Values clamp
    at 255. Inactive cells are boosted too; they still output black.
    """
    if program.is_empty:
        return grid

    hour = t / 60
    boosts = {channel: channel_boost(program.for_channel(channel), hour) for channel in Channel}

    if not any(boosts.values()):
        return grid

    return [
        Cell(
            r=min(255, cell.r + boosts[Channel.RED]),
            g=min(255, cell.g + boosts[Channel.GREEN]),
            b=min(255, cell.b + boosts[Channel.BLUE]),
            active=cell.active,
        )
        for cell in grid
    ]


def sample_day(
    keyframes: Sequence[Keyframe],
    t: float,
    grid_size: int,
    program: SpectrumProgram | None = None,
) -> Grid:
    """
    Resolve the grid for one day at minute ``t``.

    Args:
        keyframes: The day's keyframes, in any order
        t: Minute of the day, in [0, CYCLE_DURATION)
        grid_size: Current grid dimension; the result has grid_size² cells
        program: Optional spectrum boosts applied after interpolation

    Returns:
        A new grid. Cells a keyframe has no data for count as inactive black.
    """
    if not keyframes:
        return blank_grid(grid_size)

    ordered = sorted(keyframes, key=lambda kf: kf.time)
    prev, nxt = find_bracket(ordered, t)
    factor = interpolation_factor(prev, nxt, t)

    grid = [
        interpolate_cell(cell_or_off(prev.grid, i), cell_or_off(nxt.grid, i), factor)
        for i in range(grid_size * grid_size)
    ]

    if program is not None:
        grid = apply_spectrum_program(grid, t, program)
    return grid


def split_absolute_time(absolute_time: float, total_days: int) -> tuple[int, float]:
    """Split a schedule cursor into (day index, minute of that day)."""
    total = CYCLE_DURATION * total_days
    wrapped = absolute_time % total
    return int(wrapped // CYCLE_DURATION) % total_days, wrapped % CYCLE_DURATION


def sample_schedule(
    schedule: Schedule, absolute_time: float, program: SpectrumProgram | None = None
) -> Grid:
    """Resolve the grid for a whole schedule at an absolute cursor position."""
    day, t = split_absolute_time(absolute_time, schedule.total_days)
    return sample_day(schedule.days[day].keyframes, t, schedule.grid_size, program)
