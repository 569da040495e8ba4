"""Tests for the timeline sampler."""

import pytest

from growgrid.core.sampler import (
    apply_spectrum_program,
    channel_boost,
    find_bracket,
    interpolation_factor,
    sample_day,
    sample_schedule,
    split_absolute_time,
)
from growgrid.models import (
    CYCLE_DURATION,
    BandSelection,
    Cell,
    Channel,
    Keyframe,
    SpectrumProgram,
    TimeBand,
    filled_grid,
)

WHITE = Cell(r=255, g=255, b=255, active=True)
BLACK = Cell.off()


@pytest.mark.unit
class TestSampleDay:
    """Interpolation over one day."""

    def test_empty_day_is_blank(self):
        grid = sample_day([], 500, 3)
        assert grid == [BLACK] * 9

    @pytest.mark.parametrize("t", [0, 1, 359.5, 720, 1080, 1439.9])
    def test_length_matches_grid_size(self, day_night_keyframes, t):
        assert len(sample_day(day_night_keyframes, t, 2)) == 4
        assert len(sample_day(day_night_keyframes, t, 5)) == 25

    def test_repeated_calls_are_identical(self, day_night_keyframes):
        first = sample_day(day_night_keyframes, 431.7, 2)
        second = sample_day(day_night_keyframes, 431.7, 2)
        assert first == second

    def test_does_not_mutate_input(self, day_night_keyframes):
        unsorted = list(reversed(day_night_keyframes))
        sample_day(unsorted, 100, 2)
        assert [kf.name for kf in unsorted] == ["Noon", "Night"]

    def test_keyframe_time_reproduces_its_grid(self, day_night_keyframes):
        for keyframe in day_night_keyframes:
            assert sample_day(day_night_keyframes, keyframe.time, 2) == keyframe.grid

    def test_wraparound_interpolates_toward_first_keyframe(self, day_night_keyframes):
        """At 18:00 the sampler is halfway from noon back round to midnight."""
        grid = sample_day(day_night_keyframes, 1080, 2)

        cell = grid[0]
        assert cell.to_rgb_tuple() == (128, 128, 128)
        # factor 0.5 takes the next keyframe's flag
        assert cell.active is False

    def test_active_flag_cuts_at_midpoint(self, day_night_keyframes):
        halfway = sample_day(day_night_keyframes, 360, 2)[0]
        assert halfway.to_rgb_tuple() == (128, 128, 128)
        assert halfway.active is True

        before = sample_day(day_night_keyframes, 359, 2)[0]
        assert before.active is False

    def test_time_before_first_keyframe_wraps_from_last(self):
        keyframes = [
            Keyframe(time=360, grid=filled_grid(1, WHITE)),
            Keyframe(time=1080, grid=filled_grid(1, BLACK)),
        ]
        # 00:00 is halfway along the 18:00 -> 06:00 interval
        cell = sample_day(keyframes, 0, 1)[0]
        assert cell.to_rgb_tuple() == (128, 128, 128)
        assert cell.active is True

    def test_single_keyframe_is_constant(self):
        keyframes = [Keyframe(time=600, grid=filled_grid(1, WHITE))]
        for t in (0, 600, 1200):
            assert sample_day(keyframes, t, 1) == [WHITE]

    def test_duplicate_times_do_not_divide_by_zero(self):
        keyframes = [
            Keyframe(name="a", time=500, grid=filled_grid(1, WHITE)),
            Keyframe(name="b", time=500, grid=filled_grid(1, BLACK)),
        ]
        grid = sample_day(keyframes, 500, 1)
        assert len(grid) == 1

    def test_short_grid_pads_with_inactive_black(self):
        keyframes = [Keyframe(time=0, grid=filled_grid(1, WHITE))]
        grid = sample_day(keyframes, 0, 2)
        assert grid == [WHITE, BLACK, BLACK, BLACK]

    def test_half_values_round_up(self):
        keyframes = [
            Keyframe(time=0, grid=[Cell(r=0, g=1, b=3, active=True)]),
            Keyframe(time=100, grid=[Cell(r=1, g=2, b=4, active=True)]),
        ]
        cell = sample_day(keyframes, 50, 1)[0]
        assert cell.to_rgb_tuple() == (1, 2, 4)


@pytest.mark.unit
class TestBracket:
    """Cyclic bracket and factor helpers."""

    @pytest.fixture
    def keyframes(self):
        return [Keyframe(name=str(t), time=t) for t in (100, 500, 900)]

    def test_inside_interval(self, keyframes):
        prev, nxt = find_bracket(keyframes, 600)
        assert (prev.time, nxt.time) == (500, 900)

    def test_after_last(self, keyframes):
        prev, nxt = find_bracket(keyframes, 1200)
        assert (prev.time, nxt.time) == (900, 100)

    def test_before_first(self, keyframes):
        prev, nxt = find_bracket(keyframes, 50)
        assert (prev.time, nxt.time) == (900, 100)

    def test_tied_times_blend_toward_next_distinct_time(self):
        keyframes = [
            Keyframe(name="a", time=100, grid=[Cell(r=200, active=True)]),
            Keyframe(name="b", time=100, grid=[Cell(r=200, active=True)]),
            Keyframe(name="c", time=500, grid=[Cell(b=200, active=True)]),
        ]
        prev, nxt = find_bracket(keyframes, 300)
        assert (prev.name, nxt.name) == ("b", "c")

        cell = sample_day(keyframes, 300, 1)[0]
        assert cell.to_rgb_tuple() == (100, 0, 100)

    def test_tied_times_at_the_tie_use_the_later_keyframe(self):
        keyframes = [Keyframe(name=n, time=100) for n in ("a", "b")] + [
            Keyframe(name="c", time=500)
        ]
        prev, _ = find_bracket(keyframes, 100)
        assert prev.name == "b"

    def test_factor_across_midnight(self, keyframes):
        prev, nxt = keyframes[2], keyframes[0]
        # 900 -> 100 is 640 minutes; 50 is 590 minutes in
        assert interpolation_factor(prev, nxt, 50) == pytest.approx(590 / 640)


@pytest.mark.unit
class TestSpectrumProgram:
    """Time-of-day channel boosts."""

    def test_no_program_leaves_grid_alone(self, day_night_keyframes):
        assert sample_day(day_night_keyframes, 720, 2, SpectrumProgram()) == filled_grid(2, WHITE)

    @pytest.mark.parametrize(
        ("band", "hour", "expected"),
        [
            (TimeBand.MORNING, 6, 50),
            (TimeBand.MORNING, 11.99, 50),
            (TimeBand.MIDDAY, 12, 50),
            (TimeBand.EVENING, 20, 30),
            (TimeBand.NIGHT, 23, 10),
            (TimeBand.NIGHT, 2, 10),
            (TimeBand.MORNING, 13, 0),
        ],
    )
    def test_channel_boost(self, band, hour, expected):
        selection = BandSelection(**{band.value: True})
        assert channel_boost(selection, hour) == expected

    def test_boost_is_per_channel_and_clamped(self):
        program = SpectrumProgram()
        program.enable(Channel.RED, TimeBand.MORNING)
        program.enable(Channel.BLUE, TimeBand.MIDDAY)

        grid = [Cell(r=230, g=10, b=10, active=True)]
        boosted = apply_spectrum_program(grid, 7 * 60, program)

        assert boosted[0].to_rgb_tuple() == (255, 10, 10)

    def test_boost_applies_after_interpolation(self):
        keyframes = [Keyframe(time=0, grid=[Cell(r=100, g=100, b=100, active=True)])]
        program = SpectrumProgram()
        program.enable(Channel.GREEN, TimeBand.EVENING)

        cell = sample_day(keyframes, 19 * 60, 1, program)[0]
        assert cell.to_rgb_tuple() == (100, 130, 100)


@pytest.mark.unit
class TestSampleSchedule:
    """Sampling across days."""

    def test_split_absolute_time(self):
        assert split_absolute_time(0, 3) == (0, 0)
        assert split_absolute_time(CYCLE_DURATION + 30, 3) == (1, 30)
        assert split_absolute_time(3 * CYCLE_DURATION + 5, 3) == (0, 5)

    def test_uses_the_right_day(self, small_schedule):
        day_two = sample_schedule(small_schedule, CYCLE_DURATION + 100)
        assert day_two[0].to_rgb_tuple() == (0, 0, 255)

        day_one = sample_schedule(small_schedule, 600)
        assert day_one[0].to_rgb_tuple() == (255, 0, 0)
