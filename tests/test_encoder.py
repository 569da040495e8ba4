"""Tests for the device frame encoder."""

import pytest

from growgrid.core.encoder import FRAME_END, FRAME_START, encode_frame, frame_length
from growgrid.models import Cell, blank_grid, filled_grid


@pytest.mark.unit
class TestEncodeFrame:
    """Frame layout and brightness scaling."""

    def test_reference_frame(self):
        grid = filled_grid(2, Cell(r=200, g=100, b=50, active=True))
        frame = encode_frame(grid, 50, 2)

        assert list(frame) == [
            0xAB, 2,
            100, 50, 25,
            100, 50, 25,
            100, 50, 25,
            100, 50, 25,
            0xBA,
        ]  # fmt: skip
        assert len(frame) == 15

    @pytest.mark.parametrize("size", [1, 4, 8, 32])
    def test_length(self, size):
        frame = encode_frame(blank_grid(size), 100, size)
        assert len(frame) == frame_length(size) == 3 + 3 * size * size
        assert frame[0] == FRAME_START
        assert frame[1] == size
        assert frame[-1] == FRAME_END

    def test_inactive_cells_are_black(self):
        grid = [Cell(r=255, g=255, b=255, active=False)]
        assert list(encode_frame(grid, 100, 1)) == [0xAB, 1, 0, 0, 0, 0xBA]

    def test_brightness_rounds_half_up(self):
        grid = [Cell(r=1, g=3, b=255, active=True)]
        # 0.5, 1.5, 127.5
        assert list(encode_frame(grid, 50, 1))[2:5] == [1, 2, 128]

    def test_zero_brightness(self):
        grid = filled_grid(2, Cell(r=255, g=255, b=255, active=True))
        assert set(encode_frame(grid, 0, 2)[2:-1]) == {0}

    def test_short_grid_pads_with_black(self):
        grid = [Cell(r=10, g=20, b=30, active=True)]
        frame = encode_frame(grid, 100, 2)
        assert list(frame[2:5]) == [10, 20, 30]
        assert list(frame[5:-1]) == [0] * 9

    def test_row_major_order(self):
        grid = [Cell(r=i, g=0, b=0, active=True) for i in range(4)]
        frame = encode_frame(grid, 100, 2)
        assert [frame[2 + 3 * i] for i in range(4)] == [0, 1, 2, 3]
