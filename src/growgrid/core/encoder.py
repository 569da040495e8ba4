"""Device frame encoder.

Wire format (one frame):

    [0xAB, grid_size, R0, G0, B0, R1, G1, B1, ..., 0xBA]

``grid_size`` is the width/height of the square matrix, followed by
``grid_size²`` RGB triplets in row-major order. The controller firmware
validates the size byte and the end byte and drops frames that don't match.
"""

import numpy as np

from growgrid.models import Grid, cell_or_off

FRAME_START = 0xAB
FRAME_END = 0xBA


def frame_length(grid_size: int) -> int:
    """Total byte length of a frame for a grid dimension."""
    return 2 + 3 * grid_size * grid_size + 1


def encode_frame(grid: Grid, master_brightness: float, grid_size: int) -> bytes:
    """
    Serialize a resolved grid into a hardware frame.

    Args:
        grid: Resolved cells (missing cells are sent as black)
        master_brightness: Output brightness percentage (0-100)
        grid_size: Grid dimension written into the header

    Returns:
        The framed bytes, ``frame_length(grid_size)`` long

    Example:
        >>> grid = [Cell(r=200, g=100, b=50, active=True)] * 4
        >>> list(encode_frame(grid, 50, 2))
        [171, 2, 100, 50, 25, 100, 50, 25, 100, 50, 25, 100, 50, 25, 186]
    """
    count = grid_size * grid_size
    rgb = np.zeros((count, 3), dtype=np.float64)
    for i in range(count):
        cell = cell_or_off(grid, i)
        if cell.active:
            rgb[i] = (cell.r, cell.g, cell.b)

    # Half-up rounding, then clamp into a byte
    scaled = np.floor(rgb * (master_brightness / 100) + 0.5)
    payload = np.clip(scaled, 0, 255).astype(np.uint8)

    frame = np.empty(frame_length(grid_size), dtype=np.uint8)
    frame[0] = FRAME_START
    frame[1] = grid_size & 0xFF
    frame[2:-1] = payload.reshape(-1)
    frame[-1] = FRAME_END
    return frame.tobytes()
