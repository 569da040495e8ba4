"""Grid helpers.

A grid is a plain ``list[Cell]`` of exactly ``size * size`` cells in
row-major order (``index = row * size + col``).
"""

from .cell import Cell

Grid = list[Cell]

# Constants defined at module level so models and services share them
MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 32
DEFAULT_GRID_SIZE = 8


def clamp_grid_size(size: int) -> int:
    """Clamp a grid dimension into the supported range."""
    return max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(size)))


def blank_grid(size: int) -> Grid:
    """Create a grid of inactive black cells."""
    return [Cell.off() for _ in range(size * size)]


def filled_grid(size: int, cell: Cell) -> Grid:
    """Create a grid where every cell is ``cell``."""
    return [cell] * (size * size)


def cell_at(grid: Grid, index: int) -> Cell | None:
    """Get the cell at ``index``, or None if the grid has no data there."""
    if 0 <= index < len(grid):
        return grid[index]
    return None


def cell_or_off(grid: Grid, index: int) -> Cell:
    """Get the cell at ``index``, defaulting missing data to inactive black."""
    cell = cell_at(grid, index)
    return cell if cell is not None else Cell.off()


def resize_grid(grid: Grid, size: int) -> Grid:
    """Build a grid of ``size * size`` cells from an existing one.

    Cells are copied by index; indices the old grid doesn't cover are
    filled with inactive black, extra cells are dropped.
    """
    return [cell_or_off(grid, i) for i in range(size * size)]


def index_to_rc(index: int, size: int) -> tuple[int, int]:
    """Convert a cell index to (row, col)."""
    return (index // size, index % size)
