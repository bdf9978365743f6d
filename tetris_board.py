"""Board helpers: the immutable grid, merge (placement) and line detection/elimination"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from tetris_shape import Cell, Offset, Shape

Row = Tuple[Cell, ...]


@dataclass(frozen=True)
class Grid:
    """Dense row-major board of cells; indexed as ``rows[y][x]``."""
    width: int
    height: int
    rows: Tuple[Row, ...]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.width}x{self.height}")
        if len(self.rows) != self.height:
            raise ValueError(f"expected {self.height} rows, got {len(self.rows)}")
        for y, row in enumerate(self.rows):
            if len(row) != self.width:
                raise ValueError(f"row {y} has {len(row)} cells, expected {self.width}")

    @staticmethod
    def empty(width: int, height: int) -> "Grid":
        return Grid(width, height, tuple(_empty_row(max(width, 0)) for _ in range(max(height, 0))))

    def inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> Cell:
        return self.rows[y][x]

    def occupied(self) -> List[Offset]:
        return [(x, y) for y, row in enumerate(self.rows) for x, c in enumerate(row) if c is not None]


def _empty_row(width: int) -> Row:
    return (None,) * width


def try_merge(base: Grid, offset: Offset, shape: Shape) -> Optional[Grid]:
    """Return ``base`` with ``shape`` written in at ``offset``, or None on collision.

    A cell outside the board or on an occupied cell rejects the whole merge.
    """
    ox, oy = offset
    placed = {}
    for x, y in shape.cells:
        bx, by = ox + x, oy + y
        if not base.inside(bx, by) or base.rows[by][bx] is not None:
            return None
        placed[(bx, by)] = shape.color

    rows = []
    for y, row in enumerate(base.rows):
        if any(py == y for _, py in placed):
            row = tuple(placed.get((x, y), c) for x, c in enumerate(row))
        rows.append(row)
    return Grid(base.width, base.height, tuple(rows))


def fits(base: Grid, offset: Offset, shape: Shape) -> bool:
    return try_merge(base, offset, shape) is not None


def full_rows(grid: Grid) -> List[int]:
    """Indices of completely occupied rows, bottom to top."""
    return [y for y in range(grid.height - 1, -1, -1)
            if all(c is not None for c in grid.rows[y])]


def eliminate(grid: Grid, rows: Iterable[int]) -> Grid:
    """Remove ``rows`` (pre-elimination indices) and refill from the top with empty rows."""
    kept = list(grid.rows)
    doomed = sorted(set(rows), reverse=True)
    for y in doomed:
        if not 0 <= y < grid.height:
            raise IndexError(f"row {y} outside board of height {grid.height}")
        # Highest index first keeps the remaining pending indices valid.
        del kept[y]
    refill = [_empty_row(grid.width) for _ in doomed]
    return Grid(grid.width, grid.height, tuple(refill + kept))
