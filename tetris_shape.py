"""Cell colors, the Shape model, and pure bounding-box geometry"""
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence, Tuple


class Color(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    YELLOW = "yellow"
    ORANGE = "orange"


# A cell is either empty (None) or holds a color.
Cell = Optional[Color]
Offset = Tuple[int, int]


@dataclass(frozen=True)
class Shape:
    """Occupied offsets inside a width x height bounding box, all one color."""
    width: int
    height: int
    color: Color
    cells: FrozenSet[Offset]

    @staticmethod
    def from_rows(rows: Sequence[Sequence[int]], color: Color) -> "Shape":
        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("shape rows must be non-empty and of equal length")
        cells = frozenset((x, y) for y, row in enumerate(rows) for x, v in enumerate(row) if v)
        if not cells:
            raise ValueError("a shape needs at least one occupied cell")
        return Shape(len(rows[0]), len(rows), color, cells)

    def rows(self) -> List[List[int]]:
        return [[1 if (x, y) in self.cells else 0 for x in range(self.width)]
                for y in range(self.height)]


def transpose(s: Shape) -> Shape:
    return Shape(s.height, s.width, s.color, frozenset((y, x) for x, y in s.cells))


def mirror_vertical(s: Shape) -> Shape:
    return Shape(s.width, s.height, s.color,
                 frozenset((x, s.height - 1 - y) for x, y in s.cells))


def rotate_clockwise(s: Shape) -> Shape:
    return transpose(mirror_vertical(s))


def rotate_counterclockwise(s: Shape) -> Shape:
    return mirror_vertical(transpose(s))


def _row_empty(s: Shape, y: int) -> bool:
    return not any(cy == y for _, cy in s.cells)


def _trim_rows(s: Shape) -> Shape:
    # Leading rows first, then trailing ones.
    while s.height > 1 and _row_empty(s, 0):
        s = Shape(s.width, s.height - 1, s.color, frozenset((x, y - 1) for x, y in s.cells))
    while s.height > 1 and _row_empty(s, s.height - 1):
        s = Shape(s.width, s.height - 1, s.color, s.cells)
    return s


def trim(s: Shape) -> Shape:
    """Shrink the bounding box to the occupied cells' minimal extent.

    Rows are trimmed directly; columns are trimmed as rows of the transposed
    shape and transposed back.
    """
    return transpose(_trim_rows(transpose(_trim_rows(s))))
