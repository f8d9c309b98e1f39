"""Grid model: directions, immutable cells and the rectangular grid.

Coordinates are (x, y) with y growing downward, so ``up`` is ``dy = -1``.
Cells are indexed ``grid.cells[y][x]`` (row-major) to match how the browser
client walks rows when drawing.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

Coord2D = Tuple[int, int]

WALL_NAMES = ("top", "right", "bottom", "left")


class Direction(NamedTuple):
    name: str
    dx: int
    dy: int
    wall: str
    opposite_wall: str


UP = Direction("up", 0, -1, "top", "bottom")
RIGHT = Direction("right", 1, 0, "right", "left")
DOWN = Direction("down", 0, 1, "bottom", "top")
LEFT = Direction("left", -1, 0, "left", "right")

# Fixed expansion order used by the generator and the solver.
DIRECTIONS: Tuple[Direction, ...] = (UP, RIGHT, DOWN, LEFT)
DIRECTIONS_BY_NAME: Dict[str, Direction] = {d.name: d for d in DIRECTIONS}

# Short aliases accepted from clients (arrow keys / compass letters).
_ALIASES = {
    "u": "up",
    "n": "up",
    "arrowup": "up",
    "d": "down",
    "s": "down",
    "arrowdown": "down",
    "l": "left",
    "w": "left",
    "arrowleft": "left",
    "r": "right",
    "e": "right",
    "arrowright": "right",
}


def parse_direction(value) -> Optional[Direction]:
    """Return the Direction named by ``value`` or None if it is not one."""
    if isinstance(value, Direction):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().lower()
    key = _ALIASES.get(key, key)
    return DIRECTIONS_BY_NAME.get(key)


class Cell(NamedTuple):
    """One grid square. ``True`` wall flags mean the wall is present."""

    x: int
    y: int
    top: bool = True
    right: bool = True
    bottom: bool = True
    left: bool = True

    def has_wall(self, direction: Direction) -> bool:
        return getattr(self, direction.wall)

    def walls(self) -> Dict[str, bool]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}

    def wall_list(self) -> List[bool]:
        return [self.top, self.right, self.bottom, self.left]


class Grid:
    """Rectangular array of Cells with adjacency queries.

    A Grid is read-only once built; rounds replace it wholesale.
    """

    __slots__ = ("rows", "cols", "cells")

    def __init__(self, rows: int, cols: int, cells: List[List[Cell]]):
        if rows < 1 or cols < 1:
            raise ValueError(f"grid dimensions must be >= 1 (got {rows}x{cols})")
        if len(cells) != rows or any(len(row) != cols for row in cells):
            raise ValueError("cell matrix does not match grid dimensions")
        self.rows = rows
        self.cols = cols
        self.cells = tuple(tuple(row) for row in cells)

    @classmethod
    def walled(cls, rows: int, cols: int) -> "Grid":
        """Return a grid where every cell has all four walls."""
        if rows < 1 or cols < 1:
            raise ValueError(f"grid dimensions must be >= 1 (got {rows}x{cols})")
        return cls(rows, cols, [[Cell(x, y) for x in range(cols)] for y in range(rows)])

    def __repr__(self):
        return f"Grid(rows={self.rows}, cols={self.cols}, passages={self.passage_count()})"

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def __len__(self) -> int:
        return self.rows * self.cols

    def neighbors(self, x: int, y: int) -> List[Tuple[Direction, Coord2D]]:
        """Grid-adjacent coordinates in top, right, bottom, left order."""
        out = []
        for d in DIRECTIONS:
            nx, ny = x + d.dx, y + d.dy
            if self.in_bounds(nx, ny):
                out.append((d, (nx, ny)))
        return out

    def open_neighbors(self, x: int, y: int) -> List[Coord2D]:
        """Adjacent coordinates reachable without crossing a wall."""
        cell = self.cells[y][x]
        return [coord for d, coord in self.neighbors(x, y) if not cell.has_wall(d)]

    def passage_count(self) -> int:
        """Number of cleared wall pairs (edges of the passage graph)."""
        count = 0
        for cell in self:
            # count each pair once, from its left/top member
            if not cell.right and cell.x + 1 < self.cols:
                count += 1
            if not cell.bottom and cell.y + 1 < self.rows:
                count += 1
        return count

    def dead_ends(self) -> int:
        return sum(1 for cell in self if len(self.open_neighbors(cell.x, cell.y)) == 1)

    def wall_states(self) -> List[List[List[bool]]]:
        """Row-major ``[top, right, bottom, left]`` flags for the renderer."""
        return [[cell.wall_list() for cell in row] for row in self.cells]

    def to_dict(self):
        return {"rows": self.rows, "cols": self.cols, "walls": self.wall_states()}


def manhattan(a: Coord2D, b: Coord2D) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


__all__ = [
    "Cell",
    "Coord2D",
    "Direction",
    "DIRECTIONS",
    "DIRECTIONS_BY_NAME",
    "DOWN",
    "Grid",
    "LEFT",
    "RIGHT",
    "UP",
    "WALL_NAMES",
    "manhattan",
    "parse_direction",
]
