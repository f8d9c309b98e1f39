"""Plain-text maze rendering for the CLI and log-friendly debugging.

Each cell becomes the centre of a 2x2 block in a ``(2*rows+1) x (2*cols+1)``
character grid: ``#`` for walls, space for open floor. Markers:
``S`` start, ``E`` exit (cheese), ``M`` mouse, ``.`` solver path.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cells import Coord2D, Grid

WALL = "#"
FLOOR = " "
PATH = "."


def grid_to_chars(grid: Grid) -> List[List[str]]:
    h, w = grid.rows, grid.cols
    chars = [[WALL for _ in range(2 * w + 1)] for _ in range(2 * h + 1)]
    for cell in grid:
        cx, cy = 2 * cell.x + 1, 2 * cell.y + 1
        chars[cy][cx] = FLOOR
        if not cell.top:
            chars[cy - 1][cx] = FLOOR
        if not cell.right:
            chars[cy][cx + 1] = FLOOR
        if not cell.bottom:
            chars[cy + 1][cx] = FLOOR
        if not cell.left:
            chars[cy][cx - 1] = FLOOR
    return chars


def overlay_path(chars: List[List[str]], path_cells: Iterable[Coord2D]) -> None:
    prev = None
    for x, y in path_cells:
        cx, cy = 2 * x + 1, 2 * y + 1
        chars[cy][cx] = PATH
        if prev is not None:
            px, py = prev
            chars[(cy + py) // 2][(cx + px) // 2] = PATH
        prev = (cx, cy)


def _mark(chars, pos: Optional[Coord2D], ch: str) -> None:
    if pos is None:
        return
    x, y = pos
    chars[2 * y + 1][2 * x + 1] = ch


def render_text(
    grid: Grid,
    start: Optional[Coord2D] = None,
    exit_pos: Optional[Coord2D] = None,
    path: Optional[Iterable[Coord2D]] = None,
    player: Optional[Coord2D] = None,
) -> str:
    chars = grid_to_chars(grid)
    if path:
        overlay_path(chars, path)
    _mark(chars, start, "S")
    _mark(chars, exit_pos, "E")
    _mark(chars, player, "M")
    return "\n".join("".join(row) for row in chars)


__all__ = ["grid_to_chars", "overlay_path", "render_text"]
