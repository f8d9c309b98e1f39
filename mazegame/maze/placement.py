"""Start / exit placement.

The start is a uniformly random cell. The exit is drawn by rejection sampling
until it sits at least ``floor(max(rows, cols) / 2)`` Manhattan steps away
from the start. Sampling is capped; when the cap is hit the farthest
candidate seen so far is used instead.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

from ..logging_utils import get_logger
from .cells import Coord2D, Grid, manhattan

DEFAULT_MAX_ATTEMPTS = 1000

_log = get_logger("mazegame.placement")


def min_separation(grid: Grid) -> int:
    return max(grid.rows, grid.cols) // 2


def random_cell(grid: Grid, rng) -> Coord2D:
    return (rng.randrange(grid.cols), rng.randrange(grid.rows))


def farthest_cell(grid: Grid, origin: Coord2D) -> Coord2D:
    """Grid cell with the largest Manhattan distance from ``origin`` (first wins ties)."""
    best = origin
    best_d = -1
    for cell in grid:
        d = manhattan(origin, (cell.x, cell.y))
        if d > best_d:
            best, best_d = (cell.x, cell.y), d
    return best


def choose_exit(grid: Grid, start: Coord2D, rng, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Coord2D:
    if len(grid) == 1:
        return start
    need = min_separation(grid)
    best: Optional[Coord2D] = None
    best_d = -1
    for _ in range(max(1, max_attempts)):
        cand = random_cell(grid, rng)
        if cand == start:
            continue
        d = manhattan(start, cand)
        if d >= need:
            return cand
        if d > best_d:
            best, best_d = cand, d
    fallback = best if best is not None else farthest_cell(grid, start)
    _log.warn(
        event="placement_fallback",
        attempts=max_attempts,
        start=start,
        exit=fallback,
        distance=manhattan(start, fallback),
        required=need,
    )
    return fallback


def choose_placements(grid: Grid, rng=None, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> Tuple[Coord2D, Coord2D]:
    """Return ``(start, exit)`` for a generated grid."""
    if rng is None:
        rng = random.Random()
    start = random_cell(grid, rng)
    return start, choose_exit(grid, start, rng, max_attempts=max_attempts)


__all__ = ["DEFAULT_MAX_ATTEMPTS", "choose_exit", "choose_placements", "farthest_cell", "min_separation", "random_cell"]
