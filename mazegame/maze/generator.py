"""Perfect-maze generation via randomized depth-first search (recursive backtracker)."""

from __future__ import annotations

import random
import time
from typing import Dict, List, NamedTuple, Optional, Set

from .cells import DIRECTIONS, Cell, Coord2D, Grid


class GenerationOutputs(NamedTuple):
    grid: Grid
    metrics: Dict[str, int | float]


def init_metrics() -> Dict[str, int | float]:
    return {
        "cells": 0,
        "passages": 0,
        "dead_ends": 0,
        "max_stack_depth": 0,
        "runtime_ms": 0.0,
    }


class Generator:
    """Carve a spanning tree over a fully walled ``rows x cols`` grid.

    ``rng`` may be any object with ``randrange`` (``random.Random`` or a
    scripted stand-in for deterministic tests). When omitted a private
    ``random.Random(seed)`` is used.
    """

    def __init__(self, rows: int, cols: int, rng=None, seed: Optional[int] = None):
        if rows < 1 or cols < 1:
            raise ValueError(f"maze dimensions must be >= 1 (got {rows}x{cols})")
        self.rows = rows
        self.cols = cols
        self.rng = rng if rng is not None else random.Random(seed)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def carve(self, metrics: Dict[str, int | float]) -> Dict[Coord2D, Set[str]]:
        """Run the backtracker; returns coord -> set of wall names removed."""
        opened: Dict[Coord2D, Set[str]] = {(x, y): set() for y in range(self.rows) for x in range(self.cols)}
        visited: Set[Coord2D] = set()
        stack: List[Coord2D] = []
        current = (0, 0)
        visited.add(current)
        while True:
            cx, cy = current
            candidates = []
            for d in DIRECTIONS:
                nx, ny = cx + d.dx, cy + d.dy
                if self._in_bounds(nx, ny) and (nx, ny) not in visited:
                    candidates.append((d, (nx, ny)))
            if candidates:
                d, nxt = candidates[self.rng.randrange(len(candidates))]
                # clear the wall pair on both cells
                opened[current].add(d.wall)
                opened[nxt].add(d.opposite_wall)
                stack.append(current)
                if len(stack) > metrics["max_stack_depth"]:
                    metrics["max_stack_depth"] = len(stack)
                visited.add(nxt)
                current = nxt
            elif stack:
                current = stack.pop()
            else:
                break
        return opened

    def freeze(self, opened: Dict[Coord2D, Set[str]]) -> Grid:
        cells = []
        for y in range(self.rows):
            row = []
            for x in range(self.cols):
                gone = opened[(x, y)]
                row.append(
                    Cell(
                        x,
                        y,
                        top="top" not in gone,
                        right="right" not in gone,
                        bottom="bottom" not in gone,
                        left="left" not in gone,
                    )
                )
            cells.append(row)
        return Grid(self.rows, self.cols, cells)

    def run(self) -> GenerationOutputs:
        metrics = init_metrics()
        t0 = time.perf_counter()
        grid = self.freeze(self.carve(metrics))
        metrics["runtime_ms"] = round((time.perf_counter() - t0) * 1000.0, 3)
        metrics["cells"] = len(grid)
        metrics["passages"] = grid.passage_count()
        metrics["dead_ends"] = grid.dead_ends()
        return GenerationOutputs(grid, metrics)


def generate(rows: int, cols: int, rng=None, seed: Optional[int] = None) -> Grid:
    """Return a perfect maze of ``rows x cols`` cells."""
    return Generator(rows, cols, rng=rng, seed=seed).run().grid


__all__ = ["GenerationOutputs", "Generator", "generate", "init_metrics"]
