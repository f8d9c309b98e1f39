"""Breadth-first shortest path over open passages (hint / debug overlay)."""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Tuple

from .cells import Coord2D, Grid


def shortest_path(grid: Grid, source: Coord2D, target: Coord2D) -> List[Coord2D]:
    """Return the cells from ``source`` to ``target`` inclusive.

    Empty when either endpoint is off the grid or no passage connects them.
    On a perfect maze the result is the unique simple path.
    """
    sx, sy = source
    tx, ty = target
    if not (grid.in_bounds(sx, sy) and grid.in_bounds(tx, ty)):
        return []
    source, target = (sx, sy), (tx, ty)
    if source == target:
        return [source]
    parents: Dict[Coord2D, Optional[Coord2D]] = {source: None}
    q = deque([source])
    while q:
        cur = q.popleft()
        if cur == target:
            break
        for nxt in grid.open_neighbors(*cur):
            if nxt not in parents:
                parents[nxt] = cur
                q.append(nxt)
    if target not in parents:
        return []
    path: List[Coord2D] = []
    node: Optional[Coord2D] = target
    while node is not None:
        path.append(node)
        node = parents[node]
    path.reverse()
    return path


def reachable(grid: Grid, origin: Coord2D) -> set:
    """Set of coordinates connected to ``origin`` through open passages."""
    seen = {origin}
    q = deque([origin])
    while q:
        cur = q.popleft()
        for nxt in grid.open_neighbors(*cur):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


class PathCache:
    """Memoise the solver result until the player's settled cell changes."""

    def __init__(self):
        self._key: Optional[Tuple[int, Coord2D, Coord2D]] = None
        self._path: List[Coord2D] = []
        self.computations = 0

    def get(self, grid: Grid, source: Coord2D, target: Coord2D) -> List[Coord2D]:
        key = (id(grid), tuple(source), tuple(target))
        if key != self._key:
            self._path = shortest_path(grid, source, target)
            self._key = key
            self.computations += 1
        return list(self._path)

    def invalidate(self) -> None:
        self._key = None
        self._path = []


__all__ = ["PathCache", "reachable", "shortest_path"]
