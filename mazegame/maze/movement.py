"""Player movement state machine.

The engine turns discrete move intents into validated cell transitions and
animates each transition with exponential-decay interpolation:

    pos += (target - pos) * fraction

once per frame, until both axis distances drop below ``epsilon``. Then the
fractional position snaps to the target, the settled position is committed
and the engine is idle again. The settled position never changes
mid-animation.

States:
- ``idle``: accepts one move intent.
- ``animating``: drops every intent (no queueing) until the transition settles.

After the settled position reaches the exit the engine fires its win listener
once and ignores further intents until ``reset``.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..logging_utils import get_logger
from .cells import DOWN, Coord2D, Direction, Grid, parse_direction

IDLE = "idle"
ANIMATING = "animating"

DEFAULT_FRACTION = 0.2
DEFAULT_EPSILON = 0.01

_log = get_logger("mazegame.movement")


def ticks_to_converge(distance: float = 1.0, fraction: float = DEFAULT_FRACTION, epsilon: float = DEFAULT_EPSILON) -> int:
    """Frames the engine needs to settle a transition of ``distance`` cells."""
    pos, target, n = 0.0, float(distance), 0
    while True:
        pos += (target - pos) * fraction
        n += 1
        if abs(target - pos) < epsilon:
            return n


class MovementEngine:
    def __init__(
        self,
        grid: Grid,
        start: Coord2D,
        exit_pos: Coord2D,
        scheduler,
        fraction: float = DEFAULT_FRACTION,
        epsilon: float = DEFAULT_EPSILON,
        on_settled: Optional[Callable[[Coord2D], None]] = None,
        on_win: Optional[Callable[[Coord2D], None]] = None,
    ):
        self.scheduler = scheduler
        self.fraction = fraction
        self.epsilon = epsilon
        self.on_settled = on_settled
        self.on_win = on_win
        self._transition = 0
        self.reset(grid, start, exit_pos)

    def reset(self, grid: Grid, start: Coord2D, exit_pos: Coord2D) -> None:
        self.grid = grid
        self.position: Coord2D = tuple(start)
        self.exit: Coord2D = tuple(exit_pos)
        self.anim_x = float(start[0])
        self.anim_y = float(start[1])
        self.facing: Direction = DOWN
        self.state = IDLE
        self.target: Optional[Coord2D] = None
        self.origin: Optional[tuple] = None
        self.frames = 0
        self.won = False
        # stale frame callbacks from an earlier transition are ignored
        self._transition += 1

    @property
    def is_idle(self) -> bool:
        return self.state == IDLE

    def move(self, direction) -> bool:
        """Apply a move intent. Returns True when a transition started."""
        d = parse_direction(direction)
        if d is None:
            _log.debug(event="move_ignored", reason="unknown_direction", direction=direction)
            return False
        if self.state != IDLE or self.won:
            _log.debug(event="move_ignored", reason=self.state if not self.won else "won", direction=d.name)
            return False
        x, y = self.position
        if self.grid.cell(x, y).has_wall(d):
            _log.debug(event="move_blocked", x=x, y=y, direction=d.name)
            return False
        nx, ny = x + d.dx, y + d.dy
        assert self.grid.in_bounds(nx, ny), f"open wall at {(x, y)} {d.name} leads off the grid"
        self.facing = d
        self.target = (nx, ny)
        self.origin = (self.anim_x, self.anim_y)
        self.frames = 0
        self.state = ANIMATING
        self._transition += 1
        self._request_frame()
        return True

    def _request_frame(self) -> None:
        token = self._transition
        self.scheduler.request_frame(lambda: self._frame(token))

    def _frame(self, token: int) -> None:
        if token != self._transition:
            return
        self.tick()

    def tick(self) -> bool:
        """Advance one animation frame. Returns True if the transition settled."""
        if self.state != ANIMATING or self.target is None:
            return False
        tx, ty = self.target
        self.anim_x += (tx - self.anim_x) * self.fraction
        self.anim_y += (ty - self.anim_y) * self.fraction
        self.frames += 1
        if abs(tx - self.anim_x) < self.epsilon and abs(ty - self.anim_y) < self.epsilon:
            self._settle()
            return True
        self._request_frame()
        return False

    def _settle(self) -> None:
        tx, ty = self.target
        self.anim_x, self.anim_y = float(tx), float(ty)
        self.position = (tx, ty)
        self.target = None
        self.origin = None
        self.state = IDLE
        if self.on_settled is not None:
            self.on_settled(self.position)
        if self.position == self.exit and not self.won:
            self.won = True
            if self.on_win is not None:
                self.on_win(self.position)

    def snapshot(self) -> dict:
        return {
            "state": self.state,
            "pos": list(self.position),
            "anim": [self.anim_x, self.anim_y],
            "facing": self.facing.name,
            "target": list(self.target) if self.target else None,
            "exit": list(self.exit),
            "won": self.won,
        }


__all__ = ["ANIMATING", "DEFAULT_EPSILON", "DEFAULT_FRACTION", "IDLE", "MovementEngine", "ticks_to_converge"]
