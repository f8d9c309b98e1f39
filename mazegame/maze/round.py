"""Round lifecycle orchestration.

A RoundController owns one RoundState at a time. ``start_round`` builds a
fresh maze, places the mouse and the cheese, resets the movement engine and
tells the timer and score collaborators that a round began. When the engine
reports a win the controller stops the timer, reports the elapsed time,
notifies win listeners and immediately starts another round at the same
difficulty.

Collaborator contracts (duck typed):

    timer:  reset(), start(), stop() -> float, elapsed() -> float
    scores: round_started(difficulty), report_completion(difficulty, seconds) -> bool
    scheduler: request_frame(callback)  (plus run_pending() for manual driving)
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..logging_utils import get_logger
from ..services.score_service import MemoryScoreBoard
from ..services.timer_service import Stopwatch
from .cells import Coord2D, Grid
from .config import MazeConfig
from .generator import Generator
from .movement import MovementEngine
from .placement import choose_placements
from .scheduling import ManualScheduler
from .solver import PathCache

_log = get_logger("mazegame.round")


@dataclass
class WinEvent:
    difficulty: str
    elapsed_seconds: float
    new_best: bool
    round_number: int
    position: Coord2D

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty,
            "elapsed": self.elapsed_seconds,
            "new_best": self.new_best,
            "round": self.round_number,
            "pos": list(self.position),
        }


@dataclass
class RoundState:
    difficulty: str
    grid: Grid
    start: Coord2D
    exit: Coord2D
    round_number: int
    seed: Optional[int] = None
    debug: bool = False
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols


class RoundController:
    def __init__(
        self,
        config: Optional[MazeConfig] = None,
        timer=None,
        scores=None,
        scheduler=None,
        rng=None,
    ):
        self.config = config or MazeConfig()
        self.timer = timer if timer is not None else Stopwatch()
        self.scores = scores if scores is not None else MemoryScoreBoard()
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.state: Optional[RoundState] = None
        self.engine: Optional[MovementEngine] = None
        self.history: List[WinEvent] = []
        self.win_listeners: List[Callable[[WinEvent], None]] = []
        self.debug = self.config.debug_overlay
        self._paths = PathCache()
        self._rounds = 0

    # ------------------------------------------------------------------ lifecycle
    def start_round(self, difficulty: Optional[str] = None) -> RoundState:
        difficulty = difficulty or self.config.default_difficulty
        rows, cols = self.config.dimensions(difficulty)
        outputs = Generator(rows, cols, rng=self.rng).run()
        grid = outputs.grid
        start, exit_pos = choose_placements(grid, self.rng, max_attempts=self.config.placement_max_attempts)
        self._rounds += 1
        self.state = RoundState(
            difficulty=difficulty,
            grid=grid,
            start=start,
            exit=exit_pos,
            round_number=self._rounds,
            seed=self.config.seed,
            debug=self.debug,
            metrics=dict(outputs.metrics),
        )
        if self.engine is None:
            self.engine = MovementEngine(
                grid,
                start,
                exit_pos,
                self.scheduler,
                fraction=self.config.interpolation_fraction,
                epsilon=self.config.epsilon,
                on_win=self._handle_win,
            )
        else:
            self.engine.reset(grid, start, exit_pos)
        self._paths.invalidate()
        self.timer.reset()
        self.timer.start()
        self.scores.round_started(difficulty)
        _log.info(
            event="round_started",
            difficulty=difficulty,
            rows=rows,
            cols=cols,
            start=start,
            exit=exit_pos,
            round=self._rounds,
            seed=self.config.seed,
            runtime_ms=outputs.metrics.get("runtime_ms"),
        )
        return self.state

    def restart(self) -> RoundState:
        difficulty = self.state.difficulty if self.state else None
        return self.start_round(difficulty)

    def _handle_win(self, position: Coord2D) -> None:
        state = self.state
        elapsed = self.timer.stop()
        new_best = bool(self.scores.report_completion(state.difficulty, elapsed))
        event = WinEvent(
            difficulty=state.difficulty,
            elapsed_seconds=elapsed,
            new_best=new_best,
            round_number=state.round_number,
            position=tuple(position),
        )
        self.history.append(event)
        _log.info(
            event="round_won",
            difficulty=state.difficulty,
            seconds=round(elapsed, 3),
            new_best=new_best,
            round=state.round_number,
        )
        for listener in list(self.win_listeners):
            listener(event)
        self.start_round(state.difficulty)

    # ------------------------------------------------------------------ inbound intents
    def move_intent(self, direction) -> bool:
        if self.engine is None:
            return False
        return self.engine.move(direction)

    def tick(self, frames: int = 1) -> int:
        """Run up to ``frames`` pending animation frames on a manual scheduler."""
        run = 0
        for _ in range(max(0, frames)):
            if not self.scheduler.run_pending():
                break
            run += 1
        return run

    def toggle_debug_overlay(self) -> bool:
        self.debug = not self.debug
        if self.state is not None:
            self.state.debug = self.debug
        _log.info(event="debug_overlay", enabled=self.debug)
        return self.debug

    def on_win(self, listener: Callable[[WinEvent], None]) -> Callable[[WinEvent], None]:
        self.win_listeners.append(listener)
        return listener

    # ------------------------------------------------------------------ outbound data
    def solution_path(self) -> List[Coord2D]:
        """Solver path from the settled player cell to the exit (cached)."""
        if self.state is None or self.engine is None:
            return []
        return self._paths.get(self.state.grid, self.engine.position, self.state.exit)

    def snapshot(self) -> Dict[str, Any]:
        if self.state is None or self.engine is None:
            return {"active": False}
        state = self.state
        player = self.engine.snapshot()
        data = {
            "active": True,
            "difficulty": state.difficulty,
            "round": state.round_number,
            **state.grid.to_dict(),
            "player": {
                "pos": player["pos"],
                "anim": player["anim"],
                "facing": player["facing"],
                "state": player["state"],
            },
            "start": list(state.start),
            "exit": list(state.exit),
            "elapsed": self.timer.elapsed(),
            "debug": self.debug,
            "wins": len(self.history),
        }
        if self.debug:
            data["path"] = [list(p) for p in self.solution_path()]
        return data


__all__ = ["RoundController", "RoundState", "WinEvent"]
