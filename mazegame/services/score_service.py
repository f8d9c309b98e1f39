"""Score collaborator: best completion time per difficulty.

The round controller only tells this service that a round began and how
long a finished round took; comparison against the previous best and any
persistence live here.

``ScoreService`` stores rows through Flask-SQLAlchemy and needs an app
context. ``MemoryScoreBoard`` keeps the same contract in a dict for the CLI
and for tests that do not want a database.
"""

from __future__ import annotations

from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from mazegame import db
from mazegame.logging_utils import get_logger
from mazegame.models import BestTime

_log = get_logger("mazegame.scores")


class ScoreService:
    def round_started(self, difficulty: str) -> None:
        try:
            row = BestTime.get_or_create(difficulty)
            row.rounds_started = (row.rounds_started or 0) + 1
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            _log.error(event="score_write_failed", op="round_started", difficulty=difficulty, error=exc)

    def report_completion(self, difficulty: str, elapsed_seconds: float) -> bool:
        """Record a finished round. Returns True when it set a new best."""
        try:
            row = BestTime.get_or_create(difficulty)
            row.completions = (row.completions or 0) + 1
            new_best = row.seconds is None or elapsed_seconds < row.seconds
            if new_best:
                row.seconds = float(elapsed_seconds)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            _log.error(event="score_write_failed", op="report_completion", difficulty=difficulty, error=exc)
            return False
        if new_best:
            _log.info(event="best_time", difficulty=difficulty, seconds=round(elapsed_seconds, 3))
        return new_best

    def best(self, difficulty: str) -> Optional[float]:
        row = BestTime.get(difficulty)
        return row.seconds if row else None

    def all_best(self, difficulties) -> Dict[str, Optional[float]]:
        return {d: self.best(d) for d in difficulties}


class MemoryScoreBoard:
    def __init__(self):
        self.best_times: Dict[str, float] = {}
        self.started: Dict[str, int] = {}
        self.completions: Dict[str, list] = {}

    def round_started(self, difficulty: str) -> None:
        self.started[difficulty] = self.started.get(difficulty, 0) + 1

    def report_completion(self, difficulty: str, elapsed_seconds: float) -> bool:
        self.completions.setdefault(difficulty, []).append(elapsed_seconds)
        prev = self.best_times.get(difficulty)
        if prev is None or elapsed_seconds < prev:
            self.best_times[difficulty] = elapsed_seconds
            return True
        return False

    def best(self, difficulty: str) -> Optional[float]:
        return self.best_times.get(difficulty)

    def all_best(self, difficulties) -> Dict[str, Optional[float]]:
        return {d: self.best(d) for d in difficulties}
