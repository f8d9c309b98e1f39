"""Round timer collaborator.

A stopwatch that the round controller resets when a round begins, starts
counting, and stops on a win to report elapsed seconds. The clock is
injectable so tests can advance time by hand.
"""

from __future__ import annotations

import time
from typing import Callable, Optional


class Stopwatch:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._started_at: Optional[float] = None
        self._accumulated = 0.0

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def reset(self) -> None:
        """Stop (if running) and zero the elapsed time."""
        self._started_at = None
        self._accumulated = 0.0

    def start(self) -> None:
        """Start counting from now. No-op if already running."""
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> float:
        """Stop counting and return total elapsed seconds."""
        if self._started_at is not None:
            self._accumulated += max(0.0, self._clock() - self._started_at)
            self._started_at = None
        return self._accumulated

    def elapsed(self) -> float:
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + max(0.0, self._clock() - self._started_at)


class ManualClock:
    """Deterministic clock for tests and scripted replays."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now
