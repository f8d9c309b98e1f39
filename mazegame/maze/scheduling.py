"""Frame schedulers that drive the movement animation.

The movement engine asks for the next frame through ``request_frame`` and
never reschedules itself, so the driver can be a test harness, a browser
posting frames over HTTP, or a Socket.IO background task.
"""

from __future__ import annotations

from typing import Callable, List, Optional

FrameCallback = Callable[[], None]


class ManualScheduler:
    """Collect frame requests and run them when told to."""

    def __init__(self):
        self._pending: List[FrameCallback] = []
        self.frames_run = 0

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run one frame. Requests made during the frame wait for the next one."""
        batch, self._pending = self._pending, []
        for cb in batch:
            cb()
        if batch:
            self.frames_run += 1
        return len(batch)

    def run_until_idle(self, max_frames: int = 10_000) -> int:
        frames = 0
        while self._pending and frames < max_frames:
            self.run_pending()
            frames += 1
        return frames

    def clear(self) -> None:
        self._pending = []


class SocketIOScheduler:
    """Run each frame on a Flask-SocketIO background task after ``interval`` seconds.

    ``guard`` (optional zero-argument callable returning a context manager) wraps
    each frame, e.g. a lock plus an app context. A guard that yields ``False``
    drops the frame. ``after_frame`` runs inside the guard, typically to emit
    the new state.
    """

    def __init__(self, socketio, interval: float = 1 / 60, guard=None, after_frame: Optional[Callable[[], None]] = None):
        self.socketio = socketio
        self.interval = interval
        self.guard = guard
        self.after_frame = after_frame

    def request_frame(self, callback: FrameCallback) -> None:
        self.socketio.start_background_task(self._run, callback)

    def _run(self, callback: FrameCallback) -> None:
        self.socketio.sleep(self.interval)
        if self.guard is None:
            self._frame(callback)
            return
        with self.guard() as live:
            # a guard yielding False means the frame's owner is gone
            if live is False:
                return
            self._frame(callback)

    def _frame(self, callback: FrameCallback) -> None:
        callback()
        if self.after_frame is not None:
            self.after_frame()


__all__ = ["FrameCallback", "ManualScheduler", "SocketIOScheduler"]
