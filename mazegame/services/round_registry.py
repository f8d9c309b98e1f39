"""Per-session round controllers.

The web layer keeps one RoundController per browser session (HTTP) or per
Socket.IO connection. Entries are capped with simple oldest-first eviction.
Thread-safe with a lock because Flask-SocketIO/eventlet may interleave
greenlets; each entry also carries its own lock serialising intents and
animation frames for that round.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, NamedTuple, Optional

from mazegame.logging_utils import get_logger
from mazegame.maze import RoundController

_log = get_logger("mazegame.registry")

DEFAULT_MAX_SESSIONS = 256


class RoundEntry(NamedTuple):
    controller: RoundController
    lock: threading.RLock


class RoundRegistry:
    def __init__(self, factory: Callable[[str], RoundController], max_sessions: int = DEFAULT_MAX_SESSIONS):
        self._factory = factory
        self._max = max_sessions
        self._entries: "OrderedDict[str, RoundEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[RoundEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
            return entry

    def get_or_create(self, key: str) -> RoundEntry:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
                return entry
        controller = self._factory(key)
        entry = RoundEntry(controller, threading.RLock())
        with self._lock:
            # another request may have raced us; keep the first one
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = entry
            while len(self._entries) > self._max:
                evicted, _ = self._entries.popitem(last=False)
                _log.info(event="round_evicted", session=evicted)
        return entry

    def discard(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries
