"""Structured event logging for the maze game.

Every record is one line: key=value pairs (or one JSON object per line with
``MAZE_LOG_JSON=1``) led by a level and a unix timestamp, so round lifecycle
events stay easy to grep.

Usage:
    from mazegame.logging_utils import get_logger
    _log = get_logger("mazegame.round")
    _log.info(event="round_started", difficulty="easy", rows=10)

Lines go to stdout (errors to stderr) until the server configures stdlib
logging; from then on they are handed to ``logging.getLogger(name)`` so they
reach the rotating ``instance/app.log`` too. ``None`` values are dropped.
Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("MAZE_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("MAZE_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")

_STDLIB_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}
_forward = False


def forward_to_stdlib(enabled: bool = True) -> None:
    """Route structured lines through stdlib logging instead of print()."""
    global _forward
    _forward = enabled


def _coord(v):
    # (x, y) tuples read better as x,y than as a repr
    if isinstance(v, (tuple, list)) and len(v) == 2 and all(isinstance(c, int) for c in v):
        return f"{v[0]},{v[1]}"
    return v


def _format(level: str, **fields) -> str:
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        try:
            return json.dumps(rec, separators=(",", ":"), default=str)
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": int(time.time()), "error": "json_encode_failed"})
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        v = _coord(v)
        if isinstance(v, (bool, int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "mazegame"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        fields.setdefault("logger", self.name)
        line = _format(lvl, **fields)
        if _forward:
            logging.getLogger(self.name).log(_STDLIB_LEVELS[lvl], line)
            return
        print(line, file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("mazegame")
