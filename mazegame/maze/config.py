from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from flask import current_app, has_app_context

DIFFICULTY_SIZES: Dict[str, int] = {"easy": 10, "medium": 20, "hard": 30}


def _env_bool(val: str) -> bool:
    return val.strip().lower() not in {"0", "false", "no", "off", ""}


def _env_seed(val: str) -> Optional[int]:
    val = val.strip()
    return int(val) if val else None


# config attribute -> (env / app.config key, parser)
_OVERRIDES = {
    "interpolation_fraction": ("MAZE_INTERPOLATION_FRACTION", float),
    "epsilon": ("MAZE_EPSILON", float),
    "placement_max_attempts": ("MAZE_PLACEMENT_MAX_ATTEMPTS", int),
    "frame_interval": ("MAZE_FRAME_INTERVAL", float),
    "debug_overlay": ("MAZE_DEBUG_OVERLAY", _env_bool),
    "seed": ("MAZE_SEED", _env_seed),
}


@dataclass
class MazeConfig:
    difficulty_sizes: Dict[str, int] = field(default_factory=lambda: dict(DIFFICULTY_SIZES))
    default_difficulty: str = "easy"
    interpolation_fraction: float = 0.2
    epsilon: float = 0.01
    placement_max_attempts: int = 1000
    frame_interval: float = 1 / 60
    debug_overlay: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not (0.0 < self.interpolation_fraction <= 1.0):
            raise ValueError("interpolation_fraction must be in (0, 1]")
        if self.epsilon <= 0:
            raise ValueError("epsilon must be > 0")
        if self.placement_max_attempts < 1:
            raise ValueError("placement_max_attempts must be >= 1")
        if self.frame_interval < 0:
            raise ValueError("frame_interval must be >= 0")
        if self.default_difficulty not in self.difficulty_sizes:
            raise ValueError(f"unknown default difficulty {self.default_difficulty!r}")
        for name, size in self.difficulty_sizes.items():
            if int(size) < 1:
                raise ValueError(f"difficulty {name!r} must have size >= 1")

    def dimensions(self, difficulty: str) -> Tuple[int, int]:
        """Return (rows, cols) for a named difficulty."""
        try:
            size = self.difficulty_sizes[difficulty]
        except (KeyError, TypeError):
            raise ValueError(f"unknown difficulty {difficulty!r}") from None
        return size, size

    @classmethod
    def from_env(cls, **overrides) -> "MazeConfig":
        """Build a config from defaults, then environment, then Flask app.config.

        Keyword overrides win over everything.
        """
        values = {}
        for attr, (key, parse) in _OVERRIDES.items():
            if key in os.environ:
                values[attr] = parse(os.environ[key])
        if has_app_context():
            cfg = current_app.config
            for attr, (key, parse) in _OVERRIDES.items():
                if key in cfg:
                    raw = cfg[key]
                    values[attr] = parse(raw) if isinstance(raw, str) else raw
        values.update(overrides)
        return cls(**values)


__all__ = ["DIFFICULTY_SIZES", "MazeConfig"]
