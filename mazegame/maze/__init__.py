"""Public maze package interface."""

from .cells import DIRECTIONS, DOWN, LEFT, RIGHT, UP, Cell, Direction, Grid, manhattan, parse_direction  # noqa: F401
from .config import DIFFICULTY_SIZES, MazeConfig  # noqa: F401
from .generator import Generator, generate  # noqa: F401
from .movement import ANIMATING, IDLE, MovementEngine, ticks_to_converge  # noqa: F401
from .placement import choose_placements  # noqa: F401
from .round import RoundController, RoundState, WinEvent  # noqa: F401
from .scheduling import ManualScheduler, SocketIOScheduler  # noqa: F401
from .solver import PathCache, shortest_path  # noqa: F401

__all__ = [
    "ANIMATING",
    "Cell",
    "DIFFICULTY_SIZES",
    "DIRECTIONS",
    "DOWN",
    "Direction",
    "Generator",
    "Grid",
    "IDLE",
    "LEFT",
    "ManualScheduler",
    "MazeConfig",
    "MovementEngine",
    "PathCache",
    "RIGHT",
    "RoundController",
    "RoundState",
    "SocketIOScheduler",
    "UP",
    "WinEvent",
    "choose_placements",
    "generate",
    "manhattan",
    "parse_direction",
    "shortest_path",
    "ticks_to_converge",
]
