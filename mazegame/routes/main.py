"""
project: Mouse Maze
module: main.py
License: MIT

Service index and health routes.
"""

from flask import Blueprint, jsonify

from mazegame import __version__
from mazegame.maze import DIRECTIONS, MazeConfig

bp_main = Blueprint("main", __name__)


@bp_main.route("/")
def index():
    """Describe the game service so a client can discover its options."""
    config = MazeConfig.from_env()
    return jsonify(
        {
            "name": "Mouse Maze",
            "version": __version__,
            "difficulties": config.difficulty_sizes,
            "default_difficulty": config.default_difficulty,
            "directions": [d.name for d in DIRECTIONS],
            "animation": {
                "fraction": config.interpolation_fraction,
                "epsilon": config.epsilon,
                "frame_interval": config.frame_interval,
            },
        }
    )


@bp_main.route("/healthz")
def healthz():
    return jsonify({"ok": True})
