"""
project: Mouse Maze
module: maze_api.py
License: MIT

Maze round, movement and score API routes.

Each browser session owns one round controller. The browser is the renderer
and the frame clock: after a move it posts ``/api/maze/tick`` once per
animation frame (or passes ``settle`` to finish the transition at once) and
draws the fractional position it gets back.
"""

import uuid

from flask import Blueprint, jsonify, request, session

from mazegame.logging_utils import get_logger
from mazegame.maze import ManualScheduler, MazeConfig, RoundController, parse_direction
from mazegame.services.round_registry import RoundRegistry
from mazegame.services.score_service import ScoreService
from mazegame.services.timer_service import Stopwatch
from mazegame.websockets.validation import START_ROUND, validate

_log = get_logger("mazegame.api")

MAX_FRAMES_PER_TICK = 600


def _new_http_round(key: str) -> RoundController:
    return RoundController(
        config=MazeConfig.from_env(),
        timer=Stopwatch(),
        scores=ScoreService(),
        scheduler=ManualScheduler(),
    )


_rounds = RoundRegistry(_new_http_round)

bp_maze = Blueprint("maze", __name__)


def _session_key() -> str:
    key = session.get("maze_session")
    if not key:
        key = uuid.uuid4().hex
        session["maze_session"] = key
    return key


def _active_entry():
    """Return the session's RoundEntry if it has a running round, else None."""
    entry = _rounds.get(_session_key())
    if entry is None or entry.controller.state is None:
        return None
    return entry


def _no_round():
    return jsonify({"error": "no active round"}), 404


@bp_maze.route("/api/maze/start", methods=["POST"])
def start_round():
    """Start a new round.

    Body JSON: { difficulty: 'easy'|'medium'|'hard' } (optional, defaults to easy)
    Response: round snapshot (walls, player, exit, ...); 400 on unknown difficulty.
    """
    ok, result = validate(request.get_json(silent=True), START_ROUND)
    if not ok:
        return jsonify({"error": f"Invalid {result['field']}: {result['error']}", "code": result["code"]}), 400
    difficulty = result.get("difficulty")
    entry = _rounds.get_or_create(_session_key())
    with entry.lock:
        controller = entry.controller
        if difficulty is not None and difficulty not in controller.config.difficulty_sizes:
            return jsonify({"error": f"unknown difficulty: {difficulty}"}), 400
        controller.start_round(difficulty)
        return jsonify(controller.snapshot())


@bp_maze.route("/api/maze/restart", methods=["POST"])
def restart_round():
    """Start a fresh round at the current difficulty."""
    entry = _active_entry()
    if entry is None:
        return _no_round()
    with entry.lock:
        entry.controller.restart()
        return jsonify(entry.controller.snapshot())


@bp_maze.route("/api/maze/state")
def round_state():
    """Return the current round snapshot without changing anything."""
    entry = _active_entry()
    if entry is None:
        return _no_round()
    with entry.lock:
        return jsonify(entry.controller.snapshot())


@bp_maze.route("/api/maze/move", methods=["POST"])
def move():
    """Submit a move intent.

    Body JSON: { dir: 'up'|'down'|'left'|'right', settle?: bool }
    Response: { accepted: bool, state: <snapshot>, wins: [<win event>...] }
    An empty dir is a no-op; an unknown one is a 400.
    Blocked moves and moves during an animation are accepted=false, not errors.
    """
    entry = _active_entry()
    if entry is None:
        return _no_round()
    payload = request.get_json(silent=True) or {}
    raw = payload.get("dir", "") if isinstance(payload, dict) else ""
    if not isinstance(raw, str):
        return jsonify({"error": "dir must be a string"}), 400
    controller = entry.controller
    with entry.lock:
        if not raw.strip():
            return jsonify({"accepted": False, "state": controller.snapshot(), "wins": []})
        if parse_direction(raw) is None:
            return jsonify({"error": f"invalid direction: {raw}"}), 400
        wins_before = len(controller.history)
        accepted = controller.move_intent(raw)
        if accepted and payload.get("settle"):
            controller.scheduler.run_until_idle()
        wins = [w.to_dict() for w in controller.history[wins_before:]]
        return jsonify({"accepted": accepted, "state": controller.snapshot(), "wins": wins})


@bp_maze.route("/api/maze/tick", methods=["POST"])
def tick():
    """Advance the running animation.

    Body JSON: { frames?: int } (default 1, capped)
    Response: { frames: <frames run>, state: <snapshot>, wins: [<win event>...] }
    """
    entry = _active_entry()
    if entry is None:
        return _no_round()
    payload = request.get_json(silent=True) or {}
    frames = payload.get("frames", 1) if isinstance(payload, dict) else 1
    try:
        frames = int(frames)
    except (TypeError, ValueError):
        return jsonify({"error": "frames must be an int"}), 400
    frames = max(0, min(frames, MAX_FRAMES_PER_TICK))
    controller = entry.controller
    with entry.lock:
        wins_before = len(controller.history)
        ran = controller.tick(frames)
        wins = [w.to_dict() for w in controller.history[wins_before:]]
        return jsonify({"frames": ran, "state": controller.snapshot(), "wins": wins})


@bp_maze.route("/api/maze/debug", methods=["POST"])
def toggle_debug():
    """Toggle the solver-path overlay included in snapshots."""
    entry = _active_entry()
    if entry is None:
        return _no_round()
    with entry.lock:
        enabled = entry.controller.toggle_debug_overlay()
        return jsonify({"debug": enabled, "state": entry.controller.snapshot()})


@bp_maze.route("/api/maze/path")
def solution_path():
    """Return the solver path from the mouse to the cheese (ignores the overlay flag)."""
    entry = _active_entry()
    if entry is None:
        return _no_round()
    with entry.lock:
        path = entry.controller.solution_path()
        return jsonify({"path": [list(p) for p in path], "length": max(0, len(path) - 1)})


@bp_maze.route("/api/maze/scores")
def scores():
    """Best completion time per difficulty: { scores: { easy: 12.3 | null, ... } }"""
    config = MazeConfig.from_env()
    service = ScoreService()
    return jsonify({"scores": service.all_best(config.difficulty_sizes)})


@bp_maze.route("/api/maze/gen/metrics")
def generation_metrics():
    """Generation metrics for the current round's maze."""
    entry = _active_entry()
    if entry is None:
        return _no_round()
    with entry.lock:
        state = entry.controller.state
        return jsonify(
            {
                "difficulty": state.difficulty,
                "size": [state.rows, state.cols],
                "round": state.round_number,
                "metrics": state.metrics,
            }
        )
