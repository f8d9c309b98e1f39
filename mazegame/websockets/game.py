"""Socket.IO game handlers.

Events:
    - start_round: Begin a round; payload { difficulty? }
    - move_intent: Submit a move; payload { dir }
    - toggle_debug: Flip the solver-path overlay; payload {}

Emits:
    - maze_state: Full round snapshot (walls, player, exit, path when debugging)
    - player_moved: Player part of the snapshot; sent on intents and on every animation frame
    - round_won: Win event { difficulty, elapsed, new_best, round, pos }
    - error: { message, field, code }

Animation frames run on Socket.IO background tasks, one round controller
per connection.
"""

from contextlib import contextmanager

from flask import request
from flask_socketio import emit

from mazegame import app, socketio
from mazegame.logging_utils import log as _log
from mazegame.maze import MazeConfig, RoundController, SocketIOScheduler, parse_direction
from mazegame.services.round_registry import RoundRegistry
from mazegame.services.score_service import ScoreService
from mazegame.services.timer_service import Stopwatch

from .validation import MOVE_INTENT, START_ROUND, TOGGLE_DEBUG, validate


@contextmanager
def _frame_guard(sid):
    entry = _connections.get(sid)
    if entry is None:
        # connection closed mid-animation; drop the frame
        yield False
        return
    with entry.lock, app.app_context():
        yield True


def _player_payload(controller: RoundController, **extra):
    snap = controller.snapshot()
    payload = {"round": snap.get("round"), "player": snap.get("player"), "elapsed": snap.get("elapsed")}
    if snap.get("debug"):
        payload["path"] = snap.get("path")
    payload.update(extra)
    return payload


def _make_scheduler(sid):
    config = MazeConfig.from_env()
    return SocketIOScheduler(
        socketio,
        interval=config.frame_interval,
        guard=lambda: _frame_guard(sid),
        after_frame=lambda: _after_frame(sid),
    )


def _new_socket_round(sid) -> RoundController:
    controller = RoundController(
        config=MazeConfig.from_env(),
        timer=Stopwatch(),
        scores=ScoreService(),
        scheduler=_make_scheduler(sid),
    )

    @controller.on_win
    def _announce(event):
        socketio.emit("round_won", event.to_dict(), to=sid)

    return controller


_connections = RoundRegistry(_new_socket_round)
# sid -> round number last pushed as a full maze_state
_last_round = {}


def _after_frame(sid):
    entry = _connections.get(sid)
    if entry is None:
        return
    controller = entry.controller
    if controller.state is None:
        return
    if _last_round.get(sid) != controller.state.round_number:
        # a win rolled over into a new round during this frame
        _last_round[sid] = controller.state.round_number
        socketio.emit("maze_state", controller.snapshot(), to=sid)
        return
    socketio.emit("player_moved", _player_payload(controller), to=sid)


def _error(event_name, result):
    emit(
        "error",
        {
            "message": f"Invalid {event_name}: {result['error']}",
            "field": result["field"],
            "code": result["code"],
        },
    )


@socketio.on("disconnect")
def handle_disconnect(*_args):
    sid = request.sid
    _connections.discard(sid)
    _last_round.pop(sid, None)


@socketio.on("start_round")
def handle_start_round(data=None):
    ok, result = validate(data, START_ROUND)
    if not ok:
        _error("start_round", result)
        return
    sid = request.sid
    entry = _connections.get_or_create(sid)
    difficulty = result.get("difficulty")
    with entry.lock:
        controller = entry.controller
        if difficulty is not None and difficulty not in controller.config.difficulty_sizes:
            _error("start_round", {"error": "unknown difficulty", "field": "difficulty", "code": "choices"})
            return
        controller.start_round(difficulty)
        _last_round[sid] = controller.state.round_number
        emit("maze_state", controller.snapshot())
    _log.info(event="ws_start_round", sid=sid, difficulty=controller.state.difficulty)


@socketio.on("move_intent")
def handle_move_intent(data=None):
    ok, result = validate(data, MOVE_INTENT)
    if not ok:
        _error("move_intent", result)
        return
    direction = parse_direction(result["dir"])
    if direction is None:
        _error("move_intent", {"error": "not an allowed value", "field": "dir", "code": "choices"})
        return
    entry = _connections.get(request.sid)
    if entry is None or entry.controller.state is None:
        _error("move_intent", {"error": "no active round", "field": "__root__", "code": "state"})
        return
    with entry.lock:
        accepted = entry.controller.move_intent(direction)
        emit("player_moved", _player_payload(entry.controller, accepted=accepted, dir=direction.name))


@socketio.on("toggle_debug")
def handle_toggle_debug(data=None):
    ok, result = validate(data, TOGGLE_DEBUG)
    if not ok:
        _error("toggle_debug", result)
        return
    entry = _connections.get(request.sid)
    if entry is None or entry.controller.state is None:
        _error("toggle_debug", {"error": "no active round", "field": "__root__", "code": "state"})
        return
    with entry.lock:
        entry.controller.toggle_debug_overlay()
        emit("maze_state", entry.controller.snapshot())
