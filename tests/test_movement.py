import pytest

from mazegame.maze import ANIMATING, DOWN, IDLE, LEFT, RIGHT, UP, ManualScheduler, MovementEngine, ticks_to_converge
from tests.maze_test_utils import corridor


def _engine(grid, start=(0, 0), exit_pos=None, **kwargs):
    scheduler = ManualScheduler()
    exit_pos = exit_pos or (grid.cols - 1, grid.rows - 1)
    return MovementEngine(grid, start, exit_pos, scheduler, **kwargs), scheduler


def test_default_parameters_settle_in_21_frames():
    assert ticks_to_converge() == 21
    assert ticks_to_converge(fraction=1.0) == 1


def test_move_animates_then_commits(corridor_grid):
    engine, scheduler = _engine(corridor_grid)
    assert engine.move(RIGHT) is True
    assert engine.state == ANIMATING
    assert engine.facing == RIGHT
    assert engine.target == (1, 0)
    # settled position does not change mid-animation
    assert engine.position == (0, 0)
    assert scheduler.pending == 1

    scheduler.run_pending()
    assert engine.anim_x == pytest.approx(0.2)
    assert engine.position == (0, 0)

    previous = engine.anim_x
    while scheduler.pending:
        scheduler.run_pending()
        if engine.state == ANIMATING:
            assert previous < engine.anim_x < 1.0
            previous = engine.anim_x
    assert engine.frames == 21
    assert engine.state == IDLE
    assert engine.position == (1, 0)
    assert (engine.anim_x, engine.anim_y) == (1.0, 0.0)


def test_intent_while_animating_is_dropped(corridor_grid):
    engine, scheduler = _engine(corridor_grid)
    assert engine.move(RIGHT)
    assert engine.move(RIGHT) is False
    assert scheduler.pending == 1
    scheduler.run_until_idle()
    assert engine.position == (1, 0)
    assert scheduler.pending == 0


def test_blocked_move_leaves_engine_idle(corridor_grid):
    engine, scheduler = _engine(corridor_grid)
    assert engine.move(UP) is False
    assert engine.move(DOWN) is False
    # boundary
    assert engine.move(LEFT) is False
    assert engine.state == IDLE
    assert engine.position == (0, 0)
    assert scheduler.pending == 0
    # facing only changes on accepted moves
    assert engine.facing == DOWN


def test_string_and_unknown_directions(corridor_grid):
    engine, scheduler = _engine(corridor_grid)
    assert engine.move("sideways") is False
    assert engine.move(None) is False
    assert engine.move("Right") is True
    scheduler.run_until_idle()
    assert engine.position == (1, 0)


def test_win_fires_once_and_locks_input():
    grid = corridor(2)
    wins = []
    engine, scheduler = _engine(grid, exit_pos=(1, 0), on_win=wins.append)
    engine.move(RIGHT)
    scheduler.run_until_idle()
    assert wins == [(1, 0)]
    assert engine.won is True
    assert engine.move(LEFT) is False
    assert engine.tick() is False
    assert wins == [(1, 0)]


def test_passing_through_exit_counts_on_settle_only():
    grid = corridor(4)
    wins = []
    settled = []
    engine, scheduler = _engine(grid, exit_pos=(2, 0), on_win=wins.append, on_settled=settled.append)
    engine.move(RIGHT)
    scheduler.run_until_idle()
    assert wins == []
    engine.move(RIGHT)
    for _ in range(20):
        scheduler.run_pending()
    assert wins == []
    scheduler.run_pending()
    assert wins == [(2, 0)]
    assert settled == [(1, 0), (2, 0)]


def test_reset_discards_stale_frames(corridor_grid):
    engine, scheduler = _engine(corridor_grid)
    engine.move(RIGHT)
    engine.reset(corridor_grid, (2, 0), (3, 0))
    scheduler.run_until_idle()
    assert engine.frames == 0
    assert engine.state == IDLE
    assert engine.position == (2, 0)
    assert engine.won is False


def test_snapshot_shape(corridor_grid):
    engine, _ = _engine(corridor_grid, exit_pos=(3, 0))
    engine.move(RIGHT)
    snap = engine.snapshot()
    assert snap["state"] == ANIMATING
    assert snap["pos"] == [0, 0]
    assert snap["target"] == [1, 0]
    assert snap["exit"] == [3, 0]
    assert snap["facing"] == "right"
    assert snap["won"] is False


def test_custom_fraction_converges_faster(corridor_grid):
    engine, scheduler = _engine(corridor_grid, fraction=0.5, epsilon=0.01)
    engine.move(RIGHT)
    assert scheduler.run_until_idle() == ticks_to_converge(fraction=0.5) == 7
    assert engine.position == (1, 0)
