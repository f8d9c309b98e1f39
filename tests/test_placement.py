import random

import pytest

from mazegame.maze import generate, manhattan
from mazegame.maze.placement import choose_exit, choose_placements, farthest_cell, min_separation
from tests.maze_test_utils import ScriptedRng, ZeroRng


@pytest.mark.parametrize("size", [10, 20, 30])
def test_exit_far_enough_from_start(size):
    grid = generate(size, size, seed=size)
    rng = random.Random(123)
    for _ in range(200):
        start, exit_pos = choose_placements(grid, rng)
        assert grid.in_bounds(*start) and grid.in_bounds(*exit_pos)
        assert start != exit_pos
        assert manhattan(start, exit_pos) >= size // 2


def test_min_separation_uses_longer_side():
    assert min_separation(generate(10, 10, seed=1)) == 5
    assert min_separation(generate(3, 9, seed=1)) == 4
    assert min_separation(generate(1, 1, seed=1)) == 0


def test_fallback_to_farthest_cell_when_sampling_never_succeeds():
    # every sample lands on the start, so the cap is hit with no candidate
    grid = generate(10, 10, rng=ZeroRng())
    start, exit_pos = choose_placements(grid, ZeroRng())
    assert start == (0, 0)
    assert exit_pos == (9, 9)


def test_fallback_keeps_best_candidate_seen():
    grid = generate(10, 10, seed=4)
    # start (0, 0), then a single sample at (1, 0) which is too close
    rng = ScriptedRng([0, 0, 1, 0])
    start, exit_pos = choose_placements(grid, rng, max_attempts=1)
    assert start == (0, 0)
    assert exit_pos == (1, 0)


def test_first_qualifying_sample_wins():
    grid = generate(10, 10, seed=4)
    # (2, 0) is too close, (6, 3) is 9 away
    rng = ScriptedRng([2, 0, 6, 3])
    assert choose_exit(grid, (0, 0), rng) == (6, 3)


def test_single_cell_grid_places_exit_on_start():
    grid = generate(1, 1, seed=0)
    assert choose_placements(grid, random.Random(0)) == ((0, 0), (0, 0))


def test_two_cell_grid_uses_other_cell():
    grid = generate(1, 2, seed=0)
    rng = random.Random(9)
    for _ in range(20):
        start, exit_pos = choose_placements(grid, rng)
        assert {start, exit_pos} == {(0, 0), (1, 0)}


def test_farthest_cell():
    grid = generate(4, 6, seed=8)
    assert farthest_cell(grid, (0, 0)) == (5, 3)
    assert farthest_cell(grid, (5, 3)) == (0, 0)
