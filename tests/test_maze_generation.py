import pytest

from mazegame.maze import DIRECTIONS, Generator, Grid, generate
from tests.maze_test_utils import ZeroRng, bfs_order

SIZES = [(1, 1), (1, 5), (5, 1), (2, 2), (3, 7), (10, 10), (20, 20), (30, 30)]


@pytest.mark.parametrize("rows,cols", SIZES)
def test_spanning_tree_property(rows, cols):
    for seed in (1, 7, 99):
        grid = generate(rows, cols, seed=seed)
        assert grid.passage_count() == rows * cols - 1
        order = bfs_order(grid, (0, 0))
        assert len(order) == rows * cols
        assert len(set(order)) == len(order)


def test_bfs_reaches_everything_from_any_cell():
    grid = generate(6, 4, seed=3)
    for cell in grid:
        assert len(bfs_order(grid, (cell.x, cell.y))) == 24


def test_wall_pairs_are_symmetric():
    grid = generate(12, 9, seed=42)
    for cell in grid:
        for d, (nx, ny) in grid.neighbors(cell.x, cell.y):
            other = grid.cell(nx, ny)
            assert cell.has_wall(d) == getattr(other, d.opposite_wall)


def test_boundary_walls_stay_intact():
    grid = generate(8, 11, seed=5)
    for cell in grid:
        for d in DIRECTIONS:
            if not grid.in_bounds(cell.x + d.dx, cell.y + d.dy):
                assert cell.has_wall(d), f"{(cell.x, cell.y)} lost its {d.wall} boundary wall"


def test_same_seed_same_layout():
    a = generate(15, 15, seed=2024)
    b = generate(15, 15, seed=2024)
    c = generate(15, 15, seed=2025)
    assert a.wall_states() == b.wall_states()
    # different seeds almost surely differ on a 15x15 maze
    assert a.wall_states() != c.wall_states()


def test_scripted_zero_rng_layout():
    grid = Generator(10, 10, rng=ZeroRng()).run().grid
    # always taking the first candidate (top, right, bottom, left) runs right along row 0
    for x in range(9):
        assert not grid.cell(x, 0).right
    # then straight down the last column
    for y in range(9):
        assert not grid.cell(9, y).bottom
    # and reproduces exactly on a fresh scripted source
    again = Generator(10, 10, rng=ZeroRng()).run().grid
    assert grid.wall_states() == again.wall_states()
    assert grid.passage_count() == 99


def test_generator_uses_injected_rng():
    rng = ZeroRng()
    generate(4, 4, rng=rng)
    # one choice per carved passage
    assert rng.calls == 15


def test_generation_metrics():
    outputs = Generator(10, 10, seed=11).run()
    m = outputs.metrics
    assert m["cells"] == 100
    assert m["passages"] == 99
    assert m["dead_ends"] == outputs.grid.dead_ends()
    assert m["dead_ends"] >= 1
    assert 1 <= m["max_stack_depth"] <= 99
    assert m["runtime_ms"] >= 0


def test_single_cell_maze():
    outputs = Generator(1, 1, seed=0).run()
    grid = outputs.grid
    assert len(grid) == 1
    assert grid.passage_count() == 0
    assert grid.cell(0, 0).wall_list() == [True, True, True, True]
    assert outputs.metrics["max_stack_depth"] == 0


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-1, 3)])
def test_invalid_dimensions_rejected(rows, cols):
    with pytest.raises(ValueError):
        Generator(rows, cols)
    with pytest.raises(ValueError):
        Grid.walled(rows, cols)
