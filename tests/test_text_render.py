from mazegame.maze import Grid, generate, shortest_path
from mazegame.maze.text_render import grid_to_chars, render_text
from tests.maze_test_utils import corridor


def test_walled_grid_render():
    text = render_text(Grid.walled(2, 2))
    assert text.splitlines() == ["#####", "# # #", "#####", "# # #", "#####"]


def test_corridor_with_markers_and_path():
    grid = corridor(3)
    path = shortest_path(grid, (0, 0), (2, 0))
    text = render_text(grid, start=(0, 0), exit_pos=(2, 0), path=path)
    assert text.splitlines() == ["#######", "#S...E#", "#######"]


def test_player_marker_overrides_path():
    grid = corridor(3)
    text = render_text(grid, start=(0, 0), exit_pos=(2, 0), path=[(0, 0), (1, 0), (2, 0)], player=(1, 0))
    assert text.splitlines()[1] == "#S.M.E#"


def test_render_dimensions_and_open_cells():
    grid = generate(4, 6, seed=3)
    chars = grid_to_chars(grid)
    assert len(chars) == 9
    assert all(len(row) == 13 for row in chars)
    # a perfect maze opens exactly rows*cols - 1 wall slots between cells
    between = sum(
        1
        for y in range(1, 8)
        for x in range(1, 12)
        if (x % 2) != (y % 2) and chars[y][x] == " "
    )
    assert between == 23
