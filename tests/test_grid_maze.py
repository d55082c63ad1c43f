from collections import deque

import numpy as np
import pytest

from grid_maze import (
    CELL_FLOOR,
    CELL_WALL,
    START_POS,
    GridMazeState,
    apply_grid_move,
    generate_grid_maze,
    goal_position,
    new_grid_game,
)


def _flood(grid, start):
    rows, cols = grid.shape
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in [(0, -1), (1, 0), (0, 1), (-1, 0)]:
            nx, ny = x + dx, y + dy
            if 0 <= nx < cols and 0 <= ny < rows and grid[ny, nx] == CELL_FLOOR and (nx, ny) not in seen:
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


@pytest.mark.parametrize("width,height", [(1, 1), (3, 5), (7, 7), (15, 15)])
def test_grid_shape_and_border(width, height):
    grid = generate_grid_maze(width, height, np.random.default_rng(0))
    assert grid.shape == (2 * height + 1, 2 * width + 1)
    assert grid.dtype == np.uint8
    assert (grid[0, :] == CELL_WALL).all()
    assert (grid[-1, :] == CELL_WALL).all()
    assert (grid[:, 0] == CELL_WALL).all()
    assert (grid[:, -1] == CELL_WALL).all()


@pytest.mark.parametrize("seed", range(5))
def test_grid_is_perfect_maze(seed):
    width, height = 9, 6
    grid = generate_grid_maze(width, height, np.random.default_rng(seed))

    # Every odd/odd cell is carved
    assert (grid[1::2, 1::2] == CELL_FLOOR).all()
    # Even/even tiles are pillars and never carved
    assert (grid[0::2, 0::2] == CELL_WALL).all()

    floor = int((grid == CELL_FLOOR).sum())
    cells = width * height
    # Spanning tree: one passage tile per edge, cells - 1 edges
    assert floor == cells + (cells - 1)
    assert len(_flood(grid, START_POS)) == floor


@pytest.mark.parametrize("seed", range(10))
def test_goal_cell_is_always_open(seed):
    grid = generate_grid_maze(15, 15, np.random.default_rng(seed))
    gx, gy = goal_position(grid)
    assert (gx, gy) == (29, 29)
    assert grid[gy, gx] == CELL_FLOOR


def test_invalid_grid_size():
    with pytest.raises(ValueError):
        generate_grid_maze(0, 5, np.random.default_rng(0))


def _straight_grid():
    # Single corridor from (1, 1) to (3, 1): a 2x1 cell maze
    return np.array(
        [
            [1, 1, 1, 1, 1],
            [1, 0, 0, 0, 1],
            [1, 1, 1, 1, 1],
        ],
        dtype=np.uint8,
    )


def test_move_into_wall_is_rejected():
    state = GridMazeState(grid=_straight_grid())
    assert apply_grid_move(state, "up") is state
    assert apply_grid_move(state, "left") is state


def test_reaching_goal_wins_and_latches():
    state = GridMazeState(grid=_straight_grid())
    state = apply_grid_move(state, "right")
    assert state.player == (2, 1)
    assert not state.won

    state = apply_grid_move(state, "right")
    assert state.player == (3, 1)
    assert state.won
    assert apply_grid_move(state, "left") is state


def test_unknown_direction():
    state = GridMazeState(grid=_straight_grid())
    with pytest.raises(ValueError):
        apply_grid_move(state, "north")


def test_new_grid_game_starts_at_origin():
    state = new_grid_game(5, 5, np.random.default_rng(3))
    assert state.player == START_POS
    assert not state.won
    assert state.grid[1, 1] == CELL_FLOOR
