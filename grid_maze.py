"""Integer tile-grid maze variant: generation and move rules only, with no env or renderer."""

from collections import deque
from dataclasses import dataclass, replace

import numpy as np

from controls import direction_delta


CELL_FLOOR = 0
CELL_WALL = 1

START_POS = (1, 1)


def generate_grid_maze(width, height, rng):
    """
    Generates a perfect maze as a (2*height+1, 2*width+1) tile grid using randomized DFS.

    Odd/odd tiles are the maze cells; the tile between two carved cells is the
    passage. The outer border stays solid wall.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Grid maze needs at least one cell per side, got {width}x{height}")

    rows, cols = 2 * height + 1, 2 * width + 1
    grid = np.ones((rows, cols), dtype=np.uint8) * CELL_WALL

    start_x = 2 * int(rng.integers(0, width)) + 1
    start_y = 2 * int(rng.integers(0, height)) + 1
    grid[start_y, start_x] = CELL_FLOOR
    stack = deque([(start_x, start_y)])

    while stack:
        cx, cy = stack[-1]

        neighbors = []
        for dx, dy in [(0, -2), (2, 0), (0, 2), (-2, 0)]:
            nx, ny = cx + dx, cy + dy
            if 0 < nx < cols - 1 and 0 < ny < rows - 1 and grid[ny, nx] == CELL_WALL:
                neighbors.append((nx, ny))

        if neighbors:
            nx, ny = neighbors[rng.integers(len(neighbors))]
            grid[ny, nx] = CELL_FLOOR
            grid[(cy + ny) // 2, (cx + nx) // 2] = CELL_FLOOR
            stack.append((nx, ny))
        else:
            stack.pop()

    return grid


def goal_position(grid):
    rows, cols = grid.shape
    return cols - 2, rows - 2


@dataclass(frozen=True)
class GridMazeState:
    grid: np.ndarray
    player: tuple = START_POS
    won: bool = False


def new_grid_game(width, height, rng):
    return GridMazeState(grid=generate_grid_maze(width, height, rng))


def apply_grid_move(state, direction):
    """Moves the player one tile; walls and the border reject the move."""
    if state.won:
        return state

    dx, dy = direction_delta(direction)
    x, y = state.player[0] + dx, state.player[1] + dy
    rows, cols = state.grid.shape
    if not (0 <= x < cols and 0 <= y < rows) or state.grid[y, x] == CELL_WALL:
        return state

    return replace(state, player=(x, y), won=(x, y) == goal_position(state.grid))
