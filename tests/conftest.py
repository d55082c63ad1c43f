"""Shared fixtures for the maze game tests."""

import numpy as np
import pytest

from game_state import GameState
from maze_generator import Cell, remove_wall


def closed_maze(size):
    """A size x size maze with every wall standing and nothing on it."""
    return [[Cell(x, y) for x in range(size)] for y in range(size)]


def corridor_maze(size):
    """Every row is an open left-to-right corridor, joined by a single column at x=0."""
    maze = closed_maze(size)
    for y in range(size):
        for x in range(size - 1):
            remove_wall(maze, x, y, "right")
        if y < size - 1:
            remove_wall(maze, 0, y, "bottom")
    return maze


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def make_state():
    def _make(maze=None, size=10, **kwargs):
        if maze is None:
            maze = corridor_maze(size)
        kwargs.setdefault("player", (0, 0))
        return GameState(maze=maze, size=len(maze), **kwargs)

    return _make
