import math
from collections import deque
from dataclasses import dataclass, field


COIN_RATIO = 0.10
TRAP_RATIO = 0.05
MIN_MAZE_SIZE = 4

# direction -> (dx, dy)
OFFSETS = {
    "top": (0, -1),
    "right": (1, 0),
    "bottom": (0, 1),
    "left": (-1, 0),
}
OPPOSITE = {"top": "bottom", "right": "left", "bottom": "top", "left": "right"}


def _closed_walls():
    return {"top": True, "right": True, "bottom": True, "left": True}


@dataclass
class Cell:
    x: int
    y: int
    walls: dict = field(default_factory=_closed_walls)
    visited: bool = False
    has_coin: bool = False
    has_trap: bool = False
    is_goal: bool = False

    def is_occupied(self):
        return self.has_coin or self.has_trap or self.is_goal or (self.x == 0 and self.y == 0)


def direction_between(dx, dy):
    """Returns the wall name facing the neighbour at offset (dx, dy), or None."""
    for direction, offset in OFFSETS.items():
        if offset == (dx, dy):
            return direction
    return None


def _unvisited_neighbors(maze, x, y, size):
    neighbors = []
    for direction, (dx, dy) in OFFSETS.items():
        nx, ny = x + dx, y + dy
        if 0 <= nx < size and 0 <= ny < size and not maze[ny][nx].visited:
            neighbors.append((direction, nx, ny))
    return neighbors


def remove_wall(maze, x, y, direction):
    dx, dy = OFFSETS[direction]
    maze[y][x].walls[direction] = False
    maze[y + dy][x + dx].walls[OPPOSITE[direction]] = False


def carve_maze(size, rng):
    """Generates the bare wall layout of a perfect maze using a randomized DFS."""
    maze = [[Cell(x, y) for x in range(size)] for y in range(size)]

    start_x, start_y = int(rng.integers(0, size)), int(rng.integers(0, size))
    maze[start_y][start_x].visited = True
    stack = deque([(start_x, start_y)])

    while stack:
        cx, cy = stack[-1]
        neighbors = _unvisited_neighbors(maze, cx, cy, size)
        if not neighbors:
            stack.pop()
            continue

        # Pick by index; rng.choice would turn the tuples into an array
        direction, nx, ny = neighbors[rng.integers(len(neighbors))]
        remove_wall(maze, cx, cy, direction)
        maze[ny][nx].visited = True
        stack.append((nx, ny))

    return maze


def _place_goal(maze, size):
    # Far corner from the origin, not the farthest cell by path
    max_distance = 0
    goal_x, goal_y = size - 1, size - 1
    for y in range(size):
        for x in range(size):
            distance = abs(x) + abs(y)
            if distance > max_distance:
                max_distance = distance
                goal_x, goal_y = x, y
    maze[goal_y][goal_x].is_goal = True
    return goal_x, goal_y


def _random_free_cell(maze, size, rng):
    while True:
        x, y = int(rng.integers(0, size)), int(rng.integers(0, size))
        if not maze[y][x].is_occupied():
            return maze[y][x]


def generate_maze(size, rng):
    """
    Builds a decorated size x size perfect maze.

    The goal goes on the far corner, then floor(size^2 * COIN_RATIO) coins and
    floor(size^2 * TRAP_RATIO) traps are scattered over free cells. The origin
    cell is never decorated.
    """
    if size < MIN_MAZE_SIZE:
        raise ValueError(f"Maze size must be at least {MIN_MAZE_SIZE}, got {size}")

    maze = carve_maze(size, rng)
    _place_goal(maze, size)

    num_coins = math.floor(size * size * COIN_RATIO)
    num_traps = math.floor(size * size * TRAP_RATIO)
    # Goal and origin take two cells; sampling only terminates if a free cell is left
    assert num_coins + num_traps + 2 < size * size

    for _ in range(num_coins):
        _random_free_cell(maze, size, rng).has_coin = True
    for _ in range(num_traps):
        _random_free_cell(maze, size, rng).has_trap = True

    return maze


def find_goal(maze):
    for row in maze:
        for cell in row:
            if cell.is_goal:
                return cell.x, cell.y
    return None
