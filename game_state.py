from dataclasses import dataclass, replace

from controls import direction_delta
from maze_generator import direction_between, generate_maze


MAZE_SIZE = 10

COIN_POINTS = 1
GOAL_POINTS = 5

TRAP_BLINK_MS = 500
WATER_TICK_MS = 100
WATER_RISE_PER_TICK = 0.5
WATER_MAX_LEVEL = 100
ENEMY_MOVE_MS = 1000

WATER_UNLOCK_WINS = 5
ENEMY_UNLOCK_WINS = 10


@dataclass(frozen=True)
class GameState:
    """
    One snapshot of a running game.

    Transitions never mutate a snapshot or its cells; they return a new one and
    copy whatever cell they change. Callers must treat `maze` as read-only.
    """

    player: tuple
    maze: list
    size: int
    enemy: tuple = None
    score: int = 0
    game_over: bool = False
    won: bool = False
    games_won: int = 0
    water_level: float = 0.0
    has_water_hazard: bool = False
    has_enemy_hazard: bool = False
    traps_visible: bool = True
    last_message: str = ""

    @property
    def finished(self):
        return self.game_over or self.won

    def cell_at(self, x, y):
        assert 0 <= x < self.size and 0 <= y < self.size, f"cell ({x}, {y}) outside {self.size}x{self.size} maze"
        return self.maze[y][x]


def new_game(rng, size=MAZE_SIZE, games_won=0, score=0):
    """Fresh snapshot at the origin; hazards unlock from the number of games already won."""
    has_water_hazard = games_won >= WATER_UNLOCK_WINS
    has_enemy_hazard = games_won >= ENEMY_UNLOCK_WINS

    message = ""
    if has_enemy_hazard:
        message = "Watch out for the enemy!"
    elif has_water_hazard:
        message = "Water is rising! Hurry up!"

    return GameState(
        player=(0, 0),
        enemy=(size - 1, size - 1) if has_enemy_hazard else None,
        maze=generate_maze(size, rng),
        size=size,
        score=score,
        games_won=games_won,
        has_water_hazard=has_water_hazard,
        has_enemy_hazard=has_enemy_hazard,
        last_message=message,
    )


def reset_game(state, rng, size=None):
    """Starts the next game. Score and the win counter only carry over from a won game."""
    games_won = state.games_won + (1 if state.won else 0)
    score = state.score if state.won else 0
    return new_game(rng, size=state.size if size is None else size, games_won=games_won, score=score)


def _with_cell(maze, cell):
    cell = replace(cell, walls=dict(cell.walls))
    row = list(maze[cell.y])
    row[cell.x] = cell
    rows = list(maze)
    rows[cell.y] = row
    return rows


def apply_move(state, dx, dy):
    """
    Moves the player by (dx, dy) and resolves whatever is on the destination cell.

    Out-of-bounds moves, moves through a wall of the current cell and anything
    that is not a single orthogonal step return the state untouched, as does
    any move once the game is over or won.
    """
    if state.finished:
        return state

    x, y = state.player
    nx, ny = x + dx, y + dy
    if not (0 <= nx < state.size and 0 <= ny < state.size):
        return state

    direction = direction_between(dx, dy)
    if direction is None or state.cell_at(x, y).walls[direction]:
        return state

    destination = state.cell_at(nx, ny)
    maze = state.maze
    score = state.score
    game_over = state.game_over
    won = state.won
    message = ""

    if destination.has_coin:
        score += COIN_POINTS
        maze = _with_cell(maze, replace(destination, has_coin=False))
        message = f"Coin! +{COIN_POINTS}"

    if destination.has_trap and state.traps_visible:
        game_over = True
        message = "Caught by a trap!"

    if destination.is_goal:
        won = True
        score += GOAL_POINTS
        message = f"You won! +{GOAL_POINTS}"

    if state.enemy is not None and state.enemy == (nx, ny):
        game_over = True
        message = "Ran into the enemy!"

    return replace(
        state,
        player=(nx, ny),
        maze=maze,
        score=score,
        game_over=game_over,
        won=won,
        last_message=message,
    )


def move(state, direction):
    """Applies a named move ("up", "down", "left", "right") from keys or on-screen buttons."""
    dx, dy = direction_delta(direction)
    return apply_move(state, dx, dy)


def blink_tick(state):
    return replace(state, traps_visible=not state.traps_visible)


def water_tick(state):
    if not state.has_water_hazard or state.finished:
        return state

    level = state.water_level + WATER_RISE_PER_TICK
    if level >= WATER_MAX_LEVEL:
        return replace(state, water_level=WATER_MAX_LEVEL, game_over=True, last_message="Drowned!")
    return replace(state, water_level=level)


def _sign(value):
    return (value > 0) - (value < 0)


def enemy_tick(state):
    """Steps the enemy one cell towards the player along the axis with the larger gap."""
    if not state.has_enemy_hazard or state.finished or state.enemy is None:
        return state

    ex, ey = state.enemy
    px, py = state.player
    dx, dy = px - ex, py - ey

    # Strict comparison: ties move along y
    if abs(dx) > abs(dy):
        ex += _sign(dx)
    else:
        ey += _sign(dy)

    if (ex, ey) == state.player:
        return replace(state, enemy=(ex, ey), game_over=True, last_message="Caught by the enemy!")
    return replace(state, enemy=(ex, ey))
