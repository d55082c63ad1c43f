from collections import namedtuple


CELL_SIZE = 40
PLAYER_SIZE = 20
WALL_WIDTH = 2
COIN_RADIUS = 5
TRAP_RADIUS = 8

COLOR_WALL = (26, 26, 26)
COLOR_GOAL = (59, 130, 246)
COLOR_COIN = (255, 215, 0)
COLOR_TRAP = (255, 0, 0)
COLOR_WATER = (0, 127, 255, 77)
COLOR_ENEMY = (239, 68, 68)
COLOR_PLAYER = (76, 175, 80)

# kind: "line" | "rect" | "circle" | "overlay"
# points: line -> (start, end); others -> (anchor,) where anchor is top-left or centre
# size: line width, circle radius, or (width, height)
DrawOp = namedtuple("DrawOp", ["kind", "color", "points", "size"])


def _wall_ops(cell, cell_size):
    left, top = cell.x * cell_size, cell.y * cell_size
    right, bottom = left + cell_size, top + cell_size
    segments = {
        "top": ((left, top), (right, top)),
        "right": ((right, top), (right, bottom)),
        "bottom": ((left, bottom), (right, bottom)),
        "left": ((left, top), (left, bottom)),
    }
    return [
        DrawOp("line", COLOR_WALL, segments[side], WALL_WIDTH)
        for side in ("top", "right", "bottom", "left")
        if cell.walls[side]
    ]


def _center(pos, cell_size):
    return (pos[0] * cell_size + cell_size // 2, pos[1] * cell_size + cell_size // 2)


def project(state, cell_size=CELL_SIZE):
    """Turns a GameState into an ordered list of drawing instructions for the board."""
    ops = []
    for row in state.maze:
        for cell in row:
            ops.extend(_wall_ops(cell, cell_size))

            if cell.is_goal:
                inset = int(cell_size * 0.2)
                ops.append(DrawOp(
                    "rect", COLOR_GOAL,
                    ((cell.x * cell_size + inset, cell.y * cell_size + inset),),
                    (int(cell_size * 0.6), int(cell_size * 0.6)),
                ))
            if cell.has_coin:
                ops.append(DrawOp("circle", COLOR_COIN, (_center((cell.x, cell.y), cell_size),), COIN_RADIUS))
            if cell.has_trap and state.traps_visible:
                ops.append(DrawOp("circle", COLOR_TRAP, (_center((cell.x, cell.y), cell_size),), TRAP_RADIUS))

    if state.has_water_hazard and state.water_level > 0:
        board = state.size * cell_size
        water_height = int(board * state.water_level / 100)
        ops.append(DrawOp("overlay", COLOR_WATER, ((0, board - water_height),), (board, water_height)))

    if state.enemy is not None:
        ops.append(DrawOp("circle", COLOR_ENEMY, (_center(state.enemy, cell_size),), PLAYER_SIZE // 2))

    ops.append(DrawOp("circle", COLOR_PLAYER, (_center(state.player, cell_size),), PLAYER_SIZE // 2))
    return ops
