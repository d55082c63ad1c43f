import pygame


# direction name -> (dx, dy), screen coordinates with y growing downwards
DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

# MultiDiscrete movement component: 0=none, 1=up, 2=down, 3=left, 4=right
MOVEMENT_DIRECTIONS = {
    1: "up",
    2: "down",
    3: "left",
    4: "right",
}
DIRECTION_MOVEMENTS = {name: movement for movement, name in MOVEMENT_DIRECTIONS.items()}

KEY_DIRECTIONS = {
    pygame.K_UP: "up",
    pygame.K_w: "up",
    pygame.K_DOWN: "down",
    pygame.K_s: "down",
    pygame.K_LEFT: "left",
    pygame.K_a: "left",
    pygame.K_RIGHT: "right",
    pygame.K_d: "right",
}


def direction_delta(direction):
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown direction: {direction!r}")
    return DIRECTIONS[direction]


def movement_for_key(key):
    """Translates a pygame key code into a MultiDiscrete movement code (0 if unmapped)."""
    return DIRECTION_MOVEMENTS.get(KEY_DIRECTIONS.get(key), 0)
