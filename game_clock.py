from game_state import (
    ENEMY_MOVE_MS,
    TRAP_BLINK_MS,
    WATER_TICK_MS,
    blink_tick,
    enemy_tick,
    water_tick,
)


# Float slack so 3 x 33.333ms frames still count as a full 100ms tick
TIME_EPSILON = 1e-6


def _always(state):
    return True


def _water_enabled(state):
    return state.has_water_hazard and not state.finished


def _enemy_enabled(state):
    return state.has_enemy_hazard and state.enemy is not None and not state.finished


class GameClock:
    """
    Single authority for the repeating game tasks.

    Every task keeps the time elapsed since it last fired. advance() fires all
    ticks that fall due inside the elapsed window in chronological order; ticks
    due at the same instant fire in task order. A task whose condition turns
    false loses its accumulated time and starts over once re-enabled.
    """

    TASKS = (
        ("blink", TRAP_BLINK_MS, blink_tick, _always),
        ("water", WATER_TICK_MS, water_tick, _water_enabled),
        ("enemy", ENEMY_MOVE_MS, enemy_tick, _enemy_enabled),
    )

    def __init__(self):
        self.elapsed = {}
        self.reset()

    def reset(self):
        self.elapsed = {name: 0.0 for name, _, _, _ in self.TASKS}

    def _active_tasks(self, state):
        active = []
        for name, interval, tick, enabled in self.TASKS:
            if enabled(state):
                active.append((name, interval, tick))
            else:
                self.elapsed[name] = 0.0
        return active

    def advance(self, state, elapsed_ms):
        if elapsed_ms < 0:
            raise ValueError(f"Elapsed time must be non-negative, got {elapsed_ms}")

        budget = float(elapsed_ms)
        while True:
            active = self._active_tasks(state)
            if not active:
                return state

            due_name, due_in, due_tick = None, None, None
            for name, interval, tick in active:
                remaining = interval - self.elapsed[name]
                if due_in is None or remaining < due_in - TIME_EPSILON:
                    due_name, due_in, due_tick = name, remaining, tick

            if due_in > budget + TIME_EPSILON:
                for name, _, _ in active:
                    self.elapsed[name] += budget
                return state

            step = max(due_in, 0.0)
            for name, _, _ in active:
                self.elapsed[name] += step
            budget = max(budget - step, 0.0)

            self.elapsed[due_name] = 0.0
            state = due_tick(state)
