from dataclasses import replace

import pytest

from game_clock import GameClock


def test_blink_every_half_second(make_state):
    clock = GameClock()
    state = make_state(size=10)

    state = clock.advance(state, 499)
    assert state.traps_visible
    state = clock.advance(state, 1)
    assert not state.traps_visible
    state = clock.advance(state, 1000)
    assert not state.traps_visible  # toggled twice


def test_water_scenario_two_hundred_ticks(make_state):
    clock = GameClock()
    state = make_state(size=10, has_water_hazard=True)

    state = clock.advance(state, 19900)
    assert state.water_level == pytest.approx(99.5)
    assert not state.game_over

    state = clock.advance(state, 100)
    assert state.water_level == 100
    assert state.game_over


def test_water_with_frame_sized_steps(make_state):
    clock = GameClock()
    state = make_state(size=10, has_water_hazard=True)
    # Thirty 33.3ms frames make one second: ten water ticks
    for _ in range(30):
        state = clock.advance(state, 1000 / 30)
    assert state.water_level == pytest.approx(5.0)


def test_enemy_moves_once_per_second(make_state):
    clock = GameClock()
    state = make_state(size=10, enemy=(9, 9), has_enemy_hazard=True)

    state = clock.advance(state, 999)
    assert state.enemy == (9, 9)
    state = clock.advance(state, 1)
    assert state.enemy == (9, 8)
    state = clock.advance(state, 2000)
    assert state.enemy == (8, 7)


def test_same_instant_ticks_fire_in_task_order(make_state):
    clock = GameClock()
    # Enemy one step from the player; water reaches 100 on the tenth tick
    state = make_state(size=10, player=(0, 0), enemy=(0, 1), has_enemy_hazard=True,
                       has_water_hazard=True, water_level=99.5 - 0.5 * 9)
    state = clock.advance(state, 1000)
    # Water reaches 100 at the same instant the enemy would move; water fires first
    assert state.game_over
    assert state.water_level == 100
    assert state.enemy == (0, 1)


def test_timers_stop_after_game_ends(make_state):
    clock = GameClock()
    state = make_state(size=10, has_water_hazard=True, won=True, water_level=10.0)
    state = clock.advance(state, 5000)
    assert state.water_level == 10.0


def test_disabled_task_restarts_from_zero(make_state):
    clock = GameClock()
    state = make_state(size=10, has_water_hazard=True)
    state = clock.advance(state, 50)

    off = clock.advance(replace(state, has_water_hazard=False), 10)
    assert clock.elapsed["water"] == 0.0

    back_on = clock.advance(replace(off, has_water_hazard=True), 60)
    assert back_on.water_level == 0.0
    back_on = clock.advance(back_on, 40)
    assert back_on.water_level == 0.5


def test_reset_clears_accumulators(make_state):
    clock = GameClock()
    state = clock.advance(make_state(size=10), 400)
    clock.reset()
    state = clock.advance(state, 400)
    assert state.traps_visible


def test_negative_elapsed_time_rejected(make_state):
    with pytest.raises(ValueError):
        GameClock().advance(make_state(size=10), -1)
