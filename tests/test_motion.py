import random

import pytest

from conftest import make_state
from great_heist.entities import Point, Wall
from great_heist.engine.intent import Direction, MovementIntent
from great_heist.engine.simulation import collides, resolve_motion


def test_free_move_in_each_direction(sim, config):
    state = make_state(config, player=(100, 100))
    for direction, expected in [
        (Direction.UP, (100, 95)),
        (Direction.DOWN, (100, 105)),
        (Direction.LEFT, (95, 100)),
        (Direction.RIGHT, (105, 100)),
        (Direction.NONE, (100, 100)),
    ]:
        moved = sim.tick(state, config.dt, MovementIntent.from_direction(direction))
        assert moved.player_pos.as_tuple() == expected


def test_diagonal_sums_axis_deltas(sim, config):
    state = make_state(config, player=(100, 100))
    moved = sim.tick(state, config.dt, MovementIntent(down=True, right=True))
    assert moved.player_pos == Point(105, 105)


def test_opposite_keys_cancel(sim, config):
    state = make_state(config, player=(100, 100))
    moved = sim.tick(state, config.dt, MovementIntent(left=True, right=True, up=True, down=True))
    assert moved.player_pos == Point(100, 100)


def test_wall_blocks_x_but_allows_sliding_in_y(config):
    wall = Wall(82, 40, 20, 100)
    pos = resolve_motion(Point(50, 50), 5, 5, [wall], config)
    assert pos == Point(50, 55)


def test_corner_between_walls_reverts_whole_move(config):
    corner = Wall(82, 82, 20, 20)
    pos = resolve_motion(Point(50, 50), 5, 5, [corner], config)
    assert pos == Point(50, 50)


def test_touching_a_wall_is_not_a_collision(config):
    wall = Wall(85, 0, 10, 400)
    assert collides([wall], 55, 50, config.player_size) is False
    assert resolve_motion(Point(50, 50), 5, 0, [wall], config) == Point(55, 50)
    assert resolve_motion(Point(55, 50), 5, 0, [wall], config) == Point(55, 50)


def test_position_clamped_to_interior_without_walls(config):
    assert resolve_motion(Point(12, 12), -5, -5, [], config) == Point(10, 10)
    assert resolve_motion(Point(558, 358), 5, 5, [], config) == Point(560, 360)


def test_boundary_walls_hold_the_player(sim, config):
    state = make_state(config, player=(10, 10))
    moved = sim.tick(state, config.dt, MovementIntent(up=True, left=True))
    assert moved.player_pos == Point(10, 10)


INTENTS = [
    MovementIntent(up=True),
    MovementIntent(down=True),
    MovementIntent(left=True),
    MovementIntent(right=True),
    MovementIntent(up=True, left=True),
    MovementIntent(up=True, right=True),
    MovementIntent(down=True, left=True),
    MovementIntent(down=True, right=True),
]


@pytest.mark.parametrize("floor", [1, 3, 5, 8])
def test_player_never_ends_a_move_inside_a_wall(sim, config, floor):
    rng = random.Random(floor)
    layout = sim.generator.generate(floor)
    pos = layout.spawn
    assert not collides(layout.walls, pos.x, pos.y, config.player_size)
    intent = rng.choice(INTENTS)
    for i in range(1500):
        if i % 25 == 0:
            intent = rng.choice(INTENTS)
        pos = resolve_motion(pos, *intent.axis_deltas(config.player_speed), layout.walls, config)
        assert not collides(layout.walls, pos.x, pos.y, config.player_size)
