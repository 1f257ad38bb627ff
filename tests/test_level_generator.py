import logging

import pytest

from great_heist.config import HeistConfig
from great_heist.entities import Point, Wall
from great_heist.level.generator import (
    LevelGenerator,
    generate_walls,
    guard_count,
    money_count,
    obstacle_count,
    obstacle_walls,
)
from great_heist.rng import RNGManager


def test_boundary_and_obstacle_walls_for_floor_one():
    walls = generate_walls(1)
    assert walls[:4] == [
        Wall(0, 0, 600, 10),
        Wall(0, 390, 600, 10),
        Wall(0, 0, 10, 400),
        Wall(590, 0, 10, 400),
    ]
    assert len(walls) == 4 + 4
    # seed = 12345 -> first obstacle
    assert walls[4] == Wall(245, 145, 65, 110)
    assert walls[6] == Wall(95, 95, 55, 100)


def test_obstacle_layout_is_fixed_per_floor():
    assert obstacle_walls(3, 600, 400) == obstacle_walls(3, 600, 400)
    assert obstacle_walls(3, 600, 400) != obstacle_walls(4, 600, 400)


@pytest.mark.parametrize(
    "floor,obstacles,guards,bills",
    [(1, 4, 1, 7), (2, 5, 2, 9), (5, 8, 3, 15), (6, 8, 4, 17), (12, 8, 4, 29)],
)
def test_counts_scale_with_floor(floor, obstacles, guards, bills):
    assert obstacle_count(floor) == obstacles
    assert guard_count(floor) == guards
    assert money_count(floor) == bills

    layout = LevelGenerator(HeistConfig(seed=7)).generate(floor)
    assert len(layout.walls) == 4 + obstacles
    assert len(layout.guards) == guards
    assert len(layout.money) == bills


def test_money_placement_avoids_walls():
    cfg = HeistConfig(seed=99)
    layout = LevelGenerator(cfg).generate(4)
    for m in layout.money:
        assert m.value == 400
        assert m.collected is False
        assert 40 <= m.pos.x < 560 and 40 <= m.pos.y < 360
        assert not any(w.contains_with_margin(m.pos, cfg.money_margin) for w in layout.walls)
    assert len({m.id for m in layout.money}) == len(layout.money)


def test_guard_patrols_are_horizontal_and_in_range():
    layout = LevelGenerator(HeistConfig(seed=3)).generate(6)
    for g in layout.guards:
        start, end = g.path
        assert g.pos == start
        assert g.current_path_index == 0
        assert g.speed == pytest.approx(1.5 + 0.2 * 6)
        assert 200 <= start.x < 500 and 100 <= start.y < 300
        assert end.y == start.y
        assert 100 <= end.x - start.x < 200


def test_password_door_and_spawn():
    layout = LevelGenerator(HeistConfig(seed=5)).generate(2)
    assert len(layout.password) == 4 and layout.password.isdigit()
    assert 1000 <= int(layout.password) <= 9999
    assert layout.door_pos == Point(550, 350)
    assert layout.spawn == Point(50, 50)


def test_seeded_generation_is_reproducible():
    a = LevelGenerator(HeistConfig(), RNGManager("heist")).generate(3)
    b = LevelGenerator(HeistConfig(), RNGManager("heist")).generate(3)
    assert a == b


def test_regenerating_a_floor_gives_a_fresh_layout():
    gen = LevelGenerator(HeistConfig(seed=11))
    first = gen.generate(2, attempt=0)
    retry = gen.generate(2, attempt=1)
    assert first.walls == retry.walls
    assert [m.pos for m in first.money] != [m.pos for m in retry.money]


def test_unseeded_generation_varies_between_calls():
    gen = LevelGenerator(HeistConfig())
    a = gen.generate(1)
    b = gen.generate(1)
    assert [m.pos for m in a.money] != [m.pos for m in b.money]


def test_invalid_floor_rejected():
    with pytest.raises(ValueError):
        LevelGenerator().generate(0)


def test_money_placement_gives_up_after_bounded_attempts(caplog):
    cfg = HeistConfig(seed=1, placement_attempts=5)
    gen = LevelGenerator(cfg)
    everything = [Wall(0, 0, 600, 400)]
    rng = gen.rng_manager.context_rng("test")
    with caplog.at_level(logging.WARNING):
        bills = gen.place_money(1, everything, rng)
    assert len(bills) == money_count(1)
    assert "No clear money placement" in caplog.text


def test_spawn_moves_off_a_blocking_wall():
    cfg = HeistConfig()
    gen = LevelGenerator(cfg)
    walls = generate_walls(1, cfg) + [Wall(40, 40, 60, 60)]
    spawn = gen.find_spawn(walls)
    assert spawn != Point(cfg.spawn_x, cfg.spawn_y)
    assert not any(w.overlaps_box(spawn.x, spawn.y, cfg.player_size) for w in walls)
