import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from great_heist.config import HeistConfig  # noqa: E402
from great_heist.entities import Guard, Money, Point, Wall  # noqa: E402
from great_heist.engine.game_state import GameState  # noqa: E402
from great_heist.engine.simulation import Simulation  # noqa: E402
from great_heist.level.generator import LevelGenerator, boundary_walls  # noqa: E402
from great_heist.rng import RNGManager  # noqa: E402


@pytest.fixture
def config():
    return HeistConfig(seed=1234)


@pytest.fixture
def sim(config):
    return Simulation(config, LevelGenerator(config, RNGManager(config.seed)))


def make_state(
    config,
    *,
    player=(50.0, 50.0),
    walls=None,
    money=(),
    guards=(),
    password="4321",
    **overrides,
):
    """Hand-built floor with only the boundary walls unless told otherwise."""
    if walls is None:
        walls = boundary_walls(config.canvas_width, config.canvas_height, config.wall_thickness)
    fields = dict(
        player_pos=Point(*player),
        current_floor=1,
        score=0,
        money=tuple(money),
        walls=tuple(walls),
        guards=tuple(guards),
        password=password,
        door_pos=Point(config.canvas_width - config.door_inset, config.canvas_height - config.door_inset),
        time_left=config.time_per_floor,
        player_size=config.player_size,
    )
    fields.update(overrides)
    return GameState(**fields)


def parked_guard(x, y, gid="guard-0", speed=1.7):
    """A guard whose only waypoint is where it stands."""
    p = Point(x, y)
    return Guard(id=gid, pos=p, path=(p,), current_path_index=0, speed=speed)
