from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..config import DEFAULT_CONFIG, HeistConfig
from ..entities import Guard, Money, Point, Wall
from ..rng import RNGManager

logger = logging.getLogger(__name__)


OBSTACLE_SEED_FACTOR = 12345
MAX_OBSTACLES = 8
MAX_GUARDS = 4


@dataclass(frozen=True)
class FloorLayout:
    """Everything a floor needs besides the carried-over run progress."""

    floor: int
    walls: Tuple[Wall, ...]
    money: Tuple[Money, ...]
    guards: Tuple[Guard, ...]
    password: str
    door_pos: Point
    spawn: Point


def boundary_walls(width: float, height: float, thickness: float) -> List[Wall]:
    return [
        Wall(0, 0, width, thickness),
        Wall(0, height - thickness, width, thickness),
        Wall(0, 0, thickness, height),
        Wall(width - thickness, 0, thickness, height),
    ]


def obstacle_count(floor: int) -> int:
    return min(3 + floor, MAX_OBSTACLES)


def guard_count(floor: int) -> int:
    return min(1 + floor // 2, MAX_GUARDS)


def money_count(floor: int) -> int:
    return 5 + 2 * floor


def guard_speed(floor: int) -> float:
    return 1.5 + 0.2 * floor


def obstacle_walls(floor: int, width: int, height: int) -> List[Wall]:
    """Interior obstacles for ``floor``.

    Uses a fixed arithmetic seed so the layout of a floor is identical on
    every run, independent of any RNG.
    """
    seed = floor * OBSTACLE_SEED_FACTOR
    walls: List[Wall] = []
    for i in range(obstacle_count(floor)):
        x = 50 + (seed + i * 150) % (width - 150)
        y = 50 + (seed + i * 100) % (height - 150)
        w = 20 + (seed * (i + 1)) % 100
        h = 20 + (seed * (i + 2)) % 100
        walls.append(Wall(x, y, w, h))
    return walls


def generate_walls(floor: int, config: HeistConfig = DEFAULT_CONFIG) -> List[Wall]:
    walls = boundary_walls(config.canvas_width, config.canvas_height, config.wall_thickness)
    walls.extend(obstacle_walls(floor, config.canvas_width, config.canvas_height))
    return walls


def generate_password(rng: random.Random) -> str:
    return str(rng.randint(1000, 9999))


class LevelGenerator:
    """Builds floors: a fixed wall layout plus randomised guards, money and code.

    Randomness is drawn from ``rng_manager``; a seeded manager makes
    ``generate(floor, attempt)`` reproducible, an unseeded one gives a fresh
    layout on every call (which is what a timeout reset wants).
    """

    def __init__(self, config: HeistConfig = DEFAULT_CONFIG, rng_manager: Optional[RNGManager] = None) -> None:
        self.config = config
        self.rng_manager = rng_manager or RNGManager(config.seed)

    def generate(self, floor: int, attempt: int = 0) -> FloorLayout:
        if floor < 1:
            raise ValueError(f"Floor must be >= 1, got {floor}")
        logger.info("Generating floor %d (attempt %d)", floor, attempt)
        rng = self.rng_manager.context_rng("floor", floor, attempt)
        cfg = self.config

        walls = generate_walls(floor, cfg)
        money = self.place_money(floor, walls, rng)
        guards = self.place_guards(floor, rng)
        password = generate_password(rng)
        door = Point(cfg.canvas_width - cfg.door_inset, cfg.canvas_height - cfg.door_inset)
        spawn = self.find_spawn(walls)

        logger.debug(
            "Floor %d: %d walls, %d money, %d guards, door=%s, spawn=%s",
            floor,
            len(walls),
            len(money),
            len(guards),
            door,
            spawn,
        )
        return FloorLayout(
            floor=floor,
            walls=tuple(walls),
            money=tuple(money),
            guards=tuple(guards),
            password=password,
            door_pos=door,
            spawn=spawn,
        )

    def place_guards(self, floor: int, rng: random.Random) -> List[Guard]:
        cfg = self.config
        guards: List[Guard] = []
        for i in range(guard_count(floor)):
            start = Point(
                200 + rng.random() * (cfg.canvas_width - 300),
                100 + rng.random() * (cfg.canvas_height - 200),
            )
            path_width = 100 + rng.random() * 100
            guards.append(
                Guard(
                    id=f"guard-{i}",
                    pos=start,
                    path=(start, Point(start.x + path_width, start.y)),
                    current_path_index=0,
                    speed=guard_speed(floor),
                )
            )
        return guards

    def place_money(self, floor: int, walls: Sequence[Wall], rng: random.Random) -> List[Money]:
        """Scatter bills away from walls by rejection sampling.

        Sampling is capped at ``placement_attempts`` draws per bill; when the cap
        is hit the last draw is kept as is.
        """
        money: List[Money] = []
        for i in range(money_count(floor)):
            pos = self._sample_clear_point(walls, rng)
            money.append(Money(id=f"money-{i}", pos=pos, value=100 * floor))
        return money

    def _sample_clear_point(self, walls: Sequence[Wall], rng: random.Random) -> Point:
        cfg = self.config
        pos = Point(0, 0)
        for _ in range(cfg.placement_attempts):
            pos = Point(
                40 + rng.random() * (cfg.canvas_width - 80),
                40 + rng.random() * (cfg.canvas_height - 80),
            )
            if not any(w.contains_with_margin(pos, cfg.money_margin) for w in walls):
                return pos
        logger.warning(
            "No clear money placement after %d attempts; using unconstrained point %s",
            cfg.placement_attempts,
            pos,
        )
        return pos

    def find_spawn(self, walls: Sequence[Wall]) -> Point:
        """Return the configured spawn, or the first clear footprint if a wall covers it."""
        cfg = self.config
        size = cfg.player_size
        preferred = Point(cfg.spawn_x, cfg.spawn_y)
        if not any(w.overlaps_box(preferred.x, preferred.y, size) for w in walls):
            return preferred

        lo = cfg.wall_thickness
        max_x = cfg.canvas_width - cfg.wall_thickness - size
        max_y = cfg.canvas_height - cfg.wall_thickness - size
        y = lo
        while y <= max_y:
            x = lo
            while x <= max_x:
                if not any(w.overlaps_box(x, y, size) for w in walls):
                    logger.debug("Spawn %s blocked; relocated to (%s, %s)", preferred, x, y)
                    return Point(x, y)
                x += 10
            y += 10
        logger.warning("No clear spawn found; keeping %s", preferred)
        return preferred


__all__ = [
    "FloorLayout",
    "LevelGenerator",
    "boundary_walls",
    "obstacle_walls",
    "generate_walls",
    "generate_password",
    "obstacle_count",
    "guard_count",
    "money_count",
    "guard_speed",
]
