from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """A real-valued coordinate in canvas pixel space."""

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def within(self, other: "Point", tolerance: float) -> bool:
        """True when both axis distances to ``other`` are strictly below ``tolerance``."""
        return abs(self.x - other.x) < tolerance and abs(self.y - other.y) < tolerance

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Wall:
    """Axis-aligned, collidable rectangle. ``(x, y)`` is the top-left corner."""

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def overlaps_box(self, x: float, y: float, size: float) -> bool:
        """Strict overlap test against a ``size`` x ``size`` box at top-left ``(x, y)``.

        Touching edges do not count as overlap.
        """
        return x + size > self.x and x < self.right and y + size > self.y and y < self.bottom

    def contains_with_margin(self, p: Point, margin: float) -> bool:
        return (self.x - margin < p.x < self.right + margin) and (self.y - margin < p.y < self.bottom + margin)


@dataclass(frozen=True)
class Money:
    """A collectible. ``pos`` is the centre of the bill."""

    id: str
    pos: Point
    value: int
    collected: bool = False

    def collect(self) -> "Money":
        return replace(self, collected=True)


@dataclass(frozen=True)
class Guard:
    """A patrolling guard walking a cyclic waypoint path.

    ``current_path_index`` points at the waypoint the guard is heading to.
    """

    id: str
    pos: Point
    path: Tuple[Point, ...]
    current_path_index: int
    speed: float

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("Guard path must contain at least one waypoint")
        if not 0 <= self.current_path_index < len(self.path):
            raise ValueError(
                f"current_path_index {self.current_path_index} out of range for path of {len(self.path)}"
            )
        if self.speed <= 0:
            raise ValueError("Guard speed must be positive")

    @property
    def target(self) -> Point:
        return self.path[self.current_path_index]


__all__ = ["Point", "Wall", "Money", "Guard"]
