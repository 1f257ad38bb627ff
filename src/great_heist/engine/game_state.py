from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..config import DEFAULT_CONFIG, HeistConfig
from ..entities import Guard, Money, Point, Wall
from ..level.generator import FloorLayout

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    TERMINAL_OPEN = "terminal_open"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a run.

    Renderers, HUDs and audio triggers read it; only the simulation produces
    new ones. ``player_pos`` is the top-left corner of the player's square
    footprint of side ``player_size``.
    """

    player_pos: Point
    current_floor: int
    score: int
    money: Tuple[Money, ...]
    walls: Tuple[Wall, ...]
    guards: Tuple[Guard, ...]
    password: str
    door_pos: Point
    time_left: float
    found_password: bool = False
    is_paused: bool = False
    is_game_over: bool = False
    show_terminal: bool = False
    code_entry: str = ""
    last_password_found: str = ""
    timeout_resets: int = 0
    player_size: float = 30.0

    @classmethod
    def from_layout(
        cls,
        layout: FloorLayout,
        *,
        score: int = 0,
        timeout_resets: int = 0,
        config: HeistConfig = DEFAULT_CONFIG,
    ) -> "GameState":
        """Materialise a fresh floor, carrying over only score and reset count."""
        state = cls(
            player_pos=layout.spawn,
            current_floor=layout.floor,
            score=max(0, score),
            money=layout.money,
            walls=layout.walls,
            guards=layout.guards,
            password=layout.password,
            door_pos=layout.door_pos,
            time_left=config.time_per_floor,
            timeout_resets=timeout_resets,
            player_size=config.player_size,
        )
        logger.info(
            "Floor %d ready: score=%d, %d guards, %d bills",
            state.current_floor,
            state.score,
            len(state.guards),
            len(state.money),
        )
        return state

    @property
    def player_center(self) -> Point:
        half = self.player_size / 2
        return Point(self.player_pos.x + half, self.player_pos.y + half)

    @property
    def is_live(self) -> bool:
        """True when the per-tick simulation may advance."""
        return not (self.is_paused or self.is_game_over or self.show_terminal)

    @property
    def phase(self) -> GamePhase:
        if self.is_game_over:
            return GamePhase.GAME_OVER
        if self.show_terminal:
            return GamePhase.TERMINAL_OPEN
        if self.is_paused:
            return GamePhase.PAUSED
        return GamePhase.ACTIVE

    @property
    def remaining_money(self) -> int:
        return sum(1 for m in self.money if not m.collected)


def exit_hint(state: GameState, config: HeistConfig = DEFAULT_CONFIG) -> float:
    """Strength in [0, 1] of the exit glow shown as the player nears the door."""
    if state.show_terminal or config.hint_distance <= 0:
        return 0.0
    dist = state.player_center.distance_to(state.door_pos)
    if dist >= config.hint_distance:
        return 0.0
    return 1.0 - dist / config.hint_distance


__all__ = ["GameState", "GamePhase", "exit_hint"]
