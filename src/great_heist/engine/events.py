from __future__ import annotations

import math
from enum import Enum, auto
from typing import List

from ..config import DEFAULT_CONFIG, HeistConfig
from .game_state import GameState
from .intent import Command, CommandKind


class GameEvent(Enum):
    """Edge-triggered notifications for UI and audio. Purely informational."""

    MONEY_COLLECTED = auto()
    PLAYER_CAUGHT = auto()
    TIME_EXPIRED = auto()
    CODE_FOUND = auto()
    TERMINAL_OPENED = auto()
    CODE_ACCEPTED = auto()
    CODE_REJECTED = auto()
    FLOOR_ADVANCED = auto()
    FLOOR_RESET = auto()
    TIMER_WARNING = auto()
    GAME_RESTARTED = auto()


def _warning_due(prev: float, now: float, config: HeistConfig) -> bool:
    if now >= config.warning_time:
        return False
    if prev >= config.warning_time:
        return True
    return math.floor(prev / config.warning_interval) != math.floor(now / config.warning_interval)


def tick_events(prev: GameState, new: GameState, config: HeistConfig = DEFAULT_CONFIG) -> List[GameEvent]:
    """Events produced by one ``Simulation.tick`` from ``prev`` to ``new``."""
    if new is prev:
        return []
    if new.timeout_resets > prev.timeout_resets:
        return [GameEvent.FLOOR_RESET]
    events: List[GameEvent] = []
    if sum(m.collected for m in new.money) > sum(m.collected for m in prev.money):
        events.append(GameEvent.MONEY_COLLECTED)
    if new.is_game_over and not prev.is_game_over:
        events.append(GameEvent.TIME_EXPIRED if new.time_left <= 0 else GameEvent.PLAYER_CAUGHT)
        return events
    if new.found_password and not prev.found_password:
        events.append(GameEvent.CODE_FOUND)
    if new.show_terminal and not prev.show_terminal:
        events.append(GameEvent.TERMINAL_OPENED)
    if _warning_due(prev.time_left, new.time_left, config):
        events.append(GameEvent.TIMER_WARNING)
    return events


def command_events(command: Command, prev: GameState, new: GameState) -> List[GameEvent]:
    """Events produced by ``Simulation.apply(prev, command)``."""
    if new is prev:
        return []
    kind = command.kind
    if kind is CommandKind.RESTART:
        return [GameEvent.GAME_RESTARTED]
    advanced = new.current_floor > prev.current_floor
    if kind is CommandKind.SUBMIT_CODE:
        if advanced:
            return [GameEvent.CODE_ACCEPTED, GameEvent.FLOOR_ADVANCED]
        return [GameEvent.CODE_REJECTED]
    if kind is CommandKind.ADVANCE_FLOOR and advanced:
        return [GameEvent.FLOOR_ADVANCED]
    return []


__all__ = ["GameEvent", "tick_events", "command_events"]
