"""
Simulation core: immutable snapshots, the per-tick transition and commands.

The session and driver loop live in ``engine.session`` and ``engine.loop``.
"""
from .events import GameEvent, command_events, tick_events
from .game_state import GamePhase, GameState, exit_hint
from .intent import IDLE, Command, CommandKind, Direction, MovementIntent
from .simulation import Simulation

__all__ = [
    "GameEvent",
    "GamePhase",
    "GameState",
    "exit_hint",
    "IDLE",
    "Command",
    "CommandKind",
    "Direction",
    "MovementIntent",
    "Simulation",
    "command_events",
    "tick_events",
]
