from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Optional

from ..config import DEFAULT_CONFIG, HeistConfig
from .events import GameEvent, command_events, tick_events
from .game_state import GameState
from .intent import IDLE, Command, MovementIntent
from .simulation import Simulation

if TYPE_CHECKING:
    from ..input.device import InputDevice

Listener = Callable[[GameEvent, GameState], None]

logger = logging.getLogger(__name__)


class HeistSession:
    """Owns the current GameState and wires input and listeners around it.

    The session is the only place the snapshot is replaced. Listeners (HUD,
    audio cues) are told about edge-triggered events after each transition;
    a failing listener is logged and never affects the game.
    """

    def __init__(
        self,
        config: HeistConfig = DEFAULT_CONFIG,
        simulation: Optional[Simulation] = None,
        input_device: Optional["InputDevice"] = None,
    ) -> None:
        self.config = config
        self.simulation = simulation or Simulation(config)
        self.input_device = input_device
        self._listeners: List[Listener] = []
        self._state: GameState = self.simulation.new_game()
        self._ticks = 0

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def ticks(self) -> int:
        return self._ticks

    def add_listener(self, listener: Listener) -> None:
        """Subscribe to game events."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, events: List[GameEvent]) -> None:
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event, self._state)
                except Exception:
                    logger.exception("Listener errored on %s", event)

    def command(self, command: Command) -> GameState:
        prev = self._state
        self._state = self.simulation.apply(prev, command)
        self._emit(command_events(command, prev, self._state))
        return self._state

    def update(self, dt: Optional[float] = None, intent: Optional[MovementIntent] = None) -> GameState:
        """Drain pending input commands and advance one tick.

        ``dt`` defaults to the fixed step from the config. An explicit
        ``intent`` takes precedence over the input device's held keys.
        """
        if self.input_device is not None:
            for cmd in self.input_device.drain_commands():
                self.command(cmd)
            if intent is None:
                intent = self.input_device.intent()
        if intent is None:
            intent = IDLE

        prev = self._state
        self._state = self.simulation.tick(prev, self.config.dt if dt is None else dt, intent)
        self._ticks += 1
        self._emit(tick_events(prev, self._state, self.config))
        return self._state

    def restart(self) -> GameState:
        return self.command(Command.restart())


__all__ = ["HeistSession", "Listener"]
