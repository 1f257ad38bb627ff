from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set

from ..engine.intent import Command, Direction, MovementIntent
from .actions import InputAction, InputEvent
from .mapping import InputMapper

logger = logging.getLogger(__name__)


_MOVES: Dict[InputAction, Direction] = {
    InputAction.MOVE_UP: Direction.UP,
    InputAction.MOVE_DOWN: Direction.DOWN,
    InputAction.MOVE_LEFT: Direction.LEFT,
    InputAction.MOVE_RIGHT: Direction.RIGHT,
}


class InputDevice:
    """Held-key state plus a queue of pending commands.

    One device belongs to one session. Backends push key events in; the
    session reads a MovementIntent and drains commands once per tick.
    """

    def __init__(self, mapper: Optional[InputMapper] = None) -> None:
        self.mapper = mapper or InputMapper.default()
        self._held: Set[Direction] = set()
        self._pending: List[Command] = []

    def key_event(self, key: str | int, pressed: bool, source: str = "keyboard") -> Optional[InputEvent]:
        """Translate and handle a raw key; returns the logical event if the key is bound."""
        event = self.mapper.on_key_event(key, pressed, source=source)
        if event is not None:
            self.handle(event)
        return event

    def handle(self, event: InputEvent) -> None:
        direction = _MOVES.get(event.action)
        if direction is not None:
            if event.pressed:
                self._held.add(direction)
            else:
                self._held.discard(direction)
            return
        if not event.pressed:
            return
        command = self._command_for(event)
        if command is not None:
            logger.debug("Queued %s from %s", command.kind.value, event.source)
            self._pending.append(command)

    @staticmethod
    def _command_for(event: InputEvent) -> Optional[Command]:
        action = event.action
        if action is InputAction.PAUSE:
            return Command.toggle_pause()
        if action is InputAction.RESTART:
            return Command.restart()
        if action is InputAction.CONFIRM:
            return Command.submit_code()
        if action is InputAction.BACK:
            return Command.abort_terminal()
        if action is InputAction.DELETE:
            return Command.delete_digit()
        if action is InputAction.TYPE_DIGIT and event.value:
            return Command.enter_digit(event.value)
        return None

    def intent(self) -> MovementIntent:
        return MovementIntent.from_directions(self._held)

    def drain_commands(self) -> List[Command]:
        pending, self._pending = self._pending, []
        return pending

    def release_all(self) -> None:
        """Forget held keys, e.g. when the window loses focus."""
        self._held.clear()


__all__ = ["InputDevice"]
