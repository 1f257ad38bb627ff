from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class InputAction(Enum):
    """Logical input actions.

    Game code only ever sees these; physical keys are translated by
    :class:`InputMapper`.
    """

    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    PAUSE = auto()
    RESTART = auto()
    CONFIRM = auto()  # submit the typed code
    BACK = auto()  # leave the terminal
    TYPE_DIGIT = auto()
    DELETE = auto()


@dataclass(frozen=True)
class InputEvent:
    """Represents a press or release of a logical action.

    Attributes:
        action: The logical action triggered.
        pressed: True if this is a key/button down event; False if up.
        source: Optional string describing the source device (e.g., "keyboard", "touch").
        value: The digit typed, for TYPE_DIGIT events.
    """

    action: InputAction
    pressed: bool
    source: Optional[str] = None
    value: Optional[str] = None


__all__ = ["InputAction", "InputEvent"]
