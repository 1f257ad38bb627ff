from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple


class Direction(Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    NONE = "NONE"


@dataclass(frozen=True)
class MovementIntent:
    """Which directions the player is holding this tick.

    Axes are independent, so diagonals are simply two flags at once and
    opposite flags cancel out.
    """

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def from_direction(cls, direction: Direction) -> "MovementIntent":
        return cls(
            up=direction is Direction.UP,
            down=direction is Direction.DOWN,
            left=direction is Direction.LEFT,
            right=direction is Direction.RIGHT,
        )

    @classmethod
    def from_directions(cls, directions: Iterable[Direction]) -> "MovementIntent":
        held = set(directions)
        return cls(
            up=Direction.UP in held,
            down=Direction.DOWN in held,
            left=Direction.LEFT in held,
            right=Direction.RIGHT in held,
        )

    @property
    def is_idle(self) -> bool:
        dx, dy = self.axis_deltas(1.0)
        return dx == 0 and dy == 0

    def axis_deltas(self, speed: float) -> Tuple[float, float]:
        dx = 0.0
        dy = 0.0
        if self.up:
            dy -= speed
        if self.down:
            dy += speed
        if self.left:
            dx -= speed
        if self.right:
            dx += speed
        return dx, dy


IDLE = MovementIntent()


class CommandKind(Enum):
    TOGGLE_PAUSE = "toggle_pause"
    RESTART = "restart"
    SUBMIT_CODE = "submit_code"
    ABORT_TERMINAL = "abort_terminal"
    ADVANCE_FLOOR = "advance_floor"
    ENTER_DIGIT = "enter_digit"
    DELETE_DIGIT = "delete_digit"
    CLEAR_ENTRY = "clear_entry"


@dataclass(frozen=True)
class Command:
    """A discrete request from the input layer.

    ``value`` carries the code for SUBMIT_CODE (``None`` submits whatever was
    typed into the terminal) and the digit for ENTER_DIGIT.
    """

    kind: CommandKind
    value: Optional[str] = None

    @classmethod
    def toggle_pause(cls) -> "Command":
        return cls(CommandKind.TOGGLE_PAUSE)

    @classmethod
    def restart(cls) -> "Command":
        return cls(CommandKind.RESTART)

    @classmethod
    def submit_code(cls, code: Optional[str] = None) -> "Command":
        return cls(CommandKind.SUBMIT_CODE, code)

    @classmethod
    def abort_terminal(cls) -> "Command":
        return cls(CommandKind.ABORT_TERMINAL)

    @classmethod
    def advance_floor(cls) -> "Command":
        return cls(CommandKind.ADVANCE_FLOOR)

    @classmethod
    def enter_digit(cls, digit: str) -> "Command":
        return cls(CommandKind.ENTER_DIGIT, digit)

    @classmethod
    def delete_digit(cls) -> "Command":
        return cls(CommandKind.DELETE_DIGIT)

    @classmethod
    def clear_entry(cls) -> "Command":
        return cls(CommandKind.CLEAR_ENTRY)


__all__ = ["Direction", "MovementIntent", "IDLE", "CommandKind", "Command"]
