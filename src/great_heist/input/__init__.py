"""
Input abstraction layer for Great Heist.

Exposes:
- InputAction: Logical input actions used by the game.
- InputEvent: A press/release event for a logical action.
- InputMapper: Rebindable mapping from physical keys to actions.
- InputDevice: Per-session held-key state and command queue.
"""
from .actions import InputAction, InputEvent
from .device import InputDevice
from .mapping import InputMapper

__all__ = [
    "InputAction",
    "InputEvent",
    "InputMapper",
    "InputDevice",
]
