from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from .actions import InputAction, InputEvent

logger = logging.getLogger(__name__)

DIGITS = "0123456789"


class InputMapper:
    """Rebindable mapping from physical keys/buttons to logical actions.

    Keys are strings normalized to upper case, so any backend (Arcade, a
    browser bridge, a test) only has to translate its key constants to names
    or register aliases for them.

    Example usage:
        mapper = InputMapper.default()
        action = mapper.translate_key("w")   # -> InputAction.MOVE_UP
        evt = mapper.on_key_event("7", pressed=True)  # TYPE_DIGIT, value "7"
    """

    def __init__(self, bindings: Optional[Dict[str, InputAction]] = None) -> None:
        self._bindings: Dict[str, InputAction] = {}
        if bindings:
            for key, action in bindings.items():
                self.bind(key, action)
        self._aliases: Dict[str, str] = {}

    # ---------- Canonicalization ----------
    @staticmethod
    def _normalize(key: str | int) -> Optional[str]:
        """Normalize a key into a canonical uppercase string, or None if unusable."""
        if key is None:
            return None
        if isinstance(key, bool):
            return None
        if isinstance(key, int):
            return str(key)
        if not isinstance(key, str):
            return None
        k = key.strip()
        if not k:
            return None
        return k.upper()

    # ---------- Binding API ----------
    def bind(self, key: str | int, action: InputAction) -> None:
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._bindings[nk] = action

    def bind_many(self, keys: Iterable[str | int], action: InputAction) -> None:
        for k in keys:
            self.bind(k, action)

    def unbind(self, key: str | int) -> None:
        nk = self._normalize(key)
        if nk is not None:
            self._bindings.pop(nk, None)

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Map a backend-specific key (e.g. an Arcade key code) to a canonical name."""
        nk = self._normalize(physical)
        cn = self._normalize(canonical_name)
        if nk and cn:
            self._aliases[nk] = cn

    def canonical(self, key: str | int) -> Optional[str]:
        nk = self._normalize(key)
        if nk is None:
            return None
        return self._aliases.get(nk, nk)

    # ---------- Translation ----------
    def translate_key(self, key: str | int) -> Optional[InputAction]:
        canonical = self.canonical(key)
        if canonical is None:
            return None
        return self._bindings.get(canonical)

    def on_key_event(self, key: str | int, pressed: bool, source: str = "keyboard") -> Optional[InputEvent]:
        """Produce an InputEvent for a key press/release, or None if the key is unbound."""
        action = self.translate_key(key)
        if action is None:
            return None
        value = None
        if action is InputAction.TYPE_DIGIT:
            canonical = self.canonical(key) or ""
            value = canonical[-1] if canonical[-1:].isdigit() else None
        return InputEvent(action=action, pressed=pressed, source=source, value=value)

    # ---------- Defaults ----------
    @classmethod
    def default(cls) -> "InputMapper":
        """Arrows/WASD to move, P pause, R restart, Enter submit, Escape leave, digits type."""
        mapper = cls()

        mapper.bind_many(["UP", "W"], InputAction.MOVE_UP)
        mapper.bind_many(["DOWN", "S"], InputAction.MOVE_DOWN)
        mapper.bind_many(["LEFT", "A"], InputAction.MOVE_LEFT)
        mapper.bind_many(["RIGHT", "D"], InputAction.MOVE_RIGHT)

        mapper.bind("P", InputAction.PAUSE)
        mapper.bind("R", InputAction.RESTART)

        mapper.bind_many(["ENTER", "RETURN", "NUM_ENTER"], InputAction.CONFIRM)
        mapper.set_alias("RET", "ENTER")
        mapper.bind_many(["ESCAPE", "ESC"], InputAction.BACK)
        mapper.bind("BACKSPACE", InputAction.DELETE)

        mapper.bind_many(list(DIGITS), InputAction.TYPE_DIGIT)
        for d in DIGITS:
            mapper.set_alias(f"KEY_{d}", d)
            mapper.set_alias(f"NUM_{d}", d)

        return mapper


__all__ = ["InputMapper"]
