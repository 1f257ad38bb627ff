from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..engine.events import GameEvent
from ..engine.game_state import GameState

logger = logging.getLogger(__name__)

SOUND_EXTENSIONS = (".wav", ".ogg", ".mp3")


class SoundCue(str, Enum):
    """Short sound effects the presentation layer may play."""

    COLLECT = "collect"
    CODE_FOUND = "code_found"
    PASSWORD_SUCCESS = "password_success"
    PASSWORD_FAIL = "password_fail"
    CAUGHT = "caught"
    TRANSITION = "transition"
    TICK = "tick"


CUE_FOR_EVENT: Dict[GameEvent, SoundCue] = {
    GameEvent.MONEY_COLLECTED: SoundCue.COLLECT,
    GameEvent.CODE_FOUND: SoundCue.CODE_FOUND,
    GameEvent.CODE_ACCEPTED: SoundCue.PASSWORD_SUCCESS,
    GameEvent.CODE_REJECTED: SoundCue.PASSWORD_FAIL,
    GameEvent.FLOOR_RESET: SoundCue.PASSWORD_FAIL,
    GameEvent.TIME_EXPIRED: SoundCue.CAUGHT,
    GameEvent.PLAYER_CAUGHT: SoundCue.CAUGHT,
    GameEvent.FLOOR_ADVANCED: SoundCue.TRANSITION,
    GameEvent.TIMER_WARNING: SoundCue.TICK,
}


class AudioSink(ABC):
    """Something that can make a noise for a cue."""

    @abstractmethod
    def play_cue(self, cue: SoundCue, volume: float) -> None:
        raise NotImplementedError


class LoggingAudioSink(AudioSink):
    """Headless sink: records cues in the log only."""

    def __init__(self) -> None:
        self.played: List[Tuple[SoundCue, float]] = []

    def play_cue(self, cue: SoundCue, volume: float) -> None:
        self.played.append((cue, volume))
        logger.debug("Cue %s (volume=%.2f)", cue.value, volume)


class ArcadeAudioSink(AudioSink):
    """Plays cues through ``arcade.Sound`` objects loaded from sound files.

    Cues without a file stay silent. ``backend`` defaults to the arcade module
    and can be swapped for a fake in tests.
    """

    def __init__(self, paths: Mapping[str, str], backend: Optional[Any] = None) -> None:
        if backend is None:
            import arcade as backend
        self._backend = backend
        self._sounds: Dict[SoundCue, Any] = {}
        for key, path in paths.items():
            try:
                cue = SoundCue(key)
            except ValueError:
                logger.warning("Unknown sound cue %r in audio config", key)
                continue
            try:
                self._sounds[cue] = backend.load_sound(path)
            except Exception:  # noqa: BLE001
                logger.exception("Could not load sound for %s from %s", cue.value, path)

    @classmethod
    def from_directory(cls, directory: str | Path, backend: Optional[Any] = None) -> "ArcadeAudioSink":
        """Load ``<cue>.wav`` / ``.ogg`` / ``.mp3`` files found in ``directory``."""
        root = Path(directory)
        paths: Dict[str, str] = {}
        for cue in SoundCue:
            for ext in SOUND_EXTENSIONS:
                candidate = root / f"{cue.value}{ext}"
                if candidate.is_file():
                    paths[cue.value] = str(candidate)
                    break
        if not paths:
            logger.warning("No sound files found in %s", root)
        return cls(paths, backend=backend)

    def play_cue(self, cue: SoundCue, volume: float) -> None:
        sound = self._sounds.get(cue)
        if sound is None:
            logger.debug("No sound registered for cue %s", cue.value)
            return
        self._backend.play_sound(sound, volume=volume)


class AudioCueListener:
    """Session listener turning game events into sound cues.

    Never raises: sink failures are logged so that audio problems cannot leak
    into the simulation.
    """

    def __init__(self, sink: AudioSink, *, enabled: bool = True, volume: float = 1.0) -> None:
        self.sink = sink
        self.enabled = enabled
        self.volume = max(0.0, min(1.0, volume))

    def __call__(self, event: GameEvent, state: GameState) -> None:
        self.play(event)

    def play(self, event: GameEvent) -> bool:
        """Play the cue for ``event``. Returns True if a cue was handed to the sink."""
        if not self.enabled:
            return False
        cue = CUE_FOR_EVENT.get(event)
        if cue is None:
            return False
        try:
            self.sink.play_cue(cue, self.volume)
            return True
        except Exception:  # noqa: BLE001
            logger.exception("Audio sink failed while playing %s", cue.value)
            return False


__all__ = [
    "SoundCue",
    "CUE_FOR_EVENT",
    "AudioSink",
    "LoggingAudioSink",
    "ArcadeAudioSink",
    "AudioCueListener",
]
