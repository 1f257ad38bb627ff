from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from .session import HeistSession

logger = logging.getLogger(__name__)


@dataclass
class LoopConfig:
    """Configuration for the headless driver loop.

    Attributes:
        tick_rate: Target updates per second for throttling. If 0 or None, runs as fast as possible.
            The simulation itself always advances by the session's fixed step.
        max_steps: If provided and > 0, the loop will automatically stop after this many updates.
        stop_on_game_over: Stop once the run ends in GAME_OVER.
    """

    tick_rate: float = 60.0
    max_steps: Optional[int] = None
    stop_on_game_over: bool = True


class GameEngine:
    """Drives a HeistSession at a fixed step.

    The timer is decremented by the session's fixed ``dt`` on every update
    regardless of wall-clock jitter, so runs are reproducible.
    """

    def __init__(self, session: HeistSession, config: Optional[LoopConfig] = None) -> None:
        self.session = session
        self.config = config or LoopConfig()
        self._running: bool = False
        self._step: int = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step(self) -> int:
        return self._step

    def start(self) -> None:
        """Start the engine loop state.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("GameEngine.start() called while already running")
            return
        self._running = True
        self._step = 0
        logger.info("GameEngine started (tick_rate=%s, max_steps=%s)", self.config.tick_rate, self.config.max_steps)

    def stop(self) -> None:
        """Stop the loop gracefully."""
        if not self._running:
            return
        self._running = False
        logger.info("GameEngine stopped at step=%s", self._step)

    def update(self) -> None:
        """Perform a single fixed-step update."""
        if not self._running:
            logger.debug("update() called while not running; ignored")
            return
        state = self.session.update()
        self._step += 1
        logger.debug("Tick #%d (floor=%d, time_left=%.3f)", self._step, state.current_floor, state.time_left)

        if self.config.stop_on_game_over and state.is_game_over:
            logger.info("Run ended on floor %d with score %d", state.current_floor, state.score)
            self.stop()
        elif self.config.max_steps is not None and self._step >= self.config.max_steps:
            self.stop()

    def run(self) -> None:
        """Run a blocking loop until stopped or max_steps reached, throttled to tick_rate."""
        self.start()
        target_dt = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            target_dt = 1.0 / float(self.config.tick_rate)

        while self._running:
            started = time.perf_counter()
            self.update()
            if target_dt > 0:
                remaining = target_dt - (time.perf_counter() - started)
                if remaining > 0:
                    time.sleep(remaining)

        logger.info("Loop complete (steps=%d)", self._step)


__all__ = ["GameEngine", "LoopConfig"]
