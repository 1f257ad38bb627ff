from __future__ import annotations

import logging
import os
from typing import Any, Optional

from .audio.cues import ArcadeAudioSink, AudioCueListener, AudioSink, LoggingAudioSink
from .config import DEFAULT_CONFIG, HeistConfig
from .engine.game_state import GameState, exit_hint
from .engine.loop import GameEngine, LoopConfig
from .engine.session import HeistSession
from .input.device import InputDevice
from .input.mapping import DIGITS, InputMapper

logger = logging.getLogger(__name__)

ARCADE_KEY_NAMES = (
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "W",
    "A",
    "S",
    "D",
    "P",
    "R",
    "ENTER",
    "RETURN",
    "NUM_ENTER",
    "ESCAPE",
    "BACKSPACE",
)


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def arcade_mapper(key_module: Any) -> InputMapper:
    """Default mapper with aliases from Arcade's integer key codes to key names."""
    mapper = InputMapper.default()
    for name in ARCADE_KEY_NAMES:
        code = getattr(key_module, name, None)
        if code is not None:
            mapper.set_alias(code, name)
    for d in DIGITS:
        for name in (f"KEY_{d}", f"NUM_{d}"):
            code = getattr(key_module, name, None)
            if code is not None:
                mapper.set_alias(code, d)
    return mapper


def build_session(config: HeistConfig, sink: AudioSink, mapper: Optional[InputMapper] = None) -> HeistSession:
    session = HeistSession(config, input_device=InputDevice(mapper))
    session.add_listener(AudioCueListener(sink, volume=config.sfx_volume))
    return session


def summary(state: GameState) -> str:
    outcome = "game over" if state.is_game_over else "in progress"
    return f"floor={state.current_floor}, score={state.score}, time_left={state.time_left:.1f}s, {outcome}"


def run_gui(config: HeistConfig = DEFAULT_CONFIG, max_steps: Optional[int] = None, unthrottled: bool = False) -> int:
    """Run the game in an Arcade window if available, otherwise fall back to headless.

    The window updates at ``config.tick_rate`` so each tick spans one ``config.dt``
    of real time. ``unthrottled`` only applies to the headless fallback.

    Returns:
        Process exit code (0 on success).
    """
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(config, max_steps=max_steps, unthrottled=unthrottled)

    import arcade

    sink: AudioSink = ArcadeAudioSink.from_directory(config.sound_dir) if config.sound_dir else LoggingAudioSink()
    width, height = config.canvas_width, config.canvas_height

    class HeistWindow(arcade.Window):
        def __init__(self) -> None:
            super().__init__(width, height, title="Great Heist", update_rate=config.dt)
            arcade.set_background_color(arcade.color.BLACK)
            self.session = build_session(config, sink, arcade_mapper(arcade.key))
            self.engine = GameEngine(self.session, LoopConfig(tick_rate=0, max_steps=max_steps, stop_on_game_over=False))
            self.engine.start()

        def _rect(self, x: float, y: float, w: float, h: float, color: Any) -> None:
            # Canvas y grows downwards; Arcade's grows upwards.
            arcade.draw_lrbt_rectangle_filled(x, x + w, height - (y + h), height - y, color)

        def on_draw(self):
            self.clear()
            state = self.session.state
            for w in state.walls:
                self._rect(w.x, w.y, w.w, w.h, arcade.color.GRAY)
            for m in state.money:
                if not m.collected:
                    self._rect(m.pos.x - 10, m.pos.y - 6, 20, 12, arcade.color.GREEN)
            station_color = arcade.color.GREEN if state.found_password else arcade.color.RED
            self._rect(config.station_x - 10, config.station_y - 10, 20, 20, station_color)
            door = state.door_pos
            self._rect(door.x - 20, door.y - 20, 40, 40, arcade.color.PURPLE)
            glow = exit_hint(state, config)
            if glow > 0:
                arcade.draw_circle_outline(door.x, height - door.y, 30 + 20 * glow, arcade.color.PURPLE, 2)
            for g in state.guards:
                arcade.draw_circle_filled(g.pos.x, height - g.pos.y, state.player_size / 2, arcade.color.RED)
            p = state.player_pos
            self._rect(p.x, p.y, state.player_size, state.player_size, arcade.color.YELLOW)

            hud = f"Floor {state.current_floor}   ${state.score}   {state.time_left:4.1f}s"
            arcade.draw_text(hud, 16, height - 28, arcade.color.WHITE, 14)
            if state.found_password:
                arcade.draw_text(f"SCANNED CODE: {state.last_password_found}", 16, 12, arcade.color.GREEN, 12)
            if state.show_terminal:
                arcade.draw_text(f"ENTER CODE: {state.code_entry:_<4}", width / 2 - 90, height / 2, arcade.color.WHITE, 18)
            elif state.is_paused:
                arcade.draw_text("PAUSED", width / 2 - 40, height / 2, arcade.color.WHITE, 18)
            elif state.is_game_over:
                arcade.draw_text("BUSTED - press R", width / 2 - 90, height / 2, arcade.color.RED, 18)

        def on_update(self, delta_time: float):
            # Fixed step: the frame's delta_time is not used for the simulation.
            if self.engine.running:
                self.engine.update()
            else:
                self.close()

        def on_key_press(self, symbol: int, modifiers: int):
            if symbol == arcade.key.Q and modifiers & arcade.key.MOD_CTRL:
                self.engine.stop()
                self.close()
                return
            self.session.input_device.key_event(symbol, pressed=True)

        def on_key_release(self, symbol: int, modifiers: int):
            self.session.input_device.key_event(symbol, pressed=False)

        def on_deactivate(self):
            self.session.input_device.release_all()

    window = HeistWindow()
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished: %s", summary(window.session.state))
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1


def run_headless(config: HeistConfig = DEFAULT_CONFIG, max_steps: Optional[int] = 60, unthrottled: bool = False) -> int:
    """Run the simulation in a console loop with an idle player.

    Args:
        max_steps: Stop after N updates; defaults to 60.
        unthrottled: Run ticks back to back instead of pacing them at
            ``config.tick_rate``. The timer still advances by ``config.dt``.
    """
    if max_steps is None:
        # Safety in CI/headless: always bound the loop
        max_steps = 60

    print("Great Heist (headless)")
    print("Press Ctrl+C to exit. Running...\n")

    session = build_session(config, LoggingAudioSink())
    engine = GameEngine(session, LoopConfig(tick_rate=0 if unthrottled else config.tick_rate, max_steps=max_steps))
    try:
        engine.run()
        print(f"Loop complete (steps={engine.step})")
        print(summary(session.state))
        return 0
    except KeyboardInterrupt:
        engine.stop()
        print("Interrupted by user")
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless loop")
        return 1


def run_auto(config: HeistConfig = DEFAULT_CONFIG, max_steps: Optional[int] = None, unthrottled: bool = False) -> int:
    """Run GUI if available and not explicitly overridden, else headless.

    Honors environment overrides:
      - HEIST_HEADLESS=1 forces headless.
      - HEIST_GUI=1 forces GUI (if arcade importable).
    """
    if os.getenv("HEIST_HEADLESS") == "1":
        return run_headless(config, max_steps=max_steps, unthrottled=unthrottled)

    if os.getenv("HEIST_GUI") == "1":
        return run_gui(config, max_steps=max_steps, unthrottled=unthrottled)

    return run_gui(config, max_steps=max_steps, unthrottled=unthrottled)
