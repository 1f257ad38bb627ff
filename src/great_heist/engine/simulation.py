from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional, Sequence, Tuple

from ..config import DEFAULT_CONFIG, HeistConfig
from ..entities import Guard, Money, Point, Wall
from ..level.generator import LevelGenerator
from .game_state import GameState
from .intent import IDLE, Command, CommandKind, MovementIntent

logger = logging.getLogger(__name__)


# ---- Pure helpers ---------------------------------------------------------
def collides(walls: Iterable[Wall], x: float, y: float, size: float) -> bool:
    return any(w.overlaps_box(x, y, size) for w in walls)


def clamp_to_interior(x: float, y: float, config: HeistConfig) -> Point:
    lo = config.wall_thickness
    max_x = config.canvas_width - config.wall_thickness - config.player_size
    max_y = config.canvas_height - config.wall_thickness - config.player_size
    return Point(max(lo, min(max_x, x)), max(lo, min(max_y, y)))


def resolve_motion(
    pos: Point,
    dx: float,
    dy: float,
    walls: Sequence[Wall],
    config: HeistConfig = DEFAULT_CONFIG,
) -> Point:
    """Move a player footprint by ``(dx, dy)`` without entering any wall.

    Each axis is tried on its own so the player slides along walls. If both
    axes pass individually but the diagonal destination still overlaps a
    wall (a corner between two walls), the move is dropped entirely.
    """
    size = config.player_size
    new_x = pos.x + dx
    new_y = pos.y + dy

    if collides(walls, new_x, pos.y, size):
        new_x = pos.x
    if collides(walls, pos.x, new_y, size):
        new_y = pos.y
    if collides(walls, new_x, new_y, size):
        new_x, new_y = pos.x, pos.y

    return clamp_to_interior(new_x, new_y, config)


def collect_money(money: Sequence[Money], center: Point, tolerance: float) -> Tuple[Tuple[Money, ...], int]:
    """Collect every uncollected bill within ``tolerance``; return new list and value gained."""
    gained = 0
    out = []
    for m in money:
        if not m.collected and m.pos.within(center, tolerance):
            gained += m.value
            out.append(m.collect())
        else:
            out.append(m)
    return tuple(out), gained


def advance_guard(guard: Guard, config: HeistConfig = DEFAULT_CONFIG) -> Guard:
    """Walk a guard one tick along its patrol.

    A guard close enough to its waypoint spends the tick turning to the next
    one instead of moving.
    """
    target = guard.target
    dx = target.x - guard.pos.x
    dy = target.y - guard.pos.y
    dist = guard.pos.distance_to(target)

    if dist < config.waypoint_threshold:
        return replace(guard, current_path_index=(guard.current_path_index + 1) % len(guard.path))

    step = min(guard.speed, dist) if config.clamp_guard_overshoot else guard.speed
    return replace(guard, pos=Point(guard.pos.x + dx / dist * step, guard.pos.y + dy / dist * step))


def guard_catches(guards: Iterable[Guard], center: Point, tolerance: float) -> bool:
    return any(g.pos.within(center, tolerance) for g in guards)


# ---- Simulation -----------------------------------------------------------
class Simulation:
    """State transitions for a run.

    ``tick`` advances the live floor by one step; ``apply`` handles discrete
    commands. Both return a new GameState and leave their input untouched.
    Floors are (re)materialised through the injected LevelGenerator.
    """

    def __init__(self, config: HeistConfig = DEFAULT_CONFIG, generator: Optional[LevelGenerator] = None) -> None:
        self.config = config
        self.generator = generator or LevelGenerator(config)

    # ---- Floor lifecycle -------------------------------------------------
    def new_game(self) -> GameState:
        logger.info("Starting new game")
        return GameState.from_layout(self.generator.generate(1), score=0, config=self.config)

    def advance_floor(self, state: GameState) -> GameState:
        next_floor = state.current_floor + 1
        logger.info("Advancing to floor %d with score %d", next_floor, state.score)
        return GameState.from_layout(self.generator.generate(next_floor), score=state.score, config=self.config)

    def reset_floor_after_timeout(self, state: GameState) -> GameState:
        cfg = self.config
        resets = state.timeout_resets + 1
        if cfg.max_timeout_resets is not None and resets > cfg.max_timeout_resets:
            logger.info("Floor %d timed out with no resets left; game over", state.current_floor)
            return replace(state, time_left=0.0, is_game_over=True)
        penalised = max(0, state.score - cfg.timeout_penalty)
        logger.info(
            "Floor %d timed out; score %d -> %d, regenerating (reset #%d)",
            state.current_floor,
            state.score,
            penalised,
            resets,
        )
        layout = self.generator.generate(state.current_floor, attempt=resets)
        return GameState.from_layout(layout, score=penalised, timeout_resets=resets, config=cfg)

    # ---- Per-tick transition ---------------------------------------------
    def tick(self, state: GameState, dt: float, intent: MovementIntent = IDLE) -> GameState:
        if not state.is_live:
            return state
        cfg = self.config

        time_left = state.time_left - max(0.0, dt)
        if time_left <= 0:
            return self.reset_floor_after_timeout(state)

        dx, dy = intent.axis_deltas(cfg.player_speed)
        player_pos = resolve_motion(state.player_pos, dx, dy, state.walls, cfg)
        moved = replace(state, player_pos=player_pos)
        center = moved.player_center

        money, gained = collect_money(state.money, center, cfg.collect_tolerance)
        if gained:
            logger.debug("Collected %d at %s", gained, center)

        guards = tuple(advance_guard(g, cfg) for g in state.guards)
        caught = guard_catches(guards, center, cfg.capture_tolerance)
        if caught:
            logger.info("Player caught on floor %d at %s", state.current_floor, center)

        found = state.found_password
        last_found = state.last_password_found
        if not found and center.within(Point(cfg.station_x, cfg.station_y), cfg.station_tolerance):
            found = True
            last_found = state.password
            logger.debug("Access code found on floor %d", state.current_floor)

        show_terminal = state.show_terminal
        code_entry = state.code_entry
        if not caught and center.within(state.door_pos, cfg.door_tolerance):
            show_terminal = True
            code_entry = ""

        return replace(
            moved,
            time_left=time_left,
            money=money,
            score=state.score + gained,
            guards=guards,
            is_game_over=caught,
            found_password=found,
            last_password_found=last_found,
            show_terminal=show_terminal,
            code_entry=code_entry,
        )

    def step(
        self,
        state: GameState,
        dt: float,
        intent: MovementIntent = IDLE,
        commands: Iterable[Command] = (),
    ) -> GameState:
        """Apply queued commands, then advance one tick."""
        for command in commands:
            state = self.apply(state, command)
        return self.tick(state, dt, intent)

    # ---- Commands ----------------------------------------------------------
    def apply(self, state: GameState, command: Command) -> GameState:
        kind = command.kind
        if kind is CommandKind.RESTART:
            return self.new_game()
        if state.is_game_over:
            logger.debug("Ignoring %s after game over", kind.value)
            return state
        if kind is CommandKind.TOGGLE_PAUSE:
            return replace(state, is_paused=not state.is_paused)
        if kind is CommandKind.ADVANCE_FLOOR:
            return self.advance_floor(state)
        if not state.show_terminal:
            logger.debug("Ignoring %s while terminal is closed", kind.value)
            return state
        if kind is CommandKind.SUBMIT_CODE:
            return self.submit_code(state, command.value)
        if kind is CommandKind.ABORT_TERMINAL:
            return replace(state, show_terminal=False, code_entry="")
        if kind is CommandKind.ENTER_DIGIT:
            digits = "".join(ch for ch in (command.value or "") if ch.isdigit())
            entry = (state.code_entry + digits)[: self.config.code_length]
            return replace(state, code_entry=entry)
        if kind is CommandKind.DELETE_DIGIT:
            return replace(state, code_entry=state.code_entry[:-1])
        if kind is CommandKind.CLEAR_ENTRY:
            return replace(state, code_entry="")
        raise ValueError(f"Unhandled command: {command!r}")

    def submit_code(self, state: GameState, code: Optional[str] = None) -> GameState:
        """Check a code at the open terminal.

        The right code opens the next floor. A wrong one closes the terminal
        and shoves the player back from the door.
        """
        attempt = state.code_entry if code is None else code
        if attempt == state.password:
            logger.info("Access granted on floor %d", state.current_floor)
            return self.advance_floor(state)

        logger.info("Access denied on floor %d", state.current_floor)
        nudge = self.config.mismatch_nudge
        pushed = clamp_to_interior(state.player_pos.x - nudge, state.player_pos.y - nudge, self.config)
        if collides(state.walls, pushed.x, pushed.y, self.config.player_size):
            pushed = state.player_pos
        return replace(state, show_terminal=False, code_entry="", player_pos=pushed)


__all__ = [
    "Simulation",
    "collides",
    "clamp_to_interior",
    "resolve_motion",
    "collect_money",
    "advance_guard",
    "guard_catches",
]
