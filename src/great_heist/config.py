from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


ENV_PREFIX = "HEIST_"
ENV_CONFIG_FILE = "HEIST_CONFIG_FILE"


def _as_bool(value: Any) -> bool:
    """Interpret common truthy/falsey spellings into a bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off"}:
            return False
    raise ValueError(f"not a boolean: {value!r}")


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in {"", "none", "null"}:
        return None
    return int(value)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class HeistConfig:
    """Gameplay constants and runtime options.

    Defaults are the classic arcade tuning: a 600x400 canvas, a 30 px
    player moving 5 px per tick, 60 seconds per floor and a 500 point timeout
    penalty. Guard and player speeds are expressed per tick at ``tick_rate``.
    """

    # Canvas
    canvas_width: int = 600
    canvas_height: int = 400
    wall_thickness: float = 10.0

    # Player
    player_size: float = 30.0
    player_speed: float = 5.0
    spawn_x: float = 50.0
    spawn_y: float = 50.0

    # Interaction tolerances (axis-aligned, measured from the player's centre)
    collect_tolerance: float = 25.0
    capture_tolerance: float = 25.0
    station_tolerance: float = 40.0
    door_tolerance: float = 40.0
    waypoint_threshold: float = 5.0

    # Fixed features
    station_x: float = 100.0
    station_y: float = 300.0
    door_inset: float = 50.0

    # Timer
    time_per_floor: float = 60.0
    timeout_penalty: int = 500
    max_timeout_resets: Optional[int] = None
    warning_time: float = 5.0
    warning_interval: float = 0.5

    # Terminal
    code_length: int = 4
    mismatch_nudge: float = 40.0

    # Presentation helpers
    hint_distance: float = 180.0

    # Generation
    placement_attempts: int = 1000
    money_margin: float = 15.0
    clamp_guard_overshoot: bool = True

    # Loop
    tick_rate: float = 60.0
    seed: Optional[int] = None

    # Presentation
    sound_dir: Optional[str] = None
    sfx_volume: float = 0.8

    @property
    def dt(self) -> float:
        """Fixed simulation step in seconds."""
        return 1.0 / self.tick_rate

    def validate(self) -> None:
        """Raise ConfigError if any value is out of its usable range."""
        if self.canvas_width <= 150 or self.canvas_height <= 150:
            raise ConfigError(
                f"Canvas must be larger than 150x150, got {self.canvas_width}x{self.canvas_height}"
            )
        positive = (
            "wall_thickness",
            "player_size",
            "player_speed",
            "time_per_floor",
            "tick_rate",
            "placement_attempts",
            "code_length",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)!r}")
        non_negative = (
            "collect_tolerance",
            "capture_tolerance",
            "station_tolerance",
            "door_tolerance",
            "waypoint_threshold",
            "timeout_penalty",
            "warning_time",
            "mismatch_nudge",
            "money_margin",
            "hint_distance",
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative, got {getattr(self, name)!r}")
        if not 0.0 <= self.sfx_volume <= 1.0:
            raise ConfigError(f"sfx_volume must be within [0, 1], got {self.sfx_volume!r}")
        if self.warning_interval <= 0:
            raise ConfigError("warning_interval must be positive")
        if self.max_timeout_resets is not None and self.max_timeout_resets < 0:
            raise ConfigError("max_timeout_resets must be None or >= 0")
        interior = self.player_size + 2 * self.wall_thickness
        if interior >= min(self.canvas_width, self.canvas_height):
            raise ConfigError("Player footprint does not fit inside the boundary walls")

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    # ------------------------ Loading & Overrides ------------------------
    @classmethod
    def _casters(cls) -> Dict[str, Callable[[Any], Any]]:
        out: Dict[str, Callable[[Any], Any]] = {}
        for f in dataclasses.fields(cls):
            if f.name in ("max_timeout_resets", "seed"):
                out[f.name] = _optional_int
            elif f.name == "sound_dir":
                out[f.name] = _optional_str
            elif f.type in ("bool", bool):
                out[f.name] = _as_bool
            elif f.type in ("int", int):
                out[f.name] = int
            else:
                out[f.name] = float
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HeistConfig":
        """Build a validated config; unknown keys are ignored with a warning."""
        casters = cls._casters()
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            if key not in casters:
                logger.warning("Ignoring unknown config key %r", key)
                continue
            try:
                values[key] = casters[key](raw)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid value for {key}: {raw!r}") from exc
        cfg = cls(**values)
        cfg.validate()
        return cfg

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Collect ``HEIST_<FIELD>`` overrides from the environment.

        Values are returned raw; casting happens in :meth:`from_dict`.
        """
        env = os.environ if env is None else env
        out: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            env_key = ENV_PREFIX + f.name.upper()
            if env_key in env and env[env_key] != "":
                out[f.name] = env[env_key]
        return out

    @classmethod
    def from_yaml_file(cls, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Top level of {path} must be a mapping")
        # Sections are optional; nested mappings are flattened.
        flat: Dict[str, Any] = {}
        for key, value in raw.items():
            if isinstance(value, dict):
                flat.update(value)
            else:
                flat[key] = value
        logger.debug("Loaded %d config values from %s", len(flat), path)
        return flat

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Mapping[str, str]] = None,
        file_path: Optional[Path | str] = None,
        **overrides: Any,
    ) -> "HeistConfig":
        """Resolve config with precedence defaults < file < env < explicit overrides."""
        env = os.environ if env is None else env
        data: Dict[str, Any] = {}
        if file_path is None and env.get(ENV_CONFIG_FILE):
            file_path = env[ENV_CONFIG_FILE]
        if file_path is not None:
            data.update(cls.from_yaml_file(Path(file_path).expanduser()))
        data.update(cls.from_env(env))
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(data)


DEFAULT_CONFIG = HeistConfig()

__all__ = ["HeistConfig", "DEFAULT_CONFIG", "ENV_PREFIX", "ENV_CONFIG_FILE"]
