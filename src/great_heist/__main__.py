from __future__ import annotations

import argparse
import logging
import os
import sys

from . import __version__
from .app import run_auto, run_gui, run_headless
from .config import HeistConfig
from .exceptions import ConfigError


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="great-heist",
        description="Great Heist - stealth arcade runner",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (console)")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N ticks (for testing)")
    parser.add_argument(
        "--tick-rate",
        type=float,
        default=None,
        help="Simulation tick rate (Hz); 0 runs unthrottled at the configured rate",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible floors")
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        # 0 is a pacing request, not a step size
        tick_rate = args.tick_rate if args.tick_rate else None
        config = HeistConfig.from_sources(file_path=args.config, seed=args.seed, tick_rate=tick_rate)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    unthrottled = args.tick_rate == 0

    # Honor CLI over env vars
    if args.gui:
        os.environ["HEIST_GUI"] = "1"
        os.environ.pop("HEIST_HEADLESS", None)
        return run_gui(config, max_steps=args.max_steps, unthrottled=unthrottled)

    if args.headless:
        os.environ["HEIST_HEADLESS"] = "1"
        os.environ.pop("HEIST_GUI", None)
        return run_headless(config, max_steps=args.max_steps, unthrottled=unthrottled)

    return run_auto(config, max_steps=args.max_steps, unthrottled=unthrottled)


if __name__ == "__main__":
    sys.exit(main())
