"""
Great Heist package root.

A top-down stealth/collection arcade game: grab the cash, find the access
code, dodge the guards and reach the exit terminal before the floor timer
runs out. The simulation core (``engine``, ``level``) is pure Python and has
no dependency on any rendering or audio backend.
"""
from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__ = version("great-heist")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
