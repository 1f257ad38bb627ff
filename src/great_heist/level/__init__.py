"""
Floor generation for Great Heist.

Walls come from a fixed per-floor arithmetic layout; guards, money and the
access code are drawn from an injected RNG.
"""
from .generator import FloorLayout, LevelGenerator, generate_walls

__all__ = ["FloorLayout", "LevelGenerator", "generate_walls"]
