"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Direction(IntEnum):
    """Arrow-key movement directions for the player."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


@unique
class Heading(IntEnum):
    """Horizontal travel direction of the observer."""

    LEFT = -1
    RIGHT = 1


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    CELL_INIT = 0
    PLANT_X = 1
    PLANT_Y = 2
    PLANT_ENERGY = 3
    PLANT_WEIGHT = 4
