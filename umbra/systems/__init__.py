"""Engine systems: deterministic RNG."""

from umbra.systems.rng import DeterministicRNG

__all__ = ["DeterministicRNG"]
