"""Domain-separated deterministic RNG using xxhash.

Every draw is a pure function of (WorldSeed, Domain, key, index), so the
initial grid and plant field are reproducible from the seed alone and no
process-wide random source is ever consulted.

Formula: RNG_Value = Hash(WorldSeed, Domain, key, index)
"""

from __future__ import annotations

import math
import os
import struct

import xxhash

from umbra.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, key, index), with
    no internal mutable state, therefore fully thread-safe.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1
    _INV_2_53 = 2.0 ** -53

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @classmethod
    def from_optional_seed(cls, seed: int | None) -> DeterministicRNG:
        """Use *seed* when given, otherwise draw a fresh one from the OS."""
        if seed is None:
            seed = int.from_bytes(os.urandom(8), "little") >> 1
        return cls(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, index: int) -> int:
        payload = struct.pack("<Qiqq", self._seed & self._MAX_UINT64, domain.value, key, index)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, index: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        # top 53 bits: every value is exact in a double and stays below 1.0
        return (self._hash(domain, key, index) >> 11) * self._INV_2_53

    def next_int(self, domain: Domain, key: int, index: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, index)
        return min(high, low + int(f * (high - low + 1)))

    def next_uniform(self, domain: Domain, key: int, index: int, low: float, high: float) -> float:
        """Return a deterministic float in [low, high)."""
        value = low + self.next_float(domain, key, index) * (high - low)
        if value >= high > low:
            return math.nextafter(high, low)
        return value

    def next_bool(self, domain: Domain, key: int, index: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, index) < probability
