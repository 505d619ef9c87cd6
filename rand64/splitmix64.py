"""SplitMix64 seed-expansion generator.

Fixed-increment variant of Java 8's SplittableRandom. Period 2^64, 64 bits of state.
It is used to turn a single 64-bit seed into the larger state arrays of other generators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

MASK64 = (1 << 64) - 1

GOLDEN_GAMMA = 0x9E3779B97F4A7C15
MIX_MUL_1 = 0xBF58476D1CE4E5B9
MIX_MUL_2 = 0x94D049BB133111EB


def normalize_seed(seed: int) -> int:
    """Reduce any Python int to an unsigned 64-bit value (negative seeds wrap)."""

    return int(seed) & MASK64


def mix64(z: int) -> int:
    """Apply the SplitMix64 finalizer to an already incremented counter value."""

    z = ((z ^ (z >> 30)) * MIX_MUL_1) & MASK64
    z = ((z ^ (z >> 27)) * MIX_MUL_2) & MASK64
    return z ^ (z >> 31)


def mix64_array(values: np.ndarray) -> np.ndarray:
    """Vectorized `mix64` over a uint64 array; multiplication wraps modulo 2^64."""

    z = np.asarray(values, dtype=np.uint64).copy()
    with np.errstate(over="ignore"):
        z = (z ^ (z >> np.uint64(30))) * np.uint64(MIX_MUL_1)
        z = (z ^ (z >> np.uint64(27))) * np.uint64(MIX_MUL_2)
    return z ^ (z >> np.uint64(31))


def counter_array(seed: int, count: int) -> np.ndarray:
    """Return the first `count` incremented counter values for `seed` as uint64."""

    if count < 0:
        raise ValueError("count must be non-negative")
    steps = np.arange(1, count + 1, dtype=np.uint64)
    with np.errstate(over="ignore"):
        return np.uint64(normalize_seed(seed)) + steps * np.uint64(GOLDEN_GAMMA)


@dataclass
class SplitMix64:
    """Mutable SplitMix64 stream. `state` is the raw 64-bit counter."""

    state: int = 0

    def __post_init__(self) -> None:
        self.state = normalize_seed(self.state)

    def seed(self, seed: int) -> None:
        self.state = normalize_seed(seed)

    def next(self) -> int:
        """Advance the counter and return the next unsigned 64-bit output."""

        self.state = (self.state + GOLDEN_GAMMA) & MASK64
        return mix64(self.state)

    def int63(self) -> int:
        return self.next() >> 1

    def fill(self, count: int) -> np.ndarray:
        """Draw `count` values at once; equivalent to `count` calls to `next()`."""

        out = mix64_array(counter_array(self.state, count))
        self.state = (self.state + count * GOLDEN_GAMMA) & MASK64
        return out

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.next()
