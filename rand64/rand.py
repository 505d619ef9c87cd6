"""Range helpers layered over any unsigned 64-bit source."""

from __future__ import annotations

from typing import Protocol

import numpy as np

MAX_UINT32 = (1 << 32) - 1
MAX_UINT64 = (1 << 64) - 1


class Source64(Protocol):
    """Anything producing uniformly distributed values in [0, 2^64)."""

    def next(self) -> int: ...

    def int63(self) -> int: ...

    def seed(self, seed: int) -> None: ...


class Rand64:
    """Bounded integers, floats and permutations drawn from a `Source64`.

    Power-of-two ranges are taken from the high bits of each draw, since the low
    bits of the xorshift family are the weakest.
    """

    def __init__(self, src: Source64) -> None:
        self.src = src

    def seed(self, seed: int) -> None:
        self.src.seed(seed)

    def next(self) -> int:
        return self.src.next()

    uint64 = next

    def int63(self) -> int:
        return self.src.int63()

    def uint32(self) -> int:
        return self.src.next() >> 32

    def uint64n(self, n: int) -> int:
        """Return an unbiased value in [0, n) for 0 < n < 2^64."""

        if not 0 < n <= MAX_UINT64:
            raise ValueError(f"n must be in (0, 2^64), got {n}")
        if n & (n - 1) == 0:
            # n == 1 shifts out all 64 bits but still consumes a draw
            return self.src.next() >> (65 - n.bit_length())
        limit = MAX_UINT64 - ((1 << 64) % n)
        v = self.src.next()
        while v > limit:
            v = self.src.next()
        return v % n

    def uint32n(self, n: int) -> int:
        """Return an unbiased value in [0, n) for 0 < n < 2^32."""

        if not 0 < n <= MAX_UINT32:
            raise ValueError(f"n must be in (0, 2^32), got {n}")
        if n & (n - 1) == 0:
            return self.uint32() >> (33 - n.bit_length())
        limit = MAX_UINT32 - ((1 << 32) % n)
        v = self.uint32()
        while v > limit:
            v = self.uint32()
        return v % n

    def uintn(self, n: int) -> int:
        if n <= MAX_UINT32:
            return self.uint32n(n)
        return self.uint64n(n)

    def randint(self, a: int, b: int) -> int:
        """Return a value in [a, b], both ends inclusive."""

        if b < a:
            raise ValueError(f"empty range [{a}, {b}]")
        return a + self.uintn(b - a + 1)

    def float64(self) -> float:
        """Return a float in [0.0, 1.0) with 53 random bits."""

        return (self.src.next() >> 11) * (1.0 / (1 << 53))

    def float32(self) -> float:
        return (self.src.next() >> 40) * (1.0 / (1 << 24))

    def uperm(self, n: int) -> list[int]:
        """Return a pseudo-random permutation of range(n)."""

        if n < 0:
            raise ValueError("n must be non-negative")
        m = [0] * n
        for i in range(n):
            j = self.uintn(i + 1)
            m[i] = m[j]
            m[j] = i
        return m

    def bulk_uint64(self, n: int) -> np.ndarray:
        if n < 0:
            raise ValueError("n must be non-negative")
        return np.fromiter((self.src.next() for _ in range(n)), dtype=np.uint64, count=n)
