"""xorshift1024* generator with 2^512-step jump.

Period 2^1024 - 1, 1024 bits of state (16 x 64-bit words plus a rotating index).

The three lowest output bits are LFSRs and slightly less random than the rest.
Derive booleans from the high bit (a sign test) rather than from `next() & 1`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import operator
from typing import Iterable, Iterator

import numpy as np

from .splitmix64 import MASK64, SplitMix64

STATE_WORDS = 16
SCRAMBLE_MUL = 0x106689D45497FDB5  # 1181783497276652981

JUMP = (
    0x84242F96ECA9C41D,
    0xA3C65B8776F96855,
    0x5B34A39F070B5837,
    0x4489AFFCE4F31A1E,
    0x2FFEEB0A48316F40,
    0xDC2D9891FE68C022,
    0x3659132BB12FEA70,
    0xAAC17D8EFA43CAB8,
    0xC4CB815590989B13,
    0x5EE975283D71C93B,
    0x691548C86C1BD540,
    0x7910C41D10A1E6A5,
    0x0B5FC64563B3E2A8,
    0x047F7684E9FC949D,
    0xB99181F2D8F685CA,
    0x284600E3F30E38C3,
)


def _zero_state() -> list[int]:
    return [0] * STATE_WORDS


@dataclass
class Xorshift1024Star:
    """Mutable xorshift1024* stream.

    A freshly constructed instance holds an all-zero state and must be seeded with
    `seed()` or `seed_from_slice()` before drawing; an all-zero state is a fixed point
    that only ever yields zeros. Each instance belongs to one logical stream; use
    `spawn()` to hand disjoint streams to parallel workers.
    """

    state: list[int] = field(default_factory=_zero_state)
    p: int = 0

    def __post_init__(self) -> None:
        words = [int(w) & MASK64 for w in self.state]
        if len(words) != STATE_WORDS:
            raise ValueError(f"state must hold exactly {STATE_WORDS} words, got {len(words)}")
        try:
            self.p = operator.index(self.p)
        except TypeError:
            raise TypeError(f"p must be an integer, got {self.p!r}") from None
        if not 0 <= self.p < STATE_WORDS:
            raise ValueError(f"p must be in [0, {STATE_WORDS}), got {self.p}")
        self.state = words

    @classmethod
    def from_seed(cls, seed: int) -> "Xorshift1024Star":
        rng = cls()
        rng.seed(seed)
        return rng

    def seed(self, seed: int) -> None:
        """Fill the state array with 16 successive SplitMix64 draws from `seed`."""

        expander = SplitMix64(seed)
        self.state = [expander.next() for _ in range(STATE_WORDS)]
        self.p = 0

    def seed_from_slice(self, words: Iterable[int]) -> None:
        """Load the state array verbatim from exactly 16 words."""

        values = [int(w) & MASK64 for w in words]
        if len(values) != STATE_WORDS:
            raise ValueError(f"seed slice must hold exactly {STATE_WORDS} words, got {len(values)}")
        if not any(values):
            raise ValueError("seed slice must not be all zero")
        self.state = values
        self.p = 0

    def next(self) -> int:
        """Advance one step and return the next unsigned 64-bit output."""

        s = self.state
        s0 = s[self.p]
        self.p = (self.p + 1) & 15
        s1 = s[self.p]
        s1 ^= (s1 << 31) & MASK64  # a
        s[self.p] = s1 ^ s0 ^ (s1 >> 11) ^ (s0 >> 30)  # b, c
        return (s[self.p] * SCRAMBLE_MUL) & MASK64

    def int63(self) -> int:
        return self.next() >> 1

    def jump(self) -> None:
        """Advance the stream by the equivalent of 2^512 calls to `next()`."""

        t = _zero_state()
        s = self.state
        for word in JUMP:
            for b in range(64):
                if word & (1 << b):
                    p = self.p
                    for j in range(STATE_WORDS):
                        t[j] ^= s[(j + p) & 15]
                self.next()

        p = self.p
        for j in range(STATE_WORDS):
            s[(j + p) & 15] = t[j]

    def copy(self) -> "Xorshift1024Star":
        return Xorshift1024Star(list(self.state), self.p)

    def spawn(self, n: int) -> list["Xorshift1024Star"]:
        """Return `n` streams located 1, 2, ... n jumps ahead; `self` is unchanged."""

        if n < 0:
            raise ValueError("n must be non-negative")
        cursor = self.copy()
        streams = []
        for _ in range(n):
            cursor.jump()
            streams.append(cursor.copy())
        return streams

    def getstate(self) -> tuple[tuple[int, ...], int]:
        return tuple(self.state), self.p

    def setstate(self, snapshot: tuple[Iterable[int], int]) -> None:
        words, p = snapshot
        restored = Xorshift1024Star(list(words), p)
        self.state = restored.state
        self.p = restored.p

    def fill(self, count: int) -> np.ndarray:
        """Draw `count` successive outputs into a uint64 array."""

        if count < 0:
            raise ValueError("count must be non-negative")
        out = np.empty(count, dtype=np.uint64)
        for i in range(count):
            out[i] = self.next()
        return out

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.next()
