"""Reproducible 64-bit pseudo-random streams: SplitMix64 and xorshift1024*."""

from .rand import Rand64, Source64
from .splitmix64 import SplitMix64
from .xorshift1024 import Xorshift1024Star

__all__ = ["Rand64", "Source64", "SplitMix64", "Xorshift1024Star"]
