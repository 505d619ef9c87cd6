"""Summary metrics over a block of raw draws."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .derive import bit_matrix, dice_from_values


@dataclass(frozen=True)
class SampleMetrics:
    """Deterministic summary of a block of 64-bit draws."""

    count: int
    distinct: int
    mean_unit: float
    max_bit_bias: float
    low3_bit_bias: float
    sign_bit_fraction: float
    dice_counts: tuple[int, ...]


def bit_frequencies(values: np.ndarray) -> np.ndarray:
    """Fraction of draws with each bit set; index 0 is the least significant bit."""

    values = np.asarray(values, dtype=np.uint64)
    if values.ndim != 1:
        raise ValueError("values must be 1D")
    if values.size == 0:
        return np.zeros(64, dtype=np.float64)
    return bit_matrix(values).mean(axis=0)[::-1].astype(np.float64)


def sample_metrics(values: np.ndarray, *, faces: int = 6) -> SampleMetrics:
    """Compute summary metrics for a block of draws."""

    values = np.asarray(values, dtype=np.uint64)
    if values.ndim != 1:
        raise ValueError("values must be 1D")
    if values.size == 0:
        return SampleMetrics(0, 0, 0.0, 0.0, 0.0, 0.0, tuple([0] * faces))

    freqs = bit_frequencies(values)
    bias = np.abs(freqs - 0.5)
    unit = (values >> np.uint64(11)).astype(np.float64) / float(1 << 53)
    dice = dice_from_values(values, faces=faces)
    counts = np.bincount(dice - 1, minlength=faces)
    return SampleMetrics(
        count=int(values.size),
        distinct=int(np.unique(values).size),
        mean_unit=float(unit.mean()),
        max_bit_bias=float(bias.max()),
        low3_bit_bias=float(bias[:3].max()),
        sign_bit_fraction=float(freqs[63]),
        dice_counts=tuple(int(c) for c in counts),
    )
