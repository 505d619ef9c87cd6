"""Derived products from blocks of raw 64-bit draws."""

from __future__ import annotations

import numpy as np


def high32(values: np.ndarray) -> np.ndarray:
    """Top 32 bits of each draw as uint32."""

    return (np.asarray(values, dtype=np.uint64) >> np.uint64(32)).astype(np.uint32)


def dice_from_values(values: np.ndarray, *, faces: int = 6) -> np.ndarray:
    """Map draws to die faces with `(v >> 32) % faces + 1`."""

    if faces < 1:
        raise ValueError("faces must be >= 1")
    return (high32(values).astype(np.int64) % faces) + 1


def bit_matrix(values: np.ndarray) -> np.ndarray:
    """Unpack draws to an (n, 64) array of 0/1, column 0 holding bit 63."""

    big_endian = np.asarray(values, dtype=np.uint64).astype(">u8")
    return np.unpackbits(big_endian.view(np.uint8)).reshape(-1, 64)


def bits_preview_u8(values: np.ndarray, *, width: int = 256) -> np.ndarray:
    """Lay draws out as a black/white raster, one bit per pixel, MSB first."""

    if width <= 0 or width % 64:
        raise ValueError("width must be a positive multiple of 64")
    bits = bit_matrix(values).ravel()
    rows = bits.size // width
    if rows == 0:
        return np.zeros((0, width), dtype=np.uint8)
    return (bits[: rows * width].reshape(rows, width) * 255).astype(np.uint8)
