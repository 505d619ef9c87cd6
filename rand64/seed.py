"""Seed parsing, hashing, and derivation utilities."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
import io
import re
import secrets

from .iorand import ReaderSource
from .splitmix64 import normalize_seed

SEED1 = 1387366483214

_DECIMAL_RE = re.compile(r"^[+-]?[0-9]+$")
_HEX_RE = re.compile(r"^0[xX][0-9A-Fa-f]+$")

_EXAMPLE_SEEDS = ["1387366483214", "0xDEADBEEF", "-42", "nightly-run"]


class SeedParseError(ValueError):
    """Raised when seed text cannot be turned into a 64-bit seed."""


@dataclass(frozen=True)
class ParsedSeed:
    """Validated seed text and its unsigned 64-bit value."""

    original: str
    canonical: str
    value: int
    hashed: bool


def seed_hash64(text: str) -> int:
    """Hash arbitrary seed text to a deterministic unsigned 64-bit integer."""

    digest = hashlib.blake2b(text.encode("utf-8"), digest_size=8, person=b"rand64seed").digest()
    return int.from_bytes(digest, byteorder="big", signed=False)


def derive_seed(parent_seed: int, key: str, *, namespace: str = "rand64") -> int:
    """Derive a deterministic child seed from a parent seed and label."""

    if not key:
        raise ValueError("derive key must be non-empty")
    payload = f"{namespace}:{normalize_seed(parent_seed)}:{key}".encode("utf-8")
    digest = hashlib.blake2b(payload, digest_size=8, person=b"rand64fork").digest()
    return int.from_bytes(digest, byteorder="big", signed=False)


def parse_seed(seed_text: str) -> ParsedSeed:
    """Parse `seed_text` as a decimal or hex integer, falling back to hashing the text."""

    if seed_text is None:
        raise SeedParseError(_error_message("Seed is required."))

    raw = seed_text.strip()
    if not raw:
        raise SeedParseError(_error_message("Seed cannot be empty."))

    if _HEX_RE.fullmatch(raw):
        value = int(raw, 16)
        if value >> 64:
            raise SeedParseError(_error_message("Hex seed does not fit in 64 bits."))
        return ParsedSeed(raw, f"{value:#018x}", value, False)

    if _DECIMAL_RE.fullmatch(raw):
        value = int(raw, 10)
        if not -(1 << 63) <= value < (1 << 64):
            raise SeedParseError(_error_message("Integer seed must be in [-2^63, 2^64)."))
        return ParsedSeed(raw, str(normalize_seed(value)), normalize_seed(value), False)

    if raw.lower().startswith("0x"):
        raise SeedParseError(_error_message("Hex seed contains non-hex digits."))

    value = seed_hash64(raw)
    return ParsedSeed(raw, f"{_slug(raw)}-{value:016x}", value, True)


def generate_seed(n: int) -> list[int]:
    """Return `n` unsigned 64-bit words from the operating system entropy pool."""

    if n < 0:
        raise ValueError("n must be non-negative")
    src = ReaderSource(io.BytesIO(secrets.token_bytes(8 * n)))
    return [src.next() for _ in range(n)]


def _slug(raw: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", raw.lower()).strip("-")
    return slug or "seed"


def _error_message(reason: str) -> str:
    examples = ", ".join(_EXAMPLE_SEEDS)
    return f"{reason} Examples: {examples}"
