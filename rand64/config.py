"""Configuration models for sampling runs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from .seed import SEED1

DEFAULT_SEED = str(SEED1)
DEFAULT_COUNT = 4096
DEFAULT_PNG_WIDTH = 256


@dataclass(frozen=True)
class SampleConfig:
    """Sizes of the printed reference blocks."""

    high32_draws: int = 4
    uint64_draws: int = 4
    dice_pairs: int = 10
    dice_faces: int = 6
    int63_draws: int = 4


@dataclass(frozen=True)
class OutputConfig:
    """Controls artifacts written for a sampling run."""

    count: int = DEFAULT_COUNT
    png_width: int = DEFAULT_PNG_WIDTH
    write_png: bool = False


@dataclass(frozen=True)
class RunConfig:
    """Primary sampling configuration."""

    jumps: int = 0
    sample: SampleConfig = field(default_factory=SampleConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self) -> None:
        if self.jumps < 0:
            raise ValueError("jumps must be non-negative")
        if self.output.count < 0:
            raise ValueError("count must be non-negative")
        if self.output.png_width <= 0 or self.output.png_width % 64:
            raise ValueError("png_width must be a positive multiple of 64")
        if self.sample.dice_faces < 1:
            raise ValueError("dice_faces must be >= 1")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
