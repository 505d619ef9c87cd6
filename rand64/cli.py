"""CLI entry point printing reference samples and writing run artifacts."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
from pathlib import Path
import platform
import shutil
import tempfile
import time

import numpy as np
import PIL

from rand64.config import DEFAULT_COUNT, DEFAULT_PNG_WIDTH, DEFAULT_SEED, OutputConfig, RunConfig
from rand64.derive import bits_preview_u8
from rand64.io import (
    move_tree_contents,
    resolve_output_dir,
    safe_clean_output_dir,
    write_json,
    write_png_u8,
    write_values_npy,
)
from rand64.metrics import sample_metrics
from rand64.seed import SeedParseError, parse_seed
from rand64.xorshift1024 import Xorshift1024Star


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reproducible xorshift1024* samples seeded through SplitMix64")
    parser.add_argument(
        "--seed",
        default=DEFAULT_SEED,
        help="Integer seed (decimal or 0x hex) or any text, which is hashed to 64 bits",
    )
    parser.add_argument("--jumps", type=int, default=0, help="Number of 2^512-step jumps applied before sampling")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT, help="Number of raw draws written to values.npy")
    parser.add_argument("--out", default=None, help="Output root directory; no artifacts are written when omitted")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite files in existing output directory")
    parser.add_argument(
        "--json",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write metadata JSON files",
    )
    parser.add_argument("--png", action="store_true", help="Write bits.png, one bit per pixel")
    parser.add_argument("--png-width", type=int, default=DEFAULT_PNG_WIDTH, help="bits.png width in pixels")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        parsed_seed = parse_seed(args.seed)
    except SeedParseError as exc:
        parser.error(str(exc))

    try:
        config = RunConfig(
            jumps=args.jumps,
            output=OutputConfig(count=args.count, png_width=args.png_width, write_png=args.png),
        )
    except ValueError as exc:
        parser.error(str(exc))

    rng = Xorshift1024Star.from_seed(parsed_seed.value)
    for _ in range(config.jumps):
        rng.jump()

    sample = config.sample
    faces = sample.dice_faces
    print(f"xorshift1024* seed={parsed_seed.canonical} jumps={config.jumps}")
    print("", *(rng.next() >> 32 for _ in range(sample.high32_draws)))
    print("", *(rng.next() for _ in range(sample.uint64_draws)))
    print("", *(f"{_die(rng, faces)}{_die(rng, faces)}" for _ in range(sample.dice_pairs)))
    print("", *(rng.int63() for _ in range(sample.int63_draws)))

    if args.out is None:
        return 0

    generation_start = time.perf_counter()
    values = rng.fill(config.output.count)
    generation_seconds = time.perf_counter() - generation_start
    metrics = sample_metrics(values, faces=faces)

    out_root = Path(args.out)
    try:
        out_dir = resolve_output_dir(out_root, parsed_seed.canonical, overwrite=args.overwrite)
    except FileExistsError as exc:
        parser.error(str(exc))

    stage_dir = Path(tempfile.mkdtemp(prefix=".staging-", dir=str(out_dir.parent)))
    try:
        write_values_npy(stage_dir / "values.npy", values)
        if config.output.write_png:
            write_png_u8(stage_dir / "bits.png", bits_preview_u8(values, width=config.output.png_width))
        if args.json:
            timestamp = datetime.now(timezone.utc).isoformat()
            deterministic_meta = {
                "generator": "xorshift1024*",
                "canonical_seed": parsed_seed.canonical,
                "seed_value": parsed_seed.value,
                "seed_hashed": parsed_seed.hashed,
                "config": config.to_dict(),
                "final_state": {"words": list(rng.state), "p": rng.p},
                "metrics": {
                    "count": metrics.count,
                    "distinct": metrics.distinct,
                    "mean_unit": metrics.mean_unit,
                    "max_bit_bias": metrics.max_bit_bias,
                    "low3_bit_bias": metrics.low3_bit_bias,
                    "sign_bit_fraction": metrics.sign_bit_fraction,
                    "dice_counts": list(metrics.dice_counts),
                },
            }
            meta = {
                **deterministic_meta,
                "generated_at_utc": timestamp,
                "original_seed": parsed_seed.original,
                "generation_seconds": generation_seconds,
                "python_version": platform.python_version(),
                "numpy_version": np.__version__,
                "pillow_version": PIL.__version__,
            }
            write_json(stage_dir / "deterministic_meta.json", deterministic_meta)
            write_json(stage_dir / "meta.json", meta)

        safe_clean_output_dir(out_dir, out_root=out_root)
        move_tree_contents(stage_dir, out_dir)
    finally:
        shutil.rmtree(stage_dir, ignore_errors=True)

    print(f"Wrote samples: {out_dir}")
    print(
        "Metrics: "
        f"count={metrics.count}, "
        f"distinct={metrics.distinct}, "
        f"mean={metrics.mean_unit:.4f}, "
        f"max bit bias={metrics.max_bit_bias:.4f}, "
        f"sign bit={metrics.sign_bit_fraction:.4f}"
    )
    print(f"Generation time: {generation_seconds:.3f} s ({metrics.count} draws)")
    file_count = sum(1 for child in out_dir.iterdir() if child.is_file())
    print(f"Output files: {file_count}")
    return 0


def _die(rng: Xorshift1024Star, faces: int) -> int:
    return (rng.next() >> 32) % faces + 1


if __name__ == "__main__":
    raise SystemExit(main())
