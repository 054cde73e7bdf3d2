#!/usr/bin/env python3
"""Brighten rendered images toward a random target brightness.

Each input image is scaled so that its 80th-percentile brightness reaches a
target drawn from a clipped normal distribution around 0.3. Images that are
already bright enough are written unchanged (scale 1.0).

Usage:
    python -m examples.normalize_exposure INPUT [INPUT ...] [options]

Options:
    --output DIR    Output directory (default: normalized)
    --seed SEED     Random seed (default: random)
    --quiet         Suppress per-image output

Example:
    python -m examples.normalize_exposure renders/*.png --output renders_bright --seed 3
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Brighten rendered images toward a random target brightness.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Input image files",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="normalized",
        help="Output directory (default: normalized)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: random)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress per-image output",
    )
    return parser.parse_args()


def normalize_images(
    inputs: list[str],
    output_dir: str,
    seed: int | None = None,
    quiet: bool = False,
) -> list[tuple[Path, float]]:
    """Write brightened copies of the inputs.

    Returns:
        (output path, applied scale) for every input.
    """
    from src.scenesynth.core.vector import make_rng
    from src.scenesynth.preview.export import load_image_array, save_png_from_array
    from src.scenesynth.preview.exposure import brightness_scale

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    rng = make_rng(seed)

    results = []
    for name in inputs:
        image = load_image_array(name)
        scale = brightness_scale(image, rng)
        path = out / (Path(name).stem + ".png")
        # Inputs are already display-encoded, so no further gamma
        save_png_from_array(image, path, gamma=1.0, scale=scale)
        results.append((path, scale))
        if not quiet:
            print(f"{name}: scale {scale:.3f} -> {path}")
    return results


def main() -> int:
    """Main entry point."""
    args = parse_args()
    try:
        normalize_images(args.inputs, args.output, seed=args.seed, quiet=args.quiet)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
