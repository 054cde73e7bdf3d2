#!/usr/bin/env python3
"""Generate random room scenes.

Composes scenes from a directory of OFF meshes and writes one JSON
description per scene. The scenes can optionally be uploaded to the Taichi
tracer's fields (to check they fit) and plotted top-down.

Usage:
    python -m examples.generate_scenes --models MODELS_DIR [options]

Options:
    --models DIR        Directory of .off mesh files (required)
    --images DIR        Directory of texture images for material sampling
    --count COUNT       Number of scenes to generate (default: 10)
    --seed SEED         Random seed (default: random)
    --output DIR        Output directory (default: scenes)
    --preview           Also save a top-down layout PNG per scene
    --upload            Upload every scene to the tracer's Taichi fields
    --quiet             Suppress progress output
    --verbose           Log composition details

Example:
    python -m examples.generate_scenes --models data/models --count 5 --seed 1 --preview
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate random room scenes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--models",
        type=str,
        required=True,
        help="Directory of .off mesh files",
    )
    parser.add_argument(
        "--images",
        type=str,
        default=None,
        help="Directory of texture images for material sampling",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=10,
        help="Number of scenes to generate (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: random)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="scenes",
        help="Output directory (default: scenes)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Also save a top-down layout PNG per scene",
    )
    parser.add_argument(
        "--upload",
        action="store_true",
        help="Upload every scene to the tracer's Taichi fields",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log composition details",
    )
    return parser.parse_args()


def list_files(directory: str | None, suffixes: tuple[str, ...]) -> list[str]:
    """Sorted paths in directory with one of the given suffixes."""
    if directory is None:
        return []
    return sorted(
        str(p) for p in Path(directory).iterdir() if p.suffix.lower() in suffixes
    )


def generate_scenes(
    models: list[str],
    images: list[str],
    count: int,
    output_dir: str,
    seed: int | None = None,
    preview: bool = False,
    upload: bool = False,
    quiet: bool = False,
) -> list[Path]:
    """Compose scenes and write their descriptions.

    Returns:
        Paths of the written JSON files.
    """
    from src.scenesynth.core.vector import make_rng
    from src.scenesynth.scene.composer import random_scene

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    rng = make_rng(seed)

    if preview:
        import matplotlib

        matplotlib.use("Agg")
        from src.scenesynth.preview.display import save_layout
    if upload:
        from src.scenesynth.camera.pinhole import setup_camera
        from src.scenesynth.scene.upload import upload_scene

    written = []
    start_time = time.time()
    for i in range(count):
        scene = random_scene(models, images, rng)

        path = out / f"scene_{i:04d}.json"
        with path.open("w", encoding="utf-8") as f:
            json.dump(scene.to_dict(), f)
        written.append(path)

        if preview:
            save_layout(scene, str(out / f"scene_{i:04d}_layout.png"))
        if upload:
            upload_scene(scene)
            setup_camera(scene.tracer.camera.to_pinhole())

        if not quiet:
            elapsed = time.time() - start_time
            print(
                f"\r  Progress: {i + 1}/{count} scenes ({elapsed:.1f}s)",
                end="",
                flush=True,
            )

    if not quiet:
        print()
        print(f"Wrote {len(written)} scenes to: {out.absolute()}")
    return written


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.upload:
        import taichi as ti

        # Use GPU if available, fall back to CPU
        try:
            ti.init(arch=ti.gpu)
        except Exception:
            ti.init(arch=ti.cpu)

    try:
        models = list_files(args.models, (".off",))
        images = list_files(args.images, IMAGE_SUFFIXES)
        if not args.quiet:
            print(f"Found {len(models)} models and {len(images)} images")
        generate_scenes(
            models,
            images,
            count=args.count,
            output_dir=args.output,
            seed=args.seed,
            preview=args.preview,
            upload=args.upload,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
