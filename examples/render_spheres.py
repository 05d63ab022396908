#!/usr/bin/env python3
"""Render the default two-sphere scene.

This script renders a red mirror ball resting on a grey ground sphere under
a sky gradient, splitting the image rows into bands that render in parallel
on the CPU.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH         Image width in pixels (default: 1000)
    --height HEIGHT       Image height in pixels (default: 500)
    --samples SAMPLES     Number of samples per pixel (default: 100)
    --max-depth DEPTH     Bounce cap per path (default: 50)
    --seed SEED           Base random seed (default: 485468)
    --workers N           Number of bands/threads (default: CPU count)
    --shared-seed         Start every band from the same seed
    --output OUTPUT       Output file path (default: test.png)
    --quiet               Suppress progress output
    --verbose             Log band layout

Example:
    python -m examples.render_spheres --width 200 --height 100 --samples 16
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the default two-sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1000,
        help="Image width in pixels (default: 1000)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=500,
        help="Image height in pixels (default: 500)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=100,
        help="Number of samples per pixel (default: 100)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=50,
        help="Bounce cap per path (default: 50)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=485468,
        help="Base random seed (default: 485468)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of bands/threads (default: CPU count)",
    )
    parser.add_argument(
        "--shared-seed",
        action="store_true",
        help="Start every band from the same seed",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="test.png",
        help="Output file path (default: test.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log band layout",
    )
    return parser.parse_args()


def render_spheres(
    width: int = 1000,
    height: int = 500,
    num_samples: int = 100,
    max_depth: int = 50,
    seed: int = 485468,
    workers: int | None = None,
    shared_seed: bool = False,
    output_path: str = "test.png",
    quiet: bool = False,
) -> Path:
    """Render the default scene and save it to a PNG file.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from raybands.core.config import RenderConfig
    from raybands.core.renderer import render
    from raybands.preview.export import save_png
    from raybands.scene.default import create_default_scene
    from raybands.scene.manager import SceneManager

    config = RenderConfig(
        width=width,
        height=height,
        samples=num_samples,
        max_depth=max_depth,
        seed=seed,
        workers=workers,
        shared_band_seed=shared_seed,
    )
    config.validate()

    if not quiet:
        print(f"Image dimensions: {width}x{height}")
        print(f"Number of samples: {num_samples}")

    scene = SceneManager()
    scene.load_spheres(create_default_scene())

    start_time = time.time()
    pixels = render(config)
    total_time = time.time() - start_time

    output_file = Path(output_path)
    save_png(pixels, width, height, str(output_file))

    if not quiet:
        print(f"Raytracing took: {total_time:.3f} seconds!")
        print(f"Saved to: {output_file.absolute()}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    workers = args.workers if args.workers is not None else (os.cpu_count() or 1)
    if workers <= 0:
        print(f"Error: worker count must be positive, got {workers}", file=sys.stderr)
        return 1

    ti.init(arch=ti.cpu, cpu_max_num_threads=workers)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            num_samples=args.samples,
            max_depth=args.max_depth,
            seed=args.seed,
            workers=workers,
            shared_seed=args.shared_seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
