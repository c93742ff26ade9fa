#!/usr/bin/env python3
"""Render one of the example sphere scenes.

This script demonstrates end-to-end rendering: it creates the scene, sets up
the camera, and renders with progressive refinement.

Usage:
    python examples/render_spheres.py [options]

Options:
    --scene NAME        three-spheres or random-spheres (default: three-spheres)
    --width WIDTH       Image width in pixels (default: 400)
    --samples SAMPLES   Samples per pixel (default: the scene's default)
    --max-depth DEPTH   Maximum bounces per path (default: the scene's default)
    --seed SEED         Seed for scene layout and sampling (default: random)
    --output OUTPUT     Output file path, .png or .ppm (default: spheres.png)
    --batch-size SIZE   Samples per progress update (default: 10)
    --deadline SECONDS  Stop starting new batches after this many seconds
    --solid-glass       Render the glass ball of three-spheres without a hollow
    --preview           Show the result in a Matplotlib window
    --log-level LEVEL   Logging level (default: INFO)

Example:
    python examples/render_spheres.py --scene random-spheres --width 300 --samples 20
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from spheretracer.config import RenderSettings
from spheretracer.core.progressive import ProgressiveRenderer
from spheretracer.logging_config import configure_logging
from spheretracer.scene.presets import PRESETS

logger = logging.getLogger("spheretracer.examples")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render an example sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=sorted(PRESETS),
        default="three-spheres",
        help="Scene to render (default: three-spheres)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Samples per pixel (default: the scene's default)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum bounces per path (default: the scene's default)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for scene layout and sampling (default: random)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path, .png or .ppm (default: spheres.png)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=10,
        help="Samples per progress update (default: 10)",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Stop starting new batches after this many seconds",
    )
    parser.add_argument(
        "--solid-glass",
        action="store_true",
        help="Render the glass ball of three-spheres without a hollow",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (default: INFO)",
    )
    return parser.parse_args()


def render_scene(args: argparse.Namespace) -> Path:
    """Render the selected scene and save it to file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Path to the saved image file.
    """
    factory, defaults = PRESETS[args.scene]
    if args.scene == "random-spheres":
        scene, camera = factory(seed=args.seed)
    else:
        scene, camera = factory(hollow_glass=not args.solid_glass)

    overrides = dict(defaults)
    if args.samples is not None:
        overrides["samples_per_pixel"] = args.samples
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    settings = RenderSettings.from_width(
        args.width,
        camera.aspect_ratio,
        seed=args.seed,
        batch_size=args.batch_size,
        **overrides,
    )

    logger.info(
        "Rendering %s (%d spheres) at %dx%d, %d spp, depth %d",
        args.scene,
        scene.get_sphere_count(),
        settings.width,
        settings.height,
        settings.samples_per_pixel,
        settings.max_depth,
    )

    renderer = ProgressiveRenderer(
        scene.build(),
        camera,
        settings.width,
        settings.height,
        max_depth=settings.max_depth,
        seed=settings.seed,
    )

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        elapsed = time.time() - start_time
        progress_pct = (current / target) * 100 if target > 0 else 0
        samples_per_sec = current / elapsed if elapsed > 0 else 0
        logger.info(
            "Progress: %d/%d samples (%.1f%%) - %.1f spp/s",
            current,
            target,
            progress_pct,
            samples_per_sec,
        )

    renderer.render(
        num_samples=settings.samples_per_pixel,
        batch_size=settings.batch_size,
        callback=progress_callback,
        deadline=args.deadline,
    )

    output_file = Path(args.output)
    renderer.save_image(str(output_file), gamma=settings.gamma)
    logger.info("Saved to %s in %.2fs", output_file.absolute(), time.time() - start_time)

    if args.preview:
        from spheretracer.preview.display import show_preview

        show_preview(renderer, gamma=settings.gamma)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    configure_logging(args.log_level)

    try:
        render_scene(args)
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
