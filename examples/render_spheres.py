#!/usr/bin/env python3
"""Render the reference sphere scene.

Renders the fixed scene of four spheres and three lights with shadows and
mirror reflections, and writes it as a PNG.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 2048)
    --height HEIGHT     Image height in pixels (default: 2048)
    --output OUTPUT     Output file path (default: img.png)
    --workers N         Number of parallel row workers (default: all CPUs)
    --depth DEPTH       Reflection recursion depth (default: 3)
    --quiet             Only log warnings and errors

Example:
    python -m examples.render_spheres --width 512 --height 512 --output spheres.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from spheretrace.core.config import DEFAULT_IMAGE_SIZE, DEFAULT_RECURSION_DEPTH
from spheretrace.core.runtime import default_worker_count, init_runtime
from spheretrace.errors import SpheretraceError

logger = logging.getLogger("render_spheres")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the reference sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_IMAGE_SIZE,
        help=f"Image width in pixels (default: {DEFAULT_IMAGE_SIZE})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_IMAGE_SIZE,
        help=f"Image height in pixels (default: {DEFAULT_IMAGE_SIZE})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="img.png",
        help="Output file path (default: img.png)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of parallel row workers (default: all CPUs)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_RECURSION_DEPTH,
        help=f"Reflection recursion depth (default: {DEFAULT_RECURSION_DEPTH})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    return parser.parse_args(argv)


def render_spheres(
    width: int = DEFAULT_IMAGE_SIZE,
    height: int = DEFAULT_IMAGE_SIZE,
    output_path: str = "img.png",
    num_workers: int | None = None,
    depth: int = DEFAULT_RECURSION_DEPTH,
) -> Path:
    """Render the reference scene and save it to a PNG file.

    Taichi must already be initialised.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path.
        num_workers: Number of row workers; defaults to all CPUs.
        depth: Reflection recursion depth.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretrace.core.config import RenderConfig
    from spheretrace.core.render import Renderer
    from spheretrace.preview.export import save_png
    from spheretrace.scene.default_scene import create_default_scene

    config = RenderConfig(
        width=width,
        height=height,
        recursion_depth=depth,
        num_workers=num_workers if num_workers is not None else default_worker_count(),
    )
    renderer = Renderer(config)
    renderer.render(create_default_scene())

    output_file = save_png(renderer, output_path)
    logger.info("Saved to: %s", output_file.absolute())
    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        workers = init_runtime(args.workers)
        render_spheres(
            width=args.width,
            height=args.height,
            output_path=args.output,
            num_workers=workers,
            depth=args.depth,
        )
        return 0
    except (SpheretraceError, ValueError) as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
