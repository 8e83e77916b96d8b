#!/usr/bin/env python3
"""Render the sphere-grid scene with ambient occlusion.

This script renders the demo grid of unit spheres (or a scene loaded from
a JSON render config) and saves the framebuffer as a PNG.

Usage:
    python examples/render_sphere_grid.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 900)
    --height HEIGHT     Image height in pixels (default: 700)
    --samples SAMPLES   Ambient-occlusion rays per pixel (default: 1)
    --seed SEED         Seed for hemisphere sampling (default: random)
    --config PATH       JSON render config replacing the demo scene
    --output OUTPUT     Output file path (default: sphere_grid.png)
    --verbose           Enable debug logging
    --quiet             Suppress progress output

Example:
    python examples/render_sphere_grid.py --width 450 --height 350 --samples 16 --seed 1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the sphere-grid scene with ambient occlusion.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=900,
        help="Image width in pixels (default: 900)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=700,
        help="Image height in pixels (default: 700)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=1,
        help="Ambient-occlusion rays per pixel (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for hemisphere sampling (default: random)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON render config replacing the demo scene",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="sphere_grid.png",
        help="Output file path (default: sphere_grid.png)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def load_config(args: argparse.Namespace):
    """Build the RenderConfig from a JSON file or the demo scene."""
    from aotrace.scene.config import RenderConfig
    from aotrace.scene.sphere_grid import create_sphere_grid_config

    if args.config is None:
        return create_sphere_grid_config(args.width, args.height, args.samples, args.seed)

    with open(args.config, encoding="utf-8") as f:
        return RenderConfig.from_dict(json.load(f))


def render_sphere_grid(args: argparse.Namespace) -> Path:
    """Render the configured scene and save it to file.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from aotrace.core.renderer import render_config
    from aotrace.preview.export import save_png

    config = load_config(args)

    if not args.quiet:
        print(
            f"Rendering {len(config.spheres)} spheres at {config.width}x{config.height}, "
            f"{config.samples} AO samples per pixel..."
        )

    start_time = time.time()
    framebuffer = render_config(config)
    output_file = save_png(framebuffer, config.width, config.height, args.output)

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from aotrace.logging_config import setup_logging

    if args.verbose:
        setup_logging(logging.DEBUG)
    elif not args.quiet:
        setup_logging(logging.INFO)

    # Initialize Taichi
    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_sphere_grid(args)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
