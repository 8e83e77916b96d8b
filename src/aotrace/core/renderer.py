"""Render driver: primary rays, ambient occlusion and pixel shading.

A render runs the full pipeline once::

    camera.generate_rays -> scene.trace -> scene.ambient_occlusion -> shade_pixels

and returns a flat framebuffer of ``3 * width * height`` bytes (R, G, B
per pixel), row-major, with row 0 holding the pixels of ``yscreen = 0``.
The core does not decide which row a display shows on top.

Shading of a hit with normal n and occlusion coefficient c is::

    intensity = 255 * (1 - c)
    rgb = (|n.x| * intensity, |n.y| * intensity, |n.z| * intensity)

truncated to 8-bit values. Misses are black.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from aotrace.core.renderer import render
    >>> from aotrace.scene.sphere_grid import create_sphere_grid_camera, create_sphere_grid_scene
    >>> framebuffer = render(
    ...     create_sphere_grid_scene(),
    ...     create_sphere_grid_camera(320, 240),
    ...     320,
    ...     240,
    ...     sample_count=4,
    ...     rng=7,
    ... )
    >>> len(framebuffer)
    230400
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from aotrace.camera.perspective import PerspectiveCamera, check_screen_size
from aotrace.core.sampler import RandomSource, make_rng
from aotrace.geometry.hit import HitBatch
from aotrace.scene.scene import Scene

if TYPE_CHECKING:
    from aotrace.scene.config import RenderConfig

logger = logging.getLogger(__name__)

# Maximum value of an 8-bit color channel
CHANNEL_MAX = 255.0


def shade_pixels(hits: HitBatch, coefficients: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Convert hits and occlusion coefficients to RGB byte triples.

    Args:
        hits: Per-pixel hits.
        coefficients: Per-pixel occlusion coefficients in [0, 1].

    Returns:
        Array of shape (len(hits), 3) with dtype uint8.

    Raises:
        ValueError: If the inputs differ in length.
    """
    coefficients = np.asarray(coefficients, dtype=np.float32).reshape(-1)
    if coefficients.shape[0] != len(hits):
        raise ValueError(
            f"Got {coefficients.shape[0]} occlusion coefficients for {len(hits)} hits"
        )

    intensity = np.float32(CHANNEL_MAX) * (np.float32(1.0) - coefficients)
    colors = np.abs(hits.normals) * intensity[:, np.newaxis]
    colors[hits.miss_mask()] = 0.0
    return colors.astype(np.uint8)


def render_pixels(
    scene: Scene,
    camera: PerspectiveCamera,
    screen_width: int,
    screen_height: int,
    sample_count: int,
    rng: RandomSource = None,
) -> npt.NDArray[np.uint8]:
    """Render a scene and return the pixels as an (N, 3) uint8 array.

    See render for the arguments. Inputs are validated before any
    kernel runs.

    Raises:
        ValueError: If a screen dimension is below 2 or sample_count is
            below 1.
    """
    check_screen_size(screen_width, screen_height)
    if sample_count < 1:
        raise ValueError(f"sample_count must be at least 1, got {sample_count}")

    logger.info(
        "Rendering %dx%d, %d spheres, %d AO samples",
        screen_width,
        screen_height,
        len(scene),
        sample_count,
    )
    start_time = time.time()

    rays = camera.generate_rays(screen_width, screen_height)
    hits = scene.trace(rays)
    logger.debug("Primary rays: %d of %d hit geometry", hits.hit_count(), len(hits))

    coefficients = scene.ambient_occlusion(hits, sample_count, rng=make_rng(rng))
    pixels = shade_pixels(hits, coefficients)

    logger.info("Rendered in %.2fs", time.time() - start_time)
    return pixels


def render(
    scene: Scene,
    camera: PerspectiveCamera,
    screen_width: int,
    screen_height: int,
    sample_count: int,
    rng: RandomSource = None,
) -> bytes:
    """Render a scene to a flat RGB framebuffer.

    Args:
        scene: Spheres to render.
        camera: Camera generating the primary rays.
        screen_width: Raster width in pixels, at least 2.
        screen_height: Raster height in pixels, at least 2.
        sample_count: Ambient-occlusion rays per visible pixel, at least 1.
        rng: Generator, seed or None for hemisphere sampling.

    Returns:
        ``3 * screen_width * screen_height`` bytes, row-major from
        ``yscreen = 0``.
    """
    return render_pixels(scene, camera, screen_width, screen_height, sample_count, rng).tobytes()


def render_config(config: RenderConfig) -> bytes:
    """Render the scene, camera and raster described by a RenderConfig."""
    return render(
        config.build_scene(),
        config.camera,
        config.width,
        config.height,
        config.samples,
        rng=config.seed,
    )
