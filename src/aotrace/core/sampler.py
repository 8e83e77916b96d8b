"""Stochastic hemisphere sampling around a surface normal.

Each sample uses two uniform draws: a height in [0, 1) along the normal
and an angle in [0, 2*pi) around it. With the frame ``basis_from_u(normal)``
the sample direction is::

    u * height + v * cos(angle) + w * sin(angle)

This is a simple non-importance-sampled distribution. It is not cosine
weighted, which is acceptable for an ambient-occlusion estimate.

Random numbers never come from global state. They are drawn on the host
from an injected ``numpy.random.Generator`` and handed to kernels as an
array, so the same seed reproduces the same rays and parallel workers
never share a generator.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from aotrace.core.sampler import make_rng, sample_hemisphere
    >>> rays = sample_hemisphere((0, 0, 1), (0, 0, 1), 64, rng=make_rng(7))
    >>> len(rays)
    64
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti

from aotrace.core.basis import OrthonormalBasis, basis_eval, basis_from_u
from aotrace.core.ray import Ray, RayBatch, make_ray
from aotrace.core.vector import to_vec3, vec3

RandomSource = np.random.Generator | int | None

TWO_PI = 2.0 * math.pi


def make_rng(source: RandomSource = None) -> np.random.Generator:
    """Return a NumPy generator for hemisphere sampling.

    Args:
        source: An existing Generator (returned unchanged), an integer
            seed, or None for fresh OS entropy.
    """
    return np.random.default_rng(source)


def draw_hemisphere_uniforms(
    rng: np.random.Generator, count: int, sample_count: int
) -> npt.NDArray[np.float32]:
    """Draw the (height, angle fraction) pairs for count sample bundles.

    Returns:
        Float32 array of shape (count, sample_count, 2) in [0, 1).
    """
    return rng.random((count, sample_count, 2), dtype=np.float32)


@ti.func
def hemisphere_direction(frame: OrthonormalBasis, height: ti.f32, angle: ti.f32) -> vec3:
    """Direction u*height + v*cos(angle) + w*sin(angle) in the given frame."""
    return basis_eval(frame, height, ti.cos(angle), ti.sin(angle))


@ti.func
def hemisphere_ray(center: vec3, frame: OrthonormalBasis, uniforms: ti.math.vec2) -> Ray:
    """Build one sample ray from a pair of uniforms in [0, 1).

    Args:
        center: Ray origin, usually a surface point.
        frame: Frame from basis_from_u(normal).
        uniforms: (height, angle / 2pi).

    Returns:
        A ray with normalized direction leaving center.
    """
    direction = hemisphere_direction(frame, uniforms[0], TWO_PI * uniforms[1])
    return make_ray(center, direction)


@ti.kernel
def _sample_hemisphere_kernel(
    center: vec3,
    normal: vec3,
    uniforms: ti.types.ndarray(dtype=ti.math.vec2, ndim=1),
    origins: ti.types.ndarray(dtype=vec3, ndim=1),
    directions: ti.types.ndarray(dtype=vec3, ndim=1),
):
    for i in range(uniforms.shape[0]):
        frame = basis_from_u(normal)
        ray = hemisphere_ray(center, frame, uniforms[i])
        origins[i] = ray.origin
        directions[i] = ray.direction


def sample_hemisphere(
    center, normal, sample_count: int, rng: RandomSource = None
) -> RayBatch:
    """Generate a bundle of rays over the hemisphere above a surface point.

    Args:
        center: Ray origin (x, y, z).
        normal: Hemisphere orientation (x, y, z), any non-zero length.
        sample_count: Number of rays, at least 1.
        rng: Generator, seed or None.

    Returns:
        RayBatch of sample_count rays, all starting at center.

    Raises:
        ValueError: If sample_count is below 1.
    """
    if sample_count < 1:
        raise ValueError(f"sample_count must be at least 1, got {sample_count}")

    uniforms = draw_hemisphere_uniforms(make_rng(rng), 1, sample_count)[0]
    origins = np.zeros((sample_count, 3), dtype=np.float32)
    directions = np.zeros((sample_count, 3), dtype=np.float32)
    _sample_hemisphere_kernel(to_vec3(center), to_vec3(normal), uniforms, origins, directions)
    return RayBatch(origins, directions)
