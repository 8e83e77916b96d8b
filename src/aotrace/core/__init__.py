"""Core rendering module.

Components:
    vector: 3D vector algebra for kernels
    ray: Ray data structure and host-side ray batches
    basis: Orthonormal frames for cameras and hemisphere sampling
    sampler: Hemisphere sampling with an injected random generator
    renderer: Render driver and pixel shading

All compute-intensive operations use Taichi kernels.
"""

from .basis import (
    OrthonormalBasis,
    basis_eval,
    basis_from_u,
    basis_from_vw,
    frame_from_u,
    frame_from_vw,
)
from .ray import Ray, RayBatch, make_ray, ray_at
from .sampler import (
    draw_hemisphere_uniforms,
    hemisphere_direction,
    hemisphere_ray,
    make_rng,
    sample_hemisphere,
)
from .vector import add, cross, dot, length, normalized, scale, subtract, to_vec3, vec3

# Note: renderer is NOT imported here because it depends on the scene package.
# Import it directly:
#   from aotrace.core.renderer import render

__all__ = [
    "vec3",
    "add",
    "subtract",
    "scale",
    "dot",
    "cross",
    "length",
    "normalized",
    "to_vec3",
    "Ray",
    "RayBatch",
    "make_ray",
    "ray_at",
    "OrthonormalBasis",
    "basis_from_vw",
    "basis_from_u",
    "basis_eval",
    "frame_from_vw",
    "frame_from_u",
    "make_rng",
    "draw_hemisphere_uniforms",
    "hemisphere_direction",
    "hemisphere_ray",
    "sample_hemisphere",
]
