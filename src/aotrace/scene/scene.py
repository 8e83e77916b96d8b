"""Scene container, ray casting and ambient-occlusion estimation.

The scene owns an ordered list of spheres. Queries scan every sphere for
every ray; there is no spatial index, so casting costs O(spheres) per ray.
Rays are independent, and each kernel runs its outermost loop over rays
(or hits) in parallel.

Ambient occlusion at a hit point is estimated by shooting a bundle of
hemisphere rays around the surface normal and measuring the fraction
that hits geometry::

    occlusion = min(1.0, OCCLUSION_BIAS * hits / rays)

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from aotrace.scene.scene import Scene, SphereInfo
    >>> scene = Scene()
    >>> scene.add_primitive(SphereInfo(center=(0.0, 0.0, 0.0), radius=1.0))
    0
    >>> scene.cast((0.0, 0.0, 5.0), (0.0, 0.0, -1.0)).t
    4.0
"""

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti

from aotrace.core.basis import basis_from_u
from aotrace.core.ray import Ray, RayBatch, make_ray
from aotrace.core.sampler import (
    RandomSource,
    draw_hemisphere_uniforms,
    hemisphere_ray,
    make_rng,
)
from aotrace.core.vector import vec3
from aotrace.geometry.hit import (
    MISS_DISTANCE,
    Hit,
    HitBatch,
    HitInfo,
    is_miss,
    miss_hit,
    update_hit,
)
from aotrace.geometry.sphere import Sphere, hit_sphere

logger = logging.getLogger(__name__)

# Multiplier applied to the raw hit fraction before clamping to 1.0
OCCLUSION_BIAS = 1.1

# Number of hits processed per ambient-occlusion kernel launch
AO_CHUNK_SIZE = 1 << 16


@dataclass(frozen=True)
class SphereInfo:
    """A sphere in the scene.

    Attributes:
        center: The center of the sphere (x, y, z).
        radius: The radius of the sphere, positive.

    Raises:
        ValueError: If the center is not three finite floats or the radius
            is not positive and finite.
    """

    center: tuple[float, float, float]
    radius: float

    def __post_init__(self) -> None:
        center = tuple(float(c) for c in self.center)
        if len(center) != 3 or not all(math.isfinite(c) for c in center):
            raise ValueError(f"Sphere center must be three finite floats, got {center}")
        radius = float(self.radius)
        if not math.isfinite(radius) or radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive and finite, got {radius}")
        object.__setattr__(self, "center", center)
        object.__setattr__(self, "radius", radius)

    def to_dict(self) -> dict[str, Any]:
        return {"center": list(self.center), "radius": self.radius}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SphereInfo":
        try:
            return cls(center=tuple(data["center"]), radius=data["radius"])
        except KeyError as e:
            raise ValueError(f"Sphere config is missing key {e}") from e


@ti.func
def cast_ray(ray: Ray, centers: ti.template(), radii: ti.template()) -> Hit:
    """Find the nearest intersection of a ray with every sphere.

    Args:
        ray: The ray to cast.
        centers: Sphere centers.
        radii: Sphere radii, index-aligned with centers.

    Returns:
        The nearest Hit, or the miss record if nothing intersects.
    """
    result = miss_hit()
    for j in range(radii.shape[0]):
        sphere = Sphere(center=centers[j], radius=radii[j])
        result = update_hit(result, hit_sphere(ray, sphere))
    return result


@ti.func
def occlusion_from_count(hit_count: ti.i32, ray_count: ti.i32) -> ti.f32:
    """Biased, clamped fraction of a ray bundle that hit geometry."""
    fraction = OCCLUSION_BIAS * ti.cast(hit_count, ti.f32) / ti.cast(ray_count, ti.f32)
    return ti.min(1.0, fraction)


@ti.kernel
def _trace_kernel(
    origins: ti.types.ndarray(dtype=vec3, ndim=1),
    directions: ti.types.ndarray(dtype=vec3, ndim=1),
    centers: ti.types.ndarray(dtype=vec3, ndim=1),
    radii: ti.types.ndarray(dtype=ti.f32, ndim=1),
    t_out: ti.types.ndarray(dtype=ti.f32, ndim=1),
    normals_out: ti.types.ndarray(dtype=vec3, ndim=1),
    points_out: ti.types.ndarray(dtype=vec3, ndim=1),
):
    for i in range(origins.shape[0]):
        hit = cast_ray(make_ray(origins[i], directions[i]), centers, radii)
        t_out[i] = hit.t
        normals_out[i] = hit.normal
        points_out[i] = hit.point


@ti.kernel
def _ambient_occlusion_kernel(
    t_values: ti.types.ndarray(dtype=ti.f32, ndim=1),
    normals: ti.types.ndarray(dtype=vec3, ndim=1),
    points: ti.types.ndarray(dtype=vec3, ndim=1),
    uniforms: ti.types.ndarray(dtype=ti.math.vec2, ndim=2),
    centers: ti.types.ndarray(dtype=vec3, ndim=1),
    radii: ti.types.ndarray(dtype=ti.f32, ndim=1),
    coefficients: ti.types.ndarray(dtype=ti.f32, ndim=1),
):
    for i in range(t_values.shape[0]):
        coefficient = 0.0
        if t_values[i] != MISS_DISTANCE:
            frame = basis_from_u(normals[i])
            sample_count = uniforms.shape[1]
            hit_count = 0
            for s in range(sample_count):
                ray = hemisphere_ray(points[i], frame, uniforms[i, s])
                if not is_miss(cast_ray(ray, centers, radii)):
                    hit_count += 1
            coefficient = occlusion_from_count(hit_count, sample_count)
        coefficients[i] = coefficient


class Scene:
    """An ordered collection of spheres that rays are traced against.

    Spheres can only be appended; the scene is read-only while tracing.
    Geometry is packed into NumPy arrays lazily and re-packed after every
    append.
    """

    def __init__(self) -> None:
        self._spheres: list[SphereInfo] = []
        self._packed: tuple[npt.NDArray[np.float32], npt.NDArray[np.float32]] | None = None

    def __len__(self) -> int:
        return len(self._spheres)

    def __iter__(self) -> Iterator[SphereInfo]:
        return iter(self._spheres)

    @property
    def spheres(self) -> tuple[SphereInfo, ...]:
        """The spheres in insertion order."""
        return tuple(self._spheres)

    def add_primitive(self, sphere: SphereInfo) -> int:
        """Append a sphere to the scene.

        No deduplication is performed.

        Returns:
            The index of the added sphere.
        """
        self._spheres.append(sphere)
        self._packed = None
        return len(self._spheres) - 1

    def add_sphere(self, center: tuple[float, float, float], radius: float) -> int:
        """Create a SphereInfo and append it. Returns its index."""
        return self.add_primitive(SphereInfo(center=center, radius=radius))

    def _geometry(self) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.float32]]:
        if self._packed is None:
            centers = np.array([s.center for s in self._spheres], dtype=np.float32).reshape(-1, 3)
            radii = np.array([s.radius for s in self._spheres], dtype=np.float32)
            self._packed = (np.ascontiguousarray(centers), np.ascontiguousarray(radii))
        return self._packed

    def cast(self, origin, direction) -> HitInfo:
        """Cast a single ray and return the nearest hit (or a miss).

        Args:
            origin: Ray origin (x, y, z).
            direction: Ray direction (x, y, z), normalized on construction.
        """
        return self.trace(RayBatch.from_rays([(origin, direction)]))[0]

    def trace(self, rays: RayBatch) -> HitBatch:
        """Cast every ray in a batch.

        Returns:
            HitBatch whose entry i is the nearest hit of ray i.
        """
        count = len(rays)
        if count == 0 or not self._spheres:
            return HitBatch.misses(count)

        t_out = np.empty(count, dtype=np.float32)
        normals_out = np.empty((count, 3), dtype=np.float32)
        points_out = np.empty((count, 3), dtype=np.float32)
        centers, radii = self._geometry()
        _trace_kernel(rays.origins, rays.directions, centers, radii, t_out, normals_out, points_out)
        return HitBatch(t_out, normals_out, points_out)

    def occlusion_fraction(self, rays: RayBatch) -> float:
        """Biased fraction of a ray bundle that hits geometry.

        Returns ``min(1.0, OCCLUSION_BIAS * hits / len(rays))``.

        Raises:
            ValueError: If the bundle is empty.
        """
        if len(rays) == 0:
            raise ValueError("Cannot compute occlusion of an empty ray bundle")
        hits = self.trace(rays)
        return min(1.0, OCCLUSION_BIAS * hits.hit_count() / len(rays))

    def ambient_occlusion(
        self, hits: HitBatch, sample_count: int, rng: RandomSource = None
    ) -> npt.NDArray[np.float32]:
        """Estimate the ambient-occlusion coefficient of every hit.

        Misses get 0.0. Each finite hit gets the occlusion fraction of
        sample_count hemisphere rays leaving its point around its normal.

        Args:
            hits: Hits to shade, e.g. the output of trace.
            sample_count: Hemisphere rays per hit, at least 1.
            rng: Generator, seed or None. Uniforms are drawn per chunk in
                hit order, so a fixed seed gives a fixed result.

        Returns:
            Float32 array of shape (len(hits),) with values in [0, 1].

        Raises:
            ValueError: If sample_count is below 1.
        """
        if sample_count < 1:
            raise ValueError(f"sample_count must be at least 1, got {sample_count}")

        count = len(hits)
        coefficients = np.zeros(count, dtype=np.float32)
        if count == 0 or not self._spheres:
            return coefficients

        generator = make_rng(rng)
        centers, radii = self._geometry()
        for start in range(0, count, AO_CHUNK_SIZE):
            stop = min(start + AO_CHUNK_SIZE, count)
            logger.debug("Ambient occlusion for hits %d-%d of %d", start, stop, count)
            chunk_out = np.zeros(stop - start, dtype=np.float32)
            _ambient_occlusion_kernel(
                np.ascontiguousarray(hits.t[start:stop]),
                np.ascontiguousarray(hits.normals[start:stop]),
                np.ascontiguousarray(hits.points[start:stop]),
                draw_hemisphere_uniforms(generator, stop - start, sample_count),
                centers,
                radii,
                chunk_out,
            )
            coefficients[start:stop] = chunk_out
        return coefficients
