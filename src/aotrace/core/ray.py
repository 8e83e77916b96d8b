"""Ray data structure and host-side ray batches.

A ray is an origin plus a unit direction. ``make_ray`` is the only way
rays are built inside kernels and it always normalizes the supplied
direction, so callers pass raw directions such as ``look_at - eye``.

Batches of rays travel between Python and kernels as a ``RayBatch``: two
C-contiguous float32 arrays of shape (N, 3). Kernels rebuild each ray
through ``make_ray``, so a batch may carry unnormalized directions.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -4.0)
    >>> # Inside a kernel:
    >>> # ray = make_ray(origin, direction)   # direction becomes (0, 0, -1)
    >>> # point = ray_at(ray, 5.0)            # (0, 0, -5)
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from aotrace.core.vector import add, normalized, scale, vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and a unit direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3), unit length when the
            ray was built by make_ray.
    """

    origin: vec3
    direction: vec3


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray, normalizing the supplied direction.

    Args:
        origin: The starting point of the ray.
        direction: Any non-zero direction vector.

    Returns:
        A new Ray whose direction has unit length.
    """
    return Ray(origin=origin, direction=normalized(direction))


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point origin + direction * t along the ray."""
    return add(ray.origin, scale(ray.direction, t))


def as_vec_array(values: npt.ArrayLike, count: int | None = None) -> npt.NDArray[np.float32]:
    """Convert input to a C-contiguous float32 array of shape (N, 3).

    Args:
        values: Anything NumPy can turn into an (N, 3) array.
        count: Expected number of rows, or None to accept any.

    Raises:
        ValueError: If the shape does not match.
    """
    array = np.ascontiguousarray(values, dtype=np.float32).reshape(-1, 3)
    if count is not None and array.shape[0] != count:
        raise ValueError(f"Expected {count} vectors, got {array.shape[0]}")
    return array


@dataclass
class RayBatch:
    """An ordered bundle of rays stored as NumPy arrays.

    Attributes:
        origins: Ray origins, float32 array of shape (N, 3).
        directions: Ray directions, float32 array of shape (N, 3).
    """

    origins: npt.NDArray[np.float32]
    directions: npt.NDArray[np.float32]

    def __post_init__(self) -> None:
        self.origins = as_vec_array(self.origins)
        self.directions = as_vec_array(self.directions, count=self.origins.shape[0])

    def __len__(self) -> int:
        return int(self.origins.shape[0])

    @classmethod
    def empty(cls) -> "RayBatch":
        """Create a batch holding no rays."""
        return cls(np.zeros((0, 3), np.float32), np.zeros((0, 3), np.float32))

    @classmethod
    def from_rays(
        cls, rays: Iterable[tuple[Sequence[float], Sequence[float]]]
    ) -> "RayBatch":
        """Build a batch from (origin, direction) pairs."""
        pairs = list(rays)
        if not pairs:
            return cls.empty()
        origins, directions = zip(*pairs)
        return cls(np.array(origins), np.array(directions))
