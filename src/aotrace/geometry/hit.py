"""Hit records and nearest-hit reduction.

A hit stores the ray parameter ``t``, the outward surface normal and the
world-space point of an intersection. The distinguished miss value has
``t = +inf`` with zero normal and point, and a hit is a miss exactly when
``t`` is infinite.

``update_hit`` folds candidate hits into the nearest one along a ray:
a finite candidate replaces the current hit only when it is strictly
closer, and a miss never replaces anything.

On the host side, ``HitBatch`` keeps per-ray results as NumPy arrays in
the same order as the traced rays.
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from aotrace.core.ray import as_vec_array
from aotrace.core.vector import vec3

# Ray parameter stored in miss records
MISS_DISTANCE = float("inf")


@ti.dataclass
class Hit:
    """Record of a ray-primitive intersection.

    Attributes:
        t: Ray parameter of the intersection, +inf for a miss.
        normal: Unit outward surface normal (zero for a miss).
        point: World-space intersection point (zero for a miss).
    """

    t: ti.f32
    normal: vec3
    point: vec3


@ti.func
def miss_hit() -> Hit:
    """Create the canonical miss record."""
    return Hit(t=MISS_DISTANCE, normal=vec3(0.0, 0.0, 0.0), point=vec3(0.0, 0.0, 0.0))


@ti.func
def is_miss(hit: Hit) -> ti.i32:
    """Return 1 if the record is a miss (t is +inf), 0 otherwise."""
    return hit.t == MISS_DISTANCE


@ti.func
def update_hit(current: Hit, candidate: Hit) -> Hit:
    """Keep whichever of two hits is nearer along the ray.

    Args:
        current: The nearest hit found so far (may be a miss).
        candidate: A newly computed hit (may be a miss).

    Returns:
        candidate if it is a finite hit closer than current, else current.
    """
    result = current
    if not is_miss(candidate) and candidate.t < current.t:
        result = candidate
    return result


@dataclass(frozen=True)
class HitInfo:
    """A single hit record read back to Python.

    Attributes:
        t: Ray parameter of the intersection, inf for a miss.
        normal: Surface normal (x, y, z).
        point: Intersection point (x, y, z).
    """

    t: float
    normal: tuple[float, float, float]
    point: tuple[float, float, float]

    def is_miss(self) -> bool:
        return self.t == MISS_DISTANCE


@dataclass
class HitBatch:
    """Per-ray intersection results, index-aligned with a RayBatch.

    Attributes:
        t: Ray parameters, float32 array of shape (N,). +inf marks a miss.
        normals: Surface normals, float32 array of shape (N, 3).
        points: Intersection points, float32 array of shape (N, 3).
    """

    t: npt.NDArray[np.float32]
    normals: npt.NDArray[np.float32]
    points: npt.NDArray[np.float32]

    def __post_init__(self) -> None:
        self.t = np.ascontiguousarray(self.t, dtype=np.float32).reshape(-1)
        count = self.t.shape[0]
        self.normals = as_vec_array(self.normals, count=count)
        self.points = as_vec_array(self.points, count=count)

    @classmethod
    def misses(cls, count: int) -> "HitBatch":
        """Create a batch of count miss records."""
        return cls(
            np.full(count, MISS_DISTANCE, dtype=np.float32),
            np.zeros((count, 3), dtype=np.float32),
            np.zeros((count, 3), dtype=np.float32),
        )

    def __len__(self) -> int:
        return int(self.t.shape[0])

    def __getitem__(self, index: int) -> HitInfo:
        normal = self.normals[index]
        point = self.points[index]
        return HitInfo(
            t=float(self.t[index]),
            normal=(float(normal[0]), float(normal[1]), float(normal[2])),
            point=(float(point[0]), float(point[1]), float(point[2])),
        )

    def miss_mask(self) -> npt.NDArray[np.bool_]:
        """Boolean array, True where the record is a miss."""
        return np.isposinf(self.t)

    def hit_count(self) -> int:
        """Number of records that are not misses."""
        return int(np.count_nonzero(~self.miss_mask()))
