"""Geometry module for hit records and shape primitives.

Components:
    hit: Hit record, miss sentinel and nearest-hit reduction
    sphere: Sphere primitive with analytic ray-sphere intersection

Intersection routines are Taichi functions (@ti.func) called from the
scene kernels, one ray per parallel iteration.
"""

from .hit import MISS_DISTANCE, Hit, HitBatch, HitInfo, is_miss, miss_hit, update_hit
from .sphere import SELF_INTERSECTION_EPSILON, Sphere, hit_sphere

__all__ = [
    "Hit",
    "HitBatch",
    "HitInfo",
    "MISS_DISTANCE",
    "miss_hit",
    "is_miss",
    "update_hit",
    "Sphere",
    "hit_sphere",
    "SELF_INTERSECTION_EPSILON",
]
