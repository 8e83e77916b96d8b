"""3D vector algebra for Taichi kernels.

All functions are pure and operate on ``vec3`` values inside ``@ti.kernel``
or ``@ti.func`` code. Vectors are 32-bit float triples; arithmetic always
produces new values.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from aotrace.core.vector import cross, normalized, vec3
    >>> @ti.kernel
    ... def right() -> ti.f32:
    ...     return normalized(cross(vec3(0, 0, -1), vec3(0, 1, 0))).x
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum a + b."""
    return a + b


@ti.func
def subtract(a: vec3, b: vec3) -> vec3:
    """Component-wise difference a - b."""
    return a - b


@ti.func
def scale(v: vec3, scalar: ti.f32) -> vec3:
    """Multiply every component of v by a scalar."""
    return v * scalar


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The inner product a . b.
    """
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the right-handed cross product a x b."""
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length (magnitude) of a vector."""
    return ti.sqrt(dot(v, v))


@ti.func
def normalized(v: vec3) -> vec3:
    """Scale a vector to unit length.

    The input must have non-zero length. A zero vector yields NaN
    components; callers guard against degenerate input before this point.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return scale(v, 1.0 / length(v))


def to_vec3(values) -> vec3:
    """Convert a Python 3-sequence to a vec3 for use as a kernel argument."""
    x, y, z = (float(c) for c in values)
    return vec3(x, y, z)
