"""Sphere primitive with analytic ray-sphere intersection.

The intersection solves ``|origin + t*direction - center|^2 = radius^2``
with the plain quadratic formula and keeps only the near root. Roots at
or below SELF_INTERSECTION_EPSILON count as misses, which suppresses
self-hits for rays spawned on a surface. A ray starting inside a sphere
therefore sees no intersection with it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from aotrace.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -5), radius=1.0)
    >>> # Use hit_sphere(ray, sphere) within a Taichi kernel
"""

import taichi as ti

from aotrace.core.ray import Ray, ray_at
from aotrace.core.vector import dot, normalized, subtract, vec3
from aotrace.geometry.hit import Hit, miss_hit

# Near roots at or below this ray parameter are rejected
SELF_INTERSECTION_EPSILON = 1e-6


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere) -> Hit:
    """Intersect a ray with a sphere.

    With ``oc = origin - center`` the coefficients are::

        a = direction . direction
        b = 2 * (oc . direction)
        c = oc . oc - radius^2

    A negative discriminant ``b^2 - 4ac`` is a miss. Otherwise the near
    root ``t = (-b - sqrt(disc)) / (2a)`` is used; if it is not greater
    than SELF_INTERSECTION_EPSILON the result is a miss.

    Args:
        ray: The ray to test.
        sphere: The sphere to test against.

    Returns:
        A Hit with the outward unit normal, or the miss record.
    """
    oc = subtract(ray.origin, sphere.center)

    a = dot(ray.direction, ray.direction)
    b = 2.0 * dot(oc, ray.direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = b * b - 4.0 * a * c

    result = miss_hit()
    if discriminant >= 0.0:
        t = (-b - ti.sqrt(discriminant)) / (2.0 * a)
        if t > SELF_INTERSECTION_EPSILON:
            point = ray_at(ray, t)
            result = Hit(t=t, normal=normalized(subtract(point, sphere.center)), point=point)

    return result
