"""Orthonormal bases for camera orientation and hemisphere sampling.

Two constructions are provided, both deterministic:

- ``basis_from_vw(v, w)`` builds a camera frame from an up vector ``v`` and
  a forward vector ``w``. When ``v`` is (nearly) parallel to ``w`` the
  world y axis and then the world x axis are tried in turn, so the frame
  is always well defined.
- ``basis_from_u(u)`` builds a frame whose primary axis is ``u``. It is
  used to orient hemisphere samples around a surface normal.

``basis_eval`` maps local coordinates (x, y, z) to ``u*x + v*y + w*z``.

The ``frame_from_vw`` and ``frame_from_u`` helpers run the same Taichi
functions from Python and return the frame as a (3, 3) array whose rows
are u, v and w.
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from aotrace.core.vector import add, cross, length, normalized, scale, to_vec3, vec3

# Cross products shorter than this are treated as degenerate
DEGENERATE_EPSILON = 1e-6


@ti.dataclass
class OrthonormalBasis:
    """Three mutually orthogonal unit vectors forming a local frame.

    Attributes:
        u: First axis (camera right, or the sampling normal).
        v: Second axis (camera up).
        w: Third axis (camera forward).
    """

    u: vec3
    v: vec3
    w: vec3


@ti.func
def basis_from_vw(v: vec3, w: vec3) -> OrthonormalBasis:
    """Build a frame from an up vector v and a forward vector w.

    Computes ``u = normalize(w) x normalize(v)``. If that is shorter than
    DEGENERATE_EPSILON, retries with the world y axis, then with the world
    x axis. ``u`` is normalized after the fallback chain and ``v`` is
    recomputed as ``u x w``.

    The raw cross product has length ``sin(angle)`` between up and
    forward. Normalizing it keeps the frame orthonormal, so the field of
    view is wider than with an unnormalized ``u`` whenever up is not
    perpendicular to forward.

    Args:
        v: Up direction (any non-zero length).
        w: Forward direction (any non-zero length).

    Returns:
        The resulting OrthonormalBasis.
    """
    w_unit = normalized(w)
    u = cross(w_unit, normalized(v))
    if length(u) < DEGENERATE_EPSILON:
        u = cross(w_unit, vec3(0.0, 1.0, 0.0))
    if length(u) < DEGENERATE_EPSILON:
        u = cross(w_unit, vec3(1.0, 0.0, 0.0))
    u = normalized(u)
    return OrthonormalBasis(u=u, v=cross(u, w_unit), w=w_unit)


@ti.func
def basis_from_u(u: vec3) -> OrthonormalBasis:
    """Build a frame whose first axis is the direction of u.

    Computes ``v = normalize(u) x z``; if that is degenerate (u along the
    z axis) uses ``u x y`` instead. Then ``w = v x u``.
    """
    u_unit = normalized(u)
    v = cross(u_unit, vec3(0.0, 0.0, 1.0))
    if length(v) < DEGENERATE_EPSILON:
        v = cross(u_unit, vec3(0.0, 1.0, 0.0))
    v = normalized(v)
    return OrthonormalBasis(u=u_unit, v=v, w=cross(v, u_unit))


@ti.func
def basis_eval(frame: OrthonormalBasis, local_x: ti.f32, local_y: ti.f32, local_z: ti.f32) -> vec3:
    """Map local coordinates into world space: u*x + v*y + w*z."""
    return add(add(scale(frame.u, local_x), scale(frame.v, local_y)), scale(frame.w, local_z))


@ti.kernel
def _frame_from_vw_kernel(v: vec3, w: vec3, out: ti.types.ndarray(dtype=vec3, ndim=1)):
    frame = basis_from_vw(v, w)
    out[0] = frame.u
    out[1] = frame.v
    out[2] = frame.w


@ti.kernel
def _frame_from_u_kernel(u: vec3, out: ti.types.ndarray(dtype=vec3, ndim=1)):
    frame = basis_from_u(u)
    out[0] = frame.u
    out[1] = frame.v
    out[2] = frame.w


def frame_from_vw(v, w) -> npt.NDArray[np.float32]:
    """Compute basis_from_vw from Python.

    Args:
        v: Up direction as a 3-sequence.
        w: Forward direction as a 3-sequence.

    Returns:
        Array of shape (3, 3) with rows u, v, w.
    """
    out = np.zeros((3, 3), dtype=np.float32)
    _frame_from_vw_kernel(to_vec3(v), to_vec3(w), out)
    return out


def frame_from_u(u) -> npt.NDArray[np.float32]:
    """Compute basis_from_u from Python, returning rows u, v, w."""
    out = np.zeros((3, 3), dtype=np.float32)
    _frame_from_u_kernel(to_vec3(u), out)
    return out
