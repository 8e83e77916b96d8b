"""Perspective camera model for primary ray generation.

The camera is positioned by eye, look-at and up points. Its frame comes
from ``basis_from_vw(up, look_at - eye)``:

- u: right in the image plane
- v: up in the image plane
- w: forward, from the eye toward the look-at point

A sensor of size width x height sits at distance ``far`` along w. Pixel
(xscreen, yscreen) of a screen_width x screen_height raster maps to::

    xcamera = (xscreen / (screen_width - 1) - 0.5) * width
    ycamera = (yscreen / (screen_height - 1) - 0.5) * height
    direction = u * xcamera + v * ycamera + w * far

Rays are produced in row-major order: row yscreen = 0 first, leftmost
column first within a row. Row 0 lies at the bottom of the sensor.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from aotrace.camera.perspective import PerspectiveCamera
    >>> camera = PerspectiveCamera(
    ...     eye=(0.0, 0.0, 5.0),
    ...     look_at=(0.0, 0.0, 0.0),
    ...     up=(0.0, 1.0, 0.0),
    ...     width=1.0,
    ...     height=1.0,
    ...     far=1.0,
    ... )
    >>> rays = camera.generate_rays(64, 48)
    >>> len(rays)
    3072
"""

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti

from aotrace.core.basis import OrthonormalBasis, basis_eval, frame_from_vw
from aotrace.core.ray import Ray, RayBatch, make_ray
from aotrace.core.vector import to_vec3, vec3

# Smallest raster edge accepted by generate_rays
MIN_SCREEN_SIZE = 2


@dataclass(frozen=True)
class PerspectiveCamera:
    """Configuration for a perspective camera.

    Attributes:
        eye: Camera position in world space (x, y, z).
        look_at: Point the camera is looking at (x, y, z).
        up: Up direction for camera orientation, typically (0, 1, 0).
        width: Sensor width in world units.
        height: Sensor height in world units.
        far: Distance from the eye to the sensor plane along the view axis.

    Raises:
        ValueError: If eye equals look_at, up is a zero vector, or a sensor
            dimension is not positive and finite.
    """

    eye: tuple[float, float, float]
    look_at: tuple[float, float, float]
    up: tuple[float, float, float]
    width: float
    height: float
    far: float

    def __post_init__(self) -> None:
        for name in ("eye", "look_at", "up"):
            value = tuple(float(c) for c in getattr(self, name))
            if len(value) != 3 or not all(math.isfinite(c) for c in value):
                raise ValueError(f"Camera {name} must be three finite floats, got {value}")
            object.__setattr__(self, name, value)

        for name in ("width", "height", "far"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"Camera {name} must be positive and finite, got {value}")
            object.__setattr__(self, name, value)

        if self.eye == self.look_at:
            raise ValueError("Camera eye and look_at must differ")
        if not any(self.up):
            raise ValueError("Camera up vector must be non-zero")

    @property
    def forward(self) -> tuple[float, float, float]:
        """Unnormalized view direction look_at - eye."""
        return (
            self.look_at[0] - self.eye[0],
            self.look_at[1] - self.eye[1],
            self.look_at[2] - self.eye[2],
        )

    @property
    def frame(self) -> npt.NDArray[np.float32]:
        """Camera frame as a (3, 3) array with rows u (right), v (up), w (forward)."""
        return frame_from_vw(self.up, self.forward)

    def generate_rays(self, screen_width: int, screen_height: int) -> RayBatch:
        """Generate one primary ray per pixel in row-major order.

        Args:
            screen_width: Raster width in pixels, at least 2.
            screen_height: Raster height in pixels, at least 2.

        Returns:
            RayBatch of screen_width * screen_height rays; index
            ``yscreen * screen_width + xscreen`` is pixel (xscreen, yscreen).

        Raises:
            ValueError: If either dimension is below MIN_SCREEN_SIZE.
        """
        check_screen_size(screen_width, screen_height)

        count = screen_width * screen_height
        origins = np.zeros((count, 3), dtype=np.float32)
        directions = np.zeros((count, 3), dtype=np.float32)

        u, v, w = self.frame
        _generate_rays_kernel(
            to_vec3(self.eye),
            to_vec3(u),
            to_vec3(v),
            to_vec3(w),
            self.width,
            self.height,
            self.far,
            screen_width,
            screen_height,
            origins,
            directions,
        )
        return RayBatch(origins, directions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "eye": list(self.eye),
            "look_at": list(self.look_at),
            "up": list(self.up),
            "width": self.width,
            "height": self.height,
            "far": self.far,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PerspectiveCamera":
        try:
            return cls(
                eye=tuple(data["eye"]),
                look_at=tuple(data["look_at"]),
                up=tuple(data.get("up", (0.0, 1.0, 0.0))),
                width=data["width"],
                height=data["height"],
                far=data["far"],
            )
        except KeyError as e:
            raise ValueError(f"Camera config is missing key {e}") from e


def check_screen_size(screen_width: int, screen_height: int) -> None:
    """Reject rasters whose ray mapping would divide by zero.

    Raises:
        ValueError: If either dimension is below MIN_SCREEN_SIZE.
    """
    if screen_width < MIN_SCREEN_SIZE or screen_height < MIN_SCREEN_SIZE:
        raise ValueError(
            f"Screen dimensions ({screen_width}x{screen_height}) must both be at "
            f"least {MIN_SCREEN_SIZE}"
        )


@ti.func
def camera_ray(
    frame: OrthonormalBasis,
    eye: vec3,
    sensor_width: ti.f32,
    sensor_height: ti.f32,
    far: ti.f32,
    xscreen: ti.i32,
    yscreen: ti.i32,
    screen_width: ti.i32,
    screen_height: ti.i32,
) -> Ray:
    """Compute the primary ray through pixel (xscreen, yscreen)."""
    xcamera = (ti.cast(xscreen, ti.f32) / ti.cast(screen_width - 1, ti.f32) - 0.5) * sensor_width
    ycamera = (ti.cast(yscreen, ti.f32) / ti.cast(screen_height - 1, ti.f32) - 0.5) * sensor_height
    return make_ray(eye, basis_eval(frame, xcamera, ycamera, far))


@ti.kernel
def _generate_rays_kernel(
    eye: vec3,
    u: vec3,
    v: vec3,
    w: vec3,
    sensor_width: ti.f32,
    sensor_height: ti.f32,
    far: ti.f32,
    screen_width: ti.i32,
    screen_height: ti.i32,
    origins: ti.types.ndarray(dtype=vec3, ndim=1),
    directions: ti.types.ndarray(dtype=vec3, ndim=1),
):
    for yscreen, xscreen in ti.ndrange(screen_height, screen_width):
        frame = OrthonormalBasis(u=u, v=v, w=w)
        ray = camera_ray(
            frame,
            eye,
            sensor_width,
            sensor_height,
            far,
            xscreen,
            yscreen,
            screen_width,
            screen_height,
        )
        index = yscreen * screen_width + xscreen
        origins[index] = ray.origin
        directions[index] = ray.direction
