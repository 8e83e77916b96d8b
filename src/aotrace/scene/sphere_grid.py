"""Sphere-grid demo scene.

A 19 x 19 grid of unit spheres on the y = 0 plane, spaced two units apart
so neighbours touch. Seen from above and behind, the contact points
between spheres show the ambient-occlusion darkening clearly.

Grid layout:
    x in {-18, -16, ..., 18}
    z in {-36, -34, ..., 0}
    y = 0, radius 1

Camera:
    eye (0, 10, 8), looking at (0, 0, -9), up (0, 1, 0), far 3.
    The sensor is 3 units wide and 3 * screen_height / screen_width tall
    so the raster aspect ratio is preserved.
"""

from aotrace.camera.perspective import PerspectiveCamera
from aotrace.scene.config import RenderConfig
from aotrace.scene.scene import Scene, SphereInfo

GRID_X_RANGE = range(-9, 10)
GRID_Z_RANGE = range(-18, 1)
GRID_SPACING = 2.0
SPHERE_RADIUS = 1.0

CAMERA_EYE = (0.0, 10.0, 8.0)
CAMERA_LOOK_AT = (0.0, 0.0, -9.0)
CAMERA_UP = (0.0, 1.0, 0.0)
SENSOR_WIDTH = 3.0
CAMERA_FAR = 3.0

DEFAULT_WIDTH = 900
DEFAULT_HEIGHT = 700
DEFAULT_SAMPLES = 1


def sphere_grid_spheres() -> list[SphereInfo]:
    """Spheres of the grid, x-major order."""
    return [
        SphereInfo(center=(x * GRID_SPACING, 0.0, z * GRID_SPACING), radius=SPHERE_RADIUS)
        for x in GRID_X_RANGE
        for z in GRID_Z_RANGE
    ]


def create_sphere_grid_scene() -> Scene:
    """Create a Scene holding the sphere grid."""
    scene = Scene()
    for sphere in sphere_grid_spheres():
        scene.add_primitive(sphere)
    return scene


def create_sphere_grid_camera(
    screen_width: int = DEFAULT_WIDTH, screen_height: int = DEFAULT_HEIGHT
) -> PerspectiveCamera:
    """Create the demo camera with a sensor matching the raster aspect ratio."""
    return PerspectiveCamera(
        eye=CAMERA_EYE,
        look_at=CAMERA_LOOK_AT,
        up=CAMERA_UP,
        width=SENSOR_WIDTH,
        height=SENSOR_WIDTH * screen_height / screen_width,
        far=CAMERA_FAR,
    )


def create_sphere_grid_config(
    screen_width: int = DEFAULT_WIDTH,
    screen_height: int = DEFAULT_HEIGHT,
    samples: int = DEFAULT_SAMPLES,
    seed: int | None = None,
) -> RenderConfig:
    """Create a RenderConfig for the full sphere-grid render."""
    return RenderConfig(
        camera=create_sphere_grid_camera(screen_width, screen_height),
        spheres=sphere_grid_spheres(),
        width=screen_width,
        height=screen_height,
        samples=samples,
        seed=seed,
    )
