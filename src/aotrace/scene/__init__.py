"""Scene module for scene management and ambient-occlusion queries.

Components:
    scene: Sphere container with trace, occlusion and ambient-occlusion queries
    config: Render configuration with dictionary round-tripping
    sphere_grid: The sphere-grid demo scene and camera
"""

from .config import RenderConfig
from .scene import AO_CHUNK_SIZE, OCCLUSION_BIAS, Scene, SphereInfo, cast_ray
from .sphere_grid import (
    create_sphere_grid_camera,
    create_sphere_grid_config,
    create_sphere_grid_scene,
    sphere_grid_spheres,
)

__all__ = [
    "Scene",
    "SphereInfo",
    "cast_ray",
    "OCCLUSION_BIAS",
    "AO_CHUNK_SIZE",
    "RenderConfig",
    "create_sphere_grid_scene",
    "create_sphere_grid_camera",
    "create_sphere_grid_config",
    "sphere_grid_spheres",
]
