"""Camera models for primary ray generation."""

from .perspective import PerspectiveCamera, camera_ray, check_screen_size

__all__ = [
    "PerspectiveCamera",
    "camera_ray",
    "check_screen_size",
]
