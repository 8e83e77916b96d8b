"""Preview module for framebuffer output.

Components:
    export: PNG export of the flat RGB framebuffer (Pillow)

Windowed presentation is left to the caller; the framebuffer is plain
bytes that any display surface can consume.
"""

from .export import framebuffer_to_array, save_png

__all__ = [
    "framebuffer_to_array",
    "save_png",
]
