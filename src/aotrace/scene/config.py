"""Render configuration and its dictionary form.

A RenderConfig bundles everything a render needs: the spheres, the
camera, the raster size, the ambient-occlusion sample count and an
optional seed. ``to_dict``/``from_dict`` use plain lists and numbers, so
a config round-trips through JSON.

Example:
    >>> from aotrace.scene.config import RenderConfig
    >>> config = RenderConfig.from_dict({
    ...     "spheres": [{"center": [0, 0, 0], "radius": 1}],
    ...     "camera": {"eye": [0, 0, 5], "look_at": [0, 0, 0], "up": [0, 1, 0],
    ...                "width": 1, "height": 1, "far": 1},
    ...     "width": 64,
    ...     "height": 64,
    ...     "samples": 8,
    ... })
    >>> len(config.build_scene())
    1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from aotrace.camera.perspective import PerspectiveCamera, check_screen_size
from aotrace.scene.scene import Scene, SphereInfo


@dataclass
class RenderConfig:
    """Configuration for a single render.

    Attributes:
        camera: The camera producing primary rays.
        spheres: Spheres in the scene, in insertion order.
        width: Raster width in pixels (at least 2).
        height: Raster height in pixels (at least 2).
        samples: Ambient-occlusion rays per visible pixel (at least 1).
        seed: Seed for hemisphere sampling, or None for a random seed.

    Raises:
        ValueError: If the raster or sample count is invalid.
    """

    camera: PerspectiveCamera
    spheres: list[SphereInfo] = field(default_factory=list)
    width: int = 900
    height: int = 700
    samples: int = 1
    seed: int | None = None

    def __post_init__(self) -> None:
        check_screen_size(self.width, self.height)
        if self.samples < 1:
            raise ValueError(f"samples must be at least 1, got {self.samples}")

    def build_scene(self) -> Scene:
        """Create a Scene holding the configured spheres."""
        scene = Scene()
        for sphere in self.spheres:
            scene.add_primitive(sphere)
        return scene

    def to_dict(self) -> dict[str, Any]:
        return {
            "camera": self.camera.to_dict(),
            "spheres": [s.to_dict() for s in self.spheres],
            "width": self.width,
            "height": self.height,
            "samples": self.samples,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Build a config from its dictionary form.

        ``spheres``, ``samples`` and ``seed`` are optional; ``width`` and
        ``height`` default to 900 x 700.

        Raises:
            ValueError: If a required key is missing or a value is invalid.
        """
        if "camera" not in data:
            raise ValueError("Render config is missing key 'camera'")
        seed = data.get("seed")
        return cls(
            camera=PerspectiveCamera.from_dict(data["camera"]),
            spheres=[SphereInfo.from_dict(s) for s in data.get("spheres", [])],
            width=int(data.get("width", 900)),
            height=int(data.get("height", 700)),
            samples=int(data.get("samples", 1)),
            seed=None if seed is None else int(seed),
        )
