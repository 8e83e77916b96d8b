"""Tests for RenderConfig.

Tests cover:
- Dictionary round trip
- Defaults for optional keys
- Building a Scene from the config
- Validation
"""

import json

import pytest


def camera_dict():
    return {
        "eye": [0.0, 0.0, 5.0],
        "look_at": [0.0, 0.0, 0.0],
        "up": [0.0, 1.0, 0.0],
        "width": 1.0,
        "height": 1.0,
        "far": 1.0,
    }


class TestRenderConfig:
    """Tests for RenderConfig serialization and validation."""

    def test_json_round_trip(self):
        """Test to_dict output survives JSON and from_dict."""
        from aotrace.scene.config import RenderConfig

        config = RenderConfig.from_dict(
            {
                "camera": camera_dict(),
                "spheres": [{"center": [0, 0, 0], "radius": 1}, {"center": [2, 0, 0], "radius": 0.5}],
                "width": 32,
                "height": 24,
                "samples": 4,
                "seed": 17,
            }
        )

        restored = RenderConfig.from_dict(json.loads(json.dumps(config.to_dict())))

        assert restored == config

    def test_defaults(self):
        """Test optional keys fall back to the 900x700, 1-sample defaults."""
        from aotrace.scene.config import RenderConfig

        config = RenderConfig.from_dict({"camera": camera_dict()})

        assert (config.width, config.height, config.samples) == (900, 700, 1)
        assert config.seed is None
        assert config.spheres == []

    def test_build_scene_keeps_order(self):
        """Test build_scene adds spheres in config order."""
        from aotrace.scene.config import RenderConfig

        config = RenderConfig.from_dict(
            {
                "camera": camera_dict(),
                "spheres": [{"center": [0, 0, 0], "radius": 1}, {"center": [2, 0, 0], "radius": 0.5}],
            }
        )

        scene = config.build_scene()

        assert len(scene) == 2
        assert scene.spheres[1].radius == 0.5

    def test_missing_camera(self):
        """Test the camera is required."""
        from aotrace.scene.config import RenderConfig

        with pytest.raises(ValueError, match="camera"):
            RenderConfig.from_dict({"spheres": []})

    def test_missing_sphere_key(self):
        """Test a sphere without a radius is rejected."""
        from aotrace.scene.config import RenderConfig

        with pytest.raises(ValueError, match="radius"):
            RenderConfig.from_dict({"camera": camera_dict(), "spheres": [{"center": [0, 0, 0]}]})

    def test_invalid_samples(self):
        """Test samples below 1 are rejected."""
        from aotrace.scene.config import RenderConfig

        with pytest.raises(ValueError, match="samples"):
            RenderConfig.from_dict({"camera": camera_dict(), "samples": 0})

    def test_invalid_raster(self):
        """Test raster dimensions below 2 are rejected."""
        from aotrace.scene.config import RenderConfig

        with pytest.raises(ValueError, match="at least 2"):
            RenderConfig.from_dict({"camera": camera_dict(), "width": 1})
