"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import numpy as np
import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def rng():
    """A seeded NumPy generator for hemisphere sampling."""
    return np.random.default_rng(1234)


@pytest.fixture
def unit_sphere_scene():
    """A scene holding one unit sphere at the origin."""
    from aotrace.scene.scene import Scene

    scene = Scene()
    scene.add_sphere((0.0, 0.0, 0.0), 1.0)
    return scene


@pytest.fixture
def front_camera():
    """A camera on the +z axis looking at the origin."""
    from aotrace.camera.perspective import PerspectiveCamera

    return PerspectiveCamera(
        eye=(0.0, 0.0, 5.0),
        look_at=(0.0, 0.0, 0.0),
        up=(0.0, 1.0, 0.0),
        width=1.0,
        height=1.0,
        far=1.0,
    )
