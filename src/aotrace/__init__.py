"""Ambient-occlusion ray tracer for sphere scenes, built on Taichi.

This package estimates per-pixel ambient occlusion for a static scene of
spheres seen through a perspective camera and produces an RGB
framebuffer:
- Analytic ray/sphere intersection with nearest-hit reduction
- Perspective primary-ray generation from an orthonormal camera frame
- Hemisphere sampling around surface normals with a seedable generator
- Parallel Taichi kernels over rays and hits

Subpackages:
    core: Vector algebra, rays, orthonormal bases, sampling and the render driver
    geometry: Hit records and the sphere primitive
    camera: Perspective camera with ray generation
    scene: Scene container, render configuration and demo scenes
    preview: Framebuffer export

Taichi must be initialised with ``ti.init`` before rendering.
"""

__version__ = "0.1.0"
