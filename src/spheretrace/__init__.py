"""Whitted-style sphere ray tracer built on Taichi.

This package renders a small fixed scene of spheres lit by point and ambient
lights, with shadow rays and recursive mirror reflection, and writes the
result as a PNG.

Subpackages:
    core: Vector utilities, kernel status, tracer and the render driver
    geometry: Sphere primitive and ray-sphere intersection
    lighting: Point/ambient lights and the shading model
    scene: Scene storage in Taichi fields and the default scene
    preview: Image export

Taichi must be initialised (see ``spheretrace.core.runtime.init_runtime``)
before importing any module that declares Taichi fields.
"""

__version__ = "0.1.0"
