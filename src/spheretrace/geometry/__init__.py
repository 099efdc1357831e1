"""Geometry module: the sphere primitive and ray-sphere intersection.

``compute_intersection`` is a Taichi function for use in kernels;
``intersect_sphere`` is its host-side wrapper.
"""

from .sphere import NO_INTERSECTION, NO_SPECULAR, Sphere, compute_intersection, intersect_sphere

__all__ = [
    "Sphere",
    "compute_intersection",
    "intersect_sphere",
    "NO_INTERSECTION",
    "NO_SPECULAR",
]
