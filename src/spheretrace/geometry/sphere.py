"""Sphere primitive and ray-sphere intersection.

The intersection solves the quadratic obtained by substituting the ray
P = O + tD into |P - C|^2 = r^2:

    a = D . D
    b = 2 (O - C) . D
    c = (O - C) . (O - C) - r^2

using the textbook quadratic formula. Both roots are returned, unordered
(the ``+sqrt`` root first), and callers pick the one they want.

Example:
    >>> from spheretrace.core.vector import Vector3
    >>> from spheretrace.geometry.sphere import Sphere, intersect_sphere
    >>> sphere = Sphere(radius=1.0, center=Vector3(0.0, 0.0, 3.0))
    >>> intersect_sphere(sphere, Vector3(), Vector3(0.0, 0.0, 1.0))
    (4.0, 2.0)
"""

from dataclasses import dataclass, field

import taichi as ti

from spheretrace.core.status import DEGENERATE_RAY, check_status, clear_status, flag_error
from spheretrace.core.vector import Vector3, vec3

# Returned for both roots when the ray misses
NO_INTERSECTION = -1.0

# Specular exponent that disables the highlight
NO_SPECULAR = -1.0

vec2 = ti.types.vector(2, ti.f64)


@dataclass(frozen=True)
class Sphere:
    """A sphere with the material parameters used for shading.

    Attributes:
        radius: Sphere radius.
        center: Center point in world space.
        color: Base RGBA color, each channel in [0, 255].
        specular: Specular exponent; ``NO_SPECULAR`` (-1) disables the
            highlight.
        reflective: Fraction of the final color taken from the mirror
            reflection, in [0, 1].
    """

    radius: float
    center: Vector3 = field(default_factory=Vector3)
    color: tuple[int, int, int, int] = (0, 0, 0, 255)
    specular: float = NO_SPECULAR
    reflective: float = 0.0

    def validate(self) -> None:
        """Check the sphere parameters.

        Raises:
            ValueError: If the radius is negative, a color channel is
                outside [0, 255] or reflective is outside [0, 1].
        """
        if self.radius < 0.0:
            raise ValueError(f"Sphere radius must be non-negative, got {self.radius}")
        if len(self.color) != 4 or any(not 0 <= c <= 255 for c in self.color):
            raise ValueError(f"Sphere color must be 4 channels in [0, 255], got {self.color}")
        if not 0.0 <= self.reflective <= 1.0:
            raise ValueError(f"Sphere reflective must be in [0, 1], got {self.reflective}")


@ti.func
def compute_intersection(origin: vec3, direction: vec3, center: vec3, radius: ti.f64):
    """Intersect a ray with a sphere.

    A zero-length direction has no meaningful intersection: it flags
    ``DEGENERATE_RAY`` and reports a miss.

    Args:
        origin: Ray origin.
        direction: Ray direction (need not be normalized).
        center: Sphere center.
        radius: Sphere radius.

    Returns:
        Tuple (t1, t2) of ray parameters, or (-1, -1) when the ray misses.
    """
    oc = origin - center
    a = direction.dot(direction)
    t1 = NO_INTERSECTION
    t2 = NO_INTERSECTION

    if a == 0.0:
        flag_error(DEGENERATE_RAY)
    else:
        b = 2.0 * oc.dot(direction)
        c = oc.dot(oc) - radius * radius
        discriminant = b * b - 4.0 * a * c
        if discriminant >= 0.0:
            sqrt_d = ti.sqrt(discriminant)
            t1 = (-b + sqrt_d) / (2.0 * a)
            t2 = (-b - sqrt_d) / (2.0 * a)

    return t1, t2


@ti.kernel
def _intersect_kernel(origin: vec3, direction: vec3, center: vec3, radius: ti.f64) -> vec2:
    t1, t2 = compute_intersection(origin, direction, center, radius)
    return vec2(t1, t2)


def intersect_sphere(sphere: Sphere, origin: Vector3, direction: Vector3) -> tuple[float, float]:
    """Host-side ray-sphere intersection.

    Args:
        sphere: The sphere to test.
        origin: Ray origin.
        direction: Ray direction.

    Returns:
        The two roots (t1, t2), or (-1.0, -1.0) on a miss.

    Raises:
        DegenerateRayError: If direction has zero length.
    """
    clear_status()
    roots = _intersect_kernel(
        vec3(*origin),
        vec3(*direction),
        vec3(*sphere.center),
        sphere.radius,
    )
    check_status()
    return float(roots[0]), float(roots[1])
