"""Three-component vector math for the host and for Taichi kernels.

The host side uses ``Vector3``, an immutable dataclass used to describe
scenes and camera rays from Python. Inside kernels, vectors are Taichi
``vec3`` values (double precision) and the functions below provide the
operations Taichi's native operators do not.

Example:
    >>> from spheretrace.core.vector import Vector3
    >>> v = Vector3(3.0, 0.0, 4.0)
    >>> v.length()
    5.0
    >>> v.normalize()
    Vector3(x=0.6, y=0.0, z=0.8)
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass

import taichi as ti

# Double precision 3D vector type for kernels
vec3 = ti.types.vector(3, ti.f64)


@dataclass(frozen=True)
class Vector3:
    """An immutable 3D vector.

    Arithmetic operators accept either another ``Vector3`` (component-wise)
    or a scalar (applied to every component).

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def _components(self, other: "Vector3 | float") -> tuple[float, float, float]:
        if isinstance(other, Vector3):
            return other.x, other.y, other.z
        return other, other, other

    def __add__(self, other: "Vector3 | float") -> "Vector3":
        ox, oy, oz = self._components(other)
        return Vector3(self.x + ox, self.y + oy, self.z + oz)

    def __sub__(self, other: "Vector3 | float") -> "Vector3":
        ox, oy, oz = self._components(other)
        return Vector3(self.x - ox, self.y - oy, self.z - oz)

    def __mul__(self, other: "Vector3 | float") -> "Vector3":
        ox, oy, oz = self._components(other)
        return Vector3(self.x * ox, self.y * oy, self.z * oz)

    __rmul__ = __mul__

    def __truediv__(self, other: "Vector3 | float") -> "Vector3":
        ox, oy, oz = self._components(other)
        return Vector3(self.x / ox, self.y / oy, self.z / oz)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> "Vector3":
        """Return a unit vector in the same direction.

        The zero vector is returned unchanged, so callers may receive a
        non-unit result.
        """
        m = self.length()
        if m > 0.0:
            return self / m
        return self

    def reflect(self, normal: "Vector3") -> "Vector3":
        """Reflect this vector about ``normal``: v - 2 (v . n) n."""
        return self - normal * (2.0 * self.dot(normal))

    def lerp(self, other: "Vector3", t: float) -> "Vector3":
        """Linearly interpolate toward ``other`` (t=0 gives self)."""
        return Vector3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )

    def distance(self, other: "Vector3") -> float:
        return (self - other).length()

    def to_list(self) -> list[float]:
        """Components as a list, the form Taichi fields accept."""
        return [self.x, self.y, self.z]

    def __str__(self) -> str:
        return f"Vector3({self.x:f}, {self.y:f}, {self.z:f})"


# =============================================================================
# Kernel-side vector functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f64:
    return a.dot(b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    return a.cross(b)


@ti.func
def length_squared(v: vec3) -> ti.f64:
    return v.dot(v)


@ti.func
def length(v: vec3) -> ti.f64:
    return ti.sqrt(v.dot(v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector, returning the zero vector unchanged.

    Unlike ``tm.normalize`` this never divides by zero.
    """
    m = length(v)
    result = v
    if m > 0.0:
        result = v / m
    return result


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect ``incident`` about ``normal``.

    Args:
        incident: The vector to reflect.
        normal: The mirror normal (unit length for a length-preserving
            reflection).

    Returns:
        incident - 2 * dot(incident, normal) * normal.
    """
    return incident - 2.0 * incident.dot(normal) * normal


@ti.func
def lerp(a: vec3, b: vec3, t: ti.f64) -> vec3:
    return a + (b - a) * t


@ti.func
def distance(a: vec3, b: vec3) -> ti.f64:
    return length(a - b)


@ti.func
def near_zero_length(v: vec3) -> ti.i32:
    """1 if the vector has exactly zero length, 0 otherwise."""
    return ti.select(v.dot(v) == 0.0, 1, 0)
