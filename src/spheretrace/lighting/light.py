"""Point and ambient lights and the shading model.

Shading follows the classic Whitted recipe, with these particulars:

- Ambient lights add their intensity everywhere, ignoring occluders.
- Point lights cast a shadow ray from the surface point along the
  un-normalized vector to the light, over t in [epsilon, 1]. Any hit there
  puts the point in shadow.
- The diffuse term divides by |P| * |N|, where P is the surface point
  measured from the world origin (not the distance to the light).
- The specular term is (max(0, R . V) / (|R| |V|)) ** specular, with R the
  light vector mirrored about the normal and V the inverse view direction.

Each light's contribution is clamped below at zero; the sum over all
lights is clamped above at ``max_intensity`` by ``compute_total_lighting``.
"""

from dataclasses import dataclass, field
from enum import IntEnum

import taichi as ti

from spheretrace.core.config import DEFAULT_EPSILON, DEFAULT_MAX_INTENSITY
from spheretrace.core.status import (
    DEGENERATE_SPECULAR,
    check_status,
    clear_status,
    flag_error,
)
from spheretrace.core.vector import Vector3, length, reflect, vec3
from spheretrace.geometry.sphere import NO_SPECULAR
from spheretrace.scene.storage import (
    find_closest,
    light_intensities,
    light_kinds,
    light_positions,
    num_lights,
)


class LightType(IntEnum):
    """Kinds of light source."""

    POINT = 0
    AMBIENT = 1


_AMBIENT = int(LightType.AMBIENT)


@dataclass(frozen=True)
class Light:
    """A light source.

    Attributes:
        kind: Point or ambient.
        intensity: Light intensity, typically in [0, 1] but not clamped.
        position: World position (ignored for ambient lights).
    """

    kind: LightType
    intensity: float
    position: Vector3 = field(default_factory=Vector3)

    @classmethod
    def point(cls, position: Vector3, intensity: float) -> "Light":
        return cls(kind=LightType.POINT, intensity=intensity, position=position)

    @classmethod
    def ambient(cls, intensity: float) -> "Light":
        return cls(kind=LightType.AMBIENT, intensity=intensity)


@ti.dataclass
class ShadingParams:
    """Per-render shading constants passed down the kernel call chain.

    Attributes:
        epsilon: t_min for shadow and reflected rays.
        max_intensity: Ceiling on the summed light intensity.
    """

    epsilon: ti.f64
    max_intensity: ti.f64


@ti.func
def reflect_ray(ray: vec3, normal: vec3) -> vec3:
    """Mirror a vector pointing away from the surface about the normal."""
    return reflect(-ray, normal)


@ti.func
def compute_lighting(
    light_index: ti.i32,
    point: vec3,
    normal: vec3,
    inverse_dir: vec3,
    specular: ti.f64,
    params: ShadingParams,
) -> ti.f64:
    """Intensity contributed by one light at a surface point.

    Args:
        light_index: Index of the light in scene storage.
        point: Surface point.
        normal: Surface normal at the point.
        inverse_dir: Direction from the point back toward the viewer.
        specular: Specular exponent of the surface (-1 disables it).
        params: Shading constants.

    Returns:
        The non-negative intensity contributed by the light. Not clamped
        above.
    """
    intensity = light_intensities[light_index]
    result = 0.0

    if light_kinds[light_index] == _AMBIENT:
        result = intensity
    else:
        light_dir = light_positions[light_index] - point
        blocker = find_closest(point, light_dir, params.epsilon, 1.0)

        if blocker.hit == 0:
            light_value = ti.max(0.0, light_dir.dot(normal))
            total = intensity * light_value / (length(point) * length(normal))

            if specular > NO_SPECULAR:
                reflect_dir = reflect_ray(light_dir, normal)
                specular_value = reflect_dir.dot(inverse_dir)
                reflect_len = length(reflect_dir)
                inverse_len = length(inverse_dir)
                if reflect_len == 0.0 or inverse_len == 0.0:
                    flag_error(DEGENERATE_SPECULAR)
                else:
                    cosine = ti.max(0.0, specular_value) / (reflect_len * inverse_len)
                    total += intensity * cosine**specular

            result = ti.max(0.0, total)

    return result


@ti.func
def compute_total_lighting(
    point: vec3,
    normal: vec3,
    inverse_dir: vec3,
    specular: ti.f64,
    params: ShadingParams,
) -> ti.f64:
    """Sum of all lights at a point, clamped to ``params.max_intensity``."""
    total = 0.0
    for i in range(num_lights[None]):
        total += compute_lighting(i, point, normal, inverse_dir, specular, params)
    return ti.min(params.max_intensity, total)


@ti.kernel
def _lighting_kernel(
    light_index: ti.i32,
    point: vec3,
    normal: vec3,
    inverse_dir: vec3,
    specular: ti.f64,
    epsilon: ti.f64,
) -> ti.f64:
    params = ShadingParams(epsilon=epsilon, max_intensity=0.0)
    return compute_lighting(light_index, point, normal, inverse_dir, specular, params)


@ti.kernel
def _total_lighting_kernel(
    point: vec3,
    normal: vec3,
    inverse_dir: vec3,
    specular: ti.f64,
    epsilon: ti.f64,
    max_intensity: ti.f64,
) -> ti.f64:
    params = ShadingParams(epsilon=epsilon, max_intensity=max_intensity)
    return compute_total_lighting(point, normal, inverse_dir, specular, params)


def lighting_at(
    light_index: int,
    point: Vector3,
    normal: Vector3,
    inverse_dir: Vector3,
    specular: float = NO_SPECULAR,
    *,
    epsilon: float = DEFAULT_EPSILON,
) -> float:
    """Host-side intensity of one stored light at a surface point.

    Raises:
        DegenerateSpecularError: If the reflected or view vector has zero
            length while the specular term is enabled.
        DegenerateRayError: If the point coincides with a point light.
    """
    clear_status()
    value = _lighting_kernel(
        light_index, vec3(*point), vec3(*normal), vec3(*inverse_dir), specular, epsilon
    )
    check_status()
    return float(value)


def total_lighting_at(
    point: Vector3,
    normal: Vector3,
    inverse_dir: Vector3,
    specular: float = NO_SPECULAR,
    *,
    epsilon: float = DEFAULT_EPSILON,
    max_intensity: float = DEFAULT_MAX_INTENSITY,
) -> float:
    """Host-side summed and clamped intensity of all stored lights."""
    clear_status()
    value = _total_lighting_kernel(
        vec3(*point), vec3(*normal), vec3(*inverse_dir), specular, epsilon, max_intensity
    )
    check_status()
    return float(value)
