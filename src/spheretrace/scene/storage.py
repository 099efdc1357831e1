"""Scene storage and closest-hit search.

Spheres and lights are stored in Taichi fields in a Structure of Arrays
layout, in insertion order. Order matters: ``find_closest`` keeps the first
sphere encountered on exact ties.

Example:
    >>> from spheretrace.core.vector import Vector3
    >>> from spheretrace.scene.default_scene import create_default_scene
    >>> from spheretrace.scene.storage import find_closest_hit, load_scene
    >>> load_scene(create_default_scene())
    >>> find_closest_hit(Vector3(), Vector3(0.0, 0.0, 1.0), 1.0)  # grazes the red sphere
    (0, 3.0)
"""

import sys
from typing import TYPE_CHECKING

import taichi as ti

from spheretrace.core.status import check_status, clear_status
from spheretrace.core.vector import Vector3, vec3
from spheretrace.geometry.sphere import Sphere, compute_intersection

if TYPE_CHECKING:
    from spheretrace.lighting.light import Light
    from spheretrace.scene.default_scene import Scene

# Largest representable ray parameter, used as "no limit" and "no hit"
FLOAT_MAX = sys.float_info.max

# Maximum number of primitives and lights supported in the scene
MAX_SPHERES = 64
MAX_LIGHTS = 16


@ti.dataclass
class ClosestHit:
    """Result of a closest-hit query.

    Attributes:
        hit: 1 if some sphere was hit, 0 otherwise.
        sphere_index: Index of the hit sphere, -1 on a miss.
        t: Ray parameter of the hit, ``FLOAT_MAX`` on a miss.
    """

    hit: ti.i32
    sphere_index: ti.i32
    t: ti.f64


# Sphere storage
sphere_centers = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(4, dtype=ti.i32, shape=MAX_SPHERES)
sphere_speculars = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
sphere_reflectives = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Light storage
light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_positions = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f64, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all spheres and lights.

    Only the counts are reset; stale field data is overwritten by the next
    additions.
    """
    num_spheres[None] = 0
    num_lights[None] = 0


def add_sphere(sphere: Sphere) -> int:
    """Append a sphere to the scene.

    Args:
        sphere: The sphere to add.

    Returns:
        The index of the added sphere.

    Raises:
        ValueError: If the sphere parameters are invalid.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    sphere.validate()
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = sphere.center.to_list()
    sphere_radii[idx] = sphere.radius
    sphere_colors[idx] = list(sphere.color)
    sphere_speculars[idx] = sphere.specular
    sphere_reflectives[idx] = sphere.reflective
    num_spheres[None] = idx + 1
    return idx


def add_light(light: "Light") -> int:
    """Append a light to the scene.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_kinds[idx] = int(light.kind)
    light_positions[idx] = light.position.to_list()
    light_intensities[idx] = light.intensity
    num_lights[None] = idx + 1
    return idx


def load_scene(scene: "Scene") -> None:
    """Replace the stored scene with ``scene``, preserving its order."""
    clear_scene()
    for sphere in scene.spheres:
        add_sphere(sphere)
    for light in scene.lights:
        add_light(light)


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def find_closest(origin: vec3, direction: vec3, t_min: ti.f64, t_max: ti.f64) -> ClosestHit:
    """Find the nearest sphere hit along a ray.

    Both roots of every sphere are tested against the closed interval
    [t_min, t_max]. A root replaces the current best only if strictly
    smaller, so the first sphere in scene order wins exact ties.

    Args:
        origin: Ray origin.
        direction: Ray direction.
        t_min: Smallest accepted ray parameter.
        t_max: Largest accepted ray parameter.

    Returns:
        The closest hit, or a record with hit == 0 and sphere_index == -1.
    """
    closest_t = FLOAT_MAX
    closest_index = -1

    for i in range(num_spheres[None]):
        t1, t2 = compute_intersection(origin, direction, sphere_centers[i], sphere_radii[i])
        if t_min <= t1 <= t_max and t1 < closest_t:
            closest_index = i
            closest_t = t1
        if t_min <= t2 <= t_max and t2 < closest_t:
            closest_index = i
            closest_t = t2

    return ClosestHit(
        hit=ti.select(closest_index >= 0, 1, 0), sphere_index=closest_index, t=closest_t
    )


_query_index = ti.field(dtype=ti.i32, shape=())
_query_t = ti.field(dtype=ti.f64, shape=())


@ti.kernel
def _find_closest_kernel(origin: vec3, direction: vec3, t_min: ti.f64, t_max: ti.f64):
    result = find_closest(origin, direction, t_min, t_max)
    _query_index[None] = result.sphere_index
    _query_t[None] = result.t


def find_closest_hit(
    origin: Vector3,
    direction: Vector3,
    t_min: float,
    t_max: float = FLOAT_MAX,
) -> tuple[int | None, float]:
    """Host-side closest-hit query against the stored scene.

    Returns:
        Tuple (sphere_index, t); sphere_index is None on a miss, in which
        case t is ``FLOAT_MAX``.

    Raises:
        DegenerateRayError: If direction has zero length and the scene is
            not empty.
    """
    clear_status()
    _find_closest_kernel(vec3(*origin), vec3(*direction), t_min, t_max)
    check_status()
    index = int(_query_index[None])
    return (index if index >= 0 else None), float(_query_t[None])
