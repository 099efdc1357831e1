"""Whitted-style ray tracing with shadows and mirror reflection.

``trace_ray`` resolves the color seen along a ray:

1. Find the closest sphere hit in [t_min, t_max]; a miss returns the
   background gray.
2. Shade the hit point with every light (see ``spheretrace.lighting``) and
   scale the sphere's base color by the clamped intensity.
3. If the sphere is reflective and depth remains, trace the mirrored ray
   from the hit point and blend:
   ``reflected * reflective + local * (1 - reflective)``.

Taichi functions cannot recurse, so the reflection chain is unrolled up to
``MAX_REFLECTION_DEPTH`` bounces: each bounce records its local color and
reflective coefficient, then the blends are folded back from the deepest
bounce outward, which gives the same result as the recursive formulation.

Channels are converted by truncating toward zero and saturating to
[0, 255], so a blend can never wrap around.
"""

import taichi as ti

from spheretrace.core.config import DEFAULT_EPSILON, DEFAULT_MAX_INTENSITY, MAX_REFLECTION_DEPTH
from spheretrace.core.status import ZERO_DIRECTION, check_status, clear_status, flag_error
from spheretrace.core.vector import Vector3, near_zero_length, normalize, reflect, vec3
from spheretrace.lighting.light import ShadingParams, compute_total_lighting
from spheretrace.scene.storage import (
    FLOAT_MAX,
    find_closest,
    sphere_centers,
    sphere_colors,
    sphere_reflectives,
    sphere_speculars,
)

# 8-bit RGBA color
rgba = ti.types.vector(4, ti.i32)

BACKGROUND_COLOR = (125, 125, 125, 255)

# Primary ray plus one entry per reflection bounce
_LEVELS = MAX_REFLECTION_DEPTH + 1


@ti.func
def to_channel(value: ti.f64) -> ti.i32:
    """Truncate a channel value toward zero and saturate it to [0, 255].

    Saturation happens before the integer cast so large values cannot
    overflow.
    """
    return ti.cast(ti.min(255.0, ti.max(0.0, value)), ti.i32)


@ti.func
def trace_ray(
    origin: vec3,
    direction: vec3,
    depth: ti.i32,
    t_min: ti.f64,
    t_max: ti.f64,
    params: ShadingParams,
) -> rgba:
    """Trace a ray through the stored scene.

    Args:
        origin: Ray origin.
        direction: Ray direction (need not be normalized; zero length
            flags ``ZERO_DIRECTION``).
        depth: Remaining reflection bounces, at most MAX_REFLECTION_DEPTH.
        t_min: Smallest accepted ray parameter for the first hit.
        t_max: Largest accepted ray parameter for every hit.
        params: Shading constants.

    Returns:
        The RGBA color seen along the ray.
    """
    local_colors = ti.Matrix.zero(ti.i32, _LEVELS, 4)
    reflectives = ti.Vector.zero(ti.f64, _LEVELS)
    blends = ti.Vector.zero(ti.i32, _LEVELS)

    ray_origin = origin
    ray_dir = direction
    ray_t_min = t_min
    active = 1

    for level in ti.static(range(_LEVELS)):
        if active == 1:
            if near_zero_length(ray_dir):
                flag_error(ZERO_DIRECTION)

            closest = find_closest(ray_origin, ray_dir, ray_t_min, t_max)
            if closest.hit == 0:
                for c in ti.static(range(4)):
                    local_colors[level, c] = BACKGROUND_COLOR[c]
                active = 0
            else:
                idx = closest.sphere_index
                point = ray_origin + ray_dir * closest.t
                normal = normalize(point - sphere_centers[idx])
                light = compute_total_lighting(
                    point, normal, -ray_dir, sphere_speculars[idx], params
                )

                base = sphere_colors[idx]
                for c in ti.static(range(3)):
                    local_colors[level, c] = to_channel(base[c] * light)
                local_colors[level, 3] = base[3]

                reflective = sphere_reflectives[idx]
                if reflective <= 0.0 or depth - level <= 0:
                    active = 0
                else:
                    blends[level] = 1
                    reflectives[level] = reflective
                    ray_origin = point
                    ray_dir = reflect(ray_dir, normal)
                    ray_t_min = params.epsilon

    # Fold reflections back from the deepest bounce
    last = _LEVELS - 1
    color = rgba(
        local_colors[last, 0], local_colors[last, 1], local_colors[last, 2], local_colors[last, 3]
    )
    for level in ti.static(range(_LEVELS - 2, -1, -1)):
        local = rgba(
            local_colors[level, 0],
            local_colors[level, 1],
            local_colors[level, 2],
            local_colors[level, 3],
        )
        if blends[level] == 1:
            r = reflectives[level]
            color = rgba(
                ti.min(255, to_channel(color[0] * r) + to_channel(local[0] * (1.0 - r))),
                ti.min(255, to_channel(color[1] * r) + to_channel(local[1] * (1.0 - r))),
                ti.min(255, to_channel(color[2] * r) + to_channel(local[2] * (1.0 - r))),
                color[3],
            )
        else:
            color = local

    return color


@ti.kernel
def _trace_kernel(
    origin: vec3,
    direction: vec3,
    depth: ti.i32,
    t_min: ti.f64,
    t_max: ti.f64,
    epsilon: ti.f64,
    max_intensity: ti.f64,
) -> rgba:
    params = ShadingParams(epsilon=epsilon, max_intensity=max_intensity)
    return trace_ray(origin, direction, depth, t_min, t_max, params)


def trace_color(
    origin: Vector3,
    direction: Vector3,
    depth: int,
    t_min: float,
    t_max: float = FLOAT_MAX,
    *,
    epsilon: float = DEFAULT_EPSILON,
    max_intensity: float = DEFAULT_MAX_INTENSITY,
) -> tuple[int, int, int, int]:
    """Host-side trace of a single ray through the stored scene.

    Returns:
        The (r, g, b, a) color seen along the ray.

    Raises:
        ValueError: If depth is outside [0, MAX_REFLECTION_DEPTH].
        RenderError: If the kernel met a degenerate vector.
    """
    if not 0 <= depth <= MAX_REFLECTION_DEPTH:
        raise ValueError(f"depth must be in [0, {MAX_REFLECTION_DEPTH}], got {depth}")

    clear_status()
    color = _trace_kernel(
        vec3(*origin), vec3(*direction), depth, t_min, t_max, epsilon, max_intensity
    )
    check_status()
    return int(color[0]), int(color[1]), int(color[2]), int(color[3])
