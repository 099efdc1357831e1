"""Scene module: scene storage, closest-hit search and the default scene.

Components:
    storage: Spheres and lights in Taichi fields, ``find_closest``
    default_scene: ``Scene`` container and the fixed reference scene

``default_scene`` depends on the lighting module, which itself searches the
stored scene, so it is not re-exported here. Import it directly:

    from spheretrace.scene.default_scene import create_default_scene
"""

from .storage import (
    FLOAT_MAX,
    MAX_LIGHTS,
    MAX_SPHERES,
    ClosestHit,
    add_light,
    add_sphere,
    clear_scene,
    find_closest,
    find_closest_hit,
    get_light_count,
    get_sphere_count,
    load_scene,
)

__all__ = [
    "ClosestHit",
    "add_sphere",
    "add_light",
    "clear_scene",
    "load_scene",
    "get_sphere_count",
    "get_light_count",
    "find_closest",
    "find_closest_hit",
    "FLOAT_MAX",
    "MAX_SPHERES",
    "MAX_LIGHTS",
]
