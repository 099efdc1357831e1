"""Scene container and the fixed reference scene.

The reference scene holds three unit spheres (red, green, blue) resting in
front of the camera on a huge yellow "ground" sphere, lit by two point
lights and an ambient light:

    Sphere  radius  center          color         specular  reflective
    red     1       (0, -1, 3)      255, 0, 0     100       0.01
    green   1       (-2, 0, 3)      0, 255, 0     25        0.5
    blue    1       (2, 0, 3)       0, 0, 255     15        0.1
    ground  2000    (0, -2001, 5)   255, 255, 0   1000      0.0

    Light    position     intensity
    point    (-4, 5, 2)   0.2
    point    (2, 1, 0)    0.2
    ambient  -            0.3

Example:
    >>> scene = create_default_scene()
    >>> len(scene.spheres), len(scene.lights)
    (4, 3)
"""

from __future__ import annotations

from dataclasses import dataclass

from spheretrace.core.vector import Vector3
from spheretrace.geometry.sphere import Sphere
from spheretrace.lighting.light import Light


@dataclass(frozen=True)
class Scene:
    """An ordered, immutable collection of spheres and lights.

    Order is significant: on exact intersection ties the earlier sphere
    wins.

    Attributes:
        spheres: Spheres in scene order.
        lights: Lights in scene order.
    """

    spheres: tuple[Sphere, ...]
    lights: tuple[Light, ...]


RED_SPHERE = Sphere(
    radius=1.0,
    center=Vector3(0.0, -1.0, 3.0),
    color=(255, 0, 0, 255),
    specular=100.0,
    reflective=0.01,
)
GREEN_SPHERE = Sphere(
    radius=1.0,
    center=Vector3(-2.0, 0.0, 3.0),
    color=(0, 255, 0, 255),
    specular=25.0,
    reflective=0.5,
)
BLUE_SPHERE = Sphere(
    radius=1.0,
    center=Vector3(2.0, 0.0, 3.0),
    color=(0, 0, 255, 255),
    specular=15.0,
    reflective=0.1,
)
GROUND_SPHERE = Sphere(
    radius=2000.0,
    center=Vector3(0.0, -2001.0, 5.0),
    color=(255, 255, 0, 255),
    specular=1000.0,
    reflective=0.0,
)

LIGHTS = (
    Light.point(Vector3(-4.0, 5.0, 2.0), 0.2),
    Light.point(Vector3(2.0, 1.0, 0.0), 0.2),
    Light.ambient(0.3),
)


def create_default_scene() -> Scene:
    """Create the fixed reference scene (4 spheres, 3 lights)."""
    return Scene(
        spheres=(RED_SPHERE, GREEN_SPHERE, BLUE_SPHERE, GROUND_SPHERE),
        lights=LIGHTS,
    )
