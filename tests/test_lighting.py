"""Unit tests for the lighting model.

Tests cover:
- Ambient lights ignore geometry and occluders
- Diffuse term, including its division by the distance of the point
  from the world origin
- Specular highlights and clamping of the summed intensity
- Shadow rays limited to the segment between point and light
- Zero-length vectors in the specular and shadow computations
"""

import math

import pytest


def _setup_lights(*lights, spheres=()):
    from spheretrace.scene.storage import add_light, add_sphere

    for sphere in spheres:
        add_sphere(sphere)
    for light in lights:
        add_light(light)


class TestLightDataclass:
    def test_point_constructor(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, LightType

        light = Light.point(Vector3(1.0, 2.0, 3.0), 0.4)
        assert light.kind == LightType.POINT
        assert light.position == Vector3(1.0, 2.0, 3.0)
        assert light.intensity == 0.4

    def test_ambient_constructor(self):
        from spheretrace.lighting.light import Light, LightType

        light = Light.ambient(0.3)
        assert light.kind == LightType.AMBIENT
        assert light.intensity == 0.3


class TestAmbientLight:
    """Tests for ambient contribution."""

    def test_ambient_returns_intensity(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, lighting_at

        _setup_lights(Light.ambient(0.3))
        value = lighting_at(
            0, Vector3(0.0, 0.0, 2.0), Vector3(0.0, 0.0, -1.0), Vector3(0.0, 0.0, -1.0), 10.0
        )
        assert value == 0.3

    def test_ambient_ignores_occluders_and_degenerate_geometry(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.geometry.sphere import Sphere
        from spheretrace.lighting.light import Light, lighting_at

        blocker = Sphere(radius=5.0, center=Vector3(0.0, 0.0, 0.0))
        _setup_lights(Light.ambient(0.3), spheres=(blocker,))
        value = lighting_at(0, Vector3(), Vector3(), Vector3(), 10.0)
        assert value == 0.3


class TestPointLight:
    """Tests for diffuse and specular point-light contribution."""

    def test_diffuse_facing_light(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, lighting_at

        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.5))
        value = lighting_at(0, Vector3(0.0, 0.0, 2.0), Vector3(0.0, 0.0, -1.0), Vector3())
        assert value == 0.5

    def test_diffuse_divides_by_distance_from_origin(self):
        """The same surface-to-light geometry shades darker farther from the origin."""
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, lighting_at

        _setup_lights(Light.point(Vector3(0.0, 0.0, 2.0), 0.5))
        value = lighting_at(0, Vector3(0.0, 0.0, 4.0), Vector3(0.0, 0.0, -1.0), Vector3())
        assert value == 0.25

    def test_back_facing_normal_gets_nothing(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, lighting_at

        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.5))
        value = lighting_at(0, Vector3(0.0, 0.0, 2.0), Vector3(0.0, 0.0, 1.0), Vector3())
        assert value == 0.0

    def test_specular_highlight_adds_intensity(self):
        """View direction along the mirrored light vector gives the full highlight."""
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, lighting_at

        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.5))
        value = lighting_at(
            0,
            Vector3(0.0, 0.0, 2.0),
            Vector3(0.0, 0.0, -1.0),
            Vector3(0.0, 0.0, -1.0),
            10.0,
        )
        assert math.isclose(value, 1.0, rel_tol=1e-12)

    def test_specular_falls_off_with_exponent(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, lighting_at

        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.5))
        point = Vector3(0.0, 0.0, 2.0)
        normal = Vector3(0.0, 0.0, -1.0)
        # 60 degrees off the reflected vector
        view = Vector3(math.sqrt(3.0), 0.0, -1.0)

        low = lighting_at(0, point, normal, view, 1.0)
        high = lighting_at(0, point, normal, view, 4.0)
        assert math.isclose(low, 0.5 + 0.5 * 0.5, rel_tol=1e-9)
        assert math.isclose(high, 0.5 + 0.5 * 0.0625, rel_tol=1e-9)

    def test_single_light_is_not_clamped(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, lighting_at

        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.8))
        value = lighting_at(
            0,
            Vector3(0.0, 0.0, 2.0),
            Vector3(0.0, 0.0, -1.0),
            Vector3(0.0, 0.0, -1.0),
            10.0,
        )
        assert math.isclose(value, 1.6, rel_tol=1e-12)

    def test_total_lighting_is_clamped(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, total_lighting_at

        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.8))
        value = total_lighting_at(
            Vector3(0.0, 0.0, 2.0),
            Vector3(0.0, 0.0, -1.0),
            Vector3(0.0, 0.0, -1.0),
            10.0,
        )
        assert value == 1.0

    def test_total_lighting_sums_lights(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, total_lighting_at

        _setup_lights(Light.ambient(0.3), Light.point(Vector3(0.0, 0.0, 0.0), 0.5))
        value = total_lighting_at(Vector3(0.0, 0.0, 2.0), Vector3(0.0, 0.0, -1.0), Vector3())
        assert math.isclose(value, 0.8, rel_tol=1e-12)

    def test_total_lighting_respects_max_intensity(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.lighting.light import Light, total_lighting_at

        _setup_lights(Light.ambient(0.9))
        value = total_lighting_at(Vector3(), Vector3(), Vector3(), max_intensity=0.5)
        assert value == 0.5


class TestShadows:
    """Tests for shadow rays."""

    def test_occluder_between_point_and_light(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.geometry.sphere import Sphere
        from spheretrace.lighting.light import Light, lighting_at

        blocker = Sphere(radius=0.25, center=Vector3(0.0, 0.0, 1.0))
        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.5), spheres=(blocker,))
        value = lighting_at(
            0,
            Vector3(0.0, 0.0, 2.0),
            Vector3(0.0, 0.0, -1.0),
            Vector3(0.0, 0.0, -1.0),
            10.0,
        )
        assert value == 0.0

    def test_occluder_beyond_light_does_not_shadow(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.geometry.sphere import Sphere
        from spheretrace.lighting.light import Light, lighting_at

        beyond = Sphere(radius=0.25, center=Vector3(0.0, 0.0, -1.0))
        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.5), spheres=(beyond,))
        value = lighting_at(0, Vector3(0.0, 0.0, 2.0), Vector3(0.0, 0.0, -1.0), Vector3())
        assert value == 0.5

    def test_shadowed_point_keeps_ambient(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.geometry.sphere import Sphere
        from spheretrace.lighting.light import Light, total_lighting_at

        blocker = Sphere(radius=0.25, center=Vector3(0.0, 0.0, 1.0))
        _setup_lights(
            Light.point(Vector3(0.0, 0.0, 0.0), 0.5),
            Light.ambient(0.2),
            spheres=(blocker,),
        )
        value = total_lighting_at(Vector3(0.0, 0.0, 2.0), Vector3(0.0, 0.0, -1.0), Vector3())
        assert value == 0.2


class TestDegenerateLighting:
    """Tests for zero-length vectors reaching the lighting model."""

    def test_zero_view_vector_with_specular_raises(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.errors import DegenerateSpecularError
        from spheretrace.lighting.light import Light, lighting_at

        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.5))
        with pytest.raises(DegenerateSpecularError):
            lighting_at(0, Vector3(0.0, 0.0, 2.0), Vector3(0.0, 0.0, -1.0), Vector3(), 10.0)

    def test_zero_view_vector_without_specular_is_fine(self):
        from spheretrace.core.vector import Vector3
        from spheretrace.geometry.sphere import NO_SPECULAR
        from spheretrace.lighting.light import Light, lighting_at

        _setup_lights(Light.point(Vector3(0.0, 0.0, 0.0), 0.5))
        value = lighting_at(
            0, Vector3(0.0, 0.0, 2.0), Vector3(0.0, 0.0, -1.0), Vector3(), NO_SPECULAR
        )
        assert value == 0.5

    def test_point_at_light_position_raises(self):
        """The shadow ray toward a light at the point itself has no direction."""
        from spheretrace.core.vector import Vector3
        from spheretrace.errors import DegenerateRayError
        from spheretrace.geometry.sphere import Sphere
        from spheretrace.lighting.light import Light, lighting_at

        elsewhere = Sphere(radius=1.0, center=Vector3(5.0, 5.0, 5.0))
        _setup_lights(Light.point(Vector3(0.0, 0.0, 2.0), 0.5), spheres=(elsewhere,))
        with pytest.raises(DegenerateRayError):
            lighting_at(0, Vector3(0.0, 0.0, 2.0), Vector3(0.0, 0.0, -1.0), Vector3())
