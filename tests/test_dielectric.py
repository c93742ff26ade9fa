"""Unit tests for the dielectric material.

Tests cover:
- Schlick reflectance
- Refraction ratios on entry and exit
- Total internal reflection
- Reflection probability at normal incidence
- Snell angles of scattered rays
"""

import math

import numpy as np
import pytest


def _incoming(angle_degrees):
    """Unit direction hitting a horizontal surface at the given incidence angle."""
    theta = math.radians(angle_degrees)
    return np.array([math.sin(theta), -math.cos(theta), 0.0])


class TestReflectance:
    """Tests for Schlick's approximation."""

    def test_normal_incidence_equals_r0(self):
        """Test that reflectance at cos = 1 is exactly r0."""
        from spheretracer.materials.dielectric import reflectance

        ratio = 1.0 / 1.52
        r0 = (1.0 - ratio) / (1.0 + ratio)
        r0 = r0 * r0

        assert reflectance(1.0, ratio) == r0
        assert reflectance(1.0, ratio) == pytest.approx(0.04258, abs=1e-5)

    def test_grazing_incidence_reflects(self):
        """Test that reflectance tends to 1 at grazing angles."""
        from spheretracer.materials.dielectric import reflectance

        assert reflectance(0.0, 1.0 / 1.52) == pytest.approx(1.0)

    def test_reflectance_grows_toward_grazing(self):
        """Test monotonic growth as the angle flattens."""
        from spheretracer.materials.dielectric import reflectance

        values = [reflectance(c, 1.0 / 1.52) for c in (1.0, 0.8, 0.5, 0.2, 0.0)]
        assert values == sorted(values)

    def test_ratio_one_never_reflects_head_on(self):
        """Test that matching media have zero normal reflectance."""
        from spheretracer.materials.dielectric import reflectance

        assert reflectance(1.0, 1.0) == 0.0

    def test_ratio_minus_one_raises(self):
        """Test that the singular ratio is rejected."""
        from spheretracer.materials.dielectric import reflectance

        with pytest.raises(ValueError):
            reflectance(0.5, -1.0)


class TestRefractionRatio:
    """Tests for the n1/n2 ratio."""

    def test_entering(self):
        """Test the ratio for a ray entering the medium."""
        from spheretracer.materials.dielectric import refraction_ratio_for

        assert refraction_ratio_for(1.52, False) == pytest.approx(1.0 / 1.52)

    def test_exiting(self):
        """Test the ratio for a ray leaving the medium."""
        from spheretracer.materials.dielectric import refraction_ratio_for

        assert refraction_ratio_for(1.52, True) == pytest.approx(1.52)


class TestScatterDielectric:
    """Tests for the dielectric scatter function."""

    def test_always_scatters_white(self, rng):
        """Test that glass never absorbs or tints."""
        from spheretracer.core.ray import make_ray
        from spheretracer.core.vector import vec3
        from spheretracer.materials.dielectric import scatter_dielectric

        ray_in = make_ray(vec3(0.0, 1.0, 0.0), _incoming(40.0))
        for _ in range(100):
            did_scatter, ray, attenuation = scatter_dielectric(
                ray_in, vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), False, 1.52, rng.state
            )
            assert did_scatter
            np.testing.assert_array_equal(attenuation, [1.0, 1.0, 1.0])
            np.testing.assert_array_equal(ray.origin, [0.0, 0.0, 0.0])

    def test_total_internal_reflection(self, rng):
        """Test that a steep ray inside glass always reflects without a draw."""
        from spheretracer.core.ray import make_ray
        from spheretracer.core.vector import vec3
        from spheretracer.materials.dielectric import scatter_dielectric

        # 1.52 * sin(60) > 1
        ray_in = make_ray(vec3(0.0, 1.0, 0.0), _incoming(60.0))
        expected = np.array([math.sin(math.radians(60.0)), math.cos(math.radians(60.0)), 0.0])

        for _ in range(50):
            before = rng.state.copy()
            _, ray, _ = scatter_dielectric(
                ray_in, vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), True, 1.52, rng.state
            )
            np.testing.assert_allclose(ray.direction, expected, atol=1e-12)
            np.testing.assert_array_equal(rng.state, before)

    def test_normal_incidence_reflection_rate(self, rng):
        """Test that head-on rays reflect with probability r0."""
        from spheretracer.core.ray import make_ray
        from spheretracer.core.vector import vec3
        from spheretracer.materials.dielectric import reflectance, scatter_dielectric

        ray_in = make_ray(vec3(0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0))
        trials = 5000
        reflected = 0
        for _ in range(trials):
            _, ray, _ = scatter_dielectric(
                ray_in, vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), False, 1.52, rng.state
            )
            if ray.direction[1] > 0.0:
                reflected += 1
                np.testing.assert_allclose(ray.direction, [0.0, 1.0, 0.0], atol=1e-12)
            else:
                np.testing.assert_allclose(ray.direction, [0.0, -1.0, 0.0], atol=1e-12)

        assert reflected / trials == pytest.approx(reflectance(1.0, 1.0 / 1.52), abs=0.012)

    def test_refracted_angle_follows_snell(self, rng):
        """Test the transmitted direction at 30 degrees from vacuum into glass."""
        from spheretracer.core.ray import make_ray
        from spheretracer.core.vector import vec3
        from spheretracer.materials.dielectric import scatter_dielectric

        ray_in = make_ray(vec3(0.0, 1.0, 0.0), _incoming(30.0))
        normal = vec3(0.0, 1.0, 0.0)

        refracted = None
        for _ in range(20):
            _, ray, _ = scatter_dielectric(
                ray_in, vec3(0.0, 0.0, 0.0), normal, False, 1.52, rng.state
            )
            if ray.direction[1] < 0.0:
                refracted = ray.direction
                break

        assert refracted is not None
        cos_angle = -refracted[1] / np.linalg.norm(refracted)
        assert math.degrees(math.acos(cos_angle)) == pytest.approx(19.2049, abs=1e-4)

    def test_unnormalized_incoming_direction(self, rng):
        """Test that the incoming direction is normalized before use."""
        from spheretracer.core.ray import make_ray
        from spheretracer.core.vector import length, vec3
        from spheretracer.materials.dielectric import scatter_dielectric

        ray_in = make_ray(vec3(0.0, 1.0, 0.0), 7.0 * _incoming(30.0))
        for _ in range(20):
            _, ray, _ = scatter_dielectric(
                ray_in, vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), False, 1.52, rng.state
            )
            assert length(ray.direction) == pytest.approx(1.0)
