"""Unit tests for the Lambertian material.

Tests cover:
- Scatter directions stay in the normal's hemisphere
- Attenuation equals the albedo
- Degenerate directions fall back to the normal
- Determinism per seed
"""

import numpy as np


class TestLambertianDirection:
    """Tests for diffuse direction sampling."""

    def test_direction_in_hemisphere(self, rng):
        """Test that every sample leaves the surface."""
        from spheretracer.core.vector import dot
        from spheretracer.materials.lambertian import lambertian_direction

        for _ in range(500):
            normal = rng.uniform_unit_vector()
            direction = lambertian_direction(normal, rng.state)
            assert dot(direction, normal) > 0.0

    def test_direction_never_degenerate(self, rng):
        """Test that no sample is the zero vector."""
        from spheretracer.core.vector import near_zero, vec3
        from spheretracer.materials.lambertian import lambertian_direction

        normal = vec3(0.0, 1.0, 0.0)
        for _ in range(500):
            assert not near_zero(lambertian_direction(normal, rng.state))

    def test_directions_cluster_around_normal(self, rng):
        """Test that the average direction points along the normal."""
        from spheretracer.core.vector import unit_vector, vec3
        from spheretracer.materials.lambertian import lambertian_direction

        normal = vec3(0.0, 0.0, 1.0)
        directions = np.array(
            [unit_vector(lambertian_direction(normal, rng.state)) for _ in range(4000)]
        )
        mean = directions.mean(axis=0)
        assert abs(mean[0]) < 0.05
        assert abs(mean[1]) < 0.05
        assert mean[2] > 0.5


class TestScatterLambertian:
    """Tests for the Lambertian scatter function."""

    def test_always_scatters(self, rng):
        """Test that a diffuse surface never absorbs."""
        from spheretracer.core.vector import vec3
        from spheretracer.materials.lambertian import scatter_lambertian

        for _ in range(100):
            did_scatter, _, _ = scatter_lambertian(
                vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), vec3(0.5, 0.5, 0.5), rng.state
            )
            assert did_scatter

    def test_attenuation_and_origin(self, rng):
        """Test that the ray starts at the hit point and carries the albedo."""
        from spheretracer.core.vector import vec3
        from spheretracer.materials.lambertian import scatter_lambertian

        position = vec3(1.0, 2.0, 3.0)
        albedo = vec3(0.8, 0.3, 0.1)
        _, ray, attenuation = scatter_lambertian(
            position, vec3(0.0, 1.0, 0.0), albedo, rng.state
        )

        np.testing.assert_array_equal(ray.origin, position)
        np.testing.assert_array_equal(attenuation, albedo)

    def test_same_seed_same_direction(self):
        """Test that scattering is reproducible per seed."""
        from spheretracer.core.sampler import RandomSource
        from spheretracer.core.vector import vec3
        from spheretracer.materials.lambertian import scatter_lambertian

        args = (vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), vec3(0.5, 0.5, 0.5))
        _, ray_a, _ = scatter_lambertian(*args, RandomSource(seed=9).state)
        _, ray_b, _ = scatter_lambertian(*args, RandomSource(seed=9).state)
        np.testing.assert_array_equal(ray_a.direction, ray_b.direction)
