"""Pytest configuration for spheretracer tests.

This module provides shared fixtures for all test modules. Every random draw
goes through a seeded RandomSource so test results are repeatable.
"""

import matplotlib
import pytest

# Preview tests must never open a window
matplotlib.use("Agg")


@pytest.fixture
def rng():
    """A seeded random generator."""
    from spheretracer.core.sampler import RandomSource

    return RandomSource(seed=42)


@pytest.fixture
def empty_scene():
    """A World without spheres."""
    from spheretracer.scene.intersection import empty_world

    return empty_world()


@pytest.fixture
def make_ground_world():
    """Factory for a huge Lambertian ground sphere touching y = 0 at the origin."""
    from spheretracer.materials.material import lambertian
    from spheretracer.scene.intersection import build_world

    def _make(albedo=(0.5, 0.5, 0.5)):
        return build_world(
            centers=[(0.0, -1000.0, 0.0)],
            radii=[1000.0],
            material_ids=[0],
            materials=[lambertian(albedo)],
        )

    return _make


@pytest.fixture
def small_scene():
    """A diffuse ball on a ground sphere, packed for rendering."""
    from spheretracer.scene.manager import SceneManager

    scene = SceneManager()
    scene.add_lambertian_sphere((0.0, -100.5, -1.0), 100.0, (0.8, 0.8, 0.0))
    scene.add_lambertian_sphere((0.0, 0.0, -1.0), 0.5, (0.1, 0.2, 0.5))
    return scene.build()


@pytest.fixture
def forward_camera():
    """Factory for a pinhole camera at the origin looking down -z."""
    from spheretracer.camera.thin_lens import ThinLensCamera

    def _make(aspect_ratio=4.0 / 3.0, aperture=0.0, focus_distance=1.0):
        return ThinLensCamera(
            lookfrom=(0.0, 0.0, 0.0),
            lookat=(0.0, 0.0, -1.0),
            vup=(0.0, 1.0, 0.0),
            vfov=90.0,
            aspect_ratio=aspect_ratio,
            aperture=aperture,
            focus_distance=focus_distance,
        )

    return _make
