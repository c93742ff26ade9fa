"""Unit tests for the example scenes."""

import math

import numpy as np
import pytest


class TestThreeSpheresScene:
    """Tests for the three-sphere scene."""

    def test_hollow_glass_layout(self):
        """Test sphere count and the inverted inner glass sphere."""
        from spheretracer.materials.material import MaterialType
        from spheretracer.scene.presets import create_three_spheres_scene

        scene, _ = create_three_spheres_scene()

        assert scene.get_sphere_count() == 5
        inner = scene.spheres[3]
        assert inner.radius == -0.45
        assert inner.center == scene.spheres[2].center
        assert inner.material_id == scene.spheres[2].material_id
        assert scene.get_material_type(inner.material_id) == MaterialType.DIELECTRIC

    def test_solid_glass_layout(self):
        """Test that the hollow can be left out."""
        from spheretracer.scene.presets import create_three_spheres_scene

        scene, _ = create_three_spheres_scene(hollow_glass=False)
        assert scene.get_sphere_count() == 4
        assert all(sphere.radius > 0.0 for sphere in scene.spheres)

    def test_camera(self):
        """Test the camera configuration."""
        from spheretracer.scene.presets import create_three_spheres_scene

        _, camera = create_three_spheres_scene()

        assert camera.lookfrom == (-2.0, 2.0, 1.0)
        assert camera.lookat == (0.0, 0.0, -1.0)
        assert camera.vfov == 20.0
        assert camera.aspect_ratio == pytest.approx(16.0 / 9.0)
        assert camera.aperture == 0.5
        assert camera.focus_distance == pytest.approx(math.sqrt(12.0))

    def test_builds_world(self):
        """Test that the scene packs into a renderable World."""
        from spheretracer.scene.presets import create_three_spheres_scene

        scene, _ = create_three_spheres_scene()
        world = scene.build()
        assert world.radii.shape == (5,)


class TestRandomSpheresScene:
    """Tests for the random-spheres scene."""

    def test_same_seed_same_scene(self):
        """Test that the layout is reproducible per seed."""
        from spheretracer.scene.presets import create_random_spheres_scene

        scene_a, _ = create_random_spheres_scene(seed=42)
        scene_b, _ = create_random_spheres_scene(seed=42)
        assert scene_a.to_dict() == scene_b.to_dict()

    def test_different_seeds_differ(self):
        """Test that different seeds change the layout."""
        from spheretracer.scene.presets import create_random_spheres_scene

        scene_a, _ = create_random_spheres_scene(seed=1)
        scene_b, _ = create_random_spheres_scene(seed=2)
        assert scene_a.to_dict() != scene_b.to_dict()

    def test_layout(self):
        """Test ground, small spheres and the three large spheres."""
        from spheretracer.scene.presets import (
            CLEARANCE_DISTANCE,
            CLEARANCE_POINT,
            GRID_EXTENT,
            create_random_spheres_scene,
        )

        scene, _ = create_random_spheres_scene(seed=7)
        spheres = scene.spheres

        ground = spheres[0]
        assert ground.center == (0.0, -1000.0, 0.0)
        assert ground.radius == 1000.0

        large = spheres[-3:]
        assert [s.center for s in large] == [(0.0, 1.0, 0.0), (-4.0, 1.0, 0.0), (4.0, 1.0, 0.0)]

        small = spheres[1:-3]
        assert 0 < len(small) <= (2 * GRID_EXTENT) ** 2
        clearance = np.array(CLEARANCE_POINT)
        for sphere in small:
            assert sphere.radius == 0.2
            assert sphere.center[1] == 0.2
            assert np.linalg.norm(np.array(sphere.center) - clearance) > CLEARANCE_DISTANCE

    def test_small_sphere_materials(self):
        """Test parameter ranges of the random materials."""
        from spheretracer.materials.material import MaterialType
        from spheretracer.scene.presets import create_random_spheres_scene

        scene, _ = create_random_spheres_scene(seed=11)
        kinds = set()
        for sphere in scene.spheres[1:-3]:
            info = scene.get_material_info(sphere.material_id)
            kinds.add(info.material_type)
            if info.material_type == MaterialType.METAL:
                assert all(0.5 <= c < 1.0 for c in info.params["albedo"])
                assert 0.5 <= info.params["fuzziness"] < 1.0
            elif info.material_type == MaterialType.DIELECTRIC:
                assert info.params["refraction_index"] == 1.52

        assert MaterialType.LAMBERTIAN in kinds

    def test_camera(self):
        """Test the camera configuration."""
        from spheretracer.scene.presets import create_random_spheres_scene

        _, camera = create_random_spheres_scene(seed=0)

        assert camera.lookfrom == (13.0, 2.0, 3.0)
        assert camera.lookat == (0.0, 0.0, 0.0)
        assert camera.aspect_ratio == pytest.approx(1.5)
        assert camera.aperture == 0.1
        assert camera.focus_distance == 10.0


class TestPresetRegistry:
    """Tests for the preset table."""

    def test_registry(self):
        """Test names and default settings."""
        from spheretracer.scene.presets import (
            PRESETS,
            create_random_spheres_scene,
            create_three_spheres_scene,
        )

        assert PRESETS["three-spheres"] == (
            create_three_spheres_scene,
            {"samples_per_pixel": 50, "max_depth": 110},
        )
        assert PRESETS["random-spheres"] == (
            create_random_spheres_scene,
            {"samples_per_pixel": 200, "max_depth": 20},
        )
