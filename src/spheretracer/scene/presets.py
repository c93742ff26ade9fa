"""Ready-made example scenes.

Two scenes are provided:

- The three-sphere scene: a diffuse ball between a glass ball (optionally
  hollow) and a gold mirror, resting on a large yellowish ground sphere.
- The random-spheres scene: a grid of small spheres with random materials
  around three large ones.

Each factory returns the SceneManager and the ThinLensCamera configuration.
``PRESETS`` maps scene names to their factory and default render settings.

Example:
    >>> from spheretracer.scene.presets import create_random_spheres_scene
    >>> scene, camera = create_random_spheres_scene(seed=42)
    >>> world = scene.build()
"""

import logging
import math
from collections.abc import Callable
from typing import Any

import numpy as np

from spheretracer.camera.thin_lens import ThinLensCamera
from spheretracer.core.sampler import RandomSource
from spheretracer.materials.dielectric import WINDOW_GLASS_REFRACTION
from spheretracer.scene.manager import SceneManager

logger = logging.getLogger(__name__)

# =============================================================================
# Three Spheres Scene
# =============================================================================

THREE_SPHERES_ASPECT_RATIO = 16.0 / 9.0

# Radius of the inverted sphere that hollows out the glass ball
HOLLOW_GLASS_INNER_RADIUS = -0.45


def create_three_spheres_scene(
    hollow_glass: bool = True,
) -> tuple[SceneManager, ThinLensCamera]:
    """Create the three-sphere demo scene.

    Args:
        hollow_glass: If True, an inverted sphere inside the glass ball turns
            it into a thin glass shell.

    Returns:
        Tuple of (scene, camera) ready for rendering.
    """
    scene = SceneManager()

    ground = scene.add_lambertian_material(albedo=(0.8, 0.8, 0.0))
    center = scene.add_lambertian_material(albedo=(0.1, 0.2, 0.5))
    glass = scene.add_dielectric_material(refraction_index=WINDOW_GLASS_REFRACTION)
    gold = scene.add_metal_material(albedo=(0.8, 0.6, 0.2), fuzziness=0.0)

    scene.add_sphere((0.0, 0.0, -1.0), 0.5, center)
    scene.add_sphere((0.0, -100.5, -1.0), 100.0, ground)
    scene.add_sphere((-1.0, 0.0, -1.0), 0.5, glass)
    if hollow_glass:
        scene.add_sphere((-1.0, 0.0, -1.0), HOLLOW_GLASS_INNER_RADIUS, glass)
    scene.add_sphere((1.0, 0.0, -1.0), 0.5, gold)

    lookfrom = (-2.0, 2.0, 1.0)
    lookat = (0.0, 0.0, -1.0)
    camera = ThinLensCamera(
        lookfrom=lookfrom,
        lookat=lookat,
        vup=(0.0, 1.0, 0.0),
        vfov=20.0,
        aspect_ratio=THREE_SPHERES_ASPECT_RATIO,
        aperture=0.5,
        focus_distance=math.dist(lookfrom, lookat),
    )

    return scene, camera


# =============================================================================
# Random Spheres Scene
# =============================================================================

RANDOM_SPHERES_ASPECT_RATIO = 3.0 / 2.0

# Grid extent of the small spheres: a, b in [-GRID_EXTENT, GRID_EXTENT)
GRID_EXTENT = 11
SMALL_SPHERE_RADIUS = 0.2

# Small spheres closer than this to the large metal sphere are skipped
CLEARANCE_POINT = (4.0, 0.2, 0.0)
CLEARANCE_DISTANCE = 0.9

# Cumulative material probabilities of the small spheres
DIFFUSE_PROBABILITY = 0.8
METAL_PROBABILITY = 0.95


def create_random_spheres_scene(
    seed: int | None = None,
) -> tuple[SceneManager, ThinLensCamera]:
    """Create the random-spheres cover scene.

    A ground sphere carries a 22x22 grid of small spheres, each jittered
    within its cell: 80% diffuse with a random color, 15% fuzzy metal, 5%
    glass. Three large spheres (glass, diffuse brown, fuzzy metal) sit in
    the middle row.

    Args:
        seed: Seed for the scene layout. None gives a different scene each
            call.

    Returns:
        Tuple of (scene, camera) ready for rendering.
    """
    rng = RandomSource(seed)
    scene = SceneManager()

    scene.add_lambertian_sphere((0.0, -1000.0, 0.0), 1000.0, (0.5, 0.5, 0.5))

    clearance = np.array(CLEARANCE_POINT)
    for a in range(-GRID_EXTENT, GRID_EXTENT):
        for b in range(-GRID_EXTENT, GRID_EXTENT):
            choose_material = rng.uniform(0.0, 1.0)
            center = (a + 0.9 * rng.uniform(0.0, 1.0), 0.2, b + 0.9 * rng.uniform(0.0, 1.0))

            if np.linalg.norm(np.array(center) - clearance) <= CLEARANCE_DISTANCE:
                continue

            if choose_material < DIFFUSE_PROBABILITY:
                albedo = tuple(rng.uniform_vector(0.0, 1.0))
                scene.add_lambertian_sphere(center, SMALL_SPHERE_RADIUS, albedo)
            elif choose_material < METAL_PROBABILITY:
                albedo = tuple(rng.uniform_vector(0.5, 1.0))
                fuzziness = rng.uniform(0.5, 1.0)
                scene.add_metal_sphere(center, SMALL_SPHERE_RADIUS, albedo, fuzziness)
            else:
                scene.add_dielectric_sphere(center, SMALL_SPHERE_RADIUS, WINDOW_GLASS_REFRACTION)

    scene.add_dielectric_sphere((0.0, 1.0, 0.0), 1.0, WINDOW_GLASS_REFRACTION)
    scene.add_lambertian_sphere((-4.0, 1.0, 0.0), 1.0, (0.4, 0.2, 0.1))
    scene.add_metal_sphere((4.0, 1.0, 0.0), 1.0, (0.7, 0.6, 0.5), 0.5)

    logger.debug("Random spheres scene has %d spheres", scene.get_sphere_count())

    camera = ThinLensCamera(
        lookfrom=(13.0, 2.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=45.0,
        aspect_ratio=RANDOM_SPHERES_ASPECT_RATIO,
        aperture=0.1,
        focus_distance=10.0,
    )

    return scene, camera


# =============================================================================
# Registry
# =============================================================================

# name -> (factory, default RenderSettings fields besides width/height)
PRESETS: dict[str, tuple[Callable[..., tuple[SceneManager, ThinLensCamera]], dict[str, Any]]] = {
    "three-spheres": (
        create_three_spheres_scene,
        {"samples_per_pixel": 50, "max_depth": 110},
    ),
    "random-spheres": (
        create_random_spheres_scene,
        {"samples_per_pixel": 200, "max_depth": 20},
    ),
}
