"""Scene module for scene management and nearest-collision queries.

This module handles scene representation and ray-scene queries:

Components:
    intersection: Packed scene storage (World) and nearest-collision query
    manager: Scene manager coordinating spheres and materials
    presets: Example scenes

Scene data is organized for the compiled kernels:
    - Structure-of-Arrays layout for sphere data
    - A material table indexed by per-sphere material IDs
"""

from .intersection import (
    World,
    build_world,
    closest_collision,
    empty_world,
    material_at,
    sphere_at,
)
from .manager import MaterialInfo, SceneConfig, SceneManager, SphereInfo
from .presets import PRESETS, create_random_spheres_scene, create_three_spheres_scene

__all__ = [
    # Intersection module
    "World",
    "build_world",
    "empty_world",
    "material_at",
    "sphere_at",
    "closest_collision",
    # Manager module
    "SceneManager",
    "MaterialInfo",
    "SphereInfo",
    "SceneConfig",
    # Presets
    "create_three_spheres_scene",
    "create_random_spheres_scene",
    "PRESETS",
]
