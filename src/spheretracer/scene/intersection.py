"""Scene-level sphere intersection testing.

This module provides the packed scene storage consumed by compiled kernels
and the nearest-collision query over every sphere in the scene.

The scene stores spheres in a Structure of Arrays layout. Each sphere has an
associated material ID that indexes the material table, which is stored the
same way.

Example:
    >>> from spheretracer.core.ray import make_ray
    >>> from spheretracer.core.vector import vec3
    >>> from spheretracer.materials.material import lambertian
    >>> from spheretracer.scene.intersection import build_world, closest_collision
    >>> world = build_world(
    ...     centers=[(0.0, 0.0, -1.0)], radii=[0.5], material_ids=[0],
    ...     materials=[lambertian((0.1, 0.2, 0.5))],
    ... )
    >>> ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
    >>> closest_collision(ray, world, 0.001, float("inf")).t
    0.5
"""

from collections import namedtuple

import numpy as np
from numba import njit

from spheretracer.geometry.sphere import Sphere, collide, missed_collision
from spheretracer.materials.material import Material

World = namedtuple(
    "World",
    [
        "centers",
        "radii",
        "material_ids",
        "material_kinds",
        "material_albedos",
        "material_fuzziness",
        "material_refraction_indices",
    ],
)
World.__doc__ = """Read-only scene storage for compiled kernels.

Attributes:
    centers: Sphere centers, float64 array of shape (n, 3).
    radii: Sphere radii, float64 array of shape (n,).
    material_ids: Index into the material table per sphere, int64 (n,).
    material_kinds: MaterialType value per material, int64 (m,).
    material_albedos: Albedo per material, float64 (m, 3).
    material_fuzziness: Metal fuzziness per material, float64 (m,).
    material_refraction_indices: Refraction index per material, float64 (m,).
"""


def build_world(centers, radii, material_ids, materials) -> World:
    """Pack spheres and materials into a World.

    Args:
        centers: Sequence of n sphere centers as (x, y, z).
        radii: Sequence of n radii. Zero is rejected.
        material_ids: Sequence of n indices into materials.
        materials: Sequence of Material values.

    Returns:
        A new World instance.

    Raises:
        ValueError: If the arrays disagree in length, a radius is zero, or a
            material ID is out of range.
    """
    centers = np.ascontiguousarray(centers, dtype=np.float64).reshape(-1, 3)
    radii = np.ascontiguousarray(radii, dtype=np.float64).reshape(-1)
    material_ids = np.ascontiguousarray(material_ids, dtype=np.int64).reshape(-1)

    n = centers.shape[0]
    if radii.shape[0] != n or material_ids.shape[0] != n:
        raise ValueError(
            f"Expected {n} radii and material IDs, got {radii.shape[0]} and "
            f"{material_ids.shape[0]}"
        )
    if np.any(radii == 0.0):
        raise ValueError("Sphere radius must not be zero")

    m = len(materials)
    if n > 0 and (material_ids.min() < 0 or material_ids.max() >= m):
        raise ValueError(f"Material IDs must be in range [0, {m})")

    kinds = np.array([int(mat.kind) for mat in materials], dtype=np.int64)
    albedos = np.array([mat.albedo for mat in materials], dtype=np.float64).reshape(-1, 3)
    fuzziness = np.array([mat.fuzziness for mat in materials], dtype=np.float64)
    refraction_indices = np.array(
        [mat.refraction_index for mat in materials], dtype=np.float64
    )

    return World(
        centers,
        radii,
        material_ids,
        kinds,
        np.ascontiguousarray(albedos),
        fuzziness,
        refraction_indices,
    )


def empty_world() -> World:
    """Create a World without spheres or materials."""
    return build_world(np.zeros((0, 3)), np.zeros(0), np.zeros(0, dtype=np.int64), [])


@njit(cache=True)
def material_at(world, material_id):
    """Rebuild the Material value stored at a material table index."""
    return Material(
        world.material_kinds[material_id],
        world.material_albedos[material_id].copy(),
        world.material_fuzziness[material_id],
        world.material_refraction_indices[material_id],
    )


@njit(cache=True)
def sphere_at(world, index):
    """Rebuild the Sphere value stored at a sphere index.

    Args:
        world: The scene storage.
        index: The sphere index.

    Returns:
        A Sphere whose material is a copied Material value.
    """
    return Sphere(
        world.centers[index].copy(),
        world.radii[index],
        material_at(world, world.material_ids[index]),
    )


@njit(cache=True)
def closest_collision(ray, world, t_min, t_max):
    """Test ray against all spheres in the scene.

    Iterates through all spheres in order. Each hit shrinks the upper bound
    of the search window to its t, so the final result is the globally
    nearest collision.

    Args:
        ray: The ray to test.
        world: The scene storage.
        t_min: Minimum t value to consider a valid hit.
        t_max: Maximum t value to consider a valid hit.

    Returns:
        The closest Collision, or a record with hit == False if no sphere
        was hit.
    """
    closest_t = t_max
    result = missed_collision(ray, Material(np.int64(0), np.ones(3), 0.0, 1.0))

    for i in range(world.radii.shape[0]):
        collision = collide(ray, sphere_at(world, i), t_min, closest_t)
        if collision.hit:
            closest_t = collision.t
            result = collision

    return result
