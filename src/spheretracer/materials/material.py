"""Material variants and scattering dispatch.

A Material is a closed tagged variant: the ``kind`` field selects one of the
three supported scattering models and the remaining fields hold its
parameters. Fields a kind does not use hold neutral values, so every Material
has the same compiled type and can be stored in one table.

Example:
    >>> from spheretracer.materials.material import lambertian, metal, dielectric
    >>> ground = lambertian((0.8, 0.8, 0.0))
    >>> gold = metal((0.8, 0.6, 0.2), fuzziness=0.3)
    >>> glass = dielectric(1.52)
"""

from collections import namedtuple
from enum import IntEnum

import numpy as np
from numba import njit

from spheretracer.materials.dielectric import scatter_dielectric
from spheretracer.materials.lambertian import scatter_lambertian
from spheretracer.materials.metal import scatter_metal


class MaterialType(IntEnum):
    """Enumeration of supported material kinds.

    Used for material dispatch in the integrator to determine which
    scattering function to call.
    """

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


# Plain ints for compiled dispatch
_LAMBERTIAN = int(MaterialType.LAMBERTIAN)
_METAL = int(MaterialType.METAL)
_DIELECTRIC = int(MaterialType.DIELECTRIC)

Material = namedtuple("Material", ["kind", "albedo", "fuzziness", "refraction_index"])
Material.__doc__ = """Surface scattering properties.

Attributes:
    kind: The MaterialType value (stored as int).
    albedo: Reflectance color for Lambertian and Metal (float64 array (3,)).
        White for Dielectric.
    fuzziness: Reflection jitter for Metal. 0 for the other kinds.
    refraction_index: Index of refraction for Dielectric. 1 for the other kinds.
"""


def _color(value) -> np.ndarray:
    color = np.array(value, dtype=np.float64)
    if color.shape != (3,):
        raise ValueError(f"Color must have exactly 3 components, got shape {color.shape}")
    return color


def lambertian(albedo) -> Material:
    """Create a Lambertian (ideal diffuse) material.

    Args:
        albedo: The diffuse reflectance color as (R, G, B).

    Returns:
        A new Material value.
    """
    return Material(int(MaterialType.LAMBERTIAN), _color(albedo), 0.0, 1.0)


def metal(albedo, fuzziness: float = 0.0) -> Material:
    """Create a metal (specular reflective) material.

    Args:
        albedo: The reflective color as (R, G, B).
        fuzziness: Reflection jitter. Values above 1 act as 1 when scattering.

    Returns:
        A new Material value.
    """
    return Material(int(MaterialType.METAL), _color(albedo), float(fuzziness), 1.0)


def dielectric(refraction_index: float) -> Material:
    """Create a dielectric (glass/water) material.

    Args:
        refraction_index: Index of refraction relative to vacuum.

    Returns:
        A new Material value.
    """
    return Material(
        int(MaterialType.DIELECTRIC), np.ones(3), 0.0, float(refraction_index)
    )


@njit(cache=True)
def scatter(ray_in, position, normal, ray_is_inside, material, state):
    """Dispatch to the scattering function of the material's kind.

    Args:
        ray_in: The incoming ray.
        position: The collision point.
        normal: The unit surface normal, facing the incoming ray.
        ray_is_inside: True if the ray travels inside the shape.
        material: The Material at the collision.
        state: Generator state, updated in place.

    Returns:
        A tuple of (did_scatter, scattered_ray, attenuation) where:
        - did_scatter: False if the ray was absorbed. The other two values
          are then meaningless.
        - scattered_ray: The outgoing ray, starting at position.
        - attenuation: The color multiplier for the outgoing ray's light.

    Raises:
        ValueError: If material.kind is not a known MaterialType.
    """
    if material.kind == _LAMBERTIAN:
        return scatter_lambertian(position, normal, material.albedo, state)
    elif material.kind == _METAL:
        return scatter_metal(
            ray_in, position, normal, material.albedo, material.fuzziness, state
        )
    elif material.kind == _DIELECTRIC:
        return scatter_dielectric(
            ray_in, position, normal, ray_is_inside, material.refraction_index, state
        )
    raise ValueError("Unknown material kind")
