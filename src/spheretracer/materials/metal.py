"""Metal (specular reflective) material implementation.

Perfect metals (fuzziness=0) produce mirror-like reflections. Rougher metals
perturb the mirror direction by a random vector scaled by the fuzziness,
modeling microfacet scattering.

The reflection formula is:
    R = V - 2(V . N)N

where V is the normalized incident direction and N is the surface normal.

The perturbation is flipped into the normal's hemisphere with the same sign
rule as the Lambertian sample. If the perturbed direction still ends up at or
below the surface, the ray is absorbed. This is how high-fuzziness metals
lose part of their rays.

Fuzziness is clamped to at most 1 when scattering. Negative values are not
floored.
"""

from numba import njit

from spheretracer.core.ray import Ray
from spheretracer.core.sampler import uniform_unit_vector
from spheretracer.core.vector import dot, reflect, unit_vector


@njit(cache=True)
def fuzzy_reflection(direction, normal, fuzziness, state):
    """Compute the perturbed mirror direction for a metal surface.

    Args:
        direction: The incoming ray direction (any nonzero length).
        normal: The unit surface normal, facing the incoming ray.
        fuzziness: Reflection jitter, clamped to at most 1.
        state: Generator state, updated in place.

    Returns:
        The scattered direction (not normalized).
    """
    reflected = reflect(unit_vector(direction), normal)
    fuzz = min(fuzziness, 1.0) * uniform_unit_vector(state)
    if dot(normal, fuzz) > 0.0:
        scattered = reflected + fuzz
    else:
        scattered = reflected - fuzz
    return scattered


@njit(cache=True)
def scatter_metal(ray_in, position, normal, albedo, fuzziness, state):
    """Scatter a ray off a metal surface.

    Args:
        ray_in: The incoming ray.
        position: The collision point.
        normal: The unit surface normal, facing the incoming ray.
        albedo: The reflective color (RGB).
        fuzziness: Reflection jitter. Values above 1 act as 1.
        state: Generator state, updated in place.

    Returns:
        A tuple of (did_scatter, scattered_ray, attenuation) where:
        - did_scatter: False if the scattered direction points into the
          surface (the ray is absorbed).
        - scattered_ray: The reflected ray starting at position.
        - attenuation: The albedo.
    """
    direction = fuzzy_reflection(ray_in.direction, normal, fuzziness, state)
    did_scatter = dot(direction, normal) > 0.0
    return did_scatter, Ray(position.copy(), direction), albedo.copy()
