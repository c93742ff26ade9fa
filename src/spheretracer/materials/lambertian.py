"""Lambertian (ideal diffuse) material implementation.

The scattered direction is the surface normal plus a random unit vector. The
random vector is flipped into the normal's hemisphere first, so the sample
always leaves the surface on the side the ray arrived from. A Lambertian
surface never absorbs a ray; the path is only ever dimmed by the albedo.

Example:
    >>> from spheretracer.core.sampler import RandomSource
    >>> from spheretracer.core.vector import vec3
    >>> from spheretracer.materials.lambertian import scatter_lambertian
    >>> rng = RandomSource(seed=1)
    >>> did_scatter, ray, attenuation = scatter_lambertian(
    ...     vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), vec3(0.5, 0.5, 0.5), rng.state
    ... )
"""

from numba import njit

from spheretracer.core.ray import Ray
from spheretracer.core.sampler import uniform_unit_vector
from spheretracer.core.vector import dot, near_zero


@njit(cache=True)
def lambertian_direction(normal, state):
    """Sample a diffuse scatter direction around a normal.

    Args:
        normal: The unit surface normal, facing the incoming ray.
        state: Generator state, updated in place.

    Returns:
        normal + r when r lies in the normal's hemisphere, normal - r
        otherwise, where r is a random unit vector. Falls back to the normal
        itself when the sum cancels to (almost) zero.
    """
    random_unit = uniform_unit_vector(state)
    if dot(normal, random_unit) > 0.0:
        direction = normal + random_unit
    else:
        direction = normal - random_unit
    if near_zero(direction):
        direction = normal.copy()
    return direction


@njit(cache=True)
def scatter_lambertian(position, normal, albedo, state):
    """Scatter a ray off a Lambertian surface.

    Args:
        position: The collision point.
        normal: The unit surface normal, facing the incoming ray.
        albedo: The diffuse reflectance color (RGB).
        state: Generator state, updated in place.

    Returns:
        A tuple of (did_scatter, scattered_ray, attenuation) where:
        - did_scatter: Always True; diffuse surfaces never absorb.
        - scattered_ray: The diffuse bounce starting at position.
        - attenuation: The albedo.
    """
    did_scatter = True
    direction = lambertian_direction(normal, state)
    return did_scatter, Ray(position.copy(), direction), albedo.copy()
