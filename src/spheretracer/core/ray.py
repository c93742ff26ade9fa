"""Ray data structure for CPU-parallel ray tracing.

A ray is an immutable value: an origin point and a direction vector, both
float64 arrays of shape (3,). Producing a "new" ray (for example after a
bounce) always means constructing a new Ray.

Example:
    >>> from spheretracer.core.ray import make_ray, ray_at
    >>> from spheretracer.core.vector import vec3
    >>> ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
    >>> ray_at(ray, 5.0)  # Point 5 units along the ray
    array([ 0.,  0., -5.])
"""

from collections import namedtuple

from numba import njit

Ray = namedtuple("Ray", ["origin", "direction"])
Ray.__doc__ = """A ray with an origin point and direction vector.

Attributes:
    origin: The starting point of the ray (float64 array of shape (3,)).
    direction: The direction vector of the ray. Not required to be unit
        length; consumers that need a unit direction normalize explicitly.
"""


@njit(cache=True)
def ray_at(ray, t):
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@njit(cache=True)
def make_ray(origin, direction):
    """Create a ray from origin and direction.

    Both vectors are copied so the ray never aliases caller-owned arrays.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector.

    Returns:
        A new Ray instance.
    """
    return Ray(origin.copy(), direction.copy())
