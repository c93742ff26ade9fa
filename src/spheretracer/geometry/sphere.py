"""Sphere primitive with ray-sphere intersection.

This module provides the Sphere value type and the intersection function that
produces a Collision record.

A negative radius is allowed and builds an inverted sphere: the quadratic only
depends on radius squared, while the outward normal (P - C) / r flips with the
sign. Placing an inverted sphere inside a regular one of the same material
yields a hollow glass shell.

Example:
    >>> from spheretracer.core.ray import make_ray
    >>> from spheretracer.core.vector import vec3
    >>> from spheretracer.geometry.sphere import collide, make_sphere
    >>> from spheretracer.materials.material import lambertian
    >>> sphere = make_sphere((0.0, 0.0, -2.0), 0.5, lambertian((0.5, 0.5, 0.5)))
    >>> ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
    >>> collide(ray, sphere, 0.001, float("inf")).t
    1.5
"""

import math
from collections import namedtuple

import numpy as np
from numba import njit

from spheretracer.core.ray import ray_at
from spheretracer.core.vector import dot, length_squared

Sphere = namedtuple("Sphere", ["center", "radius", "material"])
Sphere.__doc__ = """A sphere defined by center point, radius and material.

Attributes:
    center: The center point of the sphere (float64 array of shape (3,)).
    radius: The radius of the sphere. Negative values make an inverted sphere
        whose outward normal points toward the center.
    material: The Material of the surface.
"""

Collision = namedtuple(
    "Collision", ["hit", "position", "normal", "ray_is_inside", "t", "material"]
)
Collision.__doc__ = """Record of a ray-shape intersection.

Attributes:
    hit: Whether the ray intersected the shape. All other fields are only
        valid if hit is True.
    position: The point where the ray intersected the shape.
    normal: The surface normal at the intersection point (unit length, always
        opposing the incoming ray direction).
    ray_is_inside: True if the ray travels inside the shape and is exiting.
    t: The ray parameter of the intersection, within [t_min, t_max].
    material: The Material of the shape (a copied value).
"""


def make_sphere(center, radius: float, material) -> Sphere:
    """Create a sphere from center, radius and material.

    Args:
        center: The center point as (x, y, z).
        radius: The radius. Must not be zero; negative builds an inverted
            sphere.
        material: The Material of the surface.

    Returns:
        A new Sphere instance.

    Raises:
        ValueError: If the center is not a 3-vector or the radius is zero.
    """
    center = np.array(center, dtype=np.float64)
    if center.shape != (3,):
        raise ValueError(f"Center must have exactly 3 components, got shape {center.shape}")
    if radius == 0.0:
        raise ValueError("Sphere radius must not be zero")
    return Sphere(center, float(radius), material)


@njit(cache=True)
def collide(ray, sphere, t_min, t_max):
    """Test for ray-sphere intersection.

    The ray-sphere intersection is found by solving:
        |origin + t * direction - center|^2 = radius^2

    Expanding and rearranging gives the quadratic equation:
        a*t^2 + 2*half_b*t + c = 0

    where:
        a = dot(direction, direction)
        half_b = dot(oc, direction)
        c = dot(oc, oc) - radius^2
        oc = origin - center

    The near root is tested against [t_min, t_max] first, then the far root.
    Both window ends are inclusive.

    Args:
        ray: The ray to test.
        sphere: The sphere to test intersection against.
        t_min: Minimum t value to consider a valid hit.
        t_max: Maximum t value to consider a valid hit.

    Returns:
        A Collision. Check the hit field to determine if intersection
        occurred.
    """
    oc = ray.origin - sphere.center
    a = length_squared(ray.direction)
    half_b = dot(oc, ray.direction)
    c = length_squared(oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    # Result fields, overwritten on a valid root
    did_hit = False
    hit_t = 0.0
    hit_position = np.zeros(3)
    hit_normal = np.zeros(3)
    is_inside = False

    if discriminant >= 0.0:
        sqrt_d = math.sqrt(discriminant)

        root = (-half_b - sqrt_d) / a
        valid = t_min <= root <= t_max
        if not valid:
            root = (-half_b + sqrt_d) / a
            valid = t_min <= root <= t_max

        if valid:
            did_hit = True
            hit_t = root
            hit_position = ray_at(ray, root)
            outward_normal = (hit_position - sphere.center) / sphere.radius

            # Non-negative alignment with the outward normal means exiting
            is_inside = dot(ray.direction, outward_normal) >= 0.0
            if is_inside:
                hit_normal = -outward_normal
            else:
                hit_normal = outward_normal

    return Collision(
        did_hit, hit_position, hit_normal, is_inside, hit_t, sphere.material
    )


@njit(cache=True)
def missed_collision(ray, material):
    """Return a Collision record with hit == False.

    The record has the same compiled type as the result of collide(), so the
    two can be assigned to the same variable.
    """
    # An empty window never accepts a root
    return collide(ray, Sphere(ray.origin.copy(), 1.0, material), 1.0, 0.0)
