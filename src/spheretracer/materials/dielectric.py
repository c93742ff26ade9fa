"""Dielectric (glass/water) material implementation.

This module implements the dielectric material, which models transparent
media like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when the refraction ratio times sin(theta)
      exceeds 1

The surrounding medium is always vacuum. The material randomly chooses
between reflection and refraction based on the Fresnel reflectance
probability, which increases at grazing angles.

Example:
    >>> from spheretracer.materials.dielectric import (
    ...     WINDOW_GLASS_REFRACTION, reflectance
    ... )
    >>> round(reflectance(1.0, 1.0 / WINDOW_GLASS_REFRACTION), 4)
    0.0426
"""

import math

import numpy as np
from numba import njit

from spheretracer.core.ray import Ray
from spheretracer.core.sampler import uniform
from spheretracer.core.vector import dot, reflect, refract, unit_vector

# Refraction indices relative to vacuum
VACUUM_REFRACTION = 1.0
WINDOW_GLASS_REFRACTION = 1.52
WATER_20_CELSIUS_REFRACTION = 1.333
DIAMOND_REFRACTION = 2.417


@njit(cache=True)
def reflectance(cos_theta, refraction_ratio):
    """Compute Schlick's approximation of the Fresnel reflectance.

    Args:
        cos_theta: Cosine of the incidence angle.
        refraction_ratio: Ratio of the refraction indices (n1/n2).

    Returns:
        The probability of reflection, r0 + (1 - r0)(1 - cos_theta)^5.

    Raises:
        ValueError: If refraction_ratio is -1.
    """
    if refraction_ratio == -1.0:
        raise ValueError("Refraction ratio must not be -1")
    r0 = (1.0 - refraction_ratio) / (1.0 + refraction_ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cos_theta) ** 5


@njit(cache=True)
def refraction_ratio_for(refraction_index, ray_is_inside):
    """Return the n1/n2 ratio for a ray crossing a vacuum/medium boundary."""
    ratio = VACUUM_REFRACTION / refraction_index
    if ray_is_inside:
        ratio = refraction_index / VACUUM_REFRACTION
    return ratio


@njit(cache=True)
def scatter_dielectric(ray_in, position, normal, ray_is_inside, refraction_index, state):
    """Scatter a ray off a dielectric surface.

    Reflection happens under total internal reflection, or otherwise with
    the Schlick reflectance as probability. A random number is only drawn
    when refraction is possible.

    Args:
        ray_in: The incoming ray.
        position: The collision point.
        normal: The unit surface normal, facing the incoming ray.
        ray_is_inside: True if the ray travels inside the medium.
        refraction_index: Index of refraction of the medium.
        state: Generator state, updated in place.

    Returns:
        A tuple of (did_scatter, scattered_ray, attenuation) where:
        - did_scatter: Always True; dielectrics never absorb.
        - scattered_ray: The reflected or refracted ray starting at position.
        - attenuation: White, clear glass does not tint light.
    """
    ratio = refraction_ratio_for(refraction_index, ray_is_inside)
    direction = unit_vector(ray_in.direction)

    cos_theta = min(-dot(direction, normal), 1.0)
    sin_theta = math.sqrt(max(1.0 - cos_theta * cos_theta, 0.0))
    cannot_refract = ratio * sin_theta > 1.0

    if cannot_refract or uniform(state, 0.0, 1.0) < reflectance(cos_theta, ratio):
        scattered = reflect(direction, normal)
    else:
        scattered = refract(direction, normal, ratio)

    did_scatter = True
    return did_scatter, Ray(position.copy(), scattered), np.ones(3)
