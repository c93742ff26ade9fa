"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vector operations on float64 arrays of shape (3,)
    ray: Ray data structure
    sampler: Seedable SplitMix64 random streams
    integrator: Color integrator and parallel render kernel
    progressive: Progressive sample accumulation

All compute-intensive operations are Numba-compiled functions.
"""

from .ray import Ray, make_ray, ray_at
from .sampler import (
    RandomSource,
    new_state,
    random_in_unit_disk,
    spawn_states,
    uniform,
    uniform_unit_vector,
    uniform_vector,
)
from .vector import (
    cross,
    dot,
    length,
    length_squared,
    near_zero,
    reflect,
    refract,
    rotate,
    unit_vector,
    vec3,
)

# Note: integrator and progressive are NOT imported here to avoid circular imports.
# Import directly from spheretracer.core.integrator or spheretracer.core.progressive.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "unit_vector",
    "rotate",
    "near_zero",
    "reflect",
    "refract",
    "RandomSource",
    "new_state",
    "spawn_states",
    "uniform",
    "uniform_vector",
    "uniform_unit_vector",
    "random_in_unit_disk",
]
