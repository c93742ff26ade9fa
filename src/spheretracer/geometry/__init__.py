"""Geometry module for shape primitives.

This module provides the sphere primitive and its intersection algorithm:

Components:
    sphere: Sphere value type, Collision record and ray-sphere intersection

The intersection routine is a Numba-compiled function so it can run inside
the parallel render kernel. It follows the pattern:
    collision = collide(ray, sphere, t_min, t_max)
"""

from .sphere import Collision, Sphere, collide, make_sphere, missed_collision

__all__ = [
    "Sphere",
    "Collision",
    "collide",
    "make_sphere",
    "missed_collision",
]
