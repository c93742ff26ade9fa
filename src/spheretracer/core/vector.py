"""Vector utilities for CPU-parallel ray tracing.

Vectors, points and colors are all NumPy ``float64`` arrays of shape ``(3,)``.
Component-wise arithmetic (addition, subtraction, negation, scalar and
element-wise multiplication) is plain NumPy arithmetic; this module adds the
operations NumPy does not spell directly. Every function is compiled with
Numba and can be called both from Python and from other compiled functions.

Example:
    >>> from spheretracer.core.vector import vec3, unit_vector, reflect
    >>> v = vec3(1.0, -1.0, 0.0)
    >>> n = vec3(0.0, 1.0, 0.0)
    >>> reflect(unit_vector(v), n)
    array([0.70710678, 0.70710678, 0.        ])
"""

import math

import numpy as np
from numba import njit

# Smallest float64 increment above 1.0, used by near_zero()
MACHINE_EPSILON = float(np.finfo(np.float64).eps)

# Allowed deviation from unit length for rotation axes
UNIT_LENGTH_TOLERANCE = 1e-9


@njit(cache=True)
def vec3(x, y, z):
    """Create a float64 vector from three components.

    Args:
        x: First component.
        y: Second component.
        z: Third component.

    Returns:
        A new array of shape (3,).
    """
    v = np.empty(3)
    v[0] = x
    v[1] = y
    v[2] = z
    return v


@njit(cache=True)
def dot(a, b):
    """Compute the dot product of two vectors."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@njit(cache=True)
def cross(a, b):
    """Compute the cross product a x b."""
    return vec3(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


@njit(cache=True)
def length_squared(v):
    """Compute the squared Euclidean norm of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return v[0] * v[0] + v[1] * v[1] + v[2] * v[2]


@njit(cache=True)
def length(v):
    """Compute the Euclidean norm of a vector."""
    return math.sqrt(length_squared(v))


@njit(cache=True)
def unit_vector(v):
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A new unit vector pointing in the direction of v.

    Raises:
        ValueError: If v is the zero vector, which has no direction.
    """
    norm = length(v)
    if norm == 0.0:
        raise ValueError("Zero vector cannot be converted to a unit vector")
    return v * (1.0 / norm)


@njit(cache=True)
def rotate(v, axis, theta):
    """Rotate a vector about a unit axis using Rodrigues' formula.

    v_rot = cos(theta) v + (1 - cos(theta)) (k . v) k + sin(theta) (k x v)

    Args:
        v: The vector to rotate.
        axis: The rotation axis k. Must already be unit length.
        theta: The rotation angle in radians (right-handed about the axis).

    Returns:
        The rotated vector.

    Raises:
        ValueError: If the axis is not unit length.
    """
    if abs(length(axis) - 1.0) > UNIT_LENGTH_TOLERANCE:
        raise ValueError("Rotation axis must be a unit vector")
    cos_theta = math.cos(theta)
    sin_theta = math.sin(theta)
    return (
        cos_theta * v
        + (1.0 - cos_theta) * dot(axis, v) * axis
        + sin_theta * cross(axis, v)
    )


@njit(cache=True)
def near_zero(v):
    """Check whether every component is below machine epsilon in magnitude.

    Used to catch degenerate scatter directions produced by cancellation.
    """
    return (
        abs(v[0]) < MACHINE_EPSILON
        and abs(v[1]) < MACHINE_EPSILON
        and abs(v[2]) < MACHINE_EPSILON
    )


@njit(cache=True)
def reflect(v, n):
    """Reflect a vector about a normal: v - 2 (v . n) n.

    Args:
        v: The incoming direction (pointing toward the surface).
        n: The surface normal (unit length).

    Returns:
        The mirrored direction. Its norm equals the norm of v.
    """
    return v - 2.0 * dot(v, n) * n


@njit(cache=True)
def refract(v, n, refraction_ratio):
    """Refract a unit vector through a surface using Snell's law.

    The caller is responsible for ruling out total internal reflection first;
    in that regime the perpendicular term is clamped to zero instead of
    producing NaN.

    Args:
        v: The incoming direction (unit length).
        n: The surface normal facing the incoming ray (unit length).
        refraction_ratio: n_incident / n_transmitted.

    Returns:
        The refracted direction.
    """
    cos_theta_1 = min(-dot(v, n), 1.0)
    sin2_theta_2 = refraction_ratio * refraction_ratio * (1.0 - cos_theta_1 * cos_theta_1)
    cos_theta_2 = math.sqrt(max(1.0 - sin2_theta_2, 0.0))
    return refraction_ratio * v + (refraction_ratio * cos_theta_1 - cos_theta_2) * n
