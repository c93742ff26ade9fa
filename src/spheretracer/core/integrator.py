"""Color integrator for Monte Carlo light transport.

This module implements the path tracing core: a ray bounces off spheres
according to their material properties until it escapes to the sky, gets
absorbed, or runs out of depth. The colors along the path multiply
component-wise, so the final color is the product of all attenuations and
the background gradient the path escapes into.

Key features:
    - Material dispatch (Lambertian, Metal, Dielectric)
    - Bounded path depth; an exhausted path contributes black
    - White-to-sky-blue vertical gradient background
    - Parallel per-row rendering with one random stream per row

The bounce loop keeps a throughput accumulator instead of recursing, which is
equivalent to the recursive formulation for a fixed depth bound.

Example:
    >>> from spheretracer.core.integrator import trace
    >>> from spheretracer.core.ray import make_ray
    >>> from spheretracer.core.sampler import RandomSource
    >>> from spheretracer.core.vector import vec3
    >>> from spheretracer.scene.intersection import empty_world
    >>> ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))
    >>> trace(ray, empty_world(), 50, RandomSource(seed=0).state)
    array([0.5, 0.7, 1. ])
"""

import numpy as np
from numba import njit, prange

from spheretracer.camera.thin_lens import get_ray_jittered
from spheretracer.core.ray import make_ray
from spheretracer.core.vector import unit_vector, vec3
from spheretracer.materials.material import scatter
from spheretracer.scene.intersection import closest_collision

# =============================================================================
# Rendering Constants
# =============================================================================

# Default maximum ray bounces (path length)
MAX_DEPTH = 50

# t_min and t_max for ray intersection. T_MIN keeps a bounced ray from
# re-hitting the surface it starts on (shadow acne).
T_MIN = 0.001
T_MAX = np.inf

# Background gradient endpoints (horizon to zenith)
HORIZON_COLOR = vec3(1.0, 1.0, 1.0)
SKY_COLOR = vec3(0.5, 0.7, 1.0)


# =============================================================================
# Path Tracing Core
# =============================================================================


@njit(cache=True)
def background_color(direction):
    """Evaluate the sky gradient for an escaped ray.

    Args:
        direction: The ray direction (any nonzero length).

    Returns:
        White at the horizon blending linearly into sky blue straight up.
    """
    t = 0.5 * (unit_vector(direction)[1] + 1.0)
    t = min(max(t, 0.0), 1.0)
    return (1.0 - t) * HORIZON_COLOR + t * SKY_COLOR


@njit(cache=True)
def trace(ray, world, max_depth, state):
    """Trace a single path through the scene.

    Args:
        ray: The primary ray.
        world: The scene storage.
        max_depth: Maximum number of collisions along the path. 0 returns
            black.
        state: Generator state, updated in place.

    Returns:
        The color carried back along this path (RGB).
    """
    color = np.zeros(3)

    # Product of all attenuations along the path
    throughput = np.ones(3)

    current = make_ray(ray.origin, ray.direction)
    depth = max_depth
    active = True

    while active and depth > 0:
        collision = closest_collision(current, world, T_MIN, T_MAX)

        if not collision.hit:
            # Ray escaped
            color = throughput * background_color(current.direction)
            active = False
        else:
            did_scatter, scattered, attenuation = scatter(
                current,
                collision.position,
                collision.normal,
                collision.ray_is_inside,
                collision.material,
                state,
            )
            if did_scatter:
                throughput = throughput * attenuation
                current = scattered
                depth -= 1
            else:
                # Ray was absorbed
                active = False

    return color


@njit(cache=True)
def render_pixel(camera, world, pixel_i, pixel_j, width, height, samples_per_pixel, max_depth, state):
    """Sum the colors of several jittered samples for one pixel.

    Args:
        camera: The derived Camera.
        world: The scene storage.
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of samples to trace.
        max_depth: Maximum path depth.
        state: Generator state, updated in place.

    Returns:
        The summed (not averaged) color of all samples.
    """
    total = np.zeros(3)
    for _ in range(samples_per_pixel):
        ray = get_ray_jittered(camera, pixel_i, pixel_j, width, height, state)
        total += trace(ray, world, max_depth, state)
    return total


# =============================================================================
# Rendering Kernels
# =============================================================================


@njit(cache=True, parallel=True)
def render_pass(camera, world, width, height, samples_per_pixel, max_depth, states, image):
    """Render samples for every pixel and add them to an accumulation buffer.

    Rows are distributed over threads. Row j always draws from states[j],
    so the result for a given set of states does not depend on the thread
    count.

    Args:
        camera: The derived Camera.
        world: The scene storage.
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of samples per pixel in this pass.
        max_depth: Maximum path depth.
        states: uint64 array of shape (height, 1), one stream per row.
        image: float64 array of shape (height, width, 3), row 0 at the
            bottom. Sample sums are added in place.
    """
    for j in prange(height):
        state = states[j]
        for i in range(width):
            image[j, i] += render_pixel(
                camera, world, i, j, width, height, samples_per_pixel, max_depth, state
            )
