"""Thin-lens camera model for perspective projection with depth of field.

This module implements a thin-lens camera that generates primary rays for
rendering. The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios
- A circular aperture and focus distance for depth of field
- Jittered sampling for anti-aliasing

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Rays start at a random point on the lens disk and pass through the point of
the focus plane that the image coordinates map to. Objects on the focus plane
stay sharp; everything else blurs with the aperture size. An aperture of zero
degenerates to a pinhole camera.

Example:
    >>> from spheretracer.camera.thin_lens import (
    ...     ThinLensCamera, setup_camera, send_ray_towards
    ... )
    >>> from spheretracer.core.sampler import RandomSource
    >>>
    >>> # Create camera looking at origin from z=3
    >>> config = ThinLensCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ...     aperture=0.1,
    ...     focus_distance=3.0,
    ... )
    >>> camera = setup_camera(config)
    >>>
    >>> # Generate ray for the image center (0.5, 0.5)
    >>> ray = send_ray_towards(camera, 0.5, 0.5, RandomSource(seed=0).state)
"""

import math
from collections import namedtuple
from dataclasses import dataclass

import numpy as np
from numba import njit

from spheretracer.core.ray import Ray
from spheretracer.core.sampler import random_in_unit_disk, uniform
from spheretracer.core.vector import cross, unit_vector

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class ThinLensCamera:
    """Configuration for a thin-lens (depth of field) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Diameter of the lens. 0 gives a pinhole camera.
        focus_distance: Distance from the lens to the plane in perfect focus.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    aperture: float = 0.0
    focus_distance: float = 1.0


Camera = namedtuple(
    "Camera",
    ["origin", "lower_left_corner", "horizontal", "vertical", "u", "v", "w", "lens_radius"],
)
Camera.__doc__ = """Derived camera state used for ray generation.

Attributes:
    origin: Camera position (center of the lens).
    lower_left_corner: Lower-left corner of the viewport on the focus plane.
    horizontal: Full width span of the viewport.
    vertical: Full height span of the viewport.
    u: Right direction in world space.
    v: Up direction in world space.
    w: Backward direction (opposite view direction).
    lens_radius: Half the aperture.
"""


# =============================================================================
# Camera Setup (Python-side, called once per camera configuration)
# =============================================================================


def setup_camera(config: ThinLensCamera) -> Camera:
    """Derive the camera state from its configuration.

    Computes the camera's orthonormal basis (u, v, w) and viewport geometry.
    The viewport lies on the focus plane, focus_distance in front of the
    lens.

    Args:
        config: Camera configuration with position, orientation, FOV and lens.

    Returns:
        An immutable Camera.

    Raises:
        ValueError: If lookfrom equals lookat, or vup is parallel to the view
            direction (the basis cannot be built).
    """
    # Convert FOV from degrees to radians
    theta = math.radians(config.vfov)
    viewport_height = 2.0 * math.tan(theta / 2.0)
    viewport_width = config.aspect_ratio * viewport_height

    lookfrom = np.array(config.lookfrom, dtype=np.float64)
    lookat = np.array(config.lookat, dtype=np.float64)
    vup = np.array(config.vup, dtype=np.float64)

    # w points from lookat toward lookfrom (backward)
    w = unit_vector(lookfrom - lookat)
    # u points right (perpendicular to w and vup)
    u = unit_vector(-cross(w, vup))
    # v points up in the camera's frame
    v = cross(w, u)

    focus = float(config.focus_distance)
    horizontal = focus * viewport_width * u
    vertical = focus * viewport_height * v
    lower_left = lookfrom - horizontal / 2.0 - vertical / 2.0 - focus * w

    return Camera(
        lookfrom,
        lower_left,
        horizontal,
        vertical,
        u,
        v,
        w,
        float(config.aperture) / 2.0,
    )


# =============================================================================
# Ray Generation (compiled)
# =============================================================================


@njit(cache=True)
def send_ray_towards(camera, s, t, state):
    """Generate a ray through normalized image coordinates (s, t).

    The coordinates are normalized:
    - s = 0: left edge of image, s = 1: right edge
    - t = 0: bottom edge of image, t = 1: top edge

    Args:
        camera: The derived Camera.
        s: Horizontal coordinate in [0, 1] (left to right).
        t: Vertical coordinate in [0, 1] (bottom to top).
        state: Generator state for lens sampling, updated in place.

    Returns:
        A Ray starting on the lens disk and aiming at the corresponding
        point on the focus plane. The direction is not normalized.
    """
    rd = camera.lens_radius * random_in_unit_disk(state)
    offset = camera.u * rd[0] + camera.v * rd[1]
    origin = camera.origin + offset
    target = camera.lower_left_corner + s * camera.horizontal + t * camera.vertical
    return Ray(origin, target - origin)


@njit(cache=True)
def get_ray_jittered(camera, pixel_i, pixel_j, width, height, state):
    """Generate a jittered ray for anti-aliasing.

    Adds a random sub-pixel offset in [0, 1) to the pixel coordinates before
    converting them to normalized image coordinates.

    Args:
        camera: The derived Camera.
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        state: Generator state, updated in place.

    Returns:
        A Ray with random sub-pixel offset.
    """
    s = (pixel_i + uniform(state, 0.0, 1.0)) / width
    t = (pixel_j + uniform(state, 0.0, 1.0)) / height
    return send_ray_towards(camera, s, t, state)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info(camera: Camera) -> dict[str, tuple[float, float, float]]:
    """Get camera state for debugging.

    Returns:
        Dictionary with origin, u, v, w, horizontal, vertical, lower_left as
        plain tuples.
    """
    def as_tuple(vec):
        return (float(vec[0]), float(vec[1]), float(vec[2]))

    return {
        "origin": as_tuple(camera.origin),
        "u": as_tuple(camera.u),
        "v": as_tuple(camera.v),
        "w": as_tuple(camera.w),
        "horizontal": as_tuple(camera.horizontal),
        "vertical": as_tuple(camera.vertical),
        "lower_left": as_tuple(camera.lower_left_corner),
    }
