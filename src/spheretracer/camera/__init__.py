"""Camera module for view and ray generation.

This module provides the camera model for generating primary rays:

Components:
    thin_lens: Perspective camera with a circular aperture (depth of field)

Camera responsibilities:
    - Transform (s, t) image coordinates to world-space rays
    - Apply anti-aliasing jitter for sub-pixel sampling
    - Support look-at positioning with up vector
    - Sample the lens disk for depth of field

Ray generation uses normalized device coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import (
    Camera,
    ThinLensCamera,
    get_camera_info,
    get_ray_jittered,
    send_ray_towards,
    setup_camera,
)

__all__ = [
    "ThinLensCamera",
    "Camera",
    "setup_camera",
    "send_ray_towards",
    "get_ray_jittered",
    "get_camera_info",
]
