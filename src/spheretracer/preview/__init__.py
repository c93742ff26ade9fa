"""Preview module for output and visualization.

This module handles rendering output and preview:

Components:
    display: Matplotlib-based preview display
    export: PNG/PPM image export utilities

Example:
    >>> from spheretracer.preview import show_preview, save_png
    >>> from spheretracer.core.progressive import ProgressiveRenderer
    >>>
    >>> renderer = ProgressiveRenderer(world, camera, 400, 225)
    >>> renderer.render(100)
    >>> show_preview(renderer)
    >>> save_png(renderer, "output.png", gamma=2.0)
"""

from spheretracer.preview.display import (
    apply_gamma,
    process_image_for_display,
    show_preview,
    validate_image,
)
from spheretracer.preview.export import (
    compute_rmse,
    image_to_uint8,
    save_png,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "apply_gamma",
    "process_image_for_display",
    "validate_image",
    # Export functions
    "save_png",
    "save_ppm",
    "image_to_uint8",
    "compute_rmse",
]
