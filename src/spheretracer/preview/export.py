"""Image export utilities for rendered images.

This module provides functions for saving rendered images to files with
gamma correction.

Supported formats:
    - PNG (8-bit via Pillow)
    - PPM (plain-text P3, one "r g b" line per pixel)

Example:
    >>> from spheretracer.preview.export import save_png
    >>> from spheretracer.core.progressive import ProgressiveRenderer
    >>>
    >>> renderer = ProgressiveRenderer(world, camera, 400, 225)
    >>> renderer.render(100)
    >>> save_png(renderer, "output.png")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretracer.preview.display import process_image_for_display

if TYPE_CHECKING:
    from spheretracer.core.progressive import ProgressiveRenderer

logger = logging.getLogger(__name__)

# Largest channel value of 8-bit output
MAX_CHANNEL_VALUE = 255


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 2.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8 for display/export.

    Clamps to [0, 1], applies gamma correction, scales by 255 and truncates.
    Gamma 2.0 is square-root tone mapping.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 2.0).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(image, gamma=gamma)
    return (processed * MAX_CHANNEL_VALUE).astype(np.uint8)


def save_png(
    source: ProgressiveRenderer | npt.NDArray[np.floating],
    filepath: str,
    *,
    gamma: float = 2.0,
) -> None:
    """Save a rendered image as a PNG file.

    Args:
        source: A ProgressiveRenderer, or a linear image array of shape
            (H, W, 3) with row 0 at the top.
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value (default 2.0).

    Example:
        >>> save_png(renderer, "output.png", gamma=2.0)
    """
    if isinstance(source, np.ndarray):
        image = source
    else:
        image = source.get_image_numpy(gamma=1.0)

    image_uint8 = image_to_uint8(image, gamma=gamma)
    PILImage.fromarray(image_uint8).save(filepath)
    logger.info("Saved %dx%d PNG to %s", image.shape[1], image.shape[0], filepath)


def save_ppm(
    image: npt.NDArray[np.floating],
    filepath: str,
    *,
    gamma: float = 2.0,
) -> None:
    """Save a linear image as a plain-text (P3) PPM file.

    The header is "P3", then "width height", then the maximum channel value.
    Pixels follow row by row from the top, one "r g b" line each.

    Args:
        image: Linear image array of shape (H, W, 3) with row 0 at the top.
        filepath: Output file path (should end in .ppm).
        gamma: Gamma correction value (default 2.0).
    """
    image_uint8 = image_to_uint8(image, gamma=gamma)
    height, width = image_uint8.shape[:2]

    with open(filepath, "w", encoding="ascii") as f:
        f.write(f"P3\n{width} {height}\n{MAX_CHANNEL_VALUE}\n")
        np.savetxt(f, image_uint8.reshape(-1, 3), fmt="%d")

    logger.info("Saved %dx%d PPM to %s", width, height, filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
