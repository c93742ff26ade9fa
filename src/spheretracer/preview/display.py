"""Matplotlib-based preview display for rendered images.

This module provides functions for displaying rendered images using Matplotlib,
with gamma correction.

Features:
    - Interactive preview window
    - Gamma correction (square root by default)
    - Sample count display

Example:
    >>> from spheretracer.preview.display import show_preview
    >>> from spheretracer.core.progressive import ProgressiveRenderer
    >>>
    >>> renderer = ProgressiveRenderer(world, camera, 400, 225)
    >>> renderer.render(100)
    >>> show_preview(renderer)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from spheretracer.core.progressive import ProgressiveRenderer


def validate_image(image: npt.NDArray[np.floating]) -> None:
    """Check that an array is an RGB image of shape (H, W, 3).

    Raises:
        ValueError: If the array has any other shape.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")


def apply_gamma(
    image: npt.NDArray[np.floating],
    gamma: float = 2.0,
) -> npt.NDArray[np.float64]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value (default 2.0, a square root).

    Returns:
        Gamma corrected image, clamped to [0, 1].

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)

    if gamma == 1.0:
        return image

    # Apply gamma encoding: out = in^(1/gamma)
    return np.power(image, 1.0 / gamma)


def process_image_for_display(
    image: npt.NDArray[np.floating],
    gamma: float = 2.0,
) -> npt.NDArray[np.float64]:
    """Process a linear image for display.

    Validates the shape, then applies gamma correction and clamping.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 2.0).

    Returns:
        Processed image ready for display, in [0, 1] range.
    """
    validate_image(image)
    return apply_gamma(image, gamma)


def show_preview(
    renderer: ProgressiveRenderer,
    *,
    gamma: float = 2.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display the current render as a Matplotlib figure.

    The sample count is displayed in the title.

    Args:
        renderer: The ProgressiveRenderer instance to display.
        gamma: Gamma correction value (default 2.0).
        title: Custom title (default shows sample count).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    # Get linear image from renderer (gamma=1.0 for linear)
    image = renderer.get_image_numpy(gamma=1.0)
    display_image = process_image_for_display(image, gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {renderer.sample_count} SPP"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
