"""Progressive renderer for iterative sample accumulation.

Each call to render_pass() adds a batch of samples per pixel to a float64 sum
buffer; the image is the sum divided by the sample count. Rendering can be
driven by a callback or a generator and may stop early at a wall-clock
deadline, checked only between batches.

The ProgressiveRenderer class owns the accumulation buffer and the per-row
random streams, so several renderers can exist side by side.

Example:
    >>> from spheretracer.core.progressive import ProgressiveRenderer
    >>> from spheretracer.scene.presets import create_three_spheres_scene
    >>>
    >>> scene, camera = create_three_spheres_scene()
    >>> renderer = ProgressiveRenderer(scene.build(), camera, 400, 225, seed=7)
    >>> renderer.render(100, batch_size=10)  # Render 100 SPP
    100
    >>> image = renderer.get_image_numpy()
"""

import logging
import time
from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from spheretracer.camera.thin_lens import Camera, ThinLensCamera, setup_camera
from spheretracer.core.integrator import MAX_DEPTH, render_pass
from spheretracer.core.sampler import spawn_states
from spheretracer.preview.display import apply_gamma
from spheretracer.preview.export import image_to_uint8, save_png, save_ppm
from spheretracer.scene.intersection import World

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (current_samples, total_target_samples)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """A progressive renderer that accumulates samples over time.

    The renderer keeps a float64 sum buffer of shape (height, width, 3) with
    row 0 at the bottom of the image, plus one random stream per image row.
    Every pass continues those streams, so a seeded renderer reproduces the
    same image for the same sequence of render calls.

    Attributes:
        world: The scene storage being rendered.
        camera: The derived Camera.
        max_depth: Maximum path depth.
    """

    def __init__(
        self,
        world: World,
        camera: Camera | ThinLensCamera,
        width: int,
        height: int,
        *,
        max_depth: int = MAX_DEPTH,
        seed: int | None = None,
    ) -> None:
        """Initialize the progressive renderer.

        Args:
            world: The scene storage to render.
            camera: A derived Camera, or a ThinLensCamera configuration to
                derive it from.
            width: Image width in pixels.
            height: Image height in pixels.
            max_depth: Maximum path depth (>= 0).
            seed: Seed for the random streams. None draws fresh OS entropy.

        Raises:
            ValueError: If the dimensions are not positive or max_depth is
                negative.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        if isinstance(camera, ThinLensCamera):
            camera = setup_camera(camera)
        self.world = world
        self.camera = camera
        self.max_depth = max_depth
        self._seed = seed
        self._allocate(width, height)

    def _allocate(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._accum = np.zeros((height, width, 3), dtype=np.float64)
        self._states = spawn_states(self._seed, height)
        self._sample_count = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def sample_count(self) -> int:
        """Get the current number of accumulated samples per pixel."""
        return self._sample_count

    def reset(self) -> None:
        """Reset the accumulator for a new render.

        Clears the color buffer and sample count and restarts the random
        streams from the seed, allowing a fresh render without changing the
        image dimensions.
        """
        self._allocate(self._width, self._height)

    def resize(self, width: int, height: int) -> None:
        """Resize the render target and reset accumulator.

        Args:
            width: New image width in pixels.
            height: New image height in pixels.

        Raises:
            ValueError: If the dimensions are not positive.
        """
        self._allocate(width, height)

    def reseed(self, seed: int | None = None) -> None:
        """Switch to a new seed and reset the accumulator."""
        self._seed = seed
        self.reset()

    def _render_batch(self, batch: int) -> None:
        render_pass(
            self.camera,
            self.world,
            self._width,
            self._height,
            batch,
            self.max_depth,
            self._states,
            self._accum,
        )
        self._sample_count += batch

    def render(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
        callback: ProgressCallback | None = None,
        deadline: float | None = None,
    ) -> int:
        """Render samples progressively with optional progress callback.

        Accumulates the specified number of samples into the existing buffer.
        Can be called multiple times to continue refining the image.

        Args:
            num_samples: Total number of samples to add.
            batch_size: Number of samples to render before each callback.
                A larger batch size reduces callback overhead but provides
                less frequent updates.
            callback: Optional callback function called after each batch.
                Receives (current_total_samples, target_total_samples).
            deadline: Optional time budget in seconds. Checked after each
                batch; once exceeded no further batch is started. At least
                one batch is always rendered.

        Returns:
            The number of samples per pixel actually added.

        Example:
            >>> def progress(current, target):
            ...     print(f"Progress: {current}/{target} samples")
            >>> renderer.render(100, batch_size=10, callback=progress)
        """
        added = 0
        for current, target in self.render_progressive(num_samples, batch_size, deadline):
            added = current - (target - num_samples)
            if callback is not None:
                callback(current, target)
        return added

    def render_progressive(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
        deadline: float | None = None,
    ) -> Generator[tuple[int, int], None, None]:
        """Render samples progressively, yielding progress after each batch.

        This is a generator-based alternative to render() with callbacks,
        useful for integration with asyncio or iterative processing.

        Args:
            num_samples: Total number of samples to add.
            batch_size: Number of samples to render before each yield.
            deadline: Optional time budget in seconds, as for render().

        Yields:
            Tuple of (current_total_samples, target_total_samples).

        Raises:
            ValueError: If batch_size is not positive.

        Example:
            >>> for current, target in renderer.render_progressive(100, batch_size=10):
            ...     print(f"Progress: {current}/{target} samples")
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        if num_samples <= 0:
            return

        start_samples = self.sample_count
        target_samples = start_samples + num_samples
        started = time.monotonic()
        logger.debug(
            "Rendering %d spp at %dx%d in batches of %d",
            num_samples,
            self._width,
            self._height,
            batch_size,
        )

        remaining = num_samples
        while remaining > 0:
            batch = min(batch_size, remaining)
            self._render_batch(batch)
            remaining -= batch
            yield (self.sample_count, target_samples)

            elapsed = time.monotonic() - started
            if remaining > 0 and deadline is not None and elapsed >= deadline:
                logger.warning(
                    "Deadline of %.2fs reached after %d of %d samples",
                    deadline,
                    self.sample_count - start_samples,
                    num_samples,
                )
                return

        logger.info(
            "Rendered %d spp in %.2fs (total %d spp)",
            num_samples,
            time.monotonic() - started,
            self.sample_count,
        )

    def get_accumulation(self) -> npt.NDArray[np.float64]:
        """Get a copy of the raw sample sums (row 0 at the bottom)."""
        return self._accum.copy()

    def get_image_numpy(self, gamma: float = 1.0) -> npt.NDArray[np.float64]:
        """Get the rendered image as a NumPy array.

        Returns the mean color per pixel, clamped to [0, 1] and optionally
        gamma corrected. The array shape is (height, width, 3) with row 0 at
        the top of the image.

        Args:
            gamma: Gamma correction value. Default 1.0 (linear).

        Returns:
            NumPy array of shape (height, width, 3) with dtype float64.

        Raises:
            RuntimeError: If no sample has been rendered yet.
            ValueError: If gamma is not positive.
        """
        if self._sample_count == 0:
            raise RuntimeError("No samples rendered yet. Call render() first.")

        image = self._accum / self._sample_count

        # Flip vertically (row 0 is the bottom while rendering, images use top-left)
        image = np.flipud(image)

        return np.ascontiguousarray(apply_gamma(image, gamma))

    def get_image_uint8(self, gamma: float = 2.0) -> npt.NDArray[np.uint8]:
        """Get the rendered image as an 8-bit NumPy array.

        Args:
            gamma: Gamma correction value. Default 2.0 (square root).

        Returns:
            NumPy array of shape (height, width, 3) with dtype uint8.
        """
        return image_to_uint8(self.get_image_numpy(gamma=1.0), gamma=gamma)

    def save_image(self, filepath: str, gamma: float = 2.0) -> None:
        """Save the rendered image to a file.

        The format follows the file extension (".ppm" writes plain-text P3,
        everything else goes through Pillow).

        Args:
            filepath: Path to save the image (e.g., "output.png").
            gamma: Gamma correction value. Default 2.0 (square root).
        """
        if str(filepath).lower().endswith(".ppm"):
            save_ppm(self.get_image_numpy(gamma=1.0), filepath, gamma=gamma)
        else:
            save_png(self, filepath, gamma=gamma)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"samples={self.sample_count})"
        )
