"""Render settings.

Example:
    >>> from spheretracer.config import RenderSettings
    >>> settings = RenderSettings.from_width(400, 16.0 / 9.0, samples_per_pixel=50)
    >>> settings.height
    225
"""

from dataclasses import dataclass


@dataclass
class RenderSettings:
    """Configuration for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_depth: Maximum number of bounces per path.
        seed: Seed for the random streams. None draws fresh OS entropy.
        gamma: Gamma used when encoding the output (2.0 is a square root).
        batch_size: Samples per pixel rendered between progress reports.
    """

    width: int
    height: int
    samples_per_pixel: int = 50
    max_depth: int = 50
    seed: int | None = None
    gamma: float = 2.0
    batch_size: int = 10

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.samples_per_pixel <= 0:
            raise ValueError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.gamma <= 0.0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @classmethod
    def from_width(cls, width: int, aspect_ratio: float, **kwargs) -> "RenderSettings":
        """Create settings whose height follows from the width.

        Args:
            width: Image width in pixels.
            aspect_ratio: Width divided by height.
            **kwargs: Any other RenderSettings field.

        Returns:
            Settings with height = int(width / aspect_ratio).
        """
        return cls(width=width, height=int(width / aspect_ratio), **kwargs)
