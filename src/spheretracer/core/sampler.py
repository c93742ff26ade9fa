"""Seedable random sampling for Monte Carlo ray tracing.

The generator is SplitMix64: a counter-based stream whose entire state is one
64-bit word. The state lives in a caller-owned ``uint64`` array, so every
sampling function receives its generator explicitly and is advanced in place.
There is no process-wide random state.

A render owns one generator per worker (per image row), derived from a single
seed through ``numpy.random.SeedSequence``. This keeps results reproducible
for a given seed regardless of how many threads execute the render.

Example:
    >>> from spheretracer.core.sampler import RandomSource, uniform
    >>> rng = RandomSource(seed=42)
    >>> x = rng.uniform(0.0, 1.0)       # From Python
    >>> y = uniform(rng.state, -1.0, 1.0)  # The same stream, as compiled code sees it
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from numba import njit

from spheretracer.core.vector import dot, unit_vector, vec3

# SplitMix64 constants
_GOLDEN_GAMMA = np.uint64(0x9E3779B97F4A7C15)
_MIX_MULTIPLIER_1 = np.uint64(0xBF58476D1CE4E5B9)
_MIX_MULTIPLIER_2 = np.uint64(0x94D049BB133111EB)
_SHIFT_30 = np.uint64(30)
_SHIFT_27 = np.uint64(27)
_SHIFT_31 = np.uint64(31)

# 53 random bits map exactly onto the float64 mantissa
_SHIFT_11 = np.uint64(11)
_INV_2_POW_53 = 1.0 / 9007199254740992.0

# Component range used when rejection-sampling unit vectors
UNIT_VECTOR_SAMPLE_RANGE = 10.0


# =============================================================================
# Stream State
# =============================================================================


def new_state(seed: int | None = None) -> npt.NDArray[np.uint64]:
    """Derive a single generator state from a seed.

    Args:
        seed: Any non-negative integer. None draws fresh OS entropy.

    Returns:
        A uint64 array of shape (1,) to pass into sampling functions.
    """
    return np.random.SeedSequence(seed).generate_state(1, dtype=np.uint64)


def spawn_states(seed: int | None, count: int) -> npt.NDArray[np.uint64]:
    """Derive independent generator states for parallel workers.

    Args:
        seed: Any non-negative integer. None draws fresh OS entropy.
        count: Number of independent streams.

    Returns:
        A uint64 array of shape (count, 1). Row k is the state of stream k.

    Raises:
        ValueError: If count is negative.
    """
    if count < 0:
        raise ValueError(f"Stream count must be non-negative, got {count}")
    states = np.random.SeedSequence(seed).generate_state(count, dtype=np.uint64)
    return states.reshape(count, 1)


# =============================================================================
# Compiled Sampling Functions
# =============================================================================


@njit(cache=True)
def next_uint64(state):
    """Advance the stream and return 64 random bits.

    Args:
        state: uint64 array of shape (1,), updated in place.

    Returns:
        A uint64 value.
    """
    state[0] += _GOLDEN_GAMMA
    z = state[0]
    z = (z ^ (z >> _SHIFT_30)) * _MIX_MULTIPLIER_1
    z = (z ^ (z >> _SHIFT_27)) * _MIX_MULTIPLIER_2
    return z ^ (z >> _SHIFT_31)


@njit(cache=True)
def uniform(state, min_value, max_value):
    """Draw a real number uniformly from [min_value, max_value).

    Args:
        state: Generator state, updated in place.
        min_value: Lower bound (inclusive).
        max_value: Upper bound (exclusive).

    Returns:
        A float64 sample.
    """
    unit = (next_uint64(state) >> _SHIFT_11) * _INV_2_POW_53
    return min_value + (max_value - min_value) * unit


@njit(cache=True)
def uniform_vector(state, min_value, max_value):
    """Draw a vector whose components are independent uniform samples."""
    x = uniform(state, min_value, max_value)
    y = uniform(state, min_value, max_value)
    z = uniform(state, min_value, max_value)
    return vec3(x, y, z)


@njit(cache=True)
def uniform_unit_vector(state):
    """Draw a random unit vector.

    Rejection-samples a vector with components in [-10, 10] until it is not
    the zero vector, then normalizes it. A generator that only ever produced
    the zero vector would loop forever; with 53-bit samples this has no
    practical probability.

    Args:
        state: Generator state, updated in place.

    Returns:
        A unit vector.
    """
    v = uniform_vector(state, -UNIT_VECTOR_SAMPLE_RANGE, UNIT_VECTOR_SAMPLE_RANGE)
    while dot(v, v) == 0.0:
        v = uniform_vector(state, -UNIT_VECTOR_SAMPLE_RANGE, UNIT_VECTOR_SAMPLE_RANGE)
    return unit_vector(v)


@njit(cache=True)
def random_in_unit_disk(state):
    """Draw a point uniformly from the unit disk in the xy-plane.

    Used for thin-lens aperture sampling.

    Args:
        state: Generator state, updated in place.

    Returns:
        A vector (x, y, 0) with x^2 + y^2 < 1.
    """
    x = uniform(state, -1.0, 1.0)
    y = uniform(state, -1.0, 1.0)
    while x * x + y * y >= 1.0:
        x = uniform(state, -1.0, 1.0)
        y = uniform(state, -1.0, 1.0)
    return vec3(x, y, 0.0)


# =============================================================================
# Python Wrapper
# =============================================================================


class RandomSource:
    """A seedable random generator instance.

    Wraps one stream state for Python callers (scene generators, tests) and
    exposes the raw state for compiled code.

    Attributes:
        state: uint64 array of shape (1,) holding the stream position.
    """

    def __init__(self, seed: int | None = None) -> None:
        """Create a generator.

        Args:
            seed: Any non-negative integer. None draws fresh OS entropy.
        """
        self.state = new_state(seed)

    def reseed(self, seed: int | None = None) -> None:
        """Restart the stream from a new seed."""
        self.state = new_state(seed)

    def spawn(self, count: int) -> npt.NDArray[np.uint64]:
        """Derive independent worker states from this stream.

        The child seed is drawn from this stream, so spawning is itself
        reproducible for a seeded source.

        Args:
            count: Number of independent streams.

        Returns:
            A uint64 array of shape (count, 1).
        """
        return spawn_states(int(next_uint64(self.state)), count)

    def uniform(self, min_value: float = 0.0, max_value: float = 1.0) -> float:
        """Draw a real number uniformly from [min_value, max_value)."""
        return float(uniform(self.state, float(min_value), float(max_value)))

    def uniform_vector(
        self, min_value: float = 0.0, max_value: float = 1.0
    ) -> npt.NDArray[np.float64]:
        """Draw a vector of independent uniform components."""
        return uniform_vector(self.state, float(min_value), float(max_value))

    def uniform_unit_vector(self) -> npt.NDArray[np.float64]:
        """Draw a random unit vector."""
        return uniform_unit_vector(self.state)

    def __repr__(self) -> str:
        """Return a string representation of the generator position."""
        return f"RandomSource(state={int(self.state[0]):#018x})"
