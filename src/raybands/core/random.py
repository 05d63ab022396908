"""Deterministic random number streams for Monte Carlo sampling.

Every rendering band owns one xorshift32 stream. The stream states live in a
single Taichi field, one slot per band, so that kernels running bands in
parallel never touch each other's state.

The xorshift32 step is:
    x ^= x << 13
    x ^= x >> 17   (logical shift)
    x ^= x << 5

``random_bilateral`` divides the new state by ``u32::MAX`` and therefore
returns a float in [0, 1]. Despite its name it is not symmetric around zero.

A host-side mirror (``xorshift32`` and ``RandomSeries``) reproduces the kernel
sequence bit for bit, which is what band seeds are derived with.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raybands.core.random import seed_random_stream, random_bilateral
    >>> seed_random_stream(0, 485468)
    >>> # Inside a kernel:
    >>> # jitter = random_bilateral(0)
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti

from raybands.core.ray import length_square, vec3

# Maximum number of independent streams (one per rendering band)
MAX_RANDOM_STREAMS = 1024

MASK32 = 0xFFFFFFFF
U32_MAX = 4294967295.0

# Weyl increment used to spread band indices over the 32-bit seed space
GOLDEN_GAMMA = 0x9E3779B9

# One xorshift32 state per stream
_random_state = ti.field(dtype=ti.u32, shape=MAX_RANDOM_STREAMS)


# =============================================================================
# Host-side mirror
# =============================================================================


def xorshift32(state: int) -> int:
    """Advance a 32-bit xorshift state by one step.

    Args:
        state: The current state. Zero is a fixed point of the generator.

    Returns:
        The next state.
    """
    x = state & MASK32
    x ^= (x << 13) & MASK32
    x ^= x >> 17
    x ^= (x << 5) & MASK32
    return x


@dataclass
class RandomSeries:
    """Host-side xorshift32 series matching the kernel streams exactly.

    Attributes:
        state: The current 32-bit state. Must be non-zero.
    """

    state: int

    def next_u32(self) -> int:
        self.state = xorshift32(self.state)
        return self.state

    def random_bilateral(self) -> np.float32:
        """Return the next value in [0, 1] using float32 arithmetic."""
        return np.float32(self.next_u32()) / np.float32(U32_MAX)


def derive_band_seed(seed: int, band_index: int) -> int:
    """Derive the seed for one rendering band from the base seed.

    Band 0 keeps the base seed. Every other band mixes its index into the
    seed and runs one xorshift32 step, which keeps the result non-zero.

    Args:
        seed: The base seed (non-zero, 32-bit).
        band_index: The band's position in the partition.

    Returns:
        A non-zero 32-bit seed.
    """
    if band_index == 0:
        return seed
    mixed = (seed ^ (band_index * GOLDEN_GAMMA)) & MASK32
    if mixed == 0:
        mixed = seed
    return xorshift32(mixed)


# =============================================================================
# Stream management (Python scope)
# =============================================================================


def check_stream(stream: int) -> None:
    """Raise ValueError unless stream indexes an existing random stream."""
    if stream < 0 or stream >= MAX_RANDOM_STREAMS:
        raise ValueError(
            f"Random stream {stream} is outside [0, {MAX_RANDOM_STREAMS})"
        )


def seed_random_stream(stream: int, seed: int) -> None:
    """Set the state of one random stream.

    Args:
        stream: The stream index (one per band).
        seed: The 32-bit seed. Zero would lock the generator at zero.

    Raises:
        ValueError: If the stream index or the seed is out of range.
    """
    check_stream(stream)
    if seed <= 0 or seed > MASK32:
        raise ValueError(f"Seed {seed} must be in [1, {MASK32}]")
    _random_state[stream] = seed


def get_random_state(stream: int) -> int:
    """Read back the current state of one random stream."""
    check_stream(stream)
    return int(_random_state[stream])


# =============================================================================
# Sampling (Taichi scope)
# =============================================================================


@ti.func
def _xorshift32(state: ti.u32) -> ti.u32:
    x = state
    x = x ^ (x << ti.u32(13))
    x = x ^ ti.bit_shr(x, ti.u32(17))
    x = x ^ (x << ti.u32(5))
    return x


@ti.func
def random_u32(stream: ti.i32) -> ti.u32:
    """Advance a stream and return its new 32-bit state."""
    x = _xorshift32(_random_state[stream])
    _random_state[stream] = x
    return x


@ti.func
def random_bilateral(stream: ti.i32) -> ti.f32:
    """Draw a float in [0, 1] from a stream.

    Args:
        stream: The stream index owned by the calling band.

    Returns:
        The new state divided by u32::MAX, in single precision.
    """
    return ti.cast(random_u32(stream), ti.f32) / U32_MAX


@ti.func
def random_in_unit_sphere(stream: ti.i32) -> vec3:
    """Generate a random point strictly inside the unit sphere.

    Rejection sampling over the [-1, 1] cube, three draws per attempt in
    x, y, z order. The loop has no retry bound; about 48% of attempts are
    rejected.

    Args:
        stream: The stream index owned by the calling band.

    Returns:
        A point with length_square < 1.
    """
    p = 2.0 * vec3(
        random_bilateral(stream),
        random_bilateral(stream),
        random_bilateral(stream),
    ) - vec3(1.0, 1.0, 1.0)
    while length_square(p) >= 1.0:
        p = 2.0 * vec3(
            random_bilateral(stream),
            random_bilateral(stream),
            random_bilateral(stream),
        ) - vec3(1.0, 1.0, 1.0)
    return p
