"""Parallel band renderer.

The image is split into contiguous bands of rows, one band per processing
unit. A single kernel renders every band: its outermost loop runs over the
bands, so Taichi executes them in parallel, while the loops inside a band
(columns, rows, samples, bounces) run serially.

Each band owns:
    - one random stream, seeded from the host before the launch,
    - a disjoint range of the output buffer.

The scene and camera are read only and shared by every band. No band
writes anything another band reads, so no synchronization is needed and
the output does not depend on scheduling. The kernel launch returns only
after every band has finished.

Within a band, pixels are visited column by column (x outer, y inner). Each
pixel averages ``samples`` jittered camera rays, applies gamma 2 (square
root) and quantizes each channel as ``u8(channel * 255.9)``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raybands.core.config import RenderConfig
    >>> from raybands.core.renderer import render
    >>> from raybands.scene.default import create_default_scene
    >>> from raybands.scene.manager import SceneManager
    >>> SceneManager().load_spheres(create_default_scene())
    >>> pixels = render(RenderConfig(width=200, height=100, samples=16))
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from raybands.camera.pinhole import PinholeCamera, get_ray, setup_camera
from raybands.core.config import RenderConfig, RenderConfigError
from raybands.core.integrator import trace_path
from raybands.core.random import (
    MAX_RANDOM_STREAMS,
    derive_band_seed,
    random_bilateral,
    seed_random_stream,
)
from raybands.core.ray import vec3

logger = logging.getLogger(__name__)


class RenderBufferError(MemoryError):
    """Raised when the output pixel buffer cannot be allocated."""


@dataclass(frozen=True)
class Band:
    """A contiguous strip of image rows rendered by one worker.

    Attributes:
        index: Position of the band, also the index of its random stream.
        start_row: First image row (0 is the top row).
        row_count: Number of rows in the band.
        seed: Seed of the band's random stream.
    """

    index: int
    start_row: int
    row_count: int
    seed: int

    @property
    def end_row(self) -> int:
        """One past the last row of the band."""
        return self.start_row + self.row_count


# =============================================================================
# Work Partition (Python scope)
# =============================================================================


def rows_per_band(height: int, workers: int) -> int:
    """Rows in every band but the last: height / workers rounded half away from zero.

    Never less than one, so images shorter than the worker count get one row
    per band.
    """
    return max(1, math.floor(height / workers + 0.5))


def partition_rows(height: int, workers: int) -> list[tuple[int, int]]:
    """Split image rows into contiguous bands.

    Args:
        height: Image height in rows.
        workers: Number of processing units.

    Returns:
        A list of (start_row, row_count) covering [0, height) without gaps
        or overlap. Only the last band may be shorter. Rounding can yield
        one band more or less than workers.

    Raises:
        ValueError: If height or workers is not positive.
    """
    if height <= 0 or workers <= 0:
        raise ValueError(f"Height and workers must be positive, got {height} and {workers}")
    step = rows_per_band(height, workers)
    return [(start, min(step, height - start)) for start in range(0, height, step)]


def plan_bands(config: RenderConfig) -> list[Band]:
    """Partition the image and assign each band its seed.

    Args:
        config: A validated render configuration.

    Returns:
        The bands in row order.

    Raises:
        RenderConfigError: If there are more bands than random streams.
    """
    rows = partition_rows(config.height, config.worker_count)
    if len(rows) > MAX_RANDOM_STREAMS:
        raise RenderConfigError(
            f"{len(rows)} bands exceed the {MAX_RANDOM_STREAMS} available random streams; "
            "use fewer workers"
        )
    return [
        Band(
            index=i,
            start_row=start,
            row_count=count,
            seed=config.seed if config.shared_band_seed else derive_band_seed(config.seed, i),
        )
        for i, (start, count) in enumerate(rows)
    ]


def allocate_pixel_buffer(width: int, height: int) -> np.ndarray:
    """Allocate the flat row-major RGB buffer.

    Raises:
        RenderBufferError: If the allocation fails.
    """
    size = width * height * 3
    try:
        return np.zeros(size, dtype=np.uint8)
    except MemoryError as err:
        raise RenderBufferError(
            f"Could not allocate {size} bytes for a {width}x{height} image"
        ) from err


# =============================================================================
# Rendering Kernel
# =============================================================================


@ti.func
def gamma_correct(color: vec3) -> vec3:
    """Gamma 2: square root of each channel."""
    return vec3(ti.sqrt(color.x), ti.sqrt(color.y), ti.sqrt(color.z))


@ti.func
def to_byte(channel: ti.f32) -> ti.u8:
    """Quantize a [0, 1] channel as channel * 255.9, truncated.

    Out-of-range values saturate to [0, 255].
    """
    return ti.cast(tm.clamp(channel * 255.9, 0.0, 255.0), ti.u8)


@ti.kernel
def _render_bands(
    pixels: ti.types.ndarray(dtype=ti.u8, ndim=1),
    bands: ti.types.ndarray(dtype=ti.i32, ndim=2),
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    max_depth: ti.i32,
):
    # One band per task; the band index doubles as its random stream
    ti.loop_config(block_dim=1)
    for b in range(bands.shape[0]):
        start_row = bands[b, 0]
        row_count = bands[b, 1]

        for x in range(width):
            for y in range(row_count):
                col = vec3(0.0, 0.0, 0.0)
                for _ in range(samples):
                    u = (ti.cast(x, ti.f32) + random_bilateral(b)) / ti.cast(width, ti.f32)
                    v = (
                        ti.cast(height - (y + start_row) - 1, ti.f32) + random_bilateral(b)
                    ) / ti.cast(height, ti.f32)
                    color, _depth = trace_path(get_ray(u, v), b, max_depth)
                    col += color

                col = gamma_correct(col / ti.cast(samples, ti.f32))

                current = ((start_row + y) * width + x) * 3
                pixels[current] = to_byte(col.x)
                pixels[current + 1] = to_byte(col.y)
                pixels[current + 2] = to_byte(col.z)


# =============================================================================
# Public Rendering API
# =============================================================================


def render(config: RenderConfig, camera: PinholeCamera | None = None) -> np.ndarray:
    """Render the current scene.

    The scene must already be loaded (see SceneManager). The call blocks
    until every band has finished.

    Args:
        config: The render parameters.
        camera: The camera to render from. Defaults to PinholeCamera().

    Returns:
        A flat uint8 array of width * height * 3 bytes, RGB, row-major,
        top row first.

    Raises:
        RenderConfigError: If the configuration is rejected.
        RenderBufferError: If the pixel buffer cannot be allocated.
    """
    config.validate()
    bands = plan_bands(config)
    pixels = allocate_pixel_buffer(config.width, config.height)

    setup_camera(camera if camera is not None else PinholeCamera())

    band_table = np.empty((len(bands), 2), dtype=np.int32)
    for band in bands:
        seed_random_stream(band.index, band.seed)
        band_table[band.index] = (band.start_row, band.row_count)
        logger.debug(
            "Band %d: start row %d, %d rows, seed %d",
            band.index,
            band.start_row,
            band.row_count,
            band.seed,
        )

    logger.info(
        "Rendering %dx%d at %d samples per pixel across %d bands",
        config.width,
        config.height,
        config.samples,
        len(bands),
    )
    _render_bands(
        pixels,
        band_table,
        config.width,
        config.height,
        config.samples,
        config.max_depth,
    )
    return pixels
