"""Render configuration.

RenderConfig gathers every parameter the render entry point needs. It is
validated once, before any rendering starts, so that bad input fails fast
instead of mid-render.
"""

import os
from dataclasses import dataclass

# Largest seed a 32-bit stream accepts
MAX_SEED = 2**32 - 1

# Largest buffer the kernels can index with 32-bit integers
MAX_BUFFER_BYTES = 2**31 - 1


class RenderConfigError(ValueError):
    """Raised when a render configuration is rejected before rendering."""


@dataclass(frozen=True)
class RenderConfig:
    """Parameters for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Samples per pixel.
        max_depth: Bounce cap for each path.
        seed: Base seed of the random streams, in [1, 2**32 - 1].
        workers: Number of processing units the rows are split across.
            None means os.cpu_count().
        shared_band_seed: If True every band starts from the same base seed
            instead of a seed derived from its index.
    """

    width: int
    height: int
    samples: int = 100
    max_depth: int = 50
    seed: int = 485468
    workers: int | None = None
    shared_band_seed: bool = False

    @property
    def worker_count(self) -> int:
        """The number of processing units, resolving None to the CPU count."""
        if self.workers is None:
            return os.cpu_count() or 1
        return self.workers

    @property
    def buffer_size(self) -> int:
        """Size of the RGB pixel buffer in bytes."""
        return self.width * self.height * 3

    def validate(self) -> None:
        """Check every parameter.

        Raises:
            RenderConfigError: If any parameter is out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise RenderConfigError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.samples <= 0:
            raise RenderConfigError(f"Samples per pixel must be positive, got {self.samples}")
        if self.max_depth < 0:
            raise RenderConfigError(f"Max depth must not be negative, got {self.max_depth}")
        if self.seed <= 0 or self.seed > MAX_SEED:
            raise RenderConfigError(f"Seed {self.seed} must be in [1, {MAX_SEED}]")
        if self.worker_count <= 0:
            raise RenderConfigError(f"Worker count must be positive, got {self.worker_count}")
        if self.buffer_size > MAX_BUFFER_BYTES:
            raise RenderConfigError(
                f"Image {self.width}x{self.height} needs {self.buffer_size} bytes, "
                f"more than the supported {MAX_BUFFER_BYTES}"
            )
