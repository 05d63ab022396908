"""Preview module for output.

Components:
    export: Pillow-based PNG export of rendered buffers

Example:
    >>> from raybands.preview import save_png
    >>> save_png(pixels, 200, 100, "output.png")
"""

from raybands.preview.export import (
    buffer_to_image,
    compute_rmse,
    save_png,
)

__all__ = [
    "buffer_to_image",
    "compute_rmse",
    "save_png",
]
