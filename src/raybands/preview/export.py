"""Image export utilities for rendered pixel buffers.

The renderer produces a flat row-major RGB byte buffer, top row first.
This module reshapes it into an image array and encodes it with Pillow.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from raybands.preview.export import save_png
    >>> save_png(pixels, 200, 100, "spheres.png")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def buffer_to_image(
    buffer: npt.NDArray[np.uint8],
    width: int,
    height: int,
) -> npt.NDArray[np.uint8]:
    """Reshape a flat RGB buffer into an image array.

    Args:
        buffer: Flat buffer of width * height * 3 bytes, top row first.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Array of shape (height, width, 3) with dtype uint8.

    Raises:
        ValueError: If the buffer size does not match the dimensions.
    """
    expected = width * height * 3
    if buffer.size != expected:
        raise ValueError(
            f"Buffer holds {buffer.size} bytes, expected {expected} for {width}x{height}"
        )
    return np.asarray(buffer, dtype=np.uint8).reshape(height, width, 3)


def save_png(
    buffer: npt.NDArray[np.uint8],
    width: int,
    height: int,
    filepath: str,
) -> None:
    """Save a rendered buffer as a PNG file.

    The bytes are written as they are; gamma correction already happened
    in the renderer.

    Args:
        buffer: Flat RGB buffer from raybands.core.renderer.render().
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path (should end in .png).
    """
    image = buffer_to_image(buffer, width, height)
    pil_image = PILImage.fromarray(image, mode="RGB")
    pil_image.save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
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
