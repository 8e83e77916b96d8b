"""Image export utilities for rendered framebuffers.

The renderer produces a flat RGB byte buffer whose first row is the
bottom row of the sensor (``yscreen = 0``). Image files store the top
row first, so rows are flipped by default before saving.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from aotrace.core.renderer import render
    >>> from aotrace.preview.export import save_png
    >>>
    >>> framebuffer = render(scene, camera, 320, 240, sample_count=8)
    >>> save_png(framebuffer, 320, 240, "output.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def framebuffer_to_array(
    framebuffer: bytes | npt.NDArray[np.uint8],
    width: int,
    height: int,
    *,
    flip_vertical: bool = True,
) -> npt.NDArray[np.uint8]:
    """Reshape a flat RGB framebuffer to an image array.

    Args:
        framebuffer: ``3 * width * height`` bytes, row-major.
        width: Image width in pixels.
        height: Image height in pixels.
        flip_vertical: Reverse row order so framebuffer row 0 ends up at
            the bottom of the image.

    Returns:
        Array of shape (height, width, 3) with dtype uint8.

    Raises:
        ValueError: If the buffer size does not match the dimensions.
    """
    pixels = np.frombuffer(bytes(framebuffer), dtype=np.uint8)
    expected = 3 * width * height
    if pixels.size != expected:
        raise ValueError(
            f"Framebuffer has {pixels.size} bytes, expected {expected} for {width}x{height}"
        )

    image = pixels.reshape(height, width, 3)
    if flip_vertical:
        image = image[::-1]
    return np.ascontiguousarray(image)


def save_png(
    framebuffer: bytes | npt.NDArray[np.uint8],
    width: int,
    height: int,
    filepath: str | Path,
    *,
    flip_vertical: bool = True,
) -> Path:
    """Save a flat RGB framebuffer as a PNG file.

    Args:
        framebuffer: ``3 * width * height`` bytes, row-major.
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path (should end in .png).
        flip_vertical: See framebuffer_to_array.

    Returns:
        The path written.
    """
    image = framebuffer_to_array(framebuffer, width, height, flip_vertical=flip_vertical)

    # Save using Pillow
    output = Path(filepath)
    PILImage.fromarray(image).save(output)
    return output
