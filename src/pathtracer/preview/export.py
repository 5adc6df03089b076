"""Image export utilities for rendered images.

This module provides the pixel output collaborators of the renderer:

Supported formats:
    - Plain PPM (P3): ASCII header and one ``r g b`` line per pixel
    - PNG (8-bit via Pillow)

Both paths apply the same channel encoding: a gamma-2 transfer curve (square
root), a clamp into [0.000, 0.999] and a scale to integers in [0, 255].

Example:
    >>> import sys
    >>> from src.pathtracer.preview.export import PPMWriter
    >>> renderer.render(world, output=PPMWriter(sys.stdout))
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.pathtracer.core.interval import Interval
from src.pathtracer.core.ray import Vec3
from src.pathtracer.preview.display import apply_gamma

# Channel values are clamped here before scaling by 256
INTENSITY = Interval(0.000, 0.999)


def linear_to_gamma(linear_component: float) -> float:
    """Apply the gamma-2 transfer curve to one linear channel."""
    if linear_component > 0.0:
        return math.sqrt(linear_component)
    return 0.0


def encode_color(pixel_color: Vec3) -> tuple[int, int, int]:
    """Encode a linear color as three byte values in [0, 255]."""
    r, g, b = (linear_to_gamma(float(c)) for c in pixel_color)
    return (
        int(256 * INTENSITY.clamp(r)),
        int(256 * INTENSITY.clamp(g)),
        int(256 * INTENSITY.clamp(b)),
    )


def write_color(out: TextIO, pixel_color: Vec3) -> None:
    """Write one pixel as an ``r g b`` line."""
    r, g, b = encode_color(pixel_color)
    out.write(f"{r} {g} {b}\n")


class PPMWriter:
    """Pixel sink that writes a plain PPM (P3) stream.

    Attributes:
        stream: Text stream receiving the image.
    """

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def write_pixels(self, width: int, height: int, pixels: Iterable[Vec3]) -> None:
        """Write the header followed by every pixel in the given order."""
        self.stream.write(f"P3\n{width} {height}\n255\n")
        for pixel_color in pixels:
            write_color(self.stream, pixel_color)


def write_ppm(out: TextIO, image: npt.NDArray[np.floating]) -> None:
    """Write a linear (H, W, 3) image as plain PPM in row-major order."""
    height, width = image.shape[:2]
    pixels = (image[j, i] for j in range(height) for i in range(width))
    PPMWriter(out).write_pixels(width, height, pixels)


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 2.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8 for display/export.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 2.0, the PPM transfer curve).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    processed = apply_gamma(image.astype(np.float32), gamma)
    processed = np.clip(processed, INTENSITY.min, INTENSITY.max)
    return (processed * 256).astype(np.uint8)


def save_png_from_array(
    image: npt.NDArray[np.floating],
    filepath: str,
    *,
    gamma: float = 2.0,
) -> None:
    """Save a NumPy array as a PNG file.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value (default 2.0).
    """
    image_uint8 = image_to_uint8(image, gamma=gamma)

    # Save using Pillow
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)
