"""Preview module for output and visualization.

Components:
    display: Gamma correction and Matplotlib-based preview
    export: Plain PPM pixel streams and PNG export via Pillow

Example:
    >>> import sys
    >>> from src.pathtracer.preview import PPMWriter, save_png_from_array
    >>> image = renderer.render(world, output=PPMWriter(sys.stdout))
    >>> save_png_from_array(image, "output.png")
"""

from src.pathtracer.preview.display import apply_gamma, show_preview
from src.pathtracer.preview.export import (
    INTENSITY,
    PPMWriter,
    encode_color,
    image_to_uint8,
    linear_to_gamma,
    save_png_from_array,
    write_color,
    write_ppm,
)

__all__ = [
    # Display functions
    "apply_gamma",
    "show_preview",
    # Export functions
    "INTENSITY",
    "PPMWriter",
    "encode_color",
    "linear_to_gamma",
    "write_color",
    "write_ppm",
    "image_to_uint8",
    "save_png_from_array",
]
