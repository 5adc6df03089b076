"""Camera module for view and ray generation.

Components:
    thin_lens: Look-at camera with vertical FOV and optional depth of field

Camera responsibilities:
    - Validate the user configuration before any rendering starts
    - Derive an immutable viewing frame (basis, pixel deltas, defocus disk)
    - Transform (column, row) pixel coordinates to world-space rays
    - Apply anti-aliasing jitter for sub-pixel sampling
"""

from .thin_lens import (
    CameraConfig,
    ViewingFrame,
    defocus_disk_sample,
    get_camera_info,
    get_ray,
    sample_square,
    setup_camera,
)

__all__ = [
    "CameraConfig",
    "ViewingFrame",
    "setup_camera",
    "get_ray",
    "sample_square",
    "defocus_disk_sample",
    "get_camera_info",
]
