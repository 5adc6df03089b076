"""Thin-lens camera model for perspective projection ray generation.

This module implements a camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view (vfov) in degrees
- Arbitrary aspect ratios
- Jittered sampling for anti-aliasing
- Depth of field through a defocus disk around the eye point

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport sits on the focus plane, ``focus_dist`` in front of the eye.
Pixel (0, 0) is the top-left pixel; rows grow downward.

Example:
    >>> from src.pathtracer.camera.thin_lens import CameraConfig, setup_camera, get_ray
    >>> config = CameraConfig(image_width=400, aspect_ratio=16.0 / 9.0)
    >>> frame = setup_camera(config)
    >>> rng = np.random.default_rng(0)
    >>> ray = get_ray(frame, 200, 112, rng, jitter=False)  # Ray through the image center
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any

import numpy as np

from src.pathtracer.core.ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    length,
    normalize,
    random_in_unit_disk,
    vec3,
)

# Minimum |vup x w| before the up hint is considered parallel to the view axis
_PARALLEL_EPSILON = 1e-12

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class CameraConfig:
    """User-facing camera and render configuration.

    Attributes:
        aspect_ratio: Width divided by height of the output image.
        image_width: Output image width in pixels.
        samples_per_pixel: Number of jittered rays averaged per pixel.
        max_depth: Maximum number of bounces traced per ray.
        vfov: Vertical field of view in degrees, in (0, 180).
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction hint for camera orientation (typically (0, 1, 0)).
        defocus_angle: Cone angle in degrees of rays through each pixel.
            0 disables depth of field.
        focus_dist: Distance from lookfrom to the plane of perfect focus.
    """

    aspect_ratio: float = 16.0 / 9.0
    image_width: int = 400
    samples_per_pixel: int = 10
    max_depth: int = 10
    vfov: float = 90.0
    lookfrom: tuple[float, float, float] = (0.0, 0.0, 0.0)
    lookat: tuple[float, float, float] = (0.0, 0.0, -1.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    defocus_angle: float = 0.0
    focus_dist: float = 10.0

    @property
    def image_height(self) -> int:
        """Image height derived from width and aspect ratio, at least 1."""
        return max(1, int(self.image_width / self.aspect_ratio))

    def validate(self) -> None:
        """Check every field against its precondition.

        Every comparison is written so that NaN fails it.

        Raises:
            ValueError: If any field is out of range or the view is degenerate.
        """
        if not 0.0 < self.aspect_ratio < math.inf:
            raise ValueError(
                f"aspect_ratio must be positive and finite, got {self.aspect_ratio}"
            )
        for name in ("image_width", "samples_per_pixel", "max_depth"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.image_width < 1:
            raise ValueError(f"image_width must be positive, got {self.image_width}")
        if self.samples_per_pixel < 1:
            raise ValueError(
                f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}"
            )
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if not 0.0 <= self.defocus_angle < 180.0:
            raise ValueError(
                f"defocus_angle must be in [0, 180) degrees, got {self.defocus_angle}"
            )
        if not 0.0 < self.focus_dist < math.inf:
            raise ValueError(f"focus_dist must be positive and finite, got {self.focus_dist}")

        for name in ("lookfrom", "lookat", "vup"):
            if not np.isfinite(as_vec3(getattr(self, name))).all():
                raise ValueError(
                    f"{name} must have finite components, got {getattr(self, name)!r}"
                )

        forward = as_vec3(self.lookfrom) - as_vec3(self.lookat)
        if not length(forward) > 0.0:
            raise ValueError("lookfrom and lookat must not coincide")
        if not length(cross(as_vec3(self.vup), normalize(forward))) >= _PARALLEL_EPSILON:
            raise ValueError("vup must not be parallel to the viewing direction")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CameraConfig:
        """Build a config from a mapping, filling in defaults for missing keys.

        Raises:
            ValueError: If the mapping contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown camera config keys: {sorted(unknown)}")

        values = dict(data)
        for key in ("lookfrom", "lookat", "vup"):
            if key in values:
                values[key] = tuple(float(c) for c in values[key])
        return cls(**values)


@dataclass(frozen=True, eq=False)
class ViewingFrame:
    """Immutable camera geometry derived from a CameraConfig.

    Computed once per render and shared read-only by all workers.

    Attributes:
        image_width: Output image width in pixels.
        image_height: Output image height in pixels.
        center: Eye position.
        u: Unit vector pointing right.
        v: Unit vector pointing up.
        w: Unit vector pointing backward (opposite view direction).
        viewport_width: Viewport extent along u in world units.
        viewport_height: Viewport extent along v in world units.
        pixel_delta_u: Offset from one pixel to the next along a row.
        pixel_delta_v: Offset from one row to the next (points down).
        pixel00_loc: Center of the top-left pixel on the focus plane.
        defocus_angle: Defocus cone angle in degrees.
        defocus_disk_u: Horizontal radius vector of the defocus disk.
        defocus_disk_v: Vertical radius vector of the defocus disk.
    """

    image_width: int
    image_height: int
    center: Vec3
    u: Vec3
    v: Vec3
    w: Vec3
    viewport_width: float
    viewport_height: float
    pixel_delta_u: Vec3
    pixel_delta_v: Vec3
    pixel00_loc: Vec3
    defocus_angle: float
    defocus_disk_u: Vec3
    defocus_disk_v: Vec3


# =============================================================================
# Camera Setup (called once per render)
# =============================================================================


def setup_camera(config: CameraConfig) -> ViewingFrame:
    """Compute the viewing frame from camera configuration.

    Computes the camera's orthonormal basis (u, v, w), the per-pixel delta
    vectors and the location of the first pixel's sample center, plus the
    defocus disk basis.

    Args:
        config: Camera configuration with position, orientation, and FOV.

    Returns:
        The immutable viewing frame.

    Raises:
        ValueError: If the configuration violates a precondition.
    """
    config.validate()

    image_width = config.image_width
    image_height = config.image_height

    center = as_vec3(config.lookfrom)

    theta = math.radians(config.vfov)
    h = math.tan(theta / 2.0)
    viewport_height = 2.0 * h * config.focus_dist
    # Use the realized pixel ratio so pixels stay square after height rounding
    viewport_width = viewport_height * (image_width / image_height)

    w = normalize(center - as_vec3(config.lookat))
    u = normalize(cross(as_vec3(config.vup), w))
    v = cross(w, u)

    viewport_u = viewport_width * u
    viewport_v = viewport_height * -v

    pixel_delta_u = viewport_u / image_width
    pixel_delta_v = viewport_v / image_height

    viewport_upper_left = center - config.focus_dist * w - viewport_u / 2.0 - viewport_v / 2.0
    pixel00_loc = viewport_upper_left + 0.5 * (pixel_delta_u + pixel_delta_v)

    defocus_radius = config.focus_dist * math.tan(math.radians(config.defocus_angle / 2.0))

    return ViewingFrame(
        image_width=image_width,
        image_height=image_height,
        center=center,
        u=u,
        v=v,
        w=w,
        viewport_width=viewport_width,
        viewport_height=viewport_height,
        pixel_delta_u=pixel_delta_u,
        pixel_delta_v=pixel_delta_v,
        pixel00_loc=pixel00_loc,
        defocus_angle=config.defocus_angle,
        defocus_disk_u=u * defocus_radius,
        defocus_disk_v=v * defocus_radius,
    )


# =============================================================================
# Ray Generation
# =============================================================================


def sample_square(rng: np.random.Generator) -> Vec3:
    """Return a random offset in the [-0.5, 0.5) x [-0.5, 0.5) unit square."""
    return vec3(rng.random() - 0.5, rng.random() - 0.5, 0.0)


def defocus_disk_sample(frame: ViewingFrame, rng: np.random.Generator) -> Vec3:
    """Return a random point on the camera defocus disk."""
    p = random_in_unit_disk(rng)
    return frame.center + p[0] * frame.defocus_disk_u + p[1] * frame.defocus_disk_v


def get_ray(
    frame: ViewingFrame,
    i: int,
    j: int,
    rng: np.random.Generator,
    *,
    jitter: bool = True,
) -> Ray:
    """Generate a camera ray for pixel (i, j).

    The ray starts on the defocus disk (or at the eye when depth of field is
    off) and passes through a point sampled around the pixel center on the
    focus plane.

    Args:
        frame: The viewing frame.
        i: Pixel column (0 = left).
        j: Pixel row (0 = top).
        rng: Random generator owned by the calling worker.
        jitter: If False, sample the exact pixel center (offset (0, 0)).

    Returns:
        A Ray with an unnormalized direction.
    """
    offset = sample_square(rng) if jitter else vec3()
    pixel_sample = (
        frame.pixel00_loc
        + (i + offset[0]) * frame.pixel_delta_u
        + (j + offset[1]) * frame.pixel_delta_v
    )

    ray_origin = frame.center if frame.defocus_angle <= 0.0 else defocus_disk_sample(frame, rng)
    return Ray(ray_origin, pixel_sample - ray_origin)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info(frame: ViewingFrame) -> dict[str, tuple[float, float, float]]:
    """Get camera vectors as plain tuples for debugging and tests.

    Returns:
        Dictionary with origin, u, v, w, pixel deltas, pixel00 and defocus disk.
    """

    def _t(a: Vec3) -> tuple[float, float, float]:
        return (float(a[0]), float(a[1]), float(a[2]))

    return {
        "origin": _t(frame.center),
        "u": _t(frame.u),
        "v": _t(frame.v),
        "w": _t(frame.w),
        "pixel_delta_u": _t(frame.pixel_delta_u),
        "pixel_delta_v": _t(frame.pixel_delta_v),
        "pixel00_loc": _t(frame.pixel00_loc),
        "defocus_disk_u": _t(frame.defocus_disk_u),
        "defocus_disk_v": _t(frame.defocus_disk_v),
    }
