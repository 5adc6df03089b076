"""Path tracing integrator for Monte Carlo light transport.

This module implements the per-pixel rendering work: jittered camera rays are
traced through the scene, bouncing off surfaces according to their materials,
and the resulting radiance estimates are summed into the framebuffer.

Shading rules for a single ray with a remaining bounce budget:
    - Budget exhausted: no light (zero color).
    - Nothing hit in (T_MIN, inf): sky gradient from white to light blue.
    - Hit, material absorbs: zero color.
    - Hit, material scatters: attenuation times the color of the scattered ray,
      traced with one less bounce.

The recursion is unrolled into a loop that carries the accumulated attenuation
(throughput), so scenes with a large bounce budget cannot exhaust the
interpreter stack.

Example:
    >>> import numpy as np
    >>> from src.pathtracer.camera.thin_lens import CameraConfig, setup_camera
    >>> from src.pathtracer.core.integrator import render_section
    >>> frame = setup_camera(CameraConfig(image_width=64))
    >>> framebuffer = np.zeros((frame.image_width * frame.image_height, 3))
    >>> render_section(frame, world, framebuffer, 0, frame.image_height,
    ...                samples_per_pixel=4, max_depth=10, rng=np.random.default_rng())
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from src.pathtracer.camera.thin_lens import ViewingFrame, get_ray
from src.pathtracer.core.interval import Interval
from src.pathtracer.core.ray import Ray, Vec3, normalize, vec3
from src.pathtracer.scene.hittable import Hittable

# =============================================================================
# Rendering Constants
# =============================================================================

# Lower bound on hit distance to avoid self-intersection ("shadow acne")
T_MIN = 0.001

# Ray parameter range searched at every bounce
HIT_RANGE = Interval(T_MIN, math.inf)

# Sky gradient endpoints: horizon/down color and zenith color
SKY_WHITE = (1.0, 1.0, 1.0)
SKY_BLUE = (0.5, 0.7, 1.0)


def background_color(direction: Vec3) -> Vec3:
    """Color of a ray that escapes the scene.

    Linearly blends white into light blue by the vertical component of the
    normalized direction, mapped from [-1, 1] to [0, 1].

    Args:
        direction: The ray direction (need not be normalized).

    Returns:
        The background radiance (RGB).
    """
    unit_direction = normalize(direction)
    a = 0.5 * (unit_direction[1] + 1.0)
    return (1.0 - a) * vec3(*SKY_WHITE) + a * vec3(*SKY_BLUE)


# =============================================================================
# Path Tracing Core
# =============================================================================


def ray_color(ray: Ray, depth: int, world: Hittable, rng: np.random.Generator) -> Vec3:
    """Estimate the radiance carried back along a ray.

    Args:
        ray: The ray to trace.
        depth: Remaining bounce budget. Zero or less yields black.
        world: Scene to intersect.
        rng: Random generator owned by the calling worker.

    Returns:
        The estimated radiance (RGB).
    """
    throughput = vec3(1.0, 1.0, 1.0)

    while depth > 0:
        rec = world.hit(ray, HIT_RANGE)
        if rec is None:
            return throughput * background_color(ray.direction)

        result = rec.material.scatter(ray, rec, rng)
        if result is None:
            # Ray was absorbed
            return vec3()

        throughput = throughput * result.attenuation
        ray = result.scattered
        depth -= 1

    return vec3()


def sample_pixel(
    frame: ViewingFrame,
    world: Hittable,
    i: int,
    j: int,
    samples_per_pixel: int,
    max_depth: int,
    rng: np.random.Generator,
    *,
    jitter: bool = True,
) -> Vec3:
    """Sum the radiance of several camera rays through pixel (i, j).

    The result is not averaged; the renderer scales the whole framebuffer by
    1 / samples_per_pixel once all workers have finished.

    Args:
        frame: The viewing frame.
        world: Scene to intersect.
        i: Pixel column (0 = left).
        j: Pixel row (0 = top).
        samples_per_pixel: Number of rays to cast.
        max_depth: Bounce budget for each ray.
        rng: Random generator owned by the calling worker.
        jitter: If False, every sample passes through the pixel center.

    Returns:
        The summed radiance (RGB).
    """
    pixel_color = vec3()
    for _ in range(samples_per_pixel):
        ray = get_ray(frame, i, j, rng, jitter=jitter)
        pixel_color += ray_color(ray, max_depth, world, rng)
    return pixel_color


def render_section(
    frame: ViewingFrame,
    world: Hittable,
    framebuffer: npt.NDArray[np.float64],
    start_row: int,
    end_row: int,
    samples_per_pixel: int,
    max_depth: int,
    rng: np.random.Generator,
    *,
    jitter: bool = True,
) -> None:
    """Render rows [start_row, end_row) into the framebuffer.

    Each pixel (i, j) is written to framebuffer[j * width + i]. Callers must
    give concurrent workers disjoint row ranges.

    Args:
        frame: The viewing frame.
        world: Scene to intersect.
        framebuffer: Array of shape (width * height, 3) receiving summed colors.
        start_row: First row to render (inclusive).
        end_row: Last row to render (exclusive).
        samples_per_pixel: Number of rays per pixel.
        max_depth: Bounce budget for each ray.
        rng: Random generator owned by this worker.
        jitter: If False, sample pixel centers only.
    """
    width = frame.image_width
    for j in range(start_row, end_row):
        for i in range(width):
            framebuffer[j * width + i] = sample_pixel(
                frame, world, i, j, samples_per_pixel, max_depth, rng, jitter=jitter
            )
