"""Multi-threaded renderer that splits the image into row bands.

This module provides the top-level rendering entry point:
- Worker count detection from the available hardware threads
- Static partition of image rows into contiguous bands, one per worker
- A fresh thread pool per render, joined before any output is produced
- Per-worker random generators spawned from a single seed sequence
- Progress callbacks after each finished band
- Row-major pixel emission through an output sink

Workers write straight into disjoint slices of one shared framebuffer, so the
buffer itself needs no locking. The remainder rows of an uneven split all go
to the last band.

Example:
    >>> from src.pathtracer.core.renderer import Renderer
    >>> from src.pathtracer.scene.presets import create_three_spheres_scene
    >>>
    >>> world, config = create_three_spheres_scene()
    >>> renderer = Renderer(config, seed=7)
    >>> image = renderer.render(world)  # (height, width, 3) linear colors
    >>> renderer.save_image("spheres.png")
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Protocol

import numpy as np
import numpy.typing as npt

from src.pathtracer.camera.thin_lens import CameraConfig, ViewingFrame, setup_camera
from src.pathtracer.core.integrator import render_section
from src.pathtracer.core.ray import Vec3
from src.pathtracer.scene.hittable import Hittable

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (sections_remaining, total_sections)
ProgressCallback = Callable[[int, int], None]


class PixelSink(Protocol):
    """Consumer of the finished image in row-major order."""

    def write_pixels(self, width: int, height: int, pixels: Iterator[Vec3]) -> None: ...


# =============================================================================
# Work Distribution
# =============================================================================


def detect_worker_count() -> int:
    """Return the number of hardware threads available to this process.

    Falls back to 1 when the count cannot be determined.
    """
    if hasattr(os, "sched_getaffinity"):
        count: int | None = len(os.sched_getaffinity(0))
    else:
        count = os.cpu_count()
    return max(1, count or 1)


def partition_rows(height: int, workers: int) -> list[tuple[int, int]]:
    """Split rows [0, height) into contiguous bands, one per worker.

    Every band gets height // workers rows; the last band also absorbs the
    remainder. When there are more workers than rows the leading bands are
    empty.

    Args:
        height: Number of image rows.
        workers: Number of bands to produce (at least 1).

    Returns:
        List of (start_row, end_row) half-open ranges in top-to-bottom order.

    Raises:
        ValueError: If workers < 1 or height < 0.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    if height < 0:
        raise ValueError(f"height must be non-negative, got {height}")

    rows_per_worker = height // workers
    bands = []
    for t in range(workers):
        start_row = t * rows_per_worker
        end_row = height if t == workers - 1 else start_row + rows_per_worker
        bands.append((start_row, end_row))
    return bands


def spawn_generators(count: int, seed: int | None = None) -> list[np.random.Generator]:
    """Create independent random generators, one per worker.

    Args:
        count: Number of generators.
        seed: Root seed. None draws fresh entropy from the OS.
    """
    children = np.random.SeedSequence(seed).spawn(count)
    return [np.random.default_rng(child) for child in children]


# =============================================================================
# Renderer
# =============================================================================


class Renderer:
    """Renders a scene through a camera into a linear float framebuffer.

    The renderer owns the framebuffer. Each render() call computes a fresh
    viewing frame, launches one worker thread per row band and waits for all
    of them before averaging the samples.

    Attributes:
        config: The camera and sampling configuration.
        frame: The viewing frame derived from config.
        workers: Number of worker threads used per render.
    """

    def __init__(
        self,
        config: CameraConfig,
        *,
        workers: int | None = None,
        seed: int | None = None,
        jitter: bool = True,
    ) -> None:
        """Initialize the renderer.

        Args:
            config: Camera and sampling configuration.
            workers: Worker thread count. None detects the hardware thread count.
            seed: Root seed for the per-worker generators. None is nondeterministic.
            jitter: If False, sample pixel centers instead of random offsets.

        Raises:
            ValueError: If config is invalid or workers < 1.
        """
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        self.config = config
        self.frame: ViewingFrame = setup_camera(config)
        self.workers = workers if workers is not None else detect_worker_count()
        self._seed = seed
        self._jitter = jitter
        self._image: npt.NDArray[np.float64] | None = None

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.frame.image_width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.frame.image_height

    @property
    def pixel_samples_scale(self) -> float:
        return 1.0 / self.config.samples_per_pixel

    def render(
        self,
        world: Hittable,
        *,
        output: PixelSink | None = None,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.float64]:
        """Render the scene and return the averaged image.

        Blocks until every worker has finished and, if given, the output sink
        has received every pixel.

        Args:
            world: Scene to render.
            output: Optional sink that receives the pixels in row-major order,
                top row first, left to right.
            callback: Optional function called after each band finishes.
                Receives (sections_remaining, total_sections).

        Returns:
            Linear RGB image of shape (height, width, 3).
        """
        self.frame = setup_camera(self.config)
        width, height = self.width, self.height
        samples = self.config.samples_per_pixel
        max_depth = self.config.max_depth

        framebuffer = np.zeros((width * height, 3), dtype=np.float64)
        bands = partition_rows(height, self.workers)
        generators = spawn_generators(len(bands), self._seed)

        logger.debug("Rendering %dx%d with %d workers: %s", width, height, len(bands), bands)
        start_time = time.perf_counter()

        with ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="render") as pool:
            futures = [
                pool.submit(
                    render_section,
                    self.frame,
                    world,
                    framebuffer,
                    start_row,
                    end_row,
                    samples,
                    max_depth,
                    rng,
                    jitter=self._jitter,
                )
                for (start_row, end_row), rng in zip(bands, generators)
            ]

            remaining = len(futures)
            for future in as_completed(futures):
                # Re-raise worker exceptions in the calling thread
                future.result()
                remaining -= 1
                logger.debug("Sections remaining: %d", remaining)
                if callback is not None:
                    callback(remaining, len(futures))

        framebuffer *= self.pixel_samples_scale
        self._image = framebuffer.reshape(height, width, 3)

        logger.info(
            "Rendered %dx%d at %d spp in %.2fs",
            width,
            height,
            samples,
            time.perf_counter() - start_time,
        )

        if output is not None:
            output.write_pixels(width, height, self.pixels())

        return self._image

    def _check_rendered(self) -> npt.NDArray[np.float64]:
        if self._image is None:
            raise RuntimeError("Nothing rendered yet. Call render() first.")
        return self._image

    def pixels(self) -> Iterator[Vec3]:
        """Yield averaged pixel colors in row-major order, top row first.

        Raises:
            RuntimeError: If render() has not completed.
        """
        image = self._check_rendered()
        for j in range(self.height):
            for i in range(self.width):
                yield image[j, i]

    def get_image_numpy(self, gamma: float = 1.0) -> npt.NDArray[np.float32]:
        """Get the rendered image as a NumPy array.

        Returns the averaged image clamped to [0, 1] and optionally gamma
        corrected. The array shape is (height, width, 3).

        Args:
            gamma: Gamma correction value. Default 1.0 (linear).
                Use 2.0 to match the PPM output transfer curve.

        Returns:
            NumPy array of shape (height, width, 3) with dtype float32.

        Raises:
            RuntimeError: If render() has not completed.
        """
        from src.pathtracer.preview.display import apply_gamma

        image = np.clip(self._check_rendered(), 0.0, 1.0).astype(np.float32)
        return apply_gamma(image, gamma)

    def save_image(self, filepath: str, gamma: float = 2.0) -> None:
        """Save the rendered image as PNG (or any format Pillow infers).

        Args:
            filepath: Path to save the image (e.g., "output.png").
            gamma: Gamma correction value. Default 2.0.
        """
        from src.pathtracer.preview.export import save_png_from_array

        save_png_from_array(self._check_rendered(), filepath, gamma=gamma)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples={self.config.samples_per_pixel}, workers={self.workers})"
        )


def render(
    world: Hittable,
    config: CameraConfig,
    *,
    output: PixelSink | None = None,
    workers: int | None = None,
    seed: int | None = None,
    jitter: bool = True,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.float64]:
    """Render a scene in one call.

    Convenience wrapper around Renderer for callers that do not need to keep
    the renderer around.

    Returns:
        Linear RGB image of shape (height, width, 3).

    Raises:
        ValueError: If config is invalid; raised before any work starts.
    """
    renderer = Renderer(config, workers=workers, seed=seed, jitter=jitter)
    return renderer.render(world, output=output, callback=callback)
