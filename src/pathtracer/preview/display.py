"""Matplotlib-based preview display for rendered images.

Features:
    - Gamma correction for display
    - Blocking or non-blocking preview window

Example:
    >>> from src.pathtracer.preview.display import show_preview
    >>> image = renderer.render(world)
    >>> show_preview(image, title="Three spheres")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.0,
) -> npt.NDArray[np.float32]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value (default 2.0, matching the PPM encoder).

    Returns:
        Gamma corrected image in [0, 1].
    """
    if gamma == 1.0:
        return image

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)

    # Apply gamma encoding: out = in^(1/gamma)
    result = np.power(image, 1.0 / gamma)

    return result.astype(np.float32)


def show_preview(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 2.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 4.5),
    block: bool = True,
) -> None:
    """Display a linear image as a Matplotlib figure.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value.
        title: Figure title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = apply_gamma(image.astype(np.float32), gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
