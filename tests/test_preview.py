"""Tests for the Matplotlib preview window.

Tests run on the non-interactive Agg backend with ``plt.show`` patched out.
"""

import numpy as np
import pytest


@pytest.fixture
def pyplot(monkeypatch):
    """Headless pyplot plus the list of recorded show() calls."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    shown = []
    monkeypatch.setattr(plt, "show", lambda **kwargs: shown.append(kwargs))
    yield plt, shown
    plt.close("all")


class TestShowPreview:
    """Tests for show_preview."""

    def test_default_title_and_gamma(self, pyplot):
        from src.pathtracer.preview.display import show_preview

        plt, shown = pyplot

        image = np.full((2, 3, 3), 0.25)
        show_preview(image)

        ax = plt.gcf().axes[0]
        assert ax.get_title() == "Render Preview - 3x2"
        displayed = np.asarray(ax.images[0].get_array())
        assert displayed.shape == (2, 3, 3)
        assert np.allclose(displayed, 0.5)
        assert shown == [{"block": True}]

    def test_custom_title_linear(self, pyplot):
        from src.pathtracer.preview.display import show_preview

        plt, shown = pyplot

        image = np.full((1, 1, 3), 0.25)
        show_preview(image, gamma=1.0, title="Three spheres", block=False)

        ax = plt.gcf().axes[0]
        assert ax.get_title() == "Three spheres"
        assert np.allclose(np.asarray(ax.images[0].get_array()), 0.25)
        assert shown == [{"block": False}]
