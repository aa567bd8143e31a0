import numpy as np
import pytest


def make_gradient(width=120, height=90):
    """BGR test image with a horizontal ramp in blue, vertical ramp in green, mid red."""
    xs = (255 * np.arange(width) / width).astype(np.uint8)
    ys = (255 * np.arange(height) / height).astype(np.uint8)
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:, :, 0] = xs[None, :]
    image[:, :, 1] = ys[:, None]
    image[:, :, 2] = (xs[None, :] // 2 + ys[:, None] // 2)
    return image


@pytest.fixture
def gradient_image():
    return make_gradient()


@pytest.fixture
def gray_image():
    return np.full((100, 100, 3), 128, dtype=np.uint8)


@pytest.fixture(autouse=True)
def lomo_home(tmp_path, monkeypatch):
    # keep config and user presets out of the real home directory
    home = tmp_path / "lomo_home"
    monkeypatch.setenv("LOMO_HOME", str(home))
    return home
