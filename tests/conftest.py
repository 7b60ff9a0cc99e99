import numpy as np
import pytest

from gridfx.core.buffer import PixelBuffer


def make_buffer(rgb, alpha=255) -> PixelBuffer:
    """Build a buffer from an (H, W, 3) nested list or array of RGB values."""
    rgb = np.asarray(rgb, dtype=np.uint8)
    alpha_plane = np.full(rgb.shape[:2] + (1,), alpha, dtype=np.uint8)
    return PixelBuffer.from_array(np.concatenate([rgb, alpha_plane], axis=2))


@pytest.fixture
def gradient_4x4() -> PixelBuffer:
    """Black-to-white horizontal gradient, four columns 0, 85, 170, 255."""
    row = [[v, v, v] for v in (0, 85, 170, 255)]
    return make_buffer([row] * 4)


@pytest.fixture
def noisy_buffer() -> PixelBuffer:
    rng = np.random.default_rng(1234)
    data = rng.integers(0, 256, size=(6, 7, 4), dtype=np.uint8)
    return PixelBuffer.from_array(data)
