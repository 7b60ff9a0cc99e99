"""Per-pixel and neighbourhood raster effects.

Every function takes an ``(H, W, 4)`` uint8 RGBA array and returns a new
array of the same shape. Inputs are never modified.
"""

import logging
from typing import Callable, Dict, Optional

import cv2
import numpy as np

from ..config import (
    DitheringConfig,
    EdgeDetectionConfig,
    GammaConfig,
    GrainConfig,
    RGBShiftConfig,
    ThresholdConfig,
)
from ..core.buffer import PixelBuffer
from ..core.utils import to_uint8
from .chain import EffectDescriptor, EffectKind

logger = logging.getLogger(__name__)

# (dx, dy, weight) for Floyd-Steinberg error diffusion
FLOYD_STEINBERG = [
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16),
    (0, 1, 5 / 16),
    (1, 1, 1 / 16),
]


def gamma(image: np.ndarray, value: float = 1.2) -> np.ndarray:
    """Gamma-correct the color channels.

    Args:
        image: RGBA uint8 array.
        value: Gamma, positive. Values above 1 brighten.

    Returns:
        Corrected image, alpha untouched.
    """
    # Lookup table over all 256 inputs
    table = to_uint8(255.0 * np.power(np.arange(256) / 255.0, 1.0 / value))
    result = image.copy()
    result[:, :, :3] = table[image[:, :, :3]]
    return result


def threshold(image: np.ndarray, value: float = 128) -> np.ndarray:
    """Binarize to black or white on mean luminance.

    Pixels with ``(R + G + B) / 3 > value`` become white, the rest black.
    """
    luminance = image[:, :, :3].astype(np.float64).mean(axis=2)
    result = image.copy()
    result[:, :, :3] = np.where(luminance > value, 255, 0)[:, :, np.newaxis]
    return result


def edge_detection(image: np.ndarray) -> np.ndarray:
    """Sobel gradient magnitude of luminance.

    The one-pixel border has no full neighbourhood and stays transparent
    black; interior pixels get the magnitude in R, G and B with alpha 255.
    """
    height, width = image.shape[:2]
    result = np.zeros_like(image)
    if height < 3 or width < 3:
        return result

    luminance = image[:, :, :3].astype(np.float64).mean(axis=2)
    gx = cv2.Sobel(luminance, cv2.CV_64F, 1, 0, ksize=3)
    gy = cv2.Sobel(luminance, cv2.CV_64F, 0, 1, ksize=3)
    magnitude = to_uint8(np.sqrt(gx * gx + gy * gy))

    result[1:-1, 1:-1, :3] = magnitude[1:-1, 1:-1, np.newaxis]
    result[1:-1, 1:-1, 3] = 255
    return result


def rgb_shift(image: np.ndarray, amount: int = 3) -> np.ndarray:
    """Offset red and blue horizontally in opposite directions.

    Red is sampled ``amount`` pixels to the right, blue ``amount`` pixels to
    the left; samples past the edge repeat the edge column.
    """
    width = image.shape[1]
    columns = np.arange(width)
    red_source = np.minimum(columns + amount, width - 1)
    blue_source = np.maximum(columns - amount, 0)

    result = image.copy()
    result[:, :, 0] = image[:, red_source, 0]
    result[:, :, 2] = image[:, blue_source, 2]
    return result


def dither(image: np.ndarray) -> np.ndarray:
    """Floyd-Steinberg dither each color channel to 0 or 255.

    Pixels are visited in row-major order; each one's quantization error is
    pushed to unvisited neighbours, which are rounded to the nearest integer
    (half to even) and clamped to [0, 255] like any stored 8-bit value.
    """
    height, width = image.shape[:2]
    # Nested lists of floats, indexed [channel][y][x]
    planes = image[:, :, :3].astype(np.float64).transpose(2, 0, 1).tolist()
    for plane in planes:
        for y in range(height):
            for x in range(width):
                old = plane[y][x]
                new = 255.0 if old > 128 else 0.0
                plane[y][x] = new
                error = old - new
                for dx, dy, weight in FLOYD_STEINBERG:
                    nx = x + dx
                    ny = y + dy
                    if 0 <= nx < width and ny < height:
                        value = round(plane[ny][nx] + error * weight)
                        plane[ny][nx] = float(min(255, max(0, value)))

    result = image.copy()
    result[:, :, :3] = np.asarray(planes, dtype=np.float64).transpose(1, 2, 0).astype(np.uint8)
    return result


def grain(
    image: np.ndarray, opacity: float = 30, rng: Optional[np.random.Generator] = None
) -> np.ndarray:
    """Add uniform noise to every color channel independently.

    Args:
        image: RGBA uint8 array.
        opacity: Noise strength in percent; 100 spans the full value range.
        rng: Random source. Pass a seeded generator for repeatable output.

    Returns:
        Noisy image, alpha untouched.
    """
    if rng is None:
        rng = np.random.default_rng()
    noise = (rng.random(image.shape[:2] + (3,)) - 0.5) * (opacity / 100) * 255
    result = image.copy()
    result[:, :, :3] = to_uint8(image[:, :, :3].astype(np.float64) + noise)
    return result


def _apply_gamma(image, params: GammaConfig, rng):
    return gamma(image, params.value)


def _apply_threshold(image, params: ThresholdConfig, rng):
    return threshold(image, params.value)


def _apply_edge_detection(image, params: EdgeDetectionConfig, rng):
    return edge_detection(image)


def _apply_rgb_shift(image, params: RGBShiftConfig, rng):
    return rgb_shift(image, params.amount)


def _apply_dithering(image, params: DitheringConfig, rng):
    return dither(image)


def _apply_grain(image, params: GrainConfig, rng):
    return grain(image, params.opacity, rng)


RASTER_EFFECTS: Dict[EffectKind, Callable] = {
    EffectKind.GAMMA: _apply_gamma,
    EffectKind.THRESHOLD: _apply_threshold,
    EffectKind.EDGE_DETECTION: _apply_edge_detection,
    EffectKind.RGB_SHIFT: _apply_rgb_shift,
    EffectKind.DITHERING: _apply_dithering,
    EffectKind.GRAIN: _apply_grain,
}


def is_raster_kind(kind) -> bool:
    return kind in RASTER_EFFECTS


def apply_raster_effect(
    buffer: PixelBuffer,
    descriptor: EffectDescriptor,
    rng: Optional[np.random.Generator] = None,
) -> PixelBuffer:
    """Apply one raster descriptor to a buffer.

    Parameters are clamped to their documented range first. The enabled flag
    is not consulted here; callers filter disabled descriptors.

    Args:
        buffer: Input buffer, left untouched.
        descriptor: Descriptor whose kind is a raster kind.
        rng: Random source for grain.

    Returns:
        New buffer with the effect applied.

    Raises:
        KeyError: If the descriptor's kind is not a raster kind.
    """
    effect = RASTER_EFFECTS[descriptor.kind]
    params = descriptor.params.clamped()
    logger.debug("Applying %s with %s", descriptor.kind.value, params)
    return buffer.with_data(effect(buffer.data, params, rng))


class RasterEffect:
    """A raster descriptor bound to a random source."""

    def __init__(
        self, descriptor: EffectDescriptor, rng: Optional[np.random.Generator] = None
    ):
        """Initialize the effect.

        Args:
            descriptor: Descriptor of a raster kind.
            rng: Random source for grain.

        Raises:
            ValueError: If the descriptor's kind is not a raster kind.
        """
        if not is_raster_kind(descriptor.kind):
            raise ValueError(f"Not a raster effect kind: {descriptor.kind!r}")
        self.descriptor = descriptor
        self.rng = rng

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        return apply_raster_effect(buffer, self.descriptor, self.rng)
