"""Raster utility functions."""

import numpy as np
import cv2


def to_uint8(values: np.ndarray) -> np.ndarray:
    """Round and clamp float channel values into uint8.

    Args:
        values: Array of channel values, any numeric dtype.

    Returns:
        Array rounded to the nearest integer and clamped to [0, 255].
    """
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a scalar to the closed interval [low, high]."""
    return max(low, min(high, value))


def blend_images(
    img1: np.ndarray, img2: np.ndarray, alpha: np.ndarray | float
) -> np.ndarray:
    """Blend two images using alpha mask or scalar.

    Args:
        img1: First image (background).
        img2: Second image (foreground).
        alpha: Blend factor (0-1). Can be scalar or 2D/3D array.

    Returns:
        Blended image as uint8 array.

    Raises:
        ValueError: If image shapes don't match.
    """
    if img2 is None:
        return img1.astype(np.uint8)

    if img1.shape != img2.shape:
        raise ValueError(f"Shape mismatch: {img1.shape} vs {img2.shape}")

    if isinstance(alpha, np.ndarray) and alpha.ndim == 2:
        alpha = alpha[:, :, np.newaxis]

    blended = img1.astype(np.float64) * (1 - alpha) + img2.astype(np.float64) * alpha
    return to_uint8(blended)


def upscale_nearest(image: np.ndarray, factor: int) -> np.ndarray:
    """Enlarge an image by an integer factor without smoothing.

    Args:
        image: Input image (H, W, C).
        factor: Scale factor, 1 returns the image unchanged.

    Returns:
        Image of size (H * factor, W * factor, C).
    """
    if factor <= 1:
        return image
    height, width = image.shape[:2]
    return cv2.resize(
        image, (width * factor, height * factor), interpolation=cv2.INTER_NEAREST
    )
