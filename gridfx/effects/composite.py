"""Post-processing overlay filters: blur and vignette."""

import logging
from typing import Optional

import cv2
import numpy as np

from ..config import BlurConfig, VignetteConfig
from ..core.buffer import PixelBuffer
from ..core.utils import blend_images
from .chain import EffectDescriptor, EffectKind

logger = logging.getLogger(__name__)

COMPOSITE_KINDS = frozenset({EffectKind.BLUR, EffectKind.VIGNETTE})

# Fraction of the vignette radius that stays undarkened
VIGNETTE_INNER = 0.3


def blur(image: np.ndarray, radius: float = 2) -> np.ndarray:
    """Gaussian blur with standard deviation ``radius`` on all channels."""
    if radius <= 0:
        return image.copy()
    return cv2.GaussianBlur(
        image, (0, 0), sigmaX=radius, sigmaY=radius, borderType=cv2.BORDER_REPLICATE
    )


def vignette_mask(width: int, height: int, strength: float) -> np.ndarray:
    """Per-pixel darkening factor in [0, strength / 100].

    Zero inside 30% of the radius, rising linearly to full strength at the
    nearest edge and beyond.
    """
    radius = min(width, height) / 2
    ys = np.arange(height) + 0.5 - height / 2
    xs = np.arange(width) + 0.5 - width / 2
    distance = np.hypot(xs[np.newaxis, :], ys[:, np.newaxis]) / radius
    ramp = np.clip((distance - VIGNETTE_INNER) / (1 - VIGNETTE_INNER), 0, 1)
    return ramp * (strength / 100)


def vignette(image: np.ndarray, strength: float = 50) -> np.ndarray:
    """Blend color channels toward black by :func:`vignette_mask`."""
    height, width = image.shape[:2]
    mask = vignette_mask(width, height, strength)
    result = image.copy()
    rgb = image[:, :, :3]
    result[:, :, :3] = blend_images(rgb, np.zeros_like(rgb), mask)
    return result


class CompositeFilterStage:
    """Collects blur and vignette settings and applies them in one pass.

    Filters run after every raster effect. Blur always precedes vignette.
    When a kind is collected more than once the last one collected wins, so
    feeding descriptors in chain order makes the latest enabled one count.
    """

    def __init__(self):
        self.blur: Optional[BlurConfig] = None
        self.vignette: Optional[VignetteConfig] = None

    def collect(self, descriptor: EffectDescriptor) -> None:
        """Record a compositing descriptor. Disabled descriptors are ignored.

        Raises:
            ValueError: If the descriptor is not a compositing kind.
        """
        if descriptor.kind not in COMPOSITE_KINDS:
            raise ValueError(f"Not a compositing effect kind: {descriptor.kind!r}")
        if not descriptor.enabled:
            return
        params = descriptor.params.clamped()
        if descriptor.kind == EffectKind.BLUR:
            if self.blur is not None:
                logger.debug("Blur %s replaces %s", params, self.blur)
            self.blur = params
        else:
            if self.vignette is not None:
                logger.debug("Vignette %s replaces %s", params, self.vignette)
            self.vignette = params

    @property
    def is_empty(self) -> bool:
        return self.blur is None and self.vignette is None

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """Apply collected filters to a buffer.

        Args:
            buffer: Fully effect-processed buffer. Not modified.

        Returns:
            The same buffer when nothing was collected, otherwise a new one.
        """
        if self.is_empty:
            return buffer
        image = buffer.data
        if self.blur is not None:
            image = blur(image, self.blur.radius)
        if self.vignette is not None:
            image = vignette(image, self.vignette.strength)
        return buffer.with_data(image)
