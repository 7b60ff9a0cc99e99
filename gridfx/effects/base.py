"""Base effect protocol."""

from typing import Protocol

from ..core.buffer import PixelBuffer


class Effect(Protocol):
    """Protocol for buffer effects."""

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """Apply effect to a buffer.

        Args:
            buffer: Input RGBA buffer. Not modified.

        Returns:
            Processed buffer of the same dimensions.
        """
        ...
