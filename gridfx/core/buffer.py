"""RGBA pixel buffer."""

from typing import Sequence, Tuple

import numpy as np


CHANNELS = 4


class InvalidBufferError(ValueError):
    """Raised when buffer dimensions and data do not agree."""


class PixelBuffer:
    """Owned rectangular RGBA8 raster.

    Pixel data is a ``uint8`` array of shape ``(height, width, 4)``. Effects
    never mutate a buffer they receive; they return a new one.
    """

    __slots__ = ("width", "height", "data")

    def __init__(
        self, width: int, height: int, data: np.ndarray | Sequence[int], copy: bool = True
    ):
        """Initialize the buffer.

        Args:
            width: Width in pixels, must be positive.
            height: Height in pixels, must be positive.
            data: Either a ``(height, width, 4)`` array or a flat row-major
                sequence of ``width * height * 4`` channel values.
            copy: Copy the data so the caller keeps no reference to it. Pass
                False only to hand over an array nothing else refers to.

        Raises:
            InvalidBufferError: If dimensions are non-positive or the data
                does not match them.
        """
        if int(width) != width or int(height) != height or width <= 0 or height <= 0:
            raise InvalidBufferError(
                f"Buffer dimensions must be positive integers, got {width}x{height}"
            )
        width, height = int(width), int(height)

        array = np.asarray(data)
        expected = width * height * CHANNELS
        if array.ndim == 1:
            if array.size != expected:
                raise InvalidBufferError(
                    f"Data length {array.size} does not match {width}x{height}x{CHANNELS}"
                    f" = {expected}"
                )
            array = array.reshape(height, width, CHANNELS)
        elif array.shape != (height, width, CHANNELS):
            raise InvalidBufferError(
                f"Data shape {array.shape} does not match ({height}, {width}, {CHANNELS})"
            )

        if array.dtype != np.uint8:
            if np.issubdtype(array.dtype, np.floating):
                if not np.isfinite(array).all():
                    raise InvalidBufferError("Channel values must be finite")
                if not (array == np.floor(array)).all():
                    raise InvalidBufferError("Channel values must be whole numbers")
            if array.size and (array.min() < 0 or array.max() > 255):
                raise InvalidBufferError("Channel values must be within [0, 255]")
            array = array.astype(np.uint8)
        elif copy:
            array = array.copy()

        self.width = width
        self.height = height
        self.data = array

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Wrap an ``(H, W, 4)`` or ``(H, W, 3)`` array.

        RGB arrays get an opaque alpha channel.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, CHANNELS):
            raise InvalidBufferError(f"Expected (H, W, 3|4) array, got shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=array.dtype)
            array = np.concatenate([array, alpha], axis=2)
        height, width = array.shape[:2]
        return cls(width, height, array)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes | Sequence[int]) -> "PixelBuffer":
        """Build a buffer from flat row-major RGBA bytes."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            array = np.frombuffer(bytes(data), dtype=np.uint8)
        else:
            array = np.asarray(data)
        return cls(width, height, array.ravel() if array.ndim > 1 else array)

    @classmethod
    def blank(
        cls, width: int, height: int, color: Tuple[int, int, int, int] = (0, 0, 0, 255)
    ) -> "PixelBuffer":
        """Create a buffer filled with a single RGBA color."""
        if width <= 0 or height <= 0:
            raise InvalidBufferError(
                f"Buffer dimensions must be positive integers, got {width}x{height}"
            )
        data = np.empty((height, width, CHANNELS), dtype=np.uint8)
        data[:, :] = color
        return cls(width, height, data)

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.data.shape

    @property
    def rgb(self) -> np.ndarray:
        """View of the color channels."""
        return self.data[:, :, :3]

    @property
    def alpha(self) -> np.ndarray:
        """View of the alpha channel."""
        return self.data[:, :, 3]

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Get the RGBA value at column ``x``, row ``y``."""
        return tuple(int(v) for v in self.data[y, x])

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.data)

    def with_data(self, data: np.ndarray) -> "PixelBuffer":
        """Return a new buffer of the same size that takes ownership of ``data``."""
        return PixelBuffer(self.width, self.height, data, copy=False)

    def tobytes(self) -> bytes:
        return self.data.tobytes()

    def __len__(self) -> int:
        return self.data.size

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
