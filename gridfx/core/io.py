"""Image I/O utilities."""

import time
from pathlib import Path
from typing import Iterable, Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from .buffer import PixelBuffer
from .utils import upscale_nearest


IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp", ".tif", ".tiff"}


def is_image_file(filename: str) -> bool:
    """Check if filename has an image extension.

    Args:
        filename: Path to file.

    Returns:
        True if file has an image extension.
    """
    return Path(filename).suffix.lower() in IMAGE_EXTENSIONS


def read_image(path: str) -> PixelBuffer:
    """Decode an image file into an RGBA buffer.

    Args:
        path: Path to any image Pillow can open.

    Returns:
        Buffer with the image's pixels; opaque alpha when the file has none.

    Raises:
        IOError: If the file cannot be opened or decoded.
    """
    try:
        with Image.open(path) as image:
            array = np.array(image.convert("RGBA"))
    except (FileNotFoundError, UnidentifiedImageError) as exc:
        raise IOError(f"Cannot read image file: {path}") from exc
    return PixelBuffer.from_array(array)


def write_png(buffer: PixelBuffer, path: str) -> None:
    """Encode a buffer as an RGBA PNG.

    Args:
        buffer: Buffer to save.
        path: Output path; parent directories are created.
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(buffer.data).save(path, format="PNG")


def scale_buffer(buffer: PixelBuffer, scale: int) -> PixelBuffer:
    """Upscale a buffer by an integer factor for export.

    Args:
        buffer: Source buffer.
        scale: Factor; values below 2 return the buffer unchanged.

    Returns:
        Enlarged buffer with hard cell edges.
    """
    if scale <= 1:
        return buffer
    return PixelBuffer.from_array(upscale_nearest(buffer.data, int(scale)))


def generate_filename(
    stem: str, effects: Iterable = (), timestamp: Optional[int] = None, index: int = 0
) -> str:
    """Build an export filename listing the enabled effects.

    Args:
        stem: Leading part of the name, e.g. the input file stem.
        effects: Descriptors; enabled ones are appended in chain order.
        timestamp: Milliseconds since the epoch; defaults to now.
        index: Disambiguates names within one batch; 0 adds nothing.

    Returns:
        Name of the form ``<stem>-<kind>-<kind>-<timestamp>.png``, with
        ``-<index>`` before the extension when ``index`` is positive.
    """
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    kinds = [getattr(e.kind, "value", e.kind) for e in effects if e.enabled]
    suffix = "".join(f"-{kind}" for kind in kinds) + f"-{timestamp}"
    if index > 0:
        suffix += f"-{index}"
    return f"{stem}{suffix}.png"
