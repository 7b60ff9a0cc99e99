"""Headless batch processing runner."""

import logging
import time
from pathlib import Path
from typing import List, Optional, Set

from tqdm import tqdm

from ..config import ProcessingConfig
from ..core.io import generate_filename, is_image_file, read_image, scale_buffer, write_png
from ..effects.base import Effect
from ..effects.pipeline import EffectPipeline

logger = logging.getLogger(__name__)


def resolve_output_path(
    config: ProcessingConfig,
    input_path: str,
    timestamp: Optional[int] = None,
    taken: Optional[Set[Path]] = None,
) -> Path:
    """Work out where the processed image for ``input_path`` goes.

    A single input with an image-file output writes exactly there. Otherwise
    the output is a directory and each file gets a generated name; when that
    name is already in ``taken`` or on disk an index is appended until it is
    free.

    Args:
        config: Processing configuration.
        input_path: One of ``config.input_paths``.
        timestamp: Shared batch timestamp; defaults to now.
        taken: Paths already written in this batch.

    Returns:
        Path of the PNG to write.
    """
    output = Path(config.output_path)
    if len(config.input_paths) == 1 and is_image_file(config.output_path):
        return output
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    taken = taken or set()
    stem = config.output.filename_stem or Path(input_path).stem
    index = 0
    while True:
        path = output / generate_filename(stem, config.effects, timestamp, index)
        if path not in taken and not path.exists():
            return path
        index += 1


def run_headless(config: ProcessingConfig) -> List[Path]:
    """Run headless batch processing.

    Args:
        config: Processing configuration.

    Returns:
        Paths of the written PNG files, in input order.

    Raises:
        IOError: If an input cannot be decoded.
    """
    enabled = [effect.kind for effect in config.effects if effect.enabled]
    if enabled:
        print(f"Enabled effects: {', '.join(getattr(k, 'value', k) for k in enabled)}")
    else:
        print("No enabled effects; images are exported unchanged")

    pipeline: Effect = EffectPipeline(config.effects, seed=config.seed)
    timestamp = int(time.time() * 1000)
    written = []
    for input_path in tqdm(config.input_paths, desc="Processing", disable=len(config.input_paths) < 2):
        buffer = read_image(input_path)
        buffer = scale_buffer(buffer, config.output.scale)
        logger.info("Processing %s (%dx%d)", input_path, buffer.width, buffer.height)

        output = pipeline.apply(buffer)

        output_path = resolve_output_path(config, input_path, timestamp, set(written))
        write_png(output, str(output_path))
        written.append(output_path)

    for path in written:
        print(f"Output saved to: {path}")
    return written
