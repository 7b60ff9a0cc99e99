"""Command-line interface for gridfx."""

import argparse
from dataclasses import fields
from pathlib import Path

from . import __version__
from .config import ProcessingConfig
from .core.io import is_image_file
from .effects.chain import PARAMS_BY_KIND, EffectDescriptor, EffectKind, create_default_effect

EPILOG = """\
Examples:
  gridfx grid.png -o out.png -e gamma:1.2 -e threshold:128
  gridfx grid.png -o out.png -e rgb-shift:5 -e grain:40 --seed 7 --scale 4
  gridfx a.png b.png -o exports/ -e dithering -e vignette:60

Effects (applied in the order given; blur and vignette always run last):
  gamma[:VALUE]          Gamma correction, 0.1-3.0 (default: 1.2)
  threshold[:VALUE]      Black/white cut-off, 0-255 (default: 128)
  edge-detection         Sobel edge magnitude
  rgb-shift[:AMOUNT]     Red/blue horizontal offset in pixels, 0-20 (default: 3)
  dithering              Floyd-Steinberg error diffusion per channel
  grain[:OPACITY]        Film grain noise in percent, 0-100 (default: 30)
  blur[:RADIUS]          Gaussian blur radius in pixels, 0-20 (default: 2)
  vignette[:STRENGTH]    Edge darkening in percent, 0-100 (default: 50)

Out-of-range values are clamped.
"""


def parse_effect(text: str, enabled: bool = True) -> EffectDescriptor:
    """Parse ``KIND[:VALUE]`` into a descriptor.

    Args:
        text: Effect kind, optionally followed by a colon and its value.
        enabled: Enabled flag of the new descriptor.

    Returns:
        Descriptor with the kind's defaults, overridden by VALUE.

    Raises:
        ValueError: If the kind is unknown, takes no value, or VALUE is not
            a number.
    """
    name, _, value = text.partition(":")
    kind = EffectKind.parse(name)
    if not value:
        return create_default_effect(kind, enabled=enabled)

    params = fields(PARAMS_BY_KIND[kind])
    if not params:
        raise ValueError(f"{kind.value} takes no value")
    param = params[0]
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"Invalid value for {kind.value}: {value!r}") from None
    if param.type is int:
        number = int(round(number))
    return create_default_effect(kind, enabled=enabled, **{param.name: number})


class EffectAction(argparse.Action):
    """Append a parsed effect to the shared, ordered ``effects`` list."""

    def __init__(self, option_strings, dest, enabled=True, **kwargs):
        self.enabled = enabled
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        try:
            descriptor = parse_effect(values, enabled=self.enabled)
        except ValueError as exc:
            raise argparse.ArgumentError(self, str(exc)) from exc
        effects = list(getattr(namespace, self.dest, None) or [])
        effects.append(descriptor)
        setattr(namespace, self.dest, effects)


def parse_args(args=None) -> ProcessingConfig:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv).

    Returns:
        ProcessingConfig with parsed options.
    """
    parser = argparse.ArgumentParser(
        prog="gridfx",
        description="Apply a chain of raster effects to color grid images.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "inputs",
        type=str,
        nargs="+",
        help="Input image files (.png, .jpg, ...)",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        required=True,
        help="Output PNG file, or a directory when several inputs are given",
    )

    parser.add_argument(
        "-e", "--effect",
        dest="effects",
        action=EffectAction,
        default=[],
        metavar="KIND[:VALUE]",
        help="Add an enabled effect; repeat to build the chain in order",
    )

    parser.add_argument(
        "--disable",
        dest="effects",
        action=EffectAction,
        enabled=False,
        metavar="KIND[:VALUE]",
        help="Add a disabled effect at this position of the chain",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for grain; same seed gives identical output (default: random)",
    )

    parser.add_argument(
        "--scale",
        type=int,
        default=1,
        help="Upscale factor applied before effects, nearest-neighbour (default: 1)",
    )

    parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Filename stem for directory output (default: input file stem)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log more detail; repeat for debug output",
    )

    parsed = parser.parse_args(args)

    # Validate inputs exist
    for path in parsed.inputs:
        if not Path(path).exists():
            parser.error(f"Input file not found: {path}")
    if parsed.scale < 1:
        parser.error("--scale must be at least 1")
    if len(parsed.inputs) > 1 and is_image_file(parsed.output):
        parser.error("--output must be a directory when several inputs are given")
    if len(parsed.inputs) == 1 and is_image_file(parsed.output) and Path(parsed.output).suffix.lower() != ".png":
        parser.error("--output file must have a .png suffix; output is always PNG")

    return ProcessingConfig.from_args(
        input_paths=parsed.inputs,
        output_path=parsed.output,
        effects=parsed.effects,
        scale=parsed.scale,
        filename_stem=parsed.name,
        seed=parsed.seed,
        verbosity=parsed.verbose,
    )
