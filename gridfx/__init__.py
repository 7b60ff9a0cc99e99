"""Raster effects pipeline for color grid images."""

__version__ = "0.1.0"

from .core.buffer import InvalidBufferError, PixelBuffer
from .effects.chain import EffectChain, EffectDescriptor, EffectKind, create_default_effect
from .effects.pipeline import EffectPipeline, apply_effect_chain

__all__ = [
    "__version__",
    "EffectChain",
    "EffectDescriptor",
    "EffectKind",
    "EffectPipeline",
    "InvalidBufferError",
    "PixelBuffer",
    "apply_effect_chain",
    "create_default_effect",
]
