"""Effects module for raster buffer effects."""

from .base import Effect
from .chain import EffectChain, EffectDescriptor, EffectKind, create_default_effect
from .composite import CompositeFilterStage
from .pipeline import EffectPipeline, apply_effect_chain
from .raster import RasterEffect, apply_raster_effect

__all__ = [
    "Effect",
    "CompositeFilterStage",
    "EffectChain",
    "EffectDescriptor",
    "EffectKind",
    "EffectPipeline",
    "RasterEffect",
    "apply_effect_chain",
    "apply_raster_effect",
    "create_default_effect",
]
