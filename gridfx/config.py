"""Configuration dataclasses for gridfx."""

from dataclasses import dataclass, field, replace
from typing import List, Optional

from .core.utils import clamp


@dataclass(frozen=True)
class GammaConfig:
    """Gamma correction; values above 1 brighten mid-tones."""

    value: float = 1.2

    MIN = 0.1
    MAX = 3.0

    def clamped(self) -> "GammaConfig":
        return replace(self, value=clamp(float(self.value), self.MIN, self.MAX))


@dataclass(frozen=True)
class ThresholdConfig:
    """Black/white cut-off on mean luminance."""

    value: float = 128

    MIN = 0
    MAX = 255

    def clamped(self) -> "ThresholdConfig":
        return replace(self, value=clamp(float(self.value), self.MIN, self.MAX))


@dataclass(frozen=True)
class EdgeDetectionConfig:
    """Sobel edge detection takes no parameters."""

    def clamped(self) -> "EdgeDetectionConfig":
        return self


@dataclass(frozen=True)
class RGBShiftConfig:
    """Horizontal red/blue channel offset in pixels."""

    amount: int = 3

    MIN = 0
    MAX = 20

    def clamped(self) -> "RGBShiftConfig":
        return replace(self, amount=int(round(clamp(self.amount, self.MIN, self.MAX))))


@dataclass(frozen=True)
class DitheringConfig:
    """Floyd-Steinberg dithering takes no parameters."""

    def clamped(self) -> "DitheringConfig":
        return self


@dataclass(frozen=True)
class GrainConfig:
    """Film grain noise opacity in percent."""

    opacity: float = 30

    MIN = 0
    MAX = 100

    def clamped(self) -> "GrainConfig":
        return replace(self, opacity=clamp(float(self.opacity), self.MIN, self.MAX))


@dataclass(frozen=True)
class BlurConfig:
    """Gaussian blur radius in pixels."""

    radius: float = 2

    MIN = 0
    MAX = 20

    def clamped(self) -> "BlurConfig":
        return replace(self, radius=clamp(float(self.radius), self.MIN, self.MAX))


@dataclass(frozen=True)
class VignetteConfig:
    """Edge darkening strength in percent."""

    strength: float = 50

    MIN = 0
    MAX = 100

    def clamped(self) -> "VignetteConfig":
        return replace(self, strength=clamp(float(self.strength), self.MIN, self.MAX))


@dataclass
class OutputConfig:
    """Configuration for exported images."""

    scale: int = 1
    filename_stem: Optional[str] = None


@dataclass
class ProcessingConfig:
    """Combined configuration for processing."""

    input_paths: List[str]
    output_path: str
    effects: list = field(default_factory=list)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: Optional[int] = None
    verbosity: int = 0

    @classmethod
    def from_args(
        cls,
        input_paths: List[str],
        output_path: str,
        effects: Optional[list] = None,
        scale: int = 1,
        filename_stem: Optional[str] = None,
        seed: Optional[int] = None,
        verbosity: int = 0,
    ) -> "ProcessingConfig":
        """Create ProcessingConfig from CLI arguments."""
        return cls(
            input_paths=list(input_paths),
            output_path=output_path,
            effects=list(effects or []),
            output=OutputConfig(scale=scale, filename_stem=filename_stem),
            seed=seed,
            verbosity=verbosity,
        )
