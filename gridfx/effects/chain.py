"""Effect descriptors and the ordered chain they live in."""

import itertools
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, List, Optional, Union

from ..config import (
    BlurConfig,
    DitheringConfig,
    EdgeDetectionConfig,
    GammaConfig,
    GrainConfig,
    RGBShiftConfig,
    ThresholdConfig,
    VignetteConfig,
)


class EffectKind(str, Enum):
    """Effect kinds the pipeline knows how to render."""

    BLUR = "blur"
    GRAIN = "grain"
    GAMMA = "gamma"
    THRESHOLD = "threshold"
    EDGE_DETECTION = "edge-detection"
    VIGNETTE = "vignette"
    RGB_SHIFT = "rgb-shift"
    DITHERING = "dithering"

    @classmethod
    def lookup(cls, name: Union[str, "EffectKind"]) -> Optional["EffectKind"]:
        """Find a kind by its value, accepting underscores for dashes."""
        if isinstance(name, cls):
            return name
        return cls._value2member_map_.get(str(name).strip().lower().replace("_", "-"))

    @classmethod
    def parse(cls, name: Union[str, "EffectKind"]) -> "EffectKind":
        """Like :meth:`lookup` but strict.

        Raises:
            ValueError: If the name is not a known kind.
        """
        kind = cls.lookup(name)
        if kind is None:
            known = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown effect kind: {name!r} (expected one of: {known})")
        return kind


PARAMS_BY_KIND = {
    EffectKind.BLUR: BlurConfig,
    EffectKind.GRAIN: GrainConfig,
    EffectKind.GAMMA: GammaConfig,
    EffectKind.THRESHOLD: ThresholdConfig,
    EffectKind.EDGE_DETECTION: EdgeDetectionConfig,
    EffectKind.VIGNETTE: VignetteConfig,
    EffectKind.RGB_SHIFT: RGBShiftConfig,
    EffectKind.DITHERING: DitheringConfig,
}

_ids = itertools.count(1)


@dataclass
class EffectDescriptor:
    """One configured effect in a chain.

    ``kind`` is normally an :class:`EffectKind`; a plain string is allowed so
    that chains written by newer tools still load; the pipeline skips kinds
    it does not recognise.
    """

    id: str
    kind: Union[EffectKind, str]
    enabled: bool = True
    params: object = None

    def __post_init__(self):
        self.kind = EffectKind.lookup(self.kind) or self.kind
        if self.params is None and isinstance(self.kind, EffectKind):
            self.params = PARAMS_BY_KIND[self.kind]()


def create_default_effect(
    kind: Union[str, EffectKind], enabled: bool = True, **params
) -> EffectDescriptor:
    """Create a descriptor with the kind's default parameters.

    Args:
        kind: Effect kind or its name.
        enabled: Initial enabled flag.
        **params: Overrides for the kind's parameter fields.

    Returns:
        New descriptor with a process-unique id.

    Raises:
        ValueError: If the kind is unknown.
    """
    kind = EffectKind.parse(kind)
    return EffectDescriptor(
        id=f"{kind.value}-{next(_ids)}",
        kind=kind,
        enabled=enabled,
        params=PARAMS_BY_KIND[kind](**params),
    )


@dataclass
class EffectChain:
    """Ordered list of effect descriptors.

    List order is application order; reordering changes the result.
    """

    effects: List[EffectDescriptor] = field(default_factory=list)

    def __iter__(self) -> Iterator[EffectDescriptor]:
        return iter(self.effects)

    def __len__(self) -> int:
        return len(self.effects)

    def __getitem__(self, index: int) -> EffectDescriptor:
        return self.effects[index]

    def enabled(self) -> List[EffectDescriptor]:
        """Return enabled descriptors in chain order."""
        return [effect for effect in self.effects if effect.enabled]

    def add(self, kind: Union[str, EffectKind], **params) -> EffectDescriptor:
        """Append a new default descriptor of ``kind`` and return it."""
        descriptor = create_default_effect(kind, **params)
        self.effects.append(descriptor)
        return descriptor

    def append(self, descriptor: EffectDescriptor) -> None:
        self.effects.append(descriptor)

    def find(self, effect_id: str) -> Optional[int]:
        """Index of the descriptor with ``effect_id`` or None."""
        for index, effect in enumerate(self.effects):
            if effect.id == effect_id:
                return index
        return None

    def remove(self, effect_id: str) -> None:
        self.effects = [effect for effect in self.effects if effect.id != effect_id]

    def toggle(self, effect_id: str) -> None:
        index = self.find(effect_id)
        if index is not None:
            effect = self.effects[index]
            self.effects[index] = replace(effect, enabled=not effect.enabled)

    def update(self, effect_id: str, params) -> None:
        """Replace a descriptor's parameters.

        Raises:
            KeyError: If no descriptor has ``effect_id``.
            TypeError: If ``params`` is not the parameter type of the
                descriptor's kind.
        """
        index = self.find(effect_id)
        if index is None:
            raise KeyError(effect_id)
        kind = self.effects[index].kind
        if isinstance(kind, EffectKind) and not isinstance(params, PARAMS_BY_KIND[kind]):
            raise TypeError(
                f"{kind.value} expects {PARAMS_BY_KIND[kind].__name__}, got {type(params).__name__}"
            )
        self.effects[index] = replace(self.effects[index], params=params)

    def move(self, effect_id: str, direction: str) -> None:
        """Swap a descriptor with its neighbour.

        Args:
            effect_id: Descriptor to move.
            direction: "up" (earlier in the chain) or "down" (later).
        """
        if direction not in ("up", "down"):
            raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")
        index = self.find(effect_id)
        if index is None:
            return
        new_index = index - 1 if direction == "up" else index + 1
        if not 0 <= new_index < len(self.effects):
            return
        effects = list(self.effects)
        effects[index], effects[new_index] = effects[new_index], effects[index]
        self.effects = effects
