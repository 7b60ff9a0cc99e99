import pytest

from gridfx.config import GammaConfig, ThresholdConfig, VignetteConfig
from gridfx.effects.chain import EffectChain, EffectDescriptor, EffectKind, create_default_effect


def test_create_default_effect_uses_kind_defaults():
    effect = create_default_effect("gamma")
    assert effect.kind is EffectKind.GAMMA
    assert effect.enabled is True
    assert effect.params == GammaConfig(1.2)
    assert effect.id.startswith("gamma-")


def test_default_ids_are_unique():
    ids = {create_default_effect("threshold").id for _ in range(20)}
    assert len(ids) == 20


def test_create_default_effect_accepts_underscores():
    assert create_default_effect("rgb_shift").kind is EffectKind.RGB_SHIFT


def test_create_default_effect_rejects_unknown_kind():
    with pytest.raises(ValueError):
        create_default_effect("halftone")


def test_descriptor_keeps_unknown_kind_as_string():
    effect = EffectDescriptor(id="x", kind="crt-screen")
    assert effect.kind == "crt-screen"
    assert effect.params is None


def test_descriptor_normalises_known_kind_string():
    effect = EffectDescriptor(id="x", kind="vignette")
    assert effect.kind is EffectKind.VIGNETTE
    assert effect.params == VignetteConfig()


def test_clamped_params():
    assert ThresholdConfig(300).clamped().value == 255
    assert ThresholdConfig(-3).clamped().value == 0
    assert GammaConfig(1.5).clamped().value == 1.5


def _chain():
    chain = EffectChain()
    first = chain.add("gamma")
    second = chain.add("threshold")
    third = chain.add("blur")
    return chain, first, second, third


def test_move_swaps_with_neighbour():
    chain, first, second, third = _chain()
    chain.move(second.id, "up")
    assert [e.id for e in chain] == [second.id, first.id, third.id]
    chain.move(second.id, "down")
    assert [e.id for e in chain] == [first.id, second.id, third.id]


def test_move_past_ends_is_noop():
    chain, first, second, third = _chain()
    chain.move(first.id, "up")
    chain.move(third.id, "down")
    chain.move("missing", "up")
    assert [e.id for e in chain] == [first.id, second.id, third.id]


def test_move_rejects_bad_direction():
    chain, first, _, _ = _chain()
    with pytest.raises(ValueError):
        chain.move(first.id, "left")


def test_toggle_and_enabled():
    chain, first, second, third = _chain()
    chain.toggle(second.id)
    assert [e.id for e in chain.enabled()] == [first.id, third.id]
    chain.toggle(second.id)
    assert len(chain.enabled()) == 3


def test_remove():
    chain, first, second, third = _chain()
    chain.remove(first.id)
    chain.remove("missing")
    assert [e.id for e in chain] == [second.id, third.id]


def test_update_params():
    chain, _, second, _ = _chain()
    chain.update(second.id, ThresholdConfig(40))
    assert chain[1].params.value == 40
    with pytest.raises(KeyError):
        chain.update("missing", ThresholdConfig(40))


def test_update_rejects_wrong_params_type():
    chain, first, second, _ = _chain()
    with pytest.raises(TypeError):
        chain.update(second.id, {"value": 40})
    with pytest.raises(TypeError):
        chain.update(second.id, GammaConfig(1.5))
    assert chain[1].params == ThresholdConfig()
    chain.update(first.id, GammaConfig(1.5))
    assert chain[0].params.value == 1.5
