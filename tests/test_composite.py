import numpy as np
import pytest

from conftest import make_buffer
from gridfx.effects.chain import create_default_effect
from gridfx.effects.composite import CompositeFilterStage, blur, vignette, vignette_mask


def test_blur_zero_radius_is_identity(noisy_buffer):
    assert np.array_equal(blur(noisy_buffer.data, 0), noisy_buffer.data)


def test_blur_keeps_flat_color():
    buffer = make_buffer(np.full((6, 6, 3), 77, dtype=np.uint8))
    assert np.array_equal(blur(buffer.data, 3), buffer.data)


def test_blur_softens_edges():
    row = [[0, 0, 0]] * 4 + [[255, 255, 255]] * 4
    out = blur(make_buffer([row] * 4).data, 2)
    middle = out[2, 3, 0]
    assert 0 < middle < 255
    assert out[2, 0, 0] < middle < out[2, 4, 0]


def test_vignette_mask_is_zero_in_centre_and_full_at_corners():
    mask = vignette_mask(9, 9, 100)
    assert mask[4, 4] == 0
    assert mask[0, 0] == pytest.approx(1.0)
    assert np.all(mask >= 0) and np.all(mask <= 1)


def test_vignette_mask_scales_with_strength():
    assert vignette_mask(9, 9, 40).max() == pytest.approx(0.4)


def test_vignette_darkens_edges_and_keeps_alpha():
    buffer = make_buffer(np.full((9, 9, 3), 255, dtype=np.uint8), alpha=200)
    out = vignette(buffer.data, 100)
    assert out[4, 4].tolist() == [255, 255, 255, 200]
    assert out[0, 0].tolist() == [0, 0, 0, 200]
    assert out[4, 0, 0] < 255


def test_vignette_zero_strength_is_identity(noisy_buffer):
    assert np.array_equal(vignette(noisy_buffer.data, 0), noisy_buffer.data)


def test_empty_stage_returns_input(noisy_buffer):
    stage = CompositeFilterStage()
    assert stage.is_empty
    assert stage.apply(noisy_buffer) is noisy_buffer


def test_stage_ignores_disabled_descriptors(noisy_buffer):
    stage = CompositeFilterStage()
    stage.collect(create_default_effect("blur", enabled=False))
    assert stage.is_empty


def test_stage_last_collected_wins():
    stage = CompositeFilterStage()
    stage.collect(create_default_effect("vignette", strength=10))
    stage.collect(create_default_effect("vignette", strength=90))
    assert stage.vignette.strength == 90


def test_stage_blurs_before_vignette(noisy_buffer):
    stage = CompositeFilterStage()
    stage.collect(create_default_effect("vignette", strength=70))
    stage.collect(create_default_effect("blur", radius=1.5))
    expected = vignette(blur(noisy_buffer.data, 1.5), 70)
    assert np.array_equal(stage.apply(noisy_buffer).data, expected)


def test_stage_clamps_negative_radius(noisy_buffer):
    stage = CompositeFilterStage()
    stage.collect(create_default_effect("blur", radius=-4))
    assert stage.blur.radius == 0
    assert stage.apply(noisy_buffer) == noisy_buffer


def test_stage_rejects_raster_kind():
    with pytest.raises(ValueError):
        CompositeFilterStage().collect(create_default_effect("gamma"))
