from pathlib import Path

import pytest

from gridfx.cli import parse_args, parse_effect
from gridfx.effects.chain import EffectKind


@pytest.fixture
def input_path(tmp_path: Path) -> Path:
    path = tmp_path / "input.png"
    path.write_bytes(b"fake")
    return path


def test_cli_builds_chain_in_flag_order(input_path: Path):
    config = parse_args(
        [
            str(input_path),
            "-o",
            "out.png",
            "-e",
            "rgb-shift:5",
            "--disable",
            "blur",
            "-e",
            "gamma:0.8",
            "--seed",
            "3",
            "--scale",
            "2",
        ]
    )

    assert [e.kind for e in config.effects] == [
        EffectKind.RGB_SHIFT,
        EffectKind.BLUR,
        EffectKind.GAMMA,
    ]
    assert [e.enabled for e in config.effects] == [True, False, True]
    assert config.effects[0].params.amount == 5
    assert config.effects[2].params.value == 0.8
    assert config.seed == 3
    assert config.output.scale == 2


def test_cli_defaults(input_path: Path):
    config = parse_args([str(input_path), "-o", "out.png"])
    assert config.effects == []
    assert config.seed is None
    assert config.output.scale == 1
    assert config.verbosity == 0


def test_cli_rejects_unknown_effect(input_path: Path):
    with pytest.raises(SystemExit):
        parse_args([str(input_path), "-o", "out.png", "-e", "stippling"])


def test_cli_rejects_value_for_parameterless_effect(input_path: Path):
    with pytest.raises(SystemExit):
        parse_args([str(input_path), "-o", "out.png", "-e", "dithering:4"])


def test_cli_rejects_missing_input(tmp_path: Path):
    with pytest.raises(SystemExit):
        parse_args([str(tmp_path / "nope.png"), "-o", "out.png"])


def test_cli_requires_directory_for_many_inputs(input_path: Path, tmp_path: Path):
    other = tmp_path / "other.png"
    other.write_bytes(b"fake")
    with pytest.raises(SystemExit):
        parse_args([str(input_path), str(other), "-o", "out.png"])


def test_parse_effect_rounds_integer_params():
    assert parse_effect("rgb-shift:2.6").params.amount == 3


def test_parse_effect_rejects_non_numeric_value():
    with pytest.raises(ValueError):
        parse_effect("grain:lots")


@pytest.mark.parametrize("target", ["out.jpg", "out.webp"])
def test_cli_rejects_non_png_output_file(input_path: Path, target: str):
    with pytest.raises(SystemExit):
        parse_args([str(input_path), "-o", target])


def test_cli_accepts_upper_case_png_suffix(input_path: Path):
    assert parse_args([str(input_path), "-o", "OUT.PNG"]).output_path == "OUT.PNG"
