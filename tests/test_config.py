"""Tests for configuration schema and loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from graphlens.config import GraphLensConfig, load_config
from graphlens.errors import ValidationError


def test_defaults() -> None:
    """No source yields the built-in defaults."""
    config = load_config(None)
    assert config.encoding.min_scale == 5.0
    assert config.encoding.max_scale == 30.0
    assert config.generator.min_weight == 1
    assert config.generator.max_weight == 20
    assert config.prediction.threshold == 0.5
    assert config.logging.level == "WARNING"


def test_load_from_dict_normalizes_level() -> None:
    """Dict sources are validated; level names are upper-cased."""
    config = load_config({"logging": {"level": "debug"}, "generator": {"seed": 3}})
    assert config.logging.level == "DEBUG"
    assert config.generator.seed == 3


def test_load_toml_file(tmp_path: Path) -> None:
    """TOML files are detected by suffix."""
    path = tmp_path / "graphlens.toml"
    path.write_text("[encoding]\nmin_scale = 2.0\nmax_scale = 12.0\n", encoding="utf-8")

    config = load_config(path)
    assert config.encoding.min_scale == 2.0
    assert config.encoding.max_scale == 12.0


def test_load_inline_json_string() -> None:
    """Inline JSON strings are parsed directly."""
    config = load_config('{"prediction": {"threshold": 0.75}}')
    assert config.prediction.threshold == 0.75


def test_inverted_bounds_are_rejected() -> None:
    """min_scale above max_scale fails validation."""
    with pytest.raises(ValidationError):
        load_config({"encoding": {"min_scale": 40.0}})
    with pytest.raises(ValidationError):
        load_config({"generator": {"min_weight": 9, "max_weight": 2}})


def test_unknown_keys_are_rejected() -> None:
    """Typos in section names are reported instead of ignored."""
    with pytest.raises(ValidationError):
        load_config({"encodng": {}})


def test_malformed_inline_toml() -> None:
    """Unparseable text raises ValidationError."""
    with pytest.raises(ValidationError):
        load_config("[encoding\nmin_scale = ")


def test_round_trip_to_dict() -> None:
    """to_dict/from_dict preserve values."""
    config = GraphLensConfig(generator={"seed": 7})
    assert GraphLensConfig.from_dict(config.to_dict()) == config
