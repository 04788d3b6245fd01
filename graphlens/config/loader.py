"""Helpers for loading graphlens configuration from TOML/JSON sources.

This module provides a single entry point `load_config` that accepts
various configuration sources:

* None -> default GraphLensConfig
* dict -> GraphLensConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from graphlens.config.schema import GraphLensConfig
from graphlens.errors import ResourceError, ValidationError

logger = logging.getLogger("graphlens.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _parse_text(text: str, fmt: str) -> Dict[str, Any]:
    try:
        data = json.loads(text) if fmt == "json" else tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ValidationError(f"Invalid {fmt.upper()} configuration: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError("Top-level configuration must be a mapping/dict")
    return data


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        # inline strings longer than NAME_MAX
        return False


def _guess_format(text: str) -> str:
    return "json" if text.lstrip().startswith(("{", "[")) else "toml"


def load_config(source: ConfigSource) -> GraphLensConfig:
    """Load GraphLensConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns the default GraphLensConfig
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        GraphLensConfig instance.

    Raises:
        ResourceError: If a config file exists but cannot be read.
        ValidationError: If the configuration is malformed.
    """
    if source is None:
        logger.debug("No config source provided; using defaults")
        return GraphLensConfig()

    if isinstance(source, dict):
        logger.debug("Loading configuration from provided dict")
        data = source
    elif isinstance(source, (str, Path)):
        path = Path(source)
        if _is_file(path):
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as exc:
                raise ResourceError(f"Could not read config file {path}: {exc}") from exc
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _guess_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _guess_format(text)
            logger.info("Loading configuration from inline %s string", fmt)
        data = _parse_text(text, fmt)
    else:
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    try:
        return GraphLensConfig.from_dict(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid configuration: {exc}") from exc


__all__ = ["ConfigSource", "load_config"]
