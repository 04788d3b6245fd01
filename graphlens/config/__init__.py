"""Configuration schema and loading for graphlens."""

from .schema import (
    EncodingConfig,
    GeneratorConfig,
    GraphLensConfig,
    LoggingConfig,
    PredictionConfig,
)
from .loader import load_config

__all__ = [
    "EncodingConfig",
    "GeneratorConfig",
    "GraphLensConfig",
    "LoggingConfig",
    "PredictionConfig",
    "load_config",
]
