"""Configuration schema definitions using Pydantic for validation.

This module provides strongly-typed configuration classes for the graph
store, the synthetic generator and the result encoder. Using Pydantic
ensures configuration errors are caught early with clear error messages.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class EncodingConfig(BaseModel):
    """Configuration for result encoding.

    Attributes:
        min_scale: Smallest circle size emitted in a size map.
        max_scale: Largest circle size emitted in a size map.
        coarse_precision: Decimals kept for coarse magnitudes (degree, modularity).
        fine_precision: Decimals kept for normalized ratios (closeness, pagerank).
    """

    min_scale: float = Field(default=5.0, ge=0.0)
    max_scale: float = Field(default=30.0, gt=0.0)
    coarse_precision: int = Field(default=2, ge=0, le=10)
    fine_precision: int = Field(default=4, ge=0, le=10)

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def validate_scale_bounds(self) -> "EncodingConfig":
        """Ensure the size range is not inverted."""
        if self.min_scale > self.max_scale:
            raise ValueError(
                f"min_scale ({self.min_scale}) must not exceed max_scale ({self.max_scale})"
            )
        return self


class GeneratorConfig(BaseModel):
    """Configuration for the synthetic random-graph generator.

    Attributes:
        min_weight: Lowest integer weight assigned to generated edges.
        max_weight: Highest integer weight assigned to generated edges.
        seed: Optional RNG seed for reproducible graphs.
    """

    min_weight: int = Field(default=1, ge=0)
    max_weight: int = Field(default=20, ge=0)
    seed: Optional[int] = None

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def validate_weight_bounds(self) -> "GeneratorConfig":
        """Ensure the weight range is not inverted."""
        if self.min_weight > self.max_weight:
            raise ValueError(
                f"min_weight ({self.min_weight}) must not exceed max_weight ({self.max_weight})"
            )
        return self


class PredictionConfig(BaseModel):
    """Configuration for missing-edge prediction.

    Attributes:
        threshold: Minimum probability for a predicted edge to be reported.
    """

    threshold: float = Field(default=0.5, ge=0.0, le=1.0)

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Configuration for CLI logging."""

    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class GraphLensConfig(BaseModel):
    """Top-level configuration for a graphlens session.

    Example:
        >>> config = GraphLensConfig(generator={"seed": 7})
        >>> config.generator.seed
        7
    """

    encoding: EncodingConfig = Field(default_factory=EncodingConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    prediction: PredictionConfig = Field(default_factory=PredictionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphLensConfig":
        """Create configuration from a plain mapping."""
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain mapping."""
        return self.model_dump()
