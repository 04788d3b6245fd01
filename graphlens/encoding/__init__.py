"""Result encoding: scaling rules and the response envelope."""

from graphlens.encoding.envelope import (
    COLOR_MAP,
    SIZE_MAP,
    EnvelopeBuilder,
    Mode,
    ResponseEnvelope,
)
from graphlens.encoding.scaling import (
    MAX_SCALE,
    MIN_SCALE,
    edge_key,
    group_members,
    ratio_to_max,
    report,
    round_to,
    scale_size,
    size_map,
)

__all__ = [
    "COLOR_MAP",
    "MAX_SCALE",
    "MIN_SCALE",
    "SIZE_MAP",
    "EnvelopeBuilder",
    "Mode",
    "ResponseEnvelope",
    "edge_key",
    "group_members",
    "ratio_to_max",
    "report",
    "round_to",
    "scale_size",
    "size_map",
]
