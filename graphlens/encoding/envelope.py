"""Response envelope handed to the renderer.

An envelope carries exactly one map (``colorMap`` or ``sizeMap``), the
render ``mode`` and a free-form ``data`` payload. Map keys are vertex
IDs (ints) or edge keys (``"<from>-<to>"`` strings).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from graphlens.encoding.scaling import edge_key
from graphlens.errors import ValidationError
from graphlens.graph.canonical import CanonicalGraph

logger = logging.getLogger("graphlens.encoding.envelope")

MapKey = Union[int, str]

COLOR_MAP = "colorMap"
SIZE_MAP = "sizeMap"


class Mode(IntEnum):
    """How the renderer interprets the map values."""

    IMPORTANT = 1
    SHADE_DEFAULT = 2
    SHADE_ERROR = 3
    SIZE_SCALAR = 4
    RAINBOW = 5


@dataclass
class ResponseEnvelope:
    """Uniform result of every analysis operation."""

    mode: Mode
    values: Dict[MapKey, float] = field(default_factory=dict)
    data: Dict[str, Any] = field(default_factory=dict)
    map_name: str = COLOR_MAP
    edges: Optional[List[Dict[str, int]]] = None

    @property
    def color_map(self) -> Optional[Dict[MapKey, float]]:
        return self.values if self.map_name == COLOR_MAP else None

    @property
    def size_map(self) -> Optional[Dict[MapKey, float]]:
        return self.values if self.map_name == SIZE_MAP else None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form: ``{colorMap|sizeMap, mode, data[, edges]}``."""
        payload: Dict[str, Any] = {
            self.map_name: dict(self.values),
            "mode": int(self.mode),
            "data": self.data,
        }
        if self.edges is not None:
            payload["edges"] = list(self.edges)
        return payload


class EnvelopeBuilder:
    """Collects map entries and checks each key against the live graph.

    Example:
        >>> builder = EnvelopeBuilder(graph, Mode.SHADE_DEFAULT)
        >>> builder.vertex(0, 1.0).edge(0, 1, 1.0)
        >>> envelope = builder.build({"weighted": False})
    """

    def __init__(self, graph: CanonicalGraph, mode: Mode, map_name: str = COLOR_MAP) -> None:
        if map_name not in (COLOR_MAP, SIZE_MAP):
            raise ValueError(f"Unknown map name: {map_name}")
        self.graph = graph
        self.mode = mode
        self.map_name = map_name
        self.values: Dict[MapKey, float] = {}
        self._predicted: List[Tuple[int, int]] = []
        self._predicted_keys: Set[Tuple[int, int]] = set()

    def vertex(self, vertex: int, value: float) -> "EnvelopeBuilder":
        """Set the map value of a vertex."""
        self.graph.check_vertex(vertex)
        self.values[vertex] = value
        return self

    def edge(self, source: int, target: int, value: float) -> "EnvelopeBuilder":
        """Set the map value of an existing or predicted edge."""
        if (source, target) not in self._predicted_keys and not self.graph.has_edge(
            source, target
        ):
            raise ValidationError(f"Edge {source}-{target} is not in the graph")
        self.values[edge_key(source, target)] = value
        return self

    def predicted_edge(self, source: int, target: int, value: float) -> "EnvelopeBuilder":
        """Add an edge absent from the graph; it is also listed under ``edges``."""
        self.graph.check_vertex(source)
        self.graph.check_vertex(target)
        if (source, target) not in self._predicted_keys:
            self._predicted.append((source, target))
            self._predicted_keys.add((source, target))
        return self.edge(source, target, value)

    def build(self, data: Optional[Dict[str, Any]] = None) -> ResponseEnvelope:
        edges = None
        if self._predicted:
            edges = [{"source": u, "target": v} for u, v in self._predicted]
        logger.debug(
            "Built %s envelope with %d %s entries", self.mode.name, len(self.values), self.map_name
        )
        return ResponseEnvelope(
            mode=self.mode,
            values=self.values,
            data=data or {},
            map_name=self.map_name,
            edges=edges,
        )
