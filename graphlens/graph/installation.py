"""Uniform payload produced by every format adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from graphlens.errors import ValidationError
from graphlens.graph.attributes import AttributeKind
from graphlens.graph.canonical import CanonicalGraph

TypedColumn = Tuple[AttributeKind, List[Any]]


@dataclass
class GraphInstallation:
    """A fully parsed graph, ready to be installed into a GraphStore.

    Attributes:
        names: Vertex display names, or None when the source carries none.
        edges: Ordered ``(from, to)`` vertex ID pairs.
        weights: Edge weights parallel to ``edges``, or None when unweighted.
        directed: Directedness flag.
        vertex_count: Number of vertices; defaults to ``len(names)``.
        vertex_attributes: Extra typed vertex columns.
        edge_attributes: Extra typed edge columns.
        source: Human-readable origin used in log messages.
    """

    names: Optional[List[str]]
    edges: List[Tuple[int, int]]
    weights: Optional[List[float]]
    directed: bool
    vertex_count: Optional[int] = None
    vertex_attributes: Dict[str, TypedColumn] = field(default_factory=dict)
    edge_attributes: Dict[str, TypedColumn] = field(default_factory=dict)
    source: str = "<memory>"

    def __post_init__(self) -> None:
        if self.vertex_count is None:
            if self.names is None:
                raise ValidationError("Installation needs either names or a vertex count")
            self.vertex_count = len(self.names)
        elif self.names is not None and len(self.names) != self.vertex_count:
            raise ValidationError(
                f"{len(self.names)} names given for {self.vertex_count} vertices"
            )

        if self.vertex_count == 0:
            raise ValidationError(f"No nodes found in {self.source}")

        if self.weights is not None and len(self.weights) != len(self.edges):
            raise ValidationError(
                f"Weight vector has {len(self.weights)} entries for "
                f"{len(self.edges)} edges in {self.source}"
            )

    def build(self) -> CanonicalGraph:
        """Construct the CanonicalGraph described by this payload."""
        graph = CanonicalGraph(
            self.vertex_count, self.edges, self.weights, directed=self.directed
        )
        if self.names is not None:
            graph.vertex_attributes.set_column("name", list(self.names), AttributeKind.STRING)
        for name, (kind, values) in self.vertex_attributes.items():
            graph.vertex_attributes.set_column(name, values, kind)
        for name, (kind, values) in self.edge_attributes.items():
            graph.edge_attributes.set_column(name, values, kind)
        return graph
