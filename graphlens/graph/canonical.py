"""Canonical in-memory graph.

Vertices are dense integers ``0..vertex_count-1``; edges are kept in
insertion order and an edge's ID is its position in ``edges``. Weights,
when present, form a vector parallel to ``edges``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import networkx as nx

from graphlens.errors import ValidationError
from graphlens.graph.attributes import AttributeTable

logger = logging.getLogger("graphlens.graph.canonical")

Edge = Tuple[int, int]

# Probe order for display names.
NAME_ATTRIBUTES = ("name", "label", "id")


class CanonicalGraph:
    """Directed or undirected attributed graph with dense vertex IDs."""

    def __init__(
        self,
        vertex_count: int,
        edges: Sequence[Edge] = (),
        weights: Optional[Sequence[float]] = None,
        directed: bool = False,
    ) -> None:
        if vertex_count < 0:
            raise ValidationError(f"Vertex count must be non-negative, got {vertex_count}")

        self.vertex_count = int(vertex_count)
        self.directed = bool(directed)
        self.edges: List[Edge] = []
        # first edge ID per ordered pair
        self._edge_index: Dict[Edge, int] = {}
        self.weights: Optional[List[float]] = [] if weights is not None else None
        self.vertex_attributes = AttributeTable(self.vertex_count)
        self.edge_attributes = AttributeTable(0)

        if weights is not None and len(weights) != len(edges):
            raise ValidationError(
                f"Weight vector has {len(weights)} entries for {len(edges)} edges"
            )
        for index, (source, target) in enumerate(edges):
            self.add_edge(source, target, weights[index] if weights is not None else None)

    # ------------------------------------------------------------------ #
    # Structure
    # ------------------------------------------------------------------ #
    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def has_weights(self) -> bool:
        """True iff a weight vector was installed, even an all-zero one."""
        return self.weights is not None

    def has_vertex(self, vertex: int) -> bool:
        return isinstance(vertex, int) and 0 <= vertex < self.vertex_count

    def check_vertex(self, vertex: Any) -> int:
        """Return ``vertex`` as an int or raise ValidationError if out of range."""
        if isinstance(vertex, bool) or not isinstance(vertex, int):
            raise ValidationError(f"Vertex ID must be an integer, got {vertex!r}")
        if not self.has_vertex(vertex):
            raise ValidationError(
                f"Vertex {vertex} out of range [0, {self.vertex_count})"
            )
        return vertex

    def add_edge(self, source: int, target: int, weight: Optional[float] = None) -> int:
        """Append an edge and return its edge ID."""
        self.check_vertex(source)
        self.check_vertex(target)
        if self.weights is not None:
            self.weights.append(1.0 if weight is None else float(weight))
        elif weight is not None:
            raise ValidationError("Cannot add a weighted edge to an unweighted graph")
        eid = len(self.edges)
        self.edges.append((source, target))
        self._edge_index.setdefault((source, target), eid)
        self.edge_attributes.append_row()
        return eid

    def add_vertex(
        self,
        name: Optional[str] = None,
        label: Optional[str] = None,
        table_name: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Append a vertex with optional display and typed attributes."""
        values: Dict[str, Any] = dict(attributes or {})
        if name is not None:
            values["name"] = name
        if label is not None:
            values["label"] = label
        if table_name is not None:
            values["tableName"] = table_name
        vertex = self.vertex_attributes.append_row(values)
        self.vertex_count += 1
        logger.debug("Added vertex %d (%s)", vertex, name or label or vertex)
        return vertex

    def has_edge(self, source: int, target: int) -> bool:
        """Check for an edge, either orientation when undirected."""
        return self.edge_id(source, target) is not None

    def edge_id(self, source: int, target: int) -> Optional[int]:
        """First edge ID joining ``source`` and ``target``, or None."""
        forward = self._edge_index.get((source, target))
        if self.directed:
            return forward
        backward = self._edge_index.get((target, source))
        if forward is None or backward is None:
            return backward if forward is None else forward
        return min(forward, backward)

    # ------------------------------------------------------------------ #
    # Names
    # ------------------------------------------------------------------ #
    def name_attribute(self) -> Optional[str]:
        """First of ``name``, ``label``, ``id`` present as a vertex column."""
        for attr in NAME_ATTRIBUTES:
            if attr in self.vertex_attributes:
                return attr
        return None

    def display_names(self) -> List[str]:
        """Display name of every vertex, probing the name column once."""
        attr = self.name_attribute()
        if attr is None:
            return [str(v) for v in range(self.vertex_count)]
        column = self.vertex_attributes.column(attr)
        names = []
        for v in range(self.vertex_count):
            value = column.values[v]
            names.append(str(v) if value is None else _as_text(value))
        return names

    def lookup_name(self, vertex: int) -> str:
        self.check_vertex(vertex)
        attr = self.name_attribute()
        if attr is None:
            return str(vertex)
        value = self.vertex_attributes.get(attr, vertex)
        return str(vertex) if value is None else _as_text(value)

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #
    def describe(self) -> Dict[str, Any]:
        """Ingestion payload: ``{nodes, edges, directed}``."""
        has_names = self.name_attribute() is not None
        names = self.display_names()
        nodes = []
        for v in range(self.vertex_count):
            node: Dict[str, Any] = {"id": v}
            if has_names:
                node["name"] = names[v]
            nodes.append(node)
        edges = [{"source": u, "target": v} for u, v in self.edges]
        return {"nodes": nodes, "edges": edges, "directed": self.directed}

    def to_networkx(self) -> nx.MultiGraph:
        """Build a networkx multigraph; edge keys are canonical edge IDs."""
        graph = nx.MultiDiGraph() if self.directed else nx.MultiGraph()
        for v in range(self.vertex_count):
            graph.add_node(v, **self.vertex_attributes.row(v, include_reserved=True))
        for eid, (u, v) in enumerate(self.edges):
            attrs = self.edge_attributes.row(eid, include_reserved=True)
            if self.weights is not None:
                attrs["weight"] = self.weights[eid]
            graph.add_edge(u, v, key=eid, **attrs)
        return graph

    def __repr__(self) -> str:
        return (
            f"CanonicalGraph(vertices={self.vertex_count}, edges={self.edge_count}, "
            f"directed={self.directed}, weighted={self.has_weights()})"
        )


def _as_text(value: Any) -> str:
    """Render integral floats (GML ids, numeric labels) without a trailing .0."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
