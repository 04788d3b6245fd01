"""GML graph adapter backed by ``networkx.read_gml``."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import networkx as nx

from graphlens.adapters.base import BaseAdapter, PathLike, open_binary
from graphlens.errors import FormatError
from graphlens.graph.attributes import AttributeKind
from graphlens.graph.installation import GraphInstallation, TypedColumn

logger = logging.getLogger("graphlens.adapters.gml")

SCALAR_TYPES = (bool, int, float, str)


def _typed_columns(
    rows: List[Dict[str, Any]], skip: Iterable[str] = ()
) -> Dict[str, TypedColumn]:
    """Turn per-row attribute dicts into typed columns.

    Only scalar values are kept. A column whose values disagree on kind
    is stored as strings.
    """
    skipped = set(skip)
    names: List[str] = []
    for row in rows:
        for key, value in row.items():
            if key in skipped or key in names or not isinstance(value, SCALAR_TYPES):
                continue
            names.append(key)

    columns: Dict[str, TypedColumn] = {}
    for name in names:
        values = [
            row.get(name) if isinstance(row.get(name), SCALAR_TYPES) else None
            for row in rows
        ]
        kinds = {AttributeKind.infer(v) for v in values if v is not None}
        kind = kinds.pop() if len(kinds) == 1 else AttributeKind.STRING
        columns[name] = (kind, values)
    return columns


def _weights(edge_rows: List[Dict[str, Any]]) -> Optional[List[float]]:
    weights: List[float] = []
    for row in edge_rows:
        value = row.get("weight")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        weights.append(float(value))
    return weights if edge_rows else None


def from_networkx(graph: nx.Graph, source: str = "<gml>") -> GraphInstallation:
    """Copy a networkx graph read from GML into an installation payload.

    Node keys become the ``id`` column, edges and directedness are copied
    as-is.
    """
    index: Dict[Any, int] = {node: i for i, node in enumerate(graph.nodes)}
    node_rows = [dict(graph.nodes[node]) for node in graph.nodes]
    edges: List[Tuple[int, int]] = []
    edge_rows: List[Dict[str, Any]] = []
    for u, v, data in graph.edges(data=True):
        edges.append((index[u], index[v]))
        edge_rows.append(dict(data))

    vertex_columns = _typed_columns(node_rows, skip=("id",))
    ids = list(index)
    id_kinds = {AttributeKind.infer(node) for node in ids}
    id_kind = id_kinds.pop() if len(id_kinds) == 1 else AttributeKind.STRING
    if id_kind is AttributeKind.STRING:
        ids = [str(node) for node in ids]
    vertex_columns["id"] = (id_kind, ids)

    weights = _weights(edge_rows)
    logger.debug(
        "GML %s: %d nodes, %d edges, weighted=%s, node attributes=%s",
        source,
        len(ids),
        len(edges),
        weights is not None,
        sorted(vertex_columns),
    )
    return GraphInstallation(
        names=None,
        edges=edges,
        weights=weights,
        directed=graph.is_directed(),
        vertex_count=len(ids),
        vertex_attributes=vertex_columns,
        edge_attributes=_typed_columns(edge_rows, skip=("weight",)),
        source=source,
    )


class GmlAdapter(BaseAdapter):
    """Adapter for GML text documents."""

    NAME = "gml"
    DESCRIPTION = "GML text document (read with networkx)"

    def parse(self, source: PathLike) -> GraphInstallation:
        # read_gml decodes the lines itself, so it needs a binary handle
        with open_binary(source, "GML file") as handle:
            try:
                # label=None keeps the numeric GML ids as node keys
                graph = nx.read_gml(handle, label=None)
            except (nx.NetworkXError, UnicodeDecodeError, ValueError) as exc:
                raise FormatError(f"Error parsing GML file {source}: {exc}") from exc
        return from_networkx(graph, str(source))
