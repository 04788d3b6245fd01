"""GEXF (XML) graph adapter.

Reads ``gexf/graph`` with its ``nodes`` and ``edges`` children. Element
names are matched without their namespace so GEXF 1.2 and 1.3 documents
(and unqualified ones) parse the same way.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Tuple

from graphlens.adapters.base import BaseAdapter, PathLike, open_text, parse_weight
from graphlens.errors import FormatError, ValidationError
from graphlens.graph.attributes import RESERVED_NAMES, AttributeKind
from graphlens.graph.installation import GraphInstallation, TypedColumn

logger = logging.getLogger("graphlens.adapters.gexf")

NUMERIC_TYPES = frozenset({"integer", "long", "float", "double"})


def _local(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _child(elem: ET.Element, name: str) -> Optional[ET.Element]:
    for child in elem:
        if _local(child.tag) == name:
            return child
    return None


def _children(elem: Optional[ET.Element], name: str) -> List[ET.Element]:
    if elem is None:
        return []
    return [child for child in elem if _local(child.tag) == name]


def _attribute_kind(gexf_type: Optional[str]) -> AttributeKind:
    kind = (gexf_type or "string").lower()
    if kind in NUMERIC_TYPES:
        return AttributeKind.NUMERIC
    if kind == "boolean":
        return AttributeKind.BOOLEAN
    return AttributeKind.STRING


def _declared_attributes(graph: ET.Element) -> Dict[str, Dict[str, Tuple[str, AttributeKind]]]:
    """Collect ``<attributes class=...>`` declarations.

    Returns:
        Mapping ``class`` (``node``/``edge``) -> attribute id -> (title, kind).
    """
    declared: Dict[str, Dict[str, Tuple[str, AttributeKind]]] = {"node": {}, "edge": {}}
    for block in _children(graph, "attributes"):
        target = block.get("class", "node")
        if target not in declared:
            logger.debug("Ignoring attributes block for class '%s'", target)
            continue
        for attr in _children(block, "attribute"):
            attr_id = attr.get("id")
            if attr_id is None:
                raise FormatError("GEXF attribute declaration without an id")
            title = attr.get("title") or attr_id
            declared[target][attr_id] = (title, _attribute_kind(attr.get("type")))
    return declared


class _ColumnCollector:
    """Accumulates attvalues of one element class into typed columns."""

    def __init__(self, declarations: Dict[str, Tuple[str, AttributeKind]]) -> None:
        self.declarations = declarations
        self.columns: Dict[str, TypedColumn] = {}
        self.rows = 0

    def add_row(self, elem: ET.Element) -> None:
        row = self.rows
        self.rows += 1
        for column in self.columns.values():
            column[1].append(None)

        for value in _children(_child(elem, "attvalues"), "attvalue"):
            attr_id = value.get("for") or value.get("id")
            if attr_id not in self.declarations:
                raise FormatError(f"GEXF attvalue refers to undeclared attribute '{attr_id}'")
            title, kind = self.declarations[attr_id]
            if title in RESERVED_NAMES:
                logger.debug("Skipping reserved attribute '%s'", title)
                continue
            if title not in self.columns:
                self.columns[title] = (kind, [None] * self.rows)
            self.columns[title][1][row] = kind.coerce(value.get("value"))


def parse_tree(root: ET.Element, source: str = "<gexf>") -> GraphInstallation:
    """Build an installation payload from a parsed GEXF document."""
    if _local(root.tag) != "gexf":
        raise FormatError(f"Missing <gexf> root element in {source}")
    graph = _child(root, "graph")
    if graph is None:
        raise FormatError(f"Missing <graph> element in {source}")

    directed = graph.get("defaultedgetype") == "directed"
    declared = _declared_attributes(graph)
    node_columns = _ColumnCollector(declared["node"])
    edge_columns = _ColumnCollector(declared["edge"])

    id_map: Dict[str, int] = {}
    seen_labels: Dict[str, str] = {}
    labels: List[str] = []
    for node in _children(_child(graph, "nodes"), "node"):
        node_id = node.get("id")
        if node_id is None:
            raise FormatError(f"Node without an id attribute in {source}")
        if node_id in id_map:
            raise ValidationError(f"Duplicate node id '{node_id}' in {source}")
        label = node.get("label") or node_id
        if label in seen_labels:
            raise ValidationError(
                f"Duplicate node label '{label}' in {source} "
                f"(nodes '{seen_labels[label]}' and '{node_id}')"
            )
        id_map[node_id] = len(labels)
        seen_labels[label] = node_id
        labels.append(label)
        node_columns.add_row(node)

    if not labels:
        raise ValidationError(f"No nodes found in {source}")

    edges: List[Tuple[int, int]] = []
    weights: List[float] = []
    for index, edge in enumerate(_children(_child(graph, "edges"), "edge")):
        src, tar = edge.get("source"), edge.get("target")
        if src is None or tar is None:
            raise FormatError(f"Edge #{index} in {source} has no source or target")
        if src not in id_map or tar not in id_map:
            raise ValidationError(f"Invalid node in edge: {src} -> {tar} ({source})")
        edges.append((id_map[src], id_map[tar]))
        raw_weight: Any = edge.get("weight")
        weights.append(
            1.0 if raw_weight is None else parse_weight(raw_weight, f"{src} -> {tar} ({source})")
        )
        edge_columns.add_row(edge)

    logger.debug(
        "GEXF %s: %d nodes, %d edges, %d node attributes, %d edge attributes",
        source,
        len(labels),
        len(edges),
        len(node_columns.columns),
        len(edge_columns.columns),
    )
    return GraphInstallation(
        names=labels,
        edges=edges,
        weights=weights,
        directed=directed,
        vertex_attributes=node_columns.columns,
        edge_attributes=edge_columns.columns,
        source=source,
    )


class GexfAdapter(BaseAdapter):
    """Adapter for GEXF XML documents."""

    NAME = "gexf"
    DESCRIPTION = "GEXF XML document (gexf/graph with nodes and edges)"

    def parse(self, source: PathLike) -> GraphInstallation:
        with open_text(source, "GEXF file") as handle:
            try:
                tree = ET.parse(handle)
            except ET.ParseError as exc:
                raise FormatError(f"Error parsing GEXF file {source}: {exc}") from exc
        return parse_tree(tree.getroot(), str(source))
