"""JSON graph document adapter.

Expected document shape::

    {
        "nodes": ["A", "B"],             # or "vertices"
        "edges": [                       # or "links"
            {"source": "A", "target": "B", "weight": 2.5}
        ],
        "directed": false
    }
"""

import json
import logging
import math
from typing import Any, Dict, List, Tuple

from graphlens.adapters.base import BaseAdapter, PathLike, open_text
from graphlens.errors import FormatError, ValidationError
from graphlens.graph.installation import GraphInstallation

logger = logging.getLogger("graphlens.adapters.json_schema")


def _pick(document: Dict[str, Any], primary: str, fallback: str) -> Any:
    if primary in document:
        return document[primary]
    if fallback in document:
        return document[fallback]
    raise FormatError(f"Missing '{primary}' (or '{fallback}') array in JSON document")


def _numeric_weight(raw: Any, context: str) -> float:
    # JSON weights are numbers; numeric strings and booleans are rejected
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValidationError(f"Invalid weight in edge: {context}")
    if not math.isfinite(raw):
        raise ValidationError(f"Invalid weight in edge: {context}")
    return float(raw)


def parse_document(document: Any, source: str = "<json>") -> GraphInstallation:
    """Validate a decoded JSON document and build the installation payload."""
    if not isinstance(document, dict):
        raise FormatError(f"JSON document in {source} must be an object")

    nodes = _pick(document, "nodes", "vertices")
    edges = _pick(document, "edges", "links")
    if "directed" not in document:
        raise FormatError(f"Missing required 'directed' field in {source}")
    directed = document["directed"]

    if not isinstance(nodes, list):
        raise FormatError(f"Invalid nodes format in {source}: expected an array")
    if not isinstance(edges, list):
        raise FormatError(f"Invalid edges format in {source}: expected an array")
    if not isinstance(directed, bool):
        raise FormatError(f"Invalid directed format in {source}: expected a boolean")

    node_map: Dict[str, int] = {}
    for node in nodes:
        if not isinstance(node, str):
            logger.debug("Skipping non-string node entry %r in %s", node, source)
            continue
        if node not in node_map:
            node_map[node] = len(node_map)

    if not node_map:
        raise ValidationError(f"No nodes found in {source}")

    edge_list: List[Tuple[int, int]] = []
    weights: List[float] = []
    for index, edge in enumerate(edges):
        if not isinstance(edge, dict) or "source" not in edge or "target" not in edge:
            raise FormatError(f"Missing source or target in edge #{index} of {source}")
        src, tar = edge["source"], edge["target"]
        if not isinstance(src, str) or not isinstance(tar, str):
            raise FormatError(
                f"Edge #{index} of {source}: source and target must be strings"
            )
        if src not in node_map or tar not in node_map:
            raise ValidationError(
                f"Invalid source or target in edge #{index} of {source}: {src} -> {tar}"
            )

        edge_list.append((node_map[src], node_map[tar]))
        if "weight" in edge:
            weights.append(_numeric_weight(edge["weight"], f"{src} -> {tar} in {source}"))
        else:
            weights.append(1.0)

    return GraphInstallation(
        names=list(node_map),
        edges=edge_list,
        weights=weights,
        directed=directed,
        source=source,
    )


class JsonSchemaAdapter(BaseAdapter):
    """Adapter for the JSON graph document."""

    NAME = "json"
    DESCRIPTION = "JSON document with nodes|vertices, edges|links and a boolean 'directed'"

    def parse(self, source: PathLike) -> GraphInstallation:
        with open_text(source, "JSON file") as handle:
            try:
                document = json.load(handle)
            except json.JSONDecodeError as exc:
                raise FormatError(f"Error parsing JSON file {source}: {exc}") from exc
        return parse_document(document, str(source))
