"""Delimited node-list / edge-list adapter.

Two files describe one graph:

* the node file starts with a ``nodes`` (or ``Nodes``) header line and
  lists one vertex name per line (first comma-separated field);
* the edge file starts with a ``source,target[,weight]`` header and lists
  one edge per line. A ``weight`` header column makes the whole graph
  weighted.
"""

import logging
from typing import Dict, List, Optional, Tuple

from graphlens.adapters.base import BaseAdapter, PathLike, open_text, parse_weight
from graphlens.errors import FormatError, ValidationError
from graphlens.graph.installation import GraphInstallation

logger = logging.getLogger("graphlens.adapters.csv_pair")

NODE_HEADERS = ("nodes", "Nodes")
DELIMITER = ","


def read_node_file(path: PathLike) -> Dict[str, int]:
    """Read a node file into a name -> vertex ID map (first-seen wins).

    Raises:
        ResourceError: If the file cannot be opened.
        FormatError: If the header line is missing or wrong.
        ValidationError: If no node names follow the header.
    """
    node_map: Dict[str, int] = {}

    with open_text(path, "nodes file") as handle:
        header: Optional[str] = None
        for line in handle:
            stripped = line.strip()
            if stripped:
                header = stripped
                break

        if header is None:
            raise FormatError(f"Could not read the nodes header in {path}")
        if header not in NODE_HEADERS:
            raise FormatError(
                f"Incorrect header in nodes file {path}: expected 'nodes' or 'Nodes', got '{header}'"
            )

        for line in handle:
            stripped = line.strip()
            if not stripped:
                continue
            name = stripped.split(DELIMITER, 1)[0].strip()
            if not name:
                continue
            if name not in node_map:
                node_map[name] = len(node_map)
            else:
                logger.debug("Duplicate node '%s' in %s collapsed to ID %d", name, path, node_map[name])

    if not node_map:
        raise ValidationError(f"No nodes found in {path}")

    logger.debug("Read %d nodes from %s", len(node_map), path)
    return node_map


def read_edge_file(
    path: PathLike, node_map: Dict[str, int]
) -> Tuple[List[Tuple[int, int]], Optional[List[float]]]:
    """Read an edge file against a known node map.

    Returns:
        Tuple of edge list and weight list (None when the header has no
        ``weight`` column).
    """
    edges: List[Tuple[int, int]] = []
    weights: List[float] = []

    with open_text(path, "edges file") as handle:
        header_line = handle.readline()
        if not header_line:
            raise FormatError(f"Could not read the edges header in {path}")

        columns = header_line.strip().split(DELIMITER)
        if len(columns) < 2 or columns[0] != "source" or columns[1] != "target":
            raise FormatError(
                f"Incorrect header in edges file {path}: expected 'source,target[,weight]'"
            )
        weighted = len(columns) >= 3 and columns[2] == "weight"

        for line_no, line in enumerate(handle, start=2):
            fields = [f.strip() for f in line.strip().split(DELIMITER)]
            if len(fields) < 2:
                continue
            src, tar = fields[0], fields[1]
            if src not in node_map or tar not in node_map:
                raise ValidationError(
                    f"Invalid node in edge: {src} -> {tar} ({path}, line {line_no})"
                )

            edges.append((node_map[src], node_map[tar]))

            if weighted:
                raw = fields[2] if len(fields) >= 3 else ""
                weights.append(
                    parse_weight(raw, f"{src} -> {tar} ({path}, line {line_no})")
                    if raw
                    else 1.0
                )

    logger.debug("Read %d edges from %s (weighted=%s)", len(edges), path, weighted)
    return edges, weights if weighted else None


class CsvPairAdapter(BaseAdapter):
    """Adapter for a node file plus an edge file."""

    NAME = "csv"
    DESCRIPTION = "Node list (header 'nodes') and edge list (header 'source,target[,weight]')"

    def parse(
        self, nodes: PathLike, edges: PathLike, directed: bool = False
    ) -> GraphInstallation:
        node_map = read_node_file(nodes)
        edge_list, weights = read_edge_file(edges, node_map)

        # dict preserves insertion order, which is ID order
        names = list(node_map)
        return GraphInstallation(
            names=names,
            edges=edge_list,
            weights=weights,
            directed=directed,
            source=f"{nodes} + {edges}",
        )
