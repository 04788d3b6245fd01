"""Node-link JSON export of the canonical graph."""

import json
import logging
from pathlib import Path

import networkx as nx

from graphlens.errors import ResourceError
from graphlens.graph.canonical import CanonicalGraph

logger = logging.getLogger("graphlens.export.json")


def export_json(graph: CanonicalGraph, output_path: Path) -> None:
    """Export graph to node-link JSON.

    Args:
        graph: Graph to export.
        output_path: Output file path.
    """
    logger.info("Exporting graph to JSON: %s", output_path)

    data = nx.readwrite.json_graph.node_link_data(graph.to_networkx(), edges="edges")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as exc:
        raise ResourceError(f"Could not write {output_path}: {exc}") from exc

    logger.info("JSON export completed: %d nodes, %d edges",
                graph.vertex_count, graph.edge_count)
