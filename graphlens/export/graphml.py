"""GraphML export of the canonical graph."""

import logging
from pathlib import Path

import networkx as nx

from graphlens.errors import ResourceError
from graphlens.graph.canonical import CanonicalGraph

logger = logging.getLogger("graphlens.export.graphml")


def export_graphml(graph: CanonicalGraph, output_path: Path) -> None:
    """Export graph to GraphML format.

    Args:
        graph: Graph to export.
        output_path: Output file path.
    """
    logger.info("Exporting graph to GraphML: %s", output_path)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        nx.write_graphml(graph.to_networkx(), str(output_path))
    except OSError as exc:
        raise ResourceError(f"Could not write {output_path}: {exc}") from exc

    logger.info("GraphML export completed: %d nodes, %d edges",
                graph.vertex_count, graph.edge_count)
