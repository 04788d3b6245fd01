"""Graph store owning the single live canonical graph of a session.

A GraphStore replaces the old process-wide graph: callers hold one store
per session and pass it to every operation. Installing a graph releases
the previous one before the new graph becomes current.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from graphlens.config import GraphLensConfig
from graphlens.errors import ValidationError
from graphlens.graph.canonical import CanonicalGraph
from graphlens.graph.installation import GraphInstallation

logger = logging.getLogger("graphlens.graph.store")


class GraphStore:
    """Holds exactly one CanonicalGraph at a time.

    The store is not thread-safe; loads and analyses must be serialized by
    the caller.
    """

    def __init__(self, config: Optional[GraphLensConfig] = None) -> None:
        """Initialize an empty store.

        Args:
            config: Session configuration; defaults are used when omitted.
        """
        self.config = config or GraphLensConfig()
        self._graph: Optional[CanonicalGraph] = None
        logger.debug("GraphStore initialized")

    @property
    def current(self) -> CanonicalGraph:
        """The live graph.

        Raises:
            ValidationError: If no graph has been installed.
        """
        if self._graph is None:
            raise ValidationError("No graph loaded")
        return self._graph

    def is_loaded(self) -> bool:
        return self._graph is not None

    def install(
        self,
        vertex_names: Sequence[str],
        edges: Sequence[Tuple[int, int]],
        weights: Optional[Sequence[float]] = None,
        directed: bool = False,
    ) -> CanonicalGraph:
        """Replace the current graph with one built from names and edges.

        Vertex IDs are the positions of the names in ``vertex_names``.

        Returns:
            CanonicalGraph: The newly installed graph.
        """
        payload = GraphInstallation(
            names=list(vertex_names),
            edges=list(edges),
            weights=list(weights) if weights is not None else None,
            directed=directed,
        )
        return self.install_payload(payload)

    def install_payload(self, installation: GraphInstallation) -> CanonicalGraph:
        """Install an adapter result, replacing the current graph."""
        graph = installation.build()
        self.release()
        self._graph = graph
        logger.info(
            "Installed graph from %s: %d vertices, %d edges (directed=%s, weighted=%s)",
            installation.source,
            graph.vertex_count,
            graph.edge_count,
            graph.directed,
            graph.has_weights(),
        )
        return graph

    def release(self) -> None:
        """Drop the current graph and its weights."""
        if self._graph is not None:
            logger.debug("Releasing %r", self._graph)
        self._graph = None

    def describe(self) -> Dict[str, Any]:
        """Ingestion payload of the current graph."""
        return self.current.describe()
