"""Format-dispatching graph loader."""

import logging
from typing import Any, Dict

from graphlens.adapters.registry import AdapterRegistry
from graphlens.graph.store import GraphStore

logger = logging.getLogger("graphlens.adapters.loader")


def load_graph(store: GraphStore, fmt: str, **source: Any) -> Dict[str, Any]:
    """Parse a source with the adapter registered for ``fmt`` and install it.

    The previous graph stays installed when parsing fails.

    Args:
        store: Session graph store.
        fmt: Format tag (``csv``, ``json``, ``gexf``, ``gml``, ``random``, ``demo``).
        **source: Adapter-specific arguments (paths, ``directed``, ``n``, ``p``...).

    Returns:
        The ingestion payload ``{nodes, edges, directed}`` of the new graph.
    """
    adapter = AdapterRegistry.get_instance().create(fmt, config=store.config)
    logger.info("Loading %s graph (%s)", fmt, ", ".join(f"{k}={v}" for k, v in source.items()))
    installation = adapter.parse(**source)
    graph = store.install_payload(installation)
    return graph.describe()
