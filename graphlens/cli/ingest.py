"""Ingest command implementation."""

import logging

from graphlens.cli.common import emit, load_store
from graphlens.errors import GraphLensError

logger = logging.getLogger("graphlens.cli.ingest")


def ingest_command(args) -> int:
    """Load a graph and print its ingestion payload.

    Args:
        args: Parsed command-line arguments (graph source flags, ``output``).

    Returns:
        int: Exit code (0 for success, 1 for failure).
    """
    try:
        store = load_store(args)
        emit(store.describe(), getattr(args, "output", None))
    except GraphLensError as exc:
        logger.error("Ingest failed: %s", exc)
        return 1
    return 0
