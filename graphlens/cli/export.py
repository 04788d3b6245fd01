"""Export command implementation."""

import logging
from pathlib import Path

from graphlens.cli.common import load_store
from graphlens.errors import GraphLensError
from graphlens.export import EXPORTERS

logger = logging.getLogger("graphlens.cli.export")


def export_command(args) -> int:
    """Load a graph and write it in an interchange format.

    Args:
        args: Parsed command-line arguments containing:
            - output: Output file path
            - export_format: ``json`` (node-link) or ``graphml``

    Returns:
        int: Exit code (0 for success, 1 for failure).
    """
    try:
        store = load_store(args)
        exporter = EXPORTERS[args.export_format]
        exporter(store.current, Path(args.output))
    except GraphLensError as exc:
        logger.error("Export failed: %s", exc)
        return 1

    logger.info("Export successful: %s", args.output)
    return 0
