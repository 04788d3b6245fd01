"""List command: available input formats and algorithms."""

import logging

from rich.table import Table

from graphlens.adapters import AdapterRegistry
from graphlens.cli.common import console
from graphlens.operations import list_operations

logger = logging.getLogger("graphlens.cli.catalog")


def list_command(args) -> int:
    """Print the registered formats and algorithms as tables."""
    formats = Table(title="Input formats")
    formats.add_column("Format")
    formats.add_column("Description")
    for name, description in AdapterRegistry.get_instance().describe().items():
        formats.add_row(name, description)

    algorithms = Table(title="Algorithms")
    algorithms.add_column("Name")
    algorithms.add_column("Category")
    algorithms.add_column("Parameters")
    algorithms.add_column("Description")
    for op in list_operations():
        algorithms.add_row(op.name, op.category, op.signature(), op.description)

    console.print(formats)
    console.print(algorithms)
    logger.debug("Listed %d formats and %d algorithms", formats.row_count, algorithms.row_count)
    return 0
