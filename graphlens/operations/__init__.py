"""Analysis operations: one facade call plus encoding each.

Importing this package registers every operation with the registry.
"""

from graphlens.operations.registry import (
    Operation,
    coerce_param,
    get_operation,
    list_operations,
    operation,
    run_operation,
)
from graphlens.operations import centrality, community, misc, paths  # noqa: F401

__all__ = [
    "Operation",
    "coerce_param",
    "get_operation",
    "list_operations",
    "operation",
    "run_operation",
]
