"""Public graph API surface."""

from graphlens.graph.attributes import (
    RESERVED_NAMES,
    AttributeColumn,
    AttributeKind,
    AttributeTable,
)
from graphlens.graph.canonical import CanonicalGraph
from graphlens.graph.installation import GraphInstallation
from graphlens.graph.store import GraphStore

__all__ = [
    "RESERVED_NAMES",
    "AttributeColumn",
    "AttributeKind",
    "AttributeTable",
    "CanonicalGraph",
    "GraphInstallation",
    "GraphStore",
]
