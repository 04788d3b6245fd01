"""Exception hierarchy shared by the graph store, adapters and operations.

All errors raised by graphlens derive from ``GraphLensError`` so command
entry points can report them with a single ``except`` clause.
"""


class GraphLensError(Exception):
    """Base class for all graphlens errors."""
    pass


class ResourceError(GraphLensError):
    """Input resource is missing or cannot be read.

    Raised when an adapter cannot open the file it was pointed at.
    """
    pass


class ValidationError(GraphLensError):
    """Input is well-formed but semantically invalid.

    Examples: an edge naming an unknown vertex, a duplicate GEXF id,
    an empty vertex set, a non-numeric weight, or an algorithm requested
    on a graph shape it does not support.
    """
    pass


class FormatError(ValidationError):
    """Header or document shape does not match the expected schema."""
    pass


class CollaboratorError(GraphLensError):
    """The graph-algorithms library reported a failure."""
    pass


__all__ = [
    "CollaboratorError",
    "FormatError",
    "GraphLensError",
    "ResourceError",
    "ValidationError",
]
