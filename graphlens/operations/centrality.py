"""Centrality measures, reported as size maps."""

import logging
from typing import Any, Dict, Optional, Sequence

from graphlens.encoding.envelope import SIZE_MAP, EnvelopeBuilder, Mode, ResponseEnvelope
from graphlens.encoding.scaling import report, size_map
from graphlens.graph.store import GraphStore
from graphlens.operations.common import OperationContext
from graphlens.operations.registry import operation

logger = logging.getLogger("graphlens.operations.centrality")

CATEGORY = "centrality"


def _centrality_envelope(
    ctx: OperationContext,
    algorithm: str,
    values: Sequence[Optional[float]],
    digits: int,
    extra: Optional[Dict[str, Any]] = None,
) -> ResponseEnvelope:
    """Scale one value per vertex into a size map and list the raw values."""
    builder = EnvelopeBuilder(ctx.graph, Mode.SIZE_SCALAR, SIZE_MAP)
    sizes = size_map(
        dict(enumerate(values)), ctx.encoding.min_scale, ctx.encoding.max_scale
    )
    for vertex, size in sizes.items():
        builder.vertex(vertex, size)
    logger.debug("%s computed for %d vertices", algorithm, len(values))

    data: Dict[str, Any] = {"algorithm": algorithm}
    data.update(extra or {})
    data["centralities"] = [
        {"id": v, "node": ctx.names[v], "centrality": report(value, digits)}
        for v, value in enumerate(values)
    ]
    return builder.build(data)


@operation("betweenness_centrality", CATEGORY)
def betweenness_centrality(store: GraphStore) -> ResponseEnvelope:
    """Betweenness centrality (directed, weighted when weights exist)."""
    ctx = OperationContext.from_store(store)
    return _centrality_envelope(
        ctx, "Betweenness Centrality", ctx.facade.betweenness(), ctx.coarse
    )


@operation("closeness_centrality", CATEGORY)
def closeness_centrality(store: GraphStore) -> ResponseEnvelope:
    """Normalized out-closeness; vertices that reach nothing report None."""
    ctx = OperationContext.from_store(store)
    return _centrality_envelope(
        ctx, "Closeness Centrality", ctx.facade.closeness(), ctx.fine
    )


@operation("degree_centrality", CATEGORY)
def degree_centrality(store: GraphStore) -> ResponseEnvelope:
    """Out-degree without self-loops."""
    ctx = OperationContext.from_store(store)
    return _centrality_envelope(ctx, "Degree Centrality", ctx.facade.degree(), ctx.coarse)


@operation("eigenvector_centrality", CATEGORY)
def eigenvector_centrality(store: GraphStore) -> ResponseEnvelope:
    """Eigenvector centrality plus the dominant eigenvalue."""
    ctx = OperationContext.from_store(store)
    values, eigenvalue = ctx.facade.eigenvector()
    return _centrality_envelope(
        ctx,
        "Eigenvector Centrality",
        values,
        ctx.fine,
        {"eigenvalue": report(eigenvalue, ctx.coarse)},
    )


@operation("harmonic_centrality", CATEGORY)
def harmonic_centrality(store: GraphStore) -> ResponseEnvelope:
    """Normalized out-harmonic centrality."""
    ctx = OperationContext.from_store(store)
    return _centrality_envelope(ctx, "Harmonic Centrality", ctx.facade.harmonic(), ctx.fine)


@operation("strength_centrality", CATEGORY)
def strength_centrality(store: GraphStore) -> ResponseEnvelope:
    """Sum of outgoing edge weights (out-degree when unweighted)."""
    ctx = OperationContext.from_store(store)
    return _centrality_envelope(ctx, "Strength Centrality", ctx.facade.strength(), ctx.coarse)


@operation("pagerank", CATEGORY)
def pagerank(store: GraphStore, damping: float = 0.85) -> ResponseEnvelope:
    """PageRank with the given damping factor."""
    ctx = OperationContext.from_store(store)
    values = ctx.facade.pagerank(damping)
    return _centrality_envelope(
        ctx, "PageRank", values, ctx.fine, {"damping": f"{damping:.2f}"}
    )
