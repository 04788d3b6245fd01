"""Community detection, clustering and structural groupings."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from graphlens.encoding.envelope import EnvelopeBuilder, Mode, ResponseEnvelope
from graphlens.encoding.scaling import group_members, ratio_to_max, report
from graphlens.graph.store import GraphStore
from graphlens.operations.common import OperationContext
from graphlens.operations.registry import operation

logger = logging.getLogger("graphlens.operations.community")

CATEGORY = "community"


def _grouping_envelope(
    ctx: OperationContext,
    algorithm: str,
    membership: Sequence[int],
    key: str,
    extra: Optional[Dict[str, Any]] = None,
) -> ResponseEnvelope:
    """Colour each vertex by group ID and list members per group."""
    builder = EnvelopeBuilder(ctx.graph, Mode.RAINBOW)
    for vertex, group in enumerate(membership):
        builder.vertex(vertex, int(group))

    groups = group_members(membership, ctx.names)
    logger.debug("%s found %d groups", algorithm, len(groups))

    data: Dict[str, Any] = {"algorithm": algorithm}
    data.update(extra or {})
    data[key] = list(groups.values())
    return builder.build(data)


@operation("louvain", CATEGORY)
def louvain(store: GraphStore, resolution: float = 1.0) -> ResponseEnvelope:
    """Louvain (multilevel) communities; undirected graphs only."""
    ctx = OperationContext.from_store(store)
    membership, modularity = ctx.facade.louvain(resolution)
    return _grouping_envelope(
        ctx,
        "Louvain Community Detection",
        membership,
        "communities",
        {"modularity": report(modularity, ctx.coarse)},
    )


@operation("leiden", CATEGORY)
def leiden(store: GraphStore, resolution: float = 1.0) -> ResponseEnvelope:
    """Leiden communities (CPM objective); undirected graphs only."""
    ctx = OperationContext.from_store(store)
    membership, modularity, quality = ctx.facade.leiden(resolution)
    return _grouping_envelope(
        ctx,
        "Leiden Community Detection",
        membership,
        "communities",
        {
            "modularity": report(modularity, ctx.coarse),
            "quality": report(quality, ctx.coarse),
        },
    )


@operation("fast_greedy", CATEGORY)
def fast_greedy(store: GraphStore) -> ResponseEnvelope:
    """Fast-greedy modularity communities; undirected graphs only."""
    ctx = OperationContext.from_store(store)
    membership, modularity = ctx.facade.fast_greedy()
    return _grouping_envelope(
        ctx,
        "Fast-Greedy Community Detection",
        membership,
        "communities",
        {"modularity": report(modularity, ctx.coarse)},
    )


@operation("label_propagation", CATEGORY)
def label_propagation(store: GraphStore) -> ResponseEnvelope:
    """Label propagation communities."""
    ctx = OperationContext.from_store(store)
    return _grouping_envelope(
        ctx, "Label Propagation", ctx.facade.label_propagation(), "communities"
    )


@operation("strongly_connected_components", CATEGORY)
def strongly_connected_components(store: GraphStore) -> ResponseEnvelope:
    """Strongly connected components."""
    ctx = OperationContext.from_store(store)
    return _grouping_envelope(
        ctx, "Strongly Connected Components", ctx.facade.components("strong"), "components"
    )


@operation("weakly_connected_components", CATEGORY)
def weakly_connected_components(store: GraphStore) -> ResponseEnvelope:
    """Weakly connected components; directed graphs only."""
    ctx = OperationContext.from_store(store)
    return _grouping_envelope(
        ctx, "Weakly Connected Components", ctx.facade.components("weak"), "components"
    )


@operation("local_clustering_coefficient", CATEGORY)
def local_clustering_coefficient(store: GraphStore) -> ResponseEnvelope:
    """Local clustering coefficient per vertex, shaded ratio-to-max.

    ``global_coefficient`` is the mean of the non-zero coefficients.
    """
    ctx = OperationContext.from_store(store)
    values = ctx.facade.local_clustering()

    nonzero = [v for v in values if v]
    average = sum(nonzero) / len(nonzero) if nonzero else 0.0

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    for vertex, shade in ratio_to_max(dict(enumerate(values))).items():
        builder.vertex(vertex, shade)

    return builder.build(
        {
            "algorithm": "Local Clustering Coefficient",
            "global_coefficient": report(average, ctx.fine),
            "coefficients": [
                {"id": v, "node": ctx.names[v], "value": report(value, ctx.fine)}
                for v, value in enumerate(values)
            ],
        }
    )


@operation("k_core", CATEGORY)
def k_core(store: GraphStore, k: int) -> ResponseEnvelope:
    """Vertices with out-coreness of at least ``k`` and the edges among them."""
    ctx = OperationContext.from_store(store)
    coreness = ctx.facade.coreness()
    kept = {v for v, core in enumerate(coreness) if core >= k}

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    for u, v in ctx.graph.edges:
        if u in kept and v in kept:
            builder.edge(u, v, 1)
            builder.vertex(u, 0.5)
            builder.vertex(v, 0.5)

    cores: List[Dict[str, Any]] = [
        {"id": v, "node": ctx.names[v]} for v in sorted(kept)
    ]
    return builder.build(
        {
            "algorithm": "K-Core Detection",
            "cores": cores,
            "k": k,
            "max_coreness": max(coreness) if coreness else 0,
        }
    )


@operation("triangle_count", CATEGORY)
def triangle_count(store: GraphStore) -> ResponseEnvelope:
    """Every triangle, numbered from 1, with its vertices and edges highlighted."""
    ctx = OperationContext.from_store(store)
    triangles = ctx.facade.triangles()

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    listed: List[Dict[str, Any]] = []
    for number, (a, b, c) in enumerate(triangles, start=1):
        for vertex in (a, b, c):
            builder.vertex(vertex, 0.5)
        for u, v in ((a, b), (b, c), (c, a)):
            # triangles ignore direction; key the edge the way it is stored
            if not ctx.graph.has_edge(u, v):
                u, v = v, u
            builder.edge(u, v, 1)
        listed.append(
            {
                "id": number,
                "node1": ctx.names[a],
                "node2": ctx.names[b],
                "node3": ctx.names[c],
            }
        )

    return builder.build({"algorithm": "Triangle Count", "triangles": listed})
