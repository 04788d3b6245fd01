"""Shortest paths, traversals, random walks and spanning trees."""

import logging
from collections import Counter
from typing import Any, Dict, List

from graphlens.encoding.envelope import EnvelopeBuilder, Mode, ResponseEnvelope
from graphlens.encoding.scaling import ratio_to_max, round_to
from graphlens.graph.store import GraphStore
from graphlens.operations.common import OperationContext, path_links, path_weight
from graphlens.operations.registry import operation

logger = logging.getLogger("graphlens.operations.paths")

CATEGORY = "paths"

ALGORITHM_LABELS = {
    "dijkstra": "Dijkstra",
    "bellman_ford": "Bellman-Ford",
}


def _source_to_target(
    store: GraphStore, src: int, tar: int, algorithm: str
) -> ResponseEnvelope:
    ctx = OperationContext.from_store(store)
    vpath, epath = ctx.facade.shortest_path(src, tar, algorithm)

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    links, total = path_links(ctx, vpath, epath, builder)
    builder.vertex(src, 1)
    builder.vertex(tar, 1)
    if not vpath:
        logger.info("No path from %s to %s", ctx.names[src], ctx.names[tar])

    data: Dict[str, Any] = {
        "algorithm": f"{ALGORITHM_LABELS[algorithm]} Single Path",
        "source": ctx.names[src],
        "target": ctx.names[tar],
        "weighted": ctx.weighted,
        "path": links,
    }
    if ctx.weighted:
        data["totalWeight"] = total
    return builder.build(data)


def _source_to_all(store: GraphStore, src: int, algorithm: str) -> ResponseEnvelope:
    ctx = OperationContext.from_store(store)
    results = ctx.facade.shortest_paths_from(src, algorithm)

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_ERROR)
    frequencies: Counter = Counter()
    paths: List[Dict[str, Any]] = []
    for vpath, epath in results:
        # unreachable targets and the source itself
        if not vpath or vpath[-1] == src:
            continue
        for previous, vertex in zip(vpath, vpath[1:]):
            builder.edge(previous, vertex, 1)
        frequencies.update(v for v in vpath if v != src)

        details: Dict[str, Any] = {
            "target": ctx.names[vpath[-1]],
            "path": [ctx.names[v] for v in vpath],
        }
        if ctx.weighted:
            details["weight"] = path_weight(ctx, epath)
        paths.append(details)

    for vertex, shade in ratio_to_max(frequencies).items():
        builder.vertex(vertex, shade)
    builder.vertex(src, 1)

    return builder.build(
        {
            "algorithm": f"{ALGORITHM_LABELS[algorithm]} Single Source",
            "source": ctx.names[src],
            "weighted": ctx.weighted,
            "paths": paths,
        }
    )


@operation("dijkstra_source_to_target", CATEGORY)
def dijkstra_source_to_target(store: GraphStore, src: int, tar: int) -> ResponseEnvelope:
    """Dijkstra shortest path between two vertices."""
    return _source_to_target(store, src, tar, "dijkstra")


@operation("dijkstra_source_to_all", CATEGORY)
def dijkstra_source_to_all(store: GraphStore, src: int) -> ResponseEnvelope:
    """Dijkstra shortest paths from one vertex to every reachable vertex."""
    return _source_to_all(store, src, "dijkstra")


@operation("bellman_ford_source_to_target", CATEGORY)
def bellman_ford_source_to_target(store: GraphStore, src: int, tar: int) -> ResponseEnvelope:
    """Bellman-Ford shortest path between two vertices."""
    return _source_to_target(store, src, tar, "bellman_ford")


@operation("bellman_ford_source_to_all", CATEGORY)
def bellman_ford_source_to_all(store: GraphStore, src: int) -> ResponseEnvelope:
    """Bellman-Ford shortest paths from one vertex to every reachable vertex."""
    return _source_to_all(store, src, "bellman_ford")


@operation("yens_algorithm", CATEGORY)
def yens_algorithm(store: GraphStore, src: int, tar: int, k: int) -> ResponseEnvelope:
    """Up to ``k`` shortest paths between two vertices (Yen)."""
    ctx = OperationContext.from_store(store)
    results = ctx.facade.k_shortest_paths(src, tar, k)

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    paths: List[Dict[str, Any]] = []
    for number, (vpath, epath) in enumerate(results, start=1):
        path_links(ctx, vpath, epath, builder)
        details: Dict[str, Any] = {
            "num": number,
            "path": [ctx.names[v] for v in vpath],
        }
        if ctx.weighted:
            details["weight"] = path_weight(ctx, epath)
        paths.append(details)
    builder.vertex(src, 1)
    builder.vertex(tar, 1)

    return builder.build(
        {
            "algorithm": "Yen's k Shortest Paths",
            "source": ctx.names[src],
            "target": ctx.names[tar],
            "k": k,
            "weighted": ctx.weighted,
            "paths": paths,
        }
    )


@operation("bfs", CATEGORY)
def bfs(store: GraphStore, src: int) -> ResponseEnvelope:
    """Breadth-first layers from ``src``; earlier layers are shaded darker."""
    ctx = OperationContext.from_store(store)
    order, layer_starts = ctx.facade.bfs(src)
    total = ctx.graph.vertex_count

    remaining: Dict[int, int] = {}
    layers: List[Dict[str, Any]] = []
    for index, (start, end) in enumerate(zip(layer_starts, layer_starts[1:])):
        members = order[start:end]
        for vertex in members:
            # vertices not yet reached when this layer starts
            remaining[vertex] = total - start
        layers.append({"layer": [ctx.names[v] for v in members], "index": index})

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_ERROR)
    for vertex, shade in ratio_to_max(remaining).items():
        builder.vertex(vertex, shade)

    return builder.build(
        {
            "algorithm": "Breadth-First Search",
            "source": ctx.names[src],
            "nodesFound": len(order),
            "layers": layers,
        }
    )


@operation("dfs", CATEGORY)
def dfs(store: GraphStore, src: int) -> ResponseEnvelope:
    """Depth-first preorder from ``src``, split into branches at each leaf.

    Earlier branches are shaded darker.
    """
    ctx = OperationContext.from_store(store)
    order, parents = ctx.facade.dfs(src)

    chunks: List[List[int]] = []
    current: List[int] = []
    for i, vertex in enumerate(order):
        current.append(vertex)
        is_leaf = i + 1 == len(order) or parents[i + 1] != vertex
        if is_leaf:
            chunks.append(current)
            current = []

    branch: Dict[int, int] = {}
    for number, chunk in enumerate(chunks):
        for vertex in chunk:
            branch[vertex] = len(chunks) - number + 1

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_ERROR)
    for vertex, shade in ratio_to_max(branch).items():
        builder.vertex(vertex, shade)

    return builder.build(
        {
            "algorithm": "Depth-First Search",
            "source": ctx.names[src],
            "nodesFound": len(order),
            "subtrees": [
                {"num": number, "tree": [ctx.names[v] for v in chunk]}
                for number, chunk in enumerate(chunks, start=1)
            ],
        }
    )


@operation("random_walk", CATEGORY)
def random_walk(store: GraphStore, start: int, steps: int) -> ResponseEnvelope:
    """Random walk along outgoing edges; vertices shaded by visit frequency."""
    ctx = OperationContext.from_store(store)
    walk, walked = ctx.facade.random_walk(start, steps)

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    frequencies: Counter = Counter()
    max_node, max_frequency = start, 0
    path: List[Dict[str, Any]] = []
    for step, vertex in enumerate(walk):
        frequencies[vertex] += 1
        if frequencies[vertex] > max_frequency:
            max_node, max_frequency = vertex, frequencies[vertex]
        if step == 0:
            continue
        previous = walk[step - 1]
        builder.edge(previous, vertex, 1)
        hop: Dict[str, Any] = {
            "step": step,
            "from": ctx.names[previous],
            "to": ctx.names[vertex],
        }
        if ctx.weighted:
            hop["weight"] = ctx.weight(walked[step - 1])
        path.append(hop)

    for vertex, shade in ratio_to_max(frequencies).items():
        builder.vertex(vertex, shade)

    return builder.build(
        {
            "algorithm": "Random Walk",
            "source": ctx.names[start],
            "steps": steps,
            "weighted": ctx.weighted,
            "maxFrequencyNode": ctx.names[max_node],
            "maxFrequency": max_frequency,
            "path": path,
        }
    )


@operation("min_spanning_tree", CATEGORY)
def min_spanning_tree(store: GraphStore) -> ResponseEnvelope:
    """Minimum spanning forest (weighted when weights exist)."""
    ctx = OperationContext.from_store(store)
    tree = ctx.facade.spanning_tree()

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_ERROR)
    edges: List[Dict[str, Any]] = []
    total = 0.0
    for number, eid in enumerate(tree, start=1):
        u, v = ctx.graph.edges[eid]
        builder.vertex(u, 0.5)
        builder.vertex(v, 0.5)
        builder.edge(u, v, 1)
        edge: Dict[str, Any] = {"num": number, "from": ctx.names[u], "to": ctx.names[v]}
        if ctx.weighted:
            edge["weight"] = ctx.weight(eid)
            total += ctx.weight(eid)
        edges.append(edge)

    data: Dict[str, Any] = {
        "algorithm": "Minimum Spanning Tree",
        "weighted": ctx.weighted,
        "maxEdges": ctx.graph.edge_count,
        "edges": edges,
    }
    if ctx.weighted:
        data["totalWeight"] = round_to(total, ctx.coarse)
    return builder.build(data)
