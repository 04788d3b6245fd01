"""Adjacency, similarity, ordering, diameter, Eulerian walks and link prediction."""

import logging
from typing import Any, Dict, List, Tuple

from graphlens.encoding.envelope import EnvelopeBuilder, Mode, ResponseEnvelope
from graphlens.encoding.scaling import ratio_to_max, report
from graphlens.errors import ValidationError
from graphlens.graph.store import GraphStore
from graphlens.operations.common import OperationContext, path_links
from graphlens.operations.registry import operation

logger = logging.getLogger("graphlens.operations.misc")

CATEGORY = "misc"

# vertex-count limits of the missing-edge size classes
SMALL_GRAPH = 100
MEDIUM_GRAPH = 1000


@operation("vertices_are_adjacent", CATEGORY)
def vertices_are_adjacent(store: GraphStore, src: int, tar: int) -> ResponseEnvelope:
    """Whether an edge joins ``src`` to ``tar``."""
    ctx = OperationContext.from_store(store)
    adjacent = ctx.facade.are_adjacent(src, tar)

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    builder.vertex(src, 1)
    builder.vertex(tar, 1)
    data: Dict[str, Any] = {
        "algorithm": "Check Adjacency",
        "source": ctx.names[src],
        "target": ctx.names[tar],
        "adjacent": adjacent,
    }
    if adjacent:
        builder.edge(src, tar, 1)
        if ctx.weighted:
            data["weight"] = ctx.weight(ctx.graph.edge_id(src, tar))
    return builder.build(data)


@operation("jaccard_similarity", CATEGORY)
def jaccard_similarity(store: GraphStore, vertices: List[int]) -> ResponseEnvelope:
    """Pairwise Jaccard similarity of out-neighbourhoods."""
    ctx = OperationContext.from_store(store)
    if not vertices:
        raise ValidationError("Jaccard similarity needs at least one vertex")
    matrix = ctx.facade.jaccard(vertices)

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    for vertex in vertices:
        builder.vertex(vertex, 1)

    rows: List[List[float]] = []
    best: Dict[str, Any] = {}
    best_value = -1.0
    for i, row in enumerate(matrix):
        rounded = [report(value, ctx.coarse) for value in row]
        rows.append(rounded)
        for j, similarity in enumerate(rounded):
            if i != j and similarity is not None and similarity > best_value:
                best_value = similarity
                best = {
                    "node1": ctx.names[vertices[i]],
                    "node2": ctx.names[vertices[j]],
                    "similarity": similarity,
                }

    return builder.build(
        {
            "algorithm": "Jaccard Similarity",
            "nodes": [ctx.names[v] for v in vertices],
            "similarityMatrix": rows,
            "maxSimilarity": best,
        }
    )


@operation("topological_sort", CATEGORY)
def topological_sort(store: GraphStore) -> ResponseEnvelope:
    """Topological order of a DAG; earlier vertices are shaded darker."""
    ctx = OperationContext.from_store(store)
    order = ctx.facade.topological_order()

    rank = {vertex: len(order) - position for position, vertex in enumerate(order)}
    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    for vertex, shade in ratio_to_max(rank).items():
        builder.vertex(vertex, shade)

    return builder.build(
        {
            "algorithm": "Topological Sort",
            "order": [{"id": v, "node": ctx.names[v]} for v in order],
        }
    )


@operation("diameter", CATEGORY)
def diameter(store: GraphStore) -> ResponseEnvelope:
    """Longest shortest path of the graph."""
    ctx = OperationContext.from_store(store)
    vpath, epath, length = ctx.facade.diameter()
    if not vpath:
        raise ValidationError("The diameter is undefined for this graph")

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    links, _total = path_links(ctx, vpath, epath, builder)
    source, target = vpath[0], vpath[-1]
    builder.vertex(source, 1)
    builder.vertex(target, 1)

    return builder.build(
        {
            "algorithm": "Diameter",
            "source": ctx.names[source],
            "target": ctx.names[target],
            "weighted": ctx.weighted,
            "diameter": report(length, ctx.coarse),
            "path": links,
        }
    )


def _walk_builder(
    ctx: OperationContext, algorithm: str, walk: List[Tuple[int, int, int]]
) -> Tuple[EnvelopeBuilder, Dict[str, Any]]:
    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    path = []
    for u, v, _eid in walk:
        builder.edge(u, v, 1)
        path.append({"from": ctx.names[u], "to": ctx.names[v]})
    return builder, {"algorithm": algorithm, "path": path}


@operation("eulerian_path", CATEGORY)
def eulerian_path(store: GraphStore) -> ResponseEnvelope:
    """A walk using every edge exactly once."""
    ctx = OperationContext.from_store(store)
    walk = ctx.facade.eulerian_path()
    builder, data = _walk_builder(ctx, "Eulerian Path", walk)

    start, end = walk[0][0], walk[-1][1]
    builder.vertex(start, 1)
    builder.vertex(end, 1)
    data["start"] = ctx.names[start]
    data["end"] = ctx.names[end]
    return builder.build(data)


@operation("eulerian_circuit", CATEGORY)
def eulerian_circuit(store: GraphStore) -> ResponseEnvelope:
    """A closed walk using every edge exactly once."""
    ctx = OperationContext.from_store(store)
    builder, data = _walk_builder(ctx, "Eulerian Circuit", ctx.facade.eulerian_circuit())
    return builder.build(data)


def default_prediction_values(vertex_count: int, edge_count: int) -> Dict[str, Any]:
    """Sample and bin counts scaled to the graph size."""
    if vertex_count < SMALL_GRAPH:
        return {"graphSize": "small", "numSamples": 500, "numBins": 10}
    if vertex_count <= MEDIUM_GRAPH:
        return {
            "graphSize": "medium",
            "numSamples": 1000 + edge_count // 100,
            "numBins": 25,
        }
    return {
        "graphSize": "large",
        "numSamples": 5000 + edge_count // 50,
        "numBins": 50 + edge_count // 200,
    }


@operation("missing_edge_prediction_default_values", CATEGORY)
def missing_edge_prediction_default_values(store: GraphStore) -> Dict[str, Any]:
    """Default ``num_samples``/``num_bins`` for the current graph."""
    graph = store.current
    return default_prediction_values(graph.vertex_count, graph.edge_count)


@operation("missing_edge_prediction", CATEGORY)
def missing_edge_prediction(
    store: GraphStore, num_samples: int = 0, num_bins: int = 0
) -> ResponseEnvelope:
    """Predict likely missing edges from neighbourhood overlap.

    Zero ``num_samples``/``num_bins`` take the size-based defaults.
    """
    ctx = OperationContext.from_store(store)
    defaults = default_prediction_values(ctx.graph.vertex_count, ctx.graph.edge_count)
    num_samples = num_samples or defaults["numSamples"]
    num_bins = num_bins or defaults["numBins"]
    threshold = store.config.prediction.threshold

    scored = ctx.facade.predict_missing_edges(
        num_samples, num_bins, seed=store.config.generator.seed
    )

    builder = EnvelopeBuilder(ctx.graph, Mode.SHADE_DEFAULT)
    predicted: List[Dict[str, Any]] = []
    for u, v, probability in scored:
        # scores arrive sorted, highest first
        if probability < threshold:
            break
        builder.vertex(u, 0.5)
        builder.vertex(v, 0.5)
        builder.predicted_edge(u, v, 0)
        predicted.append(
            {
                "from": ctx.names[u],
                "to": ctx.names[v],
                "probability": f"{probability * 100:.3f}%",
            }
        )
    logger.info("Predicted %d missing edges (threshold %s)", len(predicted), threshold)

    envelope = builder.build(
        {"algorithm": "Missing Edge Prediction", "predictedEdges": predicted}
    )
    if envelope.edges is None:
        envelope.edges = []
    return envelope
