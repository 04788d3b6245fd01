"""Tests for the operation registry and parameter coercion."""

from __future__ import annotations

from typing import List

import pytest

from graphlens.encoding import ResponseEnvelope
from graphlens.errors import ValidationError
from graphlens.graph.store import GraphStore
from graphlens.operations import coerce_param, get_operation, list_operations, run_operation

EXPECTED = {
    "betweenness_centrality",
    "closeness_centrality",
    "degree_centrality",
    "eigenvector_centrality",
    "harmonic_centrality",
    "strength_centrality",
    "pagerank",
    "louvain",
    "leiden",
    "fast_greedy",
    "label_propagation",
    "strongly_connected_components",
    "weakly_connected_components",
    "local_clustering_coefficient",
    "k_core",
    "triangle_count",
    "dijkstra_source_to_target",
    "dijkstra_source_to_all",
    "bellman_ford_source_to_target",
    "bellman_ford_source_to_all",
    "yens_algorithm",
    "bfs",
    "dfs",
    "random_walk",
    "min_spanning_tree",
    "vertices_are_adjacent",
    "jaccard_similarity",
    "topological_sort",
    "diameter",
    "eulerian_path",
    "eulerian_circuit",
    "missing_edge_prediction",
    "missing_edge_prediction_default_values",
}


def test_all_operations_registered() -> None:
    """Importing the package registers every analysis."""
    assert {op.name for op in list_operations()} == EXPECTED


def test_operations_are_listed_by_name() -> None:
    names = [op.name for op in list_operations()]
    assert names == sorted(names)


def test_signature_and_description() -> None:
    """Signatures skip the store argument and show defaults."""
    op = get_operation("pagerank")
    assert op.signature() == "damping=0.85"
    assert op.description == "PageRank with the given damping factor."
    assert get_operation("yens_algorithm").signature() == "src, tar, k"
    assert op.category == "centrality"


def test_unknown_operation() -> None:
    with pytest.raises(ValidationError, match="Unknown algorithm 'sorting_hat'"):
        get_operation("sorting_hat")


@pytest.mark.parametrize(
    "value, annotation, expected",
    [
        ("3", int, 3),
        (" 4 ", int, 4),
        (5.0, int, 5),
        ("0.5", float, 0.5),
        ("yes", bool, True),
        ("false", bool, False),
        ("0, 2,5", List[int], [0, 2, 5]),
        ([1, "2"], List[int], [1, 2]),
        ("text", str, "text"),
    ],
)
def test_coerce_param(value, annotation, expected) -> None:
    """CLI strings are converted to the annotated type."""
    assert coerce_param("p", value, annotation) == expected


@pytest.mark.parametrize("value, annotation", [("x", int), (2.5, int), ("a,b", List[int])])
def test_coerce_param_rejects(value, annotation) -> None:
    with pytest.raises(ValidationError, match="Invalid value for parameter 'p'"):
        coerce_param("p", value, annotation)


def test_run_operation_coerces(path_store: GraphStore) -> None:
    """String parameters reach the operation as ints."""
    envelope = run_operation(path_store, "dijkstra_source_to_target", {"src": "0", "tar": "2"})
    assert isinstance(envelope, ResponseEnvelope)
    assert envelope.data["target"] == "C"


def test_missing_parameter(path_store: GraphStore) -> None:
    with pytest.raises(ValidationError, match="requires parameter 'tar'"):
        run_operation(path_store, "dijkstra_source_to_target", {"src": 0})


def test_unknown_parameter(path_store: GraphStore) -> None:
    with pytest.raises(ValidationError, match="Unknown parameter"):
        run_operation(path_store, "degree_centrality", {"normalized": "true"})


def test_no_graph_loaded(store: GraphStore) -> None:
    """Operations need an installed graph."""
    with pytest.raises(ValidationError, match="No graph loaded"):
        run_operation(store, "degree_centrality")
