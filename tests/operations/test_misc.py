"""Tests for adjacency, similarity, ordering, diameter, Eulerian walks and prediction."""

from __future__ import annotations

import pytest

from graphlens.errors import ValidationError
from graphlens.graph.store import GraphStore
from graphlens.operations import run_operation
from graphlens.operations.misc import default_prediction_values


def test_adjacent_vertices(path_store: GraphStore) -> None:
    """Adjacent endpoints and their edge are highlighted."""
    envelope = run_operation(path_store, "vertices_are_adjacent", {"src": 1, "tar": 0})

    assert envelope.data["adjacent"] is True
    assert envelope.color_map == {1: 1, 0: 1, "1-0": 1}
    assert "weight" not in envelope.data


def test_non_adjacent_vertices(path_store: GraphStore) -> None:
    envelope = run_operation(path_store, "vertices_are_adjacent", {"src": 0, "tar": 2})
    assert envelope.data["adjacent"] is False
    assert envelope.color_map == {0: 1, 2: 1}


def test_adjacency_weight() -> None:
    store = GraphStore()
    store.install(["A", "B"], [(0, 1)], weights=[6.5])
    envelope = run_operation(store, "vertices_are_adjacent", {"src": 0, "tar": 1})
    assert envelope.data["weight"] == 6.5


def test_jaccard_similarity(path_store: GraphStore) -> None:
    """The path ends share their only neighbour."""
    envelope = run_operation(path_store, "jaccard_similarity", {"vertices": "0,2"})

    assert envelope.data["similarityMatrix"] == [[1.0, 1.0], [1.0, 1.0]]
    assert envelope.data["maxSimilarity"] == {"node1": "A", "node2": "C", "similarity": 1.0}
    assert envelope.color_map == {0: 1, 2: 1}


def test_jaccard_needs_vertices(path_store: GraphStore) -> None:
    with pytest.raises(ValidationError, match="at least one vertex"):
        run_operation(path_store, "jaccard_similarity", {"vertices": ""})


def test_topological_sort(dag_store: GraphStore) -> None:
    """Earlier positions are shaded darker."""
    envelope = run_operation(dag_store, "topological_sort")

    assert [entry["node"] for entry in envelope.data["order"]] == ["A", "B", "C"]
    assert envelope.color_map[0] == 1.0
    assert envelope.color_map[2] == pytest.approx(1 / 3)


def test_topological_sort_rejects_cycles() -> None:
    store = GraphStore()
    store.install(["A", "B"], [(0, 1), (1, 0)], directed=True)

    with pytest.raises(ValidationError) as excinfo:
        run_operation(store, "topological_sort")
    assert str(excinfo.value) == (
        "This graph is not a Directed Acyclic Graph (DAG) and cannot be topologically sorted."
    )


def test_diameter(path_store: GraphStore) -> None:
    """The diameter of a three-vertex path runs end to end."""
    envelope = run_operation(path_store, "diameter")

    assert envelope.data["diameter"] == 2.0
    assert {envelope.data["source"], envelope.data["target"]} == {"A", "C"}
    assert len(envelope.data["path"]) == 2


def test_diameter_uses_lighter_parallel_edge() -> None:
    """Between parallel edges the diameter follows the lighter one."""
    store = GraphStore()
    store.install(["A", "B"], [(0, 1), (0, 1)], weights=[5.0, 1.0])

    envelope = run_operation(store, "diameter")

    assert envelope.data["diameter"] == 1.0
    assert envelope.data["path"][0]["weight"] == 1.0


def test_eulerian_path(path_store: GraphStore) -> None:
    """A path graph is its own Eulerian path."""
    envelope = run_operation(path_store, "eulerian_path")

    assert {envelope.data["start"], envelope.data["end"]} == {"A", "C"}
    assert len(envelope.data["path"]) == 2
    assert envelope.color_map[0] == 1 and envelope.color_map[2] == 1


def test_eulerian_path_missing() -> None:
    """A star with three leaves has too many odd vertices."""
    store = GraphStore()
    store.install(["H", "X", "Y", "Z"], [(0, 1), (0, 2), (0, 3)])

    with pytest.raises(ValidationError, match="does not have an Eulerian path"):
        run_operation(store, "eulerian_path")


def test_eulerian_circuit(triangle_tail_store: GraphStore) -> None:
    """A triangle is a circuit; with a tail it only has a path."""
    with pytest.raises(ValidationError) as excinfo:
        run_operation(triangle_tail_store, "eulerian_circuit")
    assert str(excinfo.value) == (
        "This graph does not have an Eulerian circuit BUT it has an Eulerian path."
    )

    store = GraphStore()
    store.install(["A", "B", "C"], [(0, 1), (1, 2), (2, 0)])
    envelope = run_operation(store, "eulerian_circuit")
    assert len(envelope.data["path"]) == 3
    assert envelope.data["algorithm"] == "Eulerian Circuit"


def test_eulerian_on_edgeless_graph() -> None:
    store = GraphStore()
    store.install(["A"], [])
    with pytest.raises(ValidationError, match="does not have an Eulerian circuit"):
        run_operation(store, "eulerian_circuit")


@pytest.mark.parametrize(
    "vertices, edges, expected",
    [
        (10, 11, {"graphSize": "small", "numSamples": 500, "numBins": 10}),
        (100, 5000, {"graphSize": "medium", "numSamples": 1050, "numBins": 25}),
        (2000, 10000, {"graphSize": "large", "numSamples": 5200, "numBins": 100}),
    ],
)
def test_prediction_defaults(vertices: int, edges: int, expected: dict) -> None:
    """Sample and bin counts grow with the graph."""
    assert default_prediction_values(vertices, edges) == expected


def test_prediction_defaults_operation(path_store: GraphStore) -> None:
    result = run_operation(path_store, "missing_edge_prediction_default_values")
    assert result["graphSize"] == "small"


def test_missing_edge_prediction(path_store: GraphStore) -> None:
    """The open triad closes with full confidence."""
    envelope = run_operation(path_store, "missing_edge_prediction")
    payload = envelope.to_dict()

    assert payload["data"]["predictedEdges"] == [
        {"from": "A", "to": "C", "probability": "100.000%"}
    ]
    assert payload["edges"] == [{"source": 0, "target": 2}]
    assert payload["colorMap"] == {0: 0.5, 2: 0.5, "0-2": 0}


def test_prediction_with_nothing_to_add() -> None:
    """A complete graph predicts nothing but still lists edges."""
    store = GraphStore()
    store.install(["A", "B", "C"], [(0, 1), (1, 2), (0, 2)])

    payload = run_operation(store, "missing_edge_prediction", {"num_samples": 10}).to_dict()
    assert payload["edges"] == []
    assert payload["data"]["predictedEdges"] == []


def test_prediction_threshold_from_config(triangle_tail_store: GraphStore) -> None:
    """Scores below the configured threshold are dropped."""
    # A-D and B-D share only C: Jaccard 1/2
    triangle_tail_store.config.prediction.threshold = 0.6
    envelope = run_operation(triangle_tail_store, "missing_edge_prediction")
    assert envelope.data["predictedEdges"] == []

    triangle_tail_store.config.prediction.threshold = 0.5
    envelope = run_operation(triangle_tail_store, "missing_edge_prediction", {"num_bins": 10})
    assert [e["to"] for e in envelope.data["predictedEdges"]] == ["D", "D"]
    assert envelope.data["predictedEdges"][0]["probability"] == "50.000%"
