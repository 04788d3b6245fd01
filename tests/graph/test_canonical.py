"""Tests for CanonicalGraph structure, naming and views."""

from __future__ import annotations

import pytest

from graphlens.errors import ValidationError
from graphlens.graph.attributes import AttributeKind
from graphlens.graph.canonical import CanonicalGraph


def test_edges_keep_insertion_order_and_ids() -> None:
    """Edge IDs are positions in the edge list."""
    graph = CanonicalGraph(3, [(0, 1), (1, 2)])
    assert graph.edge_count == 2
    assert graph.add_edge(2, 0) == 2
    assert graph.edges == [(0, 1), (1, 2), (2, 0)]


def test_out_of_range_endpoint_is_rejected() -> None:
    """Every endpoint must be below the vertex count."""
    graph = CanonicalGraph(2)
    with pytest.raises(ValidationError):
        graph.add_edge(0, 2)
    with pytest.raises(ValidationError):
        graph.add_edge(-1, 0)


def test_absent_weights_differ_from_zero_weights() -> None:
    """An all-zero weight vector still counts as weighted."""
    assert not CanonicalGraph(2, [(0, 1)]).has_weights()
    assert CanonicalGraph(2, [(0, 1)], weights=[0.0]).has_weights()


def test_weighted_graph_defaults_new_edge_weight_to_one() -> None:
    """Edges added without a weight get 1 on weighted graphs."""
    graph = CanonicalGraph(2, [], weights=[])
    graph.add_edge(0, 1)
    assert graph.weights == [1.0]


def test_weight_on_unweighted_graph_is_rejected() -> None:
    """A weight cannot be attached when no weight vector exists."""
    graph = CanonicalGraph(2)
    with pytest.raises(ValidationError):
        graph.add_edge(0, 1, 3.0)


def test_weight_vector_length_is_checked() -> None:
    """Weights must be parallel to edges."""
    with pytest.raises(ValidationError):
        CanonicalGraph(2, [(0, 1)], weights=[1.0, 2.0])


def test_edge_lookup_respects_directedness() -> None:
    """Undirected graphs match either orientation, directed ones only the stored one."""
    undirected = CanonicalGraph(2, [(0, 1)])
    directed = CanonicalGraph(2, [(0, 1)], directed=True)

    assert undirected.has_edge(1, 0)
    assert directed.has_edge(0, 1)
    assert not directed.has_edge(1, 0)
    assert undirected.edge_id(0, 1) == 0


def test_lookup_name_probes_name_then_label_then_id() -> None:
    """Display names fall back from name to label to id to the vertex ID."""
    graph = CanonicalGraph(2)
    assert graph.lookup_name(1) == "1"

    graph.vertex_attributes.set_column("id", [10, 11], AttributeKind.NUMERIC)
    assert graph.lookup_name(1) == "11"

    graph.vertex_attributes.set_column("label", ["ten", None], AttributeKind.STRING)
    assert graph.lookup_name(0) == "ten"
    assert graph.lookup_name(1) == "1"

    graph.vertex_attributes.set_column("name", ["Ten", "Eleven"], AttributeKind.STRING)
    assert graph.display_names() == ["Ten", "Eleven"]


def test_add_vertex_records_attributes() -> None:
    """New vertices extend the attribute table."""
    graph = CanonicalGraph(1)
    vertex = graph.add_vertex(name="Oslo", table_name="City", attributes={"size": 3})

    assert vertex == 1
    assert graph.vertex_count == 2
    assert graph.lookup_name(1) == "Oslo"
    assert graph.vertex_attributes.get("tableName", 1) == "City"
    assert graph.vertex_attributes.row(1) == {"size": 3.0}


def test_describe_payload() -> None:
    """describe() lists nodes with names and edges with endpoints."""
    graph = CanonicalGraph(2, [(0, 1)], directed=True)
    graph.vertex_attributes.set_column("name", ["A", "B"], AttributeKind.STRING)

    assert graph.describe() == {
        "nodes": [{"id": 0, "name": "A"}, {"id": 1, "name": "B"}],
        "edges": [{"source": 0, "target": 1}],
        "directed": True,
    }


def test_to_networkx_keeps_parallel_edges_and_weights() -> None:
    """The networkx view is a multigraph keyed by edge ID."""
    graph = CanonicalGraph(2, [(0, 1), (0, 1)], weights=[2.0, 3.0])
    nx_graph = graph.to_networkx()

    assert nx_graph.number_of_edges() == 2
    assert nx_graph.edges[0, 1, 1]["weight"] == 3.0
    assert not nx_graph.is_directed()
