"""Tests for the node/edge delimited file adapter."""

from __future__ import annotations

import pytest

from graphlens.adapters import CsvPairAdapter, load_graph
from graphlens.errors import FormatError, ResourceError, ValidationError
from graphlens.graph.store import GraphStore


def test_parses_names_and_edges(write_file) -> None:
    """Node names become vertex IDs in first-seen order."""
    nodes = write_file("nodes.csv", "nodes\nA\nB\nC\n")
    edges = write_file("edges.csv", "source,target\nA,B\nB,C\n")

    payload = CsvPairAdapter().parse(nodes=nodes, edges=edges)

    assert payload.names == ["A", "B", "C"]
    assert payload.edges == [(0, 1), (1, 2)]
    assert payload.weights is None
    assert payload.directed is False


def test_capitalised_header_and_blank_lines(write_file) -> None:
    """'Nodes' is accepted and leading blank lines are skipped."""
    nodes = write_file("nodes.csv", "\n  Nodes  \n A , extra\n\nB\n")
    edges = write_file("edges.csv", "source,target\nA,B\n")

    payload = CsvPairAdapter().parse(nodes=nodes, edges=edges, directed=True)

    assert payload.names == ["A", "B"]
    assert payload.directed is True


def test_singular_header_is_a_format_error(write_file) -> None:
    """'Node' is not a valid node header."""
    nodes = write_file("nodes.csv", "Node\nA\n")
    edges = write_file("edges.csv", "source,target\n")
    with pytest.raises(FormatError):
        CsvPairAdapter().parse(nodes=nodes, edges=edges)


def test_bad_edge_header(write_file) -> None:
    """The edge header must start with source,target exactly."""
    nodes = write_file("nodes.csv", "nodes\nA\n")
    edges = write_file("edges.csv", "from,to\nA,A\n")
    with pytest.raises(FormatError):
        CsvPairAdapter().parse(nodes=nodes, edges=edges)


def test_duplicate_names_collapse_to_first_id(write_file) -> None:
    """Distinct names define the vertex count."""
    nodes = write_file("nodes.csv", "nodes\nA\nB\nA\n")
    edges = write_file("edges.csv", "source,target\nA,B\n")

    payload = CsvPairAdapter().parse(nodes=nodes, edges=edges)
    assert payload.vertex_count == 2


def test_weight_column_enables_weights(write_file) -> None:
    """A weight header turns on weights; missing values default to 1."""
    nodes = write_file("nodes.csv", "nodes\nA\nB\nC\n")
    edges = write_file("edges.csv", "source,target,weight\nA,B,2.5\nB,C\n")

    payload = CsvPairAdapter().parse(nodes=nodes, edges=edges)
    assert payload.weights == [2.5, 1.0]


def test_short_rows_are_skipped(write_file) -> None:
    """Rows with fewer than two fields are ignored."""
    nodes = write_file("nodes.csv", "nodes\nA\nB\n")
    edges = write_file("edges.csv", "source,target\nA\n\nA,B\n")

    payload = CsvPairAdapter().parse(nodes=nodes, edges=edges)
    assert payload.edges == [(0, 1)]


def test_non_numeric_weight(write_file) -> None:
    """A weight that is not a number is a ValidationError."""
    nodes = write_file("nodes.csv", "nodes\nA\nB\n")
    edges = write_file("edges.csv", "source,target,weight\nA,B,heavy\n")
    with pytest.raises(ValidationError, match="Invalid weight"):
        CsvPairAdapter().parse(nodes=nodes, edges=edges)


def test_unknown_endpoint_leaves_previous_graph(write_file, path_store: GraphStore) -> None:
    """A failing load does not touch the installed graph."""
    before = path_store.current
    nodes = write_file("nodes.csv", "nodes\nA\nB\n")
    edges = write_file("edges.csv", "source,target\nA,Z\n")

    with pytest.raises(ValidationError, match="Invalid node in edge: A -> Z"):
        load_graph(path_store, "csv", nodes=nodes, edges=edges)

    assert path_store.current is before
    assert path_store.current.vertex_count == 3


def test_missing_file_is_a_resource_error(tmp_path, write_file) -> None:
    """Unopenable input raises ResourceError."""
    edges = write_file("edges.csv", "source,target\n")
    with pytest.raises(ResourceError):
        CsvPairAdapter().parse(nodes=tmp_path / "missing.csv", edges=edges)


def test_header_only_node_file(write_file) -> None:
    """A node file without names yields no vertices."""
    nodes = write_file("nodes.csv", "nodes\n")
    edges = write_file("edges.csv", "source,target\n")
    with pytest.raises(ValidationError, match="No nodes found"):
        CsvPairAdapter().parse(nodes=nodes, edges=edges)
