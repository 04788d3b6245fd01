"""Tests for GraphStore installation and replacement."""

from __future__ import annotations

import pytest

from graphlens.errors import ValidationError
from graphlens.graph.installation import GraphInstallation
from graphlens.graph.store import GraphStore


def test_empty_store_has_no_current_graph(store: GraphStore) -> None:
    """Reading the current graph before any install fails."""
    assert not store.is_loaded()
    with pytest.raises(ValidationError, match="No graph loaded"):
        _ = store.current


def test_install_three_vertex_path(store: GraphStore) -> None:
    """A-B-C undirected without weights gives 3 vertices and 2 edges."""
    graph = store.install(["A", "B", "C"], [(0, 1), (1, 2)])

    assert store.current is graph
    assert graph.vertex_count == 3
    assert graph.edge_count == 2
    assert not graph.has_weights()
    assert not graph.directed


def test_install_replaces_previous_graph(path_store: GraphStore) -> None:
    """A second install replaces the first graph entirely."""
    path_store.install(["X", "Y"], [(0, 1)], weights=[4.0], directed=True)

    graph = path_store.current
    assert graph.vertex_count == 2
    assert graph.directed
    assert graph.weights == [4.0]
    assert graph.display_names() == ["X", "Y"]


def test_failed_install_keeps_previous_graph(path_store: GraphStore) -> None:
    """A payload that fails to build never reaches the store."""
    before = path_store.current
    with pytest.raises(ValidationError):
        path_store.install(["A"], [(0, 5)])
    assert path_store.current is before


def test_release_drops_graph(path_store: GraphStore) -> None:
    """release() leaves the store empty."""
    path_store.release()
    assert not path_store.is_loaded()


def test_installation_requires_vertices() -> None:
    """An empty vertex set is a ValidationError naming the source."""
    with pytest.raises(ValidationError, match="No nodes found in nodes.csv"):
        GraphInstallation(names=[], edges=[], weights=None, directed=False, source="nodes.csv")


def test_installation_round_trip_counts(store: GraphStore) -> None:
    """describe() reproduces vertex count, edge count and directedness."""
    payload = GraphInstallation(
        names=None,
        edges=[(0, 1), (2, 3), (3, 0)],
        weights=None,
        directed=True,
        vertex_count=4,
    )
    store.install_payload(payload)
    described = store.describe()

    assert len(described["nodes"]) == 4
    assert len(described["edges"]) == 3
    assert described["directed"] is True
    assert all(edge["source"] < 4 and edge["target"] < 4 for edge in described["edges"])
