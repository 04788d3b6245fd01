"""Tests for graph export."""

from __future__ import annotations

import json
from pathlib import Path

import networkx as nx
import pytest

from graphlens.errors import ResourceError
from graphlens.export import EXPORTERS, export_graphml, export_json
from graphlens.graph.store import GraphStore


@pytest.fixture
def weighted_store() -> GraphStore:
    store = GraphStore()
    store.install(["A", "B", "C"], [(0, 1), (1, 2)], weights=[1.5, 2.0], directed=True)
    return store


def test_json_node_link(weighted_store: GraphStore, tmp_path: Path) -> None:
    """Node-link JSON keeps names, weights and direction."""
    output = tmp_path / "nested" / "graph.json"
    export_json(weighted_store.current, output)

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["directed"] is True
    assert [node["name"] for node in data["nodes"]] == ["A", "B", "C"]
    assert [edge["weight"] for edge in data["edges"]] == [1.5, 2.0]


def test_graphml_round_trip(weighted_store: GraphStore, tmp_path: Path) -> None:
    """GraphML can be read back by networkx."""
    output = tmp_path / "graph.graphml"
    export_graphml(weighted_store.current, output)

    graph = nx.read_graphml(output)
    assert graph.number_of_nodes() == 3
    assert graph.number_of_edges() == 2
    assert graph.is_directed()


def test_exporters_registered() -> None:
    assert set(EXPORTERS) == {"json", "graphml"}


def test_unwritable_target(path_store: GraphStore, tmp_path: Path) -> None:
    """Writing below a regular file raises ResourceError."""
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(ResourceError):
        export_json(path_store.current, blocker / "graph.json")
