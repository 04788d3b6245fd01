"""Shared fixtures for graphlens tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from graphlens.graph.store import GraphStore


@pytest.fixture
def store() -> GraphStore:
    """Empty graph store with default configuration."""
    return GraphStore()


@pytest.fixture
def path_store() -> GraphStore:
    """Undirected path A - B - C."""
    store = GraphStore()
    store.install(["A", "B", "C"], [(0, 1), (1, 2)])
    return store


@pytest.fixture
def write_file(tmp_path: Path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def triangle_tail_store() -> GraphStore:
    """Triangle A-B-C with a pendant vertex D hanging off C."""
    store = GraphStore()
    store.install(["A", "B", "C", "D"], [(0, 1), (1, 2), (0, 2), (2, 3)])
    return store


@pytest.fixture
def two_triangles_store() -> GraphStore:
    """Two disjoint triangles A-B-C and D-E-F."""
    store = GraphStore()
    store.install(
        ["A", "B", "C", "D", "E", "F"],
        [(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5)],
    )
    return store


@pytest.fixture
def dag_store() -> GraphStore:
    """Directed chain A -> B -> C."""
    store = GraphStore()
    store.install(["A", "B", "C"], [(0, 1), (1, 2)], directed=True)
    return store
