"""Synthetic graph sources: the G(n, p) generator and the demo graph."""

import logging
import random
from typing import List, Optional, Tuple

import networkx as nx

from graphlens.adapters.base import BaseAdapter
from graphlens.errors import ValidationError
from graphlens.graph.installation import GraphInstallation

logger = logging.getLogger("graphlens.adapters.generator")

DEMO_CITIES = [
    "London",
    "Paris",
    "Berlin",
    "Rome",
    "Madrid",
    "Athens",
    "Amsterdam",
    "Brussels",
    "Lisbon",
    "Prague",
]

DEMO_EDGES: List[Tuple[int, int]] = [
    (0, 1),
    (0, 6),
    (1, 7),
    (1, 4),
    (1, 3),
    (1, 2),
    (2, 6),
    (2, 9),
    (4, 8),
    (5, 9),
    (6, 7),
]


class RandomGraphAdapter(BaseAdapter):
    """Erdos-Renyi G(n, p) generator with random integer weights."""

    NAME = "random"
    DESCRIPTION = "Random G(n, p) graph with integer weights"

    def parse(
        self,
        n: int,
        p: float,
        directed: bool = False,
        seed: Optional[int] = None,
    ) -> GraphInstallation:
        """Generate a graph.

        Args:
            n: Number of vertices, at least 1.
            p: Edge probability in ``[0, 1]``.
            directed: Generate a directed graph.
            seed: RNG seed; falls back to ``generator.seed`` from the config.

        Returns:
            GraphInstallation with vertex names ``"0".."n-1"``.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise ValidationError(f"Number of nodes must be a positive integer, got {n!r}")
        if isinstance(p, bool) or not isinstance(p, (int, float)) or not 0.0 <= p <= 1.0:
            raise ValidationError(f"Edge probability must be between 0 and 1, got {p!r}")

        settings = self.config.generator
        if seed is None:
            seed = settings.seed
        rng = random.Random(seed)

        graph = nx.gnp_random_graph(n, p, seed=rng, directed=directed)
        edges = [(int(u), int(v)) for u, v in graph.edges()]
        weights = [
            float(rng.randint(settings.min_weight, settings.max_weight)) for _ in edges
        ]

        logger.info(
            "Generated random graph: n=%d p=%s directed=%s -> %d edges",
            n,
            p,
            directed,
            len(edges),
        )
        return GraphInstallation(
            names=[str(v) for v in range(n)],
            edges=edges,
            weights=weights,
            directed=directed,
            source=f"G({n}, {p})",
        )


class DemoAdapter(BaseAdapter):
    """Ten European capitals, the graph shown before anything is imported."""

    NAME = "demo"
    DESCRIPTION = "Ten-city undirected starter graph"

    def parse(self) -> GraphInstallation:
        return GraphInstallation(
            names=list(DEMO_CITIES),
            edges=list(DEMO_EDGES),
            weights=None,
            directed=False,
            source="demo",
        )
