"""Thin call-through to the graph-algorithms libraries.

python-igraph runs almost everything; networkx covers the Eulerian
family and link scoring. Methods return raw results (vectors, membership
lists, vertex/edge paths); turning them into envelopes is the job of
``graphlens.operations``.
"""

from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

import igraph as ig
import networkx as nx

from graphlens.errors import CollaboratorError, ValidationError
from graphlens.graph.canonical import CanonicalGraph

logger = logging.getLogger("graphlens.algorithms.facade")

# (vertex path, edge path)
PathPair = Tuple[List[int], List[int]]


class AlgorithmsFacade:
    """Runs algorithms against one CanonicalGraph.

    The igraph graph is built on first use and reused for the lifetime of
    the facade, so create one facade per request.
    """

    def __init__(self, graph: CanonicalGraph) -> None:
        self.graph = graph
        self._native: Optional[ig.Graph] = None

    # ------------------------------------------------------------------ #
    # Plumbing
    # ------------------------------------------------------------------ #
    @property
    def native(self) -> ig.Graph:
        """igraph view of the canonical graph (same vertex and edge IDs)."""
        if self._native is None:
            self._native = ig.Graph(
                n=self.graph.vertex_count,
                edges=list(self.graph.edges),
                directed=self.graph.directed,
            )
            logger.debug("Built igraph view: %s", self.graph)
        return self._native

    @property
    def weights(self) -> Optional[List[float]]:
        return list(self.graph.weights) if self.graph.has_weights() else None

    def require_undirected(self, algorithm: str) -> None:
        if self.graph.directed:
            raise ValidationError(
                f"The {algorithm} algorithm does not support directed graphs"
            )

    def require_directed(self, algorithm: str) -> None:
        if not self.graph.directed:
            raise ValidationError(
                f"The {algorithm} algorithm does not support undirected graphs"
            )

    @contextmanager
    def _collaborator(self, algorithm: str) -> Iterator[None]:
        """Translate library failures into CollaboratorError."""
        logger.debug("Running %s on %s", algorithm, self.graph)
        try:
            yield
        except ig.InternalError as exc:
            raise CollaboratorError(f"{algorithm} failed: {exc}") from exc
        except nx.NetworkXException as exc:
            raise CollaboratorError(f"{algorithm} failed: {exc}") from exc

    def _vertices(self, *vertices: int) -> None:
        for vertex in vertices:
            self.graph.check_vertex(vertex)

    # ------------------------------------------------------------------ #
    # Centrality
    # ------------------------------------------------------------------ #
    def betweenness(self) -> List[float]:
        with self._collaborator("Betweenness Centrality"):
            return self.native.betweenness(directed=True, weights=self.weights)

    def closeness(self) -> List[float]:
        # unweighted, NaN for vertices that reach nothing
        with self._collaborator("Closeness Centrality"):
            return self.native.closeness(mode="out", weights=None, normalized=True)

    def degree(self) -> List[int]:
        with self._collaborator("Degree Centrality"):
            return self.native.degree(mode="out", loops=False)

    def eigenvector(self) -> Tuple[List[float], float]:
        """Eigenvector centralities and the dominant eigenvalue."""
        with self._collaborator("Eigenvector Centrality"):
            values, eigenvalue = self.native.eigenvector_centrality(
                directed=True, weights=self.weights, return_eigenvalue=True
            )
        return values, eigenvalue

    def harmonic(self) -> List[float]:
        with self._collaborator("Harmonic Centrality"):
            return self.native.harmonic_centrality(
                mode="out", weights=self.weights, normalized=True
            )

    def strength(self) -> List[float]:
        with self._collaborator("Strength Centrality"):
            return self.native.strength(mode="out", loops=False, weights=self.weights)

    def pagerank(self, damping: float) -> List[float]:
        if not 0.0 <= damping <= 1.0:
            raise ValidationError(f"Damping factor must be between 0 and 1, got {damping}")
        with self._collaborator("PageRank"):
            return self.native.pagerank(directed=True, damping=damping, weights=self.weights)

    # ------------------------------------------------------------------ #
    # Community
    # ------------------------------------------------------------------ #
    def modularity(self, membership: Sequence[int], resolution: float = 1.0) -> float:
        with self._collaborator("Modularity"):
            return self.native.modularity(
                list(membership), weights=self.weights, resolution=resolution, directed=True
            )

    def louvain(self, resolution: float) -> Tuple[List[int], float]:
        """Membership and modularity of the multilevel partition."""
        self.require_undirected("Louvain")
        with self._collaborator("Louvain"):
            clustering = self.native.community_multilevel(
                weights=self.weights, resolution=resolution
            )
        membership = list(clustering.membership)
        return membership, self.modularity(membership, resolution)

    def leiden(self, resolution: float) -> Tuple[List[int], float, Optional[float]]:
        """Membership, modularity and CPM quality of the Leiden partition."""
        self.require_undirected("Leiden")
        with self._collaborator("Leiden"):
            clustering = self.native.community_leiden(
                objective_function="CPM",
                weights=self.weights,
                resolution=resolution,
                beta=0.01,
                n_iterations=100,
            )
        membership = list(clustering.membership)
        quality = getattr(clustering, "quality", None)
        return membership, self.modularity(membership, resolution), quality

    def fast_greedy(self) -> Tuple[List[int], float]:
        self.require_undirected("Fast-Greedy")
        with self._collaborator("Fast-Greedy"):
            dendrogram = self.native.community_fastgreedy(weights=self.weights)
            clustering = dendrogram.as_clustering()
        membership = list(clustering.membership)
        return membership, self.modularity(membership)

    def label_propagation(self) -> List[int]:
        with self._collaborator("Label Propagation"):
            clustering = self.native.community_label_propagation(weights=self.weights)
        return list(clustering.membership)

    def local_clustering(self) -> List[float]:
        with self._collaborator("Local Clustering Coefficient"):
            return self.native.transitivity_local_undirected(mode="zero")

    def coreness(self) -> List[int]:
        with self._collaborator("K-Core"):
            return self.native.coreness(mode="out")

    def triangles(self) -> List[Tuple[int, int, int]]:
        with self._collaborator("Triangle Count"):
            return [tuple(t) for t in self.native.list_triangles()]

    def components(self, mode: str) -> List[int]:
        """Membership of strong or weak connected components."""
        if mode == "weak":
            self.require_directed("Weakly Connected Components")
        elif mode != "strong":
            raise ValueError(f"Unknown component mode: {mode}")
        with self._collaborator("Connected Components"):
            return list(self.native.connected_components(mode=mode).membership)

    # ------------------------------------------------------------------ #
    # Paths and traversal
    # ------------------------------------------------------------------ #
    def shortest_path(self, source: int, target: int, algorithm: str) -> PathPair:
        """Vertex and edge path from ``source`` to ``target``; empty when unreachable."""
        self._vertices(source, target)
        with self._collaborator(f"Shortest path ({algorithm})"):
            vpath = self.native.get_shortest_path(
                source, target, weights=self.weights, mode="out",
                output="vpath", algorithm=algorithm,
            )
            epath = self.native.get_shortest_path(
                source, target, weights=self.weights, mode="out",
                output="epath", algorithm=algorithm,
            )
        return list(vpath), list(epath)

    def shortest_paths_from(self, source: int, algorithm: str) -> List[PathPair]:
        """Shortest path from ``source`` to every vertex, in vertex order."""
        self._vertices(source)
        with self._collaborator(f"Single-source shortest paths ({algorithm})"):
            vpaths = self.native.get_shortest_paths(
                source, weights=self.weights, mode="out",
                output="vpath", algorithm=algorithm,
            )
            epaths = self.native.get_shortest_paths(
                source, weights=self.weights, mode="out",
                output="epath", algorithm=algorithm,
            )
        return [(list(v), list(e)) for v, e in zip(vpaths, epaths)]

    def k_shortest_paths(self, source: int, target: int, k: int) -> List[PathPair]:
        self._vertices(source, target)
        if k < 1:
            raise ValidationError(f"k must be a positive integer, got {k}")
        with self._collaborator("Yen's k Shortest Paths"):
            vpaths = self.native.get_k_shortest_paths(
                source, target, k=k, mode="out", weights=self.weights, output="vpath"
            )
            epaths = self.native.get_k_shortest_paths(
                source, target, k=k, mode="out", weights=self.weights, output="epath"
            )
        return [(list(v), list(e)) for v, e in zip(vpaths, epaths)]

    def bfs(self, source: int) -> Tuple[List[int], List[int]]:
        """Visit order and layer start indices (with a trailing end index)."""
        self._vertices(source)
        with self._collaborator("Breadth-First Search"):
            vids, layers, _parents = self.native.bfs(source, mode="out")
        return list(vids), list(layers)

    def dfs(self, source: int) -> Tuple[List[int], List[int]]:
        """Preorder and the DFS-tree parent of each visited vertex, parallel lists."""
        self._vertices(source)
        with self._collaborator("Depth-First Search"):
            vids, parents = self.native.dfs(source, mode="out")
        return list(vids), list(parents)

    def random_walk(self, start: int, steps: int) -> Tuple[List[int], List[int]]:
        """Visited vertices and the IDs of the edges walked between them."""
        self._vertices(start)
        if steps < 0:
            raise ValidationError(f"Number of steps must be non-negative, got {steps}")
        with self._collaborator("Random Walk"):
            walk = self.native.random_walk(
                start, steps, mode="out", stuck="return", return_type="both"
            )
        return list(walk["vertices"]), list(walk["edges"])

    def spanning_tree(self) -> List[int]:
        """Edge IDs of a minimum spanning forest."""
        with self._collaborator("Minimum Spanning Tree"):
            return list(self.native.spanning_tree(weights=self.weights, return_tree=False))

    # ------------------------------------------------------------------ #
    # Misc
    # ------------------------------------------------------------------ #
    def are_adjacent(self, source: int, target: int) -> bool:
        self._vertices(source, target)
        with self._collaborator("Check Adjacency"):
            return bool(self.native.are_adjacent(source, target))

    def jaccard(self, vertices: Sequence[int]) -> List[List[float]]:
        self._vertices(*vertices)
        with self._collaborator("Jaccard Similarity"):
            return self.native.similarity_jaccard(
                vertices=list(vertices), mode="out", loops=False
            )

    def topological_order(self) -> List[int]:
        with self._collaborator("Topological Sort"):
            if not self.native.is_dag():
                raise ValidationError(
                    "This graph is not a Directed Acyclic Graph (DAG) "
                    "and cannot be topologically sorted."
                )
            return list(self.native.topological_sorting(mode="out"))

    def diameter(self) -> Tuple[List[int], List[int], float]:
        """Vertex and edge paths realizing the diameter, and its length.

        The edge path is taken from a shortest path between the diameter
        endpoints so parallel edges resolve to the one actually used.
        """
        with self._collaborator("Diameter"):
            path = self.native.get_diameter(directed=True, unconn=True, weights=self.weights)
            length = self.native.diameter(directed=True, unconn=True, weights=self.weights)
            if not path:
                return [], [], length
            vpath = self.native.get_shortest_path(
                path[0], path[-1], weights=self.weights, mode="out", output="vpath"
            )
            epath = self.native.get_shortest_path(
                path[0], path[-1], weights=self.weights, mode="out", output="epath"
            )
        return list(vpath), list(epath), length

    def _euler_graph(self) -> nx.MultiGraph:
        graph = self.graph.to_networkx()
        graph.remove_nodes_from(list(nx.isolates(graph)))
        return graph

    def eulerian_path(self) -> List[Tuple[int, int, int]]:
        """Edges ``(from, to, edge_id)`` in traversal order."""
        graph = self._euler_graph()
        with self._collaborator("Eulerian Path"):
            if graph.number_of_edges() == 0 or not nx.has_eulerian_path(graph):
                raise ValidationError("This graph does not have an Eulerian path.")
            return list(nx.eulerian_path(graph, keys=True))

    def eulerian_circuit(self) -> List[Tuple[int, int, int]]:
        graph = self._euler_graph()
        with self._collaborator("Eulerian Circuit"):
            has_path = graph.number_of_edges() > 0 and nx.has_eulerian_path(graph)
            if graph.number_of_edges() == 0 or not nx.is_eulerian(graph):
                if has_path:
                    raise ValidationError(
                        "This graph does not have an Eulerian circuit "
                        "BUT it has an Eulerian path."
                    )
                raise ValidationError("This graph does not have an Eulerian circuit.")
            return list(nx.eulerian_circuit(graph, keys=True))

    def predict_missing_edges(
        self, num_samples: int, num_bins: int, seed: Optional[int] = None
    ) -> List[Tuple[int, int, float]]:
        """Score candidate non-edges and quantize the scores into bins.

        Candidates are vertex pairs with at least one common neighbour that
        are not joined in either direction; at most ``num_samples`` of them
        are scored with the Jaccard coefficient.

        Returns:
            ``(u, v, probability)`` triples, highest probability first.
        """
        if num_samples < 1:
            raise ValidationError(f"Number of samples must be positive, got {num_samples}")
        if num_bins < 1:
            raise ValidationError(f"Number of bins must be positive, got {num_bins}")

        simple = nx.Graph()
        simple.add_nodes_from(range(self.graph.vertex_count))
        simple.add_edges_from((u, v) for u, v in self.graph.edges if u != v)

        candidates = set()
        for node in simple:
            for middle in simple[node]:
                for other in simple[middle]:
                    if other > node and not simple.has_edge(node, other):
                        candidates.add((node, other))

        ordered = sorted(candidates)
        if len(ordered) > num_samples:
            ordered = sorted(random.Random(seed).sample(ordered, num_samples))
        logger.debug(
            "Scoring %d of %d candidate edges (%d bins)", len(ordered), len(candidates), num_bins
        )

        with self._collaborator("Missing Edge Prediction"):
            scored = [
                (u, v, int(score * num_bins) / num_bins)
                for u, v, score in nx.jaccard_coefficient(simple, ordered)
            ]
        scored.sort(key=lambda item: (-item[2], item[0], item[1]))
        return scored
