"""Helpers shared by the analysis operations."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from graphlens.algorithms.facade import AlgorithmsFacade
from graphlens.config import EncodingConfig
from graphlens.encoding.envelope import EnvelopeBuilder
from graphlens.encoding.scaling import round_to
from graphlens.graph.canonical import CanonicalGraph
from graphlens.graph.store import GraphStore


@dataclass
class OperationContext:
    """Everything one request needs: graph, facade, names and encoding settings."""

    graph: CanonicalGraph
    facade: AlgorithmsFacade
    names: List[str]
    encoding: EncodingConfig

    @classmethod
    def from_store(cls, store: GraphStore) -> "OperationContext":
        graph = store.current
        return cls(
            graph=graph,
            facade=AlgorithmsFacade(graph),
            names=graph.display_names(),
            encoding=store.config.encoding,
        )

    @property
    def weighted(self) -> bool:
        return self.graph.has_weights()

    @property
    def coarse(self) -> int:
        return self.encoding.coarse_precision

    @property
    def fine(self) -> int:
        return self.encoding.fine_precision

    def weight(self, edge_id: int) -> Optional[float]:
        return self.graph.weights[edge_id] if self.graph.weights is not None else None


def path_links(
    ctx: OperationContext,
    vpath: Sequence[int],
    epath: Sequence[int],
    builder: Optional[EnvelopeBuilder] = None,
) -> Tuple[List[Dict[str, Any]], float]:
    """Describe consecutive path hops, colouring them when a builder is given.

    Path vertices get ``0.5`` and hop edges ``1``.

    Returns:
        ``[{from, to, weight?}]`` and the summed weight (rounded, 0 when
        the graph is unweighted).
    """
    links: List[Dict[str, Any]] = []
    total = 0.0
    for i, vertex in enumerate(vpath):
        if builder is not None:
            builder.vertex(vertex, 0.5)
        if i == 0:
            continue
        previous = vpath[i - 1]
        if builder is not None:
            builder.edge(previous, vertex, 1)
        link: Dict[str, Any] = {"from": ctx.names[previous], "to": ctx.names[vertex]}
        if ctx.weighted:
            weight = ctx.weight(epath[i - 1])
            link["weight"] = weight
            total += weight
        links.append(link)
    return links, round_to(total, ctx.coarse)


def path_weight(ctx: OperationContext, epath: Sequence[int]) -> float:
    return round_to(sum(ctx.graph.weights[e] for e in epath), ctx.coarse)
