"""Argument helpers shared by the CLI commands."""

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console

from graphlens.adapters import load_graph
from graphlens.config import GraphLensConfig
from graphlens.errors import ResourceError, ValidationError
from graphlens.graph.store import GraphStore

logger = logging.getLogger("graphlens.cli.common")

FORMATS = ["csv", "json", "gexf", "gml", "random", "demo"]

console = Console()


def add_source_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags selecting the graph to load."""
    group = parser.add_argument_group("graph source")
    group.add_argument(
        "--format",
        choices=FORMATS,
        default="demo",
        help="Input format (default: demo)",
    )
    group.add_argument(
        "--source",
        help="Input file for the json, gexf and gml formats",
    )
    group.add_argument("--nodes", help="Node file for the csv format")
    group.add_argument("--edges", help="Edge file for the csv format")
    group.add_argument(
        "--directed",
        action="store_true",
        help="Treat csv input or the random graph as directed",
    )
    group.add_argument(
        "-n",
        type=int,
        help="Number of vertices of the random graph",
    )
    group.add_argument(
        "-p",
        type=float,
        help="Edge probability of the random graph",
    )
    group.add_argument(
        "--seed",
        type=int,
        help="Seed for the random graph (overrides generator.seed)",
    )


def _require(args: argparse.Namespace, *names: str) -> None:
    missing = []
    for name in names:
        if getattr(args, name, None) is None:
            missing.append(f"--{name}" if len(name) > 1 else f"-{name}")
    if missing:
        raise ValidationError(
            f"Format '{args.format}' requires {', '.join(missing)}"
        )


def source_kwargs(args: argparse.Namespace) -> Dict[str, Any]:
    """Adapter arguments for the selected format."""
    fmt = args.format
    if fmt == "csv":
        _require(args, "nodes", "edges")
        return {"nodes": args.nodes, "edges": args.edges, "directed": args.directed}
    if fmt in ("json", "gexf", "gml"):
        _require(args, "source")
        return {"source": args.source}
    if fmt == "random":
        _require(args, "n", "p")
        return {"n": args.n, "p": args.p, "directed": args.directed, "seed": args.seed}
    return {}


def load_store(args: argparse.Namespace) -> GraphStore:
    """Create a store with the session config and load the selected graph."""
    config: Optional[GraphLensConfig] = getattr(args, "settings", None)
    store = GraphStore(config)
    load_graph(store, args.format, **source_kwargs(args))
    return store


def emit(payload: Any, output: Optional[str] = None) -> None:
    """Write a JSON payload to ``output`` or pretty-print it to the console."""
    if output is None:
        console.print_json(data=payload)
        return

    path = Path(output)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
    except OSError as exc:
        raise ResourceError(f"Could not write {path}: {exc}") from exc
    logger.info("Wrote %s", path)
