"""Main CLI entry point for graphlens.

Provides commands: ingest, analyze, export, list
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("graphlens.cli")

# Trigger adapter and operation registration
import graphlens.adapters
import graphlens.operations

from graphlens.adapters import AdapterRegistry
from graphlens.cli.analyze import analyze_command
from graphlens.cli.catalog import list_command
from graphlens.cli.common import add_source_arguments
from graphlens.cli.export import export_command
from graphlens.cli.ingest import ingest_command
from graphlens.config import load_config
from graphlens.errors import GraphLensError


def setup_logging(
    verbose: bool = False,
    console: Optional[Console] = None,
    level: Optional[str] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
        level: Level name used when not verbose (defaults to WARNING).
    """
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, level or "WARNING")

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=log_level,
        format="[%(name)s] %(message)s",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="graphlens",
        description="Graphlens - graph analysis for visual exploration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional configuration. Can be a path to a TOML/JSON file "
            "or an inline TOML/JSON string. When omitted, built-in "
            "defaults are used."
        ),
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Ingest command
    ingest_parser = subparsers.add_parser(
        "ingest",
        help="Load a graph and print its nodes and edges",
    )
    add_source_arguments(ingest_parser)
    ingest_parser.add_argument(
        "-o",
        "--output",
        help="Write the payload to this JSON file instead of the console",
    )

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Run one algorithm and print the visualization envelope",
    )
    analyze_parser.add_argument(
        "algorithm",
        help="Algorithm name (see 'graphlens list')",
    )
    analyze_parser.add_argument(
        "--param",
        action="append",
        metavar="KEY=VALUE",
        help="Algorithm parameter, repeatable (e.g. --param src=0 --param vertices=0,1,2)",
    )
    add_source_arguments(analyze_parser)
    analyze_parser.add_argument(
        "-o",
        "--output",
        help="Write the envelope to this JSON file instead of the console",
    )

    # Export command
    export_parser = subparsers.add_parser(
        "export",
        help="Write the loaded graph in an interchange format",
    )
    add_source_arguments(export_parser)
    export_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output file",
    )
    export_parser.add_argument(
        "-f",
        "--export-format",
        choices=["json", "graphml"],
        default="json",
        help="Output format (default: json node-link)",
    )

    # List command
    subparsers.add_parser(
        "list",
        help="List input formats and algorithms",
    )

    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except GraphLensError as exc:
        setup_logging(args.verbose)
        logger.error("Invalid configuration: %s", exc)
        return 1

    setup_logging(args.verbose, level=config.logging.level)
    args.settings = config
    logger.debug(
        "Registered formats: %s", ", ".join(AdapterRegistry.get_instance().list_formats())
    )

    # Dispatch to subcommand
    if args.command == "ingest":
        return ingest_command(args)
    elif args.command == "analyze":
        return analyze_command(args)
    elif args.command == "export":
        return export_command(args)
    elif args.command == "list":
        return list_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
