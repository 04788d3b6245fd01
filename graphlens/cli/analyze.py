"""Analyze command implementation."""

import logging
from typing import Dict, List, Optional

from graphlens.cli.common import emit, load_store
from graphlens.encoding.envelope import ResponseEnvelope
from graphlens.errors import GraphLensError, ValidationError
from graphlens.operations import run_operation

logger = logging.getLogger("graphlens.cli.analyze")


def parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Turn ``key=value`` strings into a mapping."""
    params: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValidationError(f"Expected key=value, got '{pair}'")
        params[key.strip()] = value.strip()
    return params


def analyze_command(args) -> int:
    """Load a graph, run one algorithm and print the envelope.

    Args:
        args: Parsed command-line arguments containing:
            - algorithm: Registered operation name
            - param: ``key=value`` parameters
            - output: Optional output file

    Returns:
        int: Exit code (0 for success, 1 for failure).
    """
    try:
        params = parse_params(args.param)
        store = load_store(args)
        logger.info("Running %s on %r", args.algorithm, store.current)
        result = run_operation(store, args.algorithm, params)
        payload = result.to_dict() if isinstance(result, ResponseEnvelope) else result
        emit(payload, args.output)
    except GraphLensError as exc:
        logger.error("Analysis failed: %s", exc)
        return 1
    return 0
