"""Registry of analysis operations, keyed by their exported name.

Operations register themselves with the ``operation`` decorator when
their module is imported. ``run_operation`` coerces loosely typed
parameters (CLI strings) from each function's annotations before the
call.
"""

import inspect
import logging
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from graphlens.errors import ValidationError
from graphlens.graph.store import GraphStore

logger = logging.getLogger("graphlens.operations.registry")

# most operations return a ResponseEnvelope, a few return plain mappings
OperationFunc = Callable[..., Any]


@dataclass(frozen=True)
class Operation:
    """A registered analysis operation."""

    name: str
    category: str
    func: OperationFunc

    @property
    def description(self) -> str:
        doc = inspect.getdoc(self.func) or ""
        return doc.splitlines()[0] if doc else ""

    def parameters(self) -> List[inspect.Parameter]:
        """Parameters after the leading ``store`` argument."""
        return list(inspect.signature(self.func).parameters.values())[1:]

    def signature(self) -> str:
        parts = []
        for param in self.parameters():
            if param.default is inspect.Parameter.empty:
                parts.append(param.name)
            else:
                parts.append(f"{param.name}={param.default}")
        return ", ".join(parts)


_OPERATIONS: Dict[str, Operation] = {}


def operation(name: str, category: str) -> Callable[[OperationFunc], OperationFunc]:
    """Register the decorated function under ``name``."""

    def decorator(func: OperationFunc) -> OperationFunc:
        if name in _OPERATIONS:
            logger.warning("Overwriting existing operation '%s'", name)
        _OPERATIONS[name] = Operation(name=name, category=category, func=func)
        return func

    return decorator


def get_operation(name: str) -> Operation:
    try:
        return _OPERATIONS[name]
    except KeyError:
        raise ValidationError(
            f"Unknown algorithm '{name}'. Run 'graphlens list' to see the available ones"
        ) from None


def list_operations() -> List[Operation]:
    return [_OPERATIONS[name] for name in sorted(_OPERATIONS)]


def coerce_param(name: str, value: Any, annotation: Any) -> Any:
    """Convert ``value`` to the annotated type (int, float, bool, List[int])."""
    try:
        if typing.get_origin(annotation) in (list, List):
            (item_type,) = typing.get_args(annotation) or (str,)
            if isinstance(value, str):
                value = [part for part in value.split(",") if part.strip()]
            return [coerce_param(name, item, item_type) for item in value]
        if annotation is bool:
            if isinstance(value, str):
                return value.strip().lower() in {"1", "true", "yes", "on"}
            return bool(value)
        if annotation is int:
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(value)
            return int(str(value).strip()) if isinstance(value, str) else int(value)
        if annotation is float:
            return float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid value for parameter '{name}': {value!r}") from exc
    return value


def run_operation(
    store: GraphStore, name: str, params: Optional[Mapping[str, Any]] = None
) -> Any:
    """Run a registered operation against the store's current graph.

    Raises:
        ValidationError: Unknown operation, unknown or missing parameter,
            or a parameter that cannot be converted.
    """
    op = get_operation(name)
    params = dict(params or {})
    hints = typing.get_type_hints(op.func)
    kwargs: Dict[str, Any] = {}
    for param in op.parameters():
        if param.name in params:
            kwargs[param.name] = coerce_param(
                param.name, params.pop(param.name), hints.get(param.name, str)
            )
        elif param.default is inspect.Parameter.empty:
            raise ValidationError(f"Algorithm '{name}' requires parameter '{param.name}'")
    if params:
        raise ValidationError(
            f"Unknown parameter(s) for '{name}': {', '.join(sorted(params))}"
        )

    logger.debug("Running %s with %s", name, kwargs)
    return op.func(store, **kwargs)
