"""Format adapters.

Built-in adapters are registered with the AdapterRegistry on import.
"""

import logging

from graphlens.adapters.base import BaseAdapter
from graphlens.adapters.csv_pair import CsvPairAdapter
from graphlens.adapters.generator import DemoAdapter, RandomGraphAdapter
from graphlens.adapters.gexf import GexfAdapter
from graphlens.adapters.gml import GmlAdapter
from graphlens.adapters.json_schema import JsonSchemaAdapter
from graphlens.adapters.loader import load_graph
from graphlens.adapters.registry import AdapterRegistry

logger = logging.getLogger("graphlens.adapters")

BUILTIN_ADAPTERS = (
    CsvPairAdapter,
    JsonSchemaAdapter,
    GexfAdapter,
    GmlAdapter,
    RandomGraphAdapter,
    DemoAdapter,
)


def register_builtin_adapters() -> None:
    """Register every built-in adapter that is not registered yet."""
    registry = AdapterRegistry.get_instance()
    known = set(registry.list_formats())
    for adapter_class in BUILTIN_ADAPTERS:
        if adapter_class.NAME not in known:
            registry.register(adapter_class)


register_builtin_adapters()
logger.debug("Adapters available: %s", AdapterRegistry.get_instance().list_formats())

__all__ = [
    "AdapterRegistry",
    "BaseAdapter",
    "CsvPairAdapter",
    "DemoAdapter",
    "GexfAdapter",
    "GmlAdapter",
    "JsonSchemaAdapter",
    "RandomGraphAdapter",
    "load_graph",
    "register_builtin_adapters",
]
