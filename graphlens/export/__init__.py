"""Graph export formats."""

from graphlens.export.graphml import export_graphml
from graphlens.export.json import export_json

EXPORTERS = {
    "json": export_json,
    "graphml": export_graphml,
}

__all__ = ["EXPORTERS", "export_graphml", "export_json"]
