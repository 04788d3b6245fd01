"""Typed per-vertex / per-edge attribute storage.

Each attribute is a column holding one value slot per vertex (or edge).
Columns keep their value kind so numeric, boolean and string data survive
a round trip through the store unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from graphlens.errors import ValidationError

logger = logging.getLogger("graphlens.graph.attributes")

# Names with dedicated semantics; hidden from generic enumeration.
RESERVED_NAMES = frozenset({"name", "label", "tableName", "weight"})


class AttributeKind(str, Enum):
    """Value kind stored by an attribute column."""

    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    STRING = "string"

    @classmethod
    def infer(cls, value: Any) -> "AttributeKind":
        """Infer the column kind for a Python value."""
        # bool is an int subclass, test it first
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMERIC
        return cls.STRING

    def coerce(self, value: Any) -> Any:
        """Convert a raw value to this kind, raising ValidationError on mismatch."""
        if value is None:
            return None
        if self is AttributeKind.BOOLEAN:
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
                return value.strip().lower() == "true"
            raise ValidationError(f"Expected a boolean value, got {value!r}")
        if self is AttributeKind.NUMERIC:
            if isinstance(value, bool):
                raise ValidationError(f"Expected a numeric value, got {value!r}")
            try:
                return float(value)
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"Expected a numeric value, got {value!r}") from exc
        return str(value)


@dataclass
class AttributeColumn:
    """A single typed column; ``None`` marks an unset slot."""

    kind: AttributeKind
    values: List[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)


class AttributeTable:
    """Mapping attribute name -> typed column, indexed by vertex or edge ID."""

    def __init__(self, size: int = 0) -> None:
        self._size = size
        self._columns: Dict[str, AttributeColumn] = {}

    @property
    def size(self) -> int:
        """Number of rows (vertices or edges) the table covers."""
        return self._size

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def names(self) -> List[str]:
        """All column names, reserved ones included."""
        return list(self._columns)

    def generic_names(self) -> List[str]:
        """Column names without the reserved ones."""
        return [name for name in self._columns if name not in RESERVED_NAMES]

    def column(self, name: str) -> Optional[AttributeColumn]:
        return self._columns.get(name)

    def kind(self, name: str) -> Optional[AttributeKind]:
        col = self._columns.get(name)
        return col.kind if col else None

    def define(self, name: str, kind: AttributeKind) -> AttributeColumn:
        """Create an empty column, or return the existing one if kinds agree."""
        existing = self._columns.get(name)
        if existing is not None:
            if existing.kind is not kind:
                raise ValidationError(
                    f"Attribute '{name}' already stored as {existing.kind.value}, "
                    f"cannot redefine as {kind.value}"
                )
            return existing
        col = AttributeColumn(kind=kind, values=[None] * self._size)
        self._columns[name] = col
        logger.debug("Defined %s attribute column '%s'", kind.value, name)
        return col

    def set_column(
        self, name: str, values: List[Any], kind: Optional[AttributeKind] = None
    ) -> None:
        """Install a whole column at once."""
        if len(values) != self._size:
            raise ValidationError(
                f"Attribute '{name}' has {len(values)} values, expected {self._size}"
            )
        if kind is None:
            sample = next((v for v in values if v is not None), "")
            kind = AttributeKind.infer(sample)
        self._columns[name] = AttributeColumn(
            kind=kind, values=[kind.coerce(v) for v in values]
        )

    def get(self, name: str, index: int) -> Any:
        col = self._columns.get(name)
        if col is None:
            return None
        return col.values[index]

    def set(self, name: str, index: int, value: Any) -> None:
        """Set one slot, creating the column from the value's kind when needed."""
        self._check_index(index)
        col = self._columns.get(name)
        if col is None:
            col = self.define(name, AttributeKind.infer(value))
        col.values[index] = col.kind.coerce(value)

    def append_row(self, values: Optional[Dict[str, Any]] = None) -> int:
        """Grow every column by one slot and fill the given values."""
        index = self._size
        self._size += 1
        for col in self._columns.values():
            col.values.append(None)
        for name, value in (values or {}).items():
            self.set(name, index, value)
        return index

    def row(self, index: int, include_reserved: bool = False) -> Dict[str, Any]:
        """All set values of one row."""
        self._check_index(index)
        names = self.names() if include_reserved else self.generic_names()
        return {
            name: self._columns[name].values[index]
            for name in names
            if self._columns[name].values[index] is not None
        }

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise ValidationError(
                f"Attribute row {index} out of range [0, {self._size})"
            )
