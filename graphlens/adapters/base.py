"""Base interface shared by all format adapters.

Each adapter turns one external source into a GraphInstallation without
touching the live graph; the GraphStore installs the payload only after
the parse has completed.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Optional, TextIO, Union

from graphlens.config import GraphLensConfig
from graphlens.errors import ResourceError, ValidationError
from graphlens.graph.installation import GraphInstallation

logger = logging.getLogger("graphlens.adapters.base")

PathLike = Union[str, Path]


class BaseAdapter(ABC):
    """Base class for format adapters.

    Subclasses set ``NAME`` (the format tag used for dispatch) and implement
    ``parse``.
    """

    NAME: str = ""
    DESCRIPTION: str = ""

    def __init__(self, config: Optional[GraphLensConfig] = None) -> None:
        self.config = config or GraphLensConfig()

    @abstractmethod
    def parse(self, **source: Any) -> GraphInstallation:
        """Parse the source into an installation payload.

        Raises:
            ResourceError: If the input cannot be opened.
            FormatError: If headers or document shape are wrong.
            ValidationError: If the content is semantically invalid.
        """
        pass


@contextmanager
def open_text(path: PathLike, what: str = "file") -> Iterator[TextIO]:
    """Open a text resource, mapping I/O failures to ResourceError.

    The handle is closed on every exit path, including parse failures
    raised from inside the ``with`` block.
    """
    try:
        handle = open(path, "r", encoding="utf-8")
    except OSError as exc:
        raise ResourceError(f"Could not open {what} {path}: {exc}") from exc
    try:
        yield handle
    except UnicodeDecodeError as exc:
        raise ResourceError(f"Could not read {what} {path}: {exc}") from exc
    finally:
        handle.close()


@contextmanager
def open_binary(path: PathLike, what: str = "file") -> Iterator[BinaryIO]:
    """Binary counterpart of ``open_text`` for readers that decode themselves."""
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise ResourceError(f"Could not open {what} {path}: {exc}") from exc
    try:
        yield handle
    finally:
        handle.close()


def parse_weight(raw: Any, context: str) -> float:
    """Parse a numeric weight or raise ValidationError citing ``context``."""
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid weight in edge: {context}")
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid weight in edge: {context}") from exc
