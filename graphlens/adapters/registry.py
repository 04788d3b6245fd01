"""Adapter registry mapping format tags to adapter classes."""

import logging
from typing import Dict, List, Optional, Type

from graphlens.adapters.base import BaseAdapter
from graphlens.config import GraphLensConfig
from graphlens.errors import ValidationError

logger = logging.getLogger("graphlens.adapters.registry")


class AdapterRegistry:
    """Global registry of format adapters.

    Adapters register under their format tag; ``create`` instantiates the
    adapter for a tag so callers dispatch by format instead of calling
    per-format entry points.
    """

    _instance: Optional["AdapterRegistry"] = None

    def __init__(self) -> None:
        """Initialize the registry."""
        # format tag -> adapter class
        self._adapters: Dict[str, Type[BaseAdapter]] = {}

    @classmethod
    def get_instance(cls) -> "AdapterRegistry":
        """Get singleton instance.

        Returns:
            AdapterRegistry: Global registry instance.
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, adapter_class: Type[BaseAdapter]) -> None:
        """Register an adapter class under its ``NAME``.

        Args:
            adapter_class: Adapter class to register.
        """
        name = adapter_class.NAME
        if not name:
            raise ValueError(f"Adapter {adapter_class.__name__} has no NAME")

        if name in self._adapters:
            logger.warning(
                "Overwriting existing adapter for format '%s': %s -> %s",
                name,
                self._adapters[name].__name__,
                adapter_class.__name__,
            )

        self._adapters[name] = adapter_class
        logger.debug("Registered adapter for '%s': %s", name, adapter_class.__name__)

    def get(self, name: str) -> Type[BaseAdapter]:
        """Look up the adapter class for a format tag.

        Raises:
            ValidationError: If no adapter is registered for ``name``.
        """
        try:
            return self._adapters[name]
        except KeyError:
            raise ValidationError(
                f"Unknown graph format '{name}'. Known formats: {', '.join(self.list_formats())}"
            ) from None

    def create(self, name: str, config: Optional[GraphLensConfig] = None) -> BaseAdapter:
        """Instantiate the adapter for a format tag."""
        return self.get(name)(config=config)

    def list_formats(self) -> List[str]:
        return sorted(self._adapters)

    def describe(self) -> Dict[str, str]:
        """Format tag -> one-line description."""
        return {name: self._adapters[name].DESCRIPTION for name in self.list_formats()}
