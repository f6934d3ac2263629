"""
Component library.

Maps component type names to their :class:`ComponentGenerator`.
"""

from typing import Dict, Iterable, List, Optional

from hdlcraft.errors import UnknownComponentError

from ..clock_distributor import CLOCK_GENERATOR
from ..component import ComponentGenerator
from .counter import COUNTER_GENERATOR
from .ttl7474 import TTL7474_GENERATOR


class ComponentLibrary:
    """Registry of component generators keyed by type name."""

    def __init__(self, generators: Optional[Iterable[ComponentGenerator]] = None):
        self._generators: Dict[str, ComponentGenerator] = {}
        for generator in generators or ():
            self.register(generator)

    def register(self, generator: ComponentGenerator) -> None:
        if generator.name in self._generators:
            raise ValueError(f"Component type '{generator.name}' already registered")
        self._generators[generator.name] = generator

    def get(self, name: str) -> ComponentGenerator:
        try:
            return self._generators[name]
        except KeyError:
            raise UnknownComponentError(
                f"No HDL generator for component type '{name}'. "
                f"Available: {self.names}"
            ) from None

    @property
    def names(self) -> List[str]:
        return sorted(self._generators)

    def __contains__(self, name: str) -> bool:
        return name in self._generators


def default_library() -> ComponentLibrary:
    """Library with every built-in component."""
    return ComponentLibrary([CLOCK_GENERATOR, TTL7474_GENERATOR, COUNTER_GENERATOR])


__all__ = ["ComponentLibrary", "default_library", "COUNTER_GENERATOR", "TTL7474_GENERATOR"]
