"""HDL generation: dialect rendering, clock distribution and port maps."""

from .clock_distributor import CLOCK_GENERATOR, clock_port_map
from .component import ComponentGenerator, PinLayout, UnitPort
from .components import ComponentLibrary, default_library
from .module_generator import GenerationResult, ModuleGenerator
from .port_map import PortMapBuilder
from .renderer import DialectRenderer, RenderedModule

__all__ = [
    "CLOCK_GENERATOR",
    "clock_port_map",
    "ComponentGenerator",
    "ComponentLibrary",
    "default_library",
    "DialectRenderer",
    "GenerationResult",
    "ModuleGenerator",
    "PinLayout",
    "PortMapBuilder",
    "RenderedModule",
    "UnitPort",
]
