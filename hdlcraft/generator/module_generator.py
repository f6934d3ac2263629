"""
Module generator.

Orchestrates a whole-design generation pass: one module per component
type in use, one clock distributor instance per global clock source and
a top level wiring the clock buses and every component instance.
Nothing is returned unless every file rendered.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from hdlcraft.diagnostics import Diagnostic, DiagnosticsCollector
from hdlcraft.errors import GenerationError, PortMapError
from hdlcraft.model import (
    ClockSource,
    ComponentAttributes,
    GeneratorSettings,
    HdlDialect,
    Netlist,
    NetlistComponentInstance,
)
from hdlcraft.utils import is_hdl_identifier, to_hdl_identifier

from .base_generator import BaseGenerator
from .clock_distributor import CLOCK_COMPONENT, CLOCK_GENERATOR, clock_port_map, instance_label
from .components import ComponentLibrary, default_library
from .port_map import PortMap, PortMapBuilder
from .renderer import DialectRenderer, RenderedModule

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Files of a design, keyed by file name, plus the diagnostics raised."""

    files: Dict[str, str]
    diagnostics: DiagnosticsCollector

    @property
    def warnings(self) -> List[Diagnostic]:
        return self.diagnostics.warnings


class ModuleGenerator(BaseGenerator):
    """HDL generator for one dialect."""

    def __init__(
        self,
        settings: Optional[GeneratorSettings] = None,
        dialect: Union[HdlDialect, str, None] = None,
        library: Optional[ComponentLibrary] = None,
        template_dir: Optional[str] = None,
    ):
        super().__init__(template_dir)
        self.settings = settings or GeneratorSettings()
        if dialect is not None:
            self.settings = self.settings.model_copy(
                update={"dialect": HdlDialect.from_string(dialect)}
            )
        self.library = library or default_library()
        self.renderer = DialectRenderer(self.env, self.settings.dialect)

    @property
    def dialect(self) -> HdlDialect:
        return self.settings.dialect

    # --- Modules ---

    def render_module(self, component_type: str, attributes: ComponentAttributes) -> RenderedModule:
        """Declarations, header and body of a component type's module."""
        return self.renderer.render(self.library.get(component_type), attributes)

    def generate_module(self, component_type: str, attributes: ComponentAttributes) -> str:
        return self.render_module(component_type, attributes).text

    # --- Instances ---

    def port_map(
        self,
        instance: NetlistComponentInstance,
        netlist: Netlist,
        diagnostics: DiagnosticsCollector,
    ) -> PortMap:
        component = self.library.get(instance.component_type)
        return PortMapBuilder(netlist, diagnostics, self.settings).build(component, instance)

    def generate_instance(
        self,
        instance: NetlistComponentInstance,
        netlist: Netlist,
        diagnostics: DiagnosticsCollector,
    ) -> str:
        """Instantiation text of one component instance."""
        component = self.library.get(instance.component_type)
        port_map = PortMapBuilder(netlist, diagnostics, self.settings).build(component, instance)
        generics = component.declarations.resolve(instance.attribute_set).parameters
        return self.renderer.render_instance(instance.name, component.hdl_name, port_map, generics)

    def generate_clock_instance(self, source: ClockSource) -> str:
        """Instantiation text of the distributor driving ``source``'s bus."""
        generics = CLOCK_GENERATOR.declarations.resolve(source.attributes).parameters
        return self.renderer.render_instance(
            instance_label(source),
            CLOCK_GENERATOR.hdl_name,
            clock_port_map(source, self.settings),
            generics,
        )

    # --- Design ---

    def generate_design(self, netlist: Netlist) -> GenerationResult:
        """
        Generate every file of ``netlist``.

        Returns:
            GenerationResult with name-sorted files

        Raises:
            GenerationError: On any contract violation; no files are returned.
        """
        diagnostics = DiagnosticsCollector()
        extension = self.dialect.file_extension
        files: Dict[str, str] = {}
        instance_texts: List[str] = []

        sources = netlist.global_clock_sources
        if sources:
            files[f"{CLOCK_GENERATOR.hdl_name}{extension}"] = self.generate_module(
                CLOCK_COMPONENT, sources[0].attributes
            )
            instance_texts.extend(self.generate_clock_instance(source) for source in sources)

        module_attributes: Dict[str, ComponentAttributes] = {}
        for instance in sorted(netlist.instances, key=lambda i: i.name):
            if instance.component_type == CLOCK_COMPONENT:
                raise GenerationError(
                    f"Instance '{instance.name}': clock distributors are generated from clock sources",
                    CLOCK_COMPONENT,
                    netlist.circuit_name,
                )
            module_attributes.setdefault(instance.component_type, instance.attribute_set)
            instance_texts.append(self.generate_instance(instance, netlist, diagnostics))

        for component_type, attributes in sorted(module_attributes.items()):
            component = self.library.get(component_type)
            files[f"{component.hdl_name}{extension}"] = self.generate_module(component_type, attributes)

        top_name = self.settings.top_name or to_hdl_identifier(netlist.circuit_name)
        top_file = f"{top_name}{extension}"
        if top_file in files:
            raise GenerationError(f"Top level name '{top_name}' clashes with a component module")

        clock_buses = [source.bus_name(self.settings.clock_tree_name) for source in sources]
        files[top_file] = self.renderer.render_top(
            top_name,
            self.settings.fpga_clock_name,
            self.settings.fpga_tick_name,
            clock_buses,
            self._collect_nets(netlist, reserved=set(clock_buses)),
            instance_texts,
        )

        logger.info(
            "Generated %d %s files for circuit '%s' (%d warnings)",
            len(files),
            self.dialect.value,
            netlist.circuit_name,
            len(diagnostics.warnings),
        )
        return GenerationResult(dict(sorted(files.items())), diagnostics)

    def _collect_nets(self, netlist: Netlist, reserved: set) -> Dict[str, int]:
        """Name-sorted internal nets of the top level with their widths."""
        reserved = reserved | {self.settings.fpga_clock_name, self.settings.fpga_tick_name}
        nets: Dict[str, int] = {}

        def add(name: str, width: int, owner: str) -> None:
            if not is_hdl_identifier(name):
                raise PortMapError(f"Net name '{name}' is not a valid identifier", owner, netlist.circuit_name)
            if name in reserved:
                raise PortMapError(f"Net name '{name}' is reserved", owner, netlist.circuit_name)
            if nets.setdefault(name, width) != width:
                raise PortMapError(
                    f"Net '{name}' used with widths {nets[name]} and {width}", owner, netlist.circuit_name
                )

        for instance in netlist.instances:
            component = self.library.get(instance.component_type)
            layout = component.layout
            widths = component.declarations.resolve(instance.attribute_set).ports
            clock_pins = instance.clock_pins or layout.clock_pins
            for pin in clock_pins:
                connection = instance.end(pin)
                if connection is not None and connection.net is not None:
                    if netlist.get_clock_source(connection) is None:
                        add(connection.net, 1, component.name)
            for port in layout.ports:
                for unit, pin in enumerate(port.pins, start=1):
                    connection = instance.end(pin)
                    if connection is None:
                        continue
                    if connection.net is not None:
                        add(connection.net, widths[layout.port_name(port.base_name, unit)], component.name)
                    for bit in connection.bits:
                        if bit is not None:
                            add(bit, 1, component.name)

        return dict(sorted(nets.items()))
