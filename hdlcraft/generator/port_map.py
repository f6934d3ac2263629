"""
Port-map builder.

Resolves every declared port of a component instance to an expression:
an external net, a constant, a concatenation of bit nets, or a bit of a
clock bus. Clock pins are resolved per unit in this order:

1. unconnected: clock and tick tied to 0, one severe warning;
2. gated (net not driven by a global clock source): clock wired to the
   net, tick tied to 1;
3. global clock bus: clock is the bus' raw clock bit; tick is 1 in a
   single-clock-domain design, otherwise the bus' positive edge tick.
"""

import logging
from typing import Dict, Tuple

from hdlcraft.diagnostics import DiagnosticsCollector
from hdlcraft.errors import PortMapError, UnitIndexError, UnknownPortError
from hdlcraft.model import (
    ONE,
    OPEN,
    ZERO,
    BitSelect,
    ClockBusIndex,
    Concat,
    Constant,
    Expression,
    GeneratorSettings,
    NetRef,
    Netlist,
    NetlistComponentInstance,
    PortDirection,
)

from .component import ComponentGenerator, PinLayout

logger = logging.getLogger(__name__)

PortMap = Dict[str, Expression]


class PortMapBuilder:
    """Builds instantiation port maps for one design."""

    def __init__(
        self,
        netlist: Netlist,
        diagnostics: DiagnosticsCollector,
        settings: GeneratorSettings = None,
    ):
        self.netlist = netlist
        self.diagnostics = diagnostics
        self.settings = settings or GeneratorSettings()

    @property
    def circuit(self) -> str:
        return self.netlist.circuit_name

    def _layout(self, component: ComponentGenerator) -> PinLayout:
        if component.layout is None:
            raise PortMapError("Component has no pin layout", component.name, self.circuit)
        return component.layout

    def unit_count(self, component: ComponentGenerator, instance: NetlistComponentInstance) -> int:
        """Number of units of ``instance``; must agree with the component type."""
        units = self._layout(component).units
        if instance.unit_count is not None and instance.unit_count != units:
            raise UnitIndexError(
                f"Instance '{instance.name}' declares {instance.unit_count} units, "
                f"component has {units}",
                component.name,
                self.circuit,
            )
        return units

    def build(self, component: ComponentGenerator, instance: NetlistComponentInstance) -> PortMap:
        """
        Build the name-sorted port map of ``instance``.

        Raises:
            UnknownPortError: A pin or port outside the component's declaration.
            UnitIndexError: Unit count mismatch.
            PortMapError: Port assigned twice, left unmapped or wired inconsistently.
        """
        layout = self._layout(component)
        for pin in instance.pins:
            self._check_pin(component, layout, pin)

        widths = component.declarations.resolve(instance.attribute_set).ports
        port_map: PortMap = {}

        for unit in range(1, self.unit_count(component, instance) + 1):
            if layout.clock_pins:
                clock, tick = self.resolve_clock(component, instance, unit)
                self._put(port_map, component, layout.port_name(layout.clock_port, unit), clock)
                self._put(port_map, component, layout.port_name(layout.tick_port, unit), tick)

            for port in layout.ports:
                name = layout.port_name(port.base_name, unit)
                if name not in widths:
                    raise UnknownPortError(f"Port '{name}' is not declared", component.name, self.circuit)
                expression = self.net_map(
                    component, instance, port.pins[unit - 1], widths[name], port.direction, port.default
                )
                self._put(port_map, component, name, expression)

        missing = sorted(component.declarations.port_names - port_map.keys())
        if missing:
            raise PortMapError(f"Ports left unmapped: {missing}", component.name, self.circuit)

        logger.debug("Port map for %s (%s): %d ports", instance.name, component.name, len(port_map))
        return dict(sorted(port_map.items()))

    def resolve_clock(
        self, component: ComponentGenerator, instance: NetlistComponentInstance, unit: int
    ) -> Tuple[Expression, Expression]:
        """Return the (clock, tick) expressions of ``unit`` (1-based)."""
        layout = self._layout(component)
        clock_pins = instance.clock_pins or layout.clock_pins
        if unit < 1 or unit > len(clock_pins):
            raise UnitIndexError(
                f"Unit {unit} out of range 1..{len(clock_pins)}", component.name, self.circuit
            )
        pin = clock_pins[unit - 1]
        self._check_pin(component, layout, pin)

        if not instance.is_end_connected(pin):
            self.diagnostics.severe_warning(
                f'Component "{component.name}" in circuit "{self.circuit}" '
                f"has no clock connection for unit {unit}",
                circuit=self.circuit,
                component=component.name,
                unit=unit,
            )
            return ZERO, ZERO

        connection = instance.end(pin)
        source = self.netlist.get_clock_source(connection)
        if source is None:
            if connection.net is None:
                raise PortMapError(
                    f"Clock pin of unit {unit} must connect a whole net", component.name, self.circuit
                )
            logger.debug("%s unit %d uses gated clock %s", instance.name, unit, connection.net)
            return NetRef(name=connection.net), ONE

        bus = source.bus_name(self.settings.clock_tree_name)
        clock = BitSelect(name=bus, index=int(ClockBusIndex.GLOBAL_CLOCK))
        if self.netlist.single_clock_domain:
            return clock, ONE
        return clock, BitSelect(name=bus, index=int(ClockBusIndex.POSITIVE_EDGE_TICK))

    def net_map(
        self,
        component: ComponentGenerator,
        instance: NetlistComponentInstance,
        pin: int,
        width: int,
        direction: PortDirection,
        default: Expression = ZERO,
    ) -> Expression:
        """Expression for a non-clock pin."""
        self._check_pin(component, self._layout(component), pin)
        connection = instance.end(pin)

        if connection is None or not connection.is_connected:
            if direction == PortDirection.OUT:
                return OPEN
            if isinstance(default, Constant):
                return Constant(value=default.value, width=width)
            return default

        if connection.net is not None:
            return NetRef(name=connection.net)
        if not connection.bits:
            raise PortMapError(f"Pin {pin} has a net id but no net name", component.name, self.circuit)

        if direction == PortDirection.OUT:
            raise PortMapError(
                f"Output pin {pin} must connect a whole net", component.name, self.circuit
            )
        if len(connection.bits) != width:
            raise PortMapError(
                f"Pin {pin} connects {len(connection.bits)} bits, port is {width} bits wide",
                component.name,
                self.circuit,
            )
        parts = tuple(
            NetRef(name=bit) if bit is not None else ZERO for bit in reversed(connection.bits)
        )
        return parts[0] if len(parts) == 1 else Concat(parts=parts)

    def _check_pin(self, component: ComponentGenerator, layout: PinLayout, pin: int) -> None:
        if pin < 0 or pin >= layout.pin_count:
            raise UnknownPortError(
                f"Pin {pin} does not exist (component has {layout.pin_count} pins)",
                component.name,
                self.circuit,
            )

    def _put(self, port_map: PortMap, component: ComponentGenerator, name: str, expression: Expression) -> None:
        if name not in component.declarations.port_names:
            raise UnknownPortError(f"Port '{name}' is not declared", component.name, self.circuit)
        if name in port_map:
            raise PortMapError(f"Port '{name}' mapped twice", component.name, self.circuit)
        port_map[name] = expression
