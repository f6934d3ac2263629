"""
Component generator descriptions.

A component type is described by composition: a declaration model, the
base name of its body templates and the layout of its pins. There is no
per-dialect or per-component subclassing; the renderer and the port-map
builder read these descriptions.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from hdlcraft.errors import UnitIndexError, UnsupportedDialectError
from hdlcraft.model import ZERO, DeclarationModel, Expression, HdlDialect, PortDirection


@dataclass(frozen=True)
class UnitPort:
    """
    A non-clock port repeated once per unit.

    ``pins`` holds the instance pin index for each unit. ``default`` is
    the constant an unconnected input pin is tied to.
    """

    base_name: str
    pins: Tuple[int, ...]
    direction: PortDirection = PortDirection.IN
    default: Expression = ZERO


@dataclass(frozen=True)
class PinLayout:
    """Pin arrangement of a component type."""

    pin_count: int
    clock_pins: Tuple[int, ...] = ()
    ports: Tuple[UnitPort, ...] = ()
    clock_port: str = "CLK"
    tick_port: str = "tick"

    @property
    def units(self) -> int:
        return max([len(self.clock_pins)] + [len(p.pins) for p in self.ports] + [1])

    @property
    def is_macro(self) -> bool:
        return self.units > 1

    def port_name(self, base_name: str, unit: int) -> str:
        """Port name of ``base_name`` for ``unit``; macros append the unit index."""
        if unit < 1 or unit > self.units:
            raise UnitIndexError(f"Unit {unit} out of range 1..{self.units}")
        return f"{base_name}{unit}" if self.is_macro else base_name


@dataclass(frozen=True)
class ComponentGenerator:
    """Everything needed to emit one component type."""

    name: str
    declarations: DeclarationModel
    template: str
    layout: Optional[PinLayout] = None
    module_name: Optional[str] = None
    dialects: FrozenSet[HdlDialect] = field(default_factory=lambda: frozenset(HdlDialect))

    @property
    def hdl_name(self) -> str:
        return self.module_name or self.name

    def template_for(self, dialect: HdlDialect) -> str:
        """Body template file name for ``dialect``."""
        if dialect not in self.dialects:
            raise UnsupportedDialectError(
                f"No {dialect.value} implementation available", component=self.name
            )
        suffix = "vhdl" if dialect is HdlDialect.VHDL else "v"
        return f"{self.template}.{suffix}.j2"
