"""
Netlist inputs consumed by the generator.

The netlist is extracted elsewhere; these models only describe what the
generator reads from it: per-pin connectivity of each component instance,
the clock sources found in the design and design-wide flags.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import Field, field_validator, model_validator

from hdlcraft.utils import is_hdl_identifier

from .attributes import AttributeValue, ComponentAttributes
from .base import StrictModel
from .clock import ClockSource


class PinConnection(StrictModel):
    """
    Connectivity of one component pin.

    A pin is either connected to a whole net (``net``) or, for multi-bit
    pins, bit by bit (``bits``, least significant first, ``None`` for an
    unconnected bit). ``net_id`` identifies the net for clock source lookup.
    """

    net: Optional[str] = Field(default=None, description="Net name")
    net_id: Optional[int] = Field(default=None, ge=0, description="Net id")
    bits: Tuple[Optional[str], ...] = Field(default=(), description="Per-bit net names")

    @model_validator(mode="after")
    def check_exclusive(self) -> "PinConnection":
        if self.net is not None and self.bits:
            raise ValueError("A pin connects either a whole net or individual bits, not both")
        return self

    @property
    def is_connected(self) -> bool:
        return (
            self.net is not None
            or self.net_id is not None
            or any(b is not None for b in self.bits)
        )


class NetlistComponentInstance(StrictModel):
    """A placed component with its pin connections."""

    name: str = Field(..., description="Instance label")
    component_type: str = Field(..., alias="type", description="Component type name")
    attributes: Dict[str, AttributeValue] = Field(default_factory=dict)
    pins: Dict[int, PinConnection] = Field(default_factory=dict)
    unit_count: Optional[int] = Field(default=None, ge=1, alias="units")
    clock_pins: Tuple[int, ...] = Field(default=(), description="Clock pin index per unit")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Instance name cannot be empty")
        if not is_hdl_identifier(v):
            raise ValueError(f"Instance name '{v}' is not a valid HDL identifier")
        return v

    @property
    def attribute_set(self) -> ComponentAttributes:
        return ComponentAttributes(self.attributes)

    def end(self, pin: int) -> Optional[PinConnection]:
        """Connection of ``pin``, or None if nothing is attached."""
        return self.pins.get(pin)

    def is_end_connected(self, pin: int) -> bool:
        connection = self.pins.get(pin)
        return connection is not None and connection.is_connected


class Netlist(StrictModel):
    """One design (circuit) as seen by the generator."""

    circuit_name: str = Field(..., alias="circuit")
    single_clock_domain: bool = Field(
        default=False, description="Whole design runs from the global clock tree"
    )
    clock_sources: List[ClockSource] = Field(default_factory=list)
    instances: List[NetlistComponentInstance] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique(self) -> "Netlist":
        net_ids = [c.net_id for c in self.clock_sources]
        if len(net_ids) != len(set(net_ids)):
            raise ValueError("Clock sources must have distinct net ids")
        names = [i.name for i in self.instances]
        if len(names) != len(set(names)):
            raise ValueError("Instance names must be unique")
        return self

    def get_clock_source(self, connection: Optional[PinConnection]) -> Optional[ClockSource]:
        """Global clock source driving ``connection``, if any.

        Nets driven by gated sources, or by no clock at all, return None.
        """
        if connection is None or connection.net_id is None:
            return None
        for source in self.clock_sources:
            if source.net_id == connection.net_id and source.is_global:
                return source
        return None

    def get_clock_source_id(self, connection: Optional[PinConnection]) -> int:
        """Net id of the driving global clock source, -1 when there is none."""
        source = self.get_clock_source(connection)
        return source.net_id if source is not None else -1

    @property
    def global_clock_sources(self) -> List[ClockSource]:
        """Clock sources that get a distributor, ordered by net id."""
        return sorted((c for c in self.clock_sources if c.is_global), key=lambda c: c.net_id)
