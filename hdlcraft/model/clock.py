"""
Clock sources and the clock-bus protocol.

Every clock source in a design gets one clock distributor whose output is
a 5-bit clock bus. The bit layout below is shared by the distributor and
by every component that connects to a bus; it never changes.
"""

from enum import IntEnum

from pydantic import Field

from .attributes import ComponentAttributes
from .base import FrozenModel


class ClockBusIndex(IntEnum):
    """Bit positions inside a clock bus."""

    DERIVED_CLOCK = 0
    INVERTED_DERIVED_CLOCK = 1
    POSITIVE_EDGE_TICK = 2
    NEGATIVE_EDGE_TICK = 3
    GLOBAL_CLOCK = 4


NR_OF_CLOCK_BITS = len(ClockBusIndex)

# Attribute keys of a clock component.
ATTR_HIGH_TICKS = "high_ticks"
ATTR_LOW_TICKS = "low_ticks"
ATTR_PHASE = "phase"


class ClockSource(FrozenModel):
    """
    A distinct net driving clock pins, with its divider configuration.

    ``net_id`` is the identity: two pins on the same net share one source
    and therefore one clock bus.
    """

    net_id: int = Field(..., ge=0, description="Id of the net this clock drives")
    high_ticks: int = Field(default=1, ge=1, description="Enable pulses the clock stays high")
    low_ticks: int = Field(default=1, ge=1, description="Enable pulses the clock stays low")
    phase: int = Field(default=1, ge=1, description="Delay tap of the derived clock")
    is_global: bool = Field(default=True, description="False for gated (logic-driven) clocks")

    @property
    def period(self) -> int:
        """Derived clock period in enable pulses."""
        return self.high_ticks + self.low_ticks

    @property
    def attributes(self) -> ComponentAttributes:
        """Attribute view consumed by the clock distributor declarations."""
        return ComponentAttributes(
            {
                ATTR_HIGH_TICKS: self.high_ticks,
                ATTR_LOW_TICKS: self.low_ticks,
                ATTR_PHASE: self.phase,
            }
        )

    def bus_name(self, clock_tree_name: str) -> str:
        """Name of the clock bus signal, e.g. ``busClk7``."""
        return f"{clock_tree_name}{self.net_id}"
