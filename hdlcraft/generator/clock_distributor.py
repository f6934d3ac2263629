"""
Clock distributor.

One distributor is instantiated per global clock source. From the
physical oscillator and the design-wide enable pulse it derives a clock
with the source's high/low duty cycle and phase, and publishes it as a
clock bus laid out by :class:`hdlcraft.model.ClockBusIndex`:

* a down-counter reloads with ``LowTicks - 1`` or ``HighTicks - 1`` each
  time it reaches zero, toggling the derived clock;
* a ``Phase`` bit shift register delays the toggle by ``Phase - 1``
  enable pulses;
* a buffer stage registers the tapped bit and its complement, and the
  edge ticks are computed from the buffered and raw taps.
"""

from typing import Dict

from hdlcraft.model import NR_OF_CLOCK_BITS, ClockSource, GeneratorSettings, NetRef
from hdlcraft.model.clock import ATTR_HIGH_TICKS, ATTR_LOW_TICKS, ATTR_PHASE
from hdlcraft.model.declaration import (
    DeclarationModel,
    direct,
    input_port,
    log2_max,
    output_port,
    register,
    wire,
)

from .component import ComponentGenerator

CLOCK_COMPONENT = "Clock"

HIGH_TICK_STR = "HighTicks"
LOW_TICK_STR = "LowTicks"
PHASE_STR = "Phase"
NR_OF_BITS_STR = "NrOfBits"

CLOCK_DECLARATIONS = DeclarationModel(
    component=CLOCK_COMPONENT,
    parameters=(
        direct(HIGH_TICK_STR, ATTR_HIGH_TICKS),
        direct(LOW_TICK_STR, ATTR_LOW_TICKS),
        direct(PHASE_STR, ATTR_PHASE, default=1),
        log2_max(NR_OF_BITS_STR, ATTR_HIGH_TICKS, ATTR_LOW_TICKS),
    ),
    ports=(
        input_port("GlobalClock"),
        input_port("ClockTick"),
        output_port("ClockBus", NR_OF_CLOCK_BITS),
    ),
    signals=(
        wire("s_counter_next", NR_OF_BITS_STR),
        wire("s_counter_is_zero"),
        register("s_output_regs", NR_OF_CLOCK_BITS - 1),
        register("s_buf_regs", 2),
        register("s_counter_reg", NR_OF_BITS_STR),
        register("s_derived_clock_reg", PHASE_STR),
    ),
)

CLOCK_GENERATOR = ComponentGenerator(
    name=CLOCK_COMPONENT,
    declarations=CLOCK_DECLARATIONS,
    template="clock",
    module_name="ClockDistributor",
)


def instance_label(source: ClockSource) -> str:
    return f"ClockGen_{source.net_id}"


def clock_port_map(source: ClockSource, settings: GeneratorSettings) -> Dict[str, NetRef]:
    """Port map of the distributor driving ``source``'s clock bus."""
    return {
        "ClockBus": NetRef(name=source.bus_name(settings.clock_tree_name)),
        "ClockTick": NetRef(name=settings.fpga_tick_name),
        "GlobalClock": NetRef(name=settings.fpga_clock_name),
    }
