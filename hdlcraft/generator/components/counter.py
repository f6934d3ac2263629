"""
Loadable modulo counter.

Counts the position inside the attribute range ``lower..upper``, i.e.
from 0 to ``upper - lower``, and wraps to 0. ``CarryOut`` is high while
the counter sits on its last value with ``Enable`` set.
"""

from hdlcraft.model import ONE, PortDirection
from hdlcraft.model.declaration import (
    DeclarationModel,
    direct,
    input_port,
    log2_range,
    output_port,
    register,
    wire,
)

from ..component import ComponentGenerator, PinLayout, UnitPort

ATTR_LOWER = "lower"
ATTR_UPPER = "upper"

COUNTER_DECLARATIONS = DeclarationModel(
    component="Counter",
    parameters=(
        direct("Lower", ATTR_LOWER),
        direct("Upper", ATTR_UPPER),
        log2_range("NrOfBits", ATTR_UPPER, ATTR_LOWER),
    ),
    ports=(
        input_port("CLK"),
        input_port("tick"),
        input_port("Enable"),
        input_port("Load"),
        input_port("LoadValue", "NrOfBits"),
        output_port("Count", "NrOfBits"),
        output_port("CarryOut"),
    ),
    signals=(
        wire("s_count_next", "NrOfBits"),
        wire("s_at_last"),
        register("s_count_reg", "NrOfBits"),
    ),
)

COUNTER_LAYOUT = PinLayout(
    pin_count=6,
    clock_pins=(0,),
    ports=(
        UnitPort("Enable", pins=(1,), default=ONE),
        UnitPort("Load", pins=(2,)),
        UnitPort("LoadValue", pins=(3,)),
        UnitPort("Count", pins=(4,), direction=PortDirection.OUT),
        UnitPort("CarryOut", pins=(5,), direction=PortDirection.OUT),
    ),
)

COUNTER_GENERATOR = ComponentGenerator(
    name="Counter",
    declarations=COUNTER_DECLARATIONS,
    template="counter",
    layout=COUNTER_LAYOUT,
)
