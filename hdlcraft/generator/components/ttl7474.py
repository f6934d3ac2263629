"""TTL 7474: dual positive-edge D flip-flop with active-low preset and clear."""

from hdlcraft.model import ONE, PortDirection
from hdlcraft.model.declaration import DeclarationModel, input_port, output_port, register, wire

from ..component import ComponentGenerator, PinLayout, UnitPort

UNITS = (1, 2)

TTL7474_DECLARATIONS = DeclarationModel(
    component="TTL7474",
    ports=tuple(
        port
        for n in UNITS
        for port in (
            input_port(f"nCLR{n}"),
            input_port(f"D{n}"),
            input_port(f"CLK{n}"),
            input_port(f"tick{n}"),
            input_port(f"nPRE{n}"),
            output_port(f"Q{n}"),
            output_port(f"nQ{n}"),
        )
    ),
    signals=tuple(
        signal for n in UNITS for signal in (register(f"state{n}"), wire(f"next{n}"))
    ),
)

# Pin numbering follows the DIP package with VCC and GND removed.
TTL7474_LAYOUT = PinLayout(
    pin_count=12,
    clock_pins=(2, 9),
    ports=(
        UnitPort("nCLR", pins=(0, 11), default=ONE),
        UnitPort("D", pins=(1, 10)),
        UnitPort("nPRE", pins=(3, 8), default=ONE),
        UnitPort("Q", pins=(4, 7), direction=PortDirection.OUT),
        UnitPort("nQ", pins=(5, 6), direction=PortDirection.OUT),
    ),
)

TTL7474_GENERATOR = ComponentGenerator(
    name="TTL7474",
    declarations=TTL7474_DECLARATIONS,
    template="ttl7474",
    layout=TTL7474_LAYOUT,
)
