"""Tests for the clock distributor component."""

import pytest

from hdlcraft.errors import DeclarationError
from hdlcraft.generator import CLOCK_GENERATOR, ModuleGenerator, clock_port_map
from hdlcraft.generator.clock_distributor import instance_label
from hdlcraft.model import NR_OF_CLOCK_BITS, ClockSource, ComponentAttributes, GeneratorSettings


class TestDeclarations:
    def test_bus_port(self):
        port = CLOCK_GENERATOR.declarations.get_port("ClockBus")
        assert port.is_output
        assert port.width == NR_OF_CLOCK_BITS == 5

    def test_resolution(self, clock_source):
        resolved = CLOCK_GENERATOR.declarations.resolve(clock_source.attributes)

        assert resolved.parameters == {"HighTicks": 3, "LowTicks": 2, "NrOfBits": 2, "Phase": 1}
        assert resolved.registers["s_output_regs"] == 4
        assert resolved.registers["s_derived_clock_reg"] == 1
        assert resolved.wires["s_counter_next"] == 2

    def test_counter_width_follows_longest_phase(self):
        resolved = CLOCK_GENERATOR.declarations.resolve(
            ComponentAttributes(high_ticks=1, low_ticks=9, phase=3)
        )
        assert resolved.parameters["NrOfBits"] == 4
        assert resolved.registers["s_derived_clock_reg"] == 3

    def test_missing_tick_counts(self):
        with pytest.raises(DeclarationError, match="Clock"):
            CLOCK_GENERATOR.declarations.resolve(ComponentAttributes(high_ticks=2))


class TestInstance:
    def test_port_map(self, clock_source):
        port_map = clock_port_map(clock_source, GeneratorSettings(fpga_tick_name="Tick"))

        assert {name: str(e) for name, e in port_map.items()} == {
            "ClockBus": "busClk7",
            "ClockTick": "Tick",
            "GlobalClock": "FPGA_GlobalClock",
        }

    def test_label(self):
        assert instance_label(ClockSource(net_id=12)) == "ClockGen_12"

    def test_vhdl_instance(self, clock_source):
        text = ModuleGenerator().generate_clock_instance(clock_source)

        assert text.startswith("ClockGen_7 : entity work.ClockDistributor")
        assert "      HighTicks => 3," in text
        assert "      ClockBus => busClk7," in text


class TestBody:
    @pytest.fixture
    def attributes(self, clock_source):
        return clock_source.attributes

    def test_vhdl_taps_delayed_phase(self, attributes):
        text = ModuleGenerator(dialect="vhdl").generate_module("Clock", attributes)

        assert "s_buf_regs(0) <= s_derived_clock_reg(Phase - 1);" in text
        assert "s_output_regs(2) <= not s_buf_regs(0) and s_derived_clock_reg(Phase - 1);" in text
        assert "s_output_regs(3) <= s_buf_regs(0) and not s_derived_clock_reg(Phase - 1);" in text
        assert "-- simulation only" in text
        assert "std_logic_vector(to_unsigned(LowTicks - 1, NrOfBits))" in text

    def test_verilog_edge_ticks(self, attributes):
        text = ModuleGenerator(dialect="verilog").generate_module("Clock", attributes)

        assert "s_output_regs[2] <= ~s_buf_regs[0] & s_derived_clock_reg[Phase - 1];" in text
        assert "s_output_regs[3] <= s_buf_regs[0] & ~s_derived_clock_reg[Phase - 1];" in text
        assert "s_output_regs[1] <= s_buf_regs[1];" in text
        assert "initial" in text

    @pytest.mark.parametrize("dialect", ["vhdl", "verilog"])
    def test_every_bus_bit_driven(self, attributes, dialect):
        text = ModuleGenerator(dialect=dialect).generate_module("Clock", attributes)
        fmt = "ClockBus({}) <=" if dialect == "vhdl" else "assign ClockBus[{}] ="

        for index in range(NR_OF_CLOCK_BITS):
            assert text.count(fmt.format(index)) == 1
