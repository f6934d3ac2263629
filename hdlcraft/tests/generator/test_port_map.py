"""Tests for port-map building and clock resolution."""

import pytest

from hdlcraft.errors import PortMapError, UnitIndexError, UnknownPortError
from hdlcraft.generator import PortMapBuilder, default_library
from hdlcraft.generator.components import COUNTER_GENERATOR, TTL7474_GENERATOR
from hdlcraft.model import (
    BitSelect,
    ClockSource,
    Concat,
    GeneratorSettings,
    NetlistComponentInstance,
    PinConnection,
)


def build(netlist, diagnostics, instance, **settings):
    builder = PortMapBuilder(netlist, diagnostics, GeneratorSettings(**settings))
    component = default_library().get(instance.component_type)
    return builder.build(component, instance)


def neutral(port_map):
    return {name: str(expression) for name, expression in port_map.items()}


class TestClockResolution:
    def test_macro_units_resolve_independently(self, make_netlist, diagnostics, dual_flip_flop):
        netlist = make_netlist(dual_flip_flop, single_clock_domain=True)
        port_map = neutral(build(netlist, diagnostics, dual_flip_flop))

        assert port_map["CLK1"] == "busClk7(4)"
        assert port_map["tick1"] == "1"
        assert port_map["CLK2"] == "0"
        assert port_map["tick2"] == "0"

        assert len(diagnostics.warnings) == 1
        warning = diagnostics.warnings[0]
        assert warning.unit == 2
        assert warning.circuit == "main"
        assert warning.component == "TTL7474"
        assert '"main"' in warning.message
        assert "unit 2" in warning.message

    def test_global_bus_uses_positive_edge_tick(self, make_netlist, diagnostics, dual_flip_flop):
        netlist = make_netlist(dual_flip_flop)
        port_map = neutral(build(netlist, diagnostics, dual_flip_flop))

        assert port_map["CLK1"] == "busClk7(4)"
        assert port_map["tick1"] == "busClk7(2)"

    def test_clock_tree_name_setting(self, make_netlist, diagnostics, dual_flip_flop):
        netlist = make_netlist(dual_flip_flop)
        port_map = neutral(build(netlist, diagnostics, dual_flip_flop, clock_tree_name="ckTree"))

        assert port_map["CLK1"] == "ckTree7(4)"

    def test_gated_clock(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(
            name="U2",
            component_type="TTL7474",
            pins={
                2: PinConnection(net="gated_clk", net_id=12),
                9: PinConnection(net="clk_a", net_id=7),
            },
        )
        port_map = build(make_netlist(instance), diagnostics, instance)

        assert str(port_map["CLK1"]) == "gated_clk"
        assert str(port_map["tick1"]) == "1"
        assert not isinstance(port_map["CLK1"], BitSelect)
        assert not isinstance(port_map["tick1"], BitSelect)
        assert str(port_map["CLK2"]) == "busClk7(4)"
        assert len(diagnostics) == 0

    def test_net_of_gated_source_is_gated(self, make_netlist, diagnostics, dual_flip_flop):
        netlist = make_netlist(
            dual_flip_flop, clock_sources=[ClockSource(net_id=7, is_global=False)]
        )
        port_map = neutral(build(netlist, diagnostics, dual_flip_flop))

        assert port_map["CLK1"] == "clk_a"
        assert port_map["tick1"] == "1"

    def test_gated_clock_ignores_single_clock_domain(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(
            name="U2", component_type="Counter", attributes={"lower": 0, "upper": 3},
            pins={0: PinConnection(net="gated_clk")},
        )
        netlist = make_netlist(instance, single_clock_domain=True)
        clock, tick = PortMapBuilder(netlist, diagnostics).resolve_clock(COUNTER_GENERATOR, instance, 1)

        assert (str(clock), str(tick)) == ("gated_clk", "1")

    def test_clock_source_id_without_net_name(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(
            name="U1",
            component_type="TTL7474",
            pins={
                2: PinConnection(net_id=7),
                9: PinConnection(net="clk_a", net_id=7),
            },
        )
        port_map = neutral(build(make_netlist(instance), diagnostics, instance))

        assert port_map["CLK1"] == "busClk7(4)"
        assert port_map["tick1"] == "busClk7(2)"
        assert port_map["CLK2"] == "busClk7(4)"
        assert len(diagnostics) == 0

    def test_gated_net_id_without_net_name(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(
            name="U1", component_type="TTL7474", pins={2: PinConnection(net_id=12)}
        )
        with pytest.raises(PortMapError, match="whole net"):
            build(make_netlist(instance), diagnostics, instance)

    def test_both_units_unconnected_warn_twice(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(name="U9", component_type="TTL7474")
        build(make_netlist(instance), diagnostics, instance)

        assert [d.unit for d in diagnostics.warnings] == [1, 2]

    @pytest.mark.parametrize("unit", [0, 3])
    def test_unit_out_of_range(self, make_netlist, diagnostics, dual_flip_flop, unit):
        builder = PortMapBuilder(make_netlist(dual_flip_flop), diagnostics)
        with pytest.raises(UnitIndexError):
            builder.resolve_clock(TTL7474_GENERATOR, dual_flip_flop, unit)

    def test_unit_count_mismatch(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(name="U1", component_type="TTL7474", unit_count=3)
        with pytest.raises(UnitIndexError):
            build(make_netlist(instance), diagnostics, instance)


class TestNetMapping:
    def test_dual_flip_flop_map(self, make_netlist, diagnostics, dual_flip_flop):
        port_map = neutral(build(make_netlist(dual_flip_flop), diagnostics, dual_flip_flop))

        assert port_map == {
            "CLK1": "busClk7(4)",
            "CLK2": "0",
            "D1": "d_in",
            "D2": "d_in",
            "Q1": "q_out",
            "Q2": "open",
            "nCLR1": "1",
            "nCLR2": "1",
            "nPRE1": "1",
            "nPRE2": "1",
            "nQ1": "open",
            "nQ2": "open",
            "tick1": "busClk7(2)",
            "tick2": "0",
        }

    def test_every_declared_port_mapped_once(self, make_netlist, diagnostics, dual_flip_flop):
        port_map = build(make_netlist(dual_flip_flop), diagnostics, dual_flip_flop)

        assert set(port_map) == TTL7474_GENERATOR.declarations.port_names
        assert list(port_map) == sorted(port_map)

    def test_counter_map(self, make_netlist, diagnostics, counter_instance):
        port_map = build(make_netlist(counter_instance), diagnostics, counter_instance)

        assert isinstance(port_map["LoadValue"], Concat)
        assert str(port_map["LoadValue"]) == "d3 & 0 & d1 & d0"
        assert str(port_map["Enable"]) == "1"
        assert str(port_map["Load"]) == "0"
        assert str(port_map["Count"]) == "count"
        assert str(port_map["CLK"]) == "busClk7(4)"
        assert str(port_map["tick"]) == "busClk7(2)"

    def test_unconnected_vector_input_is_widened(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(
            name="CNT1", component_type="Counter", attributes={"lower": 0, "upper": 9},
            pins={0: PinConnection(net="clk_a", net_id=7)},
        )
        port_map = build(make_netlist(instance), diagnostics, instance)

        assert str(port_map["LoadValue"]) == "0000"

    def test_bit_count_mismatch(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(
            name="CNT1", component_type="Counter", attributes={"lower": 0, "upper": 9},
            pins={3: PinConnection(bits=("a", "b"))},
        )
        with pytest.raises(PortMapError, match="2 bits"):
            build(make_netlist(instance), diagnostics, instance)

    def test_output_bits_rejected(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(
            name="CNT1", component_type="Counter", attributes={"lower": 0, "upper": 1},
            pins={4: PinConnection(bits=("a",))},
        )
        with pytest.raises(PortMapError, match="whole net"):
            build(make_netlist(instance), diagnostics, instance)

    def test_data_pin_needs_net_name(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(
            name="U1", component_type="TTL7474", pins={1: PinConnection(net_id=3)}
        )
        with pytest.raises(PortMapError, match="no net name"):
            build(make_netlist(instance), diagnostics, instance)

    def test_unknown_pin(self, make_netlist, diagnostics):
        instance = NetlistComponentInstance(
            name="U1", component_type="TTL7474", pins={12: PinConnection(net="x")}
        )
        with pytest.raises(UnknownPortError, match="Pin 12"):
            build(make_netlist(instance), diagnostics, instance)

    def test_undeclared_port_name(self, make_netlist, diagnostics, dual_flip_flop):
        builder = PortMapBuilder(make_netlist(dual_flip_flop), diagnostics)
        with pytest.raises(UnknownPortError, match="'CLK3'"):
            builder._put({}, TTL7474_GENERATOR, "CLK3", BitSelect(name="b", index=0))

    def test_port_mapped_twice(self, make_netlist, diagnostics, dual_flip_flop):
        builder = PortMapBuilder(make_netlist(dual_flip_flop), diagnostics)
        port_map = {}
        builder._put(port_map, TTL7474_GENERATOR, "D1", BitSelect(name="b", index=0))
        with pytest.raises(PortMapError, match="twice"):
            builder._put(port_map, TTL7474_GENERATOR, "D1", BitSelect(name="b", index=0))

    def test_deterministic(self, make_netlist, dual_flip_flop):
        from hdlcraft.diagnostics import DiagnosticsCollector

        netlist = make_netlist(dual_flip_flop)
        first = build(netlist, DiagnosticsCollector(), dual_flip_flop)
        second = build(netlist, DiagnosticsCollector(), dual_flip_flop)
        assert list(first.items()) == list(second.items())
