import os
import sys

import pytest

# Add the project root to sys.path so that hdlcraft is importable
# This is needed because of the flat layout structure
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from hdlcraft.diagnostics import DiagnosticsCollector
from hdlcraft.model import ClockSource, Netlist, NetlistComponentInstance, PinConnection


@pytest.fixture
def diagnostics():
    return DiagnosticsCollector()


@pytest.fixture
def clock_source():
    return ClockSource(net_id=7, high_ticks=3, low_ticks=2, phase=1)


@pytest.fixture
def dual_flip_flop():
    """TTL7474 with unit 1 on clock net 7 and unit 2 without clock."""
    return NetlistComponentInstance(
        name="U1",
        component_type="TTL7474",
        pins={
            1: PinConnection(net="d_in"),
            2: PinConnection(net="clk_a", net_id=7),
            4: PinConnection(net="q_out"),
            10: PinConnection(net="d_in"),
        },
    )


@pytest.fixture
def counter_instance():
    return NetlistComponentInstance(
        name="CNT0",
        component_type="Counter",
        attributes={"lower": 0, "upper": 9},
        pins={
            0: PinConnection(net="clk_a", net_id=7),
            3: PinConnection(bits=("d0", "d1", None, "d3")),
            4: PinConnection(net="count"),
            5: PinConnection(net="carry"),
        },
    )


@pytest.fixture
def make_netlist(clock_source):
    """Factory building a one-circuit netlist around the given instances."""

    def _make(*instances, single_clock_domain=False, clock_sources=None):
        return Netlist(
            circuit_name="main",
            single_clock_domain=single_clock_domain,
            clock_sources=[clock_source] if clock_sources is None else clock_sources,
            instances=list(instances),
        )

    return _make
