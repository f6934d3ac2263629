"""
Cycle model of the generated clock distributor.

Mirrors the registers of the ClockDistributor module one physical clock
edge at a time, so divider settings can be checked without an HDL
simulator. Unknown register contents are represented by ``None``.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from hdlcraft.model import ClockSource

logger = logging.getLogger(__name__)

Bit = Optional[int]


def _not(a: Bit) -> Bit:
    return None if a is None else 1 - a


def _and(a: Bit, b: Bit) -> Bit:
    if a == 0 or b == 0:
        return 0
    if a is None or b is None:
        return None
    return 1


class ClockDistributorModel:
    """
    Register-level model of one clock distributor.

    Args:
        high_ticks: Enable pulses the derived clock stays high
        low_ticks: Enable pulses the derived clock stays low
        phase: Length of the derived clock shift register
        unknown_at_power_up: Start the derived clock register undefined,
            as a VHDL simulator does, instead of at zero
    """

    def __init__(self, high_ticks: int, low_ticks: int, phase: int = 1, unknown_at_power_up: bool = False):
        if high_ticks < 1 or low_ticks < 1 or phase < 1:
            raise ValueError("high_ticks, low_ticks and phase must be positive")
        self.high_ticks = high_ticks
        self.low_ticks = low_ticks
        self.phase = phase
        self.counter = 0
        self.derived: List[Bit] = [None if unknown_at_power_up else 0] * phase
        self.buffer: List[Bit] = [0, 0]
        self.outputs: List[Bit] = [0, 0, 0, 0]

    @classmethod
    def from_source(cls, source: ClockSource, **kwargs) -> "ClockDistributorModel":
        return cls(source.high_ticks, source.low_ticks, source.phase, **kwargs)

    @property
    def tap(self) -> Bit:
        return self.derived[self.phase - 1]

    @property
    def bus(self) -> Tuple[Bit, ...]:
        """Current clock bus, indexed by :class:`ClockBusIndex`.

        The raw clock bit reads 1: samples are taken right after a rising edge.
        """
        return tuple(self.outputs) + (1,)

    def step(self, tick: bool) -> Tuple[Bit, ...]:
        """Advance one physical clock cycle; ``tick`` is the enable pulse."""
        tap = self.tap
        buffered = self.buffer[0]
        inverted = self.buffer[1]

        self.outputs = [
            buffered,
            inverted,
            _and(_not(buffered), tap),
            _and(buffered, _not(tap)),
        ]
        self.buffer = [tap, _not(tap)]

        if self.derived[0] is None:
            # simulation only: an undefined derived clock is forced high
            self.derived = [1] * self.phase
            self.counter = 0
        elif tick:
            is_zero = self.counter == 0
            if not is_zero:
                next_counter = self.counter - 1
            elif self.derived[0] == 1:
                next_counter = self.low_ticks - 1
            else:
                next_counter = self.high_ticks - 1
            self.derived = [self.derived[0] ^ int(is_zero)] + self.derived[:-1]
            self.counter = next_counter

        return self.bus

    def run(self, ticks: Iterable[bool]) -> List[Tuple[Bit, ...]]:
        """Step once per element of ``ticks`` and collect the bus samples."""
        return [self.step(tick) for tick in ticks]

    def run_cycles(self, cycles: int, tick_every: int = 1) -> List[Tuple[Bit, ...]]:
        """Run ``cycles`` physical cycles with an enable pulse every ``tick_every`` cycles."""
        if tick_every < 1:
            raise ValueError("tick_every must be positive")
        logger.debug("Running clock model for %d cycles (tick every %d)", cycles, tick_every)
        return self.run(n % tick_every == 0 for n in range(cycles))
