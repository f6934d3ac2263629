"""Python models of generated hardware."""

from .clock_model import ClockDistributorModel

__all__ = ["ClockDistributorModel"]
