"""
Pydantic data models for HDL generation.

Declarations describe what a component type's module looks like; the
netlist models describe what the surrounding design connects to it.
"""

from .attributes import ComponentAttributes
from .base import FrozenModel, HdlBaseModel, HdlDialect, StrictModel
from .clock import NR_OF_CLOCK_BITS, ClockBusIndex, ClockSource
from .declaration import (
    DeclarationModel,
    ParameterDecl,
    ParameterRule,
    PortDecl,
    PortDirection,
    ResolvedDeclarations,
    SignalDecl,
    SignalKind,
)
from .expression import ONE, OPEN, ZERO, BitSelect, Concat, Constant, Expression, NetRef, Open
from .netlist import Netlist, NetlistComponentInstance, PinConnection
from .settings import GeneratorSettings

__all__ = [
    # Base
    "HdlBaseModel",
    "StrictModel",
    "FrozenModel",
    "HdlDialect",
    "ComponentAttributes",
    # Declarations
    "DeclarationModel",
    "ParameterDecl",
    "ParameterRule",
    "PortDecl",
    "PortDirection",
    "SignalDecl",
    "SignalKind",
    "ResolvedDeclarations",
    # Clock
    "ClockBusIndex",
    "ClockSource",
    "NR_OF_CLOCK_BITS",
    # Expressions
    "Expression",
    "NetRef",
    "BitSelect",
    "Constant",
    "Concat",
    "Open",
    "ZERO",
    "ONE",
    "OPEN",
    # Netlist
    "Netlist",
    "NetlistComponentInstance",
    "PinConnection",
    # Settings
    "GeneratorSettings",
]
