"""
Declaration model for generated HDL modules.

A component type declares its parameters, ports and internal signals
once. The same declaration is rendered for every dialect; widths may be
literal integers or refer to a declared parameter by name.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from hdlcraft.errors import DeclarationError
from hdlcraft.utils import ceil_log2

from .attributes import ComponentAttributes
from .base import FrozenModel

Width = Union[int, str]


class PortDirection(str, Enum):
    """Port direction enumeration."""

    IN = "in"
    OUT = "out"

    @classmethod
    def from_string(cls, value: str) -> "PortDirection":
        """Normalize common direction aliases into ``PortDirection``."""
        normalized = value.lower().strip()
        mapping = {
            "in": cls.IN,
            "input": cls.IN,
            "out": cls.OUT,
            "output": cls.OUT,
        }
        if normalized not in mapping:
            raise ValueError(f"Unknown port direction: '{value}'")
        return mapping[normalized]


class ParameterRule(str, Enum):
    """How a parameter value is derived from component attributes."""

    DIRECT = "direct"
    LOG2_RANGE = "log2_range"
    LOG2_MAX = "log2_max"
    CONSTANT = "constant"


class SignalKind(str, Enum):
    WIRE = "wire"
    REGISTER = "register"


def _check_width(v: Width) -> Width:
    if isinstance(v, int):
        if v <= 0:
            raise ValueError("Width must be positive")
    elif not v or not v.strip():
        raise ValueError("Width parameter reference cannot be empty")
    return v


class ParameterDecl(FrozenModel):
    """
    Module parameter (VHDL generic / Verilog parameter).

    ``attributes`` names the component attributes the rule reads:
    one for ``direct``, ``(upper, lower)`` for ``log2_range``, one or more
    for ``log2_max`` and none for ``constant``.
    """

    name: str
    rule: ParameterRule = ParameterRule.DIRECT
    attributes: Tuple[str, ...] = ()
    value: Optional[int] = Field(default=None, description="Constant value or default for direct")

    @model_validator(mode="after")
    def check_rule_arity(self) -> "ParameterDecl":
        expected = {
            ParameterRule.DIRECT: lambda n: n == 1,
            ParameterRule.LOG2_RANGE: lambda n: n == 2,
            ParameterRule.LOG2_MAX: lambda n: n >= 1,
            ParameterRule.CONSTANT: lambda n: n == 0,
        }[self.rule]
        if not expected(len(self.attributes)):
            raise ValueError(
                f"Parameter '{self.name}': rule {self.rule.value} cannot use attributes {self.attributes}"
            )
        if self.rule == ParameterRule.CONSTANT and self.value is None:
            raise ValueError(f"Constant parameter '{self.name}' needs a value")
        return self

    def resolve(self, attributes: ComponentAttributes) -> int:
        """Compute the parameter value for a concrete attribute set."""
        try:
            if self.rule == ParameterRule.CONSTANT:
                return self.value
            if self.rule == ParameterRule.DIRECT:
                if self.value is None:
                    return attributes.get_int(self.attributes[0])
                return attributes.get_int(self.attributes[0], self.value)
            values = [attributes.get_int(key) for key in self.attributes]
        except KeyError as e:
            raise DeclarationError(f"Parameter '{self.name}' needs missing attribute {e}")
        except TypeError as e:
            raise DeclarationError(f"Parameter '{self.name}': {e}")

        if self.rule == ParameterRule.LOG2_RANGE:
            upper, lower = values
            if upper < lower:
                raise DeclarationError(
                    f"Parameter '{self.name}': range {lower}..{upper} is empty"
                )
            return ceil_log2(upper - lower + 1)
        largest = max(values)
        if largest < 1:
            raise DeclarationError(f"Parameter '{self.name}': attributes must be positive")
        return ceil_log2(largest)


class PortDecl(FrozenModel):
    """Module port."""

    name: str
    direction: PortDirection
    width: Width = 1

    @field_validator("direction", mode="before")
    @classmethod
    def normalize_direction(cls, v):
        if isinstance(v, str):
            return PortDirection.from_string(v)
        return v

    @field_validator("width")
    @classmethod
    def validate_width(cls, v: Width) -> Width:
        """Ensure width is positive or a parameter reference."""
        return _check_width(v)

    @property
    def is_input(self) -> bool:
        return self.direction == PortDirection.IN

    @property
    def is_output(self) -> bool:
        return self.direction == PortDirection.OUT


class SignalDecl(FrozenModel):
    """Internal wire or register."""

    name: str
    kind: SignalKind = SignalKind.WIRE
    width: Width = 1

    @field_validator("width")
    @classmethod
    def validate_width(cls, v: Width) -> Width:
        """Ensure width is positive or a parameter reference."""
        return _check_width(v)

    @property
    def is_register(self) -> bool:
        return self.kind == SignalKind.REGISTER


# --- Declaration helpers ---


def direct(name: str, attribute: str, default: Optional[int] = None) -> ParameterDecl:
    return ParameterDecl(name=name, rule=ParameterRule.DIRECT, attributes=(attribute,), value=default)


def log2_range(name: str, upper: str, lower: str) -> ParameterDecl:
    return ParameterDecl(name=name, rule=ParameterRule.LOG2_RANGE, attributes=(upper, lower))


def log2_max(name: str, *attributes: str) -> ParameterDecl:
    return ParameterDecl(name=name, rule=ParameterRule.LOG2_MAX, attributes=tuple(attributes))


def constant(name: str, value: int) -> ParameterDecl:
    return ParameterDecl(name=name, rule=ParameterRule.CONSTANT, value=value)


def input_port(name: str, width: Width = 1) -> PortDecl:
    return PortDecl(name=name, direction=PortDirection.IN, width=width)


def output_port(name: str, width: Width = 1) -> PortDecl:
    return PortDecl(name=name, direction=PortDirection.OUT, width=width)


def wire(name: str, width: Width = 1) -> SignalDecl:
    return SignalDecl(name=name, kind=SignalKind.WIRE, width=width)


def register(name: str, width: Width = 1) -> SignalDecl:
    return SignalDecl(name=name, kind=SignalKind.REGISTER, width=width)


class ResolvedDeclarations(BaseModel):
    """Declarations with all widths and parameter values made concrete.

    Every mapping is ordered by name.
    """

    parameters: Dict[str, int]
    inputs: Dict[str, int]
    outputs: Dict[str, int]
    wires: Dict[str, int]
    registers: Dict[str, int]

    @property
    def ports(self) -> Dict[str, int]:
        return dict(sorted({**self.inputs, **self.outputs}.items()))


def _by_name(items):
    return tuple(sorted(items, key=lambda item: item.name))


class DeclarationModel(FrozenModel):
    """
    Static declaration set of one component type.

    Items are kept in name order so that rendered output never depends
    on the order in which a component lists them.
    """

    component: str
    parameters: Tuple[ParameterDecl, ...] = ()
    ports: Tuple[PortDecl, ...] = ()
    signals: Tuple[SignalDecl, ...] = ()

    @field_validator("parameters", "ports", "signals")
    @classmethod
    def sort_by_name(cls, v):
        return _by_name(v)

    @model_validator(mode="after")
    def check_consistency(self) -> "DeclarationModel":
        names: List[str] = [
            item.name for group in (self.parameters, self.ports, self.signals) for item in group
        ]
        seen = set()
        for name in names:
            if name in seen:
                raise DeclarationError(f"Duplicate declaration name: '{name}'", self.component)
            seen.add(name)

        parameter_names = {p.name for p in self.parameters}
        for item in (*self.ports, *self.signals):
            if isinstance(item.width, str) and item.width not in parameter_names:
                raise DeclarationError(
                    f"'{item.name}' width refers to undeclared parameter '{item.width}'",
                    self.component,
                )
        return self

    # --- Convenience accessors ---

    @property
    def port_names(self) -> FrozenSet[str]:
        return frozenset(p.name for p in self.ports)

    @property
    def inputs(self) -> Tuple[PortDecl, ...]:
        return tuple(p for p in self.ports if p.is_input)

    @property
    def outputs(self) -> Tuple[PortDecl, ...]:
        return tuple(p for p in self.ports if p.is_output)

    @property
    def wires(self) -> Tuple[SignalDecl, ...]:
        return tuple(s for s in self.signals if not s.is_register)

    @property
    def registers(self) -> Tuple[SignalDecl, ...]:
        return tuple(s for s in self.signals if s.is_register)

    def get_port(self, name: str) -> Optional[PortDecl]:
        return next((p for p in self.ports if p.name == name), None)

    def get_parameter(self, name: str) -> Optional[ParameterDecl]:
        return next((p for p in self.parameters if p.name == name), None)

    # --- Resolution ---

    def resolve(self, attributes: ComponentAttributes) -> ResolvedDeclarations:
        """Resolve parameter values and all widths for ``attributes``."""
        try:
            values = {p.name: p.resolve(attributes) for p in self.parameters}
        except DeclarationError as e:
            raise DeclarationError(str(e), self.component)

        def width_of(item) -> int:
            return item.width if isinstance(item.width, int) else values[item.width]

        return ResolvedDeclarations(
            parameters=values,
            inputs={p.name: width_of(p) for p in self.inputs},
            outputs={p.name: width_of(p) for p in self.outputs},
            wires={s.name: width_of(s) for s in self.wires},
            registers={s.name: width_of(s) for s in self.registers},
        )
