"""
Port-map expressions.

An instantiation connects each port to an expression. Expressions are
dialect neutral; ``str()`` gives the neutral form used in diagnostics and
tests (``busClk7(4)``, ``0``, ``1``) and the renderer turns them into
VHDL or Verilog text.
"""

from typing import Tuple, Union

from pydantic import Field, field_validator, model_validator

from .base import FrozenModel


class NetRef(FrozenModel):
    """Reference to a whole signal."""

    name: str

    @property
    def width(self) -> None:
        return None

    def __str__(self) -> str:
        return self.name


class BitSelect(FrozenModel):
    """Single bit of a vector signal, ``<name>(<index>)``."""

    name: str
    index: int = Field(..., ge=0)

    @property
    def width(self) -> int:
        return 1

    def __str__(self) -> str:
        return f"{self.name}({self.index})"


class Constant(FrozenModel):
    """Literal level or vector."""

    value: int = Field(..., ge=0)
    width: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_fits(self) -> "Constant":
        if self.value >> self.width:
            raise ValueError(f"Constant {self.value} does not fit in {self.width} bits")
        return self

    def bits(self) -> str:
        """Binary digits, most significant first."""
        return format(self.value, f"0{self.width}b")

    def __str__(self) -> str:
        return str(self.value) if self.width == 1 else self.bits()


class Open(FrozenModel):
    """Output left unconnected."""

    @property
    def width(self) -> None:
        return None

    def __str__(self) -> str:
        return "open"


class Concat(FrozenModel):
    """Concatenation, most significant part first."""

    parts: Tuple[Union[BitSelect, Constant, NetRef], ...]

    @field_validator("parts")
    @classmethod
    def not_empty(cls, v):
        if not v:
            raise ValueError("Concatenation needs at least one part")
        return v

    @property
    def width(self) -> None:
        return None

    def __str__(self) -> str:
        return " & ".join(str(p) for p in self.parts)


Expression = Union[NetRef, BitSelect, Constant, Open, Concat]

ZERO = Constant(value=0)
ONE = Constant(value=1)
OPEN = Open()
