"""
Base models for hdlcraft.

Provides shared base models with centralized configuration for all
schema classes, and the closed set of supported HDL dialects.

Architecture Decision:
    StrictModel (extra="forbid") is used for everything read from design
    files, where extra fields indicate user typos. FrozenModel adds
    immutability for values that are shared across a generation pass
    (declarations, clock sources) and must never change once built.
"""

from enum import Enum

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from hdlcraft.errors import UnsupportedDialectError


class HdlBaseModel(BaseModel):
    """Base model with shared configuration for all hdlcraft models.

    Provides camelCase aliasing, assignment validation, and allows field
    population by either alias or Python name.
    """

    model_config = {
        "validate_assignment": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class StrictModel(HdlBaseModel):
    """Base model that forbids unknown fields."""

    model_config = {
        **HdlBaseModel.model_config,
        "extra": "forbid",
    }


class FrozenModel(StrictModel):
    """Strict, immutable and hashable model."""

    model_config = {
        **StrictModel.model_config,
        "frozen": True,
    }


class HdlDialect(str, Enum):
    """Supported output languages."""

    VHDL = "vhdl"
    VERILOG = "verilog"

    @classmethod
    def from_string(cls, value) -> "HdlDialect":
        """Normalize common dialect aliases into ``HdlDialect``.

        Raises:
            UnsupportedDialectError: For anything other than VHDL or Verilog.
        """
        if isinstance(value, HdlDialect):
            return value
        normalized = str(value).lower().strip()
        mapping = {
            "vhdl": cls.VHDL,
            "vhd": cls.VHDL,
            "verilog": cls.VERILOG,
            "v": cls.VERILOG,
        }
        if normalized not in mapping:
            raise UnsupportedDialectError(
                f"Unsupported HDL dialect: '{value}'. Supported: {[d.value for d in cls]}"
            )
        return mapping[normalized]

    @property
    def file_extension(self) -> str:
        return ".vhd" if self is HdlDialect.VHDL else ".v"

    @property
    def remark(self) -> str:
        """Line comment prefix."""
        return "--" if self is HdlDialect.VHDL else "//"
