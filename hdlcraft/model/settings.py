"""Generator configuration."""

from typing import Any, Optional

from pydantic import Field, field_validator

from hdlcraft.utils import is_hdl_identifier

from .base import HdlDialect, StrictModel


class GeneratorSettings(StrictModel):
    """Settings shared by every generation call of one run."""

    dialect: HdlDialect = Field(default=HdlDialect.VHDL, description="Output language")
    clock_tree_name: str = Field(default="busClk", description="Prefix of clock bus signals")
    fpga_clock_name: str = Field(default="FPGA_GlobalClock", description="Physical clock port")
    fpga_tick_name: str = Field(default="FPGA_Tick", description="Global enable pulse port")
    top_name: Optional[str] = Field(default=None, description="Top-level name (default: circuit)")

    @field_validator("dialect", mode="before")
    @classmethod
    def normalize_dialect(cls, v: Any) -> Any:
        return HdlDialect.from_string(v)

    @field_validator("clock_tree_name", "fpga_clock_name", "fpga_tick_name", "top_name")
    @classmethod
    def validate_identifier(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_hdl_identifier(v):
            raise ValueError(f"'{v}' is not a valid HDL identifier")
        return v
