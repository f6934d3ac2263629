"""Shared utility helpers for hdlcraft."""

import re
from enum import Enum
from typing import Any

_IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*")

# VHDL-93 reserved words; VHDL is case insensitive.
VHDL_RESERVED_WORDS = frozenset(
    """
    abs access after alias all and architecture array assert attribute begin
    block body buffer bus case component configuration constant disconnect
    downto else elsif end entity exit file for function generate generic group
    guarded if impure in inertial inout is label library linkage literal loop
    map mod nand new next nor not null of on open or others out package port
    postponed procedure process pure range record register reject rem report
    return rol ror select severity shared signal sla sll sra srl subtype then
    to transport type unaffected units until use variable wait when while with
    xnor xor
    """.split()
)

# Verilog-2001 keywords; Verilog is case sensitive.
VERILOG_RESERVED_WORDS = frozenset(
    """
    always and assign automatic begin buf bufif0 bufif1 case casex casez cell
    cmos config deassign default defparam design disable edge else end endcase
    endconfig endfunction endgenerate endmodule endprimitive endspecify
    endtable endtask event for force forever fork function generate genvar
    highz0 highz1 if ifnone incdir include initial inout input instance
    integer join large liblist library localparam macromodule medium module
    nand negedge nmos nor noshowcancelled not notif0 notif1 or output
    parameter pmos posedge primitive pull0 pull1 pulldown pullup
    pulsestyle_ondetect pulsestyle_onevent rcmos real realtime reg release
    repeat rnmos rpmos rtran rtranif0 rtranif1 scalared showcancelled signed
    small specify specparam strong0 strong1 supply0 supply1 table task time
    tran tranif0 tranif1 tri tri0 tri1 triand trior trireg unsigned use
    vectored wait wand weak0 weak1 while wire wor xnor xor
    """.split()
)


def ceil_log2(value: int) -> int:
    """Number of bits needed to count ``value`` states, at least 1.

    Examples:
        >>> ceil_log2(1)
        1
        >>> ceil_log2(5)
        3
        >>> ceil_log2(8)
        3
    """
    if value < 1:
        raise ValueError(f"ceil_log2 expects a positive value, got {value}")
    return max(1, (value - 1).bit_length())


def is_hdl_identifier(name: str) -> bool:
    """Check that ``name`` is usable as both a VHDL and a Verilog identifier."""
    if not _IDENTIFIER_RE.fullmatch(name) or "__" in name or name.endswith("_"):
        return False
    return not is_reserved_word(name)


def is_reserved_word(name: str) -> bool:
    return name.lower() in VHDL_RESERVED_WORDS or name in VERILOG_RESERVED_WORDS


def enum_value(v: Any) -> str:
    """Extract the string value from an Enum member or return str(v)."""
    return v.value if isinstance(v, Enum) else str(v)


def filter_none(data: dict) -> dict:
    """Remove keys with None values from a dictionary.

    Passing None explicitly to pydantic fields with defaults fails
    validation; dropping the keys lets the defaults apply.
    """
    return {k: v for k, v in data.items() if v is not None}


def to_hdl_identifier(name: str, prefix: str = "C") -> str:
    """Turn an arbitrary name (e.g. a circuit name) into an HDL identifier.

    Examples:
        >>> to_hdl_identifier("main circuit")
        'main_circuit'
        >>> to_hdl_identifier("7 segment")
        'C_7_segment'
    """
    cleaned = re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_")
    if not cleaned or not cleaned[0].isalpha() or is_reserved_word(cleaned):
        cleaned = f"{prefix}_{cleaned}" if cleaned else prefix
    return cleaned
