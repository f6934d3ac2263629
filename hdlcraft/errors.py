"""Fatal generation errors.

Recoverable configuration problems are reported through
:class:`hdlcraft.diagnostics.DiagnosticsCollector`; everything raised from
here aborts generation before any text is returned.
"""

from typing import Optional


class GenerationError(Exception):
    """Error that aborts HDL generation."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        circuit: Optional[str] = None,
    ):
        self.component = component
        self.circuit = circuit
        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        """Format error message with circuit and component information."""
        parts = []
        if self.circuit:
            parts.append(f"Circuit: {self.circuit}")
        if self.component:
            parts.append(f"Component: {self.component}")
        parts.append(message)
        return " | ".join(parts)


class UnsupportedDialectError(GenerationError):
    """Requested HDL dialect is not VHDL or Verilog."""


class DeclarationError(GenerationError):
    """Declaration model is inconsistent (duplicate names, unknown width refs)."""


class UnknownComponentError(GenerationError):
    """No generator is registered for a component type."""


class UnknownPortError(GenerationError):
    """Port map references a port or pin the component does not declare."""


class UnitIndexError(GenerationError):
    """Macro component unit index outside ``1..unit_count``."""


class PortMapError(GenerationError):
    """Port map is internally inconsistent (e.g. a port assigned twice)."""
