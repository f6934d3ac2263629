"""
Diagnostics collected during HDL generation.

Recoverable issues (for example an unconnected clock pin) are recorded here
instead of being raised. The collector is passed explicitly to every
generation call and handed back in the generation result.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Diagnostic severity levels."""

    INFO = "info"
    WARNING = "warning"
    SEVERE = "severe"
    ERROR = "error"

    @property
    def log_level(self) -> int:
        return {
            Severity.INFO: logging.INFO,
            Severity.WARNING: logging.WARNING,
            Severity.SEVERE: logging.WARNING,
            Severity.ERROR: logging.ERROR,
        }[self]


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic message with its generation context."""

    severity: Severity
    message: str
    circuit: str = ""
    component: str = ""
    unit: Optional[int] = None

    @property
    def location(self) -> str:
        """Human readable location, e.g. ``main:TTL7474:2``."""
        parts = [p for p in (self.circuit, self.component) if p]
        if self.unit is not None:
            parts.append(str(self.unit))
        return ":".join(parts)

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.message}"


class DiagnosticsCollector:
    """Ordered sink for generation diagnostics."""

    def __init__(self):
        self._items: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)
        logger.log(diagnostic.severity.log_level, "%s (%s)", diagnostic.message, diagnostic.location)

    def info(self, message: str, **context) -> None:
        self.report(Diagnostic(Severity.INFO, message, **context))

    def warning(self, message: str, **context) -> None:
        self.report(Diagnostic(Severity.WARNING, message, **context))

    def severe_warning(self, message: str, **context) -> None:
        self.report(Diagnostic(Severity.SEVERE, message, **context))

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._items)

    @property
    def warnings(self) -> List[Diagnostic]:
        """All diagnostics of severity warning or severe."""
        return [d for d in self._items if d.severity in (Severity.WARNING, Severity.SEVERE)]

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
