"""Exceptions raised while loading design files."""

from pathlib import Path
from typing import Optional

from pydantic import ValidationError


class ParseError(Exception):
    """A design file could not be read or does not describe a valid design."""

    def __init__(
        self, message: str, file_path: Optional[Path] = None, line: Optional[int] = None
    ):
        self.file_path = file_path
        self.line = line
        super().__init__(self._format_message(message))

    @classmethod
    def from_validation_error(cls, error: ValidationError, file_path: Optional[Path] = None) -> "ParseError":
        """One line per failing field, located by its path in the design file."""
        lines = []
        for item in error.errors():
            loc = " -> ".join(str(x) for x in item["loc"])
            lines.append(f"{loc}: {item['msg']}")
        return cls("Validation failed:\n  " + "\n  ".join(lines), file_path)

    def _format_message(self, message: str) -> str:
        parts = []
        if self.file_path:
            parts.append(f"File: {self.file_path}")
        if self.line is not None:
            parts.append(f"Line: {self.line}")
        parts.append(message)
        return " | ".join(parts)
