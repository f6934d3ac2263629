"""YAML design loading."""

from .design_parser import Design, YamlDesignParser
from .errors import ParseError

__all__ = ["Design", "ParseError", "YamlDesignParser"]
