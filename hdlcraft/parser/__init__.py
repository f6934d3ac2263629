"""Parsers for design descriptions."""

from .yaml import Design, ParseError, YamlDesignParser

__all__ = ["Design", "ParseError", "YamlDesignParser"]
