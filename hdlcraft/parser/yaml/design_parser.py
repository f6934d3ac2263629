"""
YAML parser for design descriptions.

A design file carries the netlist extracted from a schematic plus the
generator settings, e.g.::

    settings:
      dialect: vhdl
    circuit: main
    singleClockDomain: false
    clockSources:
      - {netId: 7, highTicks: 3, lowTicks: 2}
    instances:
      - name: U1
        type: TTL7474
        pins:
          2: {net: clk_a, netId: 7}
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from hdlcraft.model import GeneratorSettings, Netlist
from hdlcraft.utils import filter_none

from .errors import ParseError

logger = logging.getLogger(__name__)


@dataclass
class Design:
    """A parsed design: what to generate and how."""

    netlist: Netlist
    settings: GeneratorSettings


class YamlDesignParser:
    """Loads design YAML files into validated models."""

    def parse_file(self, file_path: Union[str, Path]) -> Design:
        """
        Parse a design YAML file.

        Raises:
            ParseError: If the file is missing, malformed or invalid
        """
        file_path = Path(file_path).resolve()

        if not file_path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line_num = mark.line + 1 if mark else None
            raise ParseError(f"YAML syntax error: {e}", file_path, line_num)

        return self.parse_data(data, file_path)

    def parse_string(self, text: str) -> Design:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            raise ParseError(f"YAML syntax error: {e}", line=mark.line + 1 if mark else None)
        return self.parse_data(data)

    def parse_data(self, data: Any, file_path: Path = None) -> Design:
        if not isinstance(data, dict):
            raise ParseError("Root element must be a YAML object/dictionary", file_path)
        if "circuit" not in data:
            raise ParseError("Missing required field: circuit", file_path)

        netlist_data: Dict[str, Any] = {k: v for k, v in data.items() if k != "settings"}
        settings_data = data.get("settings") or {}
        if not isinstance(settings_data, dict):
            raise ParseError("'settings' must be a YAML object/dictionary", file_path)
        settings_data = filter_none(settings_data)

        try:
            settings = GeneratorSettings.model_validate(settings_data)
            netlist = Netlist.model_validate(netlist_data)
        except ValidationError as e:
            raise ParseError.from_validation_error(e, file_path)

        logger.debug(
            "Loaded circuit '%s': %d instances, %d clock sources",
            netlist.circuit_name,
            len(netlist.instances),
            len(netlist.clock_sources),
        )
        return Design(netlist=netlist, settings=settings)
