"""
Base generator interface for HDL code generation.

Holds the Jinja2 environment shared by all renderers and the file
writing logic. Dialect differences live in the templates and in
:class:`hdlcraft.generator.renderer.DialectRenderer`, not in subclasses.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from hdlcraft.model import ComponentAttributes, Netlist

logger = logging.getLogger(__name__)


class BaseGenerator(ABC):
    """
    Abstract base class for HDL generators.

    Templates are loaded from the 'templates' subdirectory next to this
    file unless another directory is given.
    """

    def __init__(self, template_dir: Optional[str] = None):
        """
        Initialize the generator with Jinja2 environment.

        Args:
            template_dir: Optional custom template directory.
        """
        if template_dir is None:
            template_dir = os.path.join(os.path.dirname(__file__), "templates")

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    @abstractmethod
    def generate_module(self, component_type: str, attributes: ComponentAttributes) -> str:
        """
        Generate the module (entity + architecture) of a component type.

        Args:
            component_type: Registered component type name
            attributes: Component configuration

        Returns:
            Module source text
        """
        pass

    @abstractmethod
    def generate_design(self, netlist: Netlist):
        """
        Generate every file of a design.

        Args:
            netlist: Design to generate

        Returns:
            GenerationResult with file contents and diagnostics
        """
        pass

    def write_files(self, files: Dict[str, str], output_dir: Union[str, Path]) -> Dict[str, Path]:
        """
        Write generated files to an output directory.

        Args:
            files: Mapping of relative file name to content
            output_dir: Output directory path

        Returns:
            Dictionary mapping filename to written file path
        """
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        written = {}
        for filename, content in files.items():
            file_path = output_path / filename
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)
            written[filename] = file_path
            logger.debug("Written %s", file_path)

        return written
