"""
Dialect renderer.

Turns a component's declarations, resolved for one attribute set, into
module text in the selected dialect. All dialect differences are either
in the templates or in the small formatting helpers below, which are
handed to the templates as context functions.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jinja2 import Environment

from hdlcraft.errors import GenerationError
from hdlcraft.model import (
    BitSelect,
    ClockBusIndex,
    ComponentAttributes,
    Concat,
    Constant,
    Expression,
    HdlDialect,
    NetRef,
    Open,
    ResolvedDeclarations,
)

from .component import ComponentGenerator

logger = logging.getLogger(__name__)

REMARK_WIDTH = 80


def _part_width(part: Expression) -> int:
    return part.width if isinstance(part, Constant) else 1


@dataclass(frozen=True)
class RenderedModule:
    """Result of rendering one component module."""

    declarations: ResolvedDeclarations
    header: str
    body: str
    text: str


class DialectRenderer:
    """Renders modules and instantiations for one dialect."""

    def __init__(self, env: Environment, dialect: HdlDialect):
        self.env = env
        self.dialect = HdlDialect.from_string(dialect)

    @property
    def is_vhdl(self) -> bool:
        return self.dialect is HdlDialect.VHDL

    @property
    def suffix(self) -> str:
        return "vhdl" if self.is_vhdl else "v"

    # --- Formatting helpers ---

    def remark(self, text: str) -> str:
        """Boxed comment block."""
        prefix = self.dialect.remark
        rule = prefix + "-" * (REMARK_WIDTH - len(prefix))
        return f"{rule}\n{prefix} {text}\n{rule}"

    def type_of(self, width) -> str:
        """Signal type for ``width`` (an int or a parameter name)."""
        if self.is_vhdl:
            if width == 1:
                return "std_logic"
            return f"std_logic_vector({self._msb(width)} downto 0)"
        if width == 1:
            return ""
        return f"[{self._msb(width)}:0] "

    @staticmethod
    def _msb(width) -> str:
        return str(width - 1) if isinstance(width, int) else f"{width} - 1"

    def literal(self, constant: Constant) -> str:
        if self.is_vhdl:
            if constant.width == 1:
                return f"'{constant.value}'"
            return f'"{constant.bits()}"'
        return f"{constant.width}'b{constant.bits()}"

    def expression(self, expression: Expression) -> str:
        """Render a port-map expression."""
        if isinstance(expression, Constant):
            return self.literal(expression)
        if isinstance(expression, NetRef):
            return expression.name
        if isinstance(expression, BitSelect):
            if self.is_vhdl:
                return f"{expression.name}({expression.index})"
            return f"{expression.name}[{expression.index}]"
        if isinstance(expression, Open):
            return "open" if self.is_vhdl else ""
        if isinstance(expression, Concat):
            parts = [self.expression(p) for p in expression.parts]
            return " & ".join(parts) if self.is_vhdl else "{" + ", ".join(parts) + "}"
        raise GenerationError(f"Cannot render expression {expression!r}")

    def associations(self, port_map: Mapping[str, Expression]) -> List[Tuple[str, str]]:
        """(formal, actual) pairs of an instance port map.

        VHDL-93 only accepts static actuals, so a VHDL concatenation is split
        into one association per element, most significant first.
        """
        pairs = []
        for name, expression in port_map.items():
            if not (self.is_vhdl and isinstance(expression, Concat)):
                pairs.append((name, self.expression(expression)))
                continue
            msb = sum(_part_width(p) for p in expression.parts) - 1
            for part in expression.parts:
                lsb = msb - _part_width(part) + 1
                formal = f"{name}({msb})" if msb == lsb else f"{name}({msb} downto {lsb})"
                pairs.append((formal, self.expression(part)))
                msb = lsb - 1
        return pairs

    def _context(self, **extra: Any) -> Dict[str, Any]:
        return {
            "remark": self.remark,
            "type_of": self.type_of,
            "bus": {index.name: int(index) for index in ClockBusIndex},
            **extra,
        }

    # --- Modules ---

    def _module_context(self, component: ComponentGenerator, attributes: ComponentAttributes) -> Dict[str, Any]:
        declarations = component.declarations
        resolved = declarations.resolve(attributes)
        layout = component.layout
        return self._context(
            component=component.name,
            module_name=component.hdl_name,
            parameters=[
                {"name": name, "value": value} for name, value in resolved.parameters.items()
            ],
            ports=declarations.ports,
            wires=declarations.wires,
            registers=declarations.registers,
            signals=declarations.signals,
            units=list(range(1, (layout.units if layout else 1) + 1)),
            resolved=resolved,
            body_template=component.template_for(self.dialect),
        )

    def render_header(self, component: ComponentGenerator, attributes: ComponentAttributes) -> str:
        """Entity / module port declaration."""
        return self.render(component, attributes).header

    def render_body(self, component: ComponentGenerator, attributes: ComponentAttributes) -> str:
        """Functionality of the module, without declarations."""
        return self.render(component, attributes).body

    def render(self, component: ComponentGenerator, attributes: ComponentAttributes) -> RenderedModule:
        """Render a complete module.

        Identical inputs always give identical text.
        """
        logger.debug("Rendering %s module for %s", self.dialect.value, component.name)
        context = self._module_context(component, attributes)
        header = self.env.get_template(f"header.{self.suffix}.j2").render(**context)
        body = self.env.get_template(context["body_template"]).render(**context)
        text = self.env.get_template(f"module.{self.suffix}.j2").render(
            header=header, body=body, **context
        )
        return RenderedModule(context["resolved"], header, body, text)

    # --- Instances and top level ---

    def render_instance(
        self,
        label: str,
        module_name: str,
        port_map: Mapping[str, Expression],
        generics: Optional[Mapping[str, int]] = None,
    ) -> str:
        context = self._context(
            label=label,
            module_name=module_name,
            associations=self.associations(port_map),
            generics=dict(generics or {}),
        )
        return self.env.get_template(f"instance.{self.suffix}.j2").render(**context)

    def render_top(
        self,
        top_name: str,
        clock_port: str,
        tick_port: str,
        clock_buses: List[str],
        nets: Mapping[str, int],
        instances: List[str],
    ) -> str:
        context = self._context(
            top_name=top_name,
            clock_port=clock_port,
            tick_port=tick_port,
            clock_buses=clock_buses,
            clock_bus_width=len(ClockBusIndex),
            nets=dict(nets),
            instances=instances,
        )
        return self.env.get_template(f"top.{self.suffix}.j2").render(**context)
