#!/usr/bin/env python3
"""
hdlcraft - HDL generation for FPGA synthesis.

Usage:
    python scripts/hdlcraft.py generate design.yml --output ./generated
    python scripts/hdlcraft.py generate design.yml --dialect verilog --json
    python scripts/hdlcraft.py list-components

Subcommands:
    generate         Generate VHDL/Verilog from a design YAML
    list-components  List the component types that can be generated
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from hdlcraft.errors import GenerationError
from hdlcraft.generator import ModuleGenerator, default_library
from hdlcraft.parser import ParseError, YamlDesignParser
from hdlcraft.utils import enum_value


def cmd_generate(args):
    """Generate HDL files from a design YAML."""
    output_base = args.output or os.path.dirname(os.path.abspath(args.input))

    try:
        design = YamlDesignParser().parse_file(args.input)
        generator = ModuleGenerator(design.settings, dialect=args.dialect)
        result = generator.generate_design(design.netlist)
        written = generator.write_files(result.files, output_base)
    except (GenerationError, ParseError) as e:
        if args.json:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            print(f"Error: {e}")
        sys.exit(1)

    if args.json:
        print(
            json.dumps(
                {
                    "success": True,
                    "dialect": enum_value(generator.dialect),
                    "files": {name: str(path) for name, path in written.items()},
                    "warnings": [
                        {"message": d.message, "location": d.location, "severity": enum_value(d.severity)}
                        for d in result.warnings
                    ],
                }
            )
        )
    else:
        print(f"\n✓ Generated {len(written)} {generator.dialect.value} files to: {output_base}")
        for name in written:
            print(f"    {name}")
        for diagnostic in result.warnings:
            print(f"  warning: {diagnostic.message}")


def cmd_list_components(args):
    """List available component types."""
    library = default_library()
    if args.json:
        print(json.dumps({"success": True, "components": library.names}))
        return
    print("\nAvailable component types:")
    for name in library.names:
        component = library.get(name)
        units = component.layout.units if component.layout else 1
        print(f"  {name:12} - module {component.hdl_name}, {units} unit(s)")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="hdlcraft", description="HDL generation for FPGA synthesis"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen_parser = subparsers.add_parser("generate", help="Generate HDL from a design YAML")
    gen_parser.add_argument("input", help="Design YAML file")
    gen_parser.add_argument("--output", "-o", help="Output directory (default: same as input)")
    gen_parser.add_argument(
        "--dialect",
        choices=["vhdl", "verilog"],
        default=None,
        help="Output language (default: from the design settings)",
    )
    gen_parser.add_argument("--json", action="store_true", help="JSON output")
    gen_parser.set_defaults(func=cmd_generate)

    list_parser = subparsers.add_parser("list-components", help="List component types")
    list_parser.add_argument("--json", action="store_true", help="JSON output")
    list_parser.set_defaults(func=cmd_list_components)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
