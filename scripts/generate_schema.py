import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from hdlcraft.model import GeneratorSettings, Netlist


def generate_schema(output_dir: Path = project_root / "schemas"):
    output_dir.mkdir(parents=True, exist_ok=True)

    schemas = {
        "netlist.schema.json": Netlist.model_json_schema(by_alias=True),
        "settings.schema.json": GeneratorSettings.model_json_schema(by_alias=True),
    }
    for filename, schema in schemas.items():
        with open(output_dir / filename, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Generated {output_dir / filename}")


if __name__ == "__main__":
    generate_schema()
