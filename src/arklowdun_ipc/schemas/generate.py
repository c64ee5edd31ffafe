"""Build-time JSON Schema generation script for the IPC contracts."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from arklowdun_ipc.contracts import list_commands
from arklowdun_ipc.schemas import DIRECTIONS, contract_schema, schema_name

DEFAULT_OUTPUT = Path("schemas")


def generate_all_schemas() -> Dict[str, Dict[str, Any]]:
    """Generate every contract schema.

    Returns:
        Dict mapping schema name to schema dict
    """
    schemas: Dict[str, Dict[str, Any]] = {}
    for command in list_commands():
        for direction in DIRECTIONS:
            schemas[schema_name(command, direction)] = contract_schema(command, direction)
    return schemas


def schema_to_json(schema: Dict[str, Any]) -> str:
    """Serialize schema to deterministic JSON string.

    Args:
        schema: JSON Schema dict

    Returns:
        Formatted JSON string with trailing newline
    """
    return json.dumps(schema, indent=2, sort_keys=True) + "\n"


def write_all_schemas(schemas: Dict[str, Dict[str, Any]], output: Path) -> None:
    """Write all schemas to *output* as ``<name>.schema.json``."""
    output.mkdir(parents=True, exist_ok=True)
    for name, schema in schemas.items():
        path = output / f"{name}.schema.json"
        path.write_text(schema_to_json(schema), encoding="utf-8")
        print(f"Generated {path}")


def check_drift(output: Path) -> int:
    """Check if generated schemas match the files in *output*.

    Returns:
        0 if all schemas match, 1 if any drift detected
    """
    schemas = generate_all_schemas()
    drift_detected = False

    for name, schema in schemas.items():
        path = output / f"{name}.schema.json"
        if not path.exists():
            print(f"ERROR: Missing schema file: {path}", file=sys.stderr)
            drift_detected = True
            continue
        if path.read_text(encoding="utf-8") != schema_to_json(schema):
            print(f"ERROR: Schema drift detected in {path}", file=sys.stderr)
            drift_detected = True

    expected_files = {f"{name}.schema.json" for name in schemas}
    actual_files = {p.name for p in output.glob("*.schema.json")}
    for orphan in sorted(actual_files - expected_files):
        print(f"Orphaned schema {orphan}", file=sys.stderr)
        drift_detected = True

    if drift_detected:
        print("\nSchema drift detected. Run without --check to regenerate.", file=sys.stderr)
        return 1

    print(f"All {len(schemas)} schemas are up to date.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for schema generation script.

    Returns:
        Exit code (0 for success, 1 for failure/drift)
    """
    parser = argparse.ArgumentParser(
        description="Generate JSON schemas for the arklowdun IPC contracts"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="Directory for the schema files (default: ./schemas)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check for schema drift without writing files (CI mode)",
    )
    args = parser.parse_args(argv)

    if args.check:
        return check_drift(args.output)

    schemas = generate_all_schemas()
    write_all_schemas(schemas, args.output)
    print(f"\nSuccessfully generated {len(schemas)} schemas.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
