#!/usr/bin/env python3
# ============================================================================
# CLI MIGRATION GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Tool - Generate migrations from schema snapshots
# PURPOSE: Diff two YAML snapshots and write the upgrade migration
# CREATED: 19 OCT 2026
# ============================================================================
"""
Generate a migration from two schema snapshots.

Usage:
    # Print migration source upgrading v1 to v2
    python tools/generate_migration.py schemas/v1.yaml schemas/v2.yaml --version 2

    # Write it into the migrations directory
    python tools/generate_migration.py schemas/v1.yaml schemas/v2.yaml --version 2 --write

    # Print the full CREATE script for a snapshot (no existing schema)
    python tools/generate_migration.py - schemas/v2.yaml --sql --schema-name app

    # Same, as temporary tables (also SCHEMA_TEMPORARY_TABLES=true)
    python tools/generate_migration.py - schemas/v2.yaml --sql --temporary

Use "-" as the existing snapshot to start from an empty schema.
"""

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import yaml

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import EmitterDefaults, get_defaults
from core.errors import SchemaError
from core.logging import configure_logging, get_logger, ComponentType
from core.models import Schema
from core.schema import PostgreSQLCommandEmitter
from orchestrator import SchemaBuilder
from orchestrator.engine import synthesize_migration
from services import SchemaService

logger = get_logger("tools.generate_migration", ComponentType.TOOL)


def load_snapshot(path: str) -> Schema:
    """Load a snapshot, or the empty schema for '-'."""
    if path == "-":
        return Schema.empty()
    return SchemaService.load_file(path)


def create_script(target: Schema, defaults: Optional[EmitterDefaults] = None) -> str:
    """Every statement needed to create target from nothing."""
    defaults = defaults or EmitterDefaults()
    emitter = PostgreSQLCommandEmitter.from_defaults(defaults)
    builder = SchemaBuilder.to_schema(emitter, target, is_temporary=defaults.is_temporary)
    return "".join(f"{stmt};\n" for stmt in builder.commands)


def main():
    parser = argparse.ArgumentParser(description="Generate a schema migration")
    parser.add_argument("existing", help="Existing schema snapshot (YAML), or - for empty")
    parser.add_argument("target", help="Target schema snapshot (YAML)")
    parser.add_argument("--version", type=int, default=1, help="Migration version number")
    parser.add_argument("--write", action="store_true", help="Write into the migrations directory")
    parser.add_argument("--output-dir", default=None, help="Override migrations directory")
    parser.add_argument("--sql", action="store_true", help="Print CREATE script for target instead")
    parser.add_argument("--schema-name", default=None, help="Qualify tables with this schema (--sql)")
    parser.add_argument("--temporary", action="store_true", help="Create temporary tables (--sql)")
    parser.add_argument("--log-level", default="WARNING", help="Log level")
    args = parser.parse_args()

    configure_logging(args.log_level)
    defaults = get_defaults(reload=True)

    try:
        existing = load_snapshot(args.existing)
        target = load_snapshot(args.target)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Could not load snapshot: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.sql:
            emitter_defaults = replace(
                defaults.emitter,
                schema_name=args.schema_name or defaults.emitter.schema_name,
                is_temporary=args.temporary or defaults.emitter.is_temporary,
            )
            print(create_script(target, emitter_defaults), end="")
            return

        source = synthesize_migration(existing, target, args.version, defaults.migration)
    except SchemaError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    if not args.write:
        print(source, end="")
        return

    output_dir = Path(args.output_dir or defaults.migration.migrations_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / defaults.migration.file_name(args.version)
    if output_path.exists():
        print(f"ERROR: {output_path} already exists", file=sys.stderr)
        sys.exit(1)

    output_path.write_text(source)
    logger.info(f"Wrote migration {args.version}")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
