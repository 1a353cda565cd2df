# ============================================================================
# ORCHESTRATOR MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Schema edit orchestration
# PURPOSE: Apply validated edits to a working schema and run migrations
# CREATED: 19 OCT 2026
# ============================================================================
"""
Orchestrator Module

The SchemaBuilder that drives schema edits, and the Migration container
that generated upgrade code runs in.

Usage:
    from orchestrator import SchemaBuilder

    builder = SchemaBuilder.to_schema(emitter, target_schema)
    script = builder.commands
"""

from .builder import SchemaBuilder
from .migration import Migration, load_migration_class, run_upgrade

__all__ = [
    "SchemaBuilder",
    "Migration",
    "load_migration_class",
    "run_upgrade",
]
