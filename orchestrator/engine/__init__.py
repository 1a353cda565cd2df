# ============================================================================
# ORCHESTRATOR ENGINE
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Engine components
# PURPOSE: Dependency ordering, schema diffing, migration synthesis
# CREATED: 19 OCT 2026
# ============================================================================
"""
Orchestrator Engine Components

- dependency: foreign key graph and topological ordering
- differ: structural comparison of two schemas
- templates: Jinja2-based migration source rendering
- synthesizer: migration source from two schema snapshots
"""

from orchestrator.engine.dependency import (
    DependencyGraph,
    GraphBuilder,
    TopologicalSorter,
    build_graph,
    order_tables,
)
from orchestrator.engine.differ import SchemaDiffer, compute_difference
from orchestrator.engine.templates import (
    MigrationStatementWriter,
    MigrationTemplate,
    MigrationRenderError,
)
from orchestrator.engine.synthesizer import MigrationSynthesizer, synthesize_migration

__all__ = [
    # Dependency ordering
    "DependencyGraph",
    "GraphBuilder",
    "TopologicalSorter",
    "build_graph",
    "order_tables",
    # Differ
    "SchemaDiffer",
    "compute_difference",
    # Templates
    "MigrationStatementWriter",
    "MigrationTemplate",
    "MigrationRenderError",
    # Synthesizer
    "MigrationSynthesizer",
    "synthesize_migration",
]
