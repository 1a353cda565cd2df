# ============================================================================
# MIGRATION SOURCE SYNTHESIZER
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Migration generation from schema snapshots
# PURPOSE: Produce upgrade source that turns one schema into another
# CREATED: 19 OCT 2026
# ============================================================================
"""
Migration Source Synthesizer

Diffs two complete snapshots and writes the source of a migration whose
upgrade() performs the minimal set of edits between them.

Statement order (fixed):
    1. create tables to add        - target's dependency order (parents first)
    2. delete tables to delete     - existing's dependency order reversed
    3. per differing table:        - add columns, delete columns, alter columns,
                                     then a comment if the unique column set changed

The result is pure: identical (existing, target, version) inputs always
give byte-identical source.
"""

from typing import List, Optional

from core.config import MigrationDefaults
from core.logging import get_logger, log_context, log_checkpoint, ComponentType
from core.models import ColumnPatch, Schema
from orchestrator.engine.templates import MigrationStatementWriter, MigrationTemplate

logger = get_logger(__name__, ComponentType.SYNTHESIZER)


class MigrationSynthesizer:
    """Turns a schema difference into migration source."""

    def __init__(self, defaults: Optional[MigrationDefaults] = None):
        self.defaults = defaults or MigrationDefaults()
        self.writer = MigrationStatementWriter(self.defaults)
        self.template = MigrationTemplate(self.defaults)

    def upgrade_statements(self, existing: Schema, target: Schema) -> List[str]:
        """
        Upgrade statements from existing to target, in execution order.

        Raises:
            CyclicDependencyError: if either schema has a foreign key cycle
            ImmutableAttributeError: if a shared column differs in an
                attribute no alteration can change
        """
        diff = existing.difference_from(target)
        statements: List[str] = []

        to_add = set(diff.table_names_to_add)
        for table in target.dependency_ordered_tables:
            if table.name in to_add:
                statements.append(self.writer.create_table(table))

        to_delete = set(diff.table_names_to_delete)
        for table in reversed(existing.dependency_ordered_tables):
            if table.name in to_delete:
                statements.append(self.writer.delete_table(table.name))

        for table_diff in diff.differing_tables:
            if table_diff.expected_table is None or table_diff.actual_table is None:
                continue
            table_name = table_diff.actual_table.name

            for column_name in table_diff.column_names_to_add:
                column = table_diff.expected_table.column_for_name(column_name)
                statements.append(self.writer.add_column(table_name, column))

            for column_name in table_diff.column_names_to_delete:
                statements.append(self.writer.delete_column(table_name, column_name))

            for column_diff in table_diff.differing_columns:
                if column_diff.expected_column is None or column_diff.actual_column is None:
                    continue
                actual = column_diff.actual_column
                expected = column_diff.expected_column
                patch = ColumnPatch.between(actual, expected)
                needs_backfill = (
                    actual.is_nullable
                    and not expected.is_nullable
                    and expected.default_value is None
                )
                statements.append(
                    self.writer.alter_column(table_name, actual.name, patch, needs_backfill)
                )

            # delete_column already drops deleted columns from the set
            remaining = [
                n for n in table_diff.actual_table.unique_column_set or []
                if n not in table_diff.column_names_to_delete
            ]
            if remaining != (table_diff.expected_table.unique_column_set or []):
                logger.warning(f"Unique column set of {table_name} changed; migration only notes it")
                statements.append(self.writer.unique_column_set_changed(
                    table_name,
                    table_diff.actual_table.unique_column_set,
                    table_diff.expected_table.unique_column_set,
                ))

        log_checkpoint("migration_statements", {
            "tables_added": len(diff.table_names_to_add),
            "tables_deleted": len(diff.table_names_to_delete),
            "tables_changed": len(diff.differing_tables),
            "statements": len(statements),
        })
        return statements

    def synthesize(self, existing: Schema, target: Schema, version: int) -> str:
        """
        Source of migration `version` upgrading existing to target.

        downgrade() and seed() are left empty.
        """
        with log_context(operation="synthesize", migration_version=version):
            statements = self.upgrade_statements(existing, target)
            logger.info(f"Synthesized migration {version} with {len(statements)} statements")
            return self.template.render(version, statements)


def synthesize_migration(
    existing: Schema,
    target: Schema,
    version: int,
    defaults: Optional[MigrationDefaults] = None,
) -> str:
    """
    Convenience function to synthesize migration source.

    Args:
        existing: Schema the database has now
        target: Schema the database should have
        version: Migration version number (names the generated class)
        defaults: Optional formatting defaults

    Returns:
        Python source text of the migration module
    """
    return MigrationSynthesizer(defaults).synthesize(existing, target, version)


__all__ = ["MigrationSynthesizer", "synthesize_migration"]
