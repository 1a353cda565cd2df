# ============================================================================
# SCHEMA DIFFER
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Structural comparison of two schemas
# PURPOSE: Compute the delta from an actual schema to an expected schema
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema Differ

Compares two schema snapshots table by table and column by column.

Ordering (keeps generated migrations reproducible):
- tables/columns to add:      expected schema order
- tables/columns to delete:   actual schema order
- differing tables/columns:   expected schema order

A changed multi-column unique set is reported on the TableDifference.
No builder edit alters it, so generated migrations only flag it.

The differ is stateless and pure: identical inputs always produce
identical output.
"""

from core.logging import get_logger, ComponentType
from core.models.column import Column
from core.models.difference import ColumnDifference, SchemaDifference, TableDifference
from core.models.schema import Schema
from core.models.table import Table

logger = get_logger(__name__, ComponentType.DIFFER)


class SchemaDiffer:
    """Computes SchemaDifference objects."""

    def compare(self, actual: Schema, expected: Schema) -> SchemaDifference:
        """
        Delta from actual to expected.

        Args:
            actual: Schema as it currently is
            expected: Schema as it should become

        Returns:
            SchemaDifference (unchanged tables are omitted)
        """
        actual_names = set(actual.table_names)
        expected_names = set(expected.table_names)

        to_add = tuple(n for n in expected.table_names if n not in actual_names)
        to_delete = tuple(n for n in actual.table_names if n not in expected_names)

        differing = []
        for expected_table in expected.tables:
            actual_table = actual.table_for_name(expected_table.name)
            if actual_table is None:
                continue
            table_diff = self.compare_tables(actual_table, expected_table)
            if table_diff.has_differences:
                differing.append(table_diff)

        difference = SchemaDifference(
            expected_schema=expected,
            actual_schema=actual,
            table_names_to_add=to_add,
            table_names_to_delete=to_delete,
            differing_tables=tuple(differing),
        )

        logger.debug(
            f"Schema diff: +{len(to_add)} tables, -{len(to_delete)} tables, "
            f"{len(differing)} changed"
        )
        return difference

    def compare_tables(self, actual: Table, expected: Table) -> TableDifference:
        actual_names = set(actual.column_names)
        expected_names = set(expected.column_names)

        differing = []
        for expected_column in expected.columns:
            actual_column = actual.column_for_name(expected_column.name)
            if actual_column is None:
                continue
            column_diff = self.compare_columns(actual_column, expected_column)
            if column_diff is not None:
                differing.append(column_diff)

        return TableDifference(
            expected_table=expected,
            actual_table=actual,
            column_names_to_add=tuple(n for n in expected.column_names if n not in actual_names),
            column_names_to_delete=tuple(n for n in actual.column_names if n not in expected_names),
            differing_columns=tuple(differing),
            unique_column_set_changed=(
                (actual.unique_column_set or []) != (expected.unique_column_set or [])
            ),
        )

    def compare_columns(self, actual: Column, expected: Column):
        """ColumnDifference when any compared attribute differs, else None."""
        if not actual.differs_from(expected):
            return None
        return ColumnDifference(expected_column=expected, actual_column=actual)


_differ = SchemaDiffer()


def compute_difference(actual: Schema, expected: Schema) -> SchemaDifference:
    """Convenience wrapper around a shared SchemaDiffer."""
    return _differ.compare(actual, expected)


__all__ = ["SchemaDiffer", "compute_difference"]
