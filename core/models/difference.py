# ============================================================================
# SCHEMA DIFFERENCE MODELS
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core model - Structural delta between two schemas
# PURPOSE: Read-only results produced by the schema differ
# CREATED: 19 OCT 2026
# EXPORTS: SchemaDifference, TableDifference, ColumnDifference
# DEPENDENCIES: dataclasses
# ============================================================================
"""
Schema Difference Models

Snapshots of the delta between an "actual" schema and an "expected"
schema. Computed on demand, never mutated, usually consumed at once by
the migration synthesizer.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from core.models.column import Column
from core.models.schema import Schema
from core.models.table import Table


@dataclass(frozen=True)
class ColumnDifference:
    """A column present on both sides whose attributes differ."""
    expected_column: Optional[Column]
    actual_column: Optional[Column]

    @property
    def name(self) -> str:
        column = self.expected_column or self.actual_column
        return column.name

    @property
    def changed_attributes(self) -> List[str]:
        if self.expected_column is None or self.actual_column is None:
            return []
        return self.actual_column.changed_attributes(self.expected_column)

    @property
    def error_messages(self) -> List[str]:
        return [
            f"Column '{self.name}' has different '{attribute}': "
            f"expected {getattr(self.expected_column, attribute)!r}, "
            f"actual {getattr(self.actual_column, attribute)!r}"
            for attribute in self.changed_attributes
        ]


@dataclass(frozen=True)
class TableDifference:
    """
    Per-table delta.

    A missing expected_table or actual_table signals a whole-table
    delete or add rather than a modification.
    """
    expected_table: Optional[Table]
    actual_table: Optional[Table]
    column_names_to_add: Tuple[str, ...] = ()
    column_names_to_delete: Tuple[str, ...] = ()
    differing_columns: Tuple[ColumnDifference, ...] = ()
    unique_column_set_changed: bool = False

    @property
    def name(self) -> str:
        table = self.expected_table or self.actual_table
        return table.name

    @property
    def has_differences(self) -> bool:
        return bool(
            self.column_names_to_add
            or self.column_names_to_delete
            or self.differing_columns
            or self.unique_column_set_changed
        )

    @property
    def error_messages(self) -> List[str]:
        messages = [
            f"Table '{self.name}' is missing column '{n}'" for n in self.column_names_to_add
        ]
        messages.extend(
            f"Table '{self.name}' has unexpected column '{n}'" for n in self.column_names_to_delete
        )
        for column_diff in self.differing_columns:
            messages.extend(
                f"Table '{self.name}': {m}" for m in column_diff.error_messages
            )
        if self.unique_column_set_changed:
            messages.append(
                f"Table '{self.name}' has different unique column set: "
                f"expected {self.expected_table.unique_column_set!r}, "
                f"actual {self.actual_table.unique_column_set!r}"
            )
        return messages


@dataclass(frozen=True)
class SchemaDifference:
    """
    Delta from actual_schema to expected_schema.

    table_names_to_add:    in expected, not in actual
    table_names_to_delete: in actual, not in expected
    differing_tables:      in both, with at least one column or unique set difference
    """
    expected_schema: Schema
    actual_schema: Schema
    table_names_to_add: Tuple[str, ...] = ()
    table_names_to_delete: Tuple[str, ...] = ()
    differing_tables: Tuple[TableDifference, ...] = field(default_factory=tuple)

    @property
    def has_differences(self) -> bool:
        return bool(
            self.table_names_to_add
            or self.table_names_to_delete
            or self.differing_tables
        )

    @property
    def error_messages(self) -> List[str]:
        """Human-readable description of every difference."""
        messages = [f"Missing table '{n}'" for n in self.table_names_to_add]
        messages.extend(f"Unexpected table '{n}'" for n in self.table_names_to_delete)
        for table_diff in self.differing_tables:
            messages.extend(table_diff.error_messages)
        return messages
