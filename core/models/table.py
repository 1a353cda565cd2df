# ============================================================================
# TABLE MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core model - Table definition
# PURPOSE: Own a table's columns and enforce column-level invariants
# CREATED: 19 OCT 2026
# EXPORTS: Table
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Model

A Table owns its Columns. Column names are unique within the table and
a table has at most one primary key column. Column order is preserved
so that generated DDL and diffs are reproducible.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from core.errors import DuplicateColumnError, NotFoundError, SchemaError
from core.models.column import Column


class Table(BaseModel):
    """
    Definition of a table.

    unique_column_set lists the columns of an optional multi-column
    unique constraint.
    """
    name: str = Field(..., min_length=1)
    columns: List[Column] = Field(default_factory=list)
    unique_column_set: Optional[List[str]] = None

    model_config = {"frozen": False}

    @model_validator(mode="after")
    def _check_columns(self) -> "Table":
        names = [c.name for c in self.columns]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Table {self.name} has duplicate columns: {duplicates}")

        primary_keys = [c.name for c in self.columns if c.is_primary_key]
        if len(primary_keys) > 1:
            raise ValueError(f"Table {self.name} has multiple primary keys: {primary_keys}")

        if self.unique_column_set:
            unknown = [n for n in self.unique_column_set if n not in names]
            if unknown:
                raise ValueError(f"Table {self.name} unique set references unknown columns: {unknown}")
        return self

    # =========================================================================
    # QUERIES
    # =========================================================================

    def column_for_name(self, name: str) -> Optional[Column]:
        """Exact-match lookup; None when absent."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def get_column(self, name: str) -> Column:
        """Lookup that raises NotFoundError when absent."""
        column = self.column_for_name(name)
        if column is None:
            raise NotFoundError(self.name, name)
        return column

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    @property
    def primary_key(self) -> Optional[str]:
        """Name of the primary key column, if any."""
        for column in self.columns:
            if column.is_primary_key:
                return column.name
        return None

    @property
    def foreign_key_columns(self) -> List[Column]:
        return [c for c in self.columns if c.is_foreign_key]

    def copy_deep(self) -> "Table":
        return self.model_copy(deep=True)

    # =========================================================================
    # MUTATION
    # =========================================================================

    def add_column(self, column: Column) -> None:
        if self.column_for_name(column.name) is not None:
            raise DuplicateColumnError(self.name, column.name)
        if column.is_primary_key and self.primary_key is not None:
            raise SchemaError(
                f"Table {self.name} already has primary key {self.primary_key}"
            )
        self.columns.append(column)

    def remove_column(self, column: Column) -> None:
        """Remove by name; callers confirm existence first."""
        self.columns = [c for c in self.columns if c.name != column.name]
        if self.unique_column_set and column.name in self.unique_column_set:
            self.unique_column_set = [n for n in self.unique_column_set if n != column.name]

    def rename_column(self, column: Column, new_name: str) -> None:
        if new_name != column.name and self.column_for_name(new_name) is not None:
            raise DuplicateColumnError(self.name, new_name)

        old_name = column.name
        column.name = new_name
        if self.unique_column_set:
            self.unique_column_set = [
                new_name if n == old_name else n for n in self.unique_column_set
            ]

    def replace_column(self, existing: Column, replacement: Column) -> None:
        """Swap a column in place, keeping its position."""
        for index, column in enumerate(self.columns):
            if column.name == existing.name:
                self.columns[index] = replacement
                return
        raise NotFoundError(self.name, existing.name)
