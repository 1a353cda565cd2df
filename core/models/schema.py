# ============================================================================
# SCHEMA MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core model - Whole-database schema
# PURPOSE: Own tables, keep names unique, answer structural queries
# CREATED: 19 OCT 2026
# EXPORTS: Schema
# DEPENDENCIES: pydantic
# ============================================================================
"""
Schema Model

A Schema is the in-memory model of a relational database: an ordered
collection of uniquely named Tables. Foreign key columns reference
other tables by name, which forms an implicit dependency graph.

Copying:
    Schema.from_schema(other) produces a deep copy. Edits on the copy
    never reach the original.

Derived views (computed by orchestrator.engine):
    dependency_ordered_tables  - parents before children
    difference_from(expected)  - structural delta to another schema
"""

from typing import TYPE_CHECKING, List, Optional
from pydantic import BaseModel, Field, model_validator

from core.errors import DuplicateTableError, NotFoundError
from core.models.table import Table

if TYPE_CHECKING:
    from core.models.difference import SchemaDifference


class Schema(BaseModel):
    """
    Mutable set of tables keyed by case-sensitive name.

    Insertion order is preserved and drives every ordering tie-break.
    """
    tables: List[Table] = Field(default_factory=list)

    model_config = {"frozen": False}

    @model_validator(mode="after")
    def _check_unique_names(self) -> "Schema":
        names = [t.name for t in self.tables]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Schema has duplicate tables: {duplicates}")
        return self

    @classmethod
    def empty(cls) -> "Schema":
        return cls()

    @classmethod
    def from_schema(cls, other: "Schema") -> "Schema":
        """Deep copy of another schema."""
        return other.model_copy(deep=True)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def table_for_name(self, name: str) -> Optional[Table]:
        """Exact-match lookup; None when absent."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def get_table(self, name: str) -> Table:
        """Lookup that raises NotFoundError when absent."""
        table = self.table_for_name(name)
        if table is None:
            raise NotFoundError(name)
        return table

    @property
    def table_names(self) -> List[str]:
        return [t.name for t in self.tables]

    @property
    def dependency_ordered_tables(self) -> List[Table]:
        """
        Tables ordered so every referenced table precedes its referrers.

        Raises:
            CyclicDependencyError: if two or more tables reference each other
        """
        from orchestrator.engine.dependency import order_tables
        return order_tables(self)

    def difference_from(self, expected: "Schema") -> "SchemaDifference":
        """Delta from this schema (actual) to expected."""
        from orchestrator.engine.differ import compute_difference
        return compute_difference(self, expected)

    # =========================================================================
    # MUTATION
    # =========================================================================

    def add_table(self, table: Table) -> None:
        if self.table_for_name(table.name) is not None:
            raise DuplicateTableError(table.name)
        self.tables.append(table)

    def remove_table(self, table: Table) -> None:
        """Remove by name; callers confirm existence first."""
        self.tables = [t for t in self.tables if t.name != table.name]

    def rename_table(self, table: Table, new_name: str) -> None:
        """
        Rename a table in place.

        Foreign keys in any table that referenced the old name are
        updated to the new name, including self-references.
        """
        if new_name != table.name and self.table_for_name(new_name) is not None:
            raise DuplicateTableError(new_name)

        old_name = table.name
        table.name = new_name
        for other in self.tables:
            for column in other.columns:
                if column.related_table_name == old_name:
                    column.related_table_name = new_name
