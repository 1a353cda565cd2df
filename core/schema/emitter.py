# ============================================================================
# COMMAND EMITTER CONTRACT
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Backend command contract
# PURPOSE: Abstract producer of backend commands for validated schema edits
# CREATED: 19 OCT 2026
# EXPORTS: CommandEmitter
# DEPENDENCIES: abc
# ============================================================================
"""
Command Emitter Contract

A CommandEmitter turns one validated structural edit into the ordered
list of backend commands that realize it. Commands are opaque strings
to the rest of the engine.

Rules for implementations:
- Never mutate the table or column passed in.
- Be synchronous and deterministic.
- Rename methods receive the table/column as it was BEFORE the rename.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models.column import Column
from core.models.table import Table


class CommandEmitter(ABC):
    """Base class for backend-specific command emitters."""

    # =========================================================================
    # TABLES
    # =========================================================================

    @abstractmethod
    def create_table(self, table: Table, is_temporary: bool = False) -> List[str]:
        ...

    @abstractmethod
    def rename_table(self, table: Table, new_name: str) -> List[str]:
        ...

    @abstractmethod
    def delete_table(self, table: Table) -> List[str]:
        ...

    # =========================================================================
    # COLUMNS
    # =========================================================================

    @abstractmethod
    def add_column(
        self,
        table: Table,
        column: Column,
        initial_value: Optional[str] = None,
    ) -> List[str]:
        """
        Add a column.

        initial_value backfills existing rows when the column is not
        nullable and has no default.
        """
        ...

    @abstractmethod
    def delete_column(self, table: Table, column: Column) -> List[str]:
        ...

    @abstractmethod
    def rename_column(self, table: Table, column: Column, new_name: str) -> List[str]:
        ...

    # =========================================================================
    # COLUMN ALTERATIONS
    # =========================================================================

    @abstractmethod
    def add_index_to_column(self, table: Table, column: Column) -> List[str]:
        ...

    @abstractmethod
    def delete_index_from_column(self, table: Table, column: Column) -> List[str]:
        ...

    @abstractmethod
    def alter_column_uniqueness(self, table: Table, column: Column) -> List[str]:
        ...

    @abstractmethod
    def alter_column_default_value(self, table: Table, column: Column) -> List[str]:
        ...

    @abstractmethod
    def alter_column_nullability(
        self,
        table: Table,
        column: Column,
        initial_value: Optional[str] = None,
    ) -> List[str]:
        ...

    @abstractmethod
    def alter_column_delete_rule(self, table: Table, column: Column) -> List[str]:
        ...


__all__ = ["CommandEmitter"]
