# ============================================================================
# SCHEMA BUILDER
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Edit orchestration
# PURPOSE: Validate, apply and emit commands for structural schema edits
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema Builder

Owns a working Schema and an append-only command log. Every edit method:
    1. validates against the current schema (raises before any change)
    2. asks the emitter for its commands, when an emitter is attached
    3. mutates the schema
    4. appends the commands

A failure in steps 1 or 2 leaves both the schema and the command log
untouched.

Without an emitter, validation and mutation still happen and no
commands are produced.

There is no rollback across calls. A caller that hits an error should
discard the builder.

Not thread-safe: serialize calls against one instance. Separate
builders share nothing.
"""

from typing import List, Optional

from core.errors import (
    DuplicateColumnError,
    DuplicateTableError,
    ImmutableAttributeError,
    InvalidTransitionError,
    NotFoundError,
)
from core.logging import get_logger, log_context, ComponentType
from core.models import Column, ColumnPatch, Schema, Table
from core.schema.emitter import CommandEmitter

logger = get_logger(__name__, ComponentType.BUILDER)


class SchemaBuilder:
    """
    Used during migration to modify a schema.

    Example:
        builder = SchemaBuilder(PostgreSQLCommandEmitter(), current_schema)
        builder.add_column("users", Column(name="bio", type=ColumnType.STRING, is_nullable=True))
        builder.alter_column("users", "email", ColumnPatch(is_indexed=True))
        for stmt in builder.commands:
            cursor.execute(stmt)
    """

    def __init__(
        self,
        emitter: Optional[CommandEmitter],
        input_schema: Schema,
        is_temporary: bool = False,
    ):
        """
        Start from an existing schema.

        Args:
            emitter: Command emitter, or None for validation/mutation only
            input_schema: Starting schema; deep-copied, never modified
            is_temporary: Create tables as temporary tables
        """
        self.emitter = emitter
        self.input_schema = input_schema
        self.is_temporary = is_temporary
        self.schema: Schema = Schema.from_schema(input_schema)
        self.commands: List[str] = []

    @classmethod
    def to_schema(
        cls,
        emitter: Optional[CommandEmitter],
        target_schema: Schema,
        is_temporary: bool = False,
    ) -> "SchemaBuilder":
        """
        Start from the empty schema and create every table of target_schema.

        Tables are created parents-first, so the accumulated commands form
        a complete "create database from definition" script.
        """
        builder = cls(emitter, Schema.empty(), is_temporary=is_temporary)
        for table in target_schema.dependency_ordered_tables:
            builder.create_table(table)
        return builder

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _require_table(self, table_name: str) -> Table:
        table = self.schema.table_for_name(table_name)
        if table is None:
            logger.warning(f"Table {table_name} does not exist")
            raise NotFoundError(table_name)
        return table

    def _require_column(self, table: Table, column_name: str) -> Column:
        column = table.column_for_name(column_name)
        if column is None:
            logger.warning(f"Column {column_name} does not exist in {table.name}")
            raise NotFoundError(table.name, column_name)
        return column

    def _commands(self, method: str, *args, **kwargs) -> List[str]:
        """Commands for an edit, computed before the schema changes."""
        if self.emitter is None:
            return []
        return getattr(self.emitter, method)(*args, **kwargs)

    def _emit(self, commands: List[str]) -> None:
        self.commands.extend(commands)
        logger.debug(f"Emitted {len(commands)} commands")

    # =========================================================================
    # TABLES
    # =========================================================================

    def create_table(self, table: Table) -> None:
        """Validates and adds a table to the schema."""
        with log_context(operation="create_table", table=table.name):
            if self.schema.table_for_name(table.name) is not None:
                logger.warning(f"Table {table.name} already exists")
                raise DuplicateTableError(table.name)

            owned = table.copy_deep()
            commands = self._commands("create_table", owned, is_temporary=self.is_temporary)
            self.schema.add_table(owned)
            self._emit(commands)

    def rename_table(self, current_table_name: str, new_name: str) -> None:
        """Validates and renames a table; foreign keys to it follow the rename."""
        with log_context(operation="rename_table", table=current_table_name):
            table = self._require_table(current_table_name)
            if new_name != current_table_name and self.schema.table_for_name(new_name) is not None:
                logger.warning(f"Table {new_name} already exists")
                raise DuplicateTableError(new_name)

            commands = self._commands("rename_table", table.copy_deep(), new_name)
            self.schema.rename_table(table, new_name)
            self._emit(commands)

    def delete_table(self, table_name: str) -> None:
        """Validates and deletes a table."""
        with log_context(operation="delete_table", table=table_name):
            table = self._require_table(table_name)
            commands = self._commands("delete_table", table)
            self.schema.remove_table(table)
            self._emit(commands)

    # =========================================================================
    # COLUMNS
    # =========================================================================

    def add_column(
        self,
        table_name: str,
        column: Column,
        initial_value: Optional[str] = None,
    ) -> None:
        """
        Validates and adds a column to a table.

        initial_value populates existing rows when the new column is not
        nullable and has no default.
        """
        with log_context(operation="add_column", table=table_name, column=column.name):
            table = self._require_table(table_name)
            if table.column_for_name(column.name) is not None:
                logger.warning(f"Column {column.name} already exists in {table_name}")
                raise DuplicateColumnError(table_name, column.name)

            owned = column.copy_deep()
            commands = self._commands("add_column", table, owned, initial_value=initial_value)
            table.add_column(owned)
            self._emit(commands)

    def delete_column(self, table_name: str, column_name: str) -> None:
        """Validates and deletes a column in a table."""
        with log_context(operation="delete_column", table=table_name, column=column_name):
            table = self._require_table(table_name)
            column = self._require_column(table, column_name)

            commands = self._commands("delete_column", table, column)
            table.remove_column(column)
            self._emit(commands)

    def rename_column(self, table_name: str, column_name: str, new_name: str) -> None:
        """Validates and renames a column in a table."""
        with log_context(operation="rename_column", table=table_name, column=column_name):
            table = self._require_table(table_name)
            column = self._require_column(table, column_name)
            if new_name != column_name and table.column_for_name(new_name) is not None:
                logger.warning(f"Column {new_name} already exists in {table_name}")
                raise DuplicateColumnError(table_name, new_name)

            commands = self._commands("rename_column", table, column.copy_deep(), new_name)
            self._apply_column_rename(table, column, new_name)
            self._emit(commands)

    def _apply_column_rename(self, table: Table, column: Column, new_name: str) -> None:
        """Rename in place; foreign keys naming the column follow it."""
        old_name = column.name
        table.rename_column(column, new_name)
        for other in self.schema.tables:
            for candidate in other.columns:
                if candidate.related_table_name == table.name and candidate.related_column_name == old_name:
                    candidate.related_column_name = new_name

    def alter_column(
        self,
        table_name: str,
        column_name: str,
        patch: ColumnPatch,
        initial_value: Optional[str] = None,
    ) -> None:
        """
        Validates and alters a column in a table.

        If the column changes from nullable to not nullable, all previously
        null values are set to initial_value (or the new default).

        A rename is emitted first, then one command group per changed
        attribute, in this order: index, uniqueness, default value,
        nullability, delete rule.

        Example:
            builder.alter_column(
                "users", "email",
                ColumnPatch(is_indexed=True, is_nullable=False),
                initial_value="''",
            )

        Raises:
            NotFoundError: table or column does not exist
            DuplicateColumnError: renamed to an existing column name
            ImmutableAttributeError: type, autoincrement, primary key or
                relationship would change
            InvalidTransitionError: nullable -> not nullable without a
                default or initial_value
        """
        with log_context(operation="alter_column", table=table_name, column=column_name):
            table = self._require_table(table_name)
            existing = self._require_column(table, column_name)

            new_column = patch.apply_to(existing)
            self._validate_alteration(table, existing, new_column, initial_value)

            commands: List[str] = []
            if new_column.name != existing.name:
                commands.extend(self._commands("rename_column", table, existing.copy_deep(), new_column.name))
            commands.extend(self._alteration_commands(table, existing, new_column, initial_value))

            if new_column.name != existing.name:
                self._apply_column_rename(table, existing, new_column.name)
            table.replace_column(existing, new_column)
            self._emit(commands)

    def _validate_alteration(
        self,
        table: Table,
        existing: Column,
        new_column: Column,
        initial_value: Optional[str],
    ) -> None:
        """Every check runs before anything is mutated."""
        immutable = existing.immutable_changes(new_column)
        if immutable:
            attribute = immutable[0]
            message = (
                f"May not change column ({existing.name}) {attribute} "
                f"({getattr(existing, attribute)!r} -> {getattr(new_column, attribute)!r})"
            )
            logger.warning(message)
            raise ImmutableAttributeError(existing.name, attribute, message)

        if new_column.name != existing.name and table.column_for_name(new_column.name) is not None:
            logger.warning(f"Column {new_column.name} already exists in {table.name}")
            raise DuplicateColumnError(table.name, new_column.name)

        if (
            existing.is_nullable
            and not new_column.is_nullable
            and initial_value is None
            and new_column.default_value is None
        ):
            message = (
                f"May not change column ({existing.name}) to be non-nullable "
                f"without default_value or initial_value."
            )
            logger.warning(message)
            raise InvalidTransitionError(message)

    def _alteration_commands(
        self,
        table: Table,
        previous: Column,
        new_column: Column,
        initial_value: Optional[str],
    ) -> List[str]:
        commands: List[str] = []
        if previous.is_indexed != new_column.is_indexed:
            if new_column.is_indexed:
                commands.extend(self._commands("add_index_to_column", table, new_column))
            else:
                commands.extend(self._commands("delete_index_from_column", table, new_column))

        if previous.is_unique != new_column.is_unique:
            commands.extend(self._commands("alter_column_uniqueness", table, new_column))

        if previous.default_value != new_column.default_value:
            commands.extend(self._commands("alter_column_default_value", table, new_column))

        if previous.is_nullable != new_column.is_nullable:
            commands.extend(self._commands("alter_column_nullability", table, new_column, initial_value))

        if previous.delete_rule != new_column.delete_rule:
            commands.extend(self._commands("alter_column_delete_rule", table, new_column))
        return commands

    # =========================================================================
    # MIGRATION SOURCE
    # =========================================================================

    @staticmethod
    def source_for_schema_upgrade(existing_schema: Schema, new_schema: Schema, version: int) -> str:
        """Source of a migration that upgrades existing_schema to new_schema."""
        from orchestrator.engine.synthesizer import synthesize_migration
        return synthesize_migration(existing_schema, new_schema, version)


__all__ = ["SchemaBuilder"]
