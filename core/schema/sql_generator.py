# ============================================================================
# POSTGRESQL COMMAND EMITTER
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - DDL generation for schema edits
# PURPOSE: Turn validated table/column edits into PostgreSQL statements
# CREATED: 19 OCT 2026
# EXPORTS: PostgreSQLCommandEmitter
# DEPENDENCIES: psycopg
# ============================================================================
"""
PostgreSQL Command Emitter.

Generates PostgreSQL DDL for every edit the SchemaBuilder performs.
Statements are composed with psycopg.sql and rendered to plain strings
without a connection, so the emitter can run offline.

Create-table output order:
    1. CREATE TABLE (columns, primary key, unique column set)
    2. CREATE INDEX for every indexed non-key column
    3. ALTER TABLE ... ADD CONSTRAINT for every foreign key

Foreign keys are added after the table exists so that self-references
and any creation order of related tables work.

Usage:
    emitter = PostgreSQLCommandEmitter(schema_name="app")
    for stmt in emitter.create_table(table):
        cursor.execute(stmt)
"""

from typing import Iterable, List, Optional

from psycopg import sql

from core.config import EmitterDefaults
from core.logging import get_logger, ComponentType
from core.models.column import Column
from core.models.table import Table
from core.schema.ddl_utils import (
    ConstraintBuilder,
    IndexBuilder,
    SchemaUtils,
    get_postgres_type,
)
from core.schema.emitter import CommandEmitter

# Setup logger
logger = get_logger(__name__, ComponentType.EMITTER)


class PostgreSQLCommandEmitter(CommandEmitter):
    """
    Emit PostgreSQL DDL statements for schema edits.

    default_value and initial_value strings are already SQL-encoded
    literals and are inserted verbatim.
    """

    def __init__(self, schema_name: Optional[str] = None):
        """
        Initialize the emitter.

        Args:
            schema_name: Qualify table identifiers with this schema (None = unqualified)
        """
        self.schema_name = schema_name

    @classmethod
    def from_defaults(cls, defaults: Optional[EmitterDefaults] = None) -> "PostgreSQLCommandEmitter":
        defaults = defaults or EmitterDefaults.from_env()
        return cls(schema_name=defaults.schema_name)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _table(self, name: str) -> sql.Identifier:
        return SchemaUtils.table_identifier(name, self.schema_name)

    @staticmethod
    def _render(statements: Iterable[sql.Composable]) -> List[str]:
        return [stmt.as_string(None) for stmt in statements]

    def _column_definition(self, column: Column, force_nullable: bool = False) -> sql.Composed:
        """Column clause for CREATE TABLE / ADD COLUMN."""
        parts = [
            sql.Identifier(column.name),
            sql.SQL(get_postgres_type(column)),
        ]

        if column.is_primary_key:
            parts.append(sql.SQL("PRIMARY KEY"))

        if column.default_value is not None:
            parts.append(sql.SQL("DEFAULT {}").format(sql.SQL(column.default_value)))

        if column.is_nullable or force_nullable:
            parts.append(sql.SQL("NULL"))
        else:
            parts.append(sql.SQL("NOT NULL"))

        if column.is_unique:
            parts.append(sql.SQL("UNIQUE"))

        return sql.SQL(" ").join(parts)

    def _alter_column(self, table_name: str, column_name: str, action: str) -> sql.Composed:
        return sql.SQL("ALTER TABLE ONLY {table} ALTER COLUMN {column} {action}").format(
            table=self._table(table_name),
            column=sql.Identifier(column_name),
            action=sql.SQL(action),
        )

    def _backfill(self, table_name: str, column_name: str, value: str, only_nulls: bool) -> sql.Composed:
        stmt = sql.SQL("UPDATE {table} SET {column}={value}").format(
            table=self._table(table_name),
            column=sql.Identifier(column_name),
            value=sql.SQL(value),
        )
        if only_nulls:
            stmt = sql.SQL("{} WHERE {} IS NULL").format(stmt, sql.Identifier(column_name))
        return stmt

    def _foreign_key(self, table_name: str, column: Column) -> sql.Composed:
        return ConstraintBuilder.add_foreign_key(table_name, column, schema=self.schema_name)

    def _index_is_managed(self, column: Column) -> bool:
        """Primary keys carry their own index."""
        return column.is_indexed and not column.is_primary_key

    # =========================================================================
    # TABLES
    # =========================================================================

    def create_table(self, table: Table, is_temporary: bool = False) -> List[str]:
        logger.debug(f"Generating table {table.name} ({len(table.columns)} columns)")

        clauses = [self._column_definition(c) for c in table.columns]
        if table.unique_column_set:
            clauses.append(ConstraintBuilder.unique_set(table.unique_column_set))

        create = sql.SQL("CREATE {temporary}TABLE {table} ({clauses})").format(
            temporary=sql.SQL("TEMPORARY " if is_temporary else ""),
            table=self._table(table.name),
            clauses=sql.SQL(", ").join(clauses),
        )

        statements = [create]
        statements.extend(
            IndexBuilder.btree(table.name, c.name, schema=self.schema_name)
            for c in table.columns if self._index_is_managed(c)
        )
        statements.extend(
            self._foreign_key(table.name, c) for c in table.foreign_key_columns
        )
        return self._render(statements)

    def rename_table(self, table: Table, new_name: str) -> List[str]:
        statements = [
            sql.SQL("ALTER TABLE ONLY {table} RENAME TO {new}").format(
                table=self._table(table.name),
                new=sql.Identifier(new_name),
            )
        ]

        for column in table.columns:
            if self._index_is_managed(column):
                statements.append(
                    IndexBuilder.rename(table.name, column.name, new_name, column.name, schema=self.schema_name)
                )
            if column.is_foreign_key:
                statements.append(
                    ConstraintBuilder.rename(
                        new_name,
                        ConstraintBuilder.foreign_key_name(table.name, column.name),
                        ConstraintBuilder.foreign_key_name(new_name, column.name),
                        schema=self.schema_name,
                    )
                )
            if column.is_unique:
                statements.append(
                    ConstraintBuilder.rename(
                        new_name,
                        ConstraintBuilder.unique_name(table.name, column.name),
                        ConstraintBuilder.unique_name(new_name, column.name),
                        schema=self.schema_name,
                    )
                )
        return self._render(statements)

    def delete_table(self, table: Table) -> List[str]:
        return self._render([
            sql.SQL("DROP TABLE {table}").format(table=self._table(table.name))
        ])

    # =========================================================================
    # COLUMNS
    # =========================================================================

    def add_column(
        self,
        table: Table,
        column: Column,
        initial_value: Optional[str] = None,
    ) -> List[str]:
        needs_backfill = (
            initial_value is not None
            and not column.is_nullable
            and column.default_value is None
        )

        statements = [
            sql.SQL("ALTER TABLE ONLY {table} ADD COLUMN {definition}").format(
                table=self._table(table.name),
                definition=self._column_definition(column, force_nullable=needs_backfill),
            )
        ]

        if needs_backfill:
            statements.append(self._backfill(table.name, column.name, initial_value, only_nulls=False))
            statements.append(self._alter_column(table.name, column.name, "SET NOT NULL"))

        if self._index_is_managed(column):
            statements.append(IndexBuilder.btree(table.name, column.name, schema=self.schema_name))

        if column.is_foreign_key:
            statements.append(self._foreign_key(table.name, column))

        return self._render(statements)

    def delete_column(self, table: Table, column: Column) -> List[str]:
        behavior = "CASCADE" if column.is_foreign_key else "RESTRICT"
        return self._render([
            sql.SQL("ALTER TABLE ONLY {table} DROP COLUMN {column} {behavior}").format(
                table=self._table(table.name),
                column=sql.Identifier(column.name),
                behavior=sql.SQL(behavior),
            )
        ])

    def rename_column(self, table: Table, column: Column, new_name: str) -> List[str]:
        statements = [
            sql.SQL("ALTER TABLE ONLY {table} RENAME COLUMN {column} TO {new}").format(
                table=self._table(table.name),
                column=sql.Identifier(column.name),
                new=sql.Identifier(new_name),
            )
        ]

        if self._index_is_managed(column):
            statements.append(
                IndexBuilder.rename(table.name, column.name, table.name, new_name, schema=self.schema_name)
            )
        if column.is_foreign_key:
            statements.append(
                ConstraintBuilder.rename(
                    table.name,
                    ConstraintBuilder.foreign_key_name(table.name, column.name),
                    ConstraintBuilder.foreign_key_name(table.name, new_name),
                    schema=self.schema_name,
                )
            )
        if column.is_unique:
            statements.append(
                ConstraintBuilder.rename(
                    table.name,
                    ConstraintBuilder.unique_name(table.name, column.name),
                    ConstraintBuilder.unique_name(table.name, new_name),
                    schema=self.schema_name,
                )
            )
        return self._render(statements)

    # =========================================================================
    # COLUMN ALTERATIONS
    # =========================================================================

    def add_index_to_column(self, table: Table, column: Column) -> List[str]:
        return self._render([IndexBuilder.btree(table.name, column.name, schema=self.schema_name)])

    def delete_index_from_column(self, table: Table, column: Column) -> List[str]:
        return self._render([IndexBuilder.drop(table.name, column.name, schema=self.schema_name)])

    def alter_column_uniqueness(self, table: Table, column: Column) -> List[str]:
        if column.is_unique:
            stmt = ConstraintBuilder.add_unique(table.name, column.name, schema=self.schema_name)
        else:
            stmt = ConstraintBuilder.drop(
                table.name,
                ConstraintBuilder.unique_name(table.name, column.name),
                schema=self.schema_name,
            )
        return self._render([stmt])

    def alter_column_default_value(self, table: Table, column: Column) -> List[str]:
        if column.default_value is None:
            stmt = self._alter_column(table.name, column.name, "DROP DEFAULT")
        else:
            stmt = sql.SQL("{} {}").format(
                self._alter_column(table.name, column.name, "SET DEFAULT"),
                sql.SQL(column.default_value),
            )
        return self._render([stmt])

    def alter_column_nullability(
        self,
        table: Table,
        column: Column,
        initial_value: Optional[str] = None,
    ) -> List[str]:
        if column.is_nullable:
            return self._render([self._alter_column(table.name, column.name, "DROP NOT NULL")])

        statements = []
        if initial_value is not None:
            statements.append(self._backfill(table.name, column.name, initial_value, only_nulls=True))
        statements.append(self._alter_column(table.name, column.name, "SET NOT NULL"))
        return self._render(statements)

    def alter_column_delete_rule(self, table: Table, column: Column) -> List[str]:
        return self._render([
            ConstraintBuilder.drop(
                table.name,
                ConstraintBuilder.foreign_key_name(table.name, column.name),
                schema=self.schema_name,
            ),
            self._foreign_key(table.name, column),
        ])


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ['PostgreSQLCommandEmitter']
