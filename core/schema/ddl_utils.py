# ============================================================================
# DDL UTILITIES
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - DRY utilities for SQL DDL generation
# PURPOSE: Type mapping, identifier, index and constraint builders using psycopg.sql
# CREATED: 19 OCT 2026
# EXPORTS: TYPE_MAP, SERIAL_TYPE_MAP, DELETE_RULE_MAP, get_postgres_type,
#          IndexBuilder, ConstraintBuilder, SchemaUtils
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

All builders return psycopg.sql.Composed objects.
No string concatenation - full SQL composition for injection safety.

Naming conventions (must stay stable, later commands address these names):
    index:        <table>_<column>_idx
    foreign key:  <table>_<column>_fkey
    unique:       <table>_<column>_key

Usage:
    from core.schema.ddl_utils import IndexBuilder, SchemaUtils

    target = SchemaUtils.table_identifier("users", schema="app")
    stmt = IndexBuilder.btree("users", "email", schema="app")
"""

from typing import Optional, Sequence

from psycopg import sql

from core.contracts import ColumnType, DeleteRule
from core.models.column import Column


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP = {
    ColumnType.INTEGER: "INT",
    ColumnType.BIG_INTEGER: "BIGINT",
    ColumnType.DOUBLE: "DOUBLE PRECISION",
    ColumnType.STRING: "TEXT",
    ColumnType.DATETIME: "TIMESTAMP",
    ColumnType.BOOLEAN: "BOOLEAN",
    ColumnType.DOCUMENT: "JSONB",
}

SERIAL_TYPE_MAP = {
    ColumnType.INTEGER: "SERIAL",
    ColumnType.BIG_INTEGER: "BIGSERIAL",
}

DELETE_RULE_MAP = {
    DeleteRule.CASCADE: "CASCADE",
    DeleteRule.RESTRICT: "RESTRICT",
    DeleteRule.NULLIFY: "SET NULL",
    DeleteRule.DEFAULT: "SET DEFAULT",
}


def get_postgres_type(column: Column) -> str:
    """
    Map a column to its PostgreSQL type.

    Autoincrementing integer columns become SERIAL/BIGSERIAL.
    """
    if column.autoincrement:
        serial = SERIAL_TYPE_MAP.get(column.type)
        if serial is None:
            raise ValueError(
                f"Column {column.name} of type {column.type.value} cannot autoincrement"
            )
        return serial
    return TYPE_MAP[column.type]


# ============================================================================
# SCHEMA UTILITIES
# ============================================================================

class SchemaUtils:
    """
    Identifier helpers shared by all builders.
    """

    @staticmethod
    def table_identifier(table: str, schema: Optional[str] = None) -> sql.Identifier:
        """Schema-qualified identifier when a schema is given."""
        if schema:
            return sql.Identifier(schema, table)
        return sql.Identifier(table)

    @staticmethod
    def object_name(table: str, column: str, suffix: str) -> str:
        """Conventional name for a per-column index or constraint."""
        return f"{table}_{column}_{suffix}"


# ============================================================================
# INDEX BUILDER
# ============================================================================

class IndexBuilder:
    """
    Builder for PostgreSQL index DDL statements.

    All methods are static and return sql.Composed objects.
    """

    @staticmethod
    def index_name(table: str, column: str) -> str:
        return SchemaUtils.object_name(table, column, "idx")

    @staticmethod
    def btree(table: str, column: str, schema: Optional[str] = None) -> sql.Composed:
        """
        Create B-tree index on a single column.

        Args:
            table: Table name
            column: Column to index
            schema: Optional schema name

        Returns:
            sql.Composed CREATE INDEX statement
        """
        return sql.SQL("CREATE INDEX {name} ON {table} ({column})").format(
            name=sql.Identifier(IndexBuilder.index_name(table, column)),
            table=SchemaUtils.table_identifier(table, schema),
            column=sql.Identifier(column),
        )

    @staticmethod
    def drop(table: str, column: str, schema: Optional[str] = None) -> sql.Composed:
        """Drop the conventional index of a column."""
        return sql.SQL("DROP INDEX {name}").format(
            name=SchemaUtils.table_identifier(IndexBuilder.index_name(table, column), schema)
        )

    @staticmethod
    def rename(
        old_table: str,
        old_column: str,
        new_table: str,
        new_column: str,
        schema: Optional[str] = None,
    ) -> sql.Composed:
        """Keep an index name in step with its table/column name."""
        return sql.SQL("ALTER INDEX {old} RENAME TO {new}").format(
            old=SchemaUtils.table_identifier(IndexBuilder.index_name(old_table, old_column), schema),
            new=sql.Identifier(IndexBuilder.index_name(new_table, new_column)),
        )


# ============================================================================
# CONSTRAINT BUILDER
# ============================================================================

class ConstraintBuilder:
    """
    Builder for table constraint DDL statements.
    """

    @staticmethod
    def foreign_key_name(table: str, column: str) -> str:
        return SchemaUtils.object_name(table, column, "fkey")

    @staticmethod
    def unique_name(table: str, column: str) -> str:
        return SchemaUtils.object_name(table, column, "key")

    @staticmethod
    def add_foreign_key(
        table: str,
        column: Column,
        schema: Optional[str] = None,
    ) -> sql.Composed:
        """
        Add the foreign key constraint for a relationship column.

        Args:
            table: Table owning the column
            column: Column with related_table_name/related_column_name set
            schema: Optional schema name

        Returns:
            sql.Composed ALTER TABLE ... ADD CONSTRAINT statement
        """
        rule = DELETE_RULE_MAP[column.delete_rule or DeleteRule.NULLIFY]
        return sql.SQL(
            "ALTER TABLE ONLY {table} ADD CONSTRAINT {name} FOREIGN KEY ({column}) "
            "REFERENCES {ref_table} ({ref_column}) ON DELETE {rule}"
        ).format(
            table=SchemaUtils.table_identifier(table, schema),
            name=sql.Identifier(ConstraintBuilder.foreign_key_name(table, column.name)),
            column=sql.Identifier(column.name),
            ref_table=SchemaUtils.table_identifier(column.related_table_name, schema),
            ref_column=sql.Identifier(column.related_column_name),
            rule=sql.SQL(rule),
        )

    @staticmethod
    def add_unique(table: str, column: str, schema: Optional[str] = None) -> sql.Composed:
        return sql.SQL("ALTER TABLE ONLY {table} ADD CONSTRAINT {name} UNIQUE ({column})").format(
            table=SchemaUtils.table_identifier(table, schema),
            name=sql.Identifier(ConstraintBuilder.unique_name(table, column)),
            column=sql.Identifier(column),
        )

    @staticmethod
    def drop(table: str, name: str, schema: Optional[str] = None) -> sql.Composed:
        return sql.SQL("ALTER TABLE ONLY {table} DROP CONSTRAINT {name}").format(
            table=SchemaUtils.table_identifier(table, schema),
            name=sql.Identifier(name),
        )

    @staticmethod
    def rename(table: str, old_name: str, new_name: str, schema: Optional[str] = None) -> sql.Composed:
        return sql.SQL("ALTER TABLE ONLY {table} RENAME CONSTRAINT {old} TO {new}").format(
            table=SchemaUtils.table_identifier(table, schema),
            old=sql.Identifier(old_name),
            new=sql.Identifier(new_name),
        )

    @staticmethod
    def unique_set(columns: Sequence[str]) -> sql.Composed:
        """Inline multi-column UNIQUE clause for CREATE TABLE."""
        return sql.SQL("UNIQUE ({})").format(
            sql.SQL(", ").join(sql.Identifier(c) for c in columns)
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'TYPE_MAP',
    'SERIAL_TYPE_MAP',
    'DELETE_RULE_MAP',
    'get_postgres_type',
    'SchemaUtils',
    'IndexBuilder',
    'ConstraintBuilder',
]
