# ============================================================================
# MIGRATION SOURCE TEMPLATES
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Template rendering with Jinja2
# PURPOSE: Render generated migration modules and their statements
# CREATED: 19 OCT 2026
# ============================================================================
"""
Migration Source Templates

Renders the Python source of a generated migration. Statement bodies are
produced by MigrationStatementWriter; the module skeleton comes from a
Jinja2 template.

Rendered module shape:
    class Migration<version>(Migration):
        version = <version>

        def upgrade(self):
            self.database.create_table(...)
            ...

        def downgrade(self):
            pass

        def seed(self):
            pass
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from jinja2 import Environment, BaseLoader, StrictUndefined, TemplateSyntaxError, UndefinedError

from core.config import MigrationDefaults
from core.models import Column, ColumnPatch, Table


MIGRATION_TEMPLATE = '''"""
{{ class_name }}

Generated migration. Review before applying; downgrade and seed are
left for a human to fill in.
"""

from core.contracts import ColumnType, DeleteRule
from core.models import Column, ColumnPatch, Table
from orchestrator.migration import Migration


class {{ class_name }}(Migration):
    version = {{ version }}

    def upgrade(self):
{{ upgrade_body }}

    def downgrade(self):
        pass

    def seed(self):
        pass
'''


# Column keyword arguments in output order; name and type always come first
_COLUMN_FIELDS = (
    "is_primary_key",
    "autoincrement",
    "is_indexed",
    "is_nullable",
    "is_unique",
    "default_value",
    "related_table_name",
    "related_column_name",
    "delete_rule",
)


class MigrationRenderError(Exception):
    """Raised when the migration template cannot be rendered."""
    pass


def _literal(value: Any) -> str:
    """Python source for a column attribute value."""
    if isinstance(value, Enum):
        return f"{type(value).__name__}.{value.name}"
    return repr(value)


class MigrationStatementWriter:
    """
    Writes one upgrade statement per structural change.

    Output is deterministic: the same inputs always produce the same text.
    """

    def __init__(self, defaults: Optional[MigrationDefaults] = None):
        self.defaults = defaults or MigrationDefaults()

    def _pad(self, depth: int) -> str:
        return self.defaults.indent * depth

    def column_source(self, column: Column) -> str:
        """Column(...) constructor, listing only non-default attributes."""
        arguments = [f"name={column.name!r}", f"type={_literal(column.type)}"]
        for attribute in _COLUMN_FIELDS:
            value = getattr(column, attribute)
            if value == Column.model_fields[attribute].default:
                continue
            arguments.append(f"{attribute}={_literal(value)}")
        return f"Column({', '.join(arguments)})"

    def create_table(self, table: Table) -> str:
        body = self._pad(2)
        lines = [
            f"{body}self.database.create_table(",
            f"{self._pad(3)}Table(",
            f"{self._pad(4)}name={table.name!r},",
            f"{self._pad(4)}columns=[",
        ]
        lines.extend(f"{self._pad(5)}{self.column_source(c)}," for c in table.columns)
        lines.append(f"{self._pad(4)}],")
        if table.unique_column_set:
            lines.append(f"{self._pad(4)}unique_column_set={list(table.unique_column_set)!r},")
        lines.append(f"{self._pad(3)})")
        lines.append(f"{body})")
        return "\n".join(lines)

    def delete_table(self, table_name: str) -> str:
        return f"{self._pad(2)}self.database.delete_table({table_name!r})"

    def add_column(self, table_name: str, column: Column) -> str:
        return (
            f"{self._pad(2)}self.database.add_column(\n"
            f"{self._pad(3)}{table_name!r},\n"
            f"{self._pad(3)}{self.column_source(column)},\n"
            f"{self._pad(2)})"
        )

    def delete_column(self, table_name: str, column_name: str) -> str:
        return f"{self._pad(2)}self.database.delete_column({table_name!r}, {column_name!r})"

    def alter_column(self, table_name: str, column_name: str, patch: ColumnPatch, needs_backfill: bool) -> str:
        arguments = ", ".join(
            f"{attribute}={_literal(value)}" for attribute, value in patch.changes().items()
        )
        lines = [
            f"{self._pad(2)}self.database.alter_column(",
            f"{self._pad(3)}{table_name!r},",
            f"{self._pad(3)}{column_name!r},",
            f"{self._pad(3)}ColumnPatch({arguments}),",
        ]
        if needs_backfill:
            lines.append(f"{self._pad(3)}initial_value=None,  # value for existing NULL rows")
        lines.append(f"{self._pad(2)})")
        return "\n".join(lines)

    def unique_column_set_changed(
        self,
        table_name: str,
        actual: Optional[List[str]],
        expected: Optional[List[str]],
    ) -> str:
        """Comment only; the unique column set has no alteration."""
        return (
            f"{self._pad(2)}# {table_name}: unique column set changes from {actual!r} to {expected!r}\n"
            f"{self._pad(2)}# (no alteration exists; recreate the table or edit the database by hand)"
        )


class MigrationTemplate:
    """
    Jinja2 renderer for the migration module skeleton.

    Thread-safe, can be reused across multiple renders.
    """

    def __init__(self, defaults: Optional[MigrationDefaults] = None):
        self.defaults = defaults or MigrationDefaults()
        self._env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self._template = self._env.from_string(MIGRATION_TEMPLATE)

    def render(self, version: int, statements: List[str]) -> str:
        """
        Render a full migration module.

        Args:
            version: Migration version number
            statements: Upgrade statements, already indented (a body of
                only comments gets a trailing pass)

        Returns:
            Python source text
        """
        body = list(statements)
        if all(s.lstrip().startswith("#") for s in body):
            body.append(f"{self.defaults.indent * 2}pass")
        upgrade_body = "\n".join(body)
        context: Dict[str, Any] = {
            "class_name": self.defaults.class_name(version),
            "version": version,
            "upgrade_body": upgrade_body,
        }
        try:
            return self._template.render(context)
        except (TemplateSyntaxError, UndefinedError) as e:
            raise MigrationRenderError(f"Failed to render migration {version}: {e}")


__all__ = [
    "MIGRATION_TEMPLATE",
    "MigrationStatementWriter",
    "MigrationTemplate",
    "MigrationRenderError",
]
