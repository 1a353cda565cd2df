# ============================================================================
# SCHEMA ERRORS
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Foundation - Exception hierarchy
# PURPOSE: Caller-facing validation failures for schema edits
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema Errors

Every failure is raised synchronously, before the failing call mutates
the working schema or appends a command. None of these are retried.

Hierarchy:
    SchemaError
    ├── NotFoundError
    ├── DuplicateNameError
    │   ├── DuplicateTableError
    │   └── DuplicateColumnError
    ├── ImmutableAttributeError
    ├── InvalidTransitionError
    └── CyclicDependencyError
"""

from typing import List, Optional, Sequence


class SchemaError(Exception):
    """Base exception for schema validation errors."""
    pass


class NotFoundError(SchemaError):
    """Raised when a referenced table or column does not exist."""
    def __init__(self, table_name: str, column_name: Optional[str] = None):
        self.table_name = table_name
        self.column_name = column_name
        if column_name is None:
            message = f"Table {table_name} does not exist."
        else:
            message = f"Column {column_name} does not exist in table {table_name}."
        super().__init__(message)


class DuplicateNameError(SchemaError):
    """Raised when a create or rename target collides with an existing name."""
    pass


class DuplicateTableError(DuplicateNameError):
    """Raised when a table name is already taken in a schema."""
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table {table_name} already exists.")


class DuplicateColumnError(DuplicateNameError):
    """Raised when a column name is already taken in a table."""
    def __init__(self, table_name: str, column_name: str):
        self.table_name = table_name
        self.column_name = column_name
        super().__init__(f"Column {column_name} already exists in table {table_name}.")


class ImmutableAttributeError(SchemaError):
    """Raised when an alteration touches an attribute fixed at creation."""
    def __init__(self, column_name: str, attribute: str, message: str):
        self.column_name = column_name
        self.attribute = attribute
        super().__init__(message)


class InvalidTransitionError(SchemaError):
    """Raised when a column change has no way to be applied to existing rows."""
    pass


class CyclicDependencyError(SchemaError):
    """Raised when tables reference each other in a foreign key cycle."""
    def __init__(self, table_names: Sequence[str]):
        self.table_names: List[str] = list(table_names)
        super().__init__(f"Cycle detected involving tables: {self.table_names}")


__all__ = [
    "SchemaError",
    "NotFoundError",
    "DuplicateNameError",
    "DuplicateTableError",
    "DuplicateColumnError",
    "ImmutableAttributeError",
    "InvalidTransitionError",
    "CyclicDependencyError",
]
