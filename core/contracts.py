# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Foundation - Core enums shared by models, emitters and generators
# PURPOSE: Define column types and foreign key delete rules
# CREATED: 19 OCT 2026
# EXPORTS: ColumnType, DeleteRule
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the schema evolution engine.

These enums cross every boundary of the system:
- Python (in-memory schema model)
- SQL (command emitters map them to backend types/clauses)
- Source (generated migrations reference them by member name)
"""

from enum import Enum


# ============================================================================
# COLUMN TYPES
# ============================================================================

class ColumnType(str, Enum):
    """
    Logical column types.

    Backend emitters translate these to concrete database types.
    A column's type is fixed once the column exists.
    """
    INTEGER = "integer"
    BIG_INTEGER = "big_integer"
    DOUBLE = "double"
    STRING = "string"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    DOCUMENT = "document"        # Arbitrary JSON

    def supports_autoincrement(self) -> bool:
        """Only integer types may be backed by a sequence."""
        return self in (ColumnType.INTEGER, ColumnType.BIG_INTEGER)


# ============================================================================
# FOREIGN KEY DELETE RULES
# ============================================================================

class DeleteRule(str, Enum):
    """
    What happens to a referencing row when the referenced row is deleted.
    """
    CASCADE = "cascade"          # Delete the referencing row too
    RESTRICT = "restrict"        # Refuse the delete
    NULLIFY = "nullify"          # Set the foreign key column to NULL
    DEFAULT = "default"          # Set the foreign key column to its default


__all__ = ["ColumnType", "DeleteRule"]
