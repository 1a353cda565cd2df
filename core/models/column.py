# ============================================================================
# COLUMN MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core model - Column definition
# PURPOSE: Describe a single column and its foreign key relationship
# CREATED: 19 OCT 2026
# EXPORTS: Column, IMMUTABLE_ATTRIBUTES, COMPARED_ATTRIBUTES
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Model

A Column is owned by exactly one Table. Relationship fields are only
set when the column is a foreign key.

Attribute mutability:
    Fixed at creation:  type, autoincrement, is_primary_key,
                        related_table_name, related_column_name
    Alterable:          name, is_indexed, is_unique, default_value,
                        is_nullable, delete_rule
"""

from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from core.contracts import ColumnType, DeleteRule


# Attributes that may only be established when a column is created
IMMUTABLE_ATTRIBUTES = (
    "type",
    "autoincrement",
    "is_primary_key",
    "related_table_name",
    "related_column_name",
)

# Attributes that may change through an alteration
MUTABLE_ATTRIBUTES = (
    "is_indexed",
    "is_unique",
    "default_value",
    "is_nullable",
    "delete_rule",
)

# Everything the differ looks at (name is the diff key, not an attribute)
COMPARED_ATTRIBUTES = IMMUTABLE_ATTRIBUTES + MUTABLE_ATTRIBUTES


class Column(BaseModel):
    """
    Definition of a single column.

    default_value is a literal already encoded for the backend
    (e.g. "'pending'", "0", "true"), or None for no default.
    """
    name: str = Field(..., min_length=1)
    type: ColumnType

    is_primary_key: bool = False
    autoincrement: bool = False
    is_indexed: bool = False
    is_nullable: bool = False
    is_unique: bool = False
    default_value: Optional[str] = None

    # Foreign key relationship
    related_table_name: Optional[str] = None
    related_column_name: Optional[str] = None
    delete_rule: Optional[DeleteRule] = None

    model_config = {"frozen": False}

    @model_validator(mode="after")
    def _check_autoincrement(self) -> "Column":
        if self.autoincrement and not self.type.supports_autoincrement():
            raise ValueError(
                f"Column '{self.name}': autoincrement requires an integer type, got {self.type.value}"
            )
        return self

    @model_validator(mode="after")
    def _default_delete_rule(self) -> "Column":
        """Foreign keys nullify on delete unless told otherwise."""
        if self.related_table_name is not None and self.delete_rule is None:
            self.delete_rule = DeleteRule.NULLIFY
        return self

    @property
    def is_foreign_key(self) -> bool:
        return self.related_table_name is not None

    def copy_deep(self) -> "Column":
        """Independent copy, safe to mutate."""
        return self.model_copy(deep=True)

    def immutable_changes(self, other: "Column") -> List[str]:
        """Names of fixed-at-creation attributes that differ from other."""
        return [
            attribute for attribute in IMMUTABLE_ATTRIBUTES
            if getattr(self, attribute) != getattr(other, attribute)
        ]

    def changed_attributes(self, other: "Column") -> List[str]:
        """Names of all compared attributes that differ from other."""
        return [
            attribute for attribute in COMPARED_ATTRIBUTES
            if getattr(self, attribute) != getattr(other, attribute)
        ]

    def differs_from(self, other: "Column") -> bool:
        return bool(self.changed_attributes(other))
