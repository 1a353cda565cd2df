# ============================================================================
# COLUMN PATCH
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core model - Column alteration value object
# PURPOSE: Enumerate the legal changes an alteration may make to a column
# CREATED: 19 OCT 2026
# EXPORTS: ColumnPatch
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Patch

An immutable description of a column alteration. Only alterable
attributes exist as fields, and unknown fields are rejected, so a patch
can never ask for a type, autoincrement, primary key or relationship
change.

Only fields passed explicitly take part in the patch. Passing
default_value=None clears a default; every other field ignores None.

Example:
    patch = ColumnPatch(is_indexed=True, is_nullable=False)
    builder.alter_column("users", "email", patch, initial_value="''")
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict

from core.contracts import DeleteRule
from core.errors import ImmutableAttributeError
from core.models.column import Column, MUTABLE_ATTRIBUTES


# Fields where an explicit None is a real value rather than "unchanged"
_CLEARABLE_FIELDS = {"default_value"}


class ColumnPatch(BaseModel):
    """Set of attribute changes to apply to one column."""
    name: Optional[str] = None
    is_indexed: Optional[bool] = None
    is_unique: Optional[bool] = None
    default_value: Optional[str] = None
    is_nullable: Optional[bool] = None
    delete_rule: Optional[DeleteRule] = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    def changes(self) -> Dict[str, Any]:
        """Explicitly set attributes, in field declaration order."""
        result = {}
        for field_name in type(self).model_fields:
            if field_name not in self.model_fields_set:
                continue
            value = getattr(self, field_name)
            if value is None and field_name not in _CLEARABLE_FIELDS:
                continue
            result[field_name] = value
        return result

    @property
    def is_empty(self) -> bool:
        return not self.changes()

    def apply_to(self, column: Column) -> Column:
        """Return a patched copy; the input column is left untouched."""
        patched = column.copy_deep()
        for attribute, value in self.changes().items():
            setattr(patched, attribute, value)
        return patched

    @classmethod
    def between(cls, current: Column, target: Column) -> "ColumnPatch":
        """
        Patch that turns current into target (names are not compared).

        Raises:
            ImmutableAttributeError: if the columns differ in an attribute
                that no patch can change
        """
        immutable = current.immutable_changes(target)
        if immutable:
            attribute = immutable[0]
            raise ImmutableAttributeError(
                current.name,
                attribute,
                f"May not change column ({current.name}) {attribute} "
                f"({getattr(current, attribute)!r} -> {getattr(target, attribute)!r})",
            )

        changes = {
            attribute: getattr(target, attribute)
            for attribute in MUTABLE_ATTRIBUTES
            if getattr(current, attribute) != getattr(target, attribute)
        }
        return cls(**changes)
