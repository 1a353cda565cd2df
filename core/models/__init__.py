# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Model exports
# PURPOSE: Central export point for all schema models
# CREATED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models for the schema evolution engine.

Ownership:
    Schema -> Table -> Column (each owned exclusively by its parent)

Diff results (SchemaDifference and friends) are frozen dataclasses.
"""

from core.models.column import Column, IMMUTABLE_ATTRIBUTES, MUTABLE_ATTRIBUTES, COMPARED_ATTRIBUTES
from core.models.table import Table
from core.models.schema import Schema
from core.models.patch import ColumnPatch
from core.models.difference import SchemaDifference, TableDifference, ColumnDifference

__all__ = [
    # Schema model
    "Schema",
    "Table",
    "Column",
    "IMMUTABLE_ATTRIBUTES",
    "MUTABLE_ATTRIBUTES",
    "COMPARED_ATTRIBUTES",
    # Alteration
    "ColumnPatch",
    # Differences
    "SchemaDifference",
    "TableDifference",
    "ColumnDifference",
]
