# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core module initialization
# PURPOSE: Export core contracts, models, errors and command emitters
# CREATED: 19 OCT 2026
# ============================================================================

from core.contracts import ColumnType, DeleteRule
from core.errors import (
    SchemaError,
    NotFoundError,
    DuplicateNameError,
    DuplicateTableError,
    DuplicateColumnError,
    ImmutableAttributeError,
    InvalidTransitionError,
    CyclicDependencyError,
)
from core.models import (
    Schema,
    Table,
    Column,
    ColumnPatch,
    SchemaDifference,
    TableDifference,
    ColumnDifference,
)
from core.schema import CommandEmitter, PostgreSQLCommandEmitter

__all__ = [
    # Enums
    "ColumnType",
    "DeleteRule",
    # Errors
    "SchemaError",
    "NotFoundError",
    "DuplicateNameError",
    "DuplicateTableError",
    "DuplicateColumnError",
    "ImmutableAttributeError",
    "InvalidTransitionError",
    "CyclicDependencyError",
    # Models
    "Schema",
    "Table",
    "Column",
    "ColumnPatch",
    "SchemaDifference",
    "TableDifference",
    "ColumnDifference",
    # Emitters
    "CommandEmitter",
    "PostgreSQLCommandEmitter",
]
