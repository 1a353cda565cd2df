# ============================================================================
# SCHEMA DDL MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Backend command generation
# PURPOSE: Command emitter contract and the PostgreSQL implementation
# CREATED: 19 OCT 2026
# ============================================================================

from core.schema.ddl_utils import (
    IndexBuilder,
    ConstraintBuilder,
    SchemaUtils,
    TYPE_MAP,
    get_postgres_type,
)
from core.schema.emitter import CommandEmitter
from core.schema.sql_generator import PostgreSQLCommandEmitter

__all__ = [
    # Contract
    "CommandEmitter",
    # Generator
    "PostgreSQLCommandEmitter",
    # Utilities
    "IndexBuilder",
    "ConstraintBuilder",
    "SchemaUtils",
    "TYPE_MAP",
    "get_postgres_type",
]
