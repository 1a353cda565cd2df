# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Snapshot management layer
# PURPOSE: Schema snapshot loading for migration generation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Services Module

Usage:
    from services import SchemaService

    service = SchemaService("schemas/")
    current = service.get_or_raise("v1")
"""

from .schema_service import SchemaService

__all__ = [
    "SchemaService",
]
