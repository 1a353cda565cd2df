# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the schema engine.
"""

from core.config.defaults import (
    EmitterDefaults,
    MigrationDefaults,
    Defaults,
    get_defaults,
)

__all__ = [
    "EmitterDefaults",
    "MigrationDefaults",
    "Defaults",
    "get_defaults",
]
