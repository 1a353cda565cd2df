# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for command emission and migration generation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for command emitters and generated migrations.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class EmitterDefaults:
    """
    Defaults for backend command emission.

    schema_name qualifies every table identifier when set; when None,
    commands use unqualified names and rely on the search path.
    """
    schema_name: Optional[str] = None
    is_temporary: bool = False

    @classmethod
    def from_env(cls) -> "EmitterDefaults":
        """Create from environment variables."""
        return cls(
            schema_name=os.getenv("SCHEMA_NAME") or None,
            is_temporary=_env_flag("SCHEMA_TEMPORARY_TABLES"),
        )


@dataclass(frozen=True)
class MigrationDefaults:
    """
    Defaults for generated migration source.
    """
    indent: str = "    "
    class_prefix: str = "Migration"
    migrations_dir: str = "migrations"

    def class_name(self, version: int) -> str:
        return f"{self.class_prefix}{version}"

    def file_name(self, version: int) -> str:
        return f"{version:08d}_{self.class_prefix.lower()}.py"

    @classmethod
    def from_env(cls) -> "MigrationDefaults":
        """Create from environment variables."""
        return cls(
            migrations_dir=os.getenv("MIGRATIONS_DIR", "migrations"),
        )


@dataclass(frozen=True)
class Defaults:
    """All default groups."""
    emitter: EmitterDefaults
    migration: MigrationDefaults


_defaults: Optional[Defaults] = None


def get_defaults(reload: bool = False) -> Defaults:
    """Get shared defaults, read from the environment once."""
    global _defaults
    if _defaults is None or reload:
        _defaults = Defaults(
            emitter=EmitterDefaults.from_env(),
            migration=MigrationDefaults.from_env(),
        )
    return _defaults


__all__ = [
    "EmitterDefaults",
    "MigrationDefaults",
    "Defaults",
    "get_defaults",
]
