# ============================================================================
# MIGRATION BASE
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Versioned migration container
# PURPOSE: Base class for generated and hand-written migrations
# CREATED: 19 OCT 2026
# ============================================================================
"""
Migration Base

A Migration is a versioned container of three procedures:
- upgrade():   structural edits, issued against self.database
- downgrade(): reverse edits (filled in by a human)
- seed():      initial data (filled in by a human)

self.database is a SchemaBuilder, so every statement is validated and
turned into backend commands as it runs.
"""

import importlib.util
from pathlib import Path
from typing import Optional, Type, Union

from core.logging import get_logger, log_context, ComponentType
from core.models import Schema
from core.schema.emitter import CommandEmitter
from orchestrator.builder import SchemaBuilder

logger = get_logger(__name__, ComponentType.BUILDER)


class Migration:
    """Base class for migrations."""

    version: int = 0

    def __init__(self, database: SchemaBuilder):
        self.database = database

    def upgrade(self) -> None:
        pass

    def downgrade(self) -> None:
        pass

    def seed(self) -> None:
        pass


class MigrationLoadError(Exception):
    """Raised when a migration file does not define a Migration subclass."""
    pass


def load_migration_class(path: Union[str, Path]) -> Type[Migration]:
    """
    Import a migration file and return the Migration subclass it defines.

    Only load files you trust - importing runs them as Python.

    Raises:
        OSError: path cannot be read
        MigrationLoadError: path is not a Python module or defines no
            Migration subclass
    """
    path = Path(path)
    spec = importlib.util.spec_from_file_location(path.stem, path)
    if spec is None or spec.loader is None:
        raise MigrationLoadError(f"Not a Python module: {path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    logger.debug(f"Loaded migration module {path.name}")

    for value in vars(module).values():
        if isinstance(value, type) and issubclass(value, Migration) and value is not Migration:
            return value
    raise MigrationLoadError(f"No Migration subclass defined in {path}")


def run_upgrade(
    migration_cls: Type[Migration],
    schema: Schema,
    emitter: Optional[CommandEmitter] = None,
) -> SchemaBuilder:
    """
    Run a migration's upgrade against schema.

    Args:
        migration_cls: Migration subclass to run
        schema: Schema the migration starts from (not modified)
        emitter: Optional command emitter

    Returns:
        The SchemaBuilder holding the upgraded schema and emitted commands
    """
    builder = SchemaBuilder(emitter, schema)
    with log_context(operation="upgrade", migration_version=migration_cls.version):
        migration_cls(builder).upgrade()
        logger.info(f"Upgraded to version {migration_cls.version} ({len(builder.commands)} commands)")
    return builder


__all__ = [
    "Migration",
    "MigrationLoadError",
    "load_migration_class",
    "run_upgrade",
]
