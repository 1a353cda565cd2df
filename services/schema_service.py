# ============================================================================
# SCHEMA SNAPSHOT SERVICE
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Schema snapshot management
# PURPOSE: Load, cache and write schema snapshots as YAML
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema Snapshot Service

Loads schema snapshots from YAML files and provides lookup by name
(the file stem). Caches loaded snapshots.

Snapshot format:
    tables:
      - name: users
        columns:
          - name: id
            type: big_integer
            is_primary_key: true
            autoincrement: true
          - name: email
            type: string
            is_unique: true
"""

from pathlib import Path
from typing import Dict, List, Optional, Union
import yaml

from core.logging import get_logger, ComponentType
from core.models import Schema

logger = get_logger(__name__, ComponentType.SERVICE)


class SchemaService:
    """Service for loading and managing schema snapshots."""

    def __init__(self, snapshots_dir: Optional[str] = None):
        """
        Initialize schema service.

        Args:
            snapshots_dir: Directory containing snapshot YAML files.
                          Defaults to ./schemas/
        """
        if snapshots_dir:
            self.snapshots_dir = Path(snapshots_dir)
        else:
            self.snapshots_dir = Path.cwd() / "schemas"

        self._cache: Dict[str, Schema] = {}
        self._loaded = False

    def load_all(self) -> int:
        """
        Load all snapshots from the snapshots directory.

        Returns:
            Number of snapshots loaded
        """
        if not self.snapshots_dir.exists():
            logger.warning(f"Snapshots directory not found: {self.snapshots_dir}")
            return 0

        count = 0
        paths = sorted(self.snapshots_dir.glob("*.yaml")) + sorted(self.snapshots_dir.glob("*.yml"))
        for yaml_file in paths:
            try:
                self._cache[yaml_file.stem] = self.load_file(yaml_file)
                count += 1
                logger.info(f"Loaded schema snapshot: {yaml_file.stem}")
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error(f"Failed to load {yaml_file}: {e}")

        self._loaded = True
        logger.info(f"Loaded {count} schema snapshots from {self.snapshots_dir}")
        return count

    def get(self, name: str) -> Optional[Schema]:
        """
        Get a snapshot by name.

        Returns a deep copy so callers cannot change the cached snapshot.
        """
        if not self._loaded:
            self.load_all()

        schema = self._cache.get(name)
        return Schema.from_schema(schema) if schema is not None else None

    def get_or_raise(self, name: str) -> Schema:
        """
        Get a snapshot, raising if not found.

        Raises:
            KeyError if snapshot not found
        """
        schema = self.get(name)
        if schema is None:
            raise KeyError(f"Schema snapshot not found: {name}")
        return schema

    def list_names(self) -> List[str]:
        if not self._loaded:
            self.load_all()
        return sorted(self._cache)

    def register(self, name: str, schema: Schema) -> None:
        """
        Register a snapshot (for testing or programmatic use).

        The snapshot must have a valid dependency order.
        """
        schema.dependency_ordered_tables  # raises CyclicDependencyError
        self._cache[name] = Schema.from_schema(schema)
        logger.info(f"Registered schema snapshot: {name}")

    @staticmethod
    def load_file(path: Union[str, Path]) -> Schema:
        """
        Load a snapshot from a YAML file.

        Raises:
            yaml.YAMLError on unparseable YAML
            pydantic.ValidationError (a ValueError) on malformed snapshots
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return Schema.model_validate(data)

    @staticmethod
    def dump_file(schema: Schema, path: Union[str, Path]) -> Path:
        """Write a snapshot as YAML, omitting default attributes."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = schema.model_dump(mode="json", exclude_defaults=True)
        data.setdefault("tables", [])
        with open(path, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        return path

    def reload(self) -> int:
        """
        Reload all snapshots from disk.

        Returns:
            Number of snapshots loaded
        """
        self._cache.clear()
        self._loaded = False
        return self.load_all()
