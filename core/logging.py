# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging across all components
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Provides structured logging for the schema evolution engine.

Features:
- Component-based loggers
- Contextual fields (operation, table, column, migration_version)
- JSON output for log aggregation
- Named checkpoints for tracing a migration plan

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("orchestrator.builder")

    with log_context(operation="alter_column", table="users", column="email"):
        logger.debug("Validating alteration")
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Union
from enum import Enum


class ComponentType(str, Enum):
    """Component types for logging categorization."""
    BUILDER = "builder"
    DIFFER = "differ"
    EMITTER = "emitter"
    SYNTHESIZER = "synthesizer"
    SERVICE = "service"
    TOOL = "tool"


# ============================================================================
# CONTEXT
# ============================================================================

@dataclass(frozen=True)
class LogContext:
    """
    Fields attached to every record logged inside a log_context block.

    Contexts nest; an inner block inherits every field it does not set.
    """
    operation: Optional[str] = None
    table: Optional[str] = None
    column: Optional[str] = None
    migration_version: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def merged(self, **changes) -> "LogContext":
        extra = {**self.extra, **changes.pop("extra", {})}
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, extra=extra, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only, extra flattened in."""
        result = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "extra" and getattr(self, f.name) is not None
        }
        result.update(self.extra)
        return result

    def label(self) -> str:
        """Short inline form for human-readable output."""
        parts = []
        if self.operation:
            parts.append(f"op={self.operation}")
        if self.table:
            parts.append(f"table={self.table}")
        if self.column:
            parts.append(f"column={self.column}")
        if self.migration_version is not None:
            parts.append(f"version={self.migration_version}")
        return f" [{', '.join(parts)}]" if parts else ""


_local = threading.local()


def _stack() -> List[LogContext]:
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


def get_current_context() -> LogContext:
    """Innermost active context for this thread."""
    stack = _stack()
    return stack[-1] if stack else LogContext()


@contextmanager
def log_context(**kwargs) -> Iterator[LogContext]:
    """
    Context manager for adding logging context.

    Args:
        **kwargs: LogContext fields to set for the block

    Example:
        with log_context(operation="create_table", table="users"):
            logger.debug("Adding table")
    """
    context = get_current_context().merged(**kwargs)
    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


# ============================================================================
# FORMATTERS
# ============================================================================

def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    One JSON object per record, for log aggregators.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": _timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            log_data["context"] = context

        data = getattr(record, "extra", None)
        if data:
            log_data["data"] = data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = f"{record.filename}:{record.lineno}"
        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter, context inline."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        context = get_current_context().label()
        result = f"{timestamp} {record.levelname:<8} {record.name}{context}: {record.getMessage()}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"
        return result


# ============================================================================
# LOGGERS
# ============================================================================

class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that stamps the component and the active context on
    every record (as record.extra).
    """

    def process(self, msg, kwargs):
        data = dict(kwargs.get("extra", {}))
        component = self.extra.get("component")
        if component is not None:
            data["component"] = component.value
        data.update(get_current_context().to_dict())

        kwargs["extra"] = {"extra": data}
        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "orchestrator.builder")
        component: Optional component type for categorization
    """
    return ContextLogger(logging.getLogger(name), {"component": component})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (also enabled by LOG_FORMAT=json)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    # stderr keeps stdout free for generated migration source
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers[:] = [handler]


# ============================================================================
# CHECKPOINT LOGGING
# ============================================================================

def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named checkpoint.

    Checkpoints are named markers that can be queried to follow a
    migration plan from diff to generated source.

    Args:
        name: Checkpoint name (e.g., "migration_statements")
        data: Optional checkpoint data
        logger: Optional specific logger to use
    """
    checkpoint = {"checkpoint": name, "timestamp": _timestamp()}
    checkpoint.update(get_current_context().to_dict())
    if data:
        checkpoint["data"] = data

    (logger or logging.getLogger("checkpoint")).info(
        f"CHECKPOINT: {name}", extra={"extra": checkpoint}
    )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
