# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging across all components
# CREATED: 18 OCT 2026
# ============================================================================
"""
Structured Logging

Provides structured, JSON-formatted logging for the Sequence status engine.

Features:
- Component-based loggers
- Contextual fields (sequence, namespace, stage)
- JSON output for log aggregation
- Named checkpoints for tracing a reconcile pass

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("services.status_service")

    with log_context(sequence="my-seq", namespace="default"):
        logger.info("Propagating channels", extra={"channel_count": 3})
"""

import json
import logging
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from enum import Enum


class ComponentType(str, Enum):
    """Component types for logging categorization."""
    AGGREGATOR = "aggregator"
    SERVICE = "service"
    LOADER = "loader"


@dataclass
class LogContext:
    """
    Context for structured logging.

    Thread-local storage for contextual fields.
    """
    sequence: Optional[str] = None
    namespace: Optional[str] = None
    stage: Optional[int] = None
    correlation_id: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


# Thread-local context storage
_context_stack = threading.local()


def _get_context_stack() -> list:
    """Get thread-local context stack."""
    if not hasattr(_context_stack, "stack"):
        _context_stack.stack = []
    return _context_stack.stack


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _get_context_stack()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(sequence="my-seq", operation="propagate_channels"):
            logger.info("Processing channels")
    """
    # Merge with parent context
    parent = get_current_context()
    new_context = LogContext(
        sequence=kwargs.get("sequence", parent.sequence),
        namespace=kwargs.get("namespace", parent.namespace),
        stage=kwargs.get("stage", parent.stage),
        correlation_id=kwargs.get("correlation_id", parent.correlation_id),
        component=kwargs.get("component", parent.component),
        operation=kwargs.get("operation", parent.operation),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    stack = _get_context_stack()
    stack.append(new_context)
    try:
        yield new_context
    finally:
        stack.pop()


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for easy parsing by log aggregators.
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_context: bool = True,
    ):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {}

        if self.include_timestamp:
            log_data["timestamp"] = _utc_timestamp()

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_logger:
            log_data["logger"] = record.name

        log_data["message"] = record.getMessage()

        if self.include_context:
            context_dict = get_current_context().to_dict()
            if context_dict:
                log_data["context"] = context_dict

        # Extra fields attached by ContextLogger
        if hasattr(record, "extra") and record.extra:
            log_data["data"] = record.extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Includes context fields inline for easy reading.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human reading."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        context_parts = []
        if context.namespace:
            context_parts.append(f"ns={context.namespace}")
        if context.sequence:
            context_parts.append(f"seq={context.sequence}")
        if context.stage is not None:
            context_parts.append(f"stage={context.stage}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        message = record.getMessage()

        extra_str = ""
        if hasattr(record, "extra") and record.extra:
            extra_str = f" {record.extra}"

        result = f"{timestamp} {level} {record.name}{context_str}: {message}{extra_str}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes context in log records.

    Automatically includes thread-local context in all log messages.
    """

    def process(self, msg, kwargs):
        """Process log record to include context."""
        context = get_current_context()

        extra = dict(kwargs.get("extra") or {})
        extra.update(context.to_dict())
        if self.extra and self.extra.get("component") and "component" not in extra:
            extra["component"] = self.extra["component"]

        # Stored as a single attribute for formatter access
        kwargs["extra"] = {"extra": extra}

        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "services.status_service")
        component: Optional component type for categorization

    Returns:
        ContextLogger instance
    """
    base_logger = logging.getLogger(name)
    component_value = component.value if component is not None else None
    return ContextLogger(base_logger, {"component": component_value})


def configure_logging(
    level: Union[str, int, None] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure logging for the application.

    Unset arguments fall back to LoggingDefaults (LOG_LEVEL, LOG_FORMAT).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (for production)
    """
    from core.config import get_defaults

    defaults = get_defaults().logging
    if level is None:
        level = defaults.level
    if json_output is None:
        json_output = defaults.json_output

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output:
        formatter: logging.Formatter = StructuredFormatter(include_context=True)
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


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

    Checkpoints are named markers that can be queried to
    follow a reconcile pass through the logs.

    Args:
        name: Checkpoint name (e.g., "status_propagated")
        data: Optional checkpoint data
        logger: Optional specific logger to use
    """
    if logger is None:
        logger = logging.getLogger("checkpoint")

    checkpoint_data: Dict[str, Any] = {
        "checkpoint": name,
        "timestamp": _utc_timestamp(),
    }

    context = get_current_context()
    if context.sequence:
        checkpoint_data["sequence"] = context.sequence
    if context.namespace:
        checkpoint_data["namespace"] = context.namespace

    if data:
        checkpoint_data["data"] = data

    logger.info(f"CHECKPOINT: {name}", extra={"extra": checkpoint_data})


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
