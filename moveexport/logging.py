"""Structured logging for export runs.

Conventions:
- All log messages include a correlation ID for tracing one export run
- Log levels: DEBUG (internal), INFO (progress), WARNING (frontend warnings), ERROR (fatal)
- Timing hooks on staging, compilation and serialization phases
- Logs always go to stderr; stdout carries only the JSON document

Usage:
    from moveexport.logging import get_logger, timed_operation

    log = get_logger("exporter")
    log.info("Staging", extra={"path": "sources/main.move"})

    with timed_operation(log, "compile"):
        ...
"""

from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from typing import Any, Generator

ROOT_LOGGER = "moveexport"

# Extra record attributes rendered by both formatters
_EXTRA_KEYS = (
    "path",
    "format",
    "module_count",
    "struct_count",
    "function_count",
    "diagnostic_count",
    "elapsed_ms",
    "phase",
)

# Correlation ID for the current run
_correlation_id: str = ""


def new_correlation_id() -> str:
    """Generate a new correlation ID for an export run."""
    global _correlation_id
    _correlation_id = uuid.uuid4().hex[:8]
    return _correlation_id


def get_correlation_id() -> str:
    return _correlation_id or "no-corr"


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "corr_id": get_correlation_id(),
        }
        for key in _EXTRA_KEYS + ("error",):
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val
        return json.dumps(entry)


class HumanFormatter(logging.Formatter):
    """Formatter for human-readable output."""

    COLORS = {
        "DEBUG": "\033[90m",
        "INFO": "\033[36m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = self.RESET if color else ""
        timestamp = self.formatTime(record, "%H:%M:%S")

        extras = []
        for key in _EXTRA_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                extras.append(f"{key}={val}")
        extra_str = f" [{', '.join(extras)}]" if extras else ""

        return (
            f"{color}{timestamp} [{get_correlation_id()}] {record.levelname:7s}{reset} "
            f"{record.name}: {record.getMessage()}{extra_str}"
        )


def setup_logging(level: int = logging.WARNING, structured: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling again replaces the handler, so the CLI can switch formats per run.

    Args:
        level: Logging level for all `moveexport.*` loggers.
        structured: If True, use JSON output. If False, use human-readable.

    Returns:
        The package root logger.
    """
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter() if structured else HumanFormatter())
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace (e.g., "cli", "staging")."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


@contextmanager
def timed_operation(
    logger: logging.Logger,
    operation: str,
    **extra: Any,
) -> Generator[dict[str, Any], None, None]:
    """Context manager that logs timing for an operation.

    Usage:
        with timed_operation(log, "serialize", format="basic") as ctx:
            ...
            ctx["module_count"] = 3  # added to the completion log

    Args:
        logger: Logger instance.
        operation: Name of the operation.
        **extra: Additional fields to log.
    """
    ctx: dict[str, Any] = {}
    start = time.monotonic()
    logger.debug(f"Starting {operation}", extra={"phase": f"{operation}:start", **extra})
    try:
        yield ctx
    except Exception as e:
        elapsed_ms = round((time.monotonic() - start) * 1000)
        logger.error(
            f"Failed {operation}: {e}",
            extra={"phase": f"{operation}:error", "elapsed_ms": elapsed_ms, "error": str(e), **extra},
        )
        raise
    elapsed_ms = round((time.monotonic() - start) * 1000)
    logger.info(
        f"Completed {operation}",
        extra={"phase": f"{operation}:done", "elapsed_ms": elapsed_ms, **ctx, **extra},
    )
