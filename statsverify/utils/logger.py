"""
Structured logging utility for statsverify.

Provides JSON-formatted logging with context injection and operation timing.
Diagnostic lines produced by the comparison layer travel in the "message"
field so they stay human-readable inside the JSON envelope.
"""

import json
import logging
import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from functools import wraps

LOG_LEVEL_ENV = "STATSVERIFY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "DEBUG"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(value: Optional[str] = None) -> int:
    """
    Translate a level name into a logging level.

    Args:
        value: Level name; falls back to STATSVERIFY_LOG_LEVEL, then DEBUG

    Returns:
        Numeric logging level

    Raises:
        ValueError: If the name is not one of VALID_LOG_LEVELS

    Example:
        >>> resolve_log_level("warning")
        30
    """
    name = (value if value is not None else os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    if name not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid {LOG_LEVEL_ENV} '{name}'. Expected one of: {', '.join(VALID_LOG_LEVELS)}"
        )
    return getattr(logging, name)


class StructuredLogger:
    """
    JSON-formatted logger with context injection and operation timing.

    All log output is JSON so that comparison runs can be grepped and parsed.
    """

    def __init__(self, name: str, level: Optional[int] = None):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__ from calling module)
            level: Logging level; defaults to resolve_log_level()
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level if level is not None else resolve_log_level())

        # The JSON line is the whole record
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)

    def _format_log(
        self,
        level: str,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
        error: Optional[str] = None,
    ) -> str:
        """Render one JSON line; optional fields are omitted when unset."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "message": message,
        }

        if operation:
            log_entry["operation"] = operation

        if context:
            log_entry["context"] = context

        if duration_ms is not None:
            log_entry["duration_ms"] = round(duration_ms, 2)

        if error:
            log_entry["error"] = error

        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def _emit(self, level: int, message: str, **fields: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._format_log(logging.getLevelName(level), message, **fields))

    def debug(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self._emit(logging.DEBUG, message, operation=operation, context=context)

    def info(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
    ):
        self._emit(logging.INFO, message, operation=operation, context=context, duration_ms=duration_ms)

    def warning(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
    ):
        """Log a warning; the comparison sink reports every discrepancy here."""
        self._emit(logging.WARNING, message, operation=operation, context=context, error=error)

    def error(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
        duration_ms: Optional[float] = None,
    ):
        self._emit(
            logging.ERROR,
            message,
            operation=operation,
            context=context,
            error=error,
            duration_ms=duration_ms,
        )


def log_operation(operation_name: str):
    """
    Decorator to automatically log operation start, duration, and completion.

    Usage:
        @log_operation("compare_cgroup_stats")
        def expect_stats_equals(sink, expected, actual):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context = {
                "function": func.__name__,
            }

            logger.debug(f"Starting {operation_name}", operation=operation_name, context=context)

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                duration_ms = (time.time() - start_time) * 1000
                logger.info(
                    f"Completed {operation_name}",
                    operation=operation_name,
                    context=context,
                    duration_ms=duration_ms,
                )
                return result
            except Exception as e:
                duration_ms = (time.time() - start_time) * 1000
                logger.error(
                    f"Failed {operation_name}",
                    operation=operation_name,
                    context=context,
                    error=str(e),
                    duration_ms=duration_ms,
                )
                raise

        return wrapper

    return decorator


def get_logger(name: str) -> StructuredLogger:
    """
    Factory function to get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)
