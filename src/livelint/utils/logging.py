"""Structured logging configuration.

This module provides logging configuration for livelint:
- Configurable log levels and output formats (JSON/console)
- Truncation of oversized values so source buffers never flood log sinks
- Context injection for correlation
- File and console output support
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from enum import StrEnum
from pathlib import Path
from typing import Any, cast

import structlog
from structlog.typing import WrappedLogger

DEFAULT_MAX_VALUE_LENGTH = 200
TRUNCATION_MARKER = "...[truncated]"


class LogFormat(StrEnum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def truncate_log_value(value: Any, max_length: int = DEFAULT_MAX_VALUE_LENGTH) -> Any:
    """Recursively shorten long strings in log values.

    Args:
        value: Value to truncate (can be nested dict/list/str)
        max_length: Longest string kept intact

    Returns:
        Value with long strings cut to max_length plus a marker
    """
    if isinstance(value, str):
        if len(value) > max_length:
            return value[:max_length] + TRUNCATION_MARKER
        return value
    elif isinstance(value, dict):
        return {k: truncate_log_value(v, max_length) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return type(value)(truncate_log_value(v, max_length) for v in value)
    else:
        return value


def make_value_truncator(max_length: int = DEFAULT_MAX_VALUE_LENGTH) -> Any:
    """Build a structlog processor that truncates long values.

    The event name itself is left untouched.

    Args:
        max_length: Longest string kept intact

    Returns:
        Structlog processor
    """

    def value_truncator(
        logger: logging.Logger,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key, value in event_dict.items():
            if key != "event":
                event_dict[key] = truncate_log_value(value, max_length)
        return event_dict

    return value_truncator


def add_context_processor(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Add service name and version to all log entries."""
    event_dict["service"] = "livelint"

    try:
        from livelint._version import __version__

        event_dict["version"] = __version__
    except (ImportError, RuntimeError):
        pass

    return event_dict


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    log_format: LogFormat | str = LogFormat.CONSOLE,
    file_path: Path | str | None = None,
    file_enabled: bool = False,
    max_value_length: int = DEFAULT_MAX_VALUE_LENGTH,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        file_path: Path to log file (if file logging enabled)
        file_enabled: Whether to enable file logging
        max_value_length: Longest logged string value before truncation

    Example:
        # Interactive use
        configure_logging(level="DEBUG", log_format="console")

        # Editor integration shipping logs to an aggregator
        configure_logging(level="INFO", log_format="json")
    """
    if isinstance(level, str):
        level = LogLevel(level.upper())
    if isinstance(log_format, str):
        log_format = LogFormat(log_format.lower())

    numeric_level = getattr(logging, level.value)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_context_processor,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        make_value_truncator(max_value_length),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == LogFormat.JSON:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(), exception_formatter=structlog.dev.plain_traceback
            )
        )

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    handlers.append(console_handler)

    if file_enabled and file_path:
        try:
            file_path = Path(file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(file_path)
            file_handler.setLevel(numeric_level)
            handlers.append(file_handler)
        except OSError as e:
            # Continue with console only
            console_logger = logging.getLogger("livelint.logging")
            console_logger.warning(f"Could not create log file {file_path}: {e}")

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str | None = None) -> WrappedLogger:
    """Get a structured logger instance."""
    return cast(WrappedLogger, structlog.get_logger(name))


def bind_context(**kwargs: Any) -> None:
    """Bind contextual variables for all subsequent log calls.

    Example:
        bind_context(session_id="editor-1", profile="python")
        log.info("analysis_pass_complete")  # Includes session_id and profile
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove contextual variables."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound contextual variables."""
    structlog.contextvars.clear_contextvars()


class LogEventNames:
    """Standard log event names for consistency."""

    # Analysis
    ANALYSIS_PASS_COMPLETE = "analysis_pass_complete"
    ANALYSIS_SKIPPED_EMPTY = "analysis_skipped_empty"

    # Session lifecycle
    SESSION_CREATED = "session_created"
    SESSION_CLOSED = "session_closed"
    EDIT_RECEIVED = "edit_received"
    EDIT_REJECTED = "edit_rejected"
    LANGUAGE_CHANGED = "language_changed"
    DEBOUNCE_RESET = "debounce_reset"
    RESULT_PUBLISHED = "result_published"
    SUBSCRIBER_ERROR = "subscriber_error"

    # Corrections
    CORRECTION_APPLIED = "correction_applied"
    CORRECTION_UNAVAILABLE = "correction_unavailable"

    # Configuration
    CONFIG_LOADING = "config_loading"
    CONFIG_LOADED = "config_loaded"
    CONFIG_INVALID = "config_invalid"

    # CLI
    FILE_ANALYZED = "file_analyzed"
    FILE_READ_ERROR = "file_read_error"
    FILE_CORRECTED = "file_corrected"
