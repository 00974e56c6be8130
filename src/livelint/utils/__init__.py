"""Utility functions and helpers.

This module provides various utilities for livelint:
- async_helpers: Exceptions, debounce timer, cancellation
- logging: Structured logging configuration
- metrics: Analysis metrics collection
"""

from livelint.utils.async_helpers import (
    BufferLimitError,
    CancellationToken,
    ConfigurationError,
    Debouncer,
    LintError,
    SessionClosedError,
)
from livelint.utils.logging import (
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from livelint.utils.metrics import (
    Counter,
    Gauge,
    Histogram,
    MetricsRegistry,
    Timer,
    get_metrics,
)

__all__ = [
    # Errors
    "LintError",
    "ConfigurationError",
    "BufferLimitError",
    "SessionClosedError",
    # Scheduling
    "Debouncer",
    "CancellationToken",
    # Logging
    "LogFormat",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    # Metrics
    "Counter",
    "Gauge",
    "Histogram",
    "MetricsRegistry",
    "Timer",
    "get_metrics",
]
