"""Async utilities for live analysis scheduling.

This module provides:
- Custom exceptions for error handling
- A cancellable debounce timer with a single-pending-timer invariant
- A cooperative cancellation token
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import structlog

from livelint.utils.logging import LogEventNames

log = structlog.get_logger()


# =============================================================================
# Custom Exceptions
# =============================================================================


class LintError(Exception):
    """Base exception for all livelint errors."""


class ConfigurationError(LintError):
    """Configuration is missing or inconsistent."""


class BufferLimitError(LintError):
    """Buffer exceeds the configured maximum number of lines.

    Attributes:
        line_count: Number of lines in the rejected buffer.
        max_lines: Configured maximum.
    """

    def __init__(self, line_count: int, max_lines: int) -> None:
        super().__init__(f"Buffer has {line_count} lines; maximum is {max_lines}")
        self.line_count = line_count
        self.max_lines = max_lines


class SessionClosedError(LintError):
    """Operation attempted on a closed editor session."""


# =============================================================================
# Debounce Timer
# =============================================================================


class Debouncer:
    """Cancellable quiet-interval timer.

    At most one callback is outstanding at any time. Scheduling while a
    callback is pending cancels the pending one and restarts the interval,
    so the callback only fires once no new schedule() call has arrived for
    ``interval`` seconds.

    Example:
        debouncer = Debouncer(0.05)

        def on_edit(text):
            debouncer.schedule(lambda: run_pass(text))

        # Force the pending callback to run right now
        debouncer.flush()
    """

    def __init__(
        self,
        interval: float,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the debouncer.

        Args:
            interval: Quiet interval in seconds before the callback fires.
            loop: Event loop to schedule on. Defaults to the running loop
                  at the time of the first schedule() call.

        Raises:
            ValueError: If interval is negative.
        """
        if interval < 0:
            raise ValueError(f"Debounce interval must be >= 0, got {interval}")
        self._interval = interval
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._callback: Callable[[], Any] | None = None
        self._resets = 0

    @property
    def interval(self) -> float:
        """Return the quiet interval in seconds."""
        return self._interval

    @property
    def pending(self) -> bool:
        """Return True if a callback is waiting to fire."""
        return self._handle is not None

    @property
    def resets(self) -> int:
        """Return how many pending callbacks were superseded by a new schedule."""
        return self._resets

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, callback: Callable[[], Any]) -> bool:
        """Schedule callback after the quiet interval, replacing any pending one.

        Args:
            callback: Zero-argument callable to run when the timer fires.

        Returns:
            True if a pending callback was replaced (timer reset), False otherwise.
        """
        replaced = self.cancel()
        if replaced:
            self._resets += 1
            log.debug(LogEventNames.DEBOUNCE_RESET, interval=self._interval, resets=self._resets)

        self._callback = callback
        self._handle = self._get_loop().call_later(self._interval, self._fire)
        return replaced

    def cancel(self) -> bool:
        """Cancel the pending callback, if any.

        Returns:
            True if a pending callback was cancelled, False if none was pending.
        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._callback = None
        return True

    def flush(self) -> bool:
        """Run the pending callback immediately.

        Returns:
            True if a callback ran, False if nothing was pending.
        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is not None:
            callback()


# =============================================================================
# Cancellation Utilities
# =============================================================================


class CancellationToken:
    """Token for cooperative cancellation of async operations.

    Example:
        token = CancellationToken()

        async def worker(token: CancellationToken):
            while not token.is_cancelled:
                await do_work()

        # Cancel from elsewhere
        token.cancel()
    """

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True
