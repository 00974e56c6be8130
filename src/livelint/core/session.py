"""Debounced live analysis for one editor buffer.

This module implements the EditorSession state machine:

    IDLE --edit--> PENDING --quiet interval--> ANALYZING --pass done--> IDLE
                   PENDING --edit--> PENDING (timer reset)
                   PENDING --buffer emptied--> IDLE (no pass, results cleared)

Passes run synchronously on the event loop, so a pass can never overlap an
edit. One session owns one buffer and at most one pending timer.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING

import structlog

from livelint.core.engine import LintEngine
from livelint.models.diagnostic import AnalysisResult
from livelint.models.language import LanguageProfile, resolve_profile
from livelint.utils.async_helpers import (
    BufferLimitError,
    CancellationToken,
    Debouncer,
    SessionClosedError,
)
from livelint.utils.logging import LogEventNames
from livelint.utils.metrics import get_metrics

if TYPE_CHECKING:
    from livelint.config.schema import LintConfig

log = structlog.get_logger()

ResultCallback = Callable[[AnalysisResult | None], None]

DEFAULT_DEBOUNCE_MS = 50
DEFAULT_MAX_LINES = 500_000


class SessionState(StrEnum):
    """Pass orchestration states."""

    IDLE = "idle"
    PENDING = "pending"
    ANALYZING = "analyzing"


class EditorSession:
    """Live analysis session for a single editor buffer.

    Responsibilities:
    - Debounce edits and run one analysis pass per quiet interval
    - Skip analysis and clear results when the buffer becomes empty
    - Publish each new result to subscribers, replacing the previous one
    - Apply a corrected buffer on request and schedule a fresh pass

    Subscribers receive an AnalysisResult after every pass, an empty result
    when the buffer is cleared, and None when a correction was applied and
    the previous diagnostics are stale.

    Example:
        session = EditorSession(language="python")
        session.subscribe(render_diagnostics)
        session.update("def f()\\n    retrun 1")
        await session.wait_idle()
        if session.result.has_correction:
            session.apply_correction()
    """

    def __init__(
        self,
        engine: LintEngine | None = None,
        language: str | LanguageProfile | None = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        max_lines: int = DEFAULT_MAX_LINES,
        session_id: str | None = None,
    ) -> None:
        """Initialize the EditorSession.

        Args:
            engine: Engine used for passes (defaults to built-in rules)
            language: Language name or profile; unknown names use GENERIC
            debounce_ms: Quiet interval before a pass runs, in milliseconds
            max_lines: Largest buffer accepted by update()
            session_id: Identifier bound into log entries
        """
        self._engine = engine or LintEngine()
        self._profile = resolve_profile(language)
        self._debouncer = Debouncer(debounce_ms / 1000)
        self._max_lines = max_lines
        self._session_id = session_id or uuid.uuid4().hex[:8]
        self._log = log.bind(session_id=self._session_id)

        self._buffer = ""
        self._result: AnalysisResult | None = None
        self._state = SessionState.IDLE
        self._idle = asyncio.Event()
        self._idle.set()
        self._closed = CancellationToken()
        self._subscribers: list[ResultCallback] = []

        self._log.debug(
            LogEventNames.SESSION_CREATED,
            profile=str(self._profile),
            debounce_ms=debounce_ms,
            max_lines=max_lines,
        )

    @classmethod
    def from_config(
        cls,
        config: LintConfig,
        engine: LintEngine | None = None,
        language: str | LanguageProfile | None = None,
    ) -> EditorSession:
        """Create a session using engine settings from configuration."""
        from livelint.config.loader import build_rule_set

        return cls(
            engine=engine or LintEngine(build_rule_set(config)),
            language=language if language is not None else config.engine.default_language,
            debounce_ms=config.engine.debounce_ms,
            max_lines=config.engine.max_lines,
        )

    @property
    def session_id(self) -> str:
        """Identifier used in log entries."""
        return self._session_id

    @property
    def state(self) -> SessionState:
        """Current orchestration state."""
        return self._state

    @property
    def buffer(self) -> str:
        """Current buffer text."""
        return self._buffer

    @property
    def profile(self) -> LanguageProfile:
        """Active language profile."""
        return self._profile

    @property
    def result(self) -> AnalysisResult | None:
        """Latest published result, or None if stale or never analyzed."""
        return self._result

    @property
    def closed(self) -> bool:
        """Check if the session has been closed."""
        return self._closed.is_cancelled

    def subscribe(self, callback: ResultCallback) -> Callable[[], None]:
        """Register a callback for published results.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def update(self, buffer: str) -> None:
        """Record an edit and (re)start the debounce timer.

        Args:
            buffer: Full new buffer text

        Raises:
            SessionClosedError: If the session was closed
            BufferLimitError: If buffer has more than max_lines lines; the
                              previous buffer is kept
        """
        self._ensure_open()

        line_count = buffer.count("\n") + 1
        if line_count > self._max_lines:
            self._log.warning(
                LogEventNames.EDIT_REJECTED,
                line_count=line_count,
                max_lines=self._max_lines,
            )
            raise BufferLimitError(line_count, self._max_lines)

        self._buffer = buffer
        self._log.debug(LogEventNames.EDIT_RECEIVED, lines=line_count, length=len(buffer))

        if not buffer.strip():
            self._skip_empty()
            return

        # The previous result no longer describes the buffer
        self._result = None
        self._schedule()

    def set_language(self, language: str | LanguageProfile | None) -> LanguageProfile:
        """Switch the active profile and re-analyze the current buffer.

        Returns:
            The resolved profile
        """
        self._ensure_open()
        self._profile = resolve_profile(language)
        self._log.info(LogEventNames.LANGUAGE_CHANGED, profile=str(self._profile))
        if self._buffer.strip():
            self._result = None
            self._schedule()
        return self._profile

    def apply_correction(self) -> bool:
        """Replace the buffer with the latest corrected buffer.

        The current diagnostics are discarded and a fresh pass is scheduled;
        remaining issues are not assumed to be zero.

        Returns:
            True if a correction was applied, False if none was available
        """
        self._ensure_open()
        result = self._result
        if result is None or not result.corrected_buffer:
            self._log.debug(LogEventNames.CORRECTION_UNAVAILABLE)
            return False

        corrected = result.corrected_buffer
        self._buffer = corrected
        self._result = None
        get_metrics().corrections_applied.inc()
        self._log.info(LogEventNames.CORRECTION_APPLIED, length=len(corrected))
        self._publish(None)
        self._schedule()
        return True

    def clear(self) -> None:
        """Empty the buffer and clear all results."""
        self.update("")

    def flush(self) -> AnalysisResult | None:
        """Run a pending pass immediately instead of waiting for the timer.

        Returns:
            The latest result (unchanged if nothing was pending)
        """
        self._debouncer.flush()
        return self._result

    async def wait_idle(self) -> AnalysisResult | None:
        """Wait until no pass is pending and return the latest result."""
        await self._idle.wait()
        return self._result

    def close(self) -> None:
        """Cancel any pending pass and reject further edits."""
        if self._closed.is_cancelled:
            return
        if self._debouncer.cancel():
            get_metrics().pending_sessions.dec()
        self._closed.cancel()
        self._set_state(SessionState.IDLE)
        self._subscribers.clear()
        self._log.debug(LogEventNames.SESSION_CLOSED)

    def _ensure_open(self) -> None:
        if self._closed.is_cancelled:
            raise SessionClosedError(f"Session {self._session_id} is closed")

    def _schedule(self) -> None:
        metrics = get_metrics()
        if self._debouncer.schedule(self._run_pass):
            metrics.debounce_resets.inc()
        else:
            metrics.pending_sessions.inc()
        self._set_state(SessionState.PENDING)

    def _skip_empty(self) -> None:
        metrics = get_metrics()
        if self._debouncer.cancel():
            metrics.pending_sessions.dec()
        metrics.skipped_passes.inc()
        self._log.debug(LogEventNames.ANALYSIS_SKIPPED_EMPTY)
        self._set_state(SessionState.IDLE)
        self._result = AnalysisResult.empty(self._profile)
        self._publish(self._result)

    def _run_pass(self) -> None:
        get_metrics().pending_sessions.dec()
        self._set_state(SessionState.ANALYZING)
        result = self._engine.run(self._buffer, self._profile)
        self._result = result
        self._set_state(SessionState.IDLE)
        self._publish(result)

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        if state == SessionState.IDLE:
            self._idle.set()
        else:
            self._idle.clear()

    def _publish(self, result: AnalysisResult | None) -> None:
        self._log.debug(
            LogEventNames.RESULT_PUBLISHED,
            diagnostics=len(result.diagnostics) if result else None,
            subscribers=len(self._subscribers),
        )
        for callback in list(self._subscribers):
            try:
                callback(result)
            except Exception:
                self._log.exception(LogEventNames.SUBSCRIBER_ERROR)
