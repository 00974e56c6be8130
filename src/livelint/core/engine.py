"""Single-pass analysis of a source buffer.

This module ties the three analysis stages together:
1. Tokenizer: delimiter balance and string state
2. PatternDispatcher: per-line language rules, typos, terminators
3. CorrectionSynthesizer: safe lexical substitutions

``analyze()`` is a pure function: it takes the buffer, the profile and the
rule tables explicitly and never logs, records metrics, or raises for any
string input. ``LintEngine`` wraps it with logging and metrics for callers
that want observability.
"""

from __future__ import annotations

import time

import structlog

from livelint.core.dispatcher import PatternDispatcher
from livelint.core.rules import DEFAULT_RULES, RuleSet
from livelint.core.synthesizer import CorrectionSynthesizer
from livelint.core.tokenizer import Tokenizer
from livelint.models.diagnostic import AnalysisResult
from livelint.models.language import LanguageProfile, resolve_profile
from livelint.utils.logging import LogEventNames
from livelint.utils.metrics import Timer, get_metrics

log = structlog.get_logger()


def analyze(
    buffer: str,
    profile: LanguageProfile | str | None = LanguageProfile.GENERIC,
    rules: RuleSet = DEFAULT_RULES,
) -> AnalysisResult:
    """Run one complete analysis pass over a buffer.

    Diagnostics are ordered: tokenizer findings first, then per-line
    pattern/typo/terminator findings in line order, then end-of-buffer
    summaries.

    Args:
        buffer: Source text to analyze
        profile: Language profile or name; unknown names use GENERIC
        rules: Rule tables to apply

    Returns:
        AnalysisResult for this pass
    """
    resolved = resolve_profile(profile)
    if not buffer:
        return AnalysisResult.empty(resolved)

    start = time.perf_counter()

    scan = Tokenizer(resolved).scan(buffer)
    dispatcher = PatternDispatcher(resolved, rules)
    pattern_diagnostics = dispatcher.dispatch(buffer.split("\n"), skip_lines=scan.comment_lines)

    diagnostics = (*scan.diagnostics, *pattern_diagnostics, *scan.summary)
    corrected = CorrectionSynthesizer(rules).synthesize(buffer, diagnostics)

    elapsed_ms = (time.perf_counter() - start) * 1000
    return AnalysisResult(
        diagnostics=diagnostics,
        corrected_buffer=corrected,
        elapsed_ms=elapsed_ms,
        profile=resolved,
    )


class LintEngine:
    """Analysis entry point with logging and metrics.

    Example:
        engine = LintEngine(rules=build_rule_set(config))
        result = engine.run(source, "python")
        if result.has_correction:
            offer_fix(result.corrected_buffer)
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        """Initialize the LintEngine.

        Args:
            rules: Rule tables used for every pass
        """
        self._rules = rules

    @property
    def rules(self) -> RuleSet:
        """Rule tables used for every pass."""
        return self._rules

    def run(
        self,
        buffer: str,
        profile: LanguageProfile | str | None = LanguageProfile.GENERIC,
    ) -> AnalysisResult:
        """Analyze buffer and record the pass.

        Args:
            buffer: Source text to analyze
            profile: Language profile or name

        Returns:
            AnalysisResult for this pass
        """
        metrics = get_metrics()
        with Timer(metrics.pass_duration):
            result = analyze(buffer, profile, self._rules)

        metrics.passes.inc(labels={"profile": str(result.profile)})
        for diagnostic in result.diagnostics:
            metrics.diagnostics.inc(labels={"category": diagnostic.category})
        if result.has_correction:
            metrics.corrections_offered.inc()

        log.debug(
            LogEventNames.ANALYSIS_PASS_COMPLETE,
            profile=str(result.profile),
            diagnostics=len(result.diagnostics),
            errors=len(result.errors),
            warnings=len(result.warnings),
            correction=result.has_correction,
            elapsed_ms=round(result.elapsed_ms, 3),
        )
        return result
