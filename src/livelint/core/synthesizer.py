"""Best-effort lexical correction of a buffer."""

from __future__ import annotations

from collections.abc import Sequence

from livelint.core.rules import DEFAULT_RULES, RuleSet
from livelint.models.diagnostic import Diagnostic


class CorrectionSynthesizer:
    """Produces a corrected buffer from known-safe misspelling substitutions.

    Substitution is purely lexical: whole-word, case-insensitive, applied in
    table order over the entire buffer. Delimiters, indentation and code
    order are never touched.

    Example:
        synthesizer = CorrectionSynthesizer()
        fixed = synthesizer.synthesize("retrun x;", diagnostics)
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        """Initialize the CorrectionSynthesizer.

        Args:
            rules: Rule tables supplying the safe substitution list
        """
        self._rules = rules

    def synthesize(self, buffer: str, diagnostics: Sequence[Diagnostic]) -> str | None:
        """Build a corrected buffer.

        Args:
            buffer: Original source text (not modified)
            diagnostics: Diagnostics from the same pass, used only as a gate

        Returns:
            The corrected buffer, or None when there were no diagnostics or
            no substitution applied
        """
        if not diagnostics or not buffer:
            return None

        corrected, substitutions = self.apply(buffer)
        if substitutions == 0:
            return None
        return corrected

    def apply(self, buffer: str) -> tuple[str, int]:
        """Apply every safe substitution to buffer.

        Args:
            buffer: Source text

        Returns:
            Tuple of (corrected text, number of substitutions made)
        """
        total = 0
        for entry in self._rules.safe_corrections:
            buffer, count = entry.pattern.subn(entry.canonical, buffer)
            total += count
        return buffer, total
