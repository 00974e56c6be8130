"""Delimiter balance tracking for live analysis.

This module implements the Tokenizer, a single forward scan over a buffer
that tracks:
- Parenthesis, bracket and brace balance outside string literals
- Single-quote, double-quote and multi-line string state
- Which lines are full-line comments, including the body of a block comment

Unmatched closers are reported at their exact position and the counter is
reset to zero so scanning continues. Unclosed openers are summarized once
per delimiter kind at the end of the buffer.

Quote toggling looks back a single character for a backslash, so an
escaped backslash right before a quote (``\\\\"``) is treated as an escaped
quote.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from livelint.models.diagnostic import Category, Diagnostic, Severity
from livelint.models.language import LanguageProfile

ESCAPE = "\\"

# opener -> (closer, name used in messages)
DELIMITERS: dict[str, tuple[str, str]] = {
    "(": (")", "parenthesis"),
    "[": ("]", "bracket"),
    "{": ("}", "brace"),
}
CLOSERS: dict[str, str] = {closer: opener for opener, (closer, _) in DELIMITERS.items()}


@dataclass
class DelimiterBalanceState:
    """Transient per-pass scanner state."""

    parens: int = 0
    brackets: int = 0
    braces: int = 0
    in_single_quote: bool = False
    in_double_quote: bool = False
    in_template: bool = False
    template_delimiter: str = ""
    in_block_comment: bool = False

    @property
    def in_string(self) -> bool:
        """Check if any quote or multi-line string is open."""
        return self.in_single_quote or self.in_double_quote or self.in_template

    def get(self, opener: str) -> int:
        """Current balance for an opener character."""
        return getattr(self, _COUNTER_FIELDS[opener])

    def adjust(self, opener: str, delta: int) -> int:
        """Add delta to the counter for opener and return the new value."""
        name = _COUNTER_FIELDS[opener]
        value = getattr(self, name) + delta
        setattr(self, name, value)
        return value

    def reset(self, opener: str) -> None:
        """Reset the counter for opener to zero."""
        setattr(self, _COUNTER_FIELDS[opener], 0)


_COUNTER_FIELDS: dict[str, str] = {"(": "parens", "[": "brackets", "{": "braces"}


@dataclass(frozen=True)
class ScanResult:
    """Output of one tokenizer pass."""

    diagnostics: tuple[Diagnostic, ...]  # Positioned findings, in scan order
    summary: tuple[Diagnostic, ...]  # End-of-buffer findings
    comment_lines: frozenset[int] = field(default_factory=frozenset)  # 1-based
    line_count: int = 0

    def is_comment(self, line: int) -> bool:
        """Check if a 1-based line was classified as a full-line comment."""
        return line in self.comment_lines


def _error(line: int, column: int, message: str) -> Diagnostic:
    return Diagnostic(
        line=line,
        column=column,
        message=message,
        severity=Severity.ERROR,
        category=Category.SYNTAX_ERROR.value,
    )


class Tokenizer:
    """Character-level scanner for delimiter balance and string state.

    Responsibilities:
    - Walk the buffer once, line by line and character by character
    - Report unexpected closers immediately and resync
    - Report unterminated single-line string literals per line
    - Summarize unclosed openers at end of buffer
    - Classify full-line comments so later stages can skip them

    Example:
        tokenizer = Tokenizer(LanguageProfile.GENERIC)
        scan = tokenizer.scan("foo(bar]")
        for diagnostic in scan.diagnostics:
            print(diagnostic.line, diagnostic.column, diagnostic.message)
    """

    def __init__(self, profile: LanguageProfile = LanguageProfile.GENERIC) -> None:
        """Initialize the Tokenizer.

        Args:
            profile: Language profile supplying comment markers and
                     multi-line string delimiters
        """
        self._profile = profile
        self._comment_markers = profile.comment_markers
        self._block_comment = profile.block_comment
        # Longest first so ''' wins over '
        self._multiline = tuple(sorted(profile.multiline_delimiters, key=len, reverse=True))

    @property
    def profile(self) -> LanguageProfile:
        """The profile this tokenizer was built for."""
        return self._profile

    def scan(self, buffer: str) -> ScanResult:
        """Scan a buffer and collect balance diagnostics.

        Args:
            buffer: Full source text

        Returns:
            ScanResult with positioned diagnostics, end-of-buffer summary
            and the set of comment lines
        """
        if not buffer:
            return ScanResult(diagnostics=(), summary=(), comment_lines=frozenset(), line_count=0)

        state = DelimiterBalanceState()
        diagnostics: list[Diagnostic] = []
        comment_lines: set[int] = set()
        lines = buffer.split("\n")

        for index, line in enumerate(lines):
            line_number = index + 1

            if state.in_block_comment or (not state.in_template and self.is_comment_line(line)):
                comment_lines.add(line_number)
                self._track_block_comment(line, state)
                continue

            self._scan_line(line, line_number, state, diagnostics)
            self._check_unterminated(line, line_number, state, diagnostics)

        summary = self._summarize(state, len(lines))
        return ScanResult(
            diagnostics=tuple(diagnostics),
            summary=tuple(summary),
            comment_lines=frozenset(comment_lines),
            line_count=len(lines),
        )

    def is_comment_line(self, line: str) -> bool:
        """Check if a line is a full-line comment for this profile."""
        stripped = line.strip()
        return bool(stripped) and stripped.startswith(self._comment_markers)

    def _track_block_comment(self, line: str, state: DelimiterBalanceState) -> None:
        """Open or close a block comment that starts a comment line."""
        if self._block_comment is None:
            return
        opener, closer = self._block_comment
        stripped = line.strip()
        if state.in_block_comment:
            state.in_block_comment = closer not in stripped
        elif stripped.startswith(opener):
            state.in_block_comment = closer not in stripped[len(opener) :]

    def _scan_line(
        self,
        line: str,
        line_number: int,
        state: DelimiterBalanceState,
        diagnostics: list[Diagnostic],
    ) -> None:
        """Advance state over one line, reporting unexpected closers."""
        i = 0
        length = len(line)
        while i < length:
            char = line[i]
            escaped = i > 0 and line[i - 1] == ESCAPE

            delimiter = self._multiline_at(line, i)
            if delimiter and not escaped and not state.in_single_quote and not state.in_double_quote:
                if not state.in_template:
                    state.in_template = True
                    state.template_delimiter = delimiter
                    i += len(delimiter)
                    continue
                if delimiter == state.template_delimiter:
                    state.in_template = False
                    state.template_delimiter = ""
                    i += len(delimiter)
                    continue

            if char == "'" and not escaped:
                if not state.in_double_quote and not state.in_template:
                    state.in_single_quote = not state.in_single_quote
            elif char == '"' and not escaped:
                if not state.in_single_quote and not state.in_template:
                    state.in_double_quote = not state.in_double_quote
            elif not state.in_string:
                if char in DELIMITERS:
                    state.adjust(char, 1)
                elif char in CLOSERS:
                    opener = CLOSERS[char]
                    if state.adjust(opener, -1) < 0:
                        name = DELIMITERS[opener][1]
                        diagnostics.append(
                            _error(line_number, i + 1, f"Unexpected closing {name} '{char}'")
                        )
                        state.reset(opener)
            i += 1

    def _multiline_at(self, line: str, index: int) -> str:
        for delimiter in self._multiline:
            if line.startswith(delimiter, index):
                return delimiter
        return ""

    def _check_unterminated(
        self,
        line: str,
        line_number: int,
        state: DelimiterBalanceState,
        diagnostics: list[Diagnostic],
    ) -> None:
        """Report an unterminated quote at end of line, then close it.

        Single and double quoted literals never span lines, so both flags are
        cleared after the check.
        """
        for quote, is_open, kind in (
            ("'", state.in_single_quote, "single quote"),
            ('"', state.in_double_quote, "double quote"),
        ):
            if is_open and line.count(quote) % 2 == 1:
                diagnostics.append(
                    _error(
                        line_number,
                        line.rindex(quote) + 1,
                        f"Unterminated string literal ({kind})",
                    )
                )

        state.in_single_quote = False
        state.in_double_quote = False

    def _summarize(self, state: DelimiterBalanceState, line_count: int) -> list[Diagnostic]:
        """Build end-of-buffer diagnostics for anything left open."""
        summary: list[Diagnostic] = []
        for opener, (closer, name) in DELIMITERS.items():
            count = state.get(opener)
            if count > 0:
                noun = name if count == 1 else _plural(name)
                summary.append(
                    _error(
                        line_count,
                        1,
                        f"{count} unclosed {noun}: '{opener}' without matching '{closer}'",
                    )
                )

        if state.in_template:
            summary.append(
                _error(
                    line_count,
                    1,
                    f"Unterminated multi-line string (opened with {state.template_delimiter})",
                )
            )
        return summary


def _plural(name: str) -> str:
    return "parentheses" if name == "parenthesis" else f"{name}s"
