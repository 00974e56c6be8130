"""Per-line pattern rules, misspelling detection and terminator heuristics.

The PatternDispatcher applies the active profile's regex rules, the
cross-language misspelling dictionary and (for profiles with statement
terminators) the missing-semicolon heuristic to every non-comment line.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from livelint.core.rules import DEFAULT_RULES, RuleSet
from livelint.models.diagnostic import Category, Diagnostic, Severity
from livelint.models.language import LanguageProfile

# Lines starting with these keywords are never flagged for a missing ';'.
# Declarations and return statements (const, let, var, return) are checked.
TERMINATOR_EXEMPT_KEYWORDS: tuple[str, ...] = (
    "if",
    "else",
    "for",
    "while",
    "do",
    "switch",
    "case",
    "try",
    "catch",
    "finally",
    "function",
    "class",
    "import",
    "export",
    "async",
    "public",
    "private",
    "protected",
    "static",
)
TERMINATOR_ENDINGS: tuple[str, ...] = (";", "{", "}", ":", ",", "(")
FLAGGED_ENDINGS = "'\"`)]"
# Lines starting with '*' (comment bodies, pointer dereferences) are not checked
TERMINATOR_EXEMPT_PREFIXES: tuple[str, ...] = ("*",)
MIN_TERMINATOR_LINE_LENGTH = 3


class PatternDispatcher:
    """Applies language rules and typo detection line by line.

    Responsibilities:
    - Evaluate the profile's ordered PatternRules on each line
    - Report every misspelling occurrence with a replacement suggestion
    - Flag lines that look like statements missing a terminator

    Rules are independent per line; no state is carried between lines.

    Example:
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        for diagnostic in dispatcher.check_line("if x = 5", 3):
            print(diagnostic.message)
    """

    KEYWORD_PATTERN = re.compile(rf"^(?:{'|'.join(TERMINATOR_EXEMPT_KEYWORDS)})\b")

    def __init__(
        self,
        profile: LanguageProfile = LanguageProfile.GENERIC,
        rules: RuleSet = DEFAULT_RULES,
    ) -> None:
        """Initialize the PatternDispatcher.

        Args:
            profile: Active language profile
            rules: Rule tables to apply
        """
        self._profile = profile
        self._rules = rules
        self._pattern_rules = rules.rules_for(profile)

    @property
    def profile(self) -> LanguageProfile:
        """The active language profile."""
        return self._profile

    def dispatch(
        self,
        lines: Iterable[str],
        skip_lines: frozenset[int] = frozenset(),
    ) -> list[Diagnostic]:
        """Run every per-line check over a sequence of lines.

        Args:
            lines: Buffer lines in order
            skip_lines: 1-based line numbers to skip (full-line comments)

        Returns:
            Diagnostics in line order, rule order within a line
        """
        diagnostics: list[Diagnostic] = []
        for index, line in enumerate(lines):
            line_number = index + 1
            if line_number in skip_lines:
                continue
            diagnostics.extend(self.check_line(line, line_number))
        return diagnostics

    def check_line(self, line: str, line_number: int) -> Iterator[Diagnostic]:
        """Yield diagnostics for a single line.

        Args:
            line: Line text without the trailing newline
            line_number: 1-based line number

        Yields:
            Pattern, spelling and terminator diagnostics, in that order
        """
        yield from self._check_patterns(line, line_number)
        yield from self._check_spelling(line, line_number)

        if self._profile.uses_terminators and self.missing_terminator(line):
            yield Diagnostic(
                line=line_number,
                column=len(line.rstrip()),
                message="Possible missing semicolon",
                severity=Severity.WARNING,
                category=Category.WARNING.value,
                suggestion="Add ';' at the end of the statement",
            )

    def _check_patterns(self, line: str, line_number: int) -> Iterator[Diagnostic]:
        for rule in self._pattern_rules:
            match = rule.pattern.search(line)
            if match:
                yield Diagnostic(
                    line=line_number,
                    column=match.start() + 1,
                    message=rule.message,
                    severity=rule.severity,
                    category=rule.category,
                )

    def _check_spelling(self, line: str, line_number: int) -> Iterator[Diagnostic]:
        for entry in self._rules.corrections:
            for match in entry.pattern.finditer(line):
                found = match.group(0)
                yield Diagnostic(
                    line=line_number,
                    column=match.start() + 1,
                    message=f'Typo: "{found}" should be "{entry.canonical}"',
                    severity=Severity.ERROR,
                    category=Category.SPELLING_ERROR.value,
                    suggestion=f'Replace "{found}" with "{entry.canonical}"',
                )

    @classmethod
    def missing_terminator(cls, line: str) -> bool:
        """Heuristic check for a statement that lacks a trailing ';'.

        Conservative and noisy by nature: a line is flagged when it is a
        non-trivial statement that ends in a word character, a quote or a
        closing parenthesis or bracket.
        """
        trimmed = line.strip()
        if len(trimmed) <= MIN_TERMINATOR_LINE_LENGTH:
            return False
        if trimmed.endswith(TERMINATOR_ENDINGS) or trimmed.startswith(TERMINATOR_EXEMPT_PREFIXES):
            return False
        if cls.KEYWORD_PATTERN.match(trimmed):
            return False
        last = trimmed[-1]
        return last.isalnum() or last in FLAGGED_ENDINGS
