"""Data models for diagnostics and analysis results."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .language import LanguageProfile


class Severity(StrEnum):
    """How serious a diagnostic is."""

    ERROR = "error"
    WARNING = "warning"


class Category(StrEnum):
    """Diagnostic category tags."""

    SYNTAX_ERROR = "SyntaxError"
    INDENTATION_ERROR = "IndentationError"
    SPELLING_ERROR = "SpellingError"
    TYPE_ERROR = "TypeError"
    WARNING = "Warning"

    @property
    def severity(self) -> Severity:
        """Severity implied by the category name."""
        return severity_for(self.value)


def severity_for(category: str) -> Severity:
    """Derive severity from a category tag.

    Any category containing "Warning" is a warning; everything else is an error.
    """
    return Severity.WARNING if "Warning" in category else Severity.ERROR


@dataclass(frozen=True)
class Diagnostic:
    """One issue found in a single analysis pass."""

    line: int  # 1-based
    column: int  # 1-based
    message: str
    severity: Severity
    category: str  # e.g., "SyntaxError", "SpellingError"
    suggestion: str | None = None

    @property
    def is_error(self) -> bool:
        """Check if this diagnostic blocks the buffer from being clean."""
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        data: dict[str, Any] = {
            "line": self.line,
            "column": self.column,
            "message": self.message,
            "severity": str(self.severity),
            "category": self.category,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregate output of one analysis pass.

    A result fully replaces the previous one; results are never merged.
    """

    diagnostics: tuple[Diagnostic, ...]
    corrected_buffer: str | None  # None unless a substitution applied
    elapsed_ms: float  # For display only
    profile: LanguageProfile = LanguageProfile.GENERIC

    @classmethod
    def empty(cls, profile: LanguageProfile = LanguageProfile.GENERIC) -> "AnalysisResult":
        """Result for an empty buffer: no diagnostics, no correction."""
        return cls(diagnostics=(), corrected_buffer=None, elapsed_ms=0.0, profile=profile)

    @property
    def has_correction(self) -> bool:
        """Check if an "apply fix" action can be offered."""
        return bool(self.corrected_buffer)

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        """Diagnostics with error severity."""
        return tuple(d for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        """Diagnostics with warning severity."""
        return tuple(d for d in self.diagnostics if d.severity == Severity.WARNING)

    @property
    def is_clean(self) -> bool:
        """True when the pass found nothing at all."""
        return not self.diagnostics

    def by_category(self, category: str) -> tuple[Diagnostic, ...]:
        """Diagnostics tagged with the given category."""
        return tuple(d for d in self.diagnostics if d.category == category)

    def for_line(self, line: int) -> tuple[Diagnostic, ...]:
        """Diagnostics reported on a given 1-based line."""
        return tuple(d for d in self.diagnostics if d.line == line)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "profile": str(self.profile),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "corrected_buffer": self.corrected_buffer,
            "elapsed_ms": round(self.elapsed_ms, 3),
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
        }
