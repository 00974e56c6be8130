"""Data models and transfer objects."""

from .diagnostic import AnalysisResult, Category, Diagnostic, Severity, severity_for
from .language import LanguageProfile, known_aliases, resolve_profile

__all__ = [
    # Diagnostic models
    "Severity",
    "Category",
    "Diagnostic",
    "AnalysisResult",
    "severity_for",
    # Language models
    "LanguageProfile",
    "resolve_profile",
    "known_aliases",
]
