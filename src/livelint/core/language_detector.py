"""Caller-side guess of a buffer's language profile.

Analysis never infers the language itself; editors and the CLI may call
detect_language() to pick a profile before analyzing.
"""

from __future__ import annotations

import re
from pathlib import PurePath

from livelint.models.language import LanguageProfile

EXTENSIONS: dict[str, LanguageProfile] = {
    ".py": LanguageProfile.PYTHON,
    ".pyw": LanguageProfile.PYTHON,
    ".pyi": LanguageProfile.PYTHON,
    ".java": LanguageProfile.JAVA,
    ".c": LanguageProfile.C_CPP,
    ".h": LanguageProfile.C_CPP,
    ".cc": LanguageProfile.C_CPP,
    ".cpp": LanguageProfile.C_CPP,
    ".cxx": LanguageProfile.C_CPP,
    ".hpp": LanguageProfile.C_CPP,
    ".ino": LanguageProfile.C_CPP,
    ".html": LanguageProfile.HTML_CSS,
    ".htm": LanguageProfile.HTML_CSS,
    ".css": LanguageProfile.HTML_CSS,
    ".scss": LanguageProfile.HTML_CSS,
    ".xml": LanguageProfile.HTML_CSS,
    ".sql": LanguageProfile.SQL,
    ".js": LanguageProfile.GENERIC,
    ".jsx": LanguageProfile.GENERIC,
    ".ts": LanguageProfile.GENERIC,
    ".tsx": LanguageProfile.GENERIC,
    ".cs": LanguageProfile.GENERIC,
}

# Signatures are counted per profile; each pattern scores at most once.
SIGNATURES: dict[LanguageProfile, tuple[re.Pattern[str], ...]] = {
    LanguageProfile.PYTHON: (
        re.compile(r"^import\s+\w+", re.MULTILINE),
        re.compile(r"^from\s+[\w.]+\s+import", re.MULTILINE),
        re.compile(r"def\s+\w+\s*\(.*\)\s*(?:->.*)?:", re.MULTILINE),
        re.compile(r"print\s*\(", re.MULTILINE),
        re.compile(r"__name__\s*==\s*['\"]__main__['\"]", re.MULTILINE),
        re.compile(r"\bself\b", re.MULTILINE),
    ),
    LanguageProfile.GENERIC: (
        re.compile(r"const\s+\w+\s*=", re.MULTILINE),
        re.compile(r"let\s+\w+\s*=", re.MULTILINE),
        re.compile(r"function\s+\w+\s*\(", re.MULTILINE),
        re.compile(r"=>\s*\{", re.MULTILINE),
        re.compile(r"console\.log", re.MULTILINE),
        re.compile(r"require\s*\(", re.MULTILINE),
    ),
    LanguageProfile.JAVA: (
        re.compile(r"public\s+(?:class|interface|enum)", re.MULTILINE),
        re.compile(r"private\s+\w+", re.MULTILINE),
        re.compile(r"System\.out\.println", re.MULTILINE),
        re.compile(r"import\s+java\.", re.MULTILINE),
    ),
    LanguageProfile.C_CPP: (
        re.compile(r"#include\s*<[\w.]+>", re.MULTILINE),
        re.compile(r"int\s+main\s*\(", re.MULTILINE),
        re.compile(r"printf\s*\(", re.MULTILINE),
        re.compile(r"using\s+namespace\s+std", re.MULTILINE),
        re.compile(r"std::", re.MULTILINE),
        re.compile(r"cout\s*<<", re.MULTILINE),
    ),
    LanguageProfile.HTML_CSS: (
        re.compile(r"<!DOCTYPE\s+html", re.IGNORECASE),
        re.compile(r"<html", re.IGNORECASE),
        re.compile(r"<(?:head|body)>", re.IGNORECASE),
        re.compile(r"<div", re.IGNORECASE),
        re.compile(r"^\s*[.#]?[\w-]+\s*\{", re.MULTILINE),
        re.compile(r"@media", re.MULTILINE),
    ),
    LanguageProfile.SQL: (
        re.compile(r"\bSELECT\s+", re.IGNORECASE),
        re.compile(r"\bINSERT\s+INTO\b", re.IGNORECASE),
        re.compile(r"\bUPDATE\s+\w+\s+SET\b", re.IGNORECASE),
        re.compile(r"\bDELETE\s+FROM\b", re.IGNORECASE),
        re.compile(r"\bCREATE\s+TABLE\b", re.IGNORECASE),
        re.compile(r"\bWHERE\b", re.IGNORECASE),
    ),
}

MIN_SIGNATURE_HITS = 2


def detect_from_filename(filename: str | PurePath | None) -> LanguageProfile | None:
    """Map a file extension to a profile, or None if unknown."""
    if not filename:
        return None
    return EXTENSIONS.get(PurePath(filename).suffix.lower())


def score_signatures(buffer: str) -> dict[LanguageProfile, int]:
    """Count matching signatures per profile."""
    return {
        profile: sum(1 for pattern in patterns if pattern.search(buffer))
        for profile, patterns in SIGNATURES.items()
    }


def detect_language(buffer: str, filename: str | PurePath | None = None) -> LanguageProfile:
    """Guess the profile for a buffer.

    The file extension wins when known. Otherwise the profile with the most
    signature hits is chosen, provided it has at least two; ties keep the
    earlier profile in SIGNATURES order.

    Args:
        buffer: Source text
        filename: Optional file name used for the extension lookup

    Returns:
        Best-guess LanguageProfile (GENERIC when unsure)
    """
    by_extension = detect_from_filename(filename)
    if by_extension is not None:
        return by_extension

    if not buffer.strip():
        return LanguageProfile.GENERIC

    best = LanguageProfile.GENERIC
    best_hits = 0
    for profile, hits in score_signatures(buffer).items():
        if hits > best_hits:
            best, best_hits = profile, hits

    return best if best_hits >= MIN_SIGNATURE_HITS else LanguageProfile.GENERIC
