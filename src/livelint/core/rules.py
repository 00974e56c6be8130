"""Read-only rule tables for the pattern dispatcher and correction synthesizer.

Rule tables are built once and never mutated. A RuleSet bundles the
per-profile pattern rules with the misspelling dictionaries and is passed
explicitly into analysis.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from livelint.models.diagnostic import Category, Severity, severity_for
from livelint.models.language import LanguageProfile


@dataclass(frozen=True)
class PatternRule:
    """A single per-line syntax-smell rule."""

    pattern: re.Pattern[str]
    message: str
    category: str

    @property
    def severity(self) -> Severity:
        """Severity derived from the category tag."""
        return severity_for(self.category)


@dataclass(frozen=True)
class CorrectionEntry:
    """A known misspelling and its canonical replacement."""

    typo: str
    canonical: str
    pattern: re.Pattern[str] = field(compare=False, repr=False)

    @classmethod
    def build(cls, typo: str, canonical: str) -> CorrectionEntry:
        """Compile a whole-word, case-insensitive matcher for typo."""
        pattern = re.compile(rf"\b{re.escape(typo)}\b", re.IGNORECASE)
        return cls(typo=typo, canonical=canonical, pattern=pattern)


def _rule(regex: str, message: str, category: str, flags: int = 0) -> PatternRule:
    return PatternRule(pattern=re.compile(regex, flags), message=message, category=category)


_SYNTAX = Category.SYNTAX_ERROR.value
_INDENT = Category.INDENTATION_ERROR.value
_TYPE = Category.TYPE_ERROR.value
_WARN = Category.WARNING.value


GENERIC_RULES: tuple[PatternRule, ...] = (
    _rule(r"\bfunction\s+[A-Za-z_$][\w$]*\s*\{", "Expected '(' after function name", _SYNTAX),
    _rule(r"\bconst\s+[A-Za-z_$][\w$]*\s*;", "Missing initializer in const declaration", _SYNTAX),
    _rule(
        r"\bif\s*\(\s*[\w.$]+\s*=(?![=>])",
        "Assignment inside condition; did you mean '==' or '==='?",
        _WARN,
    ),
    _rule(r"\bvar\s+[A-Za-z_$]", "Prefer 'let' or 'const' over 'var'", _WARN),
    _rule(r"\bconsole\.log\s*\(", "Debug output left in code (console.log)", _WARN),
    _rule(r"\bdebugger\b", "'debugger' statement left in code", _WARN),
    _rule(r"\beval\s*\(", "Avoid eval(); it executes arbitrary code", _WARN),
    _rule(r";\s*;\s*$", "Empty statement (duplicate ';')", _WARN),
)

PYTHON_RULES: tuple[PatternRule, ...] = (
    _rule(
        r"^\s*(?:if|elif|else|while|for|def|class|with|try|except|finally)\b[^:]*$",
        "Expected ':' at end of block statement",
        _SYNTAX,
    ),
    _rule(
        r"^\s*def\s+\w+\s*\([^)]*\)\s*\{",
        "Python blocks start with ':' and indentation, not '{'",
        _SYNTAX,
    ),
    _rule(r"^\s*print\s+[\"'\w]", "Missing parentheses in call to 'print'", _SYNTAX),
    _rule(
        r"^\s*(?:if|elif|while)\s+[\w.]+\s*=(?!=)",
        "Invalid syntax: use '==' for comparison",
        _SYNTAX,
    ),
    _rule(r"\w\+\+|\+\+\w", "Python has no '++' operator; use '+= 1'", _SYNTAX),
    _rule(r"\s===\s", "'===' is not valid Python; use '=='", _SYNTAX),
    _rule(r"^(?: +\t|\t+ )", "Inconsistent use of tabs and spaces in indentation", _INDENT),
    _rule(
        r"=\s*(?:true|false|null)\s*(?:#.*)?$",
        "Python spells these True, False and None",
        _WARN,
    ),
    _rule(r"\bexcept\s*:", "Bare 'except:' catches every exception", _WARN),
)

JAVA_RULES: tuple[PatternRule, ...] = (
    _rule(
        r"\b(?:int|long|short|byte|float|double)\s+\w+\s*=\s*\"[^\"]*\"",
        "Incompatible types: String cannot be converted to a numeric type",
        _TYPE,
    ),
    _rule(
        r"\bboolean\s+\w+\s*=\s*(?:\"[^\"]*\"|\d+)\s*;",
        "Incompatible types: value cannot be converted to boolean",
        _TYPE,
    ),
    _rule(r"\bString\s+\w+\s*=\s*'[^']{2,}'", "String literals use double quotes", _SYNTAX),
    _rule(r"\bstring\s+\w+\s*[=;]", "Cannot find symbol 'string'; did you mean 'String'?", _SYNTAX),
    _rule(
        r"\bpublic\s+static\s+void\s+main\s*\(\s*\)",
        "main method should declare 'String[] args'",
        _WARN,
    ),
    _rule(
        r"\"[^\"]*\"\s*==|==\s*\"[^\"]*\"",
        "Comparing strings with '=='; use equals()",
        _WARN,
    ),
    _rule(r"\bSystem\.out\.print(?:ln)?\s*\(", "Console output; prefer a logger", _WARN),
)

C_CPP_RULES: tuple[PatternRule, ...] = (
    _rule(
        r"\b(?:int|long|short|unsigned|float|double)\s+\w+\s*=\s*\"[^\"]*\"",
        "Initializing a numeric variable from a string literal",
        _TYPE,
    ),
    _rule(
        r"^\s*#\s*include\s+(?![<\"])\S",
        "#include expects <FILENAME> or \"FILENAME\"",
        _SYNTAX,
    ),
    _rule(r"\bcout\s*>>|\bcin\s*<<", "Stream operator points the wrong way", _SYNTAX),
    _rule(r"\bgets\s*\(", "gets() is unsafe; use fgets()", _WARN),
    _rule(
        r"\bscanf\s*\(\s*\"[^\"]*\"\s*,\s*[A-Za-z_]",
        "scanf argument may be missing '&'",
        _WARN,
    ),
    _rule(r"\bvoid\s+main\s*\(", "main should return int", _WARN),
)

HTML_CSS_RULES: tuple[PatternRule, ...] = (
    _rule(r"\bcolour\s*:", "Unknown CSS property 'colour'; did you mean 'color'?", _SYNTAX),
    _rule(r"<\s*/\s*>", "Empty closing tag", _SYNTAX),
    _rule(
        r"<\s*/?\s*(?:center|font|marquee|blink|frameset|big|strike)\b",
        "Deprecated HTML element",
        _WARN,
        re.IGNORECASE,
    ),
    _rule(r"<img\b(?![^>]*\balt\s*=)[^>]*>", "<img> is missing an alt attribute", _WARN, re.IGNORECASE),
    _rule(r"\bstyle\s*=\s*[\"']", "Inline style attribute", _WARN, re.IGNORECASE),
    _rule(
        r"^\s+[a-z-]+\s*:\s*[^;{}<>]*[^;{}<>\s,]\s*$",
        "CSS declaration missing ';'",
        _WARN,
    ),
)

SQL_RULES: tuple[PatternRule, ...] = (
    _rule(r",\s*FROM\b", "Trailing comma before FROM", _SYNTAX, re.IGNORECASE),
    _rule(r"\bINSERT\s+INTO\s+\w+(?:\s*\([^)]*\))?\s+VALUE\b", "Expected VALUES", _SYNTAX, re.IGNORECASE),
    _rule(r"\bSELECT\s+FROM\b", "SELECT has no column list", _SYNTAX, re.IGNORECASE),
    _rule(r"(?:!=|<>|=)\s*NULL\b", "Comparison with NULL is never true; use IS NULL", _WARN, re.IGNORECASE),
    _rule(r"\bSELECT\s+\*", "Avoid SELECT *; list the columns", _WARN, re.IGNORECASE),
    _rule(
        r"\bDELETE\s+FROM\s+\w+\s*;\s*$",
        "DELETE without WHERE removes every row",
        _WARN,
        re.IGNORECASE,
    ),
)

PROFILE_RULES: Mapping[LanguageProfile, tuple[PatternRule, ...]] = MappingProxyType(
    {
        LanguageProfile.GENERIC: GENERIC_RULES,
        LanguageProfile.PYTHON: PYTHON_RULES,
        LanguageProfile.JAVA: JAVA_RULES,
        LanguageProfile.C_CPP: C_CPP_RULES,
        LanguageProfile.HTML_CSS: HTML_CSS_RULES,
        LanguageProfile.SQL: SQL_RULES,
    }
)

# Known misspellings, matched whole-word and case-insensitively on every profile.
CORRECTION_MAP: Mapping[str, str] = MappingProxyType(
    {
        "funtcion": "function",
        "fucntion": "function",
        "functoin": "function",
        "retrun": "return",
        "reutrn": "return",
        "retunr": "return",
        "improt": "import",
        "imoprt": "import",
        "calss": "class",
        "whiel": "while",
        "wihle": "while",
        "esle": "else",
        "lenght": "length",
        "widht": "width",
        "heigth": "height",
        "cosnt": "const",
        "conts": "const",
        "defualt": "default",
        "pubilc": "public",
        "pulbic": "public",
        "slef": "self",
        "lamda": "lambda",
        "inculde": "include",
        "udpate": "update",
        "slect": "select",
        "wehre": "where",
        "pritn": "print",
        "prnit": "print",
        "fasle": "false",
        "flase": "false",
        "ture": "true",
    }
)

# Subset of CORRECTION_MAP whose canonical form does not depend on the
# language (True vs true, print vs println), safe to substitute blindly.
SAFE_CORRECTIONS: Mapping[str, str] = MappingProxyType(
    {
        typo: canonical
        for typo, canonical in CORRECTION_MAP.items()
        if typo not in {"pritn", "prnit", "fasle", "flase", "ture"}
    }
)


@dataclass(frozen=True)
class RuleSet:
    """Immutable bundle of all rule tables used by one analysis pass."""

    profile_rules: Mapping[LanguageProfile, tuple[PatternRule, ...]]
    corrections: tuple[CorrectionEntry, ...]
    safe_corrections: tuple[CorrectionEntry, ...]

    @classmethod
    def from_tables(
        cls,
        profile_rules: Mapping[LanguageProfile, tuple[PatternRule, ...]] = PROFILE_RULES,
        corrections: Mapping[str, str] = CORRECTION_MAP,
        safe_corrections: Mapping[str, str] = SAFE_CORRECTIONS,
    ) -> RuleSet:
        """Compile a RuleSet from plain tables.

        Args:
            profile_rules: Pattern rules per profile
            corrections: Misspelling -> canonical pairs reported by the dispatcher
            safe_corrections: Pairs the synthesizer may substitute

        Returns:
            Compiled RuleSet
        """
        return cls(
            profile_rules=MappingProxyType(dict(profile_rules)),
            corrections=tuple(CorrectionEntry.build(t, c) for t, c in corrections.items()),
            safe_corrections=tuple(
                CorrectionEntry.build(t, c) for t, c in safe_corrections.items()
            ),
        )

    def with_corrections(
        self,
        extra: Mapping[str, str] | None = None,
        extra_safe: Mapping[str, str] | None = None,
    ) -> RuleSet:
        """Return a new RuleSet with additional misspellings appended.

        Safe corrections are also reported, so extra_safe entries are added
        to both tables. Existing entries keep their position.
        """
        extra = dict(extra or {})
        extra_safe = dict(extra_safe or {})
        known = {entry.typo.lower() for entry in self.corrections}
        known_safe = {entry.typo.lower() for entry in self.safe_corrections}

        corrections = list(self.corrections)
        for typo, canonical in {**extra, **extra_safe}.items():
            if typo.lower() not in known:
                corrections.append(CorrectionEntry.build(typo, canonical))
                known.add(typo.lower())

        safe = list(self.safe_corrections)
        for typo, canonical in extra_safe.items():
            if typo.lower() not in known_safe:
                safe.append(CorrectionEntry.build(typo, canonical))
                known_safe.add(typo.lower())

        return RuleSet(
            profile_rules=self.profile_rules,
            corrections=tuple(corrections),
            safe_corrections=tuple(safe),
        )

    def rules_for(self, profile: LanguageProfile) -> tuple[PatternRule, ...]:
        """Pattern rules for a profile; GENERIC rules for unknown profiles."""
        return self.profile_rules.get(profile, self.profile_rules[LanguageProfile.GENERIC])


DEFAULT_RULES = RuleSet.from_tables()
