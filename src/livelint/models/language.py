"""Language profiles and name resolution."""

from enum import StrEnum


class LanguageProfile(StrEnum):
    """Rule-set family used to interpret a buffer.

    GENERIC is the C-family fallback used when no language is selected or
    the selected name is not recognized.
    """

    GENERIC = "generic"
    PYTHON = "python"
    JAVA = "java"
    C_CPP = "c-cpp"
    HTML_CSS = "html-css"
    SQL = "sql"

    @property
    def display_name(self) -> str:
        """Human-readable profile name."""
        return _DISPLAY_NAMES[self]

    @property
    def comment_markers(self) -> tuple[str, ...]:
        """Prefixes that make a stripped line a full-line comment."""
        return _COMMENT_MARKERS[self]

    @property
    def block_comment(self) -> tuple[str, str] | None:
        """Opening and closing markers of a comment spanning lines, if any."""
        return None if self is LanguageProfile.PYTHON else BLOCK_COMMENT

    @property
    def uses_terminators(self) -> bool:
        """Whether statements are expected to end with ';'."""
        return self in (LanguageProfile.GENERIC, LanguageProfile.JAVA, LanguageProfile.C_CPP)

    @property
    def multiline_delimiters(self) -> tuple[str, ...]:
        """Delimiters that open and close a string spanning lines."""
        return _MULTILINE_DELIMITERS[self]

    @classmethod
    def from_name(cls, name: "str | LanguageProfile | None", strict: bool = False) -> "LanguageProfile":
        """Resolve a loosely-cased language name to a profile.

        Args:
            name: Profile value, alias ("JavaScript", "C++", "HTML5", ...) or None
            strict: Raise instead of falling back to GENERIC

        Returns:
            Matching LanguageProfile

        Raises:
            ValueError: If strict and the name is not recognized
        """
        if isinstance(name, LanguageProfile):
            return name

        key = (name or "").strip().lower()
        profile = _ALIASES.get(key)
        if profile is None:
            if strict:
                raise ValueError(f"Unknown language: {name!r}")
            return cls.GENERIC
        return profile


_DISPLAY_NAMES: dict[LanguageProfile, str] = {
    LanguageProfile.GENERIC: "Generic (C-family)",
    LanguageProfile.PYTHON: "Python",
    LanguageProfile.JAVA: "Java",
    LanguageProfile.C_CPP: "C/C++",
    LanguageProfile.HTML_CSS: "HTML/CSS",
    LanguageProfile.SQL: "SQL",
}

_COMMENT_MARKERS: dict[LanguageProfile, tuple[str, ...]] = {
    LanguageProfile.GENERIC: ("//", "/*", "#"),
    LanguageProfile.PYTHON: ("#",),
    LanguageProfile.JAVA: ("//", "/*"),
    LanguageProfile.C_CPP: ("//", "/*"),
    LanguageProfile.HTML_CSS: ("<!--", "/*", "//"),
    LanguageProfile.SQL: ("--", "/*", "#"),
}

BLOCK_COMMENT = ("/*", "*/")

_MULTILINE_DELIMITERS: dict[LanguageProfile, tuple[str, ...]] = {
    LanguageProfile.GENERIC: ("`",),
    LanguageProfile.PYTHON: ('"""', "'''"),
    LanguageProfile.JAVA: (),
    LanguageProfile.C_CPP: (),
    LanguageProfile.HTML_CSS: ("`",),
    LanguageProfile.SQL: (),
}

_ALIASES: dict[str, LanguageProfile] = {
    # Generic / C-family scripting
    "generic": LanguageProfile.GENERIC,
    "c-family": LanguageProfile.GENERIC,
    "auto-detect": LanguageProfile.GENERIC,
    "javascript": LanguageProfile.GENERIC,
    "js": LanguageProfile.GENERIC,
    "jsx": LanguageProfile.GENERIC,
    "typescript": LanguageProfile.GENERIC,
    "ts": LanguageProfile.GENERIC,
    "tsx": LanguageProfile.GENERIC,
    "c#": LanguageProfile.GENERIC,
    "csharp": LanguageProfile.GENERIC,
    "go": LanguageProfile.GENERIC,
    "rust": LanguageProfile.GENERIC,
    "swift": LanguageProfile.GENERIC,
    "kotlin": LanguageProfile.GENERIC,
    "dart": LanguageProfile.GENERIC,
    "php": LanguageProfile.GENERIC,
    # Python
    "python": LanguageProfile.PYTHON,
    "python3": LanguageProfile.PYTHON,
    "py": LanguageProfile.PYTHON,
    "ipython": LanguageProfile.PYTHON,
    "jupyter": LanguageProfile.PYTHON,
    # Java
    "java": LanguageProfile.JAVA,
    # C / C++
    "c-cpp": LanguageProfile.C_CPP,
    "c": LanguageProfile.C_CPP,
    "c++": LanguageProfile.C_CPP,
    "cpp": LanguageProfile.C_CPP,
    "c/c++": LanguageProfile.C_CPP,
    "embedded c": LanguageProfile.C_CPP,
    "arduino": LanguageProfile.C_CPP,
    "objective-c": LanguageProfile.C_CPP,
    "cuda": LanguageProfile.C_CPP,
    # Web
    "html-css": LanguageProfile.HTML_CSS,
    "html/css": LanguageProfile.HTML_CSS,
    "html": LanguageProfile.HTML_CSS,
    "html5": LanguageProfile.HTML_CSS,
    "css": LanguageProfile.HTML_CSS,
    "css3": LanguageProfile.HTML_CSS,
    "scss": LanguageProfile.HTML_CSS,
    "sass": LanguageProfile.HTML_CSS,
    "less": LanguageProfile.HTML_CSS,
    "xml": LanguageProfile.HTML_CSS,
    "svg": LanguageProfile.HTML_CSS,
    # SQL dialects
    "sql": LanguageProfile.SQL,
    "mysql": LanguageProfile.SQL,
    "postgresql": LanguageProfile.SQL,
    "sqlite": LanguageProfile.SQL,
    "oracle sql": LanguageProfile.SQL,
    "pl/sql": LanguageProfile.SQL,
    "t-sql": LanguageProfile.SQL,
    "pl/pgsql": LanguageProfile.SQL,
    "sparksql": LanguageProfile.SQL,
    "bigquery sql": LanguageProfile.SQL,
}


def resolve_profile(name: str | LanguageProfile | None) -> LanguageProfile:
    """Resolve a language name, falling back to GENERIC for unknown names."""
    return LanguageProfile.from_name(name)


def known_aliases() -> dict[str, LanguageProfile]:
    """Return a copy of the alias table (lower-cased name -> profile)."""
    return dict(_ALIASES)
