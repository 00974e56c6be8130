"""Pydantic models for configuration schema."""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

WORD_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _validate_word_pairs(pairs: dict[str, str]) -> dict[str, str]:
    for typo, canonical in pairs.items():
        if not WORD_PATTERN.match(typo):
            raise ValueError(f"Correction key must be a single word: {typo!r}")
        if not WORD_PATTERN.match(canonical):
            raise ValueError(f"Correction value must be a single word: {canonical!r}")
        if typo.lower() == canonical.lower():
            raise ValueError(f"Correction for {typo!r} does not change the word")
    return pairs


class EngineConfig(BaseModel):
    """Analysis engine configuration."""

    debounce_ms: int = Field(50, ge=0, le=5000, description="Quiet interval before a pass")
    max_lines: int = Field(500_000, ge=1, description="Largest buffer accepted by a session")
    default_language: str = "generic"

    @field_validator("default_language")
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        """Validate that the language resolves to a known profile."""
        from ..models.language import LanguageProfile

        LanguageProfile.from_name(v, strict=True)
        return v


class CorrectionsConfig(BaseModel):
    """Additional misspelling tables."""

    extra: dict[str, str] = {}
    extra_safe: dict[str, str] = {}

    @field_validator("extra", "extra_safe")
    @classmethod
    def validate_pairs(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate that every pair maps one word to another."""
        return _validate_word_pairs(v)

    @model_validator(mode="after")
    def check_conflicts(self) -> "CorrectionsConfig":
        """Reject a typo that maps to different words in the two tables."""
        extra = {k.lower(): v for k, v in self.extra.items()}
        for typo, canonical in self.extra_safe.items():
            other = extra.get(typo.lower())
            if other is not None and other != canonical:
                raise ValueError(
                    f"Correction for {typo!r} conflicts: {other!r} vs {canonical!r}"
                )
        return self


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("livelint.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()
    max_value_length: int = Field(200, ge=16, description="Longest logged string value")


class LintConfig(BaseSettings):
    """Root configuration for livelint."""

    engine: EngineConfig = EngineConfig()
    corrections: CorrectionsConfig = CorrectionsConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="LIVELINT_",
        env_nested_delimiter="__",
    )
