"""Configuration loading and validation."""

from .loader import build_rule_set, load_config
from .schema import (
    CorrectionsConfig,
    EngineConfig,
    FileLoggingConfig,
    LintConfig,
    LoggingConfig,
)

__all__ = [
    # Loader
    "load_config",
    "build_rule_set",
    # Root config
    "LintConfig",
    # Sections
    "EngineConfig",
    "CorrectionsConfig",
    "LoggingConfig",
    "FileLoggingConfig",
]
