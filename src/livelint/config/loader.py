"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import yaml

from ..core.rules import DEFAULT_RULES, RuleSet
from ..utils.async_helpers import ConfigurationError
from .schema import LintConfig


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path) -> LintConfig:
    """
    Load configuration from YAML file with environment variable substitution.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated LintConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If environment variables are missing
        ConfigurationError: If the document is not a mapping or is inconsistent
        ValidationError: If config doesn't match schema
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    yaml_with_env = substitute_env_vars(raw_yaml)

    # An empty file means "all defaults"
    config_dict = yaml.safe_load(yaml_with_env) or {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {path}")

    config = LintConfig.model_validate(config_dict)

    validate_config(config)

    return config


def validate_config(config: LintConfig) -> None:
    """
    Perform additional cross-field validation.

    Extra corrections must not redefine a built-in misspelling with a
    different canonical word.

    Args:
        config: Configuration to validate

    Raises:
        ConfigurationError: If an extra correction contradicts a built-in one
    """
    builtin = {entry.typo.lower(): entry.canonical for entry in DEFAULT_RULES.corrections}
    tables = {**config.corrections.extra, **config.corrections.extra_safe}
    for typo, canonical in tables.items():
        existing = builtin.get(typo.lower())
        if existing is not None and existing != canonical:
            raise ConfigurationError(
                f"Correction for {typo!r} contradicts built-in {existing!r}: {canonical!r}"
            )


def build_rule_set(config: LintConfig, base: RuleSet = DEFAULT_RULES) -> RuleSet:
    """
    Build the immutable rule tables for a configuration.

    Args:
        config: Validated configuration
        base: Rule tables to extend

    Returns:
        RuleSet with the configured extra corrections appended
    """
    corrections = config.corrections
    if not corrections.extra and not corrections.extra_safe:
        return base
    return base.with_corrections(corrections.extra, corrections.extra_safe)
