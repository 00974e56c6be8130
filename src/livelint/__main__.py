"""Entry point for running livelint from the command line.

This module provides the main entry point for livelint.
It handles:
- Configuration loading
- Logging setup
- Language selection (explicit or detected)
- Analysis and reporting for files or stdin
- Writing corrected buffers back on request
"""

import argparse
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from livelint._version import __version__

log = structlog.get_logger()

STDIN_NAME = "-"
EXIT_CLEAN = 0
EXIT_ISSUES = 1
EXIT_FAILURE = 2


def setup_logging(
    debug: bool = False,
    log_format: str = "console",
) -> None:
    """Configure structured logging.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from livelint.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.WARNING
    configure_logging(level=level, log_format=LogFormat(log_format.lower()))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="livelint",
        description="livelint - Fast heuristic lint and typo correction for source buffers",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "paths",
        nargs="*",
        default=[STDIN_NAME],
        help="Files to analyze ('-' or nothing reads stdin)",
    )

    parser.add_argument(
        "-l",
        "--language",
        default="auto",
        help="Language name or profile, or 'auto' to detect per file (default: auto)",
    )

    parser.add_argument(
        "-o",
        "--output",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)",
    )

    parser.add_argument(
        "--apply",
        action="store_true",
        help="Write corrected buffers back to their files",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    parser.add_argument(
        "--list-languages",
        action="store_true",
        help="List language profiles and exit",
    )

    return parser.parse_args(argv)


def list_languages() -> str:
    """Render the profile table with the names that select each profile."""
    from livelint.models.language import LanguageProfile, known_aliases

    aliases = known_aliases()
    lines = []
    for profile in LanguageProfile:
        names = sorted(name for name, target in aliases.items() if target == profile)
        lines.append(f"{profile.value:<10} {profile.display_name:<20} {', '.join(names)}")
    return "\n".join(lines)


def _read_source(path: str) -> str:
    if path == STDIN_NAME:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def run(args: argparse.Namespace) -> int:
    """Analyze every requested source and print a report.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 clean, 1 error diagnostics found, 2 failure)
    """
    from livelint.config.loader import build_rule_set, load_config, validate_config
    from livelint.config.schema import LintConfig
    from livelint.core.engine import LintEngine
    from livelint.core.language_detector import detect_language
    from livelint.core.reporter import format_json, format_text
    from livelint.models.language import LanguageProfile
    from livelint.utils.async_helpers import BufferLimitError, ConfigurationError
    from livelint.utils.logging import LogEventNames, configure_logging

    try:
        if args.config is not None:
            log.info(LogEventNames.CONFIG_LOADING, path=str(args.config))
            config = load_config(args.config)
            log.info(LogEventNames.CONFIG_LOADED)
            configure_logging(
                level="DEBUG" if args.debug else config.logging.level,
                log_format=config.logging.format,
                file_path=config.logging.file.path if config.logging.file.enabled else None,
                file_enabled=config.logging.file.enabled,
                max_value_length=config.logging.max_value_length,
            )
        else:
            config = LintConfig()
            validate_config(config)

        explicit: LanguageProfile | None = None
        if args.language.lower() != "auto":
            explicit = LanguageProfile.from_name(args.language, strict=True)
    except FileNotFoundError as e:
        log.error("configuration_file_not_found", path=str(args.config), error=str(e))
        return EXIT_FAILURE
    except (ConfigurationError, ValueError, ValidationError) as e:
        log.error(LogEventNames.CONFIG_INVALID, error=str(e))
        return EXIT_FAILURE

    engine = LintEngine(build_rule_set(config))
    default_profile = LanguageProfile.from_name(config.engine.default_language)
    results = []
    exit_code = EXIT_CLEAN

    for path in args.paths:
        try:
            source = _read_source(path)
        except (OSError, UnicodeDecodeError) as e:
            log.error(LogEventNames.FILE_READ_ERROR, path=path, error=str(e))
            exit_code = EXIT_FAILURE
            continue

        line_count = source.count("\n") + 1
        if line_count > config.engine.max_lines:
            error = BufferLimitError(line_count, config.engine.max_lines)
            log.error(LogEventNames.EDIT_REJECTED, path=path, error=str(error))
            exit_code = EXIT_FAILURE
            continue

        if explicit is not None:
            profile = explicit
        else:
            detected = detect_language(source, None if path == STDIN_NAME else path)
            profile = detected if detected != LanguageProfile.GENERIC else default_profile

        result = engine.run(source, profile)
        name = "<stdin>" if path == STDIN_NAME else path
        results.append((name, result))
        log.info(LogEventNames.FILE_ANALYZED, path=name, diagnostics=len(result.diagnostics))

        if result.errors and exit_code == EXIT_CLEAN:
            exit_code = EXIT_ISSUES

        if args.apply and result.corrected_buffer and path != STDIN_NAME:
            Path(path).write_text(result.corrected_buffer, encoding="utf-8")
            log.info(LogEventNames.FILE_CORRECTED, path=path)

    if args.output == "json":
        print(format_json(results))
    else:
        for name, result in results:
            print(format_text(result, source=name))

    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.log_format)

    if args.list_languages:
        print(list_languages())
        return EXIT_CLEAN

    from livelint.utils.async_helpers import LintError

    try:
        return run(args)
    except LintError as e:
        log.error("lint_failed", error=str(e))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        log.info("interrupted")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
