"""Rendering of analysis results for terminals and tools."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from livelint.models.diagnostic import AnalysisResult, Diagnostic


def format_diagnostic(source: str, diagnostic: Diagnostic) -> str:
    """Render one diagnostic as ``source:line:col: severity [Category] message``."""
    d = diagnostic
    return f"{source}:{d.line}:{d.column}: {d.severity} [{d.category}] {d.message}"


def format_text(result: AnalysisResult, source: str = "<buffer>") -> str:
    """Render a result as human-readable text.

    Args:
        result: Analysis result to render
        source: Name shown in front of each diagnostic

    Returns:
        Multi-line text ending in a summary line
    """
    lines: list[str] = []
    for d in result.diagnostics:
        lines.append(format_diagnostic(source, d))
        if d.suggestion:
            lines.append(f"    suggestion: {d.suggestion}")

    if result.is_clean:
        summary = f"{source}: no issues found"
    else:
        summary = (
            f"{source}: {len(result.errors)} error(s), {len(result.warnings)} warning(s)"
        )
    if result.has_correction:
        summary += "; automatic fix available"
    summary += f" [{result.profile.display_name}, {result.elapsed_ms:.1f} ms]"
    lines.append(summary)
    return "\n".join(lines)


def format_json(results: Iterable[tuple[str, AnalysisResult]], indent: int | None = 2) -> str:
    """Render results for several sources as a JSON document.

    Args:
        results: (source name, result) pairs
        indent: JSON indentation (None for compact output)

    Returns:
        JSON text with one entry per source plus totals
    """
    files: list[dict[str, Any]] = []
    errors = warnings = 0
    for source, result in results:
        entry = {"source": source, **result.to_dict()}
        files.append(entry)
        errors += entry["error_count"]
        warnings += entry["warning_count"]

    document = {
        "files": files,
        "totals": {"files": len(files), "errors": errors, "warnings": warnings},
    }
    return json.dumps(document, indent=indent)
