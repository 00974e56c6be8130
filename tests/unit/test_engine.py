"""Tests for the analysis pass and LintEngine."""

import pytest

from livelint.core.engine import LintEngine, analyze
from livelint.core.rules import DEFAULT_RULES
from livelint.models.diagnostic import AnalysisResult, Category, Severity
from livelint.models.language import LanguageProfile
from livelint.utils.metrics import get_metrics


class TestAnalyze:
    """Test the pure analyze() function."""

    @pytest.mark.parametrize("profile", list(LanguageProfile))
    def test_empty_buffer_short_circuit(self, profile: LanguageProfile) -> None:
        """Test an empty buffer yields nothing for every profile."""
        result = analyze("", profile)

        assert result.diagnostics == ()
        assert result.corrected_buffer is None
        assert result.elapsed_ms == 0.0
        assert result.profile == profile

    def test_lone_closer(self) -> None:
        """Test ')' yields exactly one SyntaxError at 1:1."""
        result = analyze(")")

        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert (diagnostic.line, diagnostic.column) == (1, 1)
        assert diagnostic.category == Category.SYNTAX_ERROR
        assert diagnostic.severity == Severity.ERROR

    def test_closer_does_not_affect_later_lines(self) -> None:
        """Test recovery leaves no residual negative balance."""
        result = analyze(")\nfoo(bar);")
        assert [d.line for d in result.diagnostics] == [1]

    def test_leftover_openers(self) -> None:
        """Test '(((' yields one summary citing three openers."""
        result = analyze("(((")

        assert len(result.diagnostics) == 1
        assert "3 unclosed parentheses" in result.diagnostics[0].message

    def test_escaped_backslash_quote(self) -> None:
        """Test \\\\\" is treated as an escaped quote (single-character lookback)."""
        result = analyze('\\\\"')
        assert result.diagnostics == ()

    def test_detection_is_idempotent(self, js_source: str) -> None:
        """Test repeated passes over the same buffer agree."""
        first = analyze(js_source)
        second = analyze(js_source)

        assert first.diagnostics == second.diagnostics
        assert first.corrected_buffer == second.corrected_buffer

    def test_typo_round_trip(self) -> None:
        """Test a corrected buffer no longer reports the typo."""
        result = analyze("funtcion foo() {}")

        spelling = result.by_category(Category.SPELLING_ERROR)
        assert len(spelling) == 1
        assert '"funtcion"' in spelling[0].message
        assert result.corrected_buffer == "function foo() {}"

        again = analyze(result.corrected_buffer)
        assert again.by_category(Category.SPELLING_ERROR) == ()

    def test_comment_line_yields_nothing(self) -> None:
        """Test a misspelling inside a full-line comment is ignored."""
        result = analyze("// retrun x;")

        assert result.diagnostics == ()
        assert result.corrected_buffer is None

    def test_comment_typos_still_corrected_when_gated(self) -> None:
        """Test substitution covers the whole buffer once any diagnostic exists."""
        result = analyze("// retrun\nretrun x;")
        assert result.corrected_buffer == "// return\nreturn x;"

    def test_missing_terminator(self) -> None:
        """Test 'let x = 5' warns once and 'if (x) {' does not."""
        result = analyze("let x = 5")
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].category == Category.WARNING
        assert result.diagnostics[0].severity == Severity.WARNING

        assert analyze("if (x) {\n}").diagnostics == ()

    def test_calls_and_subscripts_need_terminator(self) -> None:
        """Test statements ending in ')' or ']' get the semicolon warning."""
        result = analyze('console.log("hi")\nfoo()\nitems[0]')

        warnings = [d for d in result.diagnostics if d.message == "Possible missing semicolon"]
        assert [d.line for d in warnings] == [1, 2, 3]
        assert len(result.warnings) == 4

    def test_pointer_dereference_is_analyzed(self) -> None:
        """Test a C line starting with '*' is scanned and corrected."""
        result = analyze("*p = retrun;", "c")

        assert [d.category for d in result.diagnostics] == [Category.SPELLING_ERROR]
        assert result.corrected_buffer == "*p = return;"

    def test_diagnostic_order(self) -> None:
        """Test tokenizer, then per-line, then summary diagnostics."""
        buffer = "retrun x;\nfoo)\n{"
        result = analyze(buffer)

        assert [d.message for d in result.diagnostics] == [
            "Unexpected closing parenthesis ')'",
            'Typo: "retrun" should be "return"',
            "Possible missing semicolon",
            "1 unclosed brace: '{' without matching '}'",
        ]
        assert [d.line for d in result.diagnostics] == [2, 1, 2, 3]

    def test_warnings_only_buffer_has_no_correction(self) -> None:
        """Test a correction is absent when no safe typo exists."""
        result = analyze("let x = 5")
        assert result.corrected_buffer is None
        assert not result.has_correction

    def test_profile_by_name(self, python_source: str) -> None:
        """Test profiles resolve from loosely-cased names."""
        result = analyze(python_source, "Python3")

        assert result.profile == LanguageProfile.PYTHON
        assert result.corrected_buffer == "import os\n\ndef main()\n    return os.getcwd()"
        assert "Expected ':' at end of block statement" in [
            d.message for d in result.for_line(3)
        ]

    @pytest.mark.parametrize("name", [None, "", "brainfuck"])
    def test_unknown_profile_falls_back_to_generic(self, name: str | None) -> None:
        """Test unknown or missing names use the generic profile."""
        assert analyze("let x = 5", name).profile == LanguageProfile.GENERIC

    @pytest.mark.parametrize(
        "buffer",
        ["\x00\x01\x02", "﻿}}}", "\r\n\r\n", "'\"`" * 50, "\\" * 10],
    )
    def test_total_over_arbitrary_input(self, buffer: str) -> None:
        """Test odd input never raises."""
        assert isinstance(analyze(buffer), AnalysisResult)

    def test_whitespace_only_buffer(self) -> None:
        """Test a whitespace-only buffer is analyzed without findings."""
        result = analyze("   \n\t\n")
        assert result.diagnostics == ()


class TestLintEngine:
    """Test LintEngine logging and metrics."""

    def test_run_matches_analyze(self, engine: LintEngine, js_source: str) -> None:
        """Test run() returns the same diagnostics as analyze()."""
        assert engine.run(js_source).diagnostics == analyze(js_source).diagnostics

    def test_default_rules(self, engine: LintEngine) -> None:
        """Test the default engine uses the built-in tables."""
        assert engine.rules is DEFAULT_RULES

    def test_records_metrics(self, engine: LintEngine) -> None:
        """Test passes, diagnostics and offered corrections are counted."""
        engine.run("retrun x;", LanguageProfile.JAVA)
        engine.run("")

        metrics = get_metrics()
        assert metrics.passes.get({"profile": "java"}) == 1
        assert metrics.passes.get({"profile": "generic"}) == 1
        assert metrics.diagnostics.get({"category": "SpellingError"}) == 1
        assert metrics.corrections_offered.get() == 1
        assert metrics.pass_duration.get_stats()["count"] == 2

    def test_custom_rules(self) -> None:
        """Test an engine uses its own rule set."""
        engine = LintEngine(DEFAULT_RULES.with_corrections(extra_safe={"tmie": "time"}))
        result = engine.run("sleep(tmie);")

        assert result.corrected_buffer == "sleep(time);"
