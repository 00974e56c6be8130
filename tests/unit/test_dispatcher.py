"""Tests for the per-line pattern dispatcher."""

import pytest

from livelint.core.dispatcher import PatternDispatcher
from livelint.core.rules import DEFAULT_RULES
from livelint.models.diagnostic import Category, Severity
from livelint.models.language import LanguageProfile


def _messages(dispatcher: PatternDispatcher, line: str) -> list[str]:
    return [d.message for d in dispatcher.check_line(line, 1)]


class TestMissingTerminator:
    """Test the missing-semicolon heuristic."""

    @pytest.mark.parametrize(
        "line",
        [
            "let x = 5",
            "const total = a + b",
            "return value",
            "x = 'done'",
            'msg = "hello"',
            "    count += 1",
            "foo()",
            "foo(bar)",
            "items[0]",
            'console.log("hi")',
        ],
    )
    def test_flagged(self, line: str) -> None:
        """Test statements ending in a word, quote, ')' or ']' are flagged."""
        assert PatternDispatcher.missing_terminator(line)

    @pytest.mark.parametrize(
        "line",
        [
            "let x = 5;",
            "if (x) {",
            "}",
            "case 1:",
            "foo(a,",
            "callback(",
            "abc",
            "*ptr = value",
            " * continued comment",
            "",
            "   ",
            "else return x",
            "import thing from here",
            "public int count",
            "async work",
            "x = y +",
        ],
    )
    def test_not_flagged(self, line: str) -> None:
        """Test terminated, control and short lines are not flagged."""
        assert not PatternDispatcher.missing_terminator(line)

    def test_keyword_must_be_whole_word(self) -> None:
        """Test a keyword prefix inside an identifier does not exempt the line."""
        assert PatternDispatcher.missing_terminator("format = value")
        assert PatternDispatcher.missing_terminator("iffy = value")

    def test_diagnostic_shape(self) -> None:
        """Test the warning points at the last character of the statement."""
        dispatcher = PatternDispatcher(LanguageProfile.GENERIC)
        diagnostics = list(dispatcher.check_line("let x = 5", 4))

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.line == 4
        assert diagnostic.column == 9
        assert diagnostic.message == "Possible missing semicolon"
        assert diagnostic.severity == Severity.WARNING
        assert diagnostic.category == Category.WARNING
        assert diagnostic.suggestion == "Add ';' at the end of the statement"

    def test_trailing_whitespace_ignored_for_column(self) -> None:
        """Test the column ignores trailing whitespace."""
        dispatcher = PatternDispatcher(LanguageProfile.JAVA)
        diagnostics = list(dispatcher.check_line("int x = 5   ", 1))
        assert diagnostics[-1].column == 9

    @pytest.mark.parametrize(
        "profile",
        [LanguageProfile.PYTHON, LanguageProfile.HTML_CSS, LanguageProfile.SQL],
    )
    def test_only_terminator_profiles(self, profile: LanguageProfile) -> None:
        """Test profiles without statement terminators never get the warning."""
        dispatcher = PatternDispatcher(profile)
        assert "Possible missing semicolon" not in _messages(dispatcher, "value = compute")


class TestSpelling:
    """Test misspelling detection."""

    def test_every_occurrence_reported(self) -> None:
        """Test each match on a line yields its own diagnostic."""
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        diagnostics = list(dispatcher.check_line("retrun retrun", 2))

        assert [(d.line, d.column) for d in diagnostics] == [(2, 1), (2, 8)]
        assert all(d.category == Category.SPELLING_ERROR for d in diagnostics)
        assert all(d.severity == Severity.ERROR for d in diagnostics)

    def test_message_uses_matched_text(self) -> None:
        """Test the suggestion names the exact matched substring."""
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        diagnostic = next(iter(dispatcher.check_line("    RETRUN value", 1)))

        assert diagnostic.column == 5
        assert diagnostic.message == 'Typo: "RETRUN" should be "return"'
        assert diagnostic.suggestion == 'Replace "RETRUN" with "return"'

    def test_whole_word_only(self) -> None:
        """Test misspellings embedded in longer words are ignored."""
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        assert list(dispatcher.check_line("retruns = myretrun", 1)) == []

    @pytest.mark.parametrize("profile", list(LanguageProfile))
    def test_applies_to_every_profile(self, profile: LanguageProfile) -> None:
        """Test the dictionary is profile independent."""
        dispatcher = PatternDispatcher(profile)
        diagnostics = dispatcher.check_line("x = lenght;", 1)
        assert any(d.category == Category.SPELLING_ERROR for d in diagnostics)

    def test_language_specific_typos_reported(self) -> None:
        """Test typos outside the safe subset are still reported."""
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        assert 'Typo: "pritn" should be "print"' in _messages(dispatcher, "pritn(1)")


class TestPatternRules:
    """Test profile-specific pattern rules."""

    def test_rules_reported_in_order(self) -> None:
        """Test a line can trigger several rules, in table order."""
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        diagnostics = list(dispatcher.check_line("if x = 5", 1))

        assert [d.message for d in diagnostics] == [
            "Expected ':' at end of block statement",
            "Invalid syntax: use '==' for comparison",
        ]
        assert all(d.column == 1 for d in diagnostics)

    def test_column_is_match_start(self) -> None:
        """Test the column is the 1-based start of the match."""
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        diagnostic = next(iter(dispatcher.check_line("x = true", 1)))

        assert diagnostic.column == 3
        assert diagnostic.severity == Severity.WARNING

    def test_python_print_statement(self) -> None:
        """Test Python 2 print statements are flagged."""
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        assert _messages(dispatcher, "print 'hi'") == ["Missing parentheses in call to 'print'"]

    def test_python_mixed_indentation(self) -> None:
        """Test mixed tabs and spaces yield an IndentationError."""
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        diagnostic = next(iter(dispatcher.check_line(" \tpass", 1)))
        assert diagnostic.category == Category.INDENTATION_ERROR
        assert diagnostic.severity == Severity.ERROR

    def test_java_type_mismatch(self) -> None:
        """Test a numeric declaration from a string literal is a TypeError."""
        dispatcher = PatternDispatcher(LanguageProfile.JAVA)
        diagnostics = list(dispatcher.check_line('int count = "5";', 1))

        assert len(diagnostics) == 1
        assert diagnostics[0].category == Category.TYPE_ERROR
        assert diagnostics[0].severity == Severity.ERROR

    def test_c_include_format(self) -> None:
        """Test a malformed #include is a SyntaxError."""
        dispatcher = PatternDispatcher(LanguageProfile.C_CPP)
        messages = _messages(dispatcher, "#include stdio.h")
        assert "#include expects <FILENAME> or \"FILENAME\"" in messages

    def test_sql_rules_ignore_case(self) -> None:
        """Test SQL rules match lower-case keywords."""
        dispatcher = PatternDispatcher(LanguageProfile.SQL)
        diagnostics = list(dispatcher.check_line("select name, from users", 1))

        assert diagnostics[0].message == "Trailing comma before FROM"
        assert diagnostics[0].column == 12

    def test_html_deprecated_element(self) -> None:
        """Test deprecated HTML elements are warnings."""
        dispatcher = PatternDispatcher(LanguageProfile.HTML_CSS)
        diagnostics = list(dispatcher.check_line("<center>hi</center>", 1))
        assert diagnostics[0].message == "Deprecated HTML element"
        assert diagnostics[0].severity == Severity.WARNING

    def test_generic_clean_line(self) -> None:
        """Test an ordinary generic line yields nothing."""
        dispatcher = PatternDispatcher(LanguageProfile.GENERIC)
        assert list(dispatcher.check_line("function foo() {}", 1)) == []


class TestDispatch:
    """Test whole-buffer dispatch."""

    def test_skips_comment_lines(self) -> None:
        """Test lines in skip_lines are not scanned."""
        dispatcher = PatternDispatcher(LanguageProfile.GENERIC)
        diagnostics = dispatcher.dispatch(["// retrun x;", "retrun x;"], frozenset({1}))

        assert [d.line for d in diagnostics] == [2]

    def test_line_order(self) -> None:
        """Test diagnostics come out in line order."""
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON)
        diagnostics = dispatcher.dispatch(["esle:", "x = 1", "retrun x", "", "if ok"])

        assert [d.line for d in diagnostics] == [1, 3, 5]

    def test_uses_given_rules(self) -> None:
        """Test extra corrections from a custom rule set are reported."""
        rules = DEFAULT_RULES.with_corrections({"tmie": "time"})
        dispatcher = PatternDispatcher(LanguageProfile.PYTHON, rules)

        assert 'Typo: "tmie" should be "time"' in _messages(dispatcher, "tmie = 0")
