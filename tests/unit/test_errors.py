"""
Tests for diagnostics: exception fields, rendering and the reporter.
"""

import pytest
from tests.test_utils import strip_ansi
from tinycompiler.frontend.lexer import tokenize
from tinycompiler.shared.errors import (
    CompileError,
    Diagnostic,
    ErrorReporter,
    LexError,
    ParseError,
    _use_color,
)
from tinycompiler.shared.source_location import SourceLocation
from tests.test_utils import parse_source


class TestExceptionRendering:

    def test_lex_error_snippet(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("(add 2 #)", source_file="main.lisp")
        lines = str(exc_info.value).split("\n")
        assert lines[0] == "error[E0001]: unexpected character '#'"
        assert lines[1] == " --> main.lisp:1:8"
        assert lines[3] == "1 | (add 2 #)"
        assert lines[4] == "  |        ^ not part of the language"

    def test_unterminated_string_caret_stays_on_line(self):
        with pytest.raises(LexError) as exc_info:
            tokenize('(a "bc\n')
        text = str(exc_info.value)
        assert '1 | (a "bc' in text
        assert "  |    ^^^ string starts here" in text
        assert "= help:" in text

    def test_parse_error_snippet(self):
        with pytest.raises(ParseError) as exc_info:
            parse_source("(a)\n(1)")
        text = str(exc_info.value)
        assert text.startswith("error[E0002]: unexpected number token '1'")
        assert "2 | (1)" in text

    def test_no_source_one_line_form(self):
        err = ParseError("unexpected end of input", token_kind="EOF")
        assert str(err) == "unexpected end of input"

    def test_location_without_source(self):
        loc = SourceLocation(file="x.lisp", line=3, column=4)
        err = LexError("unexpected character '%'", char="%", offset=10, location=loc)
        assert str(err) == "error[E0001]: unexpected character '%'\n --> x.lisp:3:4"

    def test_hierarchy(self):
        assert issubclass(LexError, CompileError)
        assert issubclass(ParseError, CompileError)
        assert not issubclass(LexError, ParseError)


class TestErrorReporter:

    def test_report_and_summary(self):
        reporter = ErrorReporter()
        with pytest.raises(LexError) as exc_info:
            tokenize("(f @)", source_file="a.lisp")
        reporter.report(exc_info.value)
        assert reporter.has_errors()
        out = reporter.format_all_errors(color=False)
        assert "error[E0001]" in out
        assert "1 | (f @)" in out
        assert out.endswith("error: aborting due to 1 previous error")

    def test_plural_summary(self):
        reporter = ErrorReporter()
        reporter.report(ParseError("first", token_kind="EOF"))
        reporter.report(ParseError("second", token_kind="EOF"))
        out = reporter.format_all_errors(color=False)
        assert "aborting due to 2 previous errors" in out
        assert "<unknown location>" in out

    def test_unknown_file_shows_location_only(self):
        loc = SourceLocation(file="missing.lisp", line=1, column=1)
        out = ErrorReporter().format_error(Diagnostic("oops", loc, code="E0002"), color=False)
        assert out == "error[E0002]: oops\n --> missing.lisp:1:1"

    def test_color_output(self):
        reporter = ErrorReporter()
        reporter.report(ParseError("bad", token_kind="EOF"))
        colored = reporter.format_all_errors(color=True)
        assert "\x1b[" in colored
        assert strip_ansi(colored) == reporter.format_all_errors(color=False)

    def test_print_errors_goes_to_stderr(self, capsys, no_color):
        reporter = ErrorReporter()
        reporter.report(ParseError("bad", token_kind="EOF"))
        reporter.print_errors()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error[E0002]: bad" in captured.err


class TestColorEnvironment:

    def test_no_color(self, monkeypatch):
        monkeypatch.delenv("TINYCOMPILER_COLOR", raising=False)
        monkeypatch.setenv("NO_COLOR", "1")
        assert not _use_color()

    @pytest.mark.parametrize("value", ["0", "false", "never"])
    def test_explicit_off(self, monkeypatch, value):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TINYCOMPILER_COLOR", value)
        assert not _use_color()

    def test_default_on(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TINYCOMPILER_COLOR", raising=False)
        assert _use_color()
