"""
Diagnostic Rendering Tests
==========================

Tests for the ParseError hierarchy: message text, highlighted source
lines and the aggregate report.
"""

import click
import pytest
from neit.errors import NeitError, SourceLocation, BuildError
from neit.lang.errors import (
    ParseError,
    InvalidCharacterError,
    InvalidLibraryError,
    UnexpectedTokenError,
    UnterminatedStringError,
    InvalidFunctionError,
    InvalidArgumentError,
    MissingImportError,
    NeitCompilationError,
    format_report,
    split_highlight,
)


def loc(line: int = 1, column: int = 1) -> SourceLocation:
    return SourceLocation("t.nt", line, column)


# =============================================================================
# Highlight Tests
# =============================================================================

class TestSplitHighlight:
    """Tests for the highlighted-region split, including clamping."""

    def test_from_column(self):
        assert split_highlight("abcdef", 3) == ("ab", "cdef")

    def test_column_one(self):
        assert split_highlight("abc", 1) == ("", "abc")

    def test_column_zero_is_whole_line(self):
        assert split_highlight("abc", 0) == ("", "abc")

    def test_column_past_end_is_clamped(self):
        assert split_highlight("abc", 10) == ("abc", "")

    def test_empty_line(self):
        assert split_highlight("", 5) == ("", "")


# =============================================================================
# Rendering Tests
# =============================================================================

class TestRendering:
    """Tests for the text of individual diagnostics."""

    def test_invalid_library_rendering(self):
        error = InvalidLibraryError("foo", loc(1, 9), "cimport foo")
        assert str(error) == (
            "t.nt:1:9: error[invalid-library]: invalid library 'foo'\n"
            "    cimport foo\n"
            "            ^^^\n"
            "hint: only 'cstd' can be imported"
        )

    def test_whole_line_highlight(self):
        error = InvalidArgumentError("integer", "x", loc(2, 0), "_wrt(a)")
        lines = str(error).splitlines()
        assert lines[0] == "t.nt:2:0: error[invalid-argument]: expected 'integer' but found 'x'"
        assert lines[1] == "    _wrt(a)"
        assert lines[2] == "    ^^^^^^^"

    def test_clamped_column_points_after_line(self):
        error = UnexpectedTokenError("end of line", "'('", loc(1, 40), "_wrt")
        lines = str(error).splitlines()
        assert lines[1] == "    _wrt"
        assert lines[2] == "        ^"
        assert lines[3] == "hint: expected '('"

    def test_tabs_kept_in_pointer(self):
        error = InvalidFunctionError("foo", loc(1, 2), "\t_foo()")
        assert str(error).splitlines()[2] == "    \t^^^^^^"

    def test_no_location(self):
        error = MissingImportError()
        assert str(error) == (
            "error[missing-cimport]: no import of cstd found\n"
            "hint: add 'cimport cstd' before the first call"
        )

    def test_location_without_source_line(self):
        error = UnterminatedStringError("'", loc(3, 5))
        assert str(error) == (
            "t.nt:3:5: error[unterminated-string]: unterminated string\n"
            "hint: add closing ' to complete the string"
        )

    def test_program_text_not_rendered(self):
        """InvalidArgumentError keeps the whole program but shows one line."""
        program = "cimport cstd\n_wrt(stdout)"
        error = InvalidArgumentError(
            "3 arguments", "1", loc(2, 0), "_wrt(stdout)", source=program,
        )
        assert error.source == program
        assert "cimport cstd" not in str(error)

    def test_color_rendering(self):
        """Color only styles the highlighted region."""
        error = InvalidCharacterError(";", loc(1, 13), "cimport cstd;")
        colored = error.render(color=True)
        assert "\x1b[" in colored
        assert click.unstyle(colored) == error.render()

    @pytest.mark.parametrize("error,kind", [
        (InvalidCharacterError(";"), "invalid-character"),
        (InvalidLibraryError("x"), "invalid-library"),
        (UnexpectedTokenError("x"), "unexpected-token"),
        (UnterminatedStringError(), "unterminated-string"),
        (InvalidFunctionError("x"), "invalid-function"),
        (InvalidArgumentError("integer", "x"), "invalid-argument"),
        (MissingImportError(), "missing-cimport"),
    ])
    def test_kinds(self, error, kind):
        assert error.kind == kind
        assert isinstance(error, ParseError)
        assert isinstance(error, NeitError)


# =============================================================================
# Aggregate Tests
# =============================================================================

class TestCompilationError:
    """Tests for the aggregate NeitCompilationError."""

    def test_single_error_summary(self):
        report = format_report([MissingImportError()])
        assert report.endswith("\n1 error")

    def test_report_separates_diagnostics(self):
        errors = [InvalidLibraryError("a", loc(1, 9), "cimport a"), MissingImportError()]
        report = str(NeitCompilationError(errors))
        assert report == (
            errors[0].render() + "\n\n" + errors[1].render() + "\n\n2 errors"
        )

    def test_diagnostics_copied(self):
        errors = [MissingImportError()]
        aggregate = NeitCompilationError(errors)
        errors.clear()
        assert len(aggregate.diagnostics) == 1

    def test_color_report(self):
        aggregate = NeitCompilationError([InvalidLibraryError("a", loc(1, 9), "cimport a")])
        assert click.unstyle(aggregate.render(color=True)) == str(aggregate)


class TestBuildError:
    """Tests for native compiler failures."""

    def test_message_with_details(self):
        error = BuildError(
            "Error during compilation with cc",
            command=["cc", "a.c", "-o", "a"],
            stderr="a.c:1: oops\n",
            return_code=1,
        )
        assert str(error) == (
            "Error during compilation with cc\n"
            "command: cc a.c -o a\n"
            "a.c:1: oops"
        )
        assert error.return_code == 1

    def test_message_only(self):
        assert str(BuildError("boom")) == "boom"
