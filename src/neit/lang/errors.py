"""
Neit Diagnostics
================

This module defines the diagnostics the Neit parser reports. Every
diagnostic is a ParseError subclass; the parser collects them instead of
raising them, so one run reports every problem in the source.

Exception Hierarchy
-------------------
ParseError (base for all diagnostics)
├── InvalidCharacterError  - stray token inside an import list
├── InvalidLibraryError    - import of anything but 'cstd'
├── UnexpectedTokenError   - statement ended where a token was required
├── UnterminatedStringError - quoted argument never closed
├── InvalidFunctionError   - call of an unknown function
├── InvalidArgumentError   - bad 'wrt' argument (count, stream, length)
└── MissingImportError     - call before 'cimport cstd'
NeitCompilationError       - aggregate raised when any diagnostic exists

Diagnostic Format
-----------------
    hello.nt:2:9: error[invalid-library]: invalid library 'foo'
        cimport foo
                ^^^
    hint: only 'cstd' can be imported

The highlighted region runs from the recorded column to the end of the
line. Column 0 highlights the whole line; a column past the end of the
line is clamped so the pointer sits just after the last character.
"""

from typing import Optional

import click

from neit.errors import NeitError, SourceLocation


def split_highlight(source_line: str, column: int) -> tuple[str, str]:
    """
    Split a source line into the plain prefix and the highlighted region.

    Args:
        source_line: The full text of the line
        column: 1-based column where highlighting starts (0 = whole line)

    Returns:
        (prefix, region) with prefix + region == source_line
    """
    start = max(column - 1, 0)
    start = min(start, len(source_line))
    return source_line[:start], source_line[start:]


# =============================================================================
# Base Diagnostic
# =============================================================================

class ParseError(NeitError):
    """
    Base class for all Neit diagnostics.

    Attributes:
        kind: Short machine-readable diagnostic name
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The source text of the offending line
    """

    kind = "parse-error"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self.render())

    def render(self, color: bool = False) -> str:
        """
        Format the diagnostic with location, highlighted source and hint.

        Args:
            color: Style the highlighted region red and bold
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error[{self.kind}]: {self.message}")
        else:
            parts.append(f"error[{self.kind}]: {self.message}")

        if self.source_line is not None and self.location is not None:
            prefix, region = split_highlight(self.source_line, self.location.column)
            if color:
                region_text = click.style(region, fg="red", bold=True)
            else:
                region_text = region
            parts.append(f"    {prefix}{region_text}")

            # Keep tabs so the pointer lines up under tab-indented code
            padding = "".join("\t" if c == "\t" else " " for c in prefix)
            parts.append(f"    {padding}{'^' * max(len(region), 1)}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Diagnostic Kinds
# =============================================================================

class InvalidCharacterError(ParseError):
    """A token that cannot appear in an import list."""

    kind = "invalid-character"

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' in import list",
            location=location,
            hint="separate library names with ','",
            source_line=source_line,
        )


class InvalidLibraryError(ParseError):
    """Import of a library other than 'cstd'."""

    kind = "invalid-library"

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"invalid library '{name}'",
            location=location,
            hint="only 'cstd' can be imported",
            source_line=source_line,
        )


class UnexpectedTokenError(ParseError):
    """A token (or end of line) where something else was required."""

    kind = "unexpected-token"

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected
        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=f"expected {expected}" if expected else None,
            source_line=source_line,
        )


class UnterminatedStringError(ParseError):
    """A quoted argument that is still open at the end of the line."""

    kind = "unterminated-string"

    def __init__(
        self,
        quote: str = '"',
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.quote = quote
        super().__init__(
            "unterminated string",
            location=location,
            hint=f"add closing {quote} to complete the string",
            source_line=source_line,
        )


class InvalidFunctionError(ParseError):
    """Call of a function the language does not define."""

    kind = "invalid-function"

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"invalid function '{name}'",
            location=location,
            hint="the only function is 'wrt'",
            source_line=source_line,
        )


class InvalidArgumentError(ParseError):
    """
    Malformed 'wrt' arguments.

    ``expected`` is one of "3 arguments", "stdout or stderr" or "integer".

    Attributes:
        expected: What the argument should have been
        found: What was actually written
        source: The complete program text, kept for callers that
            want to show it; render() only shows the offending line
    """

    kind = "invalid-argument"

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        source: str = "",
    ):
        self.expected = expected
        self.found = found
        self.source = source
        super().__init__(
            f"expected '{expected}' but found '{found}'",
            location=location,
            source_line=source_line,
        )


class MissingImportError(ParseError):
    """A function call before any successful 'cimport cstd'."""

    kind = "missing-cimport"

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "no import of cstd found",
            location=location,
            hint="add 'cimport cstd' before the first call",
            source_line=source_line,
        )


# =============================================================================
# Aggregate Error
# =============================================================================

def format_report(diagnostics: list[ParseError], color: bool = False) -> str:
    """Render every diagnostic followed by a summary line."""
    lines = []
    for diagnostic in diagnostics:
        lines.append(diagnostic.render(color=color))
        lines.append("")

    word = "error" if len(diagnostics) == 1 else "errors"
    lines.append(f"{len(diagnostics)} {word}")
    return "\n".join(lines)


class NeitCompilationError(NeitError):
    """
    Raised when parsing finished with one or more diagnostics.

    The code generator never runs in that case.

    Attributes:
        diagnostics: The collected ParseError instances, in source order
    """

    def __init__(self, diagnostics: list[ParseError]):
        self.diagnostics = list(diagnostics)
        super().__init__(format_report(self.diagnostics))

    def render(self, color: bool = False) -> str:
        return format_report(self.diagnostics, color=color)
