"""
Neit Error Hierarchy
====================

This module defines the root of the exception hierarchy for the Neit
toolchain. All exceptions inherit from NeitError, allowing callers to
catch every toolchain error with a single except clause.

Exception Hierarchy
-------------------
NeitError (base)
├── ParseError (neit.lang.errors) - source diagnostics
│   └── ... one subclass per diagnostic kind
├── NeitCompilationError (neit.lang.errors) - aggregate of diagnostics
└── BuildError - the native C compiler could not produce a binary

Error messages follow this format:
    filename:line:column: error[kind]: description
        source_line_text
             ^^^^^^^^^^^ (highlighted region)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class NeitError(Exception):
    """
    Base exception for all Neit errors.

        try:
            compile_file("hello.nt")
        except NeitError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in Neit source code.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 means "whole line")
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Toolchain Exceptions
# =============================================================================

class BuildError(NeitError):
    """
    The native C compiler failed to build the generated source.

    Attributes:
        message: Short description of the failure
        command: The command line that was run
        stderr: Captured standard error of the compiler
        return_code: Exit status of the compiler (None if it never ran)
    """

    def __init__(
        self,
        message: str,
        command: Optional[list[str]] = None,
        stderr: str = "",
        return_code: Optional[int] = None,
    ):
        self.message = message
        self.command = command or []
        self.stderr = stderr
        self.return_code = return_code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.command:
            parts.append(f"command: {' '.join(self.command)}")
        if self.stderr:
            parts.append(self.stderr.rstrip())
        return "\n".join(parts)
