"""
CLI Error Handling
==================

Provides consistent error output and exit codes for the neitc tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Diagnostics or native compiler failure
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception on stderr and exit with the matching code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    from neit.errors import NeitError, BuildError
    from neit.lang.errors import NeitCompilationError, ParseError

    if isinstance(error, (NeitCompilationError, ParseError)):
        # Diagnostics carry their own "error[kind]:" prefix; click.echo
        # drops the styling when stderr is not a terminal
        click.echo(error.render(color=True), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, BuildError):
        click.echo(f"Build error: {error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, NeitError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
