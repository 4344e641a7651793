"""
teenyc Error Reporting
======================

Maps the exceptions that reach the command line onto a diagnostic on
stderr and a process exit code:

- CompileError (lexical, syntax or semantic stage) -> BUILD_ERROR
- bad arguments, unreadable or non-UTF-8 files      -> INVALID_ARGS
- anything else                                     -> INTERNAL_ERROR
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from teeny.compiler.errors import CompileError


class ExitCode(IntEnum):
    """Exit codes of the teenyc command."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Lexical, syntax or semantic error in the source
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def exit_code_for(error: Exception) -> ExitCode:
    """Exit code reported for an exception raised while compiling."""
    if isinstance(error, CompileError):
        return ExitCode.BUILD_ERROR
    if isinstance(error, (click.BadParameter, OSError, UnicodeDecodeError)):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report ``error`` on stderr and exit with its exit code.

    Compile errors are already formatted as
    "file:line:col: <stage> error: ..."; with ``verbose`` the failing stage
    and error class are added. Internal errors print a traceback in
    verbose mode.

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)

    if isinstance(error, CompileError):
        click.echo(str(error), err=True)
        if verbose:
            click.echo(
                f"Stopped in the {error.stage} stage ({type(error).__name__})",
                err=True,
            )
    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error.format_message()}", err=True)
    elif isinstance(error, UnicodeDecodeError):
        click.echo(f"Error: source is not valid UTF-8 ({error.reason})", err=True)
    elif code == ExitCode.INVALID_ARGS:
        click.echo(f"Error: {error}", err=True)
    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()

    sys.exit(code)
