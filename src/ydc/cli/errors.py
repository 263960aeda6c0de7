"""
CLI Error Handling
==================

Maps exceptions to the messages and exit codes of the ydcc command.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from ydc.files import SOURCE_ENCODING, SOURCE_ERRORS


class ExitCode(IntEnum):
    """Exit codes for the ydcc command."""
    SUCCESS = 0
    TRANSPILE_ERROR = 1  # Usage, parse or output-file error
    INTERNAL_ERROR = 3   # Unexpected internal error
    IO_ERROR = 74        # Source file could not be read (EX_IOERR)


PARSE_FAILURE_MESSAGE = "Failed to transpile due to parsing errors."


def echo_text(text: str, err: bool = False) -> None:
    """Echo text that may carry surrogate-escaped source bytes."""
    click.echo(text.encode(SOURCE_ENCODING, SOURCE_ERRORS), err=err)


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report `error` and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    from ydc.errors import OutputWriteError, SourceReadError
    from ydc.transpiler.errors import TranspilerError

    if isinstance(error, TranspilerError):
        # Parser errors go to stdout, followed by the summary line
        echo_text(str(error))
        click.echo(PARSE_FAILURE_MESSAGE)
        sys.exit(ExitCode.TRANSPILE_ERROR)

    elif isinstance(error, SourceReadError):
        echo_text(str(error), err=True)
        sys.exit(ExitCode.IO_ERROR)

    elif isinstance(error, OutputWriteError):
        echo_text(str(error))
        sys.exit(ExitCode.TRANSPILE_ERROR)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
