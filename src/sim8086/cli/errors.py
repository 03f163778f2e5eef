"""
Unified CLI Error Handling
==========================

Provides consistent error messages and exit codes for the command-line
tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from sim8086.errors import DecodeError, ExecutionError, Sim8086Error


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    PROGRAM_ERROR = 1    # Undecodable input or unsupported instruction
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Decode errors and unsupported-instruction errors are reported with
    different prefixes: the first means the input is malformed, the second
    that the interpreter does not cover a valid instruction.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, DecodeError):
        click.echo(f"Decode error: {error}", err=True)
        sys.exit(ExitCode.PROGRAM_ERROR)

    elif isinstance(error, ExecutionError):
        click.echo(f"Execution error: {error}", err=True)
        sys.exit(ExitCode.PROGRAM_ERROR)

    elif isinstance(error, Sim8086Error):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.PROGRAM_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
