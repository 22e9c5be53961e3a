"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from wfv.core.errors import ErrorCode
from wfv.output.console import Style
from wfv.services.fixversion import FixVersionError

if TYPE_CHECKING:
    from wfv.output.console import ConsoleProtocol


def error_exit_code(error: FixVersionError) -> ErrorCode:
    """Exit code for a failed resolution."""
    match error.kind:
        case "git_missing":
            return ErrorCode.ENV_ERROR
        case "clone_failed" | "fetch_failed":
            return ErrorCode.NETWORK_ERROR
        case "io_error":
            return ErrorCode.IO_ERROR
        case "cancelled":
            return ErrorCode.CANCELLED
        case _:
            return ErrorCode.GIT_ERROR


def exit_on_error(error: FixVersionError, console: ConsoleProtocol) -> NoReturn:
    """Print ``error`` (with its hint) and exit with the mapped code."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(error_exit_code(error)))


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
