"""Prompting for values that were neither passed nor configured."""

from __future__ import annotations

import sys

import typer

from wfv.core.errors import ErrorCode


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def require_value(value: str | None, *, label: str, option: str) -> str:
    """Return ``value``, prompting for it on a terminal.

    Exits with USER_ERROR when the value is missing and there is nobody to
    ask (pipes, CI).
    """
    if value and value.strip():
        return value.strip()

    if not is_interactive_terminal():
        typer.echo(f"error: {label} is required ({option})", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    while True:
        typed = typer.prompt(label, default="", show_default=False).strip()
        if typed:
            return typed
        typer.echo(f"{label} must not be empty", err=True)
