from __future__ import annotations

import typer

from wfv import __version__
from wfv.cli.commands.find_cmd import find
from wfv.cli.commands.releases_cmd import releases

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Find the first release that shipped a commit.",
)


# Commands
app.command()(find)
app.command()(releases)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    pass


def main() -> None:
    app()
