"""Releases command - list release branches in scan order."""

from __future__ import annotations

from pathlib import Path

import typer

from wfv.cli.commands._helpers import exit_on_error
from wfv.cli.commands.find_cmd import build_fix_version_config
from wfv.cli.context import build_context
from wfv.core.result import Err, Ok
from wfv.output.console import Style
from wfv.services.fixversion import FixVersionService


def releases(
    url: str | None = typer.Option(None, "--url", "-u", help="Repository URL or local path"),
    remote: str | None = typer.Option(None, "--remote", help="Remote whose branches are listed"),
    release_identifier: list[str] | None = typer.Option(
        None,
        "--release-identifier",
        "-r",
        help="Release branch prefix (repeatable, or space separated)",
    ),
    no_fetch: bool = typer.Option(False, "--no-fetch", help="Do not fetch first"),
    cache_dir: Path | None = typer.Option(None, "--cache-dir", help="Where clones are kept"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file (TOML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """List release branches, newest first."""
    ctx = build_context(config, verbose=verbose)
    fv_config = build_fix_version_config(
        ctx,
        commit=None,
        url=url,
        remote=remote,
        develop_branch=None,
        release_identifier=release_identifier,
        no_fetch=no_fetch,
        cache_dir=cache_dir,
        require_commit=False,
    )

    with ctx.console.status(f"Reading branches of {fv_config.remote_name}..."):
        result = FixVersionService().catalog(fv_config)

    match result:
        case Err(e):
            exit_on_error(e, ctx.console)
        case Ok(catalog):
            if not catalog:
                identifiers = ", ".join(fv_config.release_identifiers)
                ctx.console.warning(f"no release branches match: {identifiers}")
                return
            ctx.console.header(f"{len(catalog)} release branches")
            for version in catalog.scan_order():
                ctx.console.print(f"{str(version):<16} {catalog.branch_for(version)}")
            ctx.console.print(
                f"identifiers: {', '.join(fv_config.release_identifiers)}", Style.DIM
            )
