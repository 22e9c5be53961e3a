"""Find command - earliest release that contains a commit."""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path

import typer

from wfv.cli.commands._helpers import exit_on_error, exit_with_code
from wfv.cli.context import CLIContext, build_context
from wfv.cli.prompt import require_value
from wfv.core.config import ConfigError, FixVersionConfig
from wfv.core.errors import ErrorCode
from wfv.core.result import Err, Ok, Result
from wfv.output.console import ConsoleProtocol, Style
from wfv.services.fixversion import (
    BranchCheck,
    CommitUnknown,
    FixVersionError,
    FixVersionFound,
    FixVersionResult,
    FixVersionService,
    NoFixVersion,
    describe_result,
)
from wfv.services.fixversion.errors import cancelled

# Seconds between checks for Ctrl+C while the scan runs
_POLL_SECONDS = 0.1

ResolveFn = Callable[[threading.Event], Result[FixVersionResult, FixVersionError]]


def build_fix_version_config(
    ctx: CLIContext,
    *,
    commit: str | None,
    url: str | None,
    remote: str | None,
    develop_branch: str | None,
    release_identifier: list[str] | None,
    no_fetch: bool,
    cache_dir: Path | None,
    require_commit: bool = True,
) -> FixVersionConfig:
    """Layer command-line values over the config file, prompting for gaps."""
    commit_ref = ""
    if require_commit:
        commit_ref = require_value(commit, label="Commit hash", option="COMMIT argument")
    if not (url or ctx.config.url):
        url = require_value(url, label="Repository URL", option="--url")

    result = FixVersionConfig.from_config(
        ctx.config,
        commit_ref=commit_ref,
        url=url,
        remote_name=remote,
        develop_branch=develop_branch,
        release_identifiers=release_identifier or (),
        fetch=False if no_fetch else None,
        cache_dir=cache_dir,
    )
    return _unwrap_config(result, ctx.console)


def _unwrap_config(
    result: Result[FixVersionConfig, ConfigError], console: ConsoleProtocol
) -> FixVersionConfig:
    match result:
        case Err(e):
            console.error(e.message)
            exit_with_code(int(ErrorCode.USER_ERROR))
        case Ok(config):
            return config


def run_cancellable(resolve: ResolveFn) -> Result[FixVersionResult, FixVersionError]:
    """Run ``resolve`` on a worker thread so Ctrl+C can stop the scan.

    On interrupt the cancel event is set and the worker finishes the git
    query in flight before returning; no further queries are issued.
    An exception raised by ``resolve`` propagates to the caller.
    """
    cancel = threading.Event()
    outcome: list[Result[FixVersionResult, FixVersionError]] = []
    failure: list[BaseException] = []

    def _work() -> None:
        try:
            outcome.append(resolve(cancel))
        except BaseException as e:  # re-raised on the calling thread
            failure.append(e)

    worker = threading.Thread(target=_work, name="wfv-scan", daemon=True)
    worker.start()
    try:
        while worker.is_alive():
            worker.join(_POLL_SECONDS)
    except KeyboardInterrupt:
        cancel.set()
        worker.join()
        return Err(cancelled())

    if failure:
        raise failure[0]
    return outcome[0]


def _check_printer(console: ConsoleProtocol) -> Callable[[BranchCheck], None]:
    def _print(check: BranchCheck) -> None:
        mark = "yes" if check.present else "no "
        console.print(f"  {mark}  {check.version}  ({check.branch})", Style.DIM)

    return _print


def render_result(result: FixVersionResult, console: ConsoleProtocol) -> None:
    match result:
        case FixVersionFound(version=version, branch=branch, commit=commit):
            console.success(f"Fix version = {version}")
            console.print(f"{commit.short_sha} first appears on {branch}", Style.DIM)
        case CommitUnknown():
            console.warning(describe_result(result))
        case NoFixVersion(commit=None):
            console.warning(describe_result(result))
            console.print("no release branches matched the release identifiers", Style.DIM)
        case NoFixVersion():
            console.warning(describe_result(result))


def find(
    commit: str | None = typer.Argument(None, help="Commit hash (or any git commit reference)"),
    url: str | None = typer.Option(None, "--url", "-u", help="Repository URL or local path"),
    remote: str | None = typer.Option(None, "--remote", help="Remote whose branches are scanned"),
    develop_branch: str | None = typer.Option(
        None, "--develop-branch", help="Development branch name"
    ),
    release_identifier: list[str] | None = typer.Option(
        None,
        "--release-identifier",
        "-r",
        help="Release branch prefix (repeatable, or space separated)",
    ),
    no_fetch: bool = typer.Option(False, "--no-fetch", help="Do not fetch before scanning"),
    cache_dir: Path | None = typer.Option(None, "--cache-dir", help="Where clones are kept"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file (TOML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List every branch checked"),
) -> None:
    """Find the earliest release branch that contains COMMIT."""
    ctx = build_context(config, verbose=verbose)
    fv_config = build_fix_version_config(
        ctx,
        commit=commit,
        url=url,
        remote=remote,
        develop_branch=develop_branch,
        release_identifier=release_identifier,
        no_fetch=no_fetch,
        cache_dir=cache_dir,
    )

    service = FixVersionService()
    on_check = _check_printer(ctx.console) if verbose else None

    with ctx.console.status(f"Scanning release branches for {fv_config.commit_ref}..."):
        result = run_cancellable(
            lambda cancel: service.resolve(fv_config, cancel=cancel, on_check=on_check)
        )

    match result:
        case Err(e):
            exit_on_error(e, ctx.console)
        case Ok(answer):
            render_result(answer, ctx.console)
            if not isinstance(answer, FixVersionFound):
                exit_with_code(int(ErrorCode.NOT_FOUND))
