from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from wfv.core.config import CONFIG_FILENAME, Config, load_config, load_config_or_default
from wfv.core.errors import ErrorCode
from wfv.core.log import configure_logging
from wfv.core.result import Err
from wfv.output.console import ConsoleProtocol, RichConsole
from wfv.platform.paths import user_config_dir


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    config_path: Path | None
    console: ConsoleProtocol


def default_config_path() -> Path | None:
    """First existing config file: ./.wfv.toml, then the user config."""
    for candidate in (Path.cwd() / CONFIG_FILENAME, user_config_dir() / "config.toml"):
        if candidate.is_file():
            return candidate
    return None


def build_context(config_path: Path | None = None, *, verbose: bool = False) -> CLIContext:
    configure_logging(verbose=verbose)

    path = config_path if config_path is not None else default_config_path()
    if path is None:
        config_result = load_config_or_default(Path.cwd() / CONFIG_FILENAME)
    else:
        # Unlike a missing default, a named or discovered file must load
        config_result = load_config(path)

    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        config=config_result.value,
        config_path=path,
        console=RichConsole(),
    )
