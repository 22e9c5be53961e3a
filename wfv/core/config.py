"""Typed configuration loading.

Settings come from an optional ``config.toml``:

    [repository]
    url = "https://github.com/acme/widget.git"
    remote = "origin"
    develop_branch = "develop"

    [releases]
    identifiers = ["release", "hotfix"]

    [cache]
    dir = "~/.cache/wfv"

    [scan]
    fetch = true

Command-line options override file values, which override defaults.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table

__all__ = [
    "Config",
    "ConfigError",
    "FixVersionConfig",
    "load_config",
    "load_config_or_default",
    "DEFAULT_REMOTE",
    "DEFAULT_DEVELOP_BRANCH",
    "DEFAULT_RELEASE_IDENTIFIERS",
    "CONFIG_FILENAME",
]

DEFAULT_REMOTE = "origin"
DEFAULT_DEVELOP_BRANCH = "develop"
DEFAULT_RELEASE_IDENTIFIERS: tuple[str, ...] = ("release",)

# Project-local config file looked up in the current directory
CONFIG_FILENAME = ".wfv.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Defaults read from a config file. ``None`` means "not set"."""

    url: str | None = None
    remote: str = DEFAULT_REMOTE
    develop_branch: str = DEFAULT_DEVELOP_BRANCH
    release_identifiers: tuple[str, ...] = DEFAULT_RELEASE_IDENTIFIERS
    cache_dir: Path | None = None
    fetch: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        repository: StrDict = get_table(data, "repository") or {}
        releases: StrDict = get_table(data, "releases") or {}
        cache: StrDict = get_table(data, "cache") or {}
        scan: StrDict = get_table(data, "scan") or {}

        identifiers = get_str_list(releases, "identifiers")
        cache_dir = get_str(cache, "dir")
        fetch = get_bool(scan, "fetch")

        return cls(
            url=get_str(repository, "url"),
            remote=get_str(repository, "remote") or DEFAULT_REMOTE,
            develop_branch=get_str(repository, "develop_branch") or DEFAULT_DEVELOP_BRANCH,
            release_identifiers=(
                tuple(identifiers) if identifiers else DEFAULT_RELEASE_IDENTIFIERS
            ),
            cache_dir=Path(cache_dir).expanduser() if cache_dir else None,
            fetch=True if fetch is None else fetch,
        )


@dataclass(frozen=True, slots=True)
class FixVersionConfig:
    """Everything one resolution request needs.

    Assembled once by the CLI (options layered over ``Config``) and passed
    to the service; nothing downstream mutates it. ``develop_branch`` is
    carried for completeness and is not used by the scan.
    """

    commit_ref: str
    url: str
    remote_name: str = DEFAULT_REMOTE
    develop_branch: str = DEFAULT_DEVELOP_BRANCH
    release_identifiers: tuple[str, ...] = DEFAULT_RELEASE_IDENTIFIERS
    fetch: bool = True
    cache_dir: Path | None = None

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        commit_ref: str = "",
        url: str | None = None,
        remote_name: str | None = None,
        develop_branch: str | None = None,
        release_identifiers: Sequence[str] = (),
        fetch: bool | None = None,
        cache_dir: Path | None = None,
    ) -> Result[FixVersionConfig, ConfigError]:
        """Layer explicit values over ``config``.

        Returns Err when no repository URL is known or no usable release
        identifier remains.
        """
        resolved_url = (url or "").strip() or config.url
        if not resolved_url:
            return Err(ConfigError("repository URL is required (--url or [repository] url)"))

        identifiers = _split_identifiers(release_identifiers) or config.release_identifiers
        if not identifiers:
            return Err(ConfigError("at least one release identifier is required"))

        return Ok(
            cls(
                commit_ref=commit_ref.strip(),
                url=resolved_url,
                remote_name=(remote_name or "").strip() or config.remote,
                develop_branch=(develop_branch or "").strip() or config.develop_branch,
                release_identifiers=identifiers,
                fetch=config.fetch if fetch is None else fetch,
                cache_dir=cache_dir or config.cache_dir,
            )
        )


def _split_identifiers(values: Sequence[str]) -> tuple[str, ...]:
    # "-r 'release hotfix'" and "-r release -r hotfix" are equivalent
    out: list[str] = []
    for value in values:
        for token in value.split():
            if token not in out:
                out.append(token)
    return tuple(out)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        with path.open("rb") as f:
            parsed: object = tomllib.load(f)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML in {path}: {e}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Cannot read {path}: {e}", path=path))

    data = as_str_dict(parsed)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Read ``path`` into a ``Config``; unreadable or malformed files are an Err."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from ``path``, or defaults if the file does not exist.

    A file that exists but does not parse is still an Err.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
