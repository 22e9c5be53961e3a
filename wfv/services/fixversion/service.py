"""Resolve a fix version for a configured repository.

Glue between the git layer and the scanner: opens (or clones) the
repository, lists the remote's branches and runs the scan with git-backed
resolver and ancestry adapters.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from wfv.core.config import FixVersionConfig
from wfv.core.log import get_logger
from wfv.core.result import Err, Ok, Result
from wfv.git import GitError, Repository, open_repository, remote_ref
from wfv.platform.paths import user_cache_dir

from .catalog import BranchCatalog, build_catalog
from .errors import FixVersionError
from .model import FixVersionResult, RootCommit
from .scanner import CancelToken, CheckCallback, scan_fix_version

__all__ = [
    "FixVersionService",
    "GitAncestryPredicate",
    "GitRootResolver",
    "default_cache_dir",
    "to_fix_version_error",
]

_log = get_logger(__name__)


def default_cache_dir() -> Path:
    return user_cache_dir() / "repos"


def to_fix_version_error(error: GitError) -> FixVersionError:
    """Classify a git failure for exit-code mapping."""
    if error.git_missing:
        return FixVersionError(
            kind="git_missing",
            message="git executable not found",
            hint="install git and make sure it is on PATH",
        )
    if error.command == "clone":
        return FixVersionError(
            kind="clone_failed",
            message=f"clone failed: {error.message}",
            hint="check the repository URL and your credentials",
        )
    if error.command.startswith("fetch"):
        return FixVersionError(
            kind="fetch_failed",
            message=f"fetch failed: {error.message}",
            hint="check the remote name and network access, or use --no-fetch",
        )
    if error.command == "mkdir":
        return FixVersionError(kind="io_error", message=error.message, hint="use --cache-dir")
    return FixVersionError(kind="git_failed", message=f"git {error.command}: {error.message}")


@dataclass(frozen=True, slots=True)
class GitRootResolver:
    """Resolve commit references with `git rev-parse`."""

    repo: Repository

    def resolve_root(self, ref: str) -> Result[RootCommit | None, FixVersionError]:
        match self.repo.resolve_commit(ref):
            case Err(e):
                return Err(to_fix_version_error(e))
            case Ok(None):
                return Ok(None)
            case Ok(sha):
                return Ok(RootCommit(sha=sha, ref=ref))


@dataclass(frozen=True, slots=True)
class GitAncestryPredicate:
    """Test ancestry against ``remote``'s branches with `git merge-base`."""

    repo: Repository
    remote: str

    def is_present(self, commit: RootCommit, branch: str) -> Result[bool, FixVersionError]:
        return self.repo.is_ancestor(commit.sha, remote_ref(self.remote, branch)).map_err(
            to_fix_version_error
        )


class FixVersionService:
    """Answer "which release first shipped this commit?" for a repository.

    Each call opens the repository and builds the catalog afresh; nothing
    is kept between calls except the on-disk clone cache.
    """

    def __init__(self, *, cache_dir: Path | None = None) -> None:
        self._cache_dir = cache_dir

    def open(self, config: FixVersionConfig) -> Result[Repository, FixVersionError]:
        cache_dir = config.cache_dir or self._cache_dir or default_cache_dir()
        opened = open_repository(
            config.url,
            remote=config.remote_name,
            cache_dir=cache_dir,
            fetch=config.fetch,
        )
        if isinstance(opened, Err):
            return Err(to_fix_version_error(opened.error))
        return Ok(opened.value.repo)

    def catalog(self, config: FixVersionConfig) -> Result[BranchCatalog, FixVersionError]:
        """Release branches of the configured remote."""
        opened = self.open(config)
        if isinstance(opened, Err):
            return opened
        return self._catalog(opened.value, config)

    def resolve(
        self,
        config: FixVersionConfig,
        *,
        cancel: CancelToken | None = None,
        on_check: CheckCallback | None = None,
    ) -> Result[FixVersionResult, FixVersionError]:
        """Resolve ``config.commit_ref`` to its fix version."""
        opened = self.open(config)
        if isinstance(opened, Err):
            return opened
        repo = opened.value

        catalog = self._catalog(repo, config)
        if isinstance(catalog, Err):
            return catalog

        _log.debug(
            "scanning %d release branches of %s for %s",
            len(catalog.value),
            config.remote_name,
            config.commit_ref,
        )
        return scan_fix_version(
            config.commit_ref,
            catalog.value,
            GitRootResolver(repo),
            GitAncestryPredicate(repo, config.remote_name),
            cancel=cancel,
            on_check=on_check,
        )

    def _catalog(
        self, repo: Repository, config: FixVersionConfig
    ) -> Result[BranchCatalog, FixVersionError]:
        branches = repo.remote_branches(config.remote_name)
        if isinstance(branches, Err):
            return Err(to_fix_version_error(branches.error))
        return Ok(build_catalog(branches.value, config.release_identifiers))
