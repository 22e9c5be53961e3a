"""Locate the repository to scan.

A local working clone that already tracks ``remote`` is used in place: its
``refs/remotes/<remote>/*`` are the branches of the repository it was
cloned from. Anything else, including a local path to an upstream or a
bare mirror, is cloned once into the cache directory (with ``remote`` as
the origin name) and fetched on later runs.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from wfv.core.log import get_logger
from wfv.core.result import Err, Ok, Result

from .repository import GitError, Repository

__all__ = ["OpenedRepository", "cache_path_for", "open_repository"]

_log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class OpenedRepository:
    """A repository ready for querying.

    Attributes:
        repo: The repository handle
        cloned: True if this call created a fresh clone
        local: True if the URL named a local repository used in place
    """

    repo: Repository
    cloned: bool = False
    local: bool = False


def cache_path_for(url: str, remote: str, cache_dir: Path) -> Path:
    """Deterministic clone location for ``url`` fetched as ``remote``."""
    digest = hashlib.sha256(f"{remote}\n{url}".encode("utf-8")).hexdigest()[:16]
    return cache_dir / digest


def _local_path(url: str) -> Path | None:
    """Absolute path of a local repository named by ``url``, if it is one."""
    if "://" in url or url.startswith("git@"):
        return None
    path = Path(url).expanduser()
    if not path.is_dir():
        return None
    path = path.resolve()
    return path if Repository(path).exists() else None


def _tracks_remote(repo: Repository, remote: str) -> Result[bool, GitError]:
    """True if ``repo`` has ``remote`` configured and remote-tracking refs for it."""
    remotes = repo.remotes()
    if isinstance(remotes, Err):
        return remotes
    if remote not in remotes.value:
        return Ok(False)
    branches = repo.remote_branches(remote)
    if isinstance(branches, Err):
        return branches
    return Ok(bool(branches.value))


def open_repository(
    url: str,
    *,
    remote: str,
    cache_dir: Path,
    fetch: bool = True,
) -> Result[OpenedRepository, GitError]:
    """Return a repository whose ``remote`` branches reflect ``url``.

    Args:
        url: Remote URL or path to a local repository
        remote: Remote name whose branches are scanned
        cache_dir: Where clones of non-local URLs are kept
        fetch: Refresh remote branches of an existing repository first

    Returns:
        Ok(OpenedRepository) on success
        Err(GitError) with command "clone", "fetch" or "mkdir" on failure
    """
    local_path = _local_path(url)
    if local_path is not None:
        local = Repository(local_path)
        tracked = _tracks_remote(local, remote)
        if isinstance(tracked, Err):
            return tracked
        if tracked.value:
            _log.debug("using local repository %s", local_path)
            if fetch:
                fetched = local.fetch(remote)
                if isinstance(fetched, Err):
                    return fetched
            return Ok(OpenedRepository(repo=local, local=True))
        # Scan the path's own branches through a cached clone of it
        url = str(local_path)

    dest = cache_path_for(url, remote, cache_dir)
    cached = Repository(dest)
    if dest.is_dir() and cached.exists():
        _log.debug("using cached clone %s", dest)
        if fetch:
            fetched = cached.fetch(remote)
            if isinstance(fetched, Err):
                return fetched
        return Ok(OpenedRepository(repo=cached))

    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(GitError(command="mkdir", message=f"cannot create {cache_dir}: {e}"))

    _log.debug("cloning %s into %s", url, dest)
    match Repository.clone(url, dest, remote=remote):
        case Err(e):
            return Err(e)
        case Ok(repo):
            return Ok(OpenedRepository(repo=repo, cloned=True))
