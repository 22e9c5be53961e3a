"""Git operations module.

- Repository: queries against a single repository
- open_repository: local path or cached clone for a URL

Usage:
    from wfv.git import open_repository

    opened = open_repository(url, remote="origin", cache_dir=cache)
    if opened.is_ok():
        repo = opened.unwrap().repo
        branches = repo.remote_branches("origin")
"""

from wfv.git.repository import (
    GitError,
    Repository,
    remote_ref,
)
from wfv.git.source import (
    OpenedRepository,
    cache_path_for,
    open_repository,
)

__all__ = [
    # Repository
    "GitError",
    "Repository",
    "remote_ref",
    # Source
    "OpenedRepository",
    "cache_path_for",
    "open_repository",
]
