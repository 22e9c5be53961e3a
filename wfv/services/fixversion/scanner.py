"""Fix-version scan.

Walks release branches newest first and collects the contiguous run of
branches that contain the commit. The first branch without the commit
after at least one hit ends the walk: release branches are assumed to be
cumulative, so anything older predates the fix. Before the first hit,
absent branches are skipped, since the fix may not have reached the
newest releases yet.

    versions  5.0   4.0   3.0   2.0
    present   yes   yes   no    (never queried)
    result          4.0

The number of ancestry queries is therefore bounded by the length of the
run plus one (plus any leading misses), not by the catalog size.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Protocol

from wfv.core.log import get_logger
from wfv.core.result import Err, Ok, Result

from .catalog import BranchCatalog, build_catalog
from .errors import FixVersionError, cancelled
from .model import (
    BranchCheck,
    CommitUnknown,
    FixVersionFound,
    FixVersionResult,
    NoFixVersion,
    RootCommit,
)
from .version import Version

__all__ = [
    "AncestryPredicate",
    "CancelToken",
    "CheckCallback",
    "RootCommitResolver",
    "resolve_fix_version",
    "scan_fix_version",
]

_log = get_logger(__name__)


class RootCommitResolver(Protocol):
    def resolve_root(self, ref: str) -> Result[RootCommit | None, FixVersionError]:
        """Resolve ``ref`` against the repository; Ok(None) if unknown."""
        ...


class AncestryPredicate(Protocol):
    def is_present(self, commit: RootCommit, branch: str) -> Result[bool, FixVersionError]:
        """True if ``commit`` is the tip of ``branch`` or one of its ancestors."""
        ...


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


CheckCallback = Callable[[BranchCheck], None]


def scan_fix_version(
    commit_ref: str,
    catalog: BranchCatalog,
    resolver: RootCommitResolver,
    predicate: AncestryPredicate,
    *,
    cancel: CancelToken | None = None,
    on_check: CheckCallback | None = None,
) -> Result[FixVersionResult, FixVersionError]:
    """Find the earliest release in ``catalog`` that contains ``commit_ref``.

    Args:
        commit_ref: Commit hash or other reference supplied by the user
        catalog: Release branches to scan
        resolver: Resolves ``commit_ref`` (called at most once)
        predicate: Ancestry query (called once per scanned branch)
        cancel: Checked before every ancestry query
        on_check: Called after every ancestry query

    Returns:
        Ok(FixVersionFound | CommitUnknown | NoFixVersion), or
        Err(FixVersionError) if a collaborator failed or the scan was cancelled
    """
    if not catalog:
        _log.debug("no release branches, nothing to scan")
        return Ok(NoFixVersion(commit=None))

    resolved = resolver.resolve_root(commit_ref)
    if isinstance(resolved, Err):
        return resolved
    commit = resolved.value
    if commit is None:
        _log.debug("%s does not resolve to a commit", commit_ref)
        return Ok(CommitUnknown(commit_ref=commit_ref))

    checks: list[BranchCheck] = []
    confirmed: list[Version] = []

    for version in catalog.scan_order():
        if cancel is not None and cancel.is_set():
            _log.debug("cancelled after %d checks", len(checks))
            return Err(cancelled())

        branch = catalog.branch_for(version)
        present = predicate.is_present(commit, branch)
        if isinstance(present, Err):
            return present

        check = BranchCheck(version=version, branch=branch, present=present.value)
        checks.append(check)
        _log.debug("%s %s %s", commit.short_sha, "in" if check.present else "not in", branch)
        if on_check is not None:
            on_check(check)

        if check.present:
            confirmed.append(version)
        elif confirmed:
            break

    if not confirmed:
        return Ok(NoFixVersion(commit=commit, checks=tuple(checks)))

    oldest = confirmed[-1]
    return Ok(
        FixVersionFound(
            version=oldest,
            branch=catalog.branch_for(oldest),
            commit=commit,
            checks=tuple(checks),
        )
    )


def resolve_fix_version(
    commit_ref: str,
    identifiers: Sequence[str],
    remote_branches: Iterable[str],
    resolver: RootCommitResolver,
    predicate: AncestryPredicate,
    *,
    cancel: CancelToken | None = None,
    on_check: CheckCallback | None = None,
) -> Result[FixVersionResult, FixVersionError]:
    """Build the release catalog from ``remote_branches`` and scan it."""
    catalog = build_catalog(remote_branches, identifiers)
    return scan_fix_version(
        commit_ref,
        catalog,
        resolver,
        predicate,
        cancel=cancel,
        on_check=on_check,
    )
