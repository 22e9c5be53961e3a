from __future__ import annotations

from dataclasses import dataclass, field

from .version import Version

NO_SUCH_HASH_MESSAGE = "No such hash in the root of this repo"
NO_FIX_VERSION_MESSAGE = "No fixed version found"


@dataclass(frozen=True, slots=True)
class RootCommit:
    """A commit reference resolved against the repository."""

    sha: str
    ref: str

    @property
    def short_sha(self) -> str:
        return self.sha[:8]


@dataclass(frozen=True, slots=True)
class BranchCheck:
    """One ancestry query issued during a scan."""

    version: Version
    branch: str
    present: bool


@dataclass(frozen=True, slots=True)
class FixVersionFound:
    """The oldest release of the contiguous run that contains the commit."""

    version: Version
    branch: str
    commit: RootCommit
    checks: tuple[BranchCheck, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class CommitUnknown:
    """The commit reference did not resolve in the repository."""

    commit_ref: str


@dataclass(frozen=True, slots=True)
class NoFixVersion:
    """The commit exists but no scanned release branch contains it.

    ``commit`` is None when there were no release branches to scan, in
    which case the reference was never resolved.
    """

    commit: RootCommit | None
    checks: tuple[BranchCheck, ...] = field(default_factory=tuple)


FixVersionResult = FixVersionFound | CommitUnknown | NoFixVersion


def describe_result(result: FixVersionResult) -> str:
    """One-line answer shown to the user."""
    match result:
        case FixVersionFound(version=version):
            return str(version)
        case CommitUnknown():
            return NO_SUCH_HASH_MESSAGE
        case NoFixVersion():
            return NO_FIX_VERSION_MESSAGE
