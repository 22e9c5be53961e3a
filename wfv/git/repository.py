"""Git plumbing for the fix-version scan.

Besides clone and fetch, the scan needs three queries: the branches of a
remote, the commit a reference names, and whether a commit is reachable
from a branch tip. Every method returns a Result.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.resolve_commit("1a2b3c4"):
        case Ok(None):
            print("no such commit")
        case Ok(sha):
            print(repo.is_ancestor(sha, "refs/remotes/origin/release/1.2"))
        case Err(e):
            print(f"git {e.command} failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from wfv.core.log import get_logger
from wfv.core.result import Err, Ok, Result
from wfv.platform.process import ProcessError
from wfv.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 10 * 60.0

_log = get_logger(__name__)

__all__ = [
    "GitError",
    "Repository",
    "remote_ref",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """A failed git invocation.

    ``command`` names the subcommand (``"clone"``, ``"fetch origin"``,
    ``"rev-parse"``...); ``returncode`` is -1 when git never ran.
    """

    command: str
    message: str
    returncode: int = 1
    timed_out: bool = False

    @property
    def git_missing(self) -> bool:
        """True if the git executable could not be started."""
        return self.returncode == -1 and not self.timed_out


def remote_ref(remote: str, branch: str) -> str:
    """Full ref name of ``branch`` on ``remote``."""
    return f"refs/remotes/{remote}/{branch}"


class Repository:
    """Git commands run against the repository at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if ``path`` is inside a git repository (bare or not)."""
        if not self.path.is_dir():
            return False
        result = self._run(["rev-parse", "--git-dir"])
        return isinstance(result, Ok)

    @classmethod
    def clone(cls, url: str, dest: Path, *, remote: str) -> Result[Repository, GitError]:
        """Clone ``url`` into ``dest`` without a checkout and without blobs.

        Only commits and trees are needed for ancestry queries, so a
        blobless clone keeps large repositories cheap.
        """
        result = run_process(
            [
                "git",
                "clone",
                "--quiet",
                "--no-checkout",
                "--filter=blob:none",
                "--origin",
                remote,
                url,
                str(dest),
            ],
            cwd=dest.parent,
            timeout=_GIT_NETWORK_TIMEOUT_SECONDS,
        )
        match result:
            case Err(e):
                return Err(_to_git_error("clone", e, "clone failed"))
            case Ok(_):
                return Ok(cls(dest))

    def remotes(self) -> Result[list[str], GitError]:
        """Names of the configured remotes."""
        result = self._run(["remote"])
        match result:
            case Err(e):
                return Err(_to_git_error("remote", e, "git remote failed"))
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def fetch(self, remote: str) -> Result[str, GitError]:
        """Fetch and prune ``remote``.

        Returns:
            Ok(output) on success
            Err(GitError) on failure
        """
        result = self._run(["fetch", "--quiet", "--prune", remote])
        match result:
            case Err(e):
                return Err(_to_git_error(f"fetch {remote}", e, "fetch failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def remote_branches(self, remote: str) -> Result[list[str], GitError]:
        """List branch names on ``remote``, without the remote prefix.

        The symbolic ``<remote>/HEAD`` entry is skipped. Order is git's
        refname order, which keeps catalog construction deterministic.
        """
        prefix = f"refs/remotes/{remote}/"
        result = self._run(["for-each-ref", "--format=%(refname)", prefix])
        match result:
            case Err(e):
                return Err(_to_git_error("for-each-ref", e, "listing remote branches failed"))
            case Ok(stdout):
                branches: list[str] = []
                for line in stdout.splitlines():
                    ref = line.strip()
                    if not ref.startswith(prefix):
                        continue
                    name = ref[len(prefix) :]
                    if name and name != "HEAD":
                        branches.append(name)
                _log.debug("%d branches on %s", len(branches), remote)
                return Ok(branches)

    def resolve_commit(self, ref: str) -> Result[str | None, GitError]:
        """Resolve ``ref`` to a full commit sha.

        Returns:
            Ok(sha) if ``ref`` names a commit
            Ok(None) if it does not (unknown hash, non-commit object)
            Err(GitError) if git itself failed
        """
        if not ref or ref.startswith("-"):
            return Ok(None)

        result = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
        match result:
            case Err(e):
                # --quiet: an unknown object exits 1 with nothing on stderr
                if e.returncode == 1 and not e.stderr.strip():
                    return Ok(None)
                return Err(_to_git_error("rev-parse", e, "rev-parse failed"))
            case Ok(stdout):
                sha = stdout.strip()
                return Ok(sha or None)

    def is_ancestor(self, commit: str, ref: str) -> Result[bool, GitError]:
        """True if ``commit`` is ``ref``'s tip or reachable from it.

        Runs `git merge-base --is-ancestor`, which exits 0 for yes and 1
        for no; any other status is a failure.
        """
        result = self._run(["merge-base", "--is-ancestor", commit, ref])
        match result:
            case Ok(_):
                return Ok(True)
            case Err(e) if e.returncode == 1:
                return Ok(False)
            case Err(e):
                return Err(_to_git_error("merge-base --is-ancestor", e, "ancestry check failed"))

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "clone"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _to_git_error(command: str, e: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=e.stderr.strip() or e.stdout.strip() or fallback,
        returncode=e.returncode,
        timed_out=e.timed_out,
    )
