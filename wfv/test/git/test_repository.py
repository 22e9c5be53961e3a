"""Tests for git/repository.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from wfv.core.result import Err, Ok
from wfv.git.repository import GitError, Repository, remote_ref
from wfv.test.gitrepo import make_clone, make_upstream, requires_git


def make_completed_process(
    stdout: str = "",
    stderr: str = "",
    returncode: int = 0,
) -> subprocess.CompletedProcess[str]:
    """Create a mock CompletedProcess."""
    return subprocess.CompletedProcess(
        args=["git"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


class TestGitError:
    def test_git_missing(self) -> None:
        assert GitError("rev-parse", "No such file", returncode=-1).git_missing is True

    def test_timeout_is_not_missing(self) -> None:
        error = GitError("fetch", "timed out", returncode=-1, timed_out=True)
        assert error.git_missing is False

    def test_regular_failure(self) -> None:
        assert GitError("fetch", "fatal", returncode=128).git_missing is False


def test_remote_ref() -> None:
    assert remote_ref("origin", "release/1.2") == "refs/remotes/origin/release/1.2"


class TestRepositoryMocked:
    """Repository methods against a mocked subprocess.run."""

    def test_exists_missing_dir(self, tmp_path: Path) -> None:
        assert Repository(tmp_path / "nope").exists() is False

    @patch("subprocess.run")
    def test_exists_uses_rev_parse(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout=".git\n")
        assert Repository(tmp_path).exists() is True
        args = mock_run.call_args[0][0]
        assert args[:4] == ["git", "-C", str(tmp_path), "rev-parse"]

    @patch("subprocess.run")
    def test_remote_branches(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stdout=(
                "refs/remotes/origin/HEAD\n"
                "refs/remotes/origin/main\n"
                "refs/remotes/origin/release/1.0\n"
                "refs/remotes/origin/release/1.1\n"
            )
        )

        result = Repository(tmp_path).remote_branches("origin")

        assert result == Ok(["main", "release/1.0", "release/1.1"])
        args = mock_run.call_args[0][0]
        assert args[-1] == "refs/remotes/origin/"

    @patch("subprocess.run")
    def test_remote_branches_failure(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: not a git repository", returncode=128
        )

        result = Repository(tmp_path).remote_branches("origin")

        assert isinstance(result, Err)
        assert result.error.command == "for-each-ref"
        assert "not a git repository" in result.error.message

    @patch("subprocess.run")
    def test_resolve_commit_found(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="a" * 40 + "\n")

        result = Repository(tmp_path).resolve_commit("aaaa")

        assert result == Ok("a" * 40)
        assert mock_run.call_args[0][0][-1] == "aaaa^{commit}"

    @patch("subprocess.run")
    def test_resolve_commit_unknown(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(returncode=1)
        assert Repository(tmp_path).resolve_commit("bbbb") == Ok(None)

    @patch("subprocess.run")
    def test_resolve_commit_git_failure(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: not a git repository", returncode=128
        )
        result = Repository(tmp_path).resolve_commit("bbbb")
        assert isinstance(result, Err)
        assert result.error.returncode == 128

    @patch("subprocess.run")
    def test_resolve_commit_rejects_options(self, mock_run: MagicMock, tmp_path: Path) -> None:
        assert Repository(tmp_path).resolve_commit("--all") == Ok(None)
        assert Repository(tmp_path).resolve_commit("") == Ok(None)
        mock_run.assert_not_called()

    @pytest.mark.parametrize(("returncode", "expected"), [(0, True), (1, False)])
    @patch("subprocess.run")
    def test_is_ancestor(
        self, mock_run: MagicMock, returncode: int, expected: bool, tmp_path: Path
    ) -> None:
        mock_run.return_value = make_completed_process(returncode=returncode)

        result = Repository(tmp_path).is_ancestor("abc", "refs/remotes/origin/release/1.0")

        assert result == Ok(expected)
        assert mock_run.call_args[0][0][-4:] == [
            "merge-base",
            "--is-ancestor",
            "abc",
            "refs/remotes/origin/release/1.0",
        ]

    @patch("subprocess.run")
    def test_is_ancestor_failure(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: Not a valid object name", returncode=128
        )
        result = Repository(tmp_path).is_ancestor("abc", "refs/remotes/origin/nope")
        assert isinstance(result, Err)
        assert result.error.command == "merge-base --is-ancestor"

    @patch("subprocess.run")
    def test_git_not_installed(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.side_effect = FileNotFoundError("git")
        result = Repository(tmp_path).is_ancestor("abc", "def")
        assert isinstance(result, Err)
        assert result.error.git_missing is True

    @patch("subprocess.run")
    def test_fetch(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()
        assert Repository(tmp_path).fetch("upstream") == Ok("")
        assert mock_run.call_args[0][0][-4:] == ["fetch", "--quiet", "--prune", "upstream"]

    @patch("subprocess.run")
    def test_fetch_failure(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: 'upstream' does not appear to be a git repository", returncode=128
        )
        result = Repository(tmp_path).fetch("upstream")
        assert isinstance(result, Err)
        assert result.error.command == "fetch upstream"

    @patch("subprocess.run")
    def test_clone(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()
        dest = tmp_path / "clone"

        result = Repository.clone("https://example.invalid/x.git", dest, remote="upstream")

        assert isinstance(result, Ok)
        assert result.value.path == dest
        args = mock_run.call_args[0][0]
        assert "--filter=blob:none" in args
        assert args[args.index("--origin") + 1] == "upstream"

    @patch("subprocess.run")
    def test_remotes(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="origin\nupstream\n")
        assert Repository(tmp_path).remotes() == Ok(["origin", "upstream"])


@requires_git
class TestRepositoryIntegration:
    """Repository methods against a real repository."""

    def test_queries(self, tmp_path: Path) -> None:
        shas = make_upstream(tmp_path / "upstream")
        repo = Repository(make_clone(tmp_path / "upstream", tmp_path / "work"))

        assert repo.exists() is True
        assert repo.remotes() == Ok(["origin"])

        branches = repo.remote_branches("origin")
        assert isinstance(branches, Ok)
        assert "HEAD" not in branches.value
        assert {"release/1.0", "release/1.1", "release/2.1", "develop"} <= set(branches.value)

        assert repo.resolve_commit(shas["fix"][:10]) == Ok(shas["fix"])
        assert repo.resolve_commit("f" * 40) == Ok(None)
        assert repo.resolve_commit("no-such-ref") == Ok(None)

        fix = shas["fix"]
        assert repo.is_ancestor(fix, remote_ref("origin", "release/1.1")) == Ok(True)
        assert repo.is_ancestor(fix, remote_ref("origin", "release/2.0")) == Ok(True)
        assert repo.is_ancestor(fix, remote_ref("origin", "release/1.0")) == Ok(False)
        assert repo.is_ancestor(fix, remote_ref("origin", "release/2.1")) == Ok(False)

    def test_fetch_sees_new_branches(self, tmp_path: Path) -> None:
        from wfv.test.gitrepo import git

        make_upstream(tmp_path / "upstream")
        repo = Repository(make_clone(tmp_path / "upstream", tmp_path / "work"))
        git(tmp_path / "upstream", "branch", "release/3.0", "main")

        assert repo.fetch("origin").is_ok()

        branches = repo.remote_branches("origin")
        assert isinstance(branches, Ok)
        assert "release/3.0" in branches.value
