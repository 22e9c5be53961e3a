"""Run external commands and report failures as values.

Only this module calls ``subprocess``; git access goes through ``run``.

    match run(["git", "--version"], cwd=Path.cwd()):
        case Ok(out):
            print(out.strip())
        case Err(e):
            print(e)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from wfv.core.log import get_logger
from wfv.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

# Return code used when the process never ran (missing binary, timeout)
NOT_STARTED = -1

_log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not run or exited non-zero.

    ``returncode`` is ``NOT_STARTED`` when the executable is missing or the
    command was killed after ``timeout`` (then ``timed_out`` is set).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    def __str__(self) -> str:
        shown = " ".join(self.command[:4])
        if len(self.command) > 4:
            shown += " ..."
        if self.timed_out:
            return f"{shown} timed out"
        return f"{shown} exited with {self.returncode}"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout.

    Output is captured as text. ``env`` replaces the environment when given.
    """
    _log.debug("run: %s (cwd=%s)", " ".join(cmd), cwd)
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(
            ProcessError(
                command, NOT_STARTED, partial, f"timed out after {timeout}s", timed_out=True
            )
        )
    except OSError as e:
        return Err(ProcessError(command, NOT_STARTED, "", str(e)))

    if proc.returncode == 0:
        return Ok(proc.stdout)

    _log.debug("exit %d: %s", proc.returncode, proc.stderr.strip())
    return Err(ProcessError(command, proc.returncode, proc.stdout, proc.stderr))
