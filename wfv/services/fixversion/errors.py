from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FixVersionErrorKind = Literal[
    "git_missing",
    "git_failed",
    "clone_failed",
    "fetch_failed",
    "io_error",
    "cancelled",
]


@dataclass(frozen=True, slots=True)
class FixVersionError:
    """Failure that aborts a resolution.

    "Commit unknown" and "no fix version" are results, not errors.
    """

    kind: FixVersionErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def cancelled() -> FixVersionError:
    return FixVersionError(kind="cancelled", message="scan cancelled")
