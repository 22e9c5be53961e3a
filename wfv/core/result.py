"""Ok/Err values for operations that can fail.

Git queries, config loading and the scan return a ``Result`` rather than
raising; the CLI decides how a failure is shown and which exit code it gets.

    match repo.resolve_commit("abc123"):
        case Ok(None):
            print("unknown commit")
        case Ok(sha):
            print(f"resolved to {sha}")
        case Err(error):
            print(f"git failed: {error.message}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def map_err[F](self, f: Callable[..., F]) -> Ok[T]:
        return self


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> None:
        """Raise ValueError; an Err has no value."""
        raise ValueError(f"unwrap on Err: {self.error}")

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Err with ``f`` applied to the error."""
        return Err(f(self.error))


type Result[T, E] = Ok[T] | Err[E]
