"""Release versions parsed from branch names.

``release/1.10`` sorts after ``release/1.9``: components compare as
integers, trailing zero components are ignored (``1.2 == 1.2.0``), and a
pre-release (``2.0-rc.1``) sorts before its final release. Build metadata
after ``+`` is kept in the display text only.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import total_ordering

__all__ = [
    "BRANCH_SEPARATORS",
    "Version",
    "parse_release_branch",
    "parse_version",
]

_VERSION_RE = re.compile(
    r"^[vV]?(?P<release>\d+(?:\.\d+)*)"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

# Characters allowed between a release identifier and the version
BRANCH_SEPARATORS = "/-_."

type _PreKey = tuple[tuple[int, int | str], ...]


def _strip_trailing_zeros(release: tuple[int, ...]) -> tuple[int, ...]:
    end = len(release)
    while end > 1 and release[end - 1] == 0:
        end -= 1
    return release[:end]


def _pre_key(prerelease: tuple[str, ...]) -> _PreKey:
    # semver: numeric identifiers compare numerically and sort below alphanumerics
    return tuple((0, int(p)) if p.isdigit() else (1, p) for p in prerelease)


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """A comparable release version.

    Attributes:
        release: Numeric components, e.g. (1, 2, 3)
        prerelease: Dot-separated pre-release identifiers, e.g. ("rc", "1")
        text: Version as written in the branch name
    """

    release: tuple[int, ...]
    prerelease: tuple[str, ...] = ()
    text: str = field(default="")

    def __post_init__(self) -> None:
        if not self.release:
            raise ValueError("version needs at least one numeric component")
        if any(part < 0 for part in self.release):
            raise ValueError(f"negative version component in {self.release}")

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _key(self) -> tuple[tuple[int, ...], int, _PreKey]:
        # Final releases (1) sort after their pre-releases (0)
        return (
            _strip_trailing_zeros(self.release),
            0 if self.prerelease else 1,
            _pre_key(self.prerelease),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        if self.text:
            return self.text
        out = ".".join(str(p) for p in self.release)
        if self.prerelease:
            out += "-" + ".".join(self.prerelease)
        return out


def parse_version(text: str) -> Version | None:
    """Parse ``1.2``, ``v1.2.3``, ``2.0.0-rc.1`` or ``1.4+build.7``.

    Returns None for anything else; never raises.
    """
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    release = tuple(int(p) for p in m.group("release").split("."))
    pre = m.group("pre")
    prerelease = tuple(pre.split(".")) if pre else ()
    return Version(release=release, prerelease=prerelease, text=text.strip())


def parse_release_branch(branch: str, identifiers: Sequence[str]) -> Version | None:
    """Version encoded in ``branch`` if it starts with a release identifier.

    ``release/1.2``, ``release-1.2`` and ``release1.2`` all yield 1.2 for
    the identifier ``release``. Identifiers are tried in order and the first
    one whose remainder parses wins.
    """
    for identifier in identifiers:
        if not identifier or not branch.startswith(identifier):
            continue
        rest = branch[len(identifier) :].lstrip(BRANCH_SEPARATORS)
        if not rest:
            continue
        version = parse_version(rest)
        if version is not None:
            return version
    return None
