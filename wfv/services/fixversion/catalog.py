"""Release branches keyed by version."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

from wfv.core.log import get_logger

from .version import Version, parse_release_branch

__all__ = ["BranchCatalog", "build_catalog"]

_log = get_logger(__name__)


class BranchCatalog(Mapping[Version, str]):
    """Immutable mapping of release version to branch name.

    Iteration follows insertion order; use ``scan_order()`` for the
    newest-first order the scanner walks.
    """

    __slots__ = ("_branches", "_order")

    def __init__(self, entries: Iterable[tuple[Version, str]] = ()) -> None:
        branches: dict[Version, str] = {}
        for version, branch in entries:
            branches.setdefault(version, branch)
        self._branches = MappingProxyType(branches)
        self._order = tuple(sorted(branches, reverse=True))

    def __getitem__(self, version: Version) -> str:
        return self._branches[version]

    def __iter__(self) -> Iterator[Version]:
        return iter(self._branches)

    def __len__(self) -> int:
        return len(self._branches)

    def __repr__(self) -> str:
        items = ", ".join(f"{v}: {b!r}" for v, b in self._branches.items())
        return f"BranchCatalog({{{items}}})"

    def scan_order(self) -> tuple[Version, ...]:
        """Versions strictly descending (newest first)."""
        return self._order

    def branch_for(self, version: Version) -> str:
        return self._branches[version]


def build_catalog(branches: Iterable[str], identifiers: Sequence[str]) -> BranchCatalog:
    """Keep the branches that name a release version.

    Branches that do not start with an identifier, or whose version does not
    parse, are skipped. When two branches carry the same version the first
    one in ``branches`` is kept.
    """
    entries: dict[Version, str] = {}
    for branch in branches:
        version = parse_release_branch(branch, identifiers)
        if version is None:
            continue
        kept = entries.get(version)
        if kept is not None:
            _log.debug("dropping %s: version %s already provided by %s", branch, version, kept)
            continue
        entries[version] = branch
    _log.debug("catalog: %d release branches", len(entries))
    return BranchCatalog(entries.items())
