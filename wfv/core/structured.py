"""Typed reads from parsed TOML.

``tomllib`` returns plain dicts and lists of ``object``; these helpers
narrow values and treat wrong types as missing, leaving the caller to
apply defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    return isinstance(obj, dict) and all(
        isinstance(k, str) for k in cast(dict[object, object], obj)
    )


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Nested ``[key]`` table, or None."""
    return as_str_dict(table.get(key))


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string value; blank strings count as missing."""
    value = table.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    return value if isinstance(value, bool) else None


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Whitespace-separated words from a string or a list of strings.

    ``"release hotfix"``, ``["release hotfix"]`` and
    ``["release", "hotfix"]`` all read as ``["release", "hotfix"]``, the
    same as ``-r "release hotfix"`` on the command line.
    """
    match table.get(key):
        case str(words):
            return words.split() or None
        case list(values):
            texts = [v for v in cast(list[object], values) if isinstance(v, str)]
            return [word for text in texts for word in text.split()] or None
        case _:
            return None
