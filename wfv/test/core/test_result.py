"""Tests for wfv.core.result module."""

from __future__ import annotations

import pytest

from wfv.core.result import Err, Ok, Result


def test_ok() -> None:
    result: Result[str, str] = Ok("1.4")
    assert result.is_ok()
    assert result.unwrap() == "1.4"
    assert result.map_err(str) is result


def test_err() -> None:
    result: Result[str, int] = Err(3)
    assert not result.is_ok()
    assert result.map_err(lambda e: e + 1) == Err(4)
    with pytest.raises(ValueError, match="unwrap on Err: 3"):
        result.unwrap()


def test_pattern_matching() -> None:
    def describe(result: Result[int, str]) -> str:
        match result:
            case Ok(0):
                return "zero"
            case Ok(n):
                return f"ok {n}"
            case Err(e):
                return f"err {e}"

    assert describe(Ok(0)) == "zero"
    assert describe(Ok(5)) == "ok 5"
    assert describe(Err("fetch failed")) == "err fetch failed"


def test_frozen_and_equality() -> None:
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
    with pytest.raises(AttributeError):
        Ok(1).value = 2  # type: ignore[misc]
