"""Tests for wfv.core.log module."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from wfv.core.log import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_logger() -> Iterator[None]:
    logger = logging.getLogger("wfv")
    saved = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_get_logger_namespaces_names() -> None:
    assert get_logger("wfv.git.repository").name == "wfv.git.repository"
    assert get_logger("wfv").name == "wfv"
    assert get_logger("scanner").name == "wfv.scanner"


def test_configure_sets_level() -> None:
    logger = configure_logging(verbose=False)
    assert logger.level == logging.WARNING
    configure_logging(verbose=True)
    assert logger.level == logging.DEBUG


def test_configure_adds_one_handler() -> None:
    logging.getLogger("wfv").handlers.clear()
    configure_logging()
    configure_logging(verbose=True)
    assert len(logging.getLogger("wfv").handlers) == 1
