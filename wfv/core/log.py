"""Diagnostic logging for wfv.

User-facing output goes through ``wfv.output.console``; this logger only
carries debug traces (git commands, catalog decisions, ancestry queries).
"""

from __future__ import annotations

import logging

__all__ = ["configure_logging", "get_logger"]

_ROOT = "wfv"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``wfv`` namespace."""
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the ``wfv`` logger.

    Safe to call more than once; only the level changes on later calls.
    """
    logger = logging.getLogger(_ROOT)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
