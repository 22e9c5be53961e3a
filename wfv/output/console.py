"""Console output abstraction.

Commands print through ``ConsoleProtocol`` and never touch rich directly;
tests use ``MockConsole`` to capture what would have been shown.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Output styles; values are rich style strings."""

    DEFAULT = ""
    SUCCESS = "green"
    ERROR = "red bold"
    WARNING = "yellow"
    DIM = "dim"
    HEADER = "blue bold"

    def __str__(self) -> str:
        return self.name.lower()


# Plain-text label shown before a message of the given style
_LABELS: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def status(self, message: str) -> AbstractContextManager[None]:
        """Show a spinner with ``message`` while the block runs."""
        ...


class RichConsole:
    """Console backed by rich; the spinner only renders on a terminal."""

    def __init__(self) -> None:
        from rich.console import Console

        self._console = Console(highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=style.value or None, markup=False)

    def _labelled(self, style: Style, message: str) -> None:
        label = _LABELS[style]
        self._console.print(f"[{style.value}]{label}[/] ", end="")
        self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def header(self, message: str) -> None:
        self._console.print()
        self._console.print(message, style=Style.HEADER.value, markup=False)

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        with self._console.status(message, spinner="dots", spinner_style="magenta"):
            yield


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Records output instead of printing it.

    Labelled messages are stored with their label (``"error: boom"``) so
    assertions read like the terminal output.
    """

    outputs: list[OutputRecord] = field(default_factory=lambda: list[OutputRecord]())
    statuses: list[str] = field(default_factory=lambda: list[str]())

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def _labelled(self, style: Style, message: str) -> None:
        self.outputs.append(OutputRecord(f"{_LABELS[style]} {message}", style))

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        self.statuses.append(message)
        yield

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
