"""Console output abstraction.

Services and the pipeline runner report progress through ``ConsoleProtocol``
and never print directly. Production uses ``RichConsole``; tests use
``MockConsole`` and assert on the captured records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()  # delegated steps, hints
    BOLD = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for styled console output.

    Commands only talk to this interface, so tests can swap in MockConsole
    and read back what was printed.
    """

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message verbatim with optional styling.

        Args:
            message: The text to print (never parsed as markup)
            style: The style to apply
        """
        ...

    def success(self, message: str) -> None:
        """Print a success message with an ``OK`` prefix."""
        ...

    def error(self, message: str) -> None:
        """Print an error message with an ``error:`` prefix."""
        ...

    def warning(self, message: str) -> None:
        """Print a warning message with a ``warning:`` prefix."""
        ...

    def info(self, message: str) -> None:
        """Print an info message with an ``info:`` prefix."""
        ...

    def header(self, message: str) -> None:
        """Print a section header."""
        ...

    def newline(self) -> None:
        """Print an empty line."""
        ...


class RichConsole:
    """Console implementation backed by Rich."""

    def __init__(self, *, stderr: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.BOLD: "bold",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        # Descriptor text (templates, paths) may contain square brackets
        self._console.print(message, style=self._style_map[style] or None, markup=False)

    def _prefixed(self, prefix: str, style: Style, message: str) -> None:
        from rich.text import Text

        self._console.print(Text.assemble((prefix, self._style_map[style]), " ", message))

    def success(self, message: str) -> None:
        self._prefixed("OK", Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._prefixed("error:", Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._prefixed("warning:", Style.WARNING, message)

    def info(self, message: str) -> None:
        self._prefixed("info:", Style.INFO, message)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self._console.print()


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helpers

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
