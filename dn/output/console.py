"""Console output abstraction.

Services never print directly. They write to a ConsoleProtocol, which is
backed by Rich in production and by MockConsole in tests. This is also the
channel through which child-process output is surfaced while a dotnet
command is running.
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
    DIM = auto()
    BOLD = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def task_start(self, task: str, target: str) -> None:
        """Announce the start of a tool task, e.g. ("dotnet:pack", "lib.csproj")."""
        ...

    def task_end(self, task: str, target: str) -> None:
        """Announce that a tool task finished successfully."""
        ...

    def stdout_line(self, line: str) -> None:
        """Surface one line a child process wrote to stdout."""
        ...

    def stderr_line(self, line: str) -> None:
        """Surface one line a child process wrote to stderr."""
        ...


class RichConsole:
    """Production console backed by Rich."""

    def __init__(self) -> None:
        from rich.console import Console

        self._console = Console(highlight=False)
        self._err_console = Console(stderr=True, highlight=False)
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
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style)
        else:
            self._console.print(message)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {message}")

    def error(self, message: str) -> None:
        self._err_console.print(f"[red bold]error:[/red bold] {message}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {message}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {message}")

    def header(self, message: str) -> None:
        self._console.print(f"\n[blue bold]{message}[/blue bold]")

    def task_start(self, task: str, target: str) -> None:
        self._console.print(f"[blue bold]>[/blue bold] {task} [dim]{target}[/dim]")

    def task_end(self, task: str, target: str) -> None:
        self._console.print(f"[green]done[/green] {task} [dim]{target}[/dim]")

    def stdout_line(self, line: str) -> None:
        # Tool output may contain square brackets; never parse it as markup.
        self._console.print(line, markup=False)

    def stderr_line(self, line: str) -> None:
        self._err_console.print(line, style="red", markup=False)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that captures output for assertions in tests."""

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

    def task_start(self, task: str, target: str) -> None:
        self.outputs.append(OutputRecord(f"start {task} {target}", Style.HEADER))

    def task_end(self, task: str, target: str) -> None:
        self.outputs.append(OutputRecord(f"end {task} {target}", Style.SUCCESS))

    def stdout_line(self, line: str) -> None:
        self.outputs.append(OutputRecord(line, Style.DEFAULT))

    def stderr_line(self, line: str) -> None:
        self.outputs.append(OutputRecord(line, Style.ERROR))

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

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
