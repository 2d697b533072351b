"""Failure values returned by the dotnet and DNX operations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dn.platform.process import ProcessError
from dn.tools.http import HttpError

__all__ = [
    "InstallFailed",
    "CommandFailed",
    "ConfigParseFailed",
    "DotnetError",
]


@dataclass(frozen=True, slots=True)
class InstallFailed:
    """Installer script exited nonzero (the script was redownloaded afterwards)."""

    tool: str
    exit_code: int

    @property
    def message(self) -> str:
        return f"{self.tool} install failed with code {self.exit_code}"

    @property
    def hint(self) -> str:
        return "The installer script was refreshed; run the install again."


@dataclass(frozen=True, slots=True)
class CommandFailed:
    """A tool subcommand exited nonzero."""

    tool: str
    subcommand: str
    exit_code: int

    @property
    def message(self) -> str:
        return f"{self.tool} {self.subcommand} failed with code {self.exit_code}"


@dataclass(frozen=True, slots=True)
class ConfigParseFailed:
    """A JSON configuration file was unreadable or missing a field."""

    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"{self.path}: {self.reason}"


DotnetError = InstallFailed | CommandFailed | ConfigParseFailed | HttpError | ProcessError
