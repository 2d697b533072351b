"""Command lines for running installer scripts through a platform shell.

Windows bootstrap scripts are PowerShell (`*.ps1`), everything else uses
bash (`*.sh`). The two script families spell their switches differently
(`-DryRun` vs `--dry-run`), so switch names are kept in kebab form and
rendered per shell.
"""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path

from .detection import Platform

__all__ = ["InstallerShell"]


class InstallerShell(Enum):
    """Shell that executes an installer script."""

    POWERSHELL = auto()
    BASH = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def for_platform(cls, platform: Platform) -> InstallerShell:
        return cls.POWERSHELL if platform.is_windows else cls.BASH

    @property
    def executable(self) -> str:
        return "powershell" if self == InstallerShell.POWERSHELL else "bash"

    @property
    def script_suffix(self) -> str:
        return ".ps1" if self == InstallerShell.POWERSHELL else ".sh"

    def switch(self, name: str) -> str:
        """Render a kebab-case switch name for this shell.

        Example: switch("dry-run") -> "-DryRun" (PowerShell), "--dry-run" (bash).
        """
        if self == InstallerShell.POWERSHELL:
            return "-" + "".join(part.capitalize() for part in name.split("-"))
        return f"--{name}"

    def quote(self, value: str) -> str:
        # PowerShell text sits inside a double-quoted -Command argument.
        if self == InstallerShell.POWERSHELL:
            return f"'{value}'"
        return f'"{value}"'

    def command_arguments(self, script: Path, install_args: str) -> str:
        """Argument string that makes this shell run `script install_args`.

        PowerShell does not propagate a failing script's status by itself;
        the trailing check turns it into exit code -1.
        """
        invocation = f"& '{script}'"
        if install_args:
            invocation = f"{invocation} {install_args}"
        if self == InstallerShell.POWERSHELL:
            return (
                "-NoProfile -NoLogo -NonInteractive -ExecutionPolicy Bypass "
                f'-Command "{invocation}; if (-not $?) {{ exit -1 }};"'
            )
        return f'"{script}" {install_args}'.rstrip()
