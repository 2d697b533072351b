"""Tests for installer shell command lines."""

from __future__ import annotations

from pathlib import Path

import pytest

from dn.platform.detection import Platform
from dn.platform.shell import InstallerShell


class TestForPlatform:
    def test_windows_uses_powershell(self) -> None:
        assert InstallerShell.for_platform(Platform.WINDOWS) == InstallerShell.POWERSHELL

    @pytest.mark.parametrize("platform", [Platform.LINUX, Platform.MACOS])
    def test_unix_uses_bash(self, platform: Platform) -> None:
        assert InstallerShell.for_platform(platform) == InstallerShell.BASH

    def test_executable_and_suffix(self) -> None:
        assert InstallerShell.POWERSHELL.executable == "powershell"
        assert InstallerShell.POWERSHELL.script_suffix == ".ps1"
        assert InstallerShell.BASH.executable == "bash"
        assert InstallerShell.BASH.script_suffix == ".sh"


class TestSwitch:
    @pytest.mark.parametrize(
        ("name", "powershell", "bash"),
        [
            ("version", "-Version", "--version"),
            ("dry-run", "-DryRun", "--dry-run"),
            ("no-path", "-NoPath", "--no-path"),
            ("debug-symbols", "-DebugSymbols", "--debug-symbols"),
        ],
    )
    def test_switch(self, name: str, powershell: str, bash: str) -> None:
        assert InstallerShell.POWERSHELL.switch(name) == powershell
        assert InstallerShell.BASH.switch(name) == bash

    def test_quote(self) -> None:
        assert InstallerShell.POWERSHELL.quote("1.0.1") == "'1.0.1'"
        assert InstallerShell.BASH.quote("1.0.1") == '"1.0.1"'


class TestCommandArguments:
    def test_powershell(self) -> None:
        script = Path("/cache/dotnet-install-1a2b3c4d.ps1")
        args = InstallerShell.POWERSHELL.command_arguments(script, "-Version 'latest'")
        assert args == (
            "-NoProfile -NoLogo -NonInteractive -ExecutionPolicy Bypass "
            f"-Command \"& '{script}' -Version 'latest'; if (-not $?) {{ exit -1 }};\""
        )

    def test_powershell_without_arguments(self) -> None:
        script = Path("/cache/dnvminstall-1a2b3c4d.ps1")
        args = InstallerShell.POWERSHELL.command_arguments(script, "")
        assert f"-Command \"& '{script}'; if" in args

    def test_bash(self) -> None:
        script = Path("/cache/dotnet-install-1a2b3c4d.sh")
        args = InstallerShell.BASH.command_arguments(script, '--version "latest" --no-path')
        assert args == f'"{script}" --version "latest" --no-path'

    def test_bash_without_arguments(self) -> None:
        script = Path("/cache/dnvminstall-1a2b3c4d.sh")
        assert InstallerShell.BASH.command_arguments(script, "") == f'"{script}"'
