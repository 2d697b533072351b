"""Tests for tools/installer.py - installer script bootstrap."""

from pathlib import Path

import pytest

from dn.core.result import Err, Ok
from dn.dotnet.errors import InstallFailed
from dn.output.console import MockConsole
from dn.platform.process import MockProcessRunner, ProcessError
from dn.platform.shell import InstallerShell
from dn.tools.download import InstallerCache
from dn.tools.http import HttpError, MockHttpClient
from dn.tools.installer import (
    InstallStatus,
    ToolInstaller,
    dnvm_install_script,
    dotnet_install_script,
)

SCRIPT = dotnet_install_script("rel/1.0.0", InstallerShell.BASH)


class Harness:
    """ToolInstaller wired to mocks."""

    def __init__(self, tmp_path: Path, shell: InstallerShell = InstallerShell.BASH) -> None:
        self.http = MockHttpClient()
        self.runner = MockProcessRunner()
        self.console = MockConsole()
        self.cache = InstallerCache(self.http, tmp_path / "cache")
        self.installer = ToolInstaller(
            cache=self.cache, runner=self.runner, console=self.console, shell=shell
        )


@pytest.fixture
def harness(tmp_path: Path) -> Harness:
    h = Harness(tmp_path)
    h.http.set_download(SCRIPT.url, b"#!/usr/bin/env bash\n")
    return h


class TestScripts:
    def test_dotnet_install_script(self) -> None:
        script = dotnet_install_script("rel/1.0.1", InstallerShell.POWERSHELL)
        assert script.url == (
            "https://raw.githubusercontent.com/dotnet/cli/rel/1.0.1/scripts/obtain/dotnet-install.ps1"
        )
        assert script.name == "dotnet-install"
        assert script.source_id == "rel/1.0.1"
        assert script.suffix == ".ps1"

    def test_dnvm_install_script(self) -> None:
        script = dnvm_install_script(InstallerShell.BASH)
        assert script.url == "https://raw.githubusercontent.com/aspnet/Home/dev/dnvminstall.sh"
        assert script.suffix == ".sh"


class TestEnsureInstalled:
    def test_present_target_is_a_noop(self, tmp_path: Path, harness: Harness) -> None:
        target = tmp_path / "dnvm" / "dnvm.sh"
        target.parent.mkdir()
        target.write_text("", encoding="utf-8")

        result = harness.installer.ensure_installed("dnvm", target, SCRIPT)

        assert result == Ok(InstallStatus.ALREADY_INSTALLED)
        assert harness.http.calls == []
        assert harness.runner.calls == []

    def test_missing_target_downloads_and_runs(self, tmp_path: Path, harness: Harness) -> None:
        result = harness.installer.ensure_installed(
            "dotnet", tmp_path / "missing", SCRIPT, '--version "latest"', timeout=60.0
        )

        assert result == Ok(InstallStatus.INSTALLED)
        assert harness.http.calls == [("download", SCRIPT.url)]
        call = harness.runner.calls[0]
        script_path = harness.cache.cache_path(SCRIPT)
        assert call.executable == "bash"
        assert call.arguments == f'"{script_path}" --version "latest"'
        assert call.working_dir == script_path.parent
        assert call.timeout == 60.0

    def test_force_runs_even_if_present(self, tmp_path: Path, harness: Harness) -> None:
        target = tmp_path / "present"
        target.mkdir()

        result = harness.installer.ensure_installed("dotnet", target, SCRIPT, force=True)

        assert result == Ok(InstallStatus.INSTALLED)
        assert len(harness.runner.calls) == 1

    def test_no_target_always_runs(self, harness: Harness) -> None:
        result = harness.installer.ensure_installed("dotnet", None, SCRIPT)

        assert result == Ok(InstallStatus.INSTALLED)
        assert len(harness.runner.calls) == 1

    def test_cached_script_is_reused(self, harness: Harness) -> None:
        harness.installer.ensure_installed("dotnet", None, SCRIPT)
        harness.installer.ensure_installed("dotnet", None, SCRIPT)

        assert len(harness.http.calls) == 1
        assert len(harness.runner.calls) == 2

    def test_always_download_refreshes(self, harness: Harness) -> None:
        harness.installer.ensure_installed("dotnet", None, SCRIPT)
        harness.installer.ensure_installed("dotnet", None, SCRIPT, always_download=True)

        assert len(harness.http.calls) == 2

    def test_env_is_passed_to_installer(self, harness: Harness) -> None:
        env = {"DOTNET_INSTALL_DIR": "/opt/dotnet"}
        harness.installer.ensure_installed("dotnet", None, SCRIPT, env=env)

        assert harness.runner.calls[0].env == env

    def test_download_failure_propagates(self, tmp_path: Path) -> None:
        h = Harness(tmp_path)
        error = HttpError(url=SCRIPT.url, status=0, message="timed out")
        h.http.set_download(SCRIPT.url, error)

        result = h.installer.ensure_installed("dotnet", None, SCRIPT)

        assert result == Err(error)
        assert h.runner.calls == []


class TestInstallerFailure:
    def test_nonzero_exit_redownloads_then_fails(self, harness: Harness) -> None:
        harness.runner.push_exit_code(1)

        result = harness.installer.ensure_installed("dotnet", None, SCRIPT)

        assert result == Err(InstallFailed(tool="dotnet", exit_code=1))
        # one initial download plus the forced refresh, no second install attempt
        assert harness.http.calls == [("download", SCRIPT.url), ("download", SCRIPT.url)]
        assert len(harness.runner.calls) == 1
        assert "error: dotnet install failed, trying to redownload installer..." in (
            harness.console.messages
        )

    def test_failed_redownload_still_reports_install_failure(self, harness: Harness) -> None:
        harness.installer.ensure_installed("dotnet", None, SCRIPT)
        harness.http.set_download(SCRIPT.url, HttpError(url=SCRIPT.url, status=500, message="x"))
        harness.runner.push_exit_code(7)

        result = harness.installer.ensure_installed("dotnet", None, SCRIPT)

        assert result == Err(InstallFailed(tool="dotnet", exit_code=7))
        assert harness.console.find("warning: installer redownload failed")

    def test_process_error_is_not_retried(self, harness: Harness) -> None:
        error = ProcessError(command=("bash",), returncode=-1, stdout="", stderr="timed out")
        harness.runner.push(error)

        result = harness.installer.ensure_installed("dotnet", None, SCRIPT)

        assert result == Err(error)
        assert len(harness.http.calls) == 1


class TestPowerShell:
    def test_runs_through_powershell(self, tmp_path: Path) -> None:
        script = dotnet_install_script("rel/1.0.0", InstallerShell.POWERSHELL)
        h = Harness(tmp_path, shell=InstallerShell.POWERSHELL)
        h.http.set_download(script.url, b"")

        result = h.installer.ensure_installed("dotnet", None, script, "-Version 'latest'")

        assert isinstance(result, Ok)
        call = h.runner.calls[0]
        assert call.executable == "powershell"
        assert call.arguments.startswith("-NoProfile -NoLogo -NonInteractive")
        assert "-Version 'latest'; if (-not $?) { exit -1 };" in call.arguments
